from blog_cms.normalizers.media import normalize_media_ref


def normalize_seo_summary(record):
    if record is None:
        return None

    return {
        "metaTitle": record.meta_title,
        "metaDescription": record.meta_description,
        "canonicalUrl": record.canonical_url,
        "focusKeyword": record.focus_keyword,
    }


def normalize_seo(record, images=None):
    """
    Full SEO view. ``images`` maps internal media ids to loaded rows.
    """
    if record is None:
        return None

    images = images or {}
    return {
        "id": record.uuid,
        **normalize_seo_summary(record),
        "ogTitle": record.og_title,
        "ogDescription": record.og_description,
        "ogImage": normalize_media_ref(images.get(record.og_image_id)),
        "twitterTitle": record.twitter_title,
        "twitterDescription": record.twitter_description,
        "twitterImage": normalize_media_ref(images.get(record.twitter_image_id)),
    }
