from blog_cms.utils.dates import iso
from blog_cms.utils.media import format_file_size, is_document, is_image, is_video


def normalize_media(media):
    return {
        "id": media.uuid,
        "fileName": media.file_name,
        "url": media.url,
        "fileType": media.file_type,
        "fileSize": media.file_size,
        "formattedSize": format_file_size(media.file_size),
        "altText": media.alt_text,
        "uploadedBy": media.uploaded_by,
        "isImage": is_image(media.file_name),
        "isVideo": is_video(media.file_name),
        "isDocument": is_document(media.file_name),
        "createdAt": iso(media.created_at),
        "updatedAt": iso(media.updated_at),
    }


def normalize_media_ref(media):
    if media is None:
        return None

    return {
        "id": media.uuid,
        "fileName": media.file_name,
        "url": media.url,
        "altText": media.alt_text,
    }
