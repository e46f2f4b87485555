from datetime import datetime, timedelta, timezone

import pytest

from blog_cms.domain.exceptions import ValidationError
from blog_cms.domain.invariants.post import assert_post_payload, collect_post_errors
from blog_cms.domain.lifecycle.post import assert_post_status, resolve_published_at
from blog_cms.domain.seo import apply_fallbacks, extract_seo_payload

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
EARLIER = NOW - timedelta(days=30)


def test_entering_published_stamps_now():
    assert resolve_published_at(status="published", now=NOW, previous_status="draft") == NOW


def test_requested_timestamp_wins_when_published():
    assert resolve_published_at(status="published", now=NOW, requested=EARLIER) == EARLIER


def test_staying_published_keeps_timestamp():
    assert resolve_published_at(
        status="published",
        now=NOW,
        previous_status="published",
        previous_published_at=EARLIER,
    ) == EARLIER


@pytest.mark.parametrize("status", ["draft", "archived"])
def test_leaving_published_clears_even_when_requested(status):
    assert resolve_published_at(
        status=status,
        now=NOW,
        requested=EARLIER,
        previous_status="published",
        previous_published_at=EARLIER,
    ) is None


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError):
        assert_post_status("scheduled")


def test_post_payload_errors_are_collected():
    errors = collect_post_errors({
        "title": "",
        "excerpt": "x" * 301,
        "focusKeyword": "one two three four five",
    })
    assert errors == [
        "Title is required",
        "Excerpt must be less than 300 characters",
        "Focus keyword should be 4 words or less",
    ]


def test_nested_focus_keyword_is_counted():
    errors = collect_post_errors({"title": "x", "seo": {"focusKeyword": "a b c d e"}})
    assert errors == ["Focus keyword should be 4 words or less"]

    assert collect_post_errors({"title": "x", "seo": {"focusKeyword": "a b c d"}}) == []


def test_non_string_fields_are_reported():
    errors = collect_post_errors({"title": 42, "excerpt": 7, "focusKeyword": 3})
    assert errors == [
        "Title must be a string",
        "Excerpt must be a string",
        "Focus keyword must be a string",
    ]


def test_partial_payload_skips_missing_title():
    assert_post_payload({"content": "body"}, partial=True)

    with pytest.raises(ValidationError) as exc:
        assert_post_payload({"title": "   "}, partial=True)
    assert exc.value.details["errors"] == ["Title is required"]


def test_fallbacks_cascade_from_meta_to_twitter():
    filled = apply_fallbacks({"meta_title": "Meta", "meta_description": "Desc"})

    assert filled["og_title"] == "Meta"
    assert filled["twitter_title"] == "Meta"
    assert filled["og_description"] == "Desc"
    assert filled["twitter_description"] == "Desc"


def test_fallbacks_prefer_the_closest_source():
    filled = apply_fallbacks({
        "meta_title": "Meta",
        "og_title": "OG",
        "twitter_description": "Tw",
        "og_image_id": 7,
    })

    assert filled["og_title"] == "OG"
    assert filled["twitter_title"] == "OG"
    assert filled["twitter_description"] == "Tw"
    assert filled["twitter_image_id"] == 7


def test_nested_seo_values_override_top_level():
    payload = extract_seo_payload({
        "metaTitle": "Top",
        "focusKeyword": "kw",
        "seo": {"metaTitle": "Nested"},
    })
    assert payload == {"metaTitle": "Nested", "focusKeyword": "kw"}
