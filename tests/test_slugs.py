import re

import pytest

from blog_cms.domain.exceptions import ValidationError
from blog_cms.utils.slugs import QUICK, SEQUENTIAL, allocate_slug, normalize_slug, validate_slug


@pytest.mark.parametrize("raw, expected", [
    ("Hello World", "hello-world"),
    ("  Hello,   World!  ", "hello-world"),
    ("--Already-Slugged--", "already-slugged"),
    ("Q3 2024 / Results", "q3-2024-results"),
])
def test_normalize_slug(raw, expected):
    assert normalize_slug(raw) == expected


def test_validate_slug_accepts_canonical_form():
    assert validate_slug("launch-news-2") == "launch-news-2"


@pytest.mark.parametrize("bad", ["Upper", "double--hyphen", "-leading", "trailing-", "with space", ""])
def test_validate_slug_rejects_malformed(bad):
    with pytest.raises(ValidationError):
        validate_slug(bad)


def test_sequential_strategy_counts_up():
    taken = {"post", "post-1", "post-2"}
    assert allocate_slug("post", taken.__contains__, strategy=SEQUENTIAL) == "post-3"


def test_free_base_is_returned_unchanged():
    assert allocate_slug("post", lambda _: False, strategy=QUICK) == "post"


def test_quick_strategy_appends_time_suffix_once():
    slug = allocate_slug("post", {"post"}.__contains__, strategy=QUICK)
    assert re.fullmatch(r"post-\d{6}", slug)


def test_quick_strategy_falls_back_to_counter():
    def exists(candidate):
        return candidate == "post" or re.fullmatch(r"post-\d{6}", candidate) is not None

    slug = allocate_slug("post", exists, strategy=QUICK)
    assert re.fullmatch(r"post-\d{6}-1", slug)


def test_allocation_gives_up_after_max_attempts():
    with pytest.raises(ValidationError):
        allocate_slug("post", lambda _: True, max_attempts=5)


def test_empty_base_is_rejected():
    with pytest.raises(ValidationError):
        allocate_slug("", lambda _: False)
