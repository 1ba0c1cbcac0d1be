import pytest

from repovector.core.errors import ValidationError
from repovector.core.utils import bytes_human, repository_from_url, sanitize_text_for_postgres


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/acme/widgets.git",
        "https://github.com/acme/widgets",
        "https://github.com/acme/widgets/",
        "git@github.com:acme/widgets.git",
    ],
)
def test_repository_from_url(url):
    assert repository_from_url(url) == "acme/widgets"


@pytest.mark.parametrize("url", ["", "widgets", "https://github.com/acme/.git"])
def test_repository_from_url_rejects_incomplete_urls(url):
    with pytest.raises(ValidationError):
        repository_from_url(url)


def test_sanitize_text_for_postgres():
    assert sanitize_text_for_postgres("a\x00b") == "ab"
    assert sanitize_text_for_postgres(None) is None


def test_bytes_human():
    assert bytes_human(512) == "512.0 B"
    assert bytes_human(100_000) == "97.7 KB"
