import pytest

from repovector.services.languages import language_for_path, language_from_extension


@pytest.mark.parametrize(
    "ext, expected",
    [
        (".go", "Go"),
        (".py", "Python"),
        (".GO", "Go"),
        (".tsx", "TypeScript"),
        (".jsx", "JavaScript"),
        (".hpp", "C/C++"),
        (".cs", "C#"),
        (".xyz", "Unknown"),
        ("", "Unknown"),
    ],
)
def test_language_from_extension(ext, expected):
    assert language_from_extension(ext) == expected


def test_language_for_path_uses_last_extension():
    assert language_for_path("web/static/app.min.js") == "JavaScript"
    assert language_for_path("Makefile") == "Unknown"
