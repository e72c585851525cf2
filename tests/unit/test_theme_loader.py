"""Test theme loader functionality."""

import pytest
from curtains.errors import OptionsError
from curtains.theme_loader import get_base_css, get_css, list_available_themes, validate_theme


def test_get_css_default():
    """Default theme loads and returns CSS content."""
    css = get_css()

    assert isinstance(css, str)
    assert "--curtains-bg" in css
    assert css == get_css("light")


def test_get_css_dark():
    css = get_css("dark")

    assert "--curtains-bg" in css
    assert "#1a1a1a" in css  # Dark background color


def test_base_css_holds_layout():
    css = get_base_css()

    assert ".curtains-slide" in css
    assert ".curtains-stage" in css


def test_get_css_invalid_theme():
    # Non-existent theme
    with pytest.raises(OptionsError):
        get_css("nonexistent")

    # Invalid characters (path traversal attempt)
    with pytest.raises(OptionsError):
        get_css("../evil")

    with pytest.raises(OptionsError):
        get_css("theme/../../evil")

    # The shared layout sheet is not a theme
    with pytest.raises(OptionsError):
        get_css("base")


def test_list_available_themes():
    assert list_available_themes() == ["dark", "light"]


def test_validate_theme():
    assert validate_theme("light") is True
    assert validate_theme("dark") is True
    assert validate_theme("nonexistent") is False
    assert validate_theme("../evil") is False
