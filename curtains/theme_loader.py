"""Theme loader for presentation CSS themes."""
from pathlib import Path
from typing import List

from .errors import OptionsError

THEMES_DIR = Path(__file__).parent / "themes"

# Layout rules shared by every theme, not selectable on its own
BASE_STYLESHEET = "base"


def get_css(theme: str = "light") -> str:
    """
    Load CSS content for the specified theme.

    Args:
        theme: Theme name (light, dark)

    Returns:
        CSS content as string

    Raises:
        OptionsError: If the theme name is invalid or the theme doesn't exist
    """
    # Validate theme name (security: prevent path traversal)
    if not theme.replace("_", "").replace("-", "").isalnum():
        raise OptionsError(f"Invalid theme name: {theme}")

    if theme not in list_available_themes():
        raise OptionsError(
            f"Theme '{theme}' not found. Available themes: {list_available_themes()}"
        )

    return (THEMES_DIR / f"{theme}.css").read_text(encoding="utf-8")


def get_base_css() -> str:
    """Layout CSS that precedes every theme."""
    return (THEMES_DIR / f"{BASE_STYLESHEET}.css").read_text(encoding="utf-8").strip()


def list_available_themes() -> List[str]:
    """
    List all available themes.

    Returns:
        Sorted list of theme names
    """
    if not THEMES_DIR.exists():
        return []

    return sorted(
        f.stem for f in THEMES_DIR.glob("*.css")
        if f.is_file() and f.stem != BASE_STYLESHEET
    )


def validate_theme(theme: str) -> bool:
    """
    Check if a theme exists.

    Args:
        theme: Theme name to validate

    Returns:
        True if theme exists, False otherwise
    """
    try:
        get_css(theme)
        return True
    except OptionsError:
        return False
