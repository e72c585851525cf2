"""
Extraction of ``<style>`` blocks from slide and global text.
"""
from dataclasses import dataclass
from typing import List

from .config import REGEX
from .models import StyleFragment

SCOPES = ("global", "slide")


@dataclass(frozen=True)
class ExtractedStyles:
    content: str
    styles: List[StyleFragment]


def extract_styles(content: str, scope: str) -> ExtractedStyles:
    """
    Remove every ``<style>`` block from *content*.

    Args:
        content: Raw text that may contain style blocks
        scope: ``"global"`` or ``"slide"``, recorded on each fragment

    Returns:
        The text without style blocks (trimmed) and the trimmed CSS of each
        block in source order. An empty block still produces a fragment.
    """
    if scope not in SCOPES:
        raise ValueError(f"Unknown style scope: {scope}")

    styles: List[StyleFragment] = []

    def _collect(match) -> str:
        styles.append(StyleFragment(css=match.group(1).strip(), scope=scope))
        return ""

    clean = REGEX["STYLE"].sub(_collect, content)
    return ExtractedStyles(content=clean.strip(), styles=styles)


def extract_global_styles(content: str) -> str:
    """Combined CSS of all style blocks in the global section."""
    return "\n".join(s.css for s in extract_styles(content, "global").styles)


def extract_slide_styles(content: str) -> str:
    """Combined CSS of all style blocks in one slide."""
    return "\n".join(s.css for s in extract_styles(content, "slide").styles)
