"""
Guard functions shared by every parser stage.

Each check raises a specific :mod:`curtains.errors` exception on violation and
returns nothing otherwise.
"""
from typing import Any, Optional

from .config import DEFAULTS, REGEX, placeholder_pattern
from .errors import (
    ClassNameError,
    InputError,
    NestingDepthError,
    SlideCountError,
    SlideIndexError,
    StructuralParseError,
)
from .models import CurtainsSlide, Node


def validate_input(source: Any) -> str:
    """Return *source* unchanged if it is a non-empty string."""
    if not isinstance(source, str):
        raise InputError(f"Input must be text, got {type(source).__name__}")
    if not source:
        raise InputError("Input cannot be empty")
    return source


def validate_slide_count(slide_count: int, max_slides: int = DEFAULTS["MAX_SLIDES"]) -> None:
    if slide_count == 0:
        raise SlideCountError("Document must have at least one slide")
    if slide_count > max_slides:
        raise SlideCountError(f"Too many slides: {slide_count} (max {max_slides})")


def validate_slide_index(index: int, max_slides: int = DEFAULTS["MAX_SLIDES"]) -> None:
    if index < 0 or index >= max_slides:
        raise SlideIndexError(f"Slide index {index} out of range (max {max_slides} slides)")


def validate_class_name(class_name: str) -> None:
    """An empty name is allowed; anything else must be letters, digits, ``-`` or ``_``."""
    if class_name and not REGEX["CLASS_NAME"].match(class_name):
        raise ClassNameError(f"Invalid class name: {class_name!r}")


def validate_nesting_depth(depth: int, max_depth: int = DEFAULTS["MAX_NESTING_DEPTH"]) -> None:
    if depth > max_depth:
        raise NestingDepthError(f"Container nesting too deep: {depth} (max {max_depth})")


def validate_slide(
    slide: CurtainsSlide,
    max_slides: int = DEFAULTS["MAX_SLIDES"],
    nonce: Optional[str] = None,
) -> None:
    """
    Re-check a finished slide before it leaves the parser.

    With *nonce*, only placeholders from that parse count as leaked; without
    it any placeholder-shaped text does.
    """
    pattern = placeholder_pattern(nonce) if nonce else REGEX["PLACEHOLDER"]
    validate_slide_index(slide.index, max_slides)
    if slide.ast.type != "root":
        raise StructuralParseError(f"Slide {slide.index}: AST must start at a root node")
    for node in slide.ast.children:
        _validate_node(node, slide.index, pattern)


def _validate_node(node: Node, slide_index: int, pattern) -> None:
    if node.type == "root":
        raise StructuralParseError(f"Slide {slide_index}: nested root node")
    if node.type == "heading" and not 1 <= node.depth <= 6:
        raise StructuralParseError(f"Slide {slide_index}: heading depth {node.depth} outside 1-6")
    if node.type == "container":
        for cls in node.classes:
            validate_class_name(cls)
    if node.type == "text" and pattern.search(node.value):
        raise StructuralParseError(f"Slide {slide_index}: unresolved container placeholder")
    for child in getattr(node, "children", ()):
        _validate_node(child, slide_index, pattern)
