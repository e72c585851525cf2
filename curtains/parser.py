"""
Document-level parser entry point.
"""
import logging
from typing import Any, Optional

from .config import DEFAULT_CONFIG, ParserConfig
from .models import CurtainsDocument
from .slides import process_slides, split_into_slides
from .styles import extract_global_styles
from .validate import validate_input, validate_slide_count

logger = logging.getLogger(__name__)


def parse(source: Any, config: Optional[ParserConfig] = None) -> CurtainsDocument:
    """
    Parse a curtains presentation source into a document.

    Args:
        source: Raw ``.curtain`` text
        config: Parser limits (slide count, container nesting)

    Returns:
        :class:`CurtainsDocument` with one slide per delimiter-separated
        section and the combined global CSS

    Raises:
        CurtainsError: any subclass, on the first violation found
    """
    config = config or DEFAULT_CONFIG

    text = validate_input(source)
    split = split_into_slides(text)
    validate_slide_count(len(split.slides), config.max_slides)

    # Only style blocks of the global section are used; its prose is dropped
    global_css = extract_global_styles(split.global_content)
    slides = process_slides(split.slides, config)

    logger.debug(f"Parsed {len(slides)} slides")
    return CurtainsDocument(slides=slides, global_css=global_css)
