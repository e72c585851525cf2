"""
Parsed document -> per-slide HTML and scoped CSS.
"""
import logging

from .html_builder import ast_to_html
from .models import CurtainsDocument, TransformedDocument, TransformedSlide
from .style_scoping import scope_styles

logger = logging.getLogger(__name__)


def transform(document: CurtainsDocument) -> TransformedDocument:
    """Render every slide AST to HTML and scope its CSS to that slide."""
    slides = []
    for slide in document.slides:
        slides.append(TransformedSlide(
            html=ast_to_html(slide.ast),
            css=scope_styles(slide.slide_css, slide.index),
        ))

    logger.debug(f"Transformed {len(slides)} slides")
    return TransformedDocument(slides=slides, global_css=document.global_css)
