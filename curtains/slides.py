"""
Slide splitting and the per-slide parse pipeline.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from .assembler import build_ast
from .config import DEFAULT_CONFIG, REGEX, ParserConfig
from .containers import ParseContext, parse_containers
from .markdown_parser import MarkdownParser
from .models import CurtainsSlide, SlideSource
from .styles import extract_styles
from .validate import validate_slide, validate_slide_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitResult:
    global_content: str
    slides: List[str]


def split_into_slides(source: str) -> SplitResult:
    """
    Split a document on ``===`` delimiter lines.

    The text before the first delimiter is the global section. Every span
    after a delimiter is one slide, left untrimmed. A document without any
    delimiter is all global content and has no slides.
    """
    source = source.replace("\r\n", "\n")
    parts = REGEX["DELIMITER"].split(source)
    return SplitResult(global_content=parts[0], slides=parts[1:])


def process_slide(
    slide: SlideSource,
    config: Optional[ParserConfig] = None,
    markdown: Optional[MarkdownParser] = None,
) -> CurtainsSlide:
    """
    Run one slide through styles -> containers -> prose -> assembly.

    Args:
        slide: Raw slide text and its index
        config: Parser limits
        markdown: Prose converter to reuse; a shared default is used if None

    Returns:
        Validated :class:`CurtainsSlide`
    """
    config = config or DEFAULT_CONFIG
    validate_slide_index(slide.index, config.max_slides)

    extracted = extract_styles(slide.content, "slide")

    context = ParseContext(config=config, markdown=markdown)
    parsed = parse_containers(extracted.content, context=context)
    tree = context.to_tree(parsed.marked)
    ast = build_ast(tree, parsed.containers, context.nonce)

    result = CurtainsSlide(
        index=slide.index,
        ast=ast,
        slide_css="\n".join(style.css for style in extracted.styles),
    )
    validate_slide(result, config.max_slides, nonce=context.nonce)

    logger.debug(
        f"Slide {slide.index}: {len(ast.children)} nodes, "
        f"{len(parsed.containers)} containers, {len(extracted.styles)} style blocks"
    )
    return result


def process_slides(
    slide_contents: List[str],
    config: Optional[ParserConfig] = None,
    markdown: Optional[MarkdownParser] = None,
) -> List[CurtainsSlide]:
    """Process slide texts in order, indexing them by position."""
    return [
        process_slide(SlideSource(content=content, index=index), config, markdown)
        for index, content in enumerate(slide_contents)
    ]
