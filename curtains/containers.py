"""
Recursive extraction of ``<container>`` blocks.

Each container is matched with balanced open/close counting, its inner text
is parsed first (nested containers, then prose), and the whole block is
replaced in the outer text by an opaque placeholder. The caller gets the
placeholder text plus a table mapping every placeholder to its fully built
:class:`~curtains.models.Container`.
"""
import itertools
import logging
import textwrap
import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .assembler import build_ast
from .config import DEFAULT_CONFIG, REGEX, ParserConfig, format_placeholder
from .errors import StructuralParseError
from .markdown_parser import MarkdownParser, parse_markdown
from .models import Container
from .validate import validate_class_name, validate_nesting_depth

logger = logging.getLogger(__name__)


@dataclass
class ParseContext:
    """
    State scoped to one container parse.

    Placeholder keys come from this object's counter and random nonce, so
    slides parsed in parallel never share or collide on keys.
    """
    config: ParserConfig = DEFAULT_CONFIG
    markdown: Optional[MarkdownParser] = None
    nonce: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    _counter: Iterator[int] = field(default_factory=itertools.count, repr=False)

    def next_placeholder(self) -> str:
        return format_placeholder(self.nonce, next(self._counter))

    def to_tree(self, text: str):
        if self.markdown is not None:
            return self.markdown.to_tree(text)
        return parse_markdown(text)


@dataclass(frozen=True)
class ContainerParseResult:
    marked: str
    containers: Dict[str, Container]


def parse_containers(
    text: str,
    *,
    config: Optional[ParserConfig] = None,
    context: Optional[ParseContext] = None,
) -> ContainerParseResult:
    """
    Replace every top-level container block in *text* with a placeholder.

    Args:
        text: Slide text with style blocks already removed
        config: Parser limits; defaults to :data:`~curtains.config.DEFAULT_CONFIG`
        context: Existing parse context to draw placeholder keys from

    Returns:
        :class:`ContainerParseResult` with the marked text and the
        placeholder -> container table (in source order)

    Raises:
        ClassNameError: a container class is malformed
        NestingDepthError: containers nest deeper than allowed
        StructuralParseError: an open or close tag has no partner
    """
    if context is None:
        context = ParseContext(config=config or DEFAULT_CONFIG)
    marked, containers = _extract(text, context, depth=0)
    if containers:
        logger.debug(f"Extracted {len(containers)} top-level containers")
    return ContainerParseResult(marked=marked, containers=containers)


def _extract(text: str, ctx: ParseContext, depth: int) -> Tuple[str, Dict[str, Container]]:
    containers: Dict[str, Container] = {}
    pieces: List[str] = []
    pos = 0

    while True:
        opening = REGEX["CONTAINER_TAG"].search(text, pos)
        if opening is None:
            break
        if opening.group("close"):
            raise StructuralParseError(
                f"Unmatched closing </container> at line {_line_of(text, opening.start())}"
            )

        closing = _find_matching_close(text, opening)
        classes = _class_of(opening.group("attrs") or "").split()

        for class_name in classes:
            validate_class_name(class_name)
        validate_nesting_depth(depth + 1, ctx.config.max_nesting_depth)

        inner = text[opening.end():closing.start()]
        inner_marked, inner_containers = _extract(inner, ctx, depth + 1)
        inner_tree = ctx.to_tree(textwrap.dedent(inner_marked))
        children = build_ast(inner_tree, inner_containers, ctx.nonce).children

        key = ctx.next_placeholder()
        containers[key] = Container(classes=classes, children=children)

        start, end = opening.start(), closing.end()
        if _stands_alone(text, start, end):
            # Keep the block on a paragraph of its own, at its original indent
            line_start = text.rfind("\n", 0, start) + 1
            pieces.append(text[pos:line_start])
            pieces.append("\n" + text[line_start:start] + key + "\n")
        else:
            pieces.append(text[pos:start])
            pieces.append(key)
        pos = end

    pieces.append(text[pos:])
    return "".join(pieces), containers


def _find_matching_close(text: str, opening):
    level = 1
    pos = opening.end()
    while True:
        tag = REGEX["CONTAINER_TAG"].search(text, pos)
        if tag is None:
            raise StructuralParseError(
                f"Missing </container> for container opened at line {_line_of(text, opening.start())}"
            )
        level += -1 if tag.group("close") else 1
        if level == 0:
            return tag
        pos = tag.end()


def _class_of(attrs: str) -> str:
    match = REGEX["CLASS_ATTR"].search(attrs)
    if not match:
        return ""
    value = match.group(1) if match.group(1) is not None else match.group(2)
    return value.strip()


def _stands_alone(text: str, start: int, end: int) -> bool:
    """True when only whitespace shares the lines the block starts and ends on."""
    line_start = text.rfind("\n", 0, start) + 1
    line_end = text.find("\n", end)
    if line_end == -1:
        line_end = len(text)
    return not text[line_start:start].strip() and not text[end:line_end].strip()


def _line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1
