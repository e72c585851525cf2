"""
Markdown parser that turns slide prose into the curtains content tree.

markdown-it-py does the actual block/inline grammar. This module walks its
token stream into an intermediate mdast-like tree of plain dicts and then
normalises that tree into :mod:`curtains.models` nodes.
"""
import logging
import re
from functools import lru_cache
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.attrs import attrs_plugin

from .config import REGEX
from .markdown_plugins.container_placeholder import container_placeholder_plugin
from .models import (
    Code,
    Heading,
    Image,
    Link,
    ListItem,
    ListNode,
    Node,
    Paragraph,
    Root,
    Table,
    TableCell,
    TableRow,
    Text,
)

logger = logging.getLogger(__name__)

MdNode = Dict[str, Any]

_ALIGN_RE = re.compile(r"text-align\s*:\s*(left|center|right)", re.IGNORECASE)


class MarkdownParser:
    """
    Prose converter backed by markdown-it-py.

    The processor runs the CommonMark preset with GFM tables and
    strikethrough, raw HTML enabled (so ``<img>`` tags reach us as tokens),
    ``{.class}`` attributes for images and the container placeholder rule.
    """

    def __init__(self):
        self.markdown_processor = MarkdownIt('commonmark', {
            'html': True,          # Keep raw <img> tags as html tokens
        })
        self.markdown_processor.enable(['table', 'strikethrough'])

        self.markdown_processor = (
            self.markdown_processor
                .use(attrs_plugin)                    # ![alt](src){.class}
                .use(container_placeholder_plugin)    # {{curtains-container:...}}
        )

    def to_tree(self, text: str) -> Root:
        """
        Convert prose (possibly holding container placeholders) to a root node.

        Args:
            text: Markdown text of one slide or one container body

        Returns:
            Root node with normalised children
        """
        stripped = text.strip()
        if REGEX["PLACEHOLDER"].fullmatch(stripped):
            # A body that is nothing but one container: the assembler swaps
            # this paragraph for the container itself.
            return Root(children=[Paragraph(children=[Text(value=stripped)])])

        tokens = self.markdown_processor.parse(text)
        mdast = self._build_block_tree(tokens)
        children = self._normalize_children(mdast["children"])
        logger.debug(f"Converted prose into {len(children)} top-level nodes")
        return Root(children=children)

    # ------------------------------------------------------------------
    # Token stream -> intermediate tree
    # ------------------------------------------------------------------

    def _build_block_tree(self, tokens: List[Token]) -> MdNode:
        root: MdNode = {"type": "root", "children": []}
        stack: List[MdNode] = [root]

        for token in tokens:
            parent = stack[-1]

            if token.nesting == 1:
                node = self._open_block(token)
                if node is None:
                    # thead / tbody carry no structure of their own
                    stack.append(parent)
                else:
                    parent["children"].append(node)
                    stack.append(node)
            elif token.nesting == -1:
                stack.pop()
            elif token.type == "inline":
                parent["children"].extend(self._build_inline_tree(token.children or []))
            elif token.type == "fence":
                info = token.info.strip()
                parent["children"].append({
                    "type": "code",
                    "value": _strip_final_newline(token.content),
                    "lang": info.split()[0] if info else None,
                })
            elif token.type == "code_block":
                parent["children"].append({
                    "type": "code",
                    "value": _strip_final_newline(token.content),
                    "lang": None,
                })
            elif token.type == "html_block":
                parent["children"].append({"type": "html", "value": token.content})
            elif token.type == "hr":
                parent["children"].append({"type": "thematicBreak"})
            else:
                logger.debug(f"Skipping block token {token.type}")

        return root

    def _open_block(self, token: Token) -> Optional[MdNode]:
        kind = token.type
        if kind == "heading_open":
            return {"type": "heading", "depth": int(token.tag[1:]), "children": []}
        if kind == "paragraph_open":
            return {"type": "paragraph", "children": []}
        if kind in ("bullet_list_open", "ordered_list_open"):
            return {"type": "list", "ordered": kind == "ordered_list_open", "children": []}
        if kind == "list_item_open":
            return {"type": "listItem", "children": []}
        if kind == "blockquote_open":
            return {"type": "blockquote", "children": []}
        if kind == "table_open":
            return {"type": "table", "children": []}
        if kind in ("thead_open", "tbody_open"):
            return None
        if kind == "tr_open":
            return {"type": "tableRow", "children": []}
        if kind in ("th_open", "td_open"):
            match = _ALIGN_RE.search(str(token.attrGet("style") or ""))
            return {
                "type": "tableCell",
                "align": match.group(1).lower() if match else None,
                "children": [],
            }
        return {"type": kind[:-len("_open")], "children": []}

    def _build_inline_tree(self, tokens: List[Token]) -> List[MdNode]:
        holder: MdNode = {"type": "inline", "children": []}
        stack: List[MdNode] = [holder]

        for token in tokens:
            parent = stack[-1]
            kind = token.type

            if token.nesting == 1:
                if kind == "strong_open":
                    node = {"type": "strong", "children": []}
                elif kind == "em_open":
                    node = {"type": "emphasis", "children": []}
                elif kind == "link_open":
                    node = {"type": "link", "url": str(token.attrGet("href") or ""), "children": []}
                else:
                    # s_open and anything a plugin adds keep only their content
                    node = {"type": "delete", "children": []}
                parent["children"].append(node)
                stack.append(node)
            elif token.nesting == -1:
                stack.pop()
            elif kind in ("text", "text_special"):
                if not token.content:
                    # markdown-it leaves empty text tokens around emphasis delimiters
                    continue
                parent["children"].append({"type": "text", "value": token.content})
            elif kind in ("softbreak", "hardbreak"):
                parent["children"].append({"type": "text", "value": "\n"})
            elif kind == "code_inline":
                parent["children"].append({"type": "inlineCode", "value": token.content})
            elif kind == "html_inline":
                parent["children"].append({"type": "html", "value": token.content})
            elif kind == "container_placeholder":
                parent["children"].append({"type": "text", "value": token.content})
            elif kind == "image":
                class_attr = str(token.attrGet("class") or "")
                title = token.attrGet("title")
                parent["children"].append({
                    "type": "image",
                    "url": str(token.attrGet("src") or ""),
                    "alt": _plain_text(token.children or []),
                    "title": str(title) if title else None,
                    "classes": class_attr.split() or None,
                })
            elif token.content:
                parent["children"].append({"type": "text", "value": token.content})

        return holder["children"]

    # ------------------------------------------------------------------
    # Intermediate tree -> curtains nodes
    # ------------------------------------------------------------------

    def _normalize_children(self, children: List[MdNode]) -> List[Node]:
        result: List[Node] = []
        for child in children:
            result.extend(self._normalize(child))
        return _merge_text(result)

    def _normalize(self, node: MdNode) -> List[Node]:
        kind = node["type"]

        if kind == "text":
            return self._split_raw_images(node["value"], is_html=False)

        if kind == "html":
            return self._split_raw_images(node["value"], is_html=True)

        if kind == "inlineCode":
            return [Text(value=node["value"])]

        if kind == "heading":
            return [Heading(depth=node["depth"], children=self._normalize_children(node["children"]))]

        if kind == "paragraph":
            children = self._normalize_children(node["children"])
            if not children:
                return []
            if len(children) == 1 and children[0].type == "image":
                return [children[0]]
            return [Paragraph(children=children)]

        if kind == "strong":
            return _tag_leaves(self._normalize_children(node["children"]), "bold")

        if kind == "emphasis":
            return _tag_leaves(self._normalize_children(node["children"]), "italic")

        if kind == "link":
            return [Link(url=node["url"], children=self._normalize_children(node["children"]))]

        if kind == "image":
            return [Image(url=node["url"], alt=node["alt"], title=node["title"], classes=node["classes"])]

        if kind == "list":
            return [ListNode(ordered=node["ordered"], children=self._normalize_children(node["children"]))]

        if kind == "listItem":
            return [ListItem(children=self._normalize_children(node["children"]))]

        if kind == "code":
            return [Code(value=node["value"], lang=node["lang"])]

        if kind == "table":
            return [self._normalize_table(node)]

        if kind == "thematicBreak":
            return []

        # blockquote, delete and unknown wrappers: keep the content only
        return self._normalize_children(node.get("children", []))

    def _normalize_table(self, node: MdNode) -> Table:
        rows: List[TableRow] = []
        for row in node["children"]:
            if row["type"] != "tableRow":
                continue
            cells = [
                TableCell(children=self._normalize_children(cell["children"]), align=cell["align"])
                for cell in row["children"]
                if cell["type"] == "tableCell"
            ]
            rows.append(TableRow(children=cells))

        if rows:
            column_align = [cell.align for cell in rows[0].children]
            for cell in rows[0].children:
                cell.header = True
            for row in rows:
                for i, cell in enumerate(row.children):
                    if not cell.children:
                        cell.children = [Text(value="")]
                    if i < len(column_align) and column_align[i]:
                        cell.align = column_align[i]

        return Table(children=rows)

    def _split_raw_images(self, value: str, is_html: bool) -> List[Node]:
        """Splice ``<img>`` tags found in a text or HTML run into image nodes."""
        matches = list(REGEX["IMG_TAG"].finditer(value))
        if not matches:
            if is_html:
                value = value.strip("\n")
                return [Text(value=value)] if value.strip() else []
            return [Text(value=value)] if value else []

        nodes: List[Node] = []
        last = 0
        for match in matches:
            before = value[last:match.start()]
            if before.strip():
                nodes.append(Text(value=before))
            nodes.append(_image_from_tag(match.group(0)))
            last = match.end()

        after = value[last:]
        if after.strip():
            nodes.append(Text(value=after))
        return nodes


def _image_from_tag(raw_tag: str) -> Image:
    """Build an image node from a raw ``<img>`` tag, honouring only src, alt and class."""
    tag = BeautifulSoup(raw_tag, "html.parser").find("img")
    if tag is None:
        return Image(url="")

    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return Image(
        url=str(tag.get("src", "")),
        alt=str(tag.get("alt", "")),
        classes=list(classes) or None,
    )


def _tag_leaves(nodes: List[Node], flag: str) -> List[Node]:
    """Set *flag* (``bold`` / ``italic``) on every text leaf below *nodes*."""
    for node in nodes:
        if node.type == "text":
            setattr(node, flag, True)
        elif hasattr(node, "children"):
            _tag_leaves(node.children, flag)
    return nodes


def _merge_text(nodes: List[Node]) -> List[Node]:
    """Join adjacent text nodes that carry the same formatting."""
    merged: List[Node] = []
    for node in nodes:
        prev = merged[-1] if merged else None
        if (
            node.type == "text"
            and prev is not None
            and prev.type == "text"
            and prev.bold == node.bold
            and prev.italic == node.italic
        ):
            merged[-1] = Text(value=prev.value + node.value, bold=prev.bold, italic=prev.italic)
        else:
            merged.append(node)
    return merged


def _plain_text(tokens: List[Token]) -> str:
    parts = []
    for token in tokens:
        if token.type in ("softbreak", "hardbreak"):
            parts.append("\n")
        elif token.type == "image":
            parts.append(_plain_text(token.children or []))
        else:
            parts.append(token.content)
    return "".join(parts)


def _strip_final_newline(value: str) -> str:
    return value[:-1] if value.endswith("\n") else value


@lru_cache(maxsize=1)
def _default_parser() -> MarkdownParser:
    return MarkdownParser()


def parse_markdown(text: str) -> Root:
    """
    Convenience function to convert prose text to a content tree.

    Args:
        text: Markdown content, possibly holding container placeholders

    Returns:
        Root node
    """
    return _default_parser().to_tree(text)
