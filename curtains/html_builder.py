"""
Slide AST -> HTML fragment.
"""
import re
from html import escape
from typing import List

from .models import Node, Root

_EXTERNAL_URL_RE = re.compile(r"^(https?:)?//", re.IGNORECASE)


def ast_to_html(ast: Root) -> str:
    """
    Convert one slide's root node to an HTML fragment.

    Containers are emitted as they are. Runs of other top-level nodes are
    grouped into ``<div class="curtains-content">`` so the theme can pad
    prose without padding full-bleed containers.
    """
    parts: List[str] = []
    padded: List[str] = []

    for node in ast.children:
        html = node_to_html(node)
        if node.type == "container":
            if padded:
                parts.append(_content_block(padded))
                padded = []
            if html:
                parts.append(html)
        elif html:
            padded.append(html)

    if padded:
        parts.append(_content_block(padded))
    return "\n".join(parts)


def node_to_html(node: Node) -> str:
    kind = node.type

    if kind == "container":
        class_attr = f' class="{escape(" ".join(node.classes))}"' if node.classes else ""
        inner = _children(node, sep="\n")
        return f"<div{class_attr}>{inner}</div>"

    if kind == "heading":
        return f"<h{node.depth}>{_children(node)}</h{node.depth}>"

    if kind == "paragraph":
        return f"<p>{_children(node)}</p>"

    if kind == "text":
        text = escape(node.value, quote=False)
        if node.bold:
            text = f"<strong>{text}</strong>"
        if node.italic:
            text = f"<em>{text}</em>"
        return text

    if kind == "link":
        attrs = ' target="_blank" rel="noopener noreferrer"' if _EXTERNAL_URL_RE.match(node.url) else ""
        return f'<a href="{escape(node.url)}"{attrs}>{_children(node)}</a>'

    if kind == "image":
        class_attr = f' class="{escape(" ".join(node.classes))}"' if node.classes else ""
        title_attr = f' title="{escape(node.title)}"' if node.title else ""
        return f'<img src="{escape(node.url)}" alt="{escape(node.alt or "")}"{title_attr}{class_attr}>'

    if kind == "list":
        tag = "ol" if node.ordered else "ul"
        items = _children(node, sep="\n")
        return f"<{tag}>{items}</{tag}>"

    if kind == "listItem":
        return f"<li>{_children(node)}</li>"

    if kind == "code":
        lang_class = f' class="language-{escape(node.lang)}"' if node.lang else ""
        return f"<pre><code{lang_class}>{escape(node.value)}</code></pre>"

    if kind == "table":
        if not node.children:
            return ""
        rows = [node_to_html(row) for row in node.children]
        has_header = any(cell.header for cell in node.children[0].children)
        if has_header:
            body = f"<tbody>{''.join(rows[1:])}</tbody>" if len(rows) > 1 else ""
            return f"<table><thead>{rows[0]}</thead>{body}</table>"
        return f"<table><tbody>{''.join(rows)}</tbody></table>"

    if kind == "tableRow":
        return f"<tr>{_children(node)}</tr>"

    if kind == "tableCell":
        tag = "th" if node.header else "td"
        style = f' style="text-align: {node.align}"' if node.align and node.align != "left" else ""
        return f"<{tag}{style}>{_children(node)}</{tag}>"

    return ""


def _children(node: Node, sep: str = "") -> str:
    return sep.join(node_to_html(child) for child in node.children)


def _content_block(parts: List[str]) -> str:
    return '<div class="curtains-content">' + "\n".join(parts) + "</div>"
