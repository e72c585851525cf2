"""
Data models for the curtains parser.

All content nodes share one tagged union, :data:`Node`. Every node class
carries its tag in the class attribute ``type`` so callers can dispatch on
``node.type`` without isinstance chains.
"""
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Optional, Union

from .config import VERSION


@dataclass
class Text:
    value: str
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    type: ClassVar[str] = "text"


@dataclass
class Heading:
    depth: int
    children: List["Node"] = field(default_factory=list)
    type: ClassVar[str] = "heading"


@dataclass
class Paragraph:
    children: List["Node"] = field(default_factory=list)
    type: ClassVar[str] = "paragraph"


@dataclass
class Link:
    url: str
    children: List["Node"] = field(default_factory=list)
    type: ClassVar[str] = "link"


@dataclass
class Image:
    url: str
    alt: str = ""
    title: Optional[str] = None
    classes: Optional[List[str]] = None
    type: ClassVar[str] = "image"


@dataclass
class ListNode:
    ordered: bool = False
    children: List["Node"] = field(default_factory=list)
    type: ClassVar[str] = "list"


@dataclass
class ListItem:
    children: List["Node"] = field(default_factory=list)
    type: ClassVar[str] = "listItem"


@dataclass
class Code:
    value: str
    lang: Optional[str] = None
    type: ClassVar[str] = "code"


@dataclass
class TableCell:
    children: List["Node"] = field(default_factory=list)
    align: Optional[str] = None
    header: Optional[bool] = None
    type: ClassVar[str] = "tableCell"


@dataclass
class TableRow:
    children: List[TableCell] = field(default_factory=list)
    type: ClassVar[str] = "tableRow"


@dataclass
class Table:
    children: List[TableRow] = field(default_factory=list)
    type: ClassVar[str] = "table"


@dataclass
class Container:
    classes: List[str] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)
    type: ClassVar[str] = "container"


@dataclass
class Root:
    children: List["Node"] = field(default_factory=list)
    type: ClassVar[str] = "root"


Node = Union[Root, Container, Heading, Paragraph, Text, Link, Image, ListNode,
             ListItem, Code, Table, TableRow, TableCell]


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Serialise a node (and its subtree) to plain dicts, omitting unset fields."""
    data: Dict[str, Any] = {"type": node.type}
    for f in fields(node):
        value = getattr(node, f.name)
        if value is None:
            continue
        if f.name == "children":
            data["children"] = [node_to_dict(child) for child in value]
        elif isinstance(value, list):
            data[f.name] = list(value)
        else:
            data[f.name] = value
    return data


@dataclass(frozen=True)
class SlideSource:
    """Raw text of one slide and its 0-based position in the document."""
    content: str
    index: int


@dataclass(frozen=True)
class StyleFragment:
    css: str
    scope: str  # "global" or "slide"


@dataclass(frozen=True)
class CurtainsSlide:
    """Final parse result for one slide, handed to the transformer."""
    index: int
    ast: Root
    slide_css: str = ""
    type: ClassVar[str] = "curtains-slide"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "index": self.index,
            "ast": node_to_dict(self.ast),
            "slideCSS": self.slide_css,
        }


@dataclass(frozen=True)
class CurtainsDocument:
    """Parser output: every slide plus the combined global CSS."""
    slides: List[CurtainsSlide]
    global_css: str = ""
    version: str = VERSION
    type: ClassVar[str] = "curtains-document"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "version": self.version,
            "slides": [slide.to_dict() for slide in self.slides],
            "globalCSS": self.global_css,
        }


@dataclass(frozen=True)
class TransformedSlide:
    html: str
    css: str  # already scoped to this slide


@dataclass(frozen=True)
class TransformedDocument:
    slides: List[TransformedSlide]
    global_css: str = ""
