"""
Curtains

Converts ``.curtain`` presentation sources (Markdown with ``===`` slide
delimiters, ``<style>`` blocks and nestable ``<container>`` blocks) into a
single self-contained HTML presentation.
"""

from .assembler import build_ast
from .containers import parse_containers
from .markdown_parser import MarkdownParser, parse_markdown
from .models import CurtainsDocument, CurtainsSlide
from .parser import parse
from .renderer import render
from .slides import process_slide, process_slides, split_into_slides
from .styles import extract_styles
from .transformer import transform

__all__ = [
    'parse', 'transform', 'render',
    'split_into_slides', 'process_slide', 'process_slides',
    'extract_styles', 'parse_containers', 'parse_markdown', 'build_ast',
    'MarkdownParser', 'CurtainsDocument', 'CurtainsSlide',
]
