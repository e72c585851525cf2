"""
Final HTML page assembly: CSS cascade, runtime script and page template.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import THEMES, BuildOptions
from .errors import OptionsError, RenderError
from .models import TransformedDocument
from .theme_loader import get_base_css, get_css

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
PAGE_TEMPLATE = "presentation.html"
RUNTIME_SCRIPT = "runtime.js"


@dataclass(frozen=True)
class RuntimeConfig:
    total_slides: int
    theme: str = "light"
    start_slide: int = 0

    def __post_init__(self):
        if self.total_slides < 1:
            raise RenderError("A presentation needs at least one slide")
        if self.theme not in THEMES:
            raise OptionsError(f"Unknown theme '{self.theme}'")
        if not 0 <= self.start_slide < self.total_slides:
            raise RenderError(f"Start slide {self.start_slide} out of range")


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        keep_trailing_newline=True,
    )


def merge_css(global_css: str, slides_css: List[str], theme: str) -> str:
    """
    Merge CSS in cascade order.

    Order: base layout -> theme -> global user CSS -> slide-specific CSS.
    Blank slide CSS is skipped.
    """
    layers = [
        "/* Base Layout Styles */",
        get_base_css(),
        "",
        "/* Theme Variables and Base Styles */",
        get_css(theme).strip(),
        "",
        "/* Global User Styles */",
        global_css,
        "",
        "/* Slide-specific Scoped Styles */",
    ]
    layers.extend(css for css in slides_css if css.strip())
    return "\n".join(layers)


def get_runtime_js() -> str:
    """Navigation script embedded in every presentation."""
    return (TEMPLATES_DIR / RUNTIME_SCRIPT).read_text(encoding="utf-8").strip()


def render(document: TransformedDocument, options: BuildOptions, title: str = "Presentation") -> str:
    """
    Render a transformed document to a complete, self-contained HTML page.

    Args:
        document: Output of :func:`curtains.transformer.transform`
        options: Build options; only ``theme`` is used here
        title: Initial page title (the runtime replaces it on load)

    Returns:
        HTML document string
    """
    runtime_config = RuntimeConfig(total_slides=len(document.slides), theme=options.theme)
    css = merge_css(document.global_css, [slide.css for slide in document.slides], options.theme)

    html = _environment().get_template(PAGE_TEMPLATE).render(
        title=title,
        css=css,
        slides=document.slides,
        config=runtime_config,
        runtime_js=get_runtime_js(),
    )

    if not html.lstrip().lower().startswith("<!doctype html>"):
        raise RenderError("Rendered output is not an HTML document")

    logger.debug(f"Rendered {runtime_config.total_slides} slides with theme '{options.theme}'")
    return html
