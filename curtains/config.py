"""
Configuration constants, regex patterns and option objects for curtains.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import OptionsError


# Application defaults
DEFAULTS = {
    "MAX_SLIDES": 99,
    "MAX_NESTING_DEPTH": 10,
    "THEME": "light",
    "INPUT_EXTENSION": ".curtain",
    "OUTPUT_EXTENSION": ".html",
}

THEMES = ("light", "dark")

VERSION = "0.1"

# Regex patterns for parsing and validation
REGEX = {
    # Swallows the newline that precedes the delimiter line so the text
    # before it carries no trailing line break.
    "DELIMITER": re.compile(r"(?:\A|\n)[^\S\n]*={3,}[^\S\n]*(?=\n|\Z)"),
    "STYLE": re.compile(r"<style(?:\s[^>]*)?>(.*?)</style\s*>", re.IGNORECASE | re.DOTALL),
    "CONTAINER_TAG": re.compile(r"<container(?P<attrs>\s[^>]*)?>|(?P<close></container\s*>)", re.IGNORECASE),
    "CLASS_ATTR": re.compile(r"""(?<![\w-])class\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE),
    "CLASS_NAME": re.compile(r"^[a-zA-Z0-9_-]+$"),
    "IMG_TAG": re.compile(r"<img\b[^>]*>", re.IGNORECASE),
    "PLACEHOLDER": re.compile(r"\{\{curtains-container:(?P<nonce>[0-9a-f]+):\d+\}\}"),
}


def format_placeholder(nonce: str, number: int) -> str:
    """Build the placeholder token that stands in for an extracted container."""
    return f"{{{{curtains-container:{nonce}:{number}}}}}"


def placeholder_pattern(nonce: str):
    """Pattern matching only the placeholders minted with *nonce*."""
    return re.compile(r"\{\{curtains-container:" + re.escape(nonce) + r":\d+\}\}")


@dataclass(frozen=True)
class ParserConfig:
    """Limits enforced while parsing a document."""
    max_slides: int = DEFAULTS["MAX_SLIDES"]
    max_nesting_depth: int = DEFAULTS["MAX_NESTING_DEPTH"]


DEFAULT_CONFIG = ParserConfig()


@dataclass(frozen=True)
class BuildOptions:
    """
    Options for one ``curtains build`` run.

    Args:
        input: Path of the ``.curtain`` source file
        output: Path of the ``.html`` file to write
        theme: Theme name, one of :data:`THEMES`
    """
    input: str
    output: str
    theme: str = DEFAULTS["THEME"]

    @classmethod
    def from_args(cls, input: str, output: Optional[str] = None, theme: str = DEFAULTS["THEME"]) -> "BuildOptions":
        """Create options, deriving the output path from the input when omitted."""
        if not output:
            output = str(Path(input).with_suffix(DEFAULTS["OUTPUT_EXTENSION"]))
        options = cls(input=str(input), output=str(output), theme=theme)
        options.validate()
        return options

    def validate(self) -> None:
        if not self.input.endswith(DEFAULTS["INPUT_EXTENSION"]):
            raise OptionsError(f"Input must be a {DEFAULTS['INPUT_EXTENSION']} file: {self.input}")
        if not self.output.endswith(DEFAULTS["OUTPUT_EXTENSION"]):
            raise OptionsError(f"Output must be a {DEFAULTS['OUTPUT_EXTENSION']} file: {self.output}")
        if self.theme not in THEMES:
            raise OptionsError(f"Unknown theme '{self.theme}'. Available themes: {list(THEMES)}")
