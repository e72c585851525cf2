"""
Exception hierarchy for curtains.

Every failure raised by the parser, transformer, renderer or CLI derives from
:class:`CurtainsError`. Each class carries a short ``code`` and the process
``exit_code`` the CLI uses when the error reaches it.
"""


class CurtainsError(ValueError):
    """Base class for all curtains errors."""
    code = "PARSE_ERROR"
    exit_code = 3


class InputError(CurtainsError):
    """Raw input is empty or not text."""
    code = "INVALID_INPUT"


class SlideCountError(CurtainsError):
    """Document has no slides or more than the allowed maximum."""
    code = "NO_SLIDES"
    exit_code = 4


class SlideIndexError(CurtainsError):
    """Slide index is outside the allowed range."""


class ClassNameError(CurtainsError):
    """Container class name contains characters outside ``[A-Za-z0-9_-]``."""


class NestingDepthError(CurtainsError):
    """Containers are nested deeper than the configured maximum."""


class StructuralParseError(CurtainsError):
    """Unbalanced container tags or an unresolved container placeholder."""


class OptionsError(CurtainsError):
    """Invalid build options (file extensions, theme)."""
    code = "INVALID_ARGS"
    exit_code = 1


class FileAccessError(CurtainsError):
    """Input file cannot be read."""
    code = "FILE_ACCESS"
    exit_code = 2


class OutputError(CurtainsError):
    """Output file cannot be written."""
    code = "OUTPUT_ERROR"
    exit_code = 5


class RenderError(CurtainsError):
    """Rendered document is not a valid HTML page."""
    code = "OUTPUT_ERROR"
    exit_code = 5
