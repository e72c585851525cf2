"""
Scope slide CSS to its own slide with ``:nth-child`` selectors.
"""
import re
from typing import List

SLIDE_SELECTOR = ".curtains-slide"

# At-rules whose blocks are left exactly as written
GLOBAL_AT_RULES = re.compile(
    r"^@(keyframes|media|import|charset|namespace|supports|page|font-face)\b"
)

# Selector text at the start of a line or right after a closing brace
_RULE_START = re.compile(r"(^|\})([^{}]*)\{")


def scope_styles(css: str, slide_index: int) -> str:
    """
    Prefix every selector in *css* with the selector of slide *slide_index*.

    Args:
        css: Slide CSS collected by the parser
        slide_index: 0-based slide index

    Returns:
        Scoped CSS, or ``""`` for blank input
    """
    if not css or not css.strip():
        return ""

    scoped: List[str] = []
    in_global_rule = False
    brace_depth = 0

    for line in css.split("\n"):
        stripped = line.strip()
        opens, closes = line.count("{"), line.count("}")
        brace_depth += opens - closes

        if GLOBAL_AT_RULES.match(stripped):
            # Single-line at-rules (@import ...;) close themselves
            in_global_rule = brace_depth > 0
            scoped.append(line)
            continue

        if in_global_rule:
            scoped.append(line)
            if brace_depth == 0 and closes > 0:
                in_global_rule = False
            continue

        if not stripped or stripped.startswith("/*") or stripped.startswith("*") or "{" not in line:
            scoped.append(line)
            continue

        scoped.append(_RULE_START.sub(lambda m: _scope_rule_start(m, slide_index), line))

    return "\n".join(scoped)


def scope_selector(selector: str, slide_index: int) -> str:
    """Scope each comma-separated part of *selector* to one slide."""
    slide_scope = f"{SLIDE_SELECTOR}:nth-child({slide_index + 1})"

    parts = []
    for part in selector.split(","):
        part = part.strip()
        if not part or part.startswith(SLIDE_SELECTOR):
            parts.append(part)
        elif part[0] in ":>+~":
            parts.append(f"{slide_scope}{part}")
        else:
            parts.append(f"{slide_scope} {part}")
    return ", ".join(parts)


def _scope_rule_start(match, slide_index: int) -> str:
    before, selector = match.group(1), match.group(2)
    if not selector.strip() or selector.strip().startswith("@"):
        return match.group(0)
    lead = selector[: len(selector) - len(selector.lstrip())]
    return f"{before}{lead}{scope_selector(selector.strip(), slide_index)} {{"
