from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline

from ..config import REGEX


def container_placeholder_plugin(md: MarkdownIt):
    """Markdown-it-py plugin that keeps container placeholders in one piece.

    A placeholder such as ``{{curtains-container:1f2e:0}}`` becomes a single
    ``container_placeholder`` token whose ``content`` is the placeholder text,
    so emphasis, links or attribute rules never split or consume it.
    """

    def _placeholder(state: StateInline, silent: bool):
        if state.src[state.pos] != '{':
            return False

        match = REGEX["PLACEHOLDER"].match(state.src, state.pos, state.posMax)
        if not match:
            return False

        if not silent:
            token = state.push('container_placeholder', '', 0)
            token.content = match.group(0)

        state.pos = match.end()
        return True

    # Must run before the attrs plugin sees the opening brace
    md.inline.ruler.before('text', 'container_placeholder', _placeholder)
