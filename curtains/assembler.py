"""
AST assembly: substitute container placeholders in a prose tree.

Rewriting is index based. Each visit returns the list of nodes that take the
visited node's place in its parent, so nothing holds parent pointers.
"""
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Set

from .config import REGEX, placeholder_pattern
from .errors import StructuralParseError
from .models import Container, Node, Root, Text

logger = logging.getLogger(__name__)


class _Resolver:
    def __init__(self, containers: Dict[str, Container], pattern=None):
        self.containers = containers
        self.pattern = pattern
        self.resolved: Set[str] = set()

    def visit(self, node: Node) -> List[Node]:
        if node.type == "text":
            return self._split_text(node)

        if node.type == "container":
            # Already built by the container parser
            return [node]

        if not hasattr(node, "children"):
            return [node]

        children: List[Node] = []
        for child in node.children:
            children.extend(self.visit(child))

        if node.type == "paragraph" and children and all(c.type == "container" for c in children):
            # Never leave a paragraph wrapping containers only
            return children

        return [replace(node, children=children)]

    def _split_text(self, node: Text) -> List[Node]:
        if self.pattern is None:
            return [node]
        matches = list(self.pattern.finditer(node.value))
        if not matches:
            return [node]

        nodes: List[Node] = []
        last = 0
        for match in matches:
            before = node.value[last:match.start()]
            if before.strip():
                nodes.append(replace(node, value=before))
            nodes.append(self._resolve(match.group(0)))
            last = match.end()

        after = node.value[last:]
        if after.strip():
            nodes.append(replace(node, value=after))
        return nodes

    def _resolve(self, key: str) -> Container:
        if key not in self.containers:
            raise StructuralParseError(f"Unknown container placeholder {key}")
        if key in self.resolved:
            raise StructuralParseError(f"Container placeholder {key} resolved twice")
        self.resolved.add(key)
        return self.containers[key]


def build_ast(tree: Root, containers: Dict[str, Container], nonce: Optional[str] = None) -> Root:
    """
    Resolve every container placeholder in *tree*.

    Args:
        tree: Root produced by the prose converter
        containers: Placeholder -> container table from the container parser
        nonce: Nonce of the parse that minted the placeholders; taken from
            the table keys when omitted. Text shaped like a placeholder but
            carrying another nonce is left as prose.

    Returns:
        New root with containers in place of their placeholders

    Raises:
        StructuralParseError: a placeholder is unknown, appears twice, or a
            container in the table never appears in the tree
    """
    if nonce is None and containers:
        nonce = REGEX["PLACEHOLDER"].fullmatch(next(iter(containers))).group("nonce")
    resolver = _Resolver(containers, placeholder_pattern(nonce) if nonce else None)
    children: List[Node] = []
    for child in tree.children:
        children.extend(resolver.visit(child))

    missing = [key for key in containers if key not in resolver.resolved]
    if missing:
        raise StructuralParseError(
            f"{len(missing)} container(s) could not be placed in the document "
            f"(a container inside a code block is not supported)"
        )

    if containers:
        logger.debug(f"Placed {len(containers)} containers")
    return Root(children=children)
