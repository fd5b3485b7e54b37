"""
Tree Query Engine

A small combinator library for selecting nodes from a syntax tree, plus a
parser for the restricted path syntax used to write queries compactly:

    //FieldDeclaration/ParameterizedType/SimpleType[@internalRole='typeArguments']/SimpleName
    //QualifiedName/SimpleName[@token='Property']/../SimpleName[@internalRole='name']

Supported syntax:
- ``//tag``: any descendant with that tag
- ``/tag`` or ``/*``: direct children
- ``/..``: parent, never above the node the query is evaluated on
- ``[@name='value']``: attribute filter; ``@token`` tests the literal text and
  ``@internalRole`` tests the node role

Expressions are evaluated against a virtual document whose only child is the
root node, so a leading step can match the root itself. Each step's result is
de-duplicated and kept in document order, and an empty step ends evaluation
with an empty result.

The engine knows nothing about settings; it only understands the Node shape.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Iterable, Optional

from src.ast.models import Node
from src.exceptions import QuerySyntaxError

Predicate = Callable[[Node], bool]

ANY_TAG = "*"
TOKEN_ATTRIBUTE = "token"
ROLE_ATTRIBUTE = "internalRole"

CHILD = "child"
DESCENDANT = "descendant"
PARENT = "parent"


# =============================================================================
# Predicates
# =============================================================================


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def has_tag(tag: str) -> Predicate:
    """Match nodes with the given tag; ``*`` matches every node."""
    if tag == ANY_TAG:
        return lambda node: True
    return lambda node: node.tag == tag


def has_token(value: str) -> Predicate:
    """Match nodes whose literal text equals value."""
    return lambda node: node.token == value


def has_role(role: str) -> Predicate:
    """Match nodes playing the given role in their parent."""
    return lambda node: node.role == role


def has_attribute(name: str, value: str) -> Predicate:
    """
    Match nodes whose attribute equals value (compared as text).

    ``token`` and ``internalRole`` are routed to the node's literal text and
    role respectively.
    """
    if name == TOKEN_ATTRIBUTE:
        return has_token(value)
    if name == ROLE_ATTRIBUTE:
        return has_role(value)

    def _match(node: Node) -> bool:
        if name not in node.attributes:
            return False
        return _stringify(node.attributes[name]) == value

    return _match


# =============================================================================
# Steps
# =============================================================================


@dataclass(frozen=True)
class Step:
    """One location step: an axis plus the predicates a node must satisfy."""

    axis: str
    predicates: tuple[Predicate, ...] = ()

    def where(self, *predicates: Predicate) -> "Step":
        """Return a copy of this step with extra predicates."""
        return Step(self.axis, self.predicates + tuple(predicates))

    def matches(self, node: Node) -> bool:
        return all(predicate(node) for predicate in self.predicates)


def child(tag: str = ANY_TAG) -> Step:
    return Step(CHILD, (has_tag(tag),))


def descendant(tag: str = ANY_TAG) -> Step:
    return Step(DESCENDANT, (has_tag(tag),))


def parent() -> Step:
    return Step(PARENT)


class _TreeIndex:
    """Parent links and document order for one evaluation root."""

    def __init__(self, root: Node):
        self.parents: dict[int, Node] = {}
        self.order: dict[int, int] = {}
        for position, node in enumerate(root.walk()):
            self.order[id(node)] = position
            for child_node in node.children:
                self.parents[id(child_node)] = node

    def in_document_order(self, nodes: Iterable[Node]) -> list[Node]:
        unique = {id(node): node for node in nodes}
        return sorted(unique.values(), key=lambda node: self.order[id(node)])


def _strict_descendants(node: Node) -> Iterable[Node]:
    walker = node.walk()
    next(walker)
    return walker


class Query:
    """An ordered sequence of steps evaluated left to right."""

    def __init__(self, steps: Iterable[Step], source: Optional[str] = None):
        self.steps = tuple(steps)
        self.source = source

    def select(self, root: Node) -> list[Node]:
        """
        Evaluate the query against root.

        Args:
            root: Node the query is evaluated on

        Returns:
            Matching nodes in document order (empty list if none)
        """
        index = _TreeIndex(root)
        # None stands for the virtual document above root
        context: Optional[list[Node]] = None

        for step in self.steps:
            candidates = self._advance(step.axis, context, root, index)
            matched = index.in_document_order(n for n in candidates if step.matches(n))
            if not matched:
                return []
            context = matched

        return context or []

    def first(self, root: Node) -> Optional[Node]:
        matches = self.select(root)
        return matches[0] if matches else None

    @staticmethod
    def _advance(
        axis: str,
        context: Optional[list[Node]],
        root: Node,
        index: _TreeIndex,
    ) -> Iterable[Node]:
        if context is None:
            if axis == CHILD:
                return [root]
            if axis == DESCENDANT:
                return root.walk()
            return []

        if axis == CHILD:
            return [c for node in context for c in node.children]
        if axis == DESCENDANT:
            return [d for node in context for d in _strict_descendants(node)]
        if axis == PARENT:
            return [index.parents[id(node)] for node in context if id(node) in index.parents]
        raise QuerySyntaxError(f"Unknown axis: {axis}")

    def __repr__(self) -> str:
        return f"Query({self.source!r})" if self.source else f"Query({len(self.steps)} steps)"


# =============================================================================
# Path Syntax
# =============================================================================

_STEP_RE = re.compile(r"(//|/)(\.\.|\*|[A-Za-z_][\w\-]*)")
_FILTER_RE = re.compile(
    r"\[\s*@([A-Za-z_][\w\-]*)\s*=\s*(?:'([^']*)'|\"([^\"]*)\"|([^\]\s]+))\s*\]"
)


@lru_cache(maxsize=256)
def compile_path(expression: str) -> Query:
    """
    Compile a path expression into a Query.

    Args:
        expression: Path such as ``//FieldDeclaration/SimpleName[@token='x']/..``

    Returns:
        Compiled Query (cached per expression)

    Raises:
        QuerySyntaxError: The expression is malformed
    """
    text = expression.strip()
    if not text.startswith("/"):
        raise QuerySyntaxError(f"Path must start with '/' or '//': {expression!r}")

    steps: list[Step] = []
    pos = 0
    while pos < len(text):
        step_match = _STEP_RE.match(text, pos)
        if step_match is None:
            raise QuerySyntaxError(
                f"Unexpected input at offset {pos}: {expression!r}",
                details={"offset": pos},
            )
        separator, name = step_match.groups()
        pos = step_match.end()

        if name == "..":
            if separator == "//":
                raise QuerySyntaxError(f"Parent step must use '/': {expression!r}")
            step = parent()
        elif separator == "//":
            step = descendant(name)
        else:
            step = child(name)

        while pos < len(text) and text[pos] == "[":
            filter_match = _FILTER_RE.match(text, pos)
            if filter_match is None:
                raise QuerySyntaxError(
                    f"Malformed filter at offset {pos}: {expression!r}",
                    details={"offset": pos},
                )
            attr, single, double, bare = filter_match.groups()
            value = next(v for v in (single, double, bare) if v is not None)
            step = step.where(has_attribute(attr, value))
            pos = filter_match.end()

        steps.append(step)

    return Query(steps, source=text)


def select(root: Node, expression: str) -> list[Node]:
    """Evaluate a path expression against root."""
    return compile_path(expression).select(root)


def select_first(root: Node, expression: str) -> Optional[Node]:
    """First match of a path expression, or None."""
    return compile_path(expression).first(root)
