"""
Syntax Tree Models

Language-neutral tree shape shared by the tree builders, the parsing service
client and the query engine. Nodes carry JDT-style tags (FieldDeclaration,
SimpleName, ...) and a role describing their relation to the parent.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional


@dataclass(frozen=True)
class Position:
    """1-based line/column of a node's first character."""

    line: int = 0
    column: int = 0


@dataclass(eq=False)
class Node:
    """
    A syntax tree node.

    Equality is identity: two structurally identical subtrees at different
    places in a file are different nodes.
    """

    tag: str
    token: str = ""
    role: Optional[str] = None
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list["Node"] = field(default_factory=list)
    position: Position = field(default_factory=Position)

    def walk(self) -> Iterator["Node"]:
        """Yield this node and all descendants in pre-order (document order)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape exchanged with the parsing service."""
        return {
            "tag": self.tag,
            "token": self.token,
            "role": self.role,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
            "position": {"line": self.position.line, "column": self.position.column},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Node":
        """
        Build a tree from its JSON shape.

        Missing optional keys fall back to empty values; a missing tag
        raises KeyError.
        """
        position = data.get("position") or {}
        return cls(
            tag=data["tag"],
            token=data.get("token") or "",
            role=data.get("role"),
            attributes=dict(data.get("attributes") or {}),
            children=[cls.from_dict(child) for child in data.get("children") or []],
            position=Position(
                line=int(position.get("line", 0)),
                column=int(position.get("column", 0)),
            ),
        )

    def __repr__(self) -> str:
        parts = [self.tag]
        if self.token:
            parts.append(repr(self.token))
        if self.role:
            parts.append(f"role={self.role}")
        return f"Node({', '.join(parts)})"
