"""
Property Flag Resolver

Turns references like ``Setting.Property.Dynamic`` or ``Property.Dynamic``
found in a setting's arguments into bare flag names (``Dynamic``).
"""

from src.ast.models import Node
from src.ast.query import Query, child, descendant, has_role, has_token, parent
from src.configs import DEFAULT_PROPERTY_ANCHOR_NAME


class PropertyResolver:
    """Collects property flags from a declaration's argument list."""

    def __init__(self, anchor: str = DEFAULT_PROPERTY_ANCHOR_NAME):
        self.anchor = anchor
        # Namespace.Anchor.Flag
        self.long_form = Query([
            descendant("QualifiedName"),
            child("QualifiedName"),
            child("SimpleName").where(has_token(anchor)),
            parent(),
            parent(),
            child("SimpleName").where(has_role("name")),
        ])
        # Anchor.Flag
        self.short_form = Query([
            descendant("QualifiedName"),
            child("SimpleName").where(has_token(anchor)),
            parent(),
            child("SimpleName").where(has_role("name")),
        ])

    def resolve_argument(self, argument: Node) -> list[str]:
        """
        Flags referenced in one argument subtree.

        The short form is only tried when the long form finds nothing: on a
        fully qualified reference it would match the anchor itself.
        """
        matches = self.long_form.select(argument)
        if not matches:
            matches = self.short_form.select(argument)
        return [match.token for match in matches]

    def resolve(self, arguments: list[Node]) -> list[str]:
        """
        Flags across all arguments, in encounter order, without dedup.

        Args:
            arguments: Every resolved argument of the declaration

        Returns:
            Flag names
        """
        flags: list[str] = []
        for argument in arguments:
            flags.extend(self.resolve_argument(argument))
        return flags
