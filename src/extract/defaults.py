"""
Default Value Serializer

Renders the default-value argument of a setting as a canonical string.
The per-tag rules (the "->" and "." joiners, literal token versus node token)
are the output format; change them and existing output stops comparing equal.
"""

from typing import Callable

from src.ast.models import Node

NUMBER_LITERAL = "NumberLiteral"
BOOLEAN_LITERAL = "BooleanLiteral"
METHOD_INVOCATION = "MethodInvocation"
CLASS_INSTANCE_CREATION = "ClassInstanceCreation"
QUALIFIED_NAME = "QualifiedName"

PIECE_SEPARATOR = "->"
NAME_SEPARATOR = "."


def literal_token(node: Node) -> str:
    """The literal text of a number, preferring the parser's token attribute."""
    value = node.attributes.get("token")
    return str(value) if value is not None else node.token


def _number(node: Node) -> str:
    return literal_token(node)


def _boolean(node: Node) -> str:
    value = node.attributes.get("booleanValue")
    if value is None:
        return node.token
    if isinstance(value, str):
        return "true" if value.lower() == "true" else "false"
    return "true" if value else "false"


def _method_invocation(node: Node) -> str:
    pieces = []
    for child in node.children:
        if child.tag == NUMBER_LITERAL:
            pieces.append(literal_token(child))
        else:
            pieces.append(child.token)
    return PIECE_SEPARATOR.join(pieces)


def _class_instance_creation(node: Node) -> str:
    pieces = []
    for child in node.children:
        if child.tag == NUMBER_LITERAL:
            pieces.append(literal_token(child))
        elif child.tag == QUALIFIED_NAME:
            pieces.append(NAME_SEPARATOR.join(part.token for part in child.children))
    return PIECE_SEPARATOR.join(pieces)


SERIALIZERS: dict[str, Callable[[Node], str]] = {
    NUMBER_LITERAL: _number,
    BOOLEAN_LITERAL: _boolean,
    METHOD_INVOCATION: _method_invocation,
    CLASS_INSTANCE_CREATION: _class_instance_creation,
}


def serialize_default(node: Node) -> str:
    """
    Serialize a default-value node.

    Numbers give their literal token, booleans "true"/"false", invocations and
    instance creations a "->" joined list of their parts. Any other node
    (strings, plain or qualified names, expressions) gives its own token.

    Args:
        node: Second argument of the setting constructor or factory call

    Returns:
        Canonical string form
    """
    serializer = SERIALIZERS.get(node.tag)
    if serializer is None:
        return node.token
    return serializer(node)
