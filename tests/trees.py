"""
Hand-built syntax trees in the shape the Java tree builder produces.
"""

from src.ast.models import Node, Position


def name(token: str, role: str | None = None) -> Node:
    return Node("SimpleName", token=token, role=role)


def simple_type(type_name: str, role: str | None = "type") -> Node:
    return Node("SimpleType", role=role, children=[name(type_name, "name")])


def parameterized(base: str, *arguments: Node, role: str | None = "type") -> Node:
    children = [simple_type(base, "type")]
    for argument in arguments:
        argument.role = "typeArguments"
        children.append(argument)
    return Node("ParameterizedType", role=role, children=children)


def qualified(*parts: str, role: str | None = "arguments") -> Node:
    """Left-nested QualifiedName: ("A", "B", "C") is (A.B).C."""
    node = name(parts[0], "qualifier")
    for index, part in enumerate(parts[1:], start=2):
        node = Node(
            "QualifiedName",
            token=".".join(parts[:index]),
            role="qualifier",
            children=[node, name(part, "name")],
        )
    node.role = role
    return node


def number(text: str, role: str | None = "arguments") -> Node:
    return Node("NumberLiteral", token=text, role=role, attributes={"token": text})


def boolean(value: bool, role: str | None = "arguments") -> Node:
    return Node(
        "BooleanLiteral",
        token="true" if value else "false",
        role=role,
        attributes={"booleanValue": value},
    )


def string(value: str, role: str | None = "arguments") -> Node:
    return Node("StringLiteral", token=value, role=role, attributes={"escapedValue": f'"{value}"'})


def invocation(receiver: str, method: str, *arguments: Node, role: str | None = "initializer") -> Node:
    children = [name(receiver, "expression"), name(method, "name")]
    for argument in arguments:
        argument.role = "arguments"
        children.append(argument)
    return Node("MethodInvocation", role=role, children=children)


def creation(type_node: Node, *arguments: Node, role: str | None = "initializer") -> Node:
    type_node.role = "type"
    children = [type_node]
    for argument in arguments:
        argument.role = "arguments"
        children.append(argument)
    return Node("ClassInstanceCreation", role=role, children=children)


def field(raw_name: str, type_node: Node, initializer: Node | None, line: int = 1) -> Node:
    type_node.role = "type"
    fragment = Node("VariableDeclarationFragment", role="fragments", children=[name(raw_name, "name")])
    if initializer is not None:
        initializer.role = "initializer"
        fragment.children.append(initializer)
    return Node(
        "FieldDeclaration",
        children=[
            Node("Modifier", token="public", role="modifiers"),
            Node("Modifier", token="static", role="modifiers"),
            type_node,
            fragment,
        ],
        position=Position(line=line, column=5),
    )


def compilation_unit(*declarations: Node) -> Node:
    body = Node("ClassBody", role="body", children=list(declarations))
    type_declaration = Node("TypeDeclaration", children=[name("Settings", "name"), body])
    return Node("CompilationUnit", children=[type_declaration], position=Position(1, 1))
