"""
Tree-sitter Java Tree Builder

Parses Java source with tree-sitter and converts the concrete syntax tree into
the JDT-style Node shape the query engine works on. Only the constructs used
by setting definitions get dedicated conversions (field declarations, generic
types, invocations, instance creations, names and literals); everything else
is converted generically so descendant searches still see it.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import tree_sitter_java
from tree_sitter import Language, Parser
from tree_sitter import Node as TSNode

from src.ast.models import Node, Position
from src.configs import get_logger
from src.exceptions import ParseError

logger = get_logger("ast.parser")


class TreeSource(ABC):
    """Anything that can turn a source file into a syntax tree."""

    @abstractmethod
    def parse_file(self, file_path: Path) -> Node:
        """
        Produce the syntax tree of one file.

        Raises:
            TreeAcquisitionError: The tree could not be produced
        """
        pass


# tree-sitter node type -> tag, where the JDT name differs from CamelCase
TAG_NAMES = {
    "program": "CompilationUnit",
    "class_declaration": "TypeDeclaration",
    "interface_declaration": "TypeDeclaration",
}

NUMBER_LITERALS = {
    "decimal_integer_literal",
    "hex_integer_literal",
    "octal_integer_literal",
    "binary_integer_literal",
    "decimal_floating_point_literal",
    "hex_floating_point_literal",
}

PRIMITIVE_TYPES = {"integral_type", "floating_point_type", "boolean_type", "void_type"}

COMMENT_TYPES = {"line_comment", "block_comment", "comment"}


def _camel_case(type_name: str) -> str:
    return "".join(part.capitalize() for part in type_name.split("_"))


class JavaTreeBuilder(TreeSource):
    """
    Tree-sitter based Java tree builder.

    Lazily initializes the parser on first use.
    """

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Raise ParseError when tree-sitter reports syntax errors
                    instead of converting the partial tree.
        """
        self.strict = strict
        self._parser: Optional[Parser] = None

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(Language(tree_sitter_java.language()))
        return self._parser

    def parse(self, source: str, file_path: str = "<string>") -> Node:
        """
        Parse Java source into a Node tree.

        Args:
            source: Java source code
            file_path: Used in log and error messages only

        Returns:
            CompilationUnit root node

        Raises:
            ParseError: Syntax errors in strict mode, or a tree too deep to convert
        """
        source_bytes = source.encode("utf-8")
        tree = self._get_parser().parse(source_bytes)
        root = tree.root_node

        if root.has_error:
            if self.strict:
                raise ParseError(f"Syntax errors in {file_path}", details={"file": file_path})
            logger.debug(f"Syntax errors in {file_path}, converting partial tree")

        try:
            return _Converter(source_bytes).convert(root)
        except RecursionError as e:
            raise ParseError(f"Syntax tree too deep: {file_path}", details={"file": file_path}) from e

    def parse_file(self, file_path: Path) -> Node:
        """
        Parse a Java file into a Node tree.

        Raises:
            ParseError: File unreadable or not valid UTF-8 (or syntax errors in strict mode)
        """
        try:
            content = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Failed to read file {file_path}: {e}", details={"file": str(file_path)}) from e

        return self.parse(content, str(file_path))


class _Converter:
    """Converts one tree-sitter tree; holds the source bytes for text slicing."""

    def __init__(self, source: bytes):
        self.source = source

    # Helper methods

    def text(self, node: TSNode) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def position(node: TSNode) -> Position:
        return Position(line=node.start_point[0] + 1, column=node.start_point[1] + 1)

    @staticmethod
    def named_children(node: TSNode) -> list[TSNode]:
        return [c for c in node.children if c.is_named and c.type not in COMMENT_TYPES]

    def make(self, ts_node: TSNode, tag: str, role: Optional[str], literal: str = "", **attributes) -> Node:
        return Node(
            tag=tag,
            token=literal,
            role=role,
            attributes=attributes,
            position=self.position(ts_node),
        )

    # Dispatch

    def convert(self, node: TSNode, role: Optional[str] = None) -> Node:
        handler = getattr(self, f"_convert_{node.type}", None)
        if handler is not None:
            return handler(node, role)
        if node.type in NUMBER_LITERALS:
            text = self.text(node)
            return self.make(node, "NumberLiteral", role, text, token=text)
        if node.type in PRIMITIVE_TYPES:
            return self.make(node, "PrimitiveType", role, self.text(node))
        return self._convert_generic(node, role)

    def _convert_generic(self, node: TSNode, role: Optional[str]) -> Node:
        result = self.make(node, TAG_NAMES.get(node.type, _camel_case(node.type)), role)

        cursor = node.walk()
        if cursor.goto_first_child():
            while True:
                current = cursor.node
                if current.is_named and current.type not in COMMENT_TYPES:
                    result.children.append(self.convert(current, cursor.field_name))
                if not cursor.goto_next_sibling():
                    break

        if not result.children:
            result.token = self.text(node)
        return result

    # Declarations

    def _convert_field_declaration(self, node: TSNode, role: Optional[str]) -> Node:
        result = self.make(node, "FieldDeclaration", role)

        for child_node in node.children:
            if child_node.type == "modifiers":
                result.children.extend(self._modifiers(child_node))

        type_node = node.child_by_field_name("type")
        if type_node is not None:
            result.children.append(self.convert_type(type_node, "type"))

        for declarator in node.children_by_field_name("declarator"):
            result.children.append(self._fragment(declarator))
        return result

    # Interface constants are field declarations too
    _convert_constant_declaration = _convert_field_declaration

    def _modifiers(self, node: TSNode) -> list[Node]:
        modifiers = []
        for child_node in node.children:
            if child_node.type in COMMENT_TYPES:
                continue
            if child_node.is_named:
                modifiers.append(self.convert(child_node, "modifiers"))
            else:
                modifiers.append(self.make(child_node, "Modifier", "modifiers", self.text(child_node)))
        return modifiers

    def _fragment(self, node: TSNode) -> Node:
        result = self.make(node, "VariableDeclarationFragment", "fragments")
        name_node = node.child_by_field_name("name")
        if name_node is not None:
            result.children.append(self.make(name_node, "SimpleName", "name", self.text(name_node)))
        value_node = node.child_by_field_name("value")
        if value_node is not None:
            result.children.append(self.convert(value_node, "initializer"))
        return result

    # Types

    def convert_type(self, node: TSNode, role: Optional[str]) -> Node:
        if node.type == "type_identifier":
            result = self.make(node, "SimpleType", role)
            result.children.append(self.make(node, "SimpleName", "name", self.text(node)))
            return result

        if node.type == "scoped_type_identifier":
            result = self.make(node, "SimpleType", role)
            result.children.append(self._scoped_type_name(node, "name"))
            return result

        if node.type == "generic_type":
            result = self.make(node, "ParameterizedType", role)
            for child_node in self.named_children(node):
                if child_node.type == "type_arguments":
                    for argument in self.named_children(child_node):
                        result.children.append(self.convert_type(argument, "typeArguments"))
                else:
                    result.children.append(self.convert_type(child_node, "type"))
            return result

        if node.type in PRIMITIVE_TYPES:
            return self.make(node, "PrimitiveType", role, self.text(node))

        if node.type == "wildcard":
            result = self.make(node, "WildcardType", role, "?")
            for child_node in self.named_children(node):
                result.children.append(self.convert_type(child_node, "bound"))
            return result

        if node.type == "array_type":
            result = self.make(node, "ArrayType", role)
            element = node.child_by_field_name("element")
            if element is not None:
                result.children.append(self.convert_type(element, "elementType"))
            return result

        return self.convert(node, role)

    def _scoped_type_name(self, node: TSNode, role: Optional[str]) -> Node:
        parts = self.named_children(node)
        if len(parts) < 2:
            return self.make(node, "SimpleName", role, self.text(node))
        qualifier, name = parts[0], parts[-1]
        result = self.make(node, "QualifiedName", role, "".join(self.text(node).split()))
        if qualifier.type == "scoped_type_identifier":
            result.children.append(self._scoped_type_name(qualifier, "qualifier"))
        else:
            result.children.append(self.make(qualifier, "SimpleName", "qualifier", self.text(qualifier)))
        result.children.append(self.make(name, "SimpleName", "name", self.text(name)))
        return result

    # Names

    def _convert_identifier(self, node: TSNode, role: Optional[str]) -> Node:
        return self.make(node, "SimpleName", role, self.text(node))

    def _convert_type_identifier(self, node: TSNode, role: Optional[str]) -> Node:
        return self.convert_type(node, role)

    def _convert_generic_type(self, node: TSNode, role: Optional[str]) -> Node:
        return self.convert_type(node, role)

    def _is_name_chain(self, node: TSNode) -> bool:
        if node.type in ("identifier", "scoped_identifier"):
            return True
        if node.type != "field_access":
            return False
        obj = node.child_by_field_name("object")
        field = node.child_by_field_name("field")
        return (
            obj is not None
            and field is not None
            and field.type == "identifier"
            and self._is_name_chain(obj)
        )

    def _qualified_name(self, node: TSNode, qualifier: TSNode, name: TSNode, role: Optional[str]) -> Node:
        result = self.make(node, "QualifiedName", role, "".join(self.text(node).split()))
        result.children.append(self.convert(qualifier, "qualifier"))
        result.children.append(self.make(name, "SimpleName", "name", self.text(name)))
        return result

    def _convert_field_access(self, node: TSNode, role: Optional[str]) -> Node:
        obj = node.child_by_field_name("object")
        field = node.child_by_field_name("field")
        if self._is_name_chain(node):
            return self._qualified_name(node, obj, field, role)

        result = self.make(node, "FieldAccess", role)
        if obj is not None:
            result.children.append(self.convert(obj, "expression"))
        if field is not None:
            result.children.append(self.make(field, "SimpleName", "name", self.text(field)))
        return result

    def _convert_scoped_identifier(self, node: TSNode, role: Optional[str]) -> Node:
        scope = node.child_by_field_name("scope")
        name = node.child_by_field_name("name")
        if scope is None or name is None:
            return self._convert_generic(node, role)
        return self._qualified_name(node, scope, name, role)

    # Expressions

    def _convert_method_invocation(self, node: TSNode, role: Optional[str]) -> Node:
        result = self.make(node, "MethodInvocation", role)

        obj = node.child_by_field_name("object")
        if obj is not None:
            result.children.append(self.convert(obj, "expression"))

        type_arguments = node.child_by_field_name("type_arguments")
        if type_arguments is not None:
            for argument in self.named_children(type_arguments):
                result.children.append(self.convert_type(argument, "typeArguments"))

        name = node.child_by_field_name("name")
        if name is not None:
            result.children.append(self.make(name, "SimpleName", "name", self.text(name)))

        arguments = node.child_by_field_name("arguments")
        if arguments is not None:
            for argument in self.named_children(arguments):
                result.children.append(self.convert(argument, "arguments"))
        return result

    def _convert_object_creation_expression(self, node: TSNode, role: Optional[str]) -> Node:
        result = self.make(node, "ClassInstanceCreation", role)

        type_node = node.child_by_field_name("type")
        for child_node in self.named_children(node):
            if type_node is not None and child_node.start_byte >= type_node.start_byte:
                break
            # Qualified creation: outer.new Inner()
            if child_node.type != "type_arguments":
                result.children.append(self.convert(child_node, "expression"))

        if type_node is not None:
            result.children.append(self.convert_type(type_node, "type"))

        arguments = node.child_by_field_name("arguments")
        if arguments is not None:
            for argument in self.named_children(arguments):
                result.children.append(self.convert(argument, "arguments"))

        for child_node in self.named_children(node):
            if child_node.type == "class_body":
                result.children.append(self.convert(child_node, "anonymousClassDeclaration"))
        return result

    def _convert_unary_expression(self, node: TSNode, role: Optional[str]) -> Node:
        operator = node.child_by_field_name("operator")
        result = self.make(
            node,
            "PrefixExpression",
            role,
            "".join(self.text(node).split()),
            operator=self.text(operator) if operator is not None else "",
        )
        operand = node.child_by_field_name("operand")
        if operand is not None:
            result.children.append(self.convert(operand, "operand"))
        return result

    def _convert_binary_expression(self, node: TSNode, role: Optional[str]) -> Node:
        operator = node.child_by_field_name("operator")
        result = self.make(
            node,
            "InfixExpression",
            role,
            self.text(node),
            operator=self.text(operator) if operator is not None else "",
        )
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if left is not None:
            result.children.append(self.convert(left, "leftOperand"))
        if right is not None:
            result.children.append(self.convert(right, "rightOperand"))
        return result

    def _convert_parenthesized_expression(self, node: TSNode, role: Optional[str]) -> Node:
        result = self.make(node, "ParenthesizedExpression", role, self.text(node))
        for child_node in self.named_children(node):
            result.children.append(self.convert(child_node, "expression"))
        return result

    # Literals

    def _convert_string_literal(self, node: TSNode, role: Optional[str]) -> Node:
        raw = self.text(node)
        if raw.startswith('"""') and raw.endswith('"""') and len(raw) >= 6:
            value = raw[3:-3]
        elif raw.startswith('"') and raw.endswith('"') and len(raw) >= 2:
            value = raw[1:-1]
        else:
            value = raw
        return self.make(node, "StringLiteral", role, value, escapedValue=raw)

    def _convert_character_literal(self, node: TSNode, role: Optional[str]) -> Node:
        raw = self.text(node)
        return self.make(node, "CharacterLiteral", role, raw, escapedValue=raw)

    def _convert_true(self, node: TSNode, role: Optional[str]) -> Node:
        return self.make(node, "BooleanLiteral", role, "true", booleanValue=True)

    def _convert_false(self, node: TSNode, role: Optional[str]) -> Node:
        return self.make(node, "BooleanLiteral", role, "false", booleanValue=False)

    def _convert_null_literal(self, node: TSNode, role: Optional[str]) -> Node:
        return self.make(node, "NullLiteral", role, "null")


# Global builder instance (lazy singleton)
_builder: Optional[JavaTreeBuilder] = None


def get_tree_builder() -> JavaTreeBuilder:
    """Get the global JavaTreeBuilder instance."""
    global _builder
    if _builder is None:
        _builder = JavaTreeBuilder()
    return _builder
