"""
Syntax Trees

Node model, path queries over trees, and the two ways of obtaining a tree
for a Java file: local tree-sitter parsing or a remote parsing service.
"""

from src.ast.models import Node, Position
from src.ast.parser import JavaTreeBuilder, TreeSource, get_tree_builder
from src.ast.query import (
    Query,
    Step,
    child,
    compile_path,
    descendant,
    has_attribute,
    has_role,
    has_tag,
    has_token,
    parent,
    select,
    select_first,
)
from src.ast.service import ParsingServiceClient

__all__ = [
    # Models
    "Node",
    "Position",
    # Tree sources
    "TreeSource",
    "JavaTreeBuilder",
    "ParsingServiceClient",
    "get_tree_builder",
    # Queries
    "Query",
    "Step",
    "child",
    "descendant",
    "parent",
    "has_tag",
    "has_token",
    "has_role",
    "has_attribute",
    "compile_path",
    "select",
    "select_first",
]
