"""
Setting Record Extractor

Finds field declarations of the form

    public static final Setting<Boolean> ALLOW_LEADING_WILDCARD =
        Setting.boolSetting("indices.query.query_string.allowLeadingWildcard", true, Property.NodeScope);

    public static final Setting<Translog.Durability> INDEX_TRANSLOG_DURABILITY_SETTING =
        new Setting<>("index.translog.durability", Translog.Durability.REQUEST.name(), ...);

in a file's syntax tree and turns each one into a SettingRecord.
"""

from pathlib import Path
from typing import Optional, Union

from src.ast.models import Node
from src.ast.query import Query, child, compile_path, descendant, has_token, parent
from src.configs import DEFAULT_PROPERTY_ANCHOR_NAME, DEFAULT_SETTING_TYPE_NAME, get_logger
from src.extract.defaults import serialize_default
from src.extract.models import Diagnostic, FileResult, SettingRecord
from src.extract.properties import PropertyResolver

logger = get_logger("extract.settings")

MIN_ARGUMENTS = 3
TYPE_SEPARATOR = " of "

RAW_NAME_QUERY = compile_path("//FieldDeclaration/VariableDeclarationFragment/SimpleName")
TYPE_QUERY = compile_path(
    "//FieldDeclaration/ParameterizedType/SimpleType[@internalRole='typeArguments']/SimpleName"
)
NESTED_TYPE_QUERY = compile_path(
    "//FieldDeclaration/ParameterizedType/ParameterizedType[@internalRole='typeArguments']/*"
)
# Factory idiom: Setting.intSetting(...)
FACTORY_ARGUMENTS_QUERY = compile_path(
    "//FieldDeclaration/VariableDeclarationFragment/MethodInvocation/*[@internalRole='arguments']"
)
# Direct construction idiom: new Setting<>(...)
CONSTRUCTOR_ARGUMENTS_QUERY = compile_path(
    "//FieldDeclaration/VariableDeclarationFragment/ClassInstanceCreation/*[@internalRole='arguments']"
)


def relative_source_path(file_path: Union[str, Path], root_dir: Union[str, Path, None]) -> str:
    """
    Path of file_path relative to root_dir, with forward slashes.

    Files outside root_dir (or no root at all) keep their path as given.
    """
    path = Path(file_path)
    if root_dir is None:
        return path.as_posix()
    try:
        return path.resolve().relative_to(Path(root_dir).resolve()).as_posix()
    except ValueError:
        return path.as_posix()


class SettingExtractor:
    """
    Turns Setting field declarations into SettingRecords.

    Each lookup tries its alternatives in a fixed order: direct type argument
    before nested generics, factory arguments before constructor arguments,
    long property form before short form.
    """

    def __init__(
        self,
        setting_type_name: str = DEFAULT_SETTING_TYPE_NAME,
        property_anchor: str = DEFAULT_PROPERTY_ANCHOR_NAME,
    ):
        self.setting_type_name = setting_type_name
        self.candidate_query = Query([
            descendant("FieldDeclaration"),
            child("ParameterizedType"),
            child("SimpleType"),
            child("SimpleName").where(has_token(setting_type_name)),
            parent(),
            parent(),
            parent(),
        ])
        self.properties = PropertyResolver(property_anchor)

    # Candidate lookups

    def find_candidates(self, root: Node) -> list[Node]:
        """Field declarations whose declared type is Setting<...>."""
        return self.candidate_query.select(root)

    @staticmethod
    def get_raw_name(declaration: Node) -> str:
        """Name of the declared Java field, or "" if absent."""
        name = RAW_NAME_QUERY.first(declaration)
        return name.token if name is not None else ""

    @staticmethod
    def get_type(declaration: Node) -> str:
        """
        Value type of the setting.

        ``Setting<Integer>`` gives "Integer"; ``Setting<List<String>>`` gives
        "List of String".
        """
        simple = TYPE_QUERY.first(declaration)
        if simple is not None:
            return simple.token

        nested = []
        for node in NESTED_TYPE_QUERY.select(declaration):
            nested.append(node.children[0].token if node.children else "")
        return TYPE_SEPARATOR.join(nested)

    @staticmethod
    def get_arguments(declaration: Node) -> list[Node]:
        """Arguments of the factory call, else of the constructor call."""
        arguments = FACTORY_ARGUMENTS_QUERY.select(declaration)
        if arguments:
            return arguments
        return CONSTRUCTOR_ARGUMENTS_QUERY.select(declaration)

    # Extraction

    def extract_declaration(
        self,
        declaration: Node,
        source_file: str,
    ) -> tuple[Optional[SettingRecord], Optional[Diagnostic]]:
        """
        Build a record from one candidate declaration.

        Returns:
            (record, None) on success, (None, diagnostic) if the declaration
            has fewer than three arguments
        """
        raw_name = self.get_raw_name(declaration)
        setting_type = self.get_type(declaration)
        arguments = self.get_arguments(declaration)
        line = declaration.position.line

        if len(arguments) < MIN_ARGUMENTS:
            label = raw_name or "<unknown>"
            message = f"Problem with {label}: expected at least {MIN_ARGUMENTS} arguments, found {len(arguments)}"
            logger.warning(f"{source_file}:{line}: {message}")
            return None, Diagnostic(
                source_file=source_file,
                source_line=line,
                raw_name=raw_name,
                message=message,
            )

        record = SettingRecord(
            name=arguments[0].token,
            raw_name=raw_name,
            type=setting_type,
            properties=tuple(self.properties.resolve(arguments)),
            default_value=serialize_default(arguments[1]),
            source_line=line,
            source_file=source_file,
        )
        return record, None

    def extract(
        self,
        root: Node,
        file_path: Union[str, Path],
        root_dir: Union[str, Path, None] = None,
    ) -> FileResult:
        """
        Extract every setting declared in one file.

        Args:
            root: Syntax tree of the file
            file_path: Path of the file, for provenance
            root_dir: Scanned root; record paths are made relative to it

        Returns:
            FileResult with records and diagnostics in declaration order
        """
        source_file = relative_source_path(file_path, root_dir)
        result = FileResult()

        for declaration in self.find_candidates(root):
            record, diagnostic = self.extract_declaration(declaration, source_file)
            if record is not None:
                result.records.append(record)
            if diagnostic is not None:
                result.diagnostics.append(diagnostic)

        if result.records:
            logger.debug(f"{source_file}: {len(result.records)} settings")
        return result
