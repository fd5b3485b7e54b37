"""
Tests for the codebase walker, the run driver, output and the CLI.
"""

import json
import logging
from pathlib import Path

import pytest

from src.ast.models import Node
from src.ast.parser import TreeSource
from src.cli import EXIT_CONFIG_ERROR, EXIT_FILE_FAILURES, EXIT_OK, main
from src.configs import DEFAULT_CONFIG_YAML, get_full_config
from src.exceptions import OutputError, ParseError, TreeAcquisitionError
from src.extract import SettingExtractor, SettingRecord
from src.ingest import FileProcessor, extract_codebase, walk_codebase
from src.output import render_records, write_records
from tests.trees import compilation_unit, field, invocation, number, parameterized, qualified, simple_type, string


def setting_tree(key: str, line: int = 1) -> Node:
    return compilation_unit(
        field(
            key.upper().replace(".", "_"),
            parameterized("Setting", simple_type("Integer")),
            invocation("Setting", "intSetting", string(key), number("1"), qualified("Property", "NodeScope")),
            line=line,
        )
    )


class FakeTreeSource(TreeSource):
    """Serves prepared trees by file name; unknown names fail."""

    def __init__(self, trees: dict[str, Node]):
        self.trees = trees
        self.calls: list[str] = []

    def parse_file(self, file_path: Path) -> Node:
        self.calls.append(file_path.name)
        if file_path.name not in self.trees:
            raise ParseError(f"cannot parse {file_path.name}")
        return self.trees[file_path.name]


def write_java(root: Path, relative: str, content: str = "class X {}") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# =============================================================================
# Walker
# =============================================================================


class TestFileWalking:
    """Tests for file walking functionality."""

    def test_extension_filter(self, temp_dir: Path):
        write_java(temp_dir, "A.java")
        write_java(temp_dir, "notes.txt")
        write_java(temp_dir, "B.kt")

        files = list(walk_codebase(str(temp_dir)))
        assert [f.name for f in files] == ["A.java"]

    def test_no_extension_filter(self, temp_dir: Path):
        write_java(temp_dir, "A.java")
        write_java(temp_dir, "notes.txt")

        files = list(walk_codebase(str(temp_dir), extension=None))
        assert sorted(f.name for f in files) == ["A.java", "notes.txt"]

    def test_order_is_stable(self, temp_dir: Path):
        for relative in ["b/Z.java", "a/Y.java", "C.java", "a/X.java", "b/c/W.java"]:
            write_java(temp_dir, relative)

        files = [f.relative_to(temp_dir).as_posix() for f in walk_codebase(str(temp_dir))]
        assert files == ["C.java", "a/X.java", "a/Y.java", "b/Z.java", "b/c/W.java"]

    def test_ignores_build_and_hidden(self, temp_dir: Path):
        write_java(temp_dir, "src/A.java")
        write_java(temp_dir, "target/generated/B.java")
        write_java(temp_dir, ".git/C.java")
        write_java(temp_dir, "src/.Hidden.java")

        files = [f.name for f in walk_codebase(str(temp_dir))]
        assert files == ["A.java"]

    def test_extra_ignore_patterns(self, temp_dir: Path):
        write_java(temp_dir, "src/A.java")
        write_java(temp_dir, "test/ATests.java")

        files = [f.name for f in walk_codebase(str(temp_dir), ignore_patterns={"test"})]
        assert files == ["A.java"]

    def test_missing_root(self, temp_dir: Path):
        assert list(walk_codebase(str(temp_dir / "nope"))) == []


# =============================================================================
# Driver
# =============================================================================


class TestFileProcessor:
    """Per-file processing and merging."""

    def test_results_merged_in_traversal_order(self, temp_dir: Path):
        files = [write_java(temp_dir, "A.java"), write_java(temp_dir, "B.java")]
        source = FakeTreeSource({"A.java": setting_tree("a.key"), "B.java": setting_tree("b.key")})
        processor = FileProcessor(source, SettingExtractor(), temp_dir)

        result = processor.process_files(files)
        assert [r.name for r in result.records] == ["a.key", "b.key"]
        assert [r.source_file for r in result.records] == ["A.java", "B.java"]
        assert result.files_scanned == 2
        assert result.ok

    def test_failure_recorded_and_run_continues(self, temp_dir: Path):
        files = [write_java(temp_dir, name) for name in ("A.java", "Broken.java", "C.java")]
        source = FakeTreeSource({"A.java": setting_tree("a.key"), "C.java": setting_tree("c.key")})
        processor = FileProcessor(source, SettingExtractor(), temp_dir)

        result = processor.process_files(files)
        assert [r.name for r in result.records] == ["a.key", "c.key"]
        assert len(result.failures) == 1
        assert result.failures[0].source_file == "Broken.java"
        assert "cannot parse" in result.failures[0].error
        assert not result.ok
        assert result.summary()["failed_files"] == 1

    def test_fail_fast(self, temp_dir: Path):
        files = [write_java(temp_dir, name) for name in ("Broken.java", "C.java")]
        source = FakeTreeSource({"C.java": setting_tree("c.key")})
        processor = FileProcessor(source, SettingExtractor(), temp_dir, fail_fast=True)

        with pytest.raises(TreeAcquisitionError):
            processor.process_files(files)
        assert source.calls == ["Broken.java"]


class TestExtractCodebase:
    """Full runs over a directory."""

    def test_local_parser_run(self, sample_java_file: Path, temp_dir: Path):
        config = get_full_config({"root_directory": str(temp_dir)})
        result = extract_codebase(config)

        assert result.files_scanned == 1
        assert len(result.records) == 5
        assert {r.source_file for r in result.records} == {"org/example/index/IndexSettings.java"}
        assert [d.raw_name for d in result.diagnostics] == ["INCOMPLETE"]

    def test_injected_tree_source(self, temp_dir: Path):
        write_java(temp_dir, "A.java")
        config = get_full_config({"root_directory": str(temp_dir)})
        result = extract_codebase(config, tree_source=FakeTreeSource({"A.java": setting_tree("a.key")}))
        assert [r.name for r in result.records] == ["a.key"]

    def test_rerun_is_byte_identical(self, sample_java_file: Path, temp_dir: Path):
        config = get_full_config({"root_directory": str(temp_dir)})
        first = render_records(extract_codebase(config).records)
        second = render_records(extract_codebase(config).records)
        assert first == second


# =============================================================================
# Output
# =============================================================================


class TestOutput:
    """JSON rendering of records."""

    def test_field_names(self):
        record = SettingRecord(
            name="a.b",
            raw_name="A_B",
            type="Integer",
            properties=("Dynamic",),
            default_value="5",
            source_line=3,
            source_file="org/A.java",
        )
        [payload] = json.loads(render_records([record]))
        assert payload == {
            "name": "a.b",
            "rawName": "A_B",
            "type": "Integer",
            "properties": ["Dynamic"],
            "defaultValue": "5",
            "sourceLine": 3,
            "sourceFile": "org/A.java",
        }

    def test_empty_properties_present(self):
        [payload] = json.loads(render_records([SettingRecord(name="a", raw_name="A", type="String")]))
        assert payload["properties"] == []

    def test_write_records(self, temp_dir: Path):
        path = write_records([SettingRecord(name="a", raw_name="A", type="String")], temp_dir / "out" / "settings.json")
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8"))[0]["name"] == "a"
        assert path.read_text(encoding="utf-8").endswith("\n")

    def test_write_failure(self, temp_dir: Path):
        blocker = temp_dir / "file"
        blocker.write_text("x")
        with pytest.raises(OutputError):
            write_records([], blocker / "settings.json")


# =============================================================================
# CLI
# =============================================================================


class TestCli:
    """Command line entry point."""

    def test_successful_run(self, sample_java_file: Path, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(temp_dir)
        output = temp_dir / "settings.json"

        exit_code = main(["--root", str(temp_dir), "--output", str(output)])

        assert exit_code == EXIT_OK
        records = json.loads(output.read_text(encoding="utf-8"))
        assert [r["rawName"] for r in records][:2] == ["MAX_RESULT_WINDOW_SETTING", "ALLOW_LEADING_WILDCARD"]

    def test_unreadable_file_reported(self, sample_java_file: Path, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(temp_dir)
        (temp_dir / "Bad.java").write_bytes(b"class Bad { String s = \"\xff\"; }")
        output = temp_dir / "settings.json"

        exit_code = main(["--root", str(temp_dir), "--output", str(output)])

        assert exit_code == EXIT_FILE_FAILURES
        # Good files are still written
        assert len(json.loads(output.read_text(encoding="utf-8"))) == 5

    def test_failures_listed_in_summary(
        self, sample_java_file: Path, temp_dir: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ):
        monkeypatch.chdir(temp_dir)
        (temp_dir / "Bad.java").write_bytes(b"class Bad { String s = \"\xff\"; }")

        with caplog.at_level(logging.INFO, logger="settingscan"):
            main(["--root", str(temp_dir), "--output", str(temp_dir / "settings.json")])

        assert "5 settings from 2 files (1 skipped, 1 failed)" in caplog.text
        assert "Bad.java" in caplog.text

    def test_fail_fast_aborts(self, sample_java_file: Path, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(temp_dir)
        (temp_dir / "Bad.java").write_bytes(b"class Bad { String s = \"\xff\"; }")
        output = temp_dir / "settings.json"

        exit_code = main(["--root", str(temp_dir), "--output", str(output), "--fail-fast"])

        assert exit_code == EXIT_FILE_FAILURES
        assert not output.exists()

    def test_init_config(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(temp_dir)

        assert main(["--init-config"]) == EXIT_OK
        config_path = temp_dir / "settingscan.yaml"
        assert config_path.read_text(encoding="utf-8") == DEFAULT_CONFIG_YAML

        config_path.write_text("debug: true\n", encoding="utf-8")
        assert main(["--init-config"]) == EXIT_OK
        assert config_path.read_text(encoding="utf-8") == "debug: true\n"
        assert not (temp_dir / "settings.json").exists()

    def test_init_config_explicit_path(self, temp_dir: Path):
        config_path = temp_dir / "conf" / "scan.yaml"
        assert main(["--init-config", "--config", str(config_path)]) == EXIT_OK
        assert config_path.exists()

    def test_configuration_error(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(temp_dir)
        (temp_dir / "settingscan.yaml").write_text("- not\n- a mapping\n")

        assert main([]) == EXIT_CONFIG_ERROR
