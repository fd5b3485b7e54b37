"""
Pytest fixtures for Setting Scan tests.
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path for src imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.configs.runtime import ENV_OVERRIDES  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's SETTINGSCAN_* variables out of the tests."""
    for name in list(ENV_OVERRIDES) + ["SETTINGSCAN_CONFIG", "SETTINGSCAN_LOG_FILE"]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


SAMPLE_JAVA = '''\
package org.example.index;

import org.elasticsearch.common.settings.Setting;
import org.elasticsearch.common.settings.Setting.Property;

public final class IndexSettings {
    public static final Setting<Integer> MAX_RESULT_WINDOW_SETTING =
        Setting.intSetting("index.max_result_window", 10000, 1, Property.Dynamic, Property.IndexScope);

    public static final Setting<Boolean> ALLOW_LEADING_WILDCARD =
        Setting.boolSetting("indices.query.query_string.allowLeadingWildcard", true, Setting.Property.NodeScope);

    public static final Setting<TimeValue> REFRESH_INTERVAL =
        Setting.timeSetting("index.refresh_interval", TimeValue.timeValueSeconds(1), Property.Dynamic);

    public static final Setting<ByteSizeValue> FLUSH_THRESHOLD_SIZE =
        new Setting<>("index.translog.flush_threshold_size", new ByteSizeValue(512, ByteSizeUnit.MB),
            ByteSizeValue::parse, Property.Dynamic, Property.IndexScope);

    public static final Setting<List<String>> DEFAULT_FIELD =
        Setting.listSetting("index.query.default_field", Collections.singletonList("*"),
            Function.identity(), Property.IndexScope);

    public static final Setting<String> INCOMPLETE = Setting.simpleString("index.incomplete");

    private final int notASetting = 5;
}
'''


@pytest.fixture
def sample_java_file(temp_dir: Path) -> Path:
    """Create a Java file declaring a mix of settings."""
    file_path = temp_dir / "org" / "example" / "index" / "IndexSettings.java"
    file_path.parent.mkdir(parents=True)
    file_path.write_text(SAMPLE_JAVA, encoding="utf-8")
    return file_path
