"""End-to-end behaviour of the ``ConfigManager`` facade."""

from __future__ import annotations

import string
from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from unified_config import (
    AdapterRegistry,
    ConfigManager,
    InvalidFormat,
    InvalidPath,
    JSONConfigAdapter,
    NotFound,
    UnsupportedFormat,
)
from unified_config.adapters.file_adapters import structured as structured_module
from tests.support import GARBAGE_SAMPLE, INI_SAMPLE, JSON_SAMPLE, TOML_SAMPLE, XML_SAMPLE, YAML_SAMPLE, write

FORMATS = [
    pytest.param("xml", XML_SAMPLE, id="xml"),
    pytest.param("ini", INI_SAMPLE, id="ini"),
    pytest.param("json", JSON_SAMPLE, id="json"),
    pytest.param("toml", TOML_SAMPLE, id="toml"),
    pytest.param(
        "yaml",
        YAML_SAMPLE,
        id="yaml",
        marks=pytest.mark.skipif(structured_module.yaml is None, reason="PyYAML not available"),
    ),
]

GETTABLE = {
    "xml": ["/config/general/interval", "/config/general/empty", "//config/tick[@type='origin']", "/config/tick/@type"],
    "ini": ["/config/master", "/general/interval"],
    "json": ["/config/master", "/general/interval", "/general/ports/1", "/general"],
    "toml": ["/config/master", "/general/interval", "/general/ports/1", "/general"],
    "yaml": ["/config/master", "/general/interval", "/general/ports/1", "/general"],
}

FIELD = st.text(alphabet=string.ascii_letters, min_size=1, max_size=8)
VALUE = st.text(alphabet=string.ascii_letters + string.digits + " -_.", max_size=20)
NO_FIXTURE_RESET = settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=40, deadline=None)


@pytest.mark.parametrize(("extension", "content"), FORMATS)
def test_extension_selects_matching_adapter(tmp_path: Path, extension: str, content: str) -> None:
    manager = ConfigManager(write(tmp_path, f"CONFIG.{extension.upper()}", content))
    assert manager.format_name == extension


def test_scenario_json_key_sequence(tmp_path: Path) -> None:
    manager = ConfigManager(str(write(tmp_path, "config.json", '{"config":{"master":"true"}}')))
    assert manager.get_value("config", "master") == "true"


def test_scenario_xml_root_anchored(tmp_path: Path) -> None:
    path = write(tmp_path, "config.xml", "<config><general><interval>30</interval></general></config>")
    assert ConfigManager(str(path))["/config/general/interval"] == "30"


def test_scenario_xml_predicate(tmp_path: Path) -> None:
    path = write(tmp_path, "config.xml", '<config><tick type="origin">5</tick></config>')
    assert ConfigManager(str(path))["//config/tick[@type='origin']"] == "5"


def test_scenario_unknown_extension_with_ini_content(tmp_path: Path) -> None:
    path = write(tmp_path, "config.cfg", INI_SAMPLE)
    manager = ConfigManager(str(path))
    assert manager.format_name == "ini"
    assert manager.get_value("general", "interval") == "30"
    assert manager.set_value("45", "general", "interval") is True
    assert manager["general/interval"] == "45"
    manager.save()
    assert "interval = 45" in path.read_text(encoding="utf-8")


def test_scenario_unknown_extension_with_unreadable_content(tmp_path: Path) -> None:
    with pytest.raises(UnsupportedFormat, match="Unexpected file type"):
        ConfigManager(str(write(tmp_path, "config.cfg", GARBAGE_SAMPLE)))


def test_known_extension_with_malformed_content_is_a_parse_error(tmp_path: Path) -> None:
    with pytest.raises(InvalidFormat):
        ConfigManager(str(write(tmp_path, "config.json", INI_SAMPLE)))


def test_excessively_nested_document_is_a_parse_error_on_both_dispatch_paths(tmp_path: Path) -> None:
    depth = 50_000
    content = '{"a":' * depth + "1" + "}" * depth
    with pytest.raises(InvalidFormat):
        ConfigManager(str(write(tmp_path, "deep.json", content)))
    with pytest.raises(UnsupportedFormat):
        ConfigManager(str(write(tmp_path, "deep.cfg", content)))


@pytest.mark.parametrize("name", ["missing.json", "missing.cfg"])
def test_missing_file_is_not_found(tmp_path: Path, name: str) -> None:
    with pytest.raises(NotFound):
        ConfigManager(str(tmp_path / name))


def test_wraps_existing_adapter(tmp_path: Path) -> None:
    adapter = JSONConfigAdapter(str(write(tmp_path, "settings.data", JSON_SAMPLE)))
    manager = ConfigManager(adapter)
    assert manager.adapter is adapter
    assert manager.source_path == adapter.source_path
    assert manager.get_value("config", "master") == "true"


def test_rejects_unsupported_source_type() -> None:
    with pytest.raises(TypeError):
        ConfigManager(42)  # type: ignore[arg-type]


def test_absent_paths_never_raise(tmp_path: Path) -> None:
    manager = ConfigManager(write(tmp_path, "config.xml", XML_SAMPLE))
    assert manager["/config/nothing"] is None
    assert manager.get("//[broken") is None
    assert manager.get_value("config", "nothing") is None


def test_item_assignment_raises_on_invalid_path(tmp_path: Path) -> None:
    manager = ConfigManager(write(tmp_path, "config.json", JSON_SAMPLE))
    manager["/general/timeout"] = "10"
    assert manager["/general/timeout"] == "10"
    with pytest.raises(InvalidPath):
        manager["/config/master/deeper"] = "x"
    assert manager.set("/config/master/deeper", "x") is False


def test_save_to_explicit_path_leaves_source_untouched(tmp_path: Path) -> None:
    source = write(tmp_path, "config.ini", INI_SAMPLE)
    manager = ConfigManager(source)
    manager.set_value("false", "config", "master")
    target = tmp_path / "out" / "copy.ini"
    target.parent.mkdir()
    manager.save(target)
    assert source.read_text(encoding="utf-8") == INI_SAMPLE
    assert ConfigManager(target).get_value("config", "master") == "false"


def test_unsaved_changes_do_not_touch_the_file(tmp_path: Path) -> None:
    source = write(tmp_path, "config.json", JSON_SAMPLE)
    manager = ConfigManager(source)
    manager.set_value("false", "config", "master")
    assert source.read_text(encoding="utf-8") == JSON_SAMPLE


@pytest.mark.parametrize(("extension", "content"), FORMATS)
def test_load_save_round_trip_preserves_values(tmp_path: Path, extension: str, content: str) -> None:
    path = write(tmp_path, f"config.{extension}", content)
    before = {query: ConfigManager(path)[query] for query in GETTABLE[extension]}
    assert all(value is not None for value in before.values())

    ConfigManager(path).save()

    reloaded = ConfigManager(path)
    assert {query: reloaded[query] for query in GETTABLE[extension]} == before


@NO_FIXTURE_RESET
@given(keys=st.lists(FIELD, min_size=1, max_size=3), value=VALUE)
def test_json_set_then_get(tmp_path: Path, keys: list[str], value: str) -> None:
    manager = ConfigManager(write(tmp_path, "config.json", "{}"))
    assert manager.set_value(value, *keys) is True
    assert manager.get_value(*keys) == value
    assert manager["/".join(keys)] == value


@NO_FIXTURE_RESET
@given(section=FIELD, option=FIELD, value=VALUE)
def test_ini_set_then_get(tmp_path: Path, section: str, option: str, value: str) -> None:
    manager = ConfigManager(write(tmp_path, "config.ini", INI_SAMPLE))
    assert manager.set_value(value, section, option) is True
    assert manager.get_value(section, option) == value


@NO_FIXTURE_RESET
@given(children=st.lists(FIELD, min_size=1, max_size=3), value=VALUE)
def test_xml_set_then_get(tmp_path: Path, children: list[str], value: str) -> None:
    manager = ConfigManager(write(tmp_path, "config.xml", XML_SAMPLE))
    assert manager.set_value(value, "config", *children) is True
    assert manager.get_value("config", *children) == value
    assert manager["/config/" + "/".join(children)] == value


@pytest.mark.parametrize(
    ("extension", "content", "query"),
    [
        ("xml", XML_SAMPLE, "//config/tick[@type='target']"),
        ("xml", XML_SAMPLE, "/config/general/retry/@count"),
        ("ini", INI_SAMPLE, "/network/port"),
        ("json", JSON_SAMPLE, "/network/http/port"),
        ("toml", TOML_SAMPLE, "/network/http/port"),
    ],
)
def test_set_is_idempotent(tmp_path: Path, extension: str, content: str, query: str) -> None:
    once = ConfigManager(write(tmp_path, f"once.{extension}", content))
    twice = ConfigManager(write(tmp_path, f"twice.{extension}", content))

    assert once.set(query, "9") is True
    assert twice.set(query, "9") is True
    assert twice.set(query, "9") is True
    once.save()
    twice.save()

    assert Path(once.source_path).read_bytes() == Path(twice.source_path).read_bytes()
    assert twice[query] == "9"


def test_custom_registry_controls_dispatch(tmp_path: Path) -> None:
    registry = AdapterRegistry()
    registry.register(JSONConfigAdapter, ".settings")
    manager = ConfigManager(write(tmp_path, "app.settings", JSON_SAMPLE), registry=registry)
    assert manager.format_name == "json"
    with pytest.raises(UnsupportedFormat):
        ConfigManager(write(tmp_path, "app.ini", INI_SAMPLE), registry=AdapterRegistry())
