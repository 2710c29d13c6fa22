import json
from pathlib import Path

import pytest
import tomli
import yaml

from scoped_config_manager import (
    CheckboxWidget,
    FileStore,
    MemoryStore,
    PreferenceStore,
    ResolverConfig,
    SettingDef,
    SettingRegistry,
    SettingsResolver,
    StoreError,
    WidgetToolkit,
    query_param,
    widget,
)


def _registry():
    return SettingRegistry(
        [
            SettingDef("language", "en", controls=[query_param("get", "lang")]),
            SettingDef("stickychat", False),
        ]
    )


def test_stores_satisfy_protocol(tmp_path: Path):
    assert isinstance(MemoryStore(), PreferenceStore)
    assert isinstance(FileStore(tmp_path / "p.json"), PreferenceStore)


def test_file_store_json_round_trip_keeps_other_slots(tmp_path: Path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"other": {"x": {"local": 1}}}))
    store = FileStore(path)

    store.save("epl_prefs", {"language": {"local": "de"}})

    data = json.loads(path.read_text())
    assert data == {"other": {"x": {"local": 1}}, "epl_prefs": {"language": {"local": "de"}}}
    assert store.load("epl_prefs") == {"language": {"local": "de"}}
    assert store.load("missing") is None


def test_file_store_yaml_and_toml(tmp_path: Path):
    yaml_store = FileStore(tmp_path / "prefs.yaml")
    toml_store = FileStore(tmp_path / "prefs.toml")
    payload = {"language": {"local": "fr"}, "rtl": {}}

    yaml_store.save("epl_prefs", payload)
    toml_store.save("epl_prefs", payload)

    assert yaml.safe_load((tmp_path / "prefs.yaml").read_text())["epl_prefs"] == payload
    assert tomli.loads((tmp_path / "prefs.toml").read_text())["epl_prefs"] == payload
    assert toml_store.load("epl_prefs") == payload


def test_explicit_format_overrides_suffix(tmp_path: Path):
    path = tmp_path / "prefs.cfg"
    FileStore(path, file_format="yaml").save("k", {"a": {"local": "b"}})
    assert yaml.safe_load(path.read_text()) == {"k": {"a": {"local": "b"}}}


def test_corrupt_file_reads_as_nothing(tmp_path: Path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json")
    store = FileStore(path)
    assert store.load("epl_prefs") is None

    store.save("epl_prefs", {"a": {"local": "b"}})
    assert json.loads(path.read_text()) == {"epl_prefs": {"a": {"local": "b"}}}


def test_unwritable_location_raises_store_error(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store = FileStore(blocker / "prefs.json")
    with pytest.raises(StoreError):
        store.save("k", {})


def test_resolver_persists_local_scope_to_file(tmp_path: Path):
    path = tmp_path / "prefs.json"
    resolver = SettingsResolver(_registry(), query={"lang": "de"}, store=FileStore(path))
    resolver.load_settings()

    assert json.loads(path.read_text())["epl_prefs"] == {"language": {"local": "en"}, "stickychat": {}}

    resolver.set_value("stickychat", "local", True)
    assert json.loads(path.read_text())["epl_prefs"]["stickychat"] == {"local": True}


def test_persist_failure_is_reported_not_raised(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    resolver = SettingsResolver(_registry(), store=FileStore(blocker / "prefs.json"))
    resolver.load_settings()
    assert resolver.loaded
    assert resolver.persist() is False


def test_persist_without_store():
    resolver = SettingsResolver(_registry())
    resolver.load_settings()
    assert resolver.persist() is False


def test_custom_store_key():
    store = MemoryStore()
    resolver = SettingsResolver(_registry(), store=store, config=ResolverConfig(store_key="prefs"))
    resolver.load_settings()
    assert store.load("epl_prefs") is None
    assert store.load("prefs")["language"] == {"local": "en"}


def test_restore_saved_seeds_local_scope():
    store = MemoryStore({"epl_prefs": {"stickychat": {"local": True}, "language": {}}})
    resolver = SettingsResolver(_registry(), store=store, config=ResolverConfig(restore_saved=True))
    resolver.load_settings()

    assert resolver.get_value("stickychat") is True
    assert resolver.get_value("language") == "en"


def test_saved_values_ignored_by_default():
    store = MemoryStore({"epl_prefs": {"stickychat": {"local": True}}})
    resolver = SettingsResolver(_registry(), store=store)
    resolver.load_settings()
    assert resolver.get_value("stickychat") is False


def test_config_from_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("SCOPED_CONFIG_STORE_KEY", "site_prefs")
    monkeypatch.setenv("SCOPED_CONFIG_STORE_PATH", str(tmp_path / "p.yaml"))
    monkeypatch.setenv("SCOPED_CONFIG_IGNORED_SCOPES", '["global"]')
    monkeypatch.setenv("SCOPED_CONFIG_RESTORE_SAVED", "true")

    cfg = ResolverConfig()
    assert cfg.store_key == "site_prefs"
    assert cfg.store_path == tmp_path / "p.yaml"
    assert cfg.ignored_scopes == ["global"]
    assert cfg.restore_saved is True


def test_default_config():
    cfg = ResolverConfig()
    assert cfg.store_key == "epl_prefs"
    assert cfg.store_path.name == "prefs.json"
    assert cfg.ignored_scopes == []


def test_config_builds_file_store(monkeypatch, tmp_path: Path):
    path = tmp_path / "prefs.cfg"
    monkeypatch.setenv("SCOPED_CONFIG_STORE_PATH", str(path))
    monkeypatch.setenv("SCOPED_CONFIG_STORE_FORMAT", "yaml")
    cfg = ResolverConfig()

    resolver = SettingsResolver(_registry(), store=cfg.file_store(), config=cfg)
    resolver.load_settings()

    assert resolver.persist() is True
    assert yaml.safe_load(path.read_text())["epl_prefs"]["language"] == {"local": "en"}


def _checkbox_resolver(store, **config):
    registry = SettingRegistry(
        [
            SettingDef("showLineNumbers", True, controls=[widget("local", "lineno")]),
            SettingDef("language", "en"),
        ]
    )
    toolkit = WidgetToolkit([CheckboxWidget("lineno")])
    resolver = SettingsResolver(
        registry, toolkit=toolkit, store=store, config=ResolverConfig(**config)
    )
    resolver.load_settings()
    resolver.connect_widgets()
    return resolver, toolkit


def test_restore_keeps_unchecked_checkbox():
    store = MemoryStore()
    _, toolkit = _checkbox_resolver(store)
    toolkit["lineno"].user_change(False)
    assert store.load("epl_prefs")["showLineNumbers"] == {}

    restored, toolkit = _checkbox_resolver(store, restore_saved=True)
    assert restored.get_value("showLineNumbers") is False
    assert toolkit["lineno"].checked is False


def test_restore_cleared_non_boolean_falls_back_to_default():
    store = MemoryStore()
    first, _ = _checkbox_resolver(store)
    first.set_value("language", "local", "")
    assert store.load("epl_prefs")["language"] == {}

    restored, _ = _checkbox_resolver(store, restore_saved=True)
    assert restored.get_value("language") == "en"
    assert restored.get_value("showLineNumbers") is True
