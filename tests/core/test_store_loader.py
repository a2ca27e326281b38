# tests/core/test_store_loader.py
from __future__ import annotations

import sys
import types

import pytest

from ngsi2.core.store import ContextStore, load_context_store


class ConfiguredStore(ContextStore):
    def __init__(self, base_url: str, timeout: int = 5):
        self.base_url = base_url
        self.timeout = timeout


class NotAStore:
    pass


@pytest.fixture
def fake_module(monkeypatch):
    mod = types.ModuleType("fake_ngsi_backend")
    mod.ConfiguredStore = ConfiguredStore
    mod.NotAStore = NotAStore
    monkeypatch.setitem(sys.modules, "fake_ngsi_backend", mod)
    return mod


def test_missing_config_falls_back_to_base_store(tmp_path):
    store = load_context_store([str(tmp_path / "store.yaml")])
    assert type(store) is ContextStore


def test_store_built_from_yaml(tmp_path, monkeypatch, fake_module):
    monkeypatch.setenv("ORION_URL", "http://orion:1026")
    (tmp_path / "store.yaml").write_text(
        "store:\n"
        "  class: fake_ngsi_backend:ConfiguredStore\n"
        "  config:\n"
        "    base_url: ${ORION_URL}\n"
        "    timeout: 10\n"
    )

    store = load_context_store([str(tmp_path / "store.yaml")])

    assert isinstance(store, ConfiguredStore)
    assert store.base_url == "http://orion:1026"
    assert store.timeout == 10


def test_last_declaration_wins(tmp_path, fake_module):
    (tmp_path / "a.yaml").write_text(
        "store:\n  class: fake_ngsi_backend:ConfiguredStore\n  config:\n    base_url: first\n"
    )
    (tmp_path / "b.yaml").write_text(
        "store:\n  class: fake_ngsi_backend:ConfiguredStore\n  config:\n    base_url: second\n"
    )

    store = load_context_store([str(tmp_path / "*.yaml")])

    assert store.base_url == "second"


def test_class_is_required(tmp_path):
    (tmp_path / "store.yaml").write_text("store:\n  config: {}\n")
    with pytest.raises(ValueError, match="class"):
        load_context_store([str(tmp_path / "store.yaml")])


def test_rejects_non_store_class(tmp_path, fake_module):
    (tmp_path / "store.yaml").write_text("store:\n  class: fake_ngsi_backend:NotAStore\n")
    with pytest.raises(TypeError, match="ContextStore"):
        load_context_store([str(tmp_path / "store.yaml")])


def test_rejects_non_mapping_file(tmp_path):
    (tmp_path / "store.yaml").write_text("just a string\n")
    with pytest.raises(ValueError, match="store.yaml"):
        load_context_store([str(tmp_path / "store.yaml")])
