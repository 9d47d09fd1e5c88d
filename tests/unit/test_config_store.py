from __future__ import annotations

from pathlib import Path

import pytest

from realm_credentials.application.ports.config_store_port import ConfigStoreError
from realm_credentials.domain.credentials import CredentialUpdate
from realm_credentials.infrastructure.config_store import (
    MappingConfigStore,
    PropertiesFileConfigStore,
    parse_properties,
)


def test_parse_properties_skips_comments_and_keeps_padding() -> None:
    text = "\n".join(
        [
            "# router config",
            "; also a comment",
            "",
            "routerconsole.alice.b64 = c2VjcmV0cw==",
            "i2cp.password=a=b",
            "no separator here",
            "=orphan value",
        ]
    )

    assert parse_properties(text) == {
        "routerconsole.alice.b64": "c2VjcmV0cw==",
        "i2cp.password": "a=b",
    }


def test_mapping_store_reads_and_applies_updates() -> None:
    store = MappingConfigStore({"r.password": "old"})

    store.apply(
        CredentialUpdate(set_properties={"r.b64": "b2xk"}, remove_properties=("r.password",))
    )

    assert store.get_property("r.password") is None
    assert store.get_property("r.b64") == "b2xk"
    assert store.snapshot() == {"r.b64": "b2xk"}


def test_mapping_store_copies_initial_properties() -> None:
    initial = {"r.password": "secret"}
    store = MappingConfigStore(initial)
    initial["r.password"] = "changed"

    assert store.get_property("r.password") == "secret"


def test_file_store_loads_and_reloads(tmp_path: Path) -> None:
    path = tmp_path / "router.config"
    path.write_text("i2cp.password=secret\n", encoding="utf-8")
    store = PropertiesFileConfigStore(path)

    assert store.get_property("i2cp.password") == "secret"

    path.write_text("i2cp.b64=c2VjcmV0\n", encoding="utf-8")
    store.reload()

    assert store.get_property("i2cp.password") is None
    assert store.get_property("i2cp.b64") == "c2VjcmV0"


def test_missing_file_is_an_empty_store(tmp_path: Path) -> None:
    store = PropertiesFileConfigStore(tmp_path / "absent.config")

    assert store.get_property("i2cp.password") is None
    assert store.path == tmp_path / "absent.config"


def test_unreadable_file_raises_config_store_error(tmp_path: Path) -> None:
    path = tmp_path / "router.config"
    path.write_bytes(b"i2cp.password=\xff\xfe\n")

    with pytest.raises(ConfigStoreError):
        PropertiesFileConfigStore(path)
