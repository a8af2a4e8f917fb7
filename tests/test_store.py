"""ConfigStore tests."""

from __future__ import annotations

import logging
import threading

import pytest
from pydantic import ValidationError

from kvconf import (
    ConfigStore,
    MalformedDocumentError,
    SourceUnavailableError,
    StoreSettings,
)

NET = (
    "net:\n"
    "  eth0:\n"
    "    ip: 10.0.0.1\n"
    "    mask: 255.255.255.0\n"
    "  eth1:\n"
    "    ip: 10.0.0.2\n"
    "  eth00:\n"
    "    ip: 10.0.0.3\n"
)


@pytest.fixture
def net_store() -> ConfigStore:
    store = ConfigStore()
    store.load_text(NET)
    return store


class TestLoad:
    def test_load_file(self, write_yaml):
        store = ConfigStore()
        assert store.load(write_yaml('a:\n  b: "1"\n  c: "2"\n')) is True
        assert store.get("a:b") == "1"
        assert store.get("a:c") == "2"

    def test_keys_carry_namespace(self, write_yaml):
        store = ConfigStore()
        store.load(write_yaml("a:\n  b: x\n"))
        assert store.prefix == "config:"
        assert store.keys() == ["a:b"]
        assert "a:b" in store
        assert "config:a:b" not in store

    def test_load_accepts_str_path(self, write_yaml):
        store = ConfigStore()
        assert store.load(str(write_yaml("a: b\n"))) is True
        assert store.get("a") == "b"

    def test_sequence_entries(self):
        store = ConfigStore()
        store.load_text("a:\n  list: [x, y, z]\n")
        assert store.get_collection("a:list") == {"0": "x", "1": "y", "2": "z"}

    def test_missing_file_keeps_previous_load(self, write_yaml, tmp_path):
        store = ConfigStore()
        assert store.load(write_yaml("a:\n  b: x\n  c: y\n"))
        before = store.items()

        assert store.load(tmp_path / "missing.yaml") is False
        assert store.items() == before
        assert store.get("a:b") == "x"
        assert store.get("a:c") == "y"

    def test_missing_file_is_logged(self, tmp_path, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.WARNING, logger="kvconf")
        ConfigStore().load(tmp_path / "missing.yaml")
        assert "missing.yaml" in caplog.text

    def test_missing_file_strict_raises(self, write_yaml, tmp_path):
        store = ConfigStore(StoreSettings(strict=True))
        store.load(write_yaml("a: b\n"))
        with pytest.raises(SourceUnavailableError):
            store.load(tmp_path / "missing.yaml")
        assert store.get("a") == "b"

    def test_directory_is_unavailable(self, tmp_path):
        assert ConfigStore().load(tmp_path) is False

    def test_reload_replaces_contents(self, write_yaml):
        store = ConfigStore()
        store.load(write_yaml("a: 1\n", name="one.yaml"))
        store.load(write_yaml("b: 2\n", name="two.yaml"))
        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_malformed_lenient_stores_partial(self, write_yaml):
        store = ConfigStore()
        assert store.load(write_yaml("a:\n  b: '1'\nc: 'never closed\n")) is True
        assert store.get("a:b") == "1"

    def test_malformed_strict_leaves_store_unchanged(self, write_yaml):
        store = ConfigStore(StoreSettings(strict=True))
        store.load(write_yaml("keep: me\n", name="good.yaml"))
        with pytest.raises(MalformedDocumentError):
            store.load(write_yaml("a:\n  b: '1'\nc: 'never closed\n", name="bad.yaml"))
        assert store.items() == [("keep", "me")]

    def test_clear(self, net_store):
        net_store.clear()
        assert len(net_store) == 0
        assert net_store.get("net:eth0:ip") is None


class TestMerge:
    def test_first_write_wins(self):
        store = ConfigStore()
        store.merge("x", "1")
        store.merge("x", "2")
        assert store.get("x") == "1"

    def test_merge_does_not_clobber_loaded_values(self, net_store):
        net_store.merge("net:eth0:ip", "192.168.0.1")
        net_store.merge("net:eth0:gw", "10.0.0.254")
        assert net_store.get("net:eth0:ip") == "10.0.0.1"
        assert net_store.get_collection("net:eth0") == {
            "ip": "10.0.0.1",
            "mask": "255.255.255.0",
            "gw": "10.0.0.254",
        }


class TestGet:
    def test_missing_key_is_none(self, net_store):
        assert net_store.get("nonexistent") is None

    def test_branch_is_not_a_value(self, net_store):
        assert net_store.get("net:eth0") is None

    def test_require(self, net_store):
        assert net_store.require("net:eth1:ip") == "10.0.0.2"
        with pytest.raises(KeyError):
            net_store.require("net:eth2:ip")


class TestCollection:
    def test_prefix_collection(self, net_store):
        assert net_store.get_collection("net:eth0") == {
            "ip": "10.0.0.1",
            "mask": "255.255.255.0",
        }

    def test_remainder_keeps_deeper_path(self, net_store):
        assert net_store.get_collection("net") == {
            "eth0:ip": "10.0.0.1",
            "eth0:mask": "255.255.255.0",
            "eth1:ip": "10.0.0.2",
            "eth00:ip": "10.0.0.3",
        }

    def test_unknown_prefix(self, net_store):
        assert net_store.get_collection("nope") == {}

    def test_leaf_prefix_is_empty(self, net_store):
        assert net_store.get_collection("net:eth0:ip") == {}

    def test_repeated_calls_are_equal(self, net_store):
        first = net_store.get_collection("net:eth0")
        second = net_store.get_collection("net:eth0")
        assert first == second
        assert first is not second

    def test_result_is_a_copy(self, net_store):
        coll = net_store.get_collection("net:eth0")
        coll["ip"] = "changed"
        assert net_store.get("net:eth0:ip") == "10.0.0.1"


class TestSettings:
    def test_custom_namespace_and_separator(self):
        store = ConfigStore(StoreSettings(namespace="app", separator="/"))
        store.load_text("net:\n  eth0:\n    ip: 10.0.0.1\n")
        assert store.prefix == "app/"
        assert store.get("net/eth0/ip") == "10.0.0.1"
        assert store.get_collection("net") == {"eth0/ip": "10.0.0.1"}

    @pytest.mark.parametrize("sep", ["", "::", " "])
    def test_bad_separator(self, sep):
        with pytest.raises(ValidationError):
            StoreSettings(separator=sep)

    def test_bad_namespace(self):
        with pytest.raises(ValidationError):
            StoreSettings(namespace="my app")


def test_concurrent_readers_and_merges(net_store):
    errors = []

    def reader():
        try:
            for _ in range(200):
                assert net_store.get_collection("net:eth0")["ip"] == "10.0.0.1"
                assert net_store.get("net:eth1:ip") == "10.0.0.2"
        except AssertionError as e:  # pragma: no cover
            errors.append(e)

    def writer(n: int):
        for i in range(200):
            net_store.merge(f"extra:{n}:{i}", str(i))

    threads = [threading.Thread(target=reader) for _ in range(4)]
    threads += [threading.Thread(target=writer, args=(n,)) for n in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert not errors
    assert len(net_store.get_collection("extra:1")) == 200


def test_alias_does_not_corrupt_following_entries():
    store = ConfigStore()
    store.load_text("base: &p 8080\nport: *p\nhost: example.org\nuser: root\n")
    assert store.items() == [("base", "8080"), ("host", "example.org"), ("user", "root")]
    assert store.get("port") is None
