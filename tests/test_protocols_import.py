"""Protocol module smoke test."""

from __future__ import annotations

from casefind.data import protocols


def test_protocols_module_imports() -> None:
    assert hasattr(protocols, "KeyValueStoreProtocol")
    assert hasattr(protocols, "SearchBackendProtocol")
