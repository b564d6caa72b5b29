# tests/core/config/test_hashing.py
"""
Testes do hashing de configuração.

Os testes asseguram que:
- configurações equivalentes produzem o mesmo hash
- alterações na configuração produzem hashes diferentes
- o algoritmo corresponde ao SHA-256 do JSON canônico
- árvores de configuração são serializadas pela forma `to_canonical()`,
  sensível à ordem dos filhos

Invariantes:
    - O hash retornado possui 64 caracteres
    - O cálculo não depende de estado externo
"""

import hashlib
import json

import pytest

try:
    from report_exec.core.config.hashing import compute_config_hash
    from report_exec.core.config.tree import ConfigTree
except Exception as e:  # noqa: BLE001
    compute_config_hash = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _canonical_json_bytes(obj) -> bytes:
    """Serialização JSON canônica usada como referência explícita nos testes."""
    s = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing hashing module. Implement:\n"
            "- src/report_exec/core/config/hashing.py (compute_config_hash)\n"
            "Policy expected: SHA-256 of canonical JSON serialization.\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_hash_is_deterministic_and_key_order_independent():
    _require_imports()
    a = {"realm": {"excludes": ["doxia-sink-api"]}, "planner": {"configuration_root": "configuration"}}
    b = {"planner": {"configuration_root": "configuration"}, "realm": {"excludes": ["doxia-sink-api"]}}
    h = compute_config_hash(a)
    assert h == compute_config_hash(b)
    assert len(h) == 64


def test_hash_changes_when_config_changes():
    _require_imports()
    a = {"planner": {"configuration_root": "configuration"}}
    b = {"planner": {"configuration_root": "cfg"}}
    assert compute_config_hash(a) != compute_config_hash(b)


def test_hash_matches_sha256_of_canonical_json():
    _require_imports()
    cfg = {"b": 2, "a": {"y": "ç", "x": [1, 2]}}
    expected = hashlib.sha256(_canonical_json_bytes(cfg)).hexdigest()
    assert compute_config_hash(cfg) == expected


def test_tree_hash_uses_canonical_form():
    _require_imports()
    tree = ConfigTree.from_dict("configuration", {"show": "protected", "links": {"link": ["a", "b"]}})
    expected = hashlib.sha256(_canonical_json_bytes(tree.to_canonical())).hexdigest()
    assert compute_config_hash(tree) == expected
    assert compute_config_hash(tree) != compute_config_hash(tree.renamed("pluginConfiguration"))


def test_tree_hash_depends_on_interleaved_child_order():
    _require_imports()
    a, b = ConfigTree(name="a", value="1"), ConfigTree(name="b", value="2")
    interleaved = ConfigTree(name="configuration", children=(a, b, a))
    grouped = ConfigTree(name="configuration", children=(a, a, b))

    assert interleaved.to_dict() == grouped.to_dict()
    assert compute_config_hash(interleaved) != compute_config_hash(grouped)


def test_hash_rejects_unsupported_types():
    _require_imports()
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "dict"])  # type: ignore[arg-type]
