# tests/core/config/test_merge.py
"""
Testes das políticas de merge de configuração.

Este módulo valida:
- `merge_configuration`: merge em quatro níveis com whitelist de parâmetros
- `deep_merge`: merge de dicionários das configurações do planner

Os testes asseguram que:
- a precedência default do goal > pluginManagement > report-plugin > report-set é respeitada
- apenas parâmetros declarados pelo goal chegam à configuração final
- o merge é idempotente e não muta as entradas
- conflitos de tipo em `deep_merge` são rejeitados explicitamente

Limites explícitos:
    - Não valida o merge estrutural de árvores em detalhe (ver test_tree.py)
    - Não valida carregamento de arquivos
"""

import pytest

try:
    from report_exec.core.config.errors import ConfigTypeConflictError
    from report_exec.core.config.merge import deep_merge, merge_configuration
    from report_exec.core.config.tree import ConfigTree
except Exception as e:  # noqa: BLE001
    deep_merge = None
    merge_configuration = None
    ConfigTree = None
    ConfigTypeConflictError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """Falha explicitamente quando os módulos de merge não podem ser importados."""
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing config merge modules. Implement:\n"
            "- src/report_exec/core/config/merge.py (merge_configuration, deep_merge)\n"
            "- src/report_exec/core/config/errors.py (ConfigTypeConflictError)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _cfg(data):
    return ConfigTree.from_dict("configuration", data)


# =====================================================
# merge_configuration
# =====================================================

def test_goal_default_wins_and_whitelist_drops_unknown_parameters():
    """
    Verifica a precedência dos quatro níveis e a filtragem por whitelist.

    Entradas:
        - default do goal:   {x: a}
        - pluginManagement:  {x: b, y: c}
        - report-plugin:     {x: d, z: e}
        - report-set:        {x: f}
        - parâmetros:        {x, y}

    Invariantes:
        - `x` vem do default do goal (maior precedência)
        - `y` vem do pluginManagement (único nível que o declara)
        - `z` é descartado por não ser parâmetro do goal
    """
    _require_imports()
    out = merge_configuration(
        _cfg({"x": "a"}),
        _cfg({"x": "b", "y": "c"}),
        _cfg({"x": "d", "z": "e"}),
        _cfg({"x": "f"}),
        ["x", "y"],
    )

    assert out.name == "configuration"
    assert out.to_dict() == {"x": "a", "y": "c"}


def test_plugin_level_beats_report_set_level():
    _require_imports()
    out = merge_configuration(
        None,
        None,
        _cfg({"show": "public"}),
        _cfg({"show": "private", "doctitle": "API"}),
        ["show", "doctitle"],
    )
    assert out.to_dict() == {"show": "public", "doctitle": "API"}


def test_merge_is_idempotent_when_same_tree_is_every_level():
    """
    Verifica que repetir a mesma árvore nos quatro níveis devolve a própria
    árvore filtrada pela whitelist.
    """
    _require_imports()
    tree = _cfg(
        {
            "show": "protected",
            "links": {"link": ["https://docs.oracle.com/javase/8/docs/api", "https://commons.apache.org/lang"]},
            "unsupported": "dropped",
        }
    )

    out = merge_configuration(tree, tree, tree, tree, ["show", "links"])
    expected = ConfigTree(
        name="configuration",
        children=tuple(c for c in tree.children if c.name in {"show", "links"}),
    )

    assert out == expected
    assert merge_configuration(out, out, out, out, ["show", "links"]) == out


def test_whitelist_applies_when_only_goal_default_is_present():
    _require_imports()
    out = merge_configuration(_cfg({"show": "protected", "stray": "x"}), None, None, None, ["show"])
    assert out.to_dict() == {"show": "protected"}


def test_all_levels_absent_yields_empty_configuration():
    _require_imports()
    out = merge_configuration(None, None, None, None, ["show"])
    assert out == ConfigTree(name="configuration")
    assert out.children == ()


def test_whitelist_keeps_merged_order_and_custom_root():
    _require_imports()
    out = merge_configuration(
        _cfg({"b": "1"}),
        None,
        _cfg({"a": "2", "c": "3"}),
        None,
        ["a", "b", "c"],
        root_name="pluginConfiguration",
    )
    assert out.name == "pluginConfiguration"
    assert out.child_names() == ["b", "a", "c"]


def test_merge_configuration_does_not_mutate_inputs():
    _require_imports()
    goal = _cfg({"show": "protected"})
    plugin = _cfg({"show": "public", "links": {"link": "https://example.org"}})
    snapshot_goal = goal.to_dict()
    snapshot_plugin = plugin.to_dict()

    merge_configuration(goal, None, plugin, None, ["show", "links"])

    assert goal.to_dict() == snapshot_goal
    assert plugin.to_dict() == snapshot_plugin


def test_lists_under_same_parameter_are_merged_structurally():
    _require_imports()
    out = merge_configuration(
        None,
        _cfg({"links": {"link": "https://a.example"}}),
        _cfg({"links": {"link": ["https://b.example", "https://c.example"]}}),
        None,
        ["links"],
    )
    # pareamento posicional: o primeiro <link> vem do nível dominante
    # e o excedente recessivo de mesmo nome é descartado
    assert out.to_dict() == {"links": {"link": "https://a.example"}}


def test_append_directive_concatenates_lists():
    _require_imports()
    out = merge_configuration(
        None,
        _cfg({"links": {"@combine.children": "append", "link": "https://a.example"}}),
        _cfg({"links": {"link": ["https://b.example", "https://c.example"]}}),
        None,
        ["links"],
    )
    links = out.child("links")
    assert [c.value for c in links.children_named("link")] == [
        "https://a.example",
        "https://b.example",
        "https://c.example",
    ]


# =====================================================
# deep_merge
# =====================================================

def test_deep_merge_simple_override():
    _require_imports()
    base = {"a": 1, "b": 2}
    override = {"b": 99}
    out = deep_merge(base, override)
    assert out == {"a": 1, "b": 99}
    assert base == {"a": 1, "b": 2}
    assert override == {"b": 99}


def test_deep_merge_nested_dict():
    _require_imports()
    base = {"planner": {"configuration_root": "configuration", "strict": True}}
    override = {"planner": {"configuration_root": "cfg"}}
    out = deep_merge(base, override)
    assert out == {"planner": {"configuration_root": "cfg", "strict": True}}


def test_deep_merge_list_override_total():
    """Listas não são mescladas elemento a elemento: o override é total."""
    _require_imports()
    base = {"realm": {"excludes": ["doxia-sink-api", "maven-reporting-api"]}}
    override = {"realm": {"excludes": ["doxia-sink-api"]}}
    out = deep_merge(base, override)
    assert out == {"realm": {"excludes": ["doxia-sink-api"]}}


def test_deep_merge_type_conflict_raises():
    _require_imports()
    base = {"realm": {"excludes": ["doxia-sink-api"]}}
    override = {"realm": "none"}  # dict vs str
    with pytest.raises(ConfigTypeConflictError):
        deep_merge(base, override)


def test_deep_merge_rejects_non_dict_roots():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"a": 1}, ["a"])  # type: ignore[arg-type]
