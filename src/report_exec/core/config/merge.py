# src/report_exec/core/config/merge.py
"""
Merge de configuração do report_exec.

Este módulo concentra as duas políticas de merge do projeto:

1. `merge_configuration`: merge hierárquico em quatro níveis da
   configuração efetiva de um goal de report, seguido de filtragem por
   whitelist de parâmetros declarados pelo goal.

2. `deep_merge`: merge de dicionários utilizado na resolução das
   configurações do próprio planner (defaults + override local).

Precedência de `merge_configuration` (maior vence):
    configuração default do goal
        > configuração de build.pluginManagement
        > configuração do report-plugin
        > configuração do report-set

Política de `deep_merge` (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total
    - escalar → sobrescrita direta
    - conflito de tipos → ConfigTypeConflictError

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
    - A árvore final contém apenas parâmetros presentes na whitelist

Limites explícitos:
    - Não instancia reports
    - Não valida valores de parâmetros
    - Não carrega arquivos
"""

from __future__ import annotations

from copy import deepcopy
from typing import AbstractSet, Any, Dict, Iterable, Optional

from .errors import ConfigTypeConflictError
from .tree import ConfigTree, merge_trees


DEFAULT_CONFIGURATION_ROOT = "configuration"


def merge_configuration(
    goal_configuration: Optional[ConfigTree],
    plugin_management_configuration: Optional[ConfigTree],
    plugin_configuration: Optional[ConfigTree],
    report_set_configuration: Optional[ConfigTree],
    parameters: Iterable[str],
    *,
    root_name: str = DEFAULT_CONFIGURATION_ROOT,
) -> ConfigTree:
    """
    Calcula a configuração efetiva de um goal de report.

    O merge é feito em pares, do nível menos prioritário para o mais
    prioritário: report-set ← report-plugin ← pluginManagement ← default
    do goal. Níveis ausentes são elementos neutros do merge.

    Ao final, uma nova árvore `root_name` é construída copiando, na ordem
    da árvore mesclada, apenas os filhos cujo nome está em `parameters`.
    A filtragem é aplicada mesmo quando só a configuração default existe.

    Args:
        goal_configuration: Configuração default declarada pelo goal.
        plugin_management_configuration: Configuração em build.pluginManagement.
        plugin_configuration: Configuração declarada no report-plugin.
        report_set_configuration: Configuração do report-set (ou do item de goal).
        parameters: Nomes de parâmetros suportados pelo goal.
        root_name: Nome do nó raiz da árvore resultante.

    Returns:
        ConfigTree: Configuração efetiva filtrada.
    """
    allowed: AbstractSet[str] = frozenset(parameters)

    merged = merge_trees(plugin_configuration, report_set_configuration)
    merged = merge_trees(plugin_management_configuration, merged)
    merged = merge_trees(goal_configuration, merged)

    if merged is None:
        return ConfigTree(name=root_name)

    return ConfigTree(
        name=root_name,
        children=tuple(c for c in merged.children if c.name in allowed),
    )


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos da configuração.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list -> sobrescrita total
        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        if type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result
