# src/report_exec/core/config/tree.py
"""
Árvore canônica de configuração (ConfigTree).

Este módulo define o tipo de valor utilizado para representar qualquer
fragmento de configuração de report-plugins: configuração default de um
goal, configuração de `pluginManagement`, configuração do report-plugin
e configuração de report-set.

Um nó possui:
    - name: nome do nó (ex.: "configuration", "links", "link")
    - value: valor escalar opcional
    - attributes: mapa nome → valor textual
    - children: lista ordenada de nós filhos

Política de merge estrutural (`merge_trees`):
    - o nó dominante mantém seu nome
    - valor dominante vazio recebe o valor recessivo
    - atributos são unidos (dominante sobrescreve recessivo)
    - filhos de mesmo nome são pareados por posição e mesclados recursivamente
    - filhos recessivos sem correspondente no dominante são anexados ao final
    - filhos recessivos de mesmo nome além da quantidade dominante são descartados
    - `combine.self="override"` no dominante impede o merge
    - `combine.children="append"` no dominante anexa todos os filhos recessivos

Invariantes:
    - ConfigTree é imutável (inclusive `attributes`); o merge sempre produz novas árvores
    - Subárvores compartilhadas entre entrada e saída do merge são seguras, pois nada as altera
    - A ordem dos filhos é preservada
    - Filhos com nomes repetidos são permitidos

Limites explícitos:
    - Não conhece parâmetros de goals nem whitelist
    - Não realiza coerção de tipos (todos os valores são texto)
    - Não serializa para XML
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


COMBINE_SELF = "combine.self"
COMBINE_CHILDREN = "combine.children"
SELF_OVERRIDE = "override"
CHILDREN_APPEND = "append"

_ATTRIBUTE_PREFIX = "@"
_TEXT_KEY = "#text"


@dataclass(frozen=True)
class ConfigTree:
    """
    Nó imutável de configuração com nome, valor, atributos e filhos ordenados.

    Decisões arquiteturais:
        - Os filhos são uma tupla para impedir mutação in-place
        - Nomes repetidos entre filhos são válidos (ex.: listas de `<link>`)
        - Igualdade e hash são estruturais (nome, valor, atributos e filhos)
        - `attributes` é exposto como mapeamento somente leitura

    Invariantes:
        - `children` preserva exatamente a ordem de declaração
        - Nenhum método altera a instância corrente
    """

    name: str
    value: Optional[str] = None
    attributes: Mapping[str, str] = field(default_factory=dict)
    children: Tuple["ConfigTree", ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("ConfigTree.name must be a non-empty string")
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "children", tuple(self.children))

    def __hash__(self) -> int:
        return hash((self.name, self.value, tuple(sorted(self.attributes.items())), self.children))

    def __reduce__(self) -> Any:
        # mappingproxy não é copiável nem serializável por pickle
        return (ConfigTree, (self.name, self.value, dict(self.attributes), self.children))

    # -----------------------------
    # Navegação
    # -----------------------------
    def child(self, name: str) -> Optional["ConfigTree"]:
        for c in self.children:
            if c.name == name:
                return c
        return None

    def children_named(self, name: str) -> List["ConfigTree"]:
        return [c for c in self.children if c.name == name]

    def child_names(self) -> List[str]:
        return [c.name for c in self.children]

    def attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    # -----------------------------
    # Construção imutável
    # -----------------------------
    def with_children(self, children: List["ConfigTree"]) -> "ConfigTree":
        return ConfigTree(
            name=self.name,
            value=self.value,
            attributes=self.attributes,
            children=tuple(children),
        )

    def renamed(self, name: str) -> "ConfigTree":
        return ConfigTree(
            name=name,
            value=self.value,
            attributes=self.attributes,
            children=self.children,
        )

    # -----------------------------
    # Conversão dict <-> árvore
    # -----------------------------
    @classmethod
    def from_dict(cls, name: str, data: Any) -> "ConfigTree":
        """
        Constrói uma árvore a partir de estruturas Python simples.

        Convenções:
            - escalar → valor do nó
            - dict    → filhos (na ordem das chaves)
            - list    → filhos repetidos com o mesmo nome
            - chave "@x" → atributo `x`
            - chave "#text" → valor do nó ao lado de atributos

        Raises:
            TypeError: Se um valor não for escalar, dict ou list.
        """
        if data is None:
            return cls(name=name)

        if isinstance(data, Mapping):
            attributes: Dict[str, str] = {}
            value: Optional[str] = None
            children: List[ConfigTree] = []
            for key, item in data.items():
                key = str(key)
                if key.startswith(_ATTRIBUTE_PREFIX):
                    attributes[key[len(_ATTRIBUTE_PREFIX):]] = _scalar_to_text(item)
                elif key == _TEXT_KEY:
                    value = _scalar_to_text(item)
                elif isinstance(item, list):
                    children.extend(cls.from_dict(key, element) for element in item)
                else:
                    children.append(cls.from_dict(key, item))
            return cls(name=name, value=value, attributes=attributes, children=tuple(children))

        if isinstance(data, list):
            raise TypeError(f"list value for '{name}' must be nested under a mapping key")

        return cls(name=name, value=_scalar_to_text(data))

    def to_dict(self) -> Any:
        """Representação inversa de `from_dict` (filhos repetidos viram listas)."""
        if not self.children and not self.attributes:
            return self.value

        out: Dict[str, Any] = {}
        for attr, attr_value in self.attributes.items():
            out[_ATTRIBUTE_PREFIX + attr] = attr_value
        if self.value is not None and (self.attributes or self.children):
            out[_TEXT_KEY] = self.value

        grouped: Dict[str, List[Any]] = {}
        for c in self.children:
            grouped.setdefault(c.name, []).append(c.to_dict())
        for child_name, items in grouped.items():
            out[child_name] = items if len(items) > 1 else items[0]
        return out

    def to_canonical(self) -> List[Any]:
        """
        Forma `[name, value, [[attr, valor], ...], [filhos...]]`.

        Diferente de `to_dict`, preserva a ordem relativa entre filhos de
        nomes distintos (`[a, b, a]` não vira `a, a, b`). Os atributos são
        ordenados por nome, pois sua ordem não é significativa.
        """
        return [
            self.name,
            self.value,
            [[attr, attr_value] for attr, attr_value in sorted(self.attributes.items())],
            [c.to_canonical() for c in self.children],
        ]


def _scalar_to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list)):
        raise TypeError(f"expected scalar value, received {type(value).__name__}")
    return str(value)


def merge_trees(dominant: Optional[ConfigTree], recessive: Optional[ConfigTree]) -> Optional[ConfigTree]:
    """
    Mescla duas árvores, com `dominant` prevalecendo sobre `recessive`.

    Nenhum input é mutado: o resultado é uma nova árvore que pode
    compartilhar subárvores imutáveis com as entradas.

    Args:
        dominant: Árvore de maior precedência (pode ser None).
        recessive: Árvore de menor precedência (pode ser None).

    Returns:
        Optional[ConfigTree]: Árvore mesclada, ou None se ambas forem None.
    """
    if recessive is None:
        return dominant
    if dominant is None:
        return recessive

    if dominant.attributes.get(COMBINE_SELF) == SELF_OVERRIDE:
        return dominant

    value = dominant.value
    if not value and recessive.value is not None:
        value = recessive.value

    attributes: Dict[str, str] = dict(dominant.attributes)
    for attr, attr_value in recessive.attributes.items():
        attributes.setdefault(attr, attr_value)

    if dominant.attributes.get(COMBINE_CHILDREN) == CHILDREN_APPEND:
        children = list(dominant.children) + list(recessive.children)
    else:
        children = _merge_children(dominant.children, recessive.children)

    return ConfigTree(
        name=dominant.name,
        value=value,
        attributes=attributes,
        children=tuple(children),
    )


def _merge_children(
    dominant: Tuple[ConfigTree, ...],
    recessive: Tuple[ConfigTree, ...],
) -> List[ConfigTree]:
    merged: List[ConfigTree] = list(dominant)

    slots: Dict[str, List[int]] = {}
    for index, c in enumerate(merged):
        slots.setdefault(c.name, []).append(index)

    cursor: Dict[str, int] = {}
    for rc in recessive:
        positions = slots.get(rc.name)
        if positions is None:
            merged.append(rc)
            continue

        pos = cursor.get(rc.name, 0)
        if pos < len(positions):
            target = positions[pos]
            merged[target] = merge_trees(merged[target], rc)  # type: ignore[assignment]
            cursor[rc.name] = pos + 1
        # recessivo excedente de mesmo nome: descartado

    return merged
