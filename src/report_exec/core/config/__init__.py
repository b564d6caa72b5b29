# src/report_exec/core/config/__init__.py
"""
Camada de configuração do report_exec.

Responsabilidades do pacote:
    - `ConfigTree`: árvore imutável de configuração e merge estrutural
    - Merge hierárquico em quatro níveis com whitelist de parâmetros
    - Carregamento e resolução das configurações do planner
    - Hash canônico de configuração para rastreabilidade

Limites explícitos:
    - Não resolve versões nem descritores de plugins
    - Não instancia reports
"""

from .merge import merge_configuration
from .settings import PlannerSettings
from .tree import ConfigTree, merge_trees

__all__ = ["ConfigTree", "merge_trees", "merge_configuration", "PlannerSettings"]
