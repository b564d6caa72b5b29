# src/report_exec/__init__.py
"""
report_exec: resolução, configuração e sequenciamento de report-plugins.

Arquitetura em alto nível:
    - core.config   → ConfigTree, merge hierárquico e whitelist de parâmetros
    - core.pipeline → modelo, PlanContext e protocolos dos colaboradores externos
    - core.engine   → VersionResolver, GoalSetBuilder e ReportExecutionPlanner
    - core.project  → loader do descritor de projeto
"""
from .core.config.tree import ConfigTree
from .core.engine.planner import ReportExecutionPlanner
from .core.pipeline.context import PlanContext
from .core.pipeline.types import ExecutionUnit, ReportPlanRequest

__all__ = [
    "ConfigTree",
    "ExecutionUnit",
    "PlanContext",
    "ReportExecutionPlanner",
    "ReportPlanRequest",
]
