# src/report_exec/core/pipeline/types.py
"""
Tipos canônicos do planner de reports.

Este módulo define as estruturas imutáveis trocadas entre o chamador,
o planner e os serviços externos:

    - Dependency, BuildPlugin, Build, Project → modelo (somente leitura) do projeto
    - ReportSet, ReportPluginRef              → declarações de reporting
    - PluginIdentity                          → identidade resolvida (g:a:v + dependências)
    - GoalDescriptor, PluginDescriptor        → metadados de um plugin resolvido
    - GoalWorkItem                            → item efêmero do conjunto de goals
    - ExecutionUnit                           → unidade de report pronta para execução
    - ReportPlanRequest                       → entrada de `plan()`
    - DiagnosticKind                          → vocabulário fixo de eventos de diagnóstico

Princípios fundamentais:
    - Tipos são imutáveis (frozen) e nunca mutados pelo planner
    - Coleções são tuplas para preservar ordem e impedir mutação
    - Nenhuma lógica de planejamento vive neste módulo

Limites explícitos:
    - Não resolve versões
    - Não carrega descritores
    - Não executa reports
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from report_exec.core.config.hashing import compute_config_hash
from report_exec.core.config.tree import ConfigTree


DEFAULT_REPORT_SET_ID = "default"
POM_PACKAGING = "pom"


class DiagnosticKind(str, Enum):
    """
    Vocabulário fixo de eventos de diagnóstico emitidos durante o planejamento.

    Os valores são strings estáveis para consumo por qualquer backend de
    observabilidade a partir de `PlanContext.events`.
    """
    VERSION_RESOLVED = "version-resolved"
    VERSION_FALLBACK_USED = "version-fallback-used"
    PLUGIN_CONFIGURED = "plugin-configured"
    PLUGIN_REPEATED = "plugin-repeated"
    DUPLICATE_GOAL_DROPPED = "duplicate-goal-dropped"
    AGGREGATOR_SKIPPED = "aggregator-skipped"
    GOAL_SKIPPED_NOT_REPORT = "goal-skipped-not-report"
    GOAL_SKIPPED_INCOMPATIBLE = "goal-skipped-incompatible"
    REPORTS_SUMMARY = "reports-summary"
    FORK_REQUIRED = "fork-required"
    FORK_COMPLETED = "fork-completed"


# ---------------------------------------------------------------------------
# Modelo do projeto
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Dependency:
    group_id: str
    artifact_id: str
    version: Optional[str] = None
    type: str = "jar"

    @property
    def id(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.type}:{self.version}"


@dataclass(frozen=True)
class BuildPlugin:
    """Plugin declarado em build.plugins ou build.pluginManagement."""

    group_id: str
    artifact_id: str
    version: Optional[str] = None
    configuration: Optional[ConfigTree] = None
    dependencies: Tuple[Dependency, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass(frozen=True)
class Build:
    plugins: Tuple[BuildPlugin, ...] = ()
    plugin_management: Optional[Tuple[BuildPlugin, ...]] = None


@dataclass(frozen=True)
class Project:
    """
    Visão somente-leitura do projeto corrente.

    Campos:
        - packaging: tipo de empacotamento ("jar", "pom", ...)
        - execution_root: se o projeto é a raiz da execução
        - modules: módulos declarados (agregação multi-módulo)
        - build: seções build.plugins e build.pluginManagement
        - remote_plugin_repositories: repositórios repassados ao serviço de descritores
    """
    artifact_id: str
    group_id: Optional[str] = None
    version: Optional[str] = None
    packaging: str = "jar"
    execution_root: bool = False
    modules: Tuple[str, ...] = ()
    build: Optional[Build] = None
    remote_plugin_repositories: Tuple[str, ...] = ()

    def can_aggregate(self) -> bool:
        """Raiz de execução com packaging "pom" e ao menos um módulo."""
        return self.execution_root and self.packaging == POM_PACKAGING and bool(self.modules)


# ---------------------------------------------------------------------------
# Declarações de reporting
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReportSet:
    id: str = DEFAULT_REPORT_SET_ID
    configuration: Optional[ConfigTree] = None
    reports: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ReportPluginRef:
    """Report-plugin declarado na seção de reporting do projeto."""

    group_id: str
    artifact_id: str
    version: Optional[str] = None
    configuration: Optional[ConfigTree] = None
    reports: Tuple[str, ...] = ()
    report_sets: Tuple[ReportSet, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    def matches(self, plugin: BuildPlugin) -> bool:
        return plugin.group_id == self.group_id and plugin.artifact_id == self.artifact_id


@dataclass(frozen=True)
class PluginIdentity:
    group_id: str
    artifact_id: str
    version: str
    dependencies: Tuple[Dependency, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def id(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


# ---------------------------------------------------------------------------
# Descritores
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GoalDescriptor:
    """
    Metadados de um goal exposto por um plugin.

    Campos de fork:
        - execute_phase / execute_lifecycle: fase (e lifecycle opcional) forkada
        - execute_goal: goal forkado, quando não há fase
    """
    goal: str
    implementation: str = ""
    configuration: Optional[ConfigTree] = None
    parameters: Tuple[str, ...] = ()
    aggregator: bool = False
    execute_phase: Optional[str] = None
    execute_lifecycle: Optional[str] = None
    execute_goal: Optional[str] = None

    @property
    def forks(self) -> bool:
        return bool(self.execute_phase) or bool(self.execute_goal)


@dataclass(frozen=True)
class PluginDescriptor:
    group_id: str
    artifact_id: str
    version: str
    goals: Tuple[GoalDescriptor, ...] = ()

    @property
    def id(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def get_goal(self, goal: str) -> Optional[GoalDescriptor]:
        for g in self.goals:
            if g.goal == goal:
                return g
        return None

    def goal_names(self) -> Tuple[str, ...]:
        return tuple(g.goal for g in self.goals)


# ---------------------------------------------------------------------------
# Planejamento
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GoalWorkItem:
    """
    Item efêmero do conjunto de goals de um report-plugin.

    `configuration` é o fragmento associado ao item: a configuração default
    do goal (conjunto derivado), a configuração do report-plugin (lista
    `reports`) ou a configuração do report-set de origem.
    """
    goal: str
    plugin: ReportPluginRef
    descriptor: PluginDescriptor
    configuration: Optional[ConfigTree] = None
    report_set_id: Optional[str] = None


@dataclass(frozen=True)
class ExecutionUnit:
    """
    Report pronto para execução, com configuração efetiva final.

    Invariantes:
        - `configuration` contém apenas parâmetros declarados pelo goal
        - A instância não é alterada após ser emitida pelo planner
    """
    goal: str
    plugin: PluginIdentity
    configuration: ConfigTree
    report: Any
    report_set_id: Optional[str] = None

    @property
    def config_hash(self) -> str:
        return compute_config_hash(self.configuration)


@dataclass(frozen=True)
class ReportPlanRequest:
    project: Project
    report_plugins: Optional[Tuple[ReportPluginRef, ...]] = None
    session: Any = None

    @property
    def build(self) -> Optional[Build]:
        return self.project.build


@dataclass(frozen=True)
class GoalExecution:
    """Goal preparado para execução: entrada dos serviços de configuração e fork."""

    plugin: PluginIdentity
    descriptor: PluginDescriptor
    goal: GoalDescriptor
    configuration: Optional[ConfigTree] = None

    @property
    def description(self) -> str:
        return f"{self.descriptor.artifact_id}:{self.goal.goal} report"
