# tests/conftest.py
"""
Fixtures compartilhados para testes do report_exec.

Este módulo define fixtures reutilizáveis que fornecem:
- colaboradores externos falsos (versão, descritor, realm, capability, fork)
- um descritor semelhante ao maven-javadoc-plugin
- projetos mínimos (módulo comum e raiz agregadora)
- um harness que monta o ReportExecutionPlanner com os fakes

Decisões arquiteturais:
    - Fakes utilizam duck typing em vez de herança dos protocolos
    - Todas as chamadas aos colaboradores são registradas em `calls`,
      na ordem em que ocorrem
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture contém lógica de planejamento
    - Cada teste recebe instâncias novas (sem estado compartilhado)

Limites explícitos:
    - Não substituir testes de integração com serviços reais
"""

from typing import Any, Dict, List, Optional, Set, Tuple

import pytest


JAVADOC_GROUP = "org.apache.maven.plugins"
JAVADOC_ARTIFACT = "maven-javadoc-plugin"
JAVADOC_VERSION = "3.6.3"


class FakeReport:
    """Report mínimo que satisfaz o protocolo `Report`."""

    def __init__(self, goal: str, configuration: Any):
        self.goal = goal
        self.configuration = configuration

    def get_output_name(self) -> str:
        return f"apidocs/{self.goal}"

    def get_name(self, locale: str) -> str:
        return self.goal

    def get_description(self, locale: str) -> str:
        return f"{self.goal} report"

    def generate(self, sink: Any, locale: str) -> None:
        sink.append(self.goal)


class FakeVersions:
    def __init__(self, calls: List[Tuple], version: Optional[str] = JAVADOC_VERSION, error: Optional[Exception] = None):
        self.calls = calls
        self.version = version
        self.error = error

    def resolve_version(self, group_id: str, artifact_id: str, session: Any) -> Optional[str]:
        self.calls.append(("version", f"{group_id}:{artifact_id}"))
        if self.error is not None:
            raise self.error
        return self.version


class RecordingRealms:
    def __init__(self, calls: List[Tuple], error: Optional[Exception] = None):
        self.calls = calls
        self.error = error
        self.prepared: List[Dict[str, Any]] = []

    def prepare_realm(self, descriptor, session, parent, imports, exclude_artifact_ids) -> None:
        self.calls.append(("realm", descriptor.id))
        if self.error is not None:
            raise self.error
        self.prepared.append(
            {
                "plugin": descriptor.id,
                "parent": parent,
                "imports": list(imports),
                "excludes": list(exclude_artifact_ids),
            }
        )


class FakeCapabilities:
    """
    `is_report` nega os goals em `non_reports` e levanta `inspect_failures[goal]`;
    `configure` levanta `failures[goal]`.
    """

    def __init__(self, calls: List[Tuple]):
        self.calls = calls
        self.non_reports: Set[str] = set()
        self.inspect_failures: Dict[str, Exception] = {}
        self.failures: Dict[str, Exception] = {}

    def is_report(self, descriptor, goal) -> bool:
        if goal.goal in self.inspect_failures:
            raise self.inspect_failures[goal.goal]
        return goal.goal not in self.non_reports

    def configure(self, execution, session) -> Any:
        goal = execution.goal.goal
        self.calls.append(("configure", goal))
        if goal in self.failures:
            raise self.failures[goal]
        return FakeReport(goal, execution.configuration)


class RecordingForks:
    def __init__(self, calls: List[Tuple], error: Optional[Exception] = None):
        self.calls = calls
        self.error = error

    def has_forks(self, execution, session) -> bool:
        return execution.goal.forks

    def run_forks(self, execution, session) -> None:
        self.calls.append(("fork", execution.goal.goal))
        if self.error is not None:
            raise self.error


class PlannerHarness:
    """Conjunto de fakes + fábrica do planner."""

    def __init__(self, descriptors):
        from report_exec.core.pipeline.descriptors import DescriptorCatalog

        self.calls: List[Tuple] = []
        self.catalog = DescriptorCatalog(descriptors)
        self.versions = FakeVersions(self.calls)
        self.realms = RecordingRealms(self.calls)
        self.capabilities = FakeCapabilities(self.calls)
        self.forks = RecordingForks(self.calls)

    def planner(self, **kwargs):
        from report_exec.core.engine.planner import ReportExecutionPlanner

        return ReportExecutionPlanner(
            descriptors=self.catalog,
            realms=self.realms,
            capabilities=self.capabilities,
            forks=self.forks,
            versions=self.versions,
            **kwargs,
        )

    def calls_of(self, kind: str) -> List[Any]:
        return [c[1] for c in self.calls if c[0] == kind]


# =====================================================
# Descritores
# =====================================================

@pytest.fixture
def javadoc_descriptor():
    """
    Descritor semelhante ao maven-javadoc-plugin.

    Goals, na ordem do descritor:
        - javadoc       → default `show=protected`, fork da fase generate-sources
        - test-javadoc  → sem configuração default, fork da fase generate-test-sources
        - aggregate     → agregador, sem fork
    """
    from report_exec.core.config.tree import ConfigTree
    from report_exec.core.pipeline.types import GoalDescriptor, PluginDescriptor

    return PluginDescriptor(
        group_id=JAVADOC_GROUP,
        artifact_id=JAVADOC_ARTIFACT,
        version=JAVADOC_VERSION,
        goals=(
            GoalDescriptor(
                goal="javadoc",
                implementation="org.apache.maven.plugins.javadoc.JavadocReport",
                configuration=ConfigTree.from_dict("configuration", {"show": "protected"}),
                parameters=("show", "doctitle", "links", "quiet"),
                execute_phase="generate-sources",
            ),
            GoalDescriptor(
                goal="test-javadoc",
                implementation="org.apache.maven.plugins.javadoc.TestJavadocReport",
                parameters=("show", "doctitle"),
                execute_phase="generate-test-sources",
            ),
            GoalDescriptor(
                goal="aggregate",
                implementation="org.apache.maven.plugins.javadoc.AggregatorJavadocReport",
                parameters=("show", "doctitle"),
                aggregator=True,
            ),
        ),
    )


@pytest.fixture
def harness(javadoc_descriptor) -> PlannerHarness:
    return PlannerHarness([javadoc_descriptor])


# =====================================================
# Projetos
# =====================================================

@pytest.fixture
def module_project():
    """Módulo comum: packaging jar, fora da raiz de execução."""
    from report_exec.core.pipeline.types import Project

    return Project(artifact_id="core", group_id="org.example", version="1.0.0")


@pytest.fixture
def aggregator_project():
    """Raiz de execução com packaging pom e módulos declarados."""
    from report_exec.core.pipeline.types import Project

    return Project(
        artifact_id="parent",
        group_id="org.example",
        version="1.0.0",
        packaging="pom",
        execution_root=True,
        modules=("core", "web"),
    )


@pytest.fixture
def javadoc_ref():
    """Fábrica de ReportPluginRef do javadoc (versão declarada por default)."""
    from report_exec.core.pipeline.types import ReportPluginRef

    def _make(**kwargs):
        kwargs.setdefault("version", JAVADOC_VERSION)
        return ReportPluginRef(group_id=JAVADOC_GROUP, artifact_id=JAVADOC_ARTIFACT, **kwargs)

    return _make
