"""
ReportRegistry: catálogo explícito de implementações de reports.

A verificação "este goal é um report?" e a instanciação configurada do
report são resolvidas por um registry indexado pela identidade do goal
(`group:artifact:goal`), sem inspeção reflexiva de tipos.

Este módulo fornece:
- Report: contrato mínimo de um report executável
- ReportSpec: registro de uma implementação de goal
- ReportRegistry: ponto único de verdade para implementações registradas
- RegistryReportCapability: `ReportCapabilityService` apoiado no registry
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from report_exec.core.config.tree import ConfigTree
from report_exec.core.exceptions import (
    ConfigurationError,
    ReportExecException,
    ReportTypeMismatchError,
)

from .types import GoalDescriptor, GoalExecution, PluginDescriptor


@runtime_checkable
class Report(Protocol):
    """Contrato mínimo de um report: nome de saída e geração."""

    def get_output_name(self) -> str:
        ...

    def get_name(self, locale: str) -> str:
        ...

    def get_description(self, locale: str) -> str:
        ...

    def generate(self, sink: Any, locale: str) -> None:
        ...


ReportFactory = Callable[[ConfigTree], Any]


def goal_key(group_id: str, artifact_id: str, goal: str) -> str:
    return f"{group_id}:{artifact_id}:{goal}"


@dataclass(frozen=True)
class ReportSpec:
    """Implementação registrada de um goal.

    `report=False` registra goals conhecidos que não produzem reports
    (ex.: goals de build) para que sejam ignorados explicitamente.
    """

    group_id: str
    artifact_id: str
    goal: str
    factory: Optional[ReportFactory] = None
    report: bool = True

    @property
    def key(self) -> str:
        return goal_key(self.group_id, self.artifact_id, self.goal)

    def build(self, configuration: ConfigTree) -> Any:
        if self.factory is None:
            raise ConfigurationError(
                message=f"no factory registered for goal {self.key}",
                details={"goal": self.key},
            )
        return self.factory(configuration)


class ReportRegistry:
    """Registry determinístico de ReportSpec.

    Extensibilidade é explícita: implementações são registradas via `register()`.
    Não há discovery automático.
    """

    def __init__(self, specs: Optional[Iterable[ReportSpec]] = None):
        self._specs: Dict[str, ReportSpec] = {}
        if specs:
            for s in specs:
                self.register(s)

    def register(self, spec: ReportSpec) -> None:
        if not isinstance(spec, ReportSpec):
            raise TypeError("spec must be a ReportSpec")
        if not isinstance(spec.goal, str) or not spec.goal.strip():
            raise ValueError("goal must be a non-empty string")
        if spec.key in self._specs:
            raise ValueError(f"goal already registered: {spec.key}")
        self._specs[spec.key] = spec

    def list_ids(self) -> List[str]:
        return sorted(self._specs.keys())

    def find(self, group_id: str, artifact_id: str, goal: str) -> Optional[ReportSpec]:
        return self._specs.get(goal_key(group_id, artifact_id, goal))

    def get(self, group_id: str, artifact_id: str, goal: str) -> ReportSpec:
        key = goal_key(group_id, artifact_id, goal)
        if key not in self._specs:
            raise KeyError(f"unknown goal: {key}")
        return self._specs[key]


class RegistryReportCapability:
    """`ReportCapabilityService` apoiado em um `ReportRegistry`."""

    def __init__(self, registry: ReportRegistry):
        self.registry = registry

    def is_report(self, descriptor: PluginDescriptor, goal: GoalDescriptor) -> bool:
        spec = self.registry.find(descriptor.group_id, descriptor.artifact_id, goal.goal)
        return spec is not None and spec.report

    def configure(self, execution: GoalExecution, session: Any) -> Any:
        descriptor = execution.descriptor
        spec = self.registry.get(descriptor.group_id, descriptor.artifact_id, execution.goal.goal)
        configuration = execution.configuration or ConfigTree(name="configuration")

        try:
            report = spec.build(configuration)
        except ReportExecException:
            raise
        except Exception as e:
            raise ConfigurationError(
                message=f"failed to configure {spec.key}: {e}",
                details={"goal": spec.key, "exception_class": e.__class__.__name__},
            ) from e

        if not isinstance(report, Report):
            raise ReportTypeMismatchError(
                message=f"{spec.key} does not produce a report",
                details={"goal": spec.key, "received": type(report).__name__},
            )
        return report
