# src/report_exec/core/pipeline/services.py
"""
Contratos dos colaboradores externos do planner.

O planner não baixa artefatos, não monta isolamento de carregamento e
não executa reports. Essas capacidades são consumidas através dos
protocolos abaixo, verificáveis por duck typing (`@runtime_checkable`):

    - DescriptorService        → descritor de um plugin resolvido
    - RealmService             → preparação do contexto isolado do plugin
    - ReportCapabilityService  → "é report?" e instanciação configurada
    - ForkService              → detecção e execução de forks
    - FallbackVersionService   → versão de fallback para plugins sem versão

Decisões arquiteturais:
    - O protocolo não impõe herança, apenas conformidade estrutural
    - Todas as chamadas são síncronas e bloqueiam o planner
    - Falhas são sinalizadas por exceções de `report_exec.core.exceptions`

Limites explícitos:
    - Não contém implementação concreta de resolução ou execução
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from .types import GoalDescriptor, GoalExecution, PluginDescriptor, PluginIdentity


@runtime_checkable
class DescriptorService(Protocol):
    def get_descriptor(
        self,
        plugin: PluginIdentity,
        remote_repositories: Sequence[str],
        session: Any,
    ) -> PluginDescriptor:
        """Resolve o plugin; falhas levantam DescriptorResolutionError."""
        ...


@runtime_checkable
class RealmService(Protocol):
    def prepare_realm(
        self,
        descriptor: PluginDescriptor,
        session: Any,
        parent: Optional[Any],
        imports: Sequence[str],
        exclude_artifact_ids: Sequence[str],
    ) -> None:
        """Prepara o contexto isolado; falhas levantam RealmSetupError."""
        ...


@runtime_checkable
class ReportCapabilityService(Protocol):
    def is_report(self, descriptor: PluginDescriptor, goal: GoalDescriptor) -> bool:
        ...

    def configure(self, execution: GoalExecution, session: Any) -> Any:
        """
        Instancia e configura o report de `execution`.

        Raises:
            ReportTypeMismatchError: objeto produzido não é report (tolerado).
            LegacyApiIncompatibilityError: API legada removida (tolerado).
            ConfigurationError: qualquer outra falha.
        """
        ...


@runtime_checkable
class ForkService(Protocol):
    def has_forks(self, execution: GoalExecution, session: Any) -> bool:
        ...

    def run_forks(self, execution: GoalExecution, session: Any) -> None:
        """Executa os forks de `execution`; falhas levantam ForkExecutionError."""
        ...


@runtime_checkable
class FallbackVersionService(Protocol):
    def resolve_version(self, group_id: str, artifact_id: str, session: Any) -> str:
        """Versão de fallback; falhas levantam VersionResolutionError."""
        ...
