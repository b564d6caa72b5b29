# src/report_exec/core/engine/planner.py
"""
Planner de execução de reports.

Este módulo orquestra, para cada report-plugin declarado e na ordem de
declaração:

    1. resolução de versão (VersionResolver)
    2. herança de dependências do plugin de build correspondente
    3. obtenção do descritor resolvido (DescriptorService)
    4. derivação do conjunto de goals (GoalSetBuilder)
    5. para cada goal: verificação no descritor, supressão de agregadores
       derivados, preparação do realm, verificação "é report?", merge de
       configuração, instanciação configurada e execução de forks

A saída é a lista ordenada de `ExecutionUnit`.

Política de falhas:
    - Falhas toleradas (goal que não é report, tipo incompatível, API
      legada removida, agregador derivado fora da raiz, goal duplicado)
      são registradas no PlanContext e o goal é ignorado
    - Qualquer outra falha interrompe o planejamento: `plan()` levanta
      ReportPlanningError com a coordenada do report-plugin e a causa
      encadeada; plugins seguintes não são processados e nenhuma
      lista parcial é retornada

Invariantes:
    - Processamento estritamente sequencial
    - O modelo do projeto e as declarações nunca são mutados
    - Cada unidade só é emitida após a conclusão de seus forks
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set, Tuple, Type

from report_exec.core.config.merge import merge_configuration
from report_exec.core.config.settings import PlannerSettings
from report_exec.core.errors import (
    CONFIGURATION_ERROR,
    DESCRIPTOR_RESOLUTION_ERROR,
    FORK_EXECUTION_ERROR,
    GOAL_NOT_FOUND,
    REALM_SETUP_ERROR,
    VERSION_RESOLUTION_ERROR,
    ReportErrorPayload,
    goal_not_found,
    report_planning_error,
)
from report_exec.core.exceptions import (
    ConfigurationError,
    DescriptorResolutionError,
    ForkExecutionError,
    GoalNotFoundError,
    LegacyApiIncompatibilityError,
    RealmSetupError,
    ReportExecException,
    ReportPlanningError,
    ReportTypeMismatchError,
    VersionResolutionError,
)
from report_exec.core.pipeline.context import DEBUG, INFO, PlanContext
from report_exec.core.pipeline.services import (
    DescriptorService,
    FallbackVersionService,
    ForkService,
    RealmService,
    ReportCapabilityService,
)
from report_exec.core.pipeline.types import (
    Build,
    Dependency,
    DiagnosticKind,
    ExecutionUnit,
    GoalDescriptor,
    GoalExecution,
    GoalWorkItem,
    PluginDescriptor,
    PluginIdentity,
    ReportPlanRequest,
    ReportPluginRef,
)

from .goals import GoalSetBuilder
from .version import VersionResolver, find_plugin


_ERROR_CODES: Dict[Type[ReportExecException], str] = {
    VersionResolutionError: VERSION_RESOLUTION_ERROR,
    DescriptorResolutionError: DESCRIPTOR_RESOLUTION_ERROR,
    GoalNotFoundError: GOAL_NOT_FOUND,
    RealmSetupError: REALM_SETUP_ERROR,
    ConfigurationError: CONFIGURATION_ERROR,
    ForkExecutionError: FORK_EXECUTION_ERROR,
}


def describe_fork(goal: GoalDescriptor) -> str:
    """Descrição textual do fork requerido por `goal`."""
    if goal.execute_phase:
        lifecycle = f"[{goal.execute_lifecycle}]" if goal.execute_lifecycle else ""
        return f"'{lifecycle}{goal.execute_phase}' forked phase execution"
    return f"'{goal.execute_goal}' forked goal execution"


class ReportExecutionPlanner:
    """Planner canônico de reports (resolução + configuração + forks)."""

    def __init__(
        self,
        *,
        descriptors: DescriptorService,
        realms: RealmService,
        capabilities: ReportCapabilityService,
        forks: ForkService,
        versions: FallbackVersionService,
        settings: Optional[PlannerSettings] = None,
        realm_parent: Any = None,
    ):
        self.descriptors = descriptors
        self.realms = realms
        self.capabilities = capabilities
        self.forks = forks
        self.settings = settings if settings is not None else PlannerSettings()
        self.realm_parent = realm_parent
        self.version_resolver = VersionResolver(versions)
        self.goal_set_builder = GoalSetBuilder()

    # ------------------------------------------------------------------
    # Entrada pública
    # ------------------------------------------------------------------

    def plan(self, request: ReportPlanRequest, ctx: Optional[PlanContext] = None) -> List[ExecutionUnit]:
        """
        Produz a lista ordenada de unidades de report de `request`.

        Args:
            request: Projeto, declarações de reporting e sessão.
            ctx: Sink de diagnósticos (um novo é criado se omitido).

        Returns:
            List[ExecutionUnit]: Unidades na ordem de produção.

        Raises:
            ReportPlanningError: Se o processamento de algum report-plugin falhar.
        """
        if request.report_plugins is None:
            return []

        ctx = ctx if ctx is not None else PlanContext()

        seen: Set[str] = set()
        units: List[ExecutionUnit] = []

        plugin_key = ""
        try:
            for ref in request.report_plugins:
                plugin_key = ref.key

                if plugin_key in seen:
                    ctx.log(
                        plugin=plugin_key,
                        level=INFO,
                        message=f"Plugin {plugin_key} will be executed more than one time",
                        kind=DiagnosticKind.PLUGIN_REPEATED,
                    )
                seen.add(plugin_key)

                units.extend(self._plan_plugin(request, ref, ctx))

        except Exception as e:
            payload = self._exception_to_error(e)
            failure = report_planning_error(
                plugin=plugin_key,
                exc_type=e.__class__.__name__,
                exc_message=str(e),
            )
            raise ReportPlanningError(
                message=failure.message,
                details={
                    "plugin": plugin_key,
                    "error": payload.to_dict(),
                },
                hint=failure.hint,
            ) from e

        return units

    # ------------------------------------------------------------------
    # Um report-plugin
    # ------------------------------------------------------------------

    def _plan_plugin(
        self,
        request: ReportPlanRequest,
        ref: ReportPluginRef,
        ctx: PlanContext,
    ) -> List[ExecutionUnit]:
        version = self.version_resolver.resolve(ref, request.build, session=request.session, ctx=ctx)
        identity = PluginIdentity(
            group_id=ref.group_id,
            artifact_id=ref.artifact_id,
            version=version,
            dependencies=self._inherited_dependencies(ref, request.build),
        )
        ctx.log(
            plugin=ref.key,
            level=INFO,
            message=f"Configuring report plugin {identity.id}",
            kind=DiagnosticKind.PLUGIN_CONFIGURED,
        )

        descriptor = self._get_descriptor(request, identity)

        goal_set = self.goal_set_builder.build(ref, descriptor, ctx)

        units: List[ExecutionUnit] = []
        for item in goal_set.items:
            unit = self._prepare_unit(request, identity, item, goal_set.user_defined, ctx)
            if unit is not None:
                units.append(unit)

        if units:
            count = len(units)
            ctx.log(
                plugin=ref.key,
                level=INFO,
                message="{} report{} {} for {}:{}: {}".format(
                    count,
                    "s" if count > 1 else "",
                    "configured" if goal_set.user_defined else "detected",
                    identity.artifact_id,
                    identity.version,
                    ", ".join(u.goal for u in units),
                ),
                kind=DiagnosticKind.REPORTS_SUMMARY,
                goals=[u.goal for u in units],
                user_defined=goal_set.user_defined,
            )

        return units

    def _inherited_dependencies(self, ref: ReportPluginRef, build: Optional[Build]) -> Tuple[Dependency, ...]:
        """Dependências do plugin de build de mesma identidade (plugins antes de pluginManagement)."""
        if build is None:
            return ()
        configured = find_plugin(ref, build.plugins)
        if configured is None:
            configured = find_plugin(ref, build.plugin_management)
        if configured is None:
            return ()
        return tuple(configured.dependencies)

    def _get_descriptor(self, request: ReportPlanRequest, identity: PluginIdentity) -> PluginDescriptor:
        try:
            return self.descriptors.get_descriptor(
                identity,
                request.project.remote_plugin_repositories,
                request.session,
            )
        except ReportExecException:
            raise
        except Exception as e:
            raise DescriptorResolutionError(
                message=f"Plugin {identity.id} could not be resolved: {e}",
                details={"plugin": identity.id, "exception_class": e.__class__.__name__},
            ) from e

    # ------------------------------------------------------------------
    # Um goal
    # ------------------------------------------------------------------

    def _prepare_unit(
        self,
        request: ReportPlanRequest,
        identity: PluginIdentity,
        item: GoalWorkItem,
        user_defined: bool,
        ctx: PlanContext,
    ) -> Optional[ExecutionUnit]:
        descriptor = item.descriptor
        key = item.plugin.key

        goal = descriptor.get_goal(item.goal)
        if goal is None:
            payload = goal_not_found(
                goal=item.goal,
                plugin=descriptor.id,
                available_goals=list(descriptor.goal_names()),
            )
            raise GoalNotFoundError(
                message=f"Could not find goal '{item.goal}' in plugin {descriptor.id}",
                details=payload.details,
                hint=payload.hint,
            )

        if not user_defined and goal.aggregator and not request.project.can_aggregate():
            # agregadores derivados só rodam na raiz da execução
            ctx.log(
                plugin=key,
                level=DEBUG,
                message=f"Skipping aggregator goal {identity.id}:{goal.goal} outside of the aggregating execution root",
                kind=DiagnosticKind.AGGREGATOR_SKIPPED,
                goal=goal.goal,
            )
            return None

        self._prepare_realm(request, descriptor)

        is_report = self._is_report(identity, descriptor, goal, ctx)
        if is_report is None:
            return None
        if not is_report:
            if user_defined:
                ctx.warn(
                    plugin=key,
                    message=(
                        f"Ignoring {identity.id}:{goal.goal} goal since it is not a report: "
                        "should be removed from reporting configuration in POM"
                    ),
                    kind=DiagnosticKind.GOAL_SKIPPED_NOT_REPORT,
                    goal=goal.goal,
                )
            else:
                ctx.log(
                    plugin=key,
                    level=DEBUG,
                    message=f"Skipping non report goal {identity.id}:{goal.goal}",
                    kind=DiagnosticKind.GOAL_SKIPPED_NOT_REPORT,
                    goal=goal.goal,
                )
            return None

        build = request.build
        management = find_plugin(item.plugin, build.plugin_management) if build is not None else None

        configuration = merge_configuration(
            goal.configuration,
            management.configuration if management is not None else None,
            item.plugin.configuration,
            item.configuration,
            goal.parameters,
            root_name=self.settings.configuration_root,
        )

        execution = GoalExecution(
            plugin=identity,
            descriptor=descriptor,
            goal=goal,
            configuration=configuration,
        )

        report = self._configure(request, execution, ctx)
        if report is None:
            return None

        unit = ExecutionUnit(
            goal=goal.goal,
            plugin=identity,
            configuration=configuration,
            report=report,
            report_set_id=item.report_set_id,
        )

        self._run_forks(request, execution, ctx)

        return unit

    def _prepare_realm(self, request: ReportPlanRequest, descriptor: PluginDescriptor) -> None:
        try:
            self.realms.prepare_realm(
                descriptor,
                request.session,
                self.realm_parent,
                list(self.settings.realm_imports),
                list(self.settings.realm_excludes),
            )
        except ReportExecException:
            raise
        except Exception as e:
            raise RealmSetupError(
                message=f"Unable to set up realm for {descriptor.id}: {e}",
                details={"plugin": descriptor.id, "exception_class": e.__class__.__name__},
            ) from e

    def _is_report(
        self,
        identity: PluginIdentity,
        descriptor: PluginDescriptor,
        goal: GoalDescriptor,
        ctx: PlanContext,
    ) -> Optional[bool]:
        """None quando a implementação do goal não pode sequer ser inspecionada."""
        try:
            return bool(self.capabilities.is_report(descriptor, goal))
        except (ReportTypeMismatchError, LegacyApiIncompatibilityError) as e:
            ctx.warn(
                plugin=identity.key,
                message=f"Skipping {identity.id} mojoExecution.goal {goal.goal}: {e}",
                kind=DiagnosticKind.GOAL_SKIPPED_INCOMPATIBLE,
                goal=goal.goal,
            )
            return None
        except ReportExecException:
            raise
        except Exception as e:
            raise ConfigurationError(
                message=f"Unable to inspect {identity.id}:{goal.goal}: {e}",
                details={
                    "plugin": identity.id,
                    "goal": goal.goal,
                    "exception_class": e.__class__.__name__,
                },
            ) from e

    def _configure(self, request: ReportPlanRequest, execution: GoalExecution, ctx: PlanContext) -> Any:
        key = execution.plugin.key
        goal = execution.goal.goal
        try:
            return self.capabilities.configure(execution, request.session)
        except ReportTypeMismatchError:
            ctx.warn(
                plugin=key,
                message=f"Skipping {execution.plugin.id}:{goal}: configured goal is not a report",
                kind=DiagnosticKind.GOAL_SKIPPED_INCOMPATIBLE,
                goal=goal,
            )
            return None
        except LegacyApiIncompatibilityError:
            ctx.warn(
                plugin=key,
                message=f"Skipping {execution.plugin.id}:{goal}: goal requires the removed plugin registry API",
                kind=DiagnosticKind.GOAL_SKIPPED_INCOMPATIBLE,
                goal=goal,
            )
            return None
        except ReportExecException:
            raise
        except Exception as e:
            raise ConfigurationError(
                message=f"Unable to configure {execution.plugin.id}:{goal}: {e}",
                details={
                    "plugin": execution.plugin.id,
                    "goal": goal,
                    "exception_class": e.__class__.__name__,
                },
            ) from e

    def _run_forks(self, request: ReportPlanRequest, execution: GoalExecution, ctx: PlanContext) -> None:
        if not self.forks.has_forks(execution, request.session):
            return

        key = execution.plugin.key
        fork = describe_fork(execution.goal)
        ctx.log(
            plugin=key,
            level=INFO,
            message=f"Preparing {execution.description} requires {fork}",
            kind=DiagnosticKind.FORK_REQUIRED,
            goal=execution.goal.goal,
        )

        try:
            self.forks.run_forks(execution, request.session)
        except ReportExecException:
            raise
        except Exception as e:
            raise ForkExecutionError(
                message=f"{fork} failed for {execution.description}: {e}",
                details={
                    "plugin": execution.plugin.id,
                    "goal": execution.goal.goal,
                    "exception_class": e.__class__.__name__,
                },
            ) from e

        ctx.log(
            plugin=key,
            level=INFO,
            message=f"{fork} for {execution.description} preparation done",
            kind=DiagnosticKind.FORK_COMPLETED,
            goal=execution.goal.goal,
        )

    # ------------------------------------------------------------------
    # Exceção -> ReportErrorPayload
    # ------------------------------------------------------------------

    def _exception_to_error(self, exc: Exception) -> ReportErrorPayload:
        """Converte exceções em ReportErrorPayload (serializável, acionável)."""
        if isinstance(exc, ReportExecException):
            code = exc.__class__.__name__
            for exc_type, candidate in _ERROR_CODES.items():
                if isinstance(exc, exc_type):
                    code = candidate
                    break
            return ReportErrorPayload(
                type=code,
                message=exc.message or "Erro de planejamento",
                details=dict(exc.details or {}),
                hint=exc.hint,
                decision_required=exc.decision_required,
            )

        return ReportErrorPayload(
            type=exc.__class__.__name__,
            message=str(exc) or "Erro inesperado durante o planejamento",
            details={
                "exception_class": exc.__class__.__name__,
            },
            hint="Verifique a declaração do report-plugin e os serviços externos.",
        )
