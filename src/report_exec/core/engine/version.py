# src/report_exec/core/engine/version.py
"""
Resolução de versão de report-plugins.

A versão efetiva é procurada em ordem estrita, parando na primeira
fonte que fornecer um valor não vazio:

    1. versão declarada no próprio report-plugin
    2. plugin de mesmo group/artifact em build.plugins
    3. plugin de mesmo group/artifact em build.pluginManagement
    4. serviço externo de versão de fallback (com warning)

Invariantes:
    - Nunca retorna versão vazia ou ausente sem levantar VersionResolutionError
    - O modelo do projeto nunca é mutado
    - Uma falha de resolução não produz efeitos além de eventos de diagnóstico

Limites explícitos:
    - Não consulta repositórios diretamente (delegado ao serviço de fallback)
    - Não valida o formato da versão
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from report_exec.core.errors import version_resolution_error
from report_exec.core.exceptions import ReportExecException, VersionResolutionError
from report_exec.core.pipeline.context import DEBUG, PlanContext
from report_exec.core.pipeline.services import FallbackVersionService
from report_exec.core.pipeline.types import (
    Build,
    BuildPlugin,
    DiagnosticKind,
    ReportPluginRef,
)


FALLBACK_WARNINGS = (
    "Report plugin {key} has an empty version.",
    "",
    "It is highly recommended to fix these problems because they threaten the stability of your build.",
    "",
    "For this reason, future Maven versions might no longer support building such malformed projects.",
)


def find_plugin(ref: ReportPluginRef, plugins: Optional[Iterable[BuildPlugin]]) -> Optional[BuildPlugin]:
    """Primeiro plugin com mesmo (group, artifact) que `ref`, ou None."""
    if plugins is None:
        return None
    for plugin in plugins:
        if ref.matches(plugin):
            return plugin
    return None


class VersionResolver:
    """Cadeia de fallback de versões para report-plugins."""

    def __init__(self, fallback: FallbackVersionService):
        self.fallback = fallback

    def resolve(
        self,
        ref: ReportPluginRef,
        build: Optional[Build],
        *,
        session: Any = None,
        ctx: Optional[PlanContext] = None,
    ) -> str:
        """
        Resolve a versão efetiva de `ref`.

        Args:
            ref: Report-plugin declarado.
            build: Seções build.plugins / build.pluginManagement (pode ser None).
            session: Sessão repassada ao serviço de fallback.
            ctx: Sink de diagnósticos (opcional).

        Returns:
            str: Versão resolvida (não vazia).

        Raises:
            VersionResolutionError: Se nenhuma fonte fornecer versão.
        """
        key = ref.key
        ctx = ctx if ctx is not None else PlanContext()
        ctx.log(plugin=key, level=DEBUG, message=f"Resolving version for {key}")

        if ref.version:
            return self._resolved(ctx, key, ref.version, "the reporting.plugins section")

        if build is not None:
            plugin = find_plugin(ref, build.plugins)
            if plugin is not None and plugin.version:
                return self._resolved(ctx, key, plugin.version, "the build.plugins section")

            plugin = find_plugin(ref, build.plugin_management)
            if plugin is not None and plugin.version:
                return self._resolved(ctx, key, plugin.version, "the build.pluginManagement.plugins section")

        for line in FALLBACK_WARNINGS:
            ctx.warn(
                plugin=key,
                message=line.format(key=key),
                kind=DiagnosticKind.VERSION_FALLBACK_USED,
            )

        try:
            version = self.fallback.resolve_version(ref.group_id, ref.artifact_id, session)
        except ReportExecException:
            raise
        except Exception as e:
            payload = version_resolution_error(plugin=key, exc_message=str(e))
            raise VersionResolutionError(
                message=f"Error resolving version for plugin '{key}': {e}",
                details={**payload.details, "exception_class": e.__class__.__name__},
                hint=payload.hint,
            ) from e

        if not version:
            payload = version_resolution_error(plugin=key)
            raise VersionResolutionError(
                message=f"Error resolving version for plugin '{key}': no version available",
                details=payload.details,
                hint=payload.hint,
            )

        return self._resolved(ctx, key, version, "repository")

    @staticmethod
    def _resolved(ctx: PlanContext, key: str, version: str, source: str) -> str:
        ctx.log(
            plugin=key,
            level=DEBUG,
            message=f"Resolved {key} version from {source}: {version}",
            kind=DiagnosticKind.VERSION_RESOLVED,
            source=source,
            version=version,
        )
        return version
