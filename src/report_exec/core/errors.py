"""
report_exec: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do planner de reports.
Erros são artefatos serializáveis e fazem parte do contrato operacional
do planner, devendo ser:

- explícitos
- serializáveis
- rastreáveis até o report-plugin que os originou
- acionáveis
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReportErrorPayload:
    """
    Payload canônico de erro do report_exec.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir no descritor do projeto)
    - decision_required: indica se o planejamento exige decisão humana
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

VERSION_RESOLUTION_ERROR = "VERSION_RESOLUTION_ERROR"
DESCRIPTOR_RESOLUTION_ERROR = "DESCRIPTOR_RESOLUTION_ERROR"
GOAL_NOT_FOUND = "GOAL_NOT_FOUND"
REALM_SETUP_ERROR = "REALM_SETUP_ERROR"
CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
FORK_EXECUTION_ERROR = "FORK_EXECUTION_ERROR"

# Planner
REPORT_PLANNING_ERROR = "REPORT_PLANNING_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def goal_not_found(
    *,
    goal: str,
    plugin: str,
    available_goals: List[str],
    hint: str = "Remova o goal da declaração de reporting ou verifique a versão do plugin.",
) -> ReportErrorPayload:
    return ReportErrorPayload(
        type=GOAL_NOT_FOUND,
        message="Goal declarado não existe no descritor do plugin",
        details={
            "goal": goal,
            "plugin": plugin,
            "available_goals": available_goals,
        },
        hint=hint,
    )


def version_resolution_error(
    *,
    plugin: str,
    exc_message: Optional[str] = None,
    hint: str = "Declare explicitamente a versão do report-plugin ou do plugin correspondente em build.plugins/pluginManagement.",
) -> ReportErrorPayload:
    return ReportErrorPayload(
        type=VERSION_RESOLUTION_ERROR,
        message="Não foi possível determinar a versão do report-plugin",
        details={
            "plugin": plugin,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def report_planning_error(
    *,
    plugin: str,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique a declaração do report-plugin indicado. Nenhum fallback é aplicado automaticamente.",
) -> ReportErrorPayload:
    return ReportErrorPayload(
        type=REPORT_PLANNING_ERROR,
        message=f"Failed to get report for {plugin}",
        details={
            "plugin": plugin,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )
