"""
report_exec: Canonical Exceptions (v1)

Exceções tipadas levantadas durante o planejamento de reports.

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- `ReportPlanningError` é a única exceção que atravessa `plan()`; as demais
  são encadeadas como causa (`__cause__`).
- `ReportTypeMismatchError` e `LegacyApiIncompatibilityError` são as duas
  falhas de configuração toleradas pelo planner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ReportExecException(Exception):
    """Base class para exceções do planner.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None
    decision_required: bool = False

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Resolução
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VersionResolutionError(ReportExecException):
    """Nenhuma versão pôde ser determinada, nem via serviço de fallback."""


@dataclass(frozen=True)
class DescriptorResolutionError(ReportExecException):
    """Coordenada do plugin não pôde ser resolvida, parseada ou validada."""


@dataclass(frozen=True)
class GoalNotFoundError(ReportExecException):
    """Goal declarado não existe no descritor resolvido."""


# ---------------------------------------------------------------------------
# Preparação / configuração
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RealmSetupError(ReportExecException):
    """Contexto isolado de carregamento do plugin não pôde ser preparado."""


@dataclass(frozen=True)
class ConfigurationError(ReportExecException):
    """Instanciação ou configuração de um goal falhou."""


@dataclass(frozen=True)
class ReportTypeMismatchError(ConfigurationError):
    """Objeto configurado não implementa o contrato de report (tolerado)."""


@dataclass(frozen=True)
class LegacyApiIncompatibilityError(ConfigurationError):
    """Goal depende da API removida de registro de plugins (tolerado)."""


@dataclass(frozen=True)
class ForkExecutionError(ReportExecException):
    """Fase ou goal forkado requerido pelo goal falhou."""


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReportPlanningError(ReportExecException):
    """Falha no processamento de um report-plugin (encapsulada com a coordenada)."""
