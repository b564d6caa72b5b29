# src/report_exec/core/pipeline/context.py
"""
Contexto de diagnóstico de um planejamento de reports.

Este módulo define o `PlanContext`, o sink de diagnósticos injetado em
cada chamada de planejamento. Ele substitui qualquer logger global:
todo evento relevante (versão resolvida via fallback, goal duplicado,
goal ignorado por não ser report, fork requerido, ...) é registrado
como evento estruturado.

Responsabilidades do módulo:
    - Manter identidade do planejamento (`plan_id`, `created_at`)
    - Registrar eventos estruturados com `DiagnosticKind`
    - Coletar warnings agrupados por report-plugin

Invariantes:
    - Eventos sempre incluem `plan_id`, `plugin`, `level` e `kind`
    - Warnings são agrupados pela chave `group:artifact` do report-plugin
    - Cada planejamento possui seu próprio contexto

Limites explícitos:
    - Não planeja nem resolve nada
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from .types import DiagnosticKind


DEBUG = "debug"
INFO = "info"
WARNING = "warning"


@dataclass
class PlanContext:
    """
    Sink de diagnósticos de uma chamada de planejamento.

    Decisões arquiteturais:
        - O contexto é passado explicitamente ao planner (sem estado global)
        - Eventos são dicts simples, consumíveis por qualquer backend
        - Warnings são registrados também como eventos de nível "warning"

    Invariantes:
        - `events` preserva a ordem de emissão
        - `warnings[plugin]` preserva a ordem de emissão por plugin
    """
    plan_id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(
        self,
        *,
        plugin: Optional[str],
        level: str,
        message: str,
        kind: Optional[DiagnosticKind] = None,
        **extra: Any,
    ) -> None:
        event = {
            "plan_id": self.plan_id,
            "plugin": plugin,
            "level": level,
            "kind": kind.value if kind is not None else None,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, plugin: str, message: str) -> None:
        if plugin not in self.warnings:
            self.warnings[plugin] = []
        self.warnings[plugin].append(message)

    def warn(self, *, plugin: str, message: str, kind: DiagnosticKind, **extra: Any) -> None:
        self.log(plugin=plugin, level=WARNING, message=message, kind=kind, **extra)
        self.add_warning(plugin=plugin, message=message)

    # -----------------------------
    # Consulta
    # -----------------------------
    def events_of(self, kind: DiagnosticKind) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("kind") == kind.value]
