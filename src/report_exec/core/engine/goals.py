# src/report_exec/core/engine/goals.py
"""
Derivação do conjunto de goals de um report-plugin.

Dois modos:

    - Derivado (nenhum `reports` e nenhum report-set declarado):
      todos os goals do descritor, na ordem do descritor, cada um com a
      configuração default do próprio goal. `user_defined = False`.

    - Explícito: primeiro a lista `reports` do report-plugin (com a
      configuração do report-plugin), depois cada report-set na ordem de
      declaração (com a configuração do report-set). `user_defined = True`.

Deduplicação:
    - Dentro da lista `reports`: primeira ocorrência vence, repetições
      são descartadas com warning
    - Dentro de cada report-set: idem, de forma independente por set
    - Entre sets diferentes (ou entre `reports` e um set), repetições
      são mantidas: o mesmo goal roda uma vez por set

Limites explícitos:
    - Não verifica se o goal existe no descritor (feito pelo planner)
    - Não sabe se um goal é um report
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from report_exec.core.pipeline.context import PlanContext
from report_exec.core.pipeline.types import (
    DiagnosticKind,
    GoalWorkItem,
    PluginDescriptor,
    ReportPluginRef,
)


@dataclass(frozen=True)
class GoalSet:
    items: Tuple[GoalWorkItem, ...]
    user_defined: bool

    def goals(self) -> List[str]:
        return [item.goal for item in self.items]


class GoalSetBuilder:
    """Transforma uma declaração de report-plugin em itens de goal ordenados."""

    def build(
        self,
        ref: ReportPluginRef,
        descriptor: PluginDescriptor,
        ctx: Optional[PlanContext] = None,
    ) -> GoalSet:
        ctx = ctx if ctx is not None else PlanContext()

        if not ref.reports and not ref.report_sets:
            # todos os goals; o planner filtra os que não são reports
            items = tuple(
                GoalWorkItem(
                    goal=goal.goal,
                    plugin=ref,
                    descriptor=descriptor,
                    configuration=goal.configuration,
                )
                for goal in descriptor.goals
            )
            return GoalSet(items=items, user_defined=False)

        items_list: List[GoalWorkItem] = []

        seen: Set[str] = set()
        for report in ref.reports:
            if report in seen:
                ctx.warn(
                    plugin=ref.key,
                    message=f"{report} report is declared twice in default reports",
                    kind=DiagnosticKind.DUPLICATE_GOAL_DROPPED,
                    goal=report,
                )
                continue
            seen.add(report)
            items_list.append(
                GoalWorkItem(
                    goal=report,
                    plugin=ref,
                    descriptor=descriptor,
                    configuration=ref.configuration,
                )
            )

        for report_set in ref.report_sets:
            seen = set()
            for report in report_set.reports:
                if report in seen:
                    ctx.warn(
                        plugin=ref.key,
                        message=f"{report} report is declared twice in {report_set.id} reportSet",
                        kind=DiagnosticKind.DUPLICATE_GOAL_DROPPED,
                        goal=report,
                        report_set=report_set.id,
                    )
                    continue
                seen.add(report)
                items_list.append(
                    GoalWorkItem(
                        goal=report,
                        plugin=ref,
                        descriptor=descriptor,
                        configuration=report_set.configuration,
                        report_set_id=report_set.id,
                    )
                )

        return GoalSet(items=tuple(items_list), user_defined=True)
