"""ForkService baseado nos campos de fork declarados no descritor do goal."""

from __future__ import annotations

from typing import Any, Callable, List

from report_exec.core.exceptions import ForkExecutionError, ReportExecException

from .types import GoalExecution


ForkRunner = Callable[[GoalExecution, Any], None]


class DeclaredForkService:
    """
    Detecta forks a partir de `execute_phase` / `execute_goal` do goal e
    delega a execução a um `runner` síncrono.

    Falhas do runner que não sejam exceções do planner são encapsuladas
    em ForkExecutionError.
    """

    def __init__(self, runner: ForkRunner):
        self.runner = runner
        self.executed: List[str] = []

    def has_forks(self, execution: GoalExecution, session: Any) -> bool:
        return execution.goal.forks

    def run_forks(self, execution: GoalExecution, session: Any) -> None:
        try:
            self.runner(execution, session)
        except ReportExecException:
            raise
        except Exception as e:
            raise ForkExecutionError(
                message=f"forked execution failed for {execution.description}: {e}",
                details={
                    "plugin": execution.plugin.id,
                    "goal": execution.goal.goal,
                    "exception_class": e.__class__.__name__,
                },
            ) from e
        self.executed.append(f"{execution.plugin.id}:{execution.goal.goal}")
