# src/report_exec/core/pipeline/__init__.py
"""
# Pipeline Core: report_exec

Este pacote define os **tipos canônicos**, o **contexto de diagnóstico** e
os **contratos dos colaboradores externos** do planner de reports.

## Componentes

- **types**
  - Modelo do projeto (`Project`, `Build`, `BuildPlugin`, `Dependency`)
  - Declarações de reporting (`ReportPluginRef`, `ReportSet`)
  - Descritores (`PluginDescriptor`, `GoalDescriptor`)
  - Saída (`ExecutionUnit`) e entrada (`ReportPlanRequest`) do planner

- **context**
  - `PlanContext`: sink de diagnósticos injetado em cada planejamento

- **services**
  - Protocolos `DescriptorService`, `RealmService`, `ReportCapabilityService`,
    `ForkService`, `FallbackVersionService`

- **registry / descriptors / forks**
  - Implementações em memória dos serviços de capacidade, descritores e forks

## Limites Explícitos

- Não planeja execução (ver `report_exec.core.engine`)
- Não baixa artefatos nem executa reports
"""
