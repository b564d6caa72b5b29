# src/report_exec/core/engine/__init__.py
"""
Engine do report_exec.

Componentes principais:
    - version → cadeia de fallback de versões de report-plugins
    - goals   → derivação do conjunto de goals (explícito ou derivado)
    - planner → orquestração e emissão das unidades de report

Invariantes:
    - Report-plugins são processados na ordem de declaração
    - Goals são processados na ordem produzida pelo GoalSetBuilder
    - Uma falha não tolerada interrompe todo o planejamento

Limites explícitos:
    - Não baixa artefatos
    - Não renderiza reports
"""
