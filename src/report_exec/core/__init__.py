# src/report_exec/core/__init__.py
"""
Core do report_exec.

Este pacote reúne a implementação do motor de resolução e configuração
de report-plugins: dado um projeto e suas declarações de reporting,
produz a lista ordenada de reports executáveis com configuração
efetiva completamente mesclada.

Componentes principais:
    - config   → ConfigTree, merge em quatro níveis, settings do planner
    - pipeline → tipos, contexto de diagnóstico e contratos de serviços externos
    - engine   → resolução de versão, conjunto de goals e planner
    - project  → carregamento do descritor de projeto (YAML/JSON)

Limites explícitos:
    - Não baixa artefatos nem monta isolamento de carregamento
    - Não executa nem renderiza reports
"""
