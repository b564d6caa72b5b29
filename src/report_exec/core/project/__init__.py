"""
Descritor de projeto (YAML/JSON) → ReportPlanRequest.

Ponto de entrada para quem monta o planejamento a partir de arquivo em vez
de construir os tipos canônicos diretamente.
"""

from .loader import load_project, load_request
from .schema import validate_descriptors, validate_project_model

__all__ = [
    "load_project",
    "load_request",
    "validate_descriptors",
    "validate_project_model",
]
