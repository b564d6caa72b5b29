"""Loader canônico do descritor de projeto (YAML/JSON).

Notas:
- YAML é preferencial, JSON é alternativo.
- O formato é inferido pela extensão do arquivo.
- `load_request` combina carregamento e validação estrutural.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from report_exec.core.pipeline.types import ReportPlanRequest

from .errors import (
    ProjectFileNotFoundError,
    ProjectParseError,
    ProjectPathMissingError,
    UnsupportedProjectFormatError,
)
from .schema import validate_project_model


def load_project(*, path: Optional[str]) -> Dict[str, Any]:
    """Carrega o descritor de projeto a partir de YAML/JSON.

    Args:
        path: caminho para o arquivo do descritor.

    Raises:
        ProjectPathMissingError: se path estiver ausente.
        ProjectFileNotFoundError: se arquivo não existir.
        UnsupportedProjectFormatError: se extensão não suportada.
        ProjectParseError: se parsing falhar.
    """
    if not path or not str(path).strip():
        raise ProjectPathMissingError("project descriptor path is required")

    p = Path(path)
    if not p.exists():
        raise ProjectFileNotFoundError(f"project file not found: {p}")

    suffix = p.suffix.lower()
    raw = p.read_text(encoding="utf-8")

    try:
        if suffix in {".yml", ".yaml"}:
            data = yaml.safe_load(raw)
        elif suffix == ".json":
            data = json.loads(raw)
        else:
            raise UnsupportedProjectFormatError(f"unsupported project format: {suffix}")
    except UnsupportedProjectFormatError:
        raise
    except Exception as e:
        raise ProjectParseError(str(e) or "failed to parse project descriptor") from e

    if data is None:
        raise ProjectParseError("project file is empty")

    if not isinstance(data, dict):
        raise ProjectParseError("project root must be a mapping/dict")

    return data


def load_request(*, path: Optional[str], session: Any = None) -> ReportPlanRequest:
    """Carrega e valida o descritor, produzindo um ReportPlanRequest."""
    return validate_project_model(load_project(path=path), session=session)
