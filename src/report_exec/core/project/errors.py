"""Erros canônicos do descritor de projeto.

O descritor de projeto (build + reporting) é a entrada declarativa do
planner. Falhas de carregamento/validação devem produzir erros
explícitos e estáveis.
"""


class ProjectError(Exception):
    """Erro base do descritor de projeto."""


class ProjectPathMissingError(ProjectError):
    """Caminho do descritor não informado."""


class ProjectFileNotFoundError(ProjectError):
    """Arquivo do descritor não existe no caminho informado."""


class UnsupportedProjectFormatError(ProjectError):
    """Formato não suportado (v1: YAML/JSON)."""


class ProjectParseError(ProjectError):
    """Falha ao parsear YAML/JSON."""


class ProjectValidationError(ProjectError):
    """Descritor não é estruturalmente válido segundo o schema canônico."""
