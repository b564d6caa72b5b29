# src/report_exec/core/config/errors.py
"""
Exceções da camada de configuração do planner.

Cobrem o carregamento e a resolução das configurações do próprio
planner (imports/excludes de realm, nome da raiz de configuração).
Falhas de configuração de goals de report não pertencem a este módulo:
ver `report_exec.core.exceptions.ConfigurationError`.

Invariantes:
    - Todas as exceções herdam de `ConfigError`
"""


class ConfigError(Exception):
    """Exceção base para erros de configuração do planner."""


class SettingsNotFoundError(ConfigError):
    """
    Arquivo de configuração informado explicitamente não existe.

    Limites explícitos:
        - Não tenta inferir ou criar o arquivo automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"realm": {"excludes": ["doxia-sink-api"]}}
        - override: {"realm": "none"}
    """


class InvalidSettingsError(ConfigError):
    """Configuração resolvida não respeita o formato esperado pelo planner."""
