# src/report_exec/core/config/settings.py
"""
Configurações do planner de reports.

Define os valores default utilizados na preparação de realms de
plugins e na construção da configuração efetiva de goals, além da
materialização tipada (`PlannerSettings`) a partir do dicionário
resolvido pelo loader.

Chaves suportadas (v1):
    - realm.imports               → tipos de reporting importados do host
    - realm.excludes              → artifactIds excluídos da resolução do realm
    - planner.configuration_root  → nome da raiz da configuração efetiva
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .errors import InvalidSettingsError
from .merge import DEFAULT_CONFIGURATION_ROOT


DEFAULT_REALM_IMPORTS: Tuple[str, ...] = (
    "org.apache.maven.reporting.MavenReport",
    "org.apache.maven.reporting.MavenMultiPageReport",
    "org.apache.maven.doxia.siterenderer.Renderer",
    "org.apache.maven.doxia.sink.SinkFactory",
    "org.codehaus.doxia.sink.Sink",
    "org.apache.maven.doxia.sink.Sink",
    "org.apache.maven.doxia.sink.SinkEventAttributes",
    "org.apache.maven.doxia.logging.LogEnabled",
    "org.apache.maven.doxia.logging.Log",
)

DEFAULT_REALM_EXCLUDES: Tuple[str, ...] = (
    "doxia-site-renderer",
    "doxia-sink-api",
    "maven-reporting-api",
)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "realm": {
        "imports": list(DEFAULT_REALM_IMPORTS),
        "excludes": list(DEFAULT_REALM_EXCLUDES),
    },
    "planner": {
        "configuration_root": DEFAULT_CONFIGURATION_ROOT,
    },
}


def _string_list(value: Any, key: str) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) and v.strip() for v in value):
        raise InvalidSettingsError(f"{key} must be a list of non-empty strings")
    return list(value)


@dataclass(frozen=True)
class PlannerSettings:
    """Configurações efetivas consumidas pelo `ReportExecutionPlanner`."""

    realm_imports: Tuple[str, ...] = DEFAULT_REALM_IMPORTS
    realm_excludes: Tuple[str, ...] = DEFAULT_REALM_EXCLUDES
    configuration_root: str = DEFAULT_CONFIGURATION_ROOT
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "PlannerSettings":
        """
        Materializa settings a partir de um dicionário resolvido.

        Chaves ausentes assumem os defaults; chaves desconhecidas de
        primeiro nível são preservadas em `extra`.

        Raises:
            InvalidSettingsError: Se alguma seção tiver formato inválido.
        """
        if not isinstance(config, dict):
            raise InvalidSettingsError("settings root must be a mapping")

        realm = config.get("realm") or {}
        planner = config.get("planner") or {}
        if not isinstance(realm, dict):
            raise InvalidSettingsError("realm must be a mapping")
        if not isinstance(planner, dict):
            raise InvalidSettingsError("planner must be a mapping")

        imports = realm.get("imports", list(DEFAULT_REALM_IMPORTS))
        excludes = realm.get("excludes", list(DEFAULT_REALM_EXCLUDES))
        root = planner.get("configuration_root", DEFAULT_CONFIGURATION_ROOT)
        if not isinstance(root, str) or not root.strip():
            raise InvalidSettingsError("planner.configuration_root must be a non-empty string")

        return cls(
            realm_imports=tuple(_string_list(imports, "realm.imports")),
            realm_excludes=tuple(_string_list(excludes, "realm.excludes")),
            configuration_root=root,
            extra={k: v for k, v in config.items() if k not in {"realm", "planner"}},
        )
