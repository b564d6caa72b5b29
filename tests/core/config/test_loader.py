# tests/core/config/test_loader.py
"""
Testes do carregador de configurações do planner (load_config / load_settings).

Os testes asseguram que:
- sem arquivo de defaults, os defaults embutidos são utilizados
- um arquivo de defaults informado explicitamente é obrigatório
- o arquivo local é opcional e aplicado via deep-merge
- formatos e estruturas inválidas são rejeitados
- `PlannerSettings` reflete a configuração resolvida

Limites explícitos:
    - Não valida o planner em si
    - Não valida hashing de configuração
"""

import json
from pathlib import Path

import pytest

try:
    from report_exec.core.config.errors import (
        InvalidConfigRootTypeError,
        InvalidSettingsError,
        SettingsNotFoundError,
        UnsupportedConfigFormatError,
    )
    from report_exec.core.config.loader import load_config, load_settings
    from report_exec.core.config.settings import (
        DEFAULT_REALM_EXCLUDES,
        DEFAULT_REALM_IMPORTS,
        PlannerSettings,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    load_settings = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


DEFAULTS_YAML = """\
realm:
  imports:
    - org.apache.maven.reporting.MavenReport
  excludes:
    - doxia-sink-api
    - maven-reporting-api
planner:
  configuration_root: configuration
"""

LOCAL_YAML = """\
realm:
  excludes:
    - doxia-sink-api
planner:
  configuration_root: reportConfiguration
"""


def _require_imports():
    """
    Garante que o loader de configurações e suas exceções tipadas estejam disponíveis.

    Decisões arquiteturais:
        - Falha antecipada e explícita quando contratos do loader estão ausentes
        - Não tenta fallback nem implementação alternativa
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/report_exec/core/config/loader.py (load_config, load_settings)\n"
            "- src/report_exec/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_builtin_defaults_when_no_path_is_given():
    _require_imports()
    out = load_config()
    assert out["realm"]["imports"] == list(DEFAULT_REALM_IMPORTS)
    assert out["realm"]["excludes"] == list(DEFAULT_REALM_EXCLUDES)
    assert out["planner"]["configuration_root"] == "configuration"


def test_builtin_defaults_are_not_mutated_by_callers():
    _require_imports()
    out = load_config()
    out["realm"]["excludes"].append("custom")
    assert "custom" not in load_config()["realm"]["excludes"]


def test_missing_defaults_raises(tmp_path: Path):
    """Um arquivo de defaults informado e inexistente é erro fatal."""
    _require_imports()
    with pytest.raises(SettingsNotFoundError):
        load_config(defaults_path=str(tmp_path / "defaults.yaml"))


def test_missing_local_is_ok(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(DEFAULTS_YAML, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))
    assert out["realm"]["excludes"] == ["doxia-sink-api", "maven-reporting-api"]


def test_load_defaults_and_local(tmp_path: Path):
    """
    Verifica que o override local é aplicado via deep-merge sobre os defaults.

    Invariantes:
        - Listas do override substituem integralmente as listas dos defaults
        - Chaves não sobrescritas são preservadas
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(DEFAULTS_YAML, encoding="utf-8")
    local.write_text(LOCAL_YAML, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(local))
    assert out["realm"]["excludes"] == ["doxia-sink-api"]
    assert out["realm"]["imports"] == ["org.apache.maven.reporting.MavenReport"]
    assert out["planner"]["configuration_root"] == "reportConfiguration"


def test_local_json_override(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.json"
    local.write_text(json.dumps({"planner": {"configuration_root": "cfg"}}), encoding="utf-8")

    out = load_config(local_path=str(local))
    assert out["planner"]["configuration_root"] == "cfg"
    assert out["realm"]["excludes"] == list(DEFAULT_REALM_EXCLUDES)


def test_empty_file_is_an_empty_mapping(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text("", encoding="utf-8")
    assert load_config(local_path=str(local)) == load_config()


def test_invalid_root_type_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("- just\n- a\n- list\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=str(defaults))


def test_unsupported_extension_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.toml"
    defaults.write_text("planner = { configuration_root = 'x' }\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=str(defaults))


def test_load_settings_materializes_planner_settings(tmp_path: Path):
    _require_imports()
    local = tmp_path / "local.yaml"
    local.write_text(LOCAL_YAML, encoding="utf-8")

    settings = load_settings(local_path=str(local))

    assert isinstance(settings, PlannerSettings)
    assert settings.realm_excludes == ("doxia-sink-api",)
    assert settings.realm_imports == DEFAULT_REALM_IMPORTS
    assert settings.configuration_root == "reportConfiguration"


def test_settings_preserve_unknown_sections():
    _require_imports()
    settings = PlannerSettings.from_config({"site": {"locale": "en"}})
    assert settings.extra == {"site": {"locale": "en"}}
    assert settings.realm_excludes == DEFAULT_REALM_EXCLUDES


@pytest.mark.parametrize(
    "config",
    [
        {"realm": "none"},
        {"realm": {"imports": "org.apache.maven.reporting.MavenReport"}},
        {"realm": {"excludes": [""]}},
        {"planner": {"configuration_root": ""}},
        {"planner": ["configuration"]},
    ],
)
def test_invalid_settings_are_rejected(config):
    _require_imports()
    with pytest.raises(InvalidSettingsError):
        PlannerSettings.from_config(config)
