"""
Schema canônico: descritor de projeto v1.

Materializa o dicionário carregado de YAML/JSON nos tipos imutáveis de
`report_exec.core.pipeline.types`.

Formato (v1):

    project:
      artifact_id: site            # obrigatório
      group_id: org.example
      packaging: pom
      execution_root: true
      modules: [core, web]
      remote_plugin_repositories: [https://repo.example.org/maven2]
    build:
      plugins:            [<plugin>]
      plugin_management:  [<plugin>]
    reporting:
      plugins:
        - group_id: ...
          artifact_id: ...
          version: ...
          configuration: {...}
          reports: [goal, ...]
          report_sets:
            - id: default
              configuration: {...}
              reports: [goal, ...]
    descriptors:                   # opcional, ver `validate_descriptors`
      - group_id: ...
        artifact_id: ...
        version: ...
        goals:
          - goal: javadoc
            implementation: ...
            aggregator: false
            parameters: [...]
            configuration: {...}
            execute_phase: ...
            execute_lifecycle: ...
            execute_goal: ...

Blocos `configuration` seguem as convenções de `ConfigTree.from_dict`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set, Tuple

from report_exec.core.config.tree import ConfigTree
from report_exec.core.pipeline.types import (
    DEFAULT_REPORT_SET_ID,
    Build,
    BuildPlugin,
    Dependency,
    GoalDescriptor,
    PluginDescriptor,
    Project,
    ReportPlanRequest,
    ReportPluginRef,
    ReportSet,
)

from .errors import ProjectValidationError


CONFIGURATION_ROOT = "configuration"


def _is_non_empty_str(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise ProjectValidationError(msg)


def _optional_str(data: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    _expect(isinstance(value, (str, int, float)) and not isinstance(value, bool), f"{where}.{key} must be a string")
    return str(value)


def _str_list(value: Any, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    _expect(isinstance(value, list), f"{where} must be a list")
    for i, item in enumerate(value):
        _expect(_is_non_empty_str(item), f"{where}[{i}] must be a non-empty string")
    return tuple(value)


def _mapping_list(value: Any, where: str) -> List[Dict[str, Any]]:
    if value is None:
        return []
    _expect(isinstance(value, list), f"{where} must be a list")
    for i, item in enumerate(value):
        _expect(isinstance(item, dict), f"{where}[{i}] must be a mapping")
    return list(value)


def _configuration(data: Dict[str, Any], where: str) -> Optional[ConfigTree]:
    raw = data.get("configuration")
    if raw is None:
        return None
    _expect(isinstance(raw, dict), f"{where}.configuration must be a mapping")
    try:
        return ConfigTree.from_dict(CONFIGURATION_ROOT, raw)
    except TypeError as e:
        raise ProjectValidationError(f"{where}.configuration: {e}") from e


def _coordinates(data: Dict[str, Any], where: str) -> Tuple[str, str]:
    group_id = data.get("group_id")
    artifact_id = data.get("artifact_id")
    _expect(_is_non_empty_str(group_id), f"{where}.group_id is required")
    _expect(_is_non_empty_str(artifact_id), f"{where}.artifact_id is required")
    return group_id, artifact_id


def _dependency(data: Dict[str, Any], where: str) -> Dependency:
    group_id, artifact_id = _coordinates(data, where)
    return Dependency(
        group_id=group_id,
        artifact_id=artifact_id,
        version=_optional_str(data, "version", where),
        type=_optional_str(data, "type", where) or "jar",
    )


def _build_plugin(data: Dict[str, Any], where: str) -> BuildPlugin:
    group_id, artifact_id = _coordinates(data, where)
    dependencies = tuple(
        _dependency(d, f"{where}.dependencies[{i}]")
        for i, d in enumerate(_mapping_list(data.get("dependencies"), f"{where}.dependencies"))
    )
    return BuildPlugin(
        group_id=group_id,
        artifact_id=artifact_id,
        version=_optional_str(data, "version", where),
        configuration=_configuration(data, where),
        dependencies=dependencies,
    )


def _report_set(data: Dict[str, Any], where: str) -> ReportSet:
    set_id = data.get("id", DEFAULT_REPORT_SET_ID)
    _expect(_is_non_empty_str(set_id), f"{where}.id must be a non-empty string")
    return ReportSet(
        id=set_id,
        configuration=_configuration(data, where),
        reports=_str_list(data.get("reports"), f"{where}.reports"),
    )


def _report_plugin(data: Dict[str, Any], where: str) -> ReportPluginRef:
    group_id, artifact_id = _coordinates(data, where)
    report_sets = tuple(
        _report_set(s, f"{where}.report_sets[{i}]")
        for i, s in enumerate(_mapping_list(data.get("report_sets"), f"{where}.report_sets"))
    )
    return ReportPluginRef(
        group_id=group_id,
        artifact_id=artifact_id,
        version=_optional_str(data, "version", where),
        configuration=_configuration(data, where),
        reports=_str_list(data.get("reports"), f"{where}.reports"),
        report_sets=report_sets,
    )


def _project(data: Dict[str, Any], build: Optional[Build]) -> Project:
    artifact_id = data.get("artifact_id")
    _expect(_is_non_empty_str(artifact_id), "project.artifact_id is required")

    packaging = data.get("packaging", "jar")
    _expect(_is_non_empty_str(packaging), "project.packaging must be a non-empty string")

    execution_root = data.get("execution_root", False)
    _expect(isinstance(execution_root, bool), "project.execution_root must be boolean")

    return Project(
        artifact_id=artifact_id,
        group_id=_optional_str(data, "group_id", "project"),
        version=_optional_str(data, "version", "project"),
        packaging=packaging,
        execution_root=execution_root,
        modules=_str_list(data.get("modules"), "project.modules"),
        build=build,
        remote_plugin_repositories=_str_list(
            data.get("remote_plugin_repositories"), "project.remote_plugin_repositories"
        ),
    )


def validate_project_model(data: Any, *, session: Any = None) -> ReportPlanRequest:
    """Valida e materializa um descritor de projeto v1."""
    _expect(isinstance(data, dict), "project descriptor must be a mapping/dict")

    project_data = data.get("project")
    _expect(isinstance(project_data, dict), "project must be a mapping")

    build: Optional[Build] = None
    build_data = data.get("build")
    if build_data is not None:
        _expect(isinstance(build_data, dict), "build must be a mapping")
        plugins = tuple(
            _build_plugin(p, f"build.plugins[{i}]")
            for i, p in enumerate(_mapping_list(build_data.get("plugins"), "build.plugins"))
        )
        management: Optional[Tuple[BuildPlugin, ...]] = None
        if build_data.get("plugin_management") is not None:
            management = tuple(
                _build_plugin(p, f"build.plugin_management[{i}]")
                for i, p in enumerate(
                    _mapping_list(build_data.get("plugin_management"), "build.plugin_management")
                )
            )
        build = Build(plugins=plugins, plugin_management=management)

    report_plugins: Optional[Tuple[ReportPluginRef, ...]] = None
    reporting = data.get("reporting")
    if reporting is not None:
        _expect(isinstance(reporting, dict), "reporting must be a mapping")
        report_plugins = tuple(
            _report_plugin(p, f"reporting.plugins[{i}]")
            for i, p in enumerate(_mapping_list(reporting.get("plugins"), "reporting.plugins"))
        )

    return ReportPlanRequest(
        project=_project(project_data, build),
        report_plugins=report_plugins,
        session=session,
    )


def _goal(data: Dict[str, Any], where: str) -> GoalDescriptor:
    goal = data.get("goal")
    _expect(_is_non_empty_str(goal), f"{where}.goal is required")

    aggregator = data.get("aggregator", False)
    _expect(isinstance(aggregator, bool), f"{where}.aggregator must be boolean")

    return GoalDescriptor(
        goal=goal,
        implementation=_optional_str(data, "implementation", where) or "",
        configuration=_configuration(data, where),
        parameters=_str_list(data.get("parameters"), f"{where}.parameters"),
        aggregator=aggregator,
        execute_phase=_optional_str(data, "execute_phase", where),
        execute_lifecycle=_optional_str(data, "execute_lifecycle", where),
        execute_goal=_optional_str(data, "execute_goal", where),
    )


def validate_descriptors(data: Any) -> List[PluginDescriptor]:
    """Valida e materializa a seção `descriptors` (lista de plugins resolvidos)."""
    _expect(isinstance(data, dict), "project descriptor must be a mapping/dict")

    out: List[PluginDescriptor] = []
    seen: Set[str] = set()
    for i, d in enumerate(_mapping_list(data.get("descriptors"), "descriptors")):
        where = f"descriptors[{i}]"
        group_id, artifact_id = _coordinates(d, where)
        version = _optional_str(d, "version", where)
        _expect(bool(version), f"{where}.version is required")

        goals: List[GoalDescriptor] = []
        goal_names: Set[str] = set()
        for j, g in enumerate(_mapping_list(d.get("goals"), f"{where}.goals")):
            goal = _goal(g, f"{where}.goals[{j}]")
            _expect(goal.goal not in goal_names, f"duplicate goal in {where}: {goal.goal}")
            goal_names.add(goal.goal)
            goals.append(goal)

        descriptor = PluginDescriptor(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,  # type: ignore[arg-type]
            goals=tuple(goals),
        )
        _expect(descriptor.id not in seen, f"duplicate descriptor: {descriptor.id}")
        seen.add(descriptor.id)
        out.append(descriptor)

    return out
