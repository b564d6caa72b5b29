"""Catálogo em memória de descritores de plugins (DescriptorService)."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from report_exec.core.exceptions import DescriptorResolutionError

from .types import PluginDescriptor, PluginIdentity


class DescriptorCatalog:
    """Descritores indexados por `group:artifact:version`.

    Coordenadas desconhecidas levantam DescriptorResolutionError, como um
    serviço real faria para um artefato não resolvível.
    """

    def __init__(self, descriptors: Optional[Iterable[PluginDescriptor]] = None):
        self._descriptors: Dict[str, PluginDescriptor] = {}
        self.requests: List[PluginIdentity] = []
        if descriptors:
            for d in descriptors:
                self.add(d)

    def add(self, descriptor: PluginDescriptor) -> None:
        if descriptor.id in self._descriptors:
            raise ValueError(f"Duplicate plugin descriptor: {descriptor.id}")
        self._descriptors[descriptor.id] = descriptor

    def get_descriptor(
        self,
        plugin: PluginIdentity,
        remote_repositories: Sequence[str],
        session: Any,
    ) -> PluginDescriptor:
        self.requests.append(plugin)
        descriptor = self._descriptors.get(plugin.id)
        if descriptor is None:
            raise DescriptorResolutionError(
                message=f"Plugin {plugin.id} could not be resolved",
                details={
                    "plugin": plugin.id,
                    "remote_repositories": list(remote_repositories),
                },
                hint="Verifique a versão declarada e os repositórios de plugins do projeto.",
            )
        return descriptor
