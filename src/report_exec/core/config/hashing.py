# src/report_exec/core/config/hashing.py
"""
Hashing canônico de configuração.

Gera a identidade estrutural de uma configuração efetiva de goal
(ou de qualquer dicionário de configuração) para fins de rastreabilidade.

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256

Invariantes:
    - Configurações estruturalmente equivalentes produzem o mesmo hash
    - Em árvores, a ordem dos filhos faz parte da identidade
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict, Union

from .tree import ConfigTree


def compute_config_hash(config: Union[Dict[str, Any], ConfigTree]) -> str:
    """
    Gera um hash determinístico de uma configuração.

    Árvores são serializadas pela forma `to_canonical()`, que preserva a
    ordem dos filhos (inclusive entre nomes distintos).

    Args:
        config: Dicionário de configuração ou ConfigTree.

    Returns:
        str: Hash SHA-256 hexadecimal.

    Raises:
        TypeError: Se o objeto não for dict nem ConfigTree.
    """
    payload: Any = config
    if isinstance(config, ConfigTree):
        payload = config.to_canonical()
    elif not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict ou ConfigTree, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
