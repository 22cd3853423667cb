# src/reposync/core/bootstrap.py
"""
Sequência de bootstrap da aplicação.

    logging (idempotente) → localização do repositório → carregamento da configuração

Este é o único ponto que compõe os três componentes; cada um deles
continua utilizável isoladamente.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from reposync.core.config.codec import DocumentCodec
from reposync.core.config.documents import Configuration
from reposync.core.config.layout import CONTROL_DIR_NAME
from reposync.core.config.loader import load_config
from reposync.core.config.locator import find_control_directory
from reposync.core.crypto.cipher import Decryptor, EncryptionProbe
from reposync.core.logs import bootstrap as logs


def bootstrap(
    starting_path: Optional[Union[str, Path]] = None,
    *,
    codec: Optional[DocumentCodec] = None,
    probe: Optional[EncryptionProbe] = None,
    decryptor: Optional[Decryptor] = None,
    control_dir_name: str = CONTROL_DIR_NAME,
    init_logging: bool = True,
) -> Optional[Configuration]:
    """
    Executa a sequência de inicialização a partir de `starting_path` (padrão: cwd).

    Returns:
        Optional[Configuration]: Configuração carregada, ou `None` quando nenhum
        diretório de controle existe no caminho nem no fallback (cwd).

    Raises:
        PathResolutionError: Se `starting_path` não puder ser canonicalizado.
        ConfigLoadError: Se o repositório existir mas estiver inválido.
    """
    if init_logging:
        logs.init()

    local_dir = find_control_directory(
        Path.cwd() if starting_path is None else starting_path,
        control_dir_name=control_dir_name,
    )
    return load_config(
        local_dir,
        codec=codec,
        probe=probe,
        decryptor=decryptor,
        control_dir_name=control_dir_name,
    )
