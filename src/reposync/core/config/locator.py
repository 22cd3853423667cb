# src/reposync/core/config/locator.py
"""
Localização do diretório raiz de um repositório local.

Este módulo implementa a busca ascendente pelo diretório de controle
(`.reposync`) a partir de um caminho inicial qualquer, como ocorre quando
a aplicação é executada de dentro de uma subpasta do repositório.

Política de busca:
    - O caminho inicial é canonicalizado (absoluto, symlinks resolvidos)
    - Em cada diretório candidato, exige-se o diretório de controle
      E o arquivo de config dentro dele
    - Na primeira ocorrência, retorna-se o pai do diretório de controle
    - A busca termina na raiz do filesystem (pai == candidato)

Decisões arquiteturais:
    - "Não encontrado" NÃO é erro: a busca degrada para o cwd canonicalizado
    - Quem precisa distinguir "encontrado" de "fallback" deve usar
      `has_control_directory()` sobre o resultado
    - Nenhum resultado é cacheado; cada chamada consulta o filesystem

Limites explícitos:
    - Não lê nem valida o conteúdo dos arquivos de configuração
    - Não cria diretórios
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .errors import PathResolutionError
from .layout import CONFIG_FILE_NAME, CONTROL_DIR_NAME


logger = logging.getLogger(__name__)


def _canonicalize(path: Union[str, Path]) -> Path:
    """
    Canonicaliza `path`, exigindo resolução estrita sempre que possível.

    Decisões arquiteturais:
        - `resolve(strict=True)` primeiro: é o único modo que reporta ciclos
          de symlinks em todas as versões suportadas do interpretador
        - Apenas `FileNotFoundError` degrada para o modo não estrito,
          pois o caminho inicial não precisa existir

    Raises:
        PathResolutionError: Ciclo de symlinks, permissão negada ou qualquer
            outra recusa do filesystem.
    """
    candidate = Path(path)
    try:
        try:
            return candidate.resolve(strict=True)
        except FileNotFoundError:
            return candidate.resolve()
    except (OSError, RuntimeError) as e:
        # RuntimeError: ciclo de symlinks em interpretadores < 3.13
        raise PathResolutionError(f"Cannot resolve path {path}: {e}") from e


def has_control_directory(
    path: Union[str, Path],
    *,
    control_dir_name: str = CONTROL_DIR_NAME,
) -> bool:
    """
    Indica se `path` contém um diretório de controle válido.

    Um diretório de controle é válido quando existe como diretório e contém
    o arquivo de config. É o mesmo critério aplicado em cada passo da busca.
    """
    candidate = Path(path) / control_dir_name
    return candidate.is_dir() and (candidate / CONFIG_FILE_NAME).is_file()


def find_control_directory(
    starting_path: Union[str, Path],
    *,
    control_dir_name: str = CONTROL_DIR_NAME,
) -> Path:
    """
    Procura, de `starting_path` para cima, o diretório raiz do repositório.

    Invariantes:
        - O retorno é sempre absoluto e canonicalizado
        - Se encontrado, `<retorno>/<control_dir_name>/config` existia
          no momento da busca
        - Se não encontrado, o retorno é o cwd canonicalizado

    Args:
        starting_path (Union[str, Path]): Caminho de partida (não precisa existir).
        control_dir_name (str): Nome do diretório de controle.

    Returns:
        Path: Diretório pai do diretório de controle encontrado, ou o cwd.

    Raises:
        PathResolutionError: Se o filesystem recusar a canonicalização.
    """
    current = _canonicalize(starting_path)

    while True:
        if has_control_directory(current, control_dir_name=control_dir_name):
            found = _canonicalize((current / control_dir_name).parent)
            logger.debug("Found control directory under %s", found)
            return found

        parent = current.parent
        if parent == current:
            break
        current = parent

    fallback = _canonicalize(".")
    logger.debug(
        "No %s directory above %s, falling back to %s",
        control_dir_name,
        starting_path,
        fallback,
    )
    return fallback
