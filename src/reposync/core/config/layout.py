# src/reposync/core/config/layout.py
"""
Layout canônico do diretório de controle de um repositório local.

    <local_dir>/
        .reposync/
            config   documento de configuração local (obrigatório)
            repo     descritor do repositório (texto puro ou criptografado)
            cache/   db/   logs/
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


CONTROL_DIR_NAME = ".reposync"
CONFIG_FILE_NAME = "config"
REPO_FILE_NAME = "repo"

CACHE_DIR_NAME = "cache"
DATABASE_DIR_NAME = "db"
LOG_DIR_NAME = "logs"


def control_dir(local_dir: Union[str, Path], control_dir_name: str = CONTROL_DIR_NAME) -> Path:
    return Path(local_dir) / control_dir_name


def config_file(local_dir: Union[str, Path], control_dir_name: str = CONTROL_DIR_NAME) -> Path:
    return control_dir(local_dir, control_dir_name) / CONFIG_FILE_NAME


def repo_file(local_dir: Union[str, Path], control_dir_name: str = CONTROL_DIR_NAME) -> Path:
    return control_dir(local_dir, control_dir_name) / REPO_FILE_NAME
