# src/reposync/core/config/documents.py
"""
Documentos de configuração do reposync.

Este módulo define as representações em memória dos dois documentos
carregados no bootstrap e do objeto composto entregue ao restante da
aplicação:

    - ConfigDocument      → configurações locais da máquina (inclui master key)
    - RepositoryDocument  → configurações do repositório (independentes da máquina)
    - Configuration       → local_dir + ConfigDocument + RepositoryDocument

Princípios fundamentais:
    - Documentos são imutáveis (dataclasses congeladas)
    - Apenas os campos usados pelo bootstrap são interpretados
    - O restante do conteúdo é preservado em `raw`, sem validação semântica

Limites explícitos:
    - Não lê arquivos (responsabilidade do loader)
    - Não conhece o formato de serialização (responsabilidade do codec)
    - Não valida parâmetros de storage ou chunking
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .errors import DocumentDecodeError
from .layout import (
    CACHE_DIR_NAME,
    CONTROL_DIR_NAME,
    DATABASE_DIR_NAME,
    LOG_DIR_NAME,
)


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    # sem coerção: `012345` e `0x1f` chegam como int do YAML 1.1
    if not isinstance(value, str):
        raise DocumentDecodeError(
            f"Field '{key}' must be a string (quote it in YAML), got: {type(value).__name__}"
        )
    return value


def _optional_mapping(data: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentDecodeError(f"Field '{key}' must be a mapping, got: {type(value).__name__}")
    return copy.deepcopy(value)


@dataclass(frozen=True)
class MasterKey:
    """
    Chave mestra salgada usada apenas para decifrar o descritor do repositório.

    No documento de config é serializada como mapa de strings hexadecimais:

        master_key:
          salt: "0a1b..."
          key: "9f8e..."
    """

    salt: bytes
    key: bytes = field(repr=False)

    @classmethod
    def generate(cls, *, salt_size: int = 16, key_size: int = 32) -> "MasterKey":
        return cls(salt=os.urandom(salt_size), key=os.urandom(key_size))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MasterKey":
        if not isinstance(data, Mapping):
            raise DocumentDecodeError("Field 'master_key' must be a mapping with 'salt' and 'key'")
        try:
            salt = bytes.fromhex(str(data["salt"]))
            key = bytes.fromhex(str(data["key"]))
        except KeyError as e:
            raise DocumentDecodeError(f"Field 'master_key' is missing {e}") from e
        except ValueError as e:
            raise DocumentDecodeError(f"Field 'master_key' is not valid hex: {e}") from e
        if not key:
            raise DocumentDecodeError("Field 'master_key.key' must not be empty")
        return cls(salt=salt, key=key)

    def to_mapping(self) -> Dict[str, str]:
        return {"salt": self.salt.hex(), "key": self.key.hex()}


@dataclass(frozen=True)
class ConfigDocument:
    """
    Configuração local da instância (máquina, conexão, master key).

    Attributes:
        machine_name (Optional[str]): Identificador da máquina local.
        display_name (Optional[str]): Nome exibido ao usuário.
        master_key (Optional[MasterKey]): Presente apenas em repositórios criptografados.
        connection (Dict[str, Any]): Parâmetros opacos do backend de storage.
        raw (Dict[str, Any]): Documento decodificado completo.
    """

    machine_name: Optional[str] = None
    display_name: Optional[str] = None
    master_key: Optional[MasterKey] = None
    connection: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ConfigDocument":
        master_key_data = data.get("master_key")
        return cls(
            machine_name=_optional_str(data, "machine_name"),
            display_name=_optional_str(data, "display_name"),
            master_key=MasterKey.from_mapping(master_key_data) if master_key_data is not None else None,
            connection=_optional_mapping(data, "connection"),
            raw=copy.deepcopy(dict(data)),
        )

    def to_mapping(self) -> Dict[str, Any]:
        out = copy.deepcopy(self.raw)
        for key, value in (
            ("machine_name", self.machine_name),
            ("display_name", self.display_name),
        ):
            if value is not None:
                out[key] = value
        if self.master_key is not None:
            out["master_key"] = self.master_key.to_mapping()
        if self.connection:
            out["connection"] = copy.deepcopy(self.connection)
        return out


@dataclass(frozen=True)
class RepositoryDocument:
    """Descritor do repositório: identidade, chunking e transformers (opacos)."""

    repo_id: Optional[str] = None
    chunker: Dict[str, Any] = field(default_factory=dict)
    transformers: List[Any] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RepositoryDocument":
        transformers = data.get("transformers") or []
        if not isinstance(transformers, list):
            raise DocumentDecodeError(
                f"Field 'transformers' must be a list, got: {type(transformers).__name__}"
            )
        return cls(
            repo_id=_optional_str(data, "repo_id"),
            chunker=_optional_mapping(data, "chunker"),
            transformers=copy.deepcopy(transformers),
            raw=copy.deepcopy(dict(data)),
        )

    def to_mapping(self) -> Dict[str, Any]:
        out = copy.deepcopy(self.raw)
        if self.repo_id is not None:
            out["repo_id"] = self.repo_id
        if self.chunker:
            out["chunker"] = copy.deepcopy(self.chunker)
        if self.transformers:
            out["transformers"] = copy.deepcopy(self.transformers)
        return out


@dataclass(frozen=True)
class Configuration:
    """
    Configuração efetiva de uma instância local, entregue ao restante da aplicação.

    Criada uma única vez por carregamento bem-sucedido. Recarregar significa
    executar novamente todo o pipeline de bootstrap; não há mutação in-place.

    Invariantes:
        - `local_dir` é o diretório pai do diretório de controle
        - `config` e `repo` foram ambos carregados com sucesso
    """

    local_dir: Path
    config: ConfigDocument
    repo: RepositoryDocument
    control_dir_name: str = CONTROL_DIR_NAME

    @property
    def control_dir(self) -> Path:
        return self.local_dir / self.control_dir_name

    @property
    def cache_dir(self) -> Path:
        return self.control_dir / CACHE_DIR_NAME

    @property
    def database_dir(self) -> Path:
        return self.control_dir / DATABASE_DIR_NAME

    @property
    def log_dir(self) -> Path:
        return self.control_dir / LOG_DIR_NAME

    @property
    def machine_name(self) -> Optional[str]:
        return self.config.machine_name
