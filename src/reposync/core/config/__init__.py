# src/reposync/core/config/__init__.py
"""
Camada de configuração do reposync.

Responsabilidades do pacote:
    - Localizar o diretório raiz do repositório (busca ascendente)
    - Carregar o documento de configuração local
    - Carregar o descritor do repositório (texto puro ou criptografado)
    - Montar o objeto `Configuration` imutável

Invariantes:
    - "Não é um repositório" nunca é tratado como erro
    - "Repositório quebrado" é sempre `ConfigLoadError`
    - Nenhuma configuração parcial é exposta
"""

from .codec import DocumentCodec, YamlDocumentCodec
from .documents import ConfigDocument, Configuration, MasterKey, RepositoryDocument
from .errors import ConfigError, ConfigLoadError, DocumentDecodeError, PathResolutionError
from .loader import (
    RepoFileKind,
    classify_repo_file,
    load_config,
    load_config_document,
    load_repository_document,
)
from .locator import find_control_directory, has_control_directory

__all__ = [
    "DocumentCodec",
    "YamlDocumentCodec",
    "ConfigDocument",
    "Configuration",
    "MasterKey",
    "RepositoryDocument",
    "ConfigError",
    "ConfigLoadError",
    "DocumentDecodeError",
    "PathResolutionError",
    "RepoFileKind",
    "classify_repo_file",
    "load_config",
    "load_config_document",
    "load_repository_document",
    "find_control_directory",
    "has_control_directory",
]
