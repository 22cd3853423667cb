# src/reposync/__init__.py
"""
reposync: bootstrap de configuração de uma instância local.

Este pacote raiz define o namespace público do bootstrap de configuração
de uma instância local associada a um repositório baseado em diretório.

Arquitetura em alto nível:
    - core.config    → localização do repositório e carregamento dos documentos
    - core.crypto    → sonda e decifragem do descritor do repositório
    - core.logs      → inicialização única e mutação do logging global
    - core.bootstrap → composição da sequência de inicialização

Limites explícitos:
    - Não implementa o motor de sincronização
    - Não implementa backends de storage ou transporte
"""

from .core.bootstrap import bootstrap
from .core.config import (
    ConfigDocument,
    ConfigError,
    ConfigLoadError,
    Configuration,
    MasterKey,
    PathResolutionError,
    RepositoryDocument,
    find_control_directory,
    load_config,
)

__version__ = "0.1.0"

__all__ = [
    "bootstrap",
    "find_control_directory",
    "load_config",
    "Configuration",
    "ConfigDocument",
    "RepositoryDocument",
    "MasterKey",
    "ConfigError",
    "ConfigLoadError",
    "PathResolutionError",
]
