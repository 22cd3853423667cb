# src/reposync/core/config/errors.py
"""
Exceções canônicas da camada de configuração do reposync.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a localização do diretório de controle e o carregamento dos documentos
de configuração (config local e descritor do repositório).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Arquivos obrigatórios ausentes são tratados como falhas fatais
    - Mensagens de erro nomeiam o arquivo e sugerem a ação corretiva

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Falhas de colaboradores (codec, cifra) são preservadas em `cause`

Limites explícitos:
    - "Diretório de controle inexistente" NÃO é representado como exceção
    - Não realiza fallback ou recovery
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


REMEDIATION_HINT = (
    "Try connecting to a repository using 'connect', or 'init' to create a new one."
)


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do reposync.

    Permite captura genérica de qualquer falha de bootstrap de configuração,
    separando-a de erros de I/O ou de domínio do restante da aplicação.
    """


class PathResolutionError(ConfigError):
    """
    Exceção levantada quando o caminho inicial da busca não pode ser
    canonicalizado pelo filesystem (ex.: ciclo de symlinks).

    Decisões arquiteturais:
        - "Não encontrado" nunca gera esta exceção (a busca degrada para o cwd)
        - Apenas a recusa do filesystem em resolver o caminho é fatal
    """


class DocumentDecodeError(ConfigError):
    """
    Exceção levantada pelo codec quando o conteúdo não pode ser convertido
    em documento (sintaxe inválida, raiz que não é mapa, campos malformados).

    O loader nunca deixa esta exceção escapar diretamente: ela é sempre
    encapsulada em `ConfigLoadError`.
    """


class ConfigLoadError(ConfigError):
    """
    Exceção levantada quando um repositório existe, mas sua configuração
    não pode ser carregada.

    Cobre:
        - arquivo de config ausente
        - arquivo de repo ausente
        - repo criptografado sem master key configurada
        - falhas do codec ou da decifragem (com a causa original em `cause`)

    Attributes:
        path (Optional[Path]): Arquivo envolvido na falha, quando conhecido.
        hint (Optional[str]): Ação sugerida ao usuário.
        cause (Optional[BaseException]): Erro original do colaborador.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[Path] = None,
        hint: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.hint = hint
        self.cause = cause

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} {self.hint}"
        return self.message
