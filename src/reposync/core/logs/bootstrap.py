# src/reposync/core/logs/bootstrap.py
"""
Bootstrap do logging global do processo.

Este módulo inicializa o `logging` da biblioteca padrão exatamente uma vez
e oferece operações para ajustar nível e handlers de forma global.

Origem da configuração (precedência):
    1. `logging.yaml` no diretório de trabalho corrente (se existir e for legível)
    2. `reposync/resources/logging.yaml` embutido no pacote

O conteúdo é um schema `logging.config.dictConfig` escrito em YAML.

Decisões arquiteturais:
    - `init()` é idempotente e seguro para chamadas concorrentes:
      o flag "inicializado" é verificado e marcado sob lock antes de qualquer trabalho
    - Falhas de inicialização nunca bloqueiam a aplicação: são reportadas e engolidas
    - O silenciamento de bibliotecas ruidosas é um passo explícito e desligável
    - O estado vive em `LoggingState`, com colaboradores injetáveis para testes

Invariantes:
    - O corpo de `init()` executa no máximo uma vez por `LoggingState`
    - `disable_logging()` não reabre a inicialização

Limites explícitos:
    - Não define formato de mensagens (responsabilidade do arquivo de configuração)
    - Operações de nível/handler não são sincronizadas entre si
"""

from __future__ import annotations

import logging
import logging.config
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Callable, Iterable, Iterator, Optional, Protocol, Sequence, Union

import yaml  # PyYAML


LOG_CONFIG_LOCAL_FILE = Path("logging.yaml")
LOG_CONFIG_RESOURCE = Path(__file__).resolve().parent.parent.parent / "resources" / "logging.yaml"

NOISY_LOGGERS: Sequence[str] = ("urllib3",)

# stdlib não tem nível OFF
LEVEL_OFF = logging.CRITICAL + 1

Level = Union[int, str]

logger = logging.getLogger(__name__)


class LoggerRegistry(Protocol):
    def logger_names(self) -> Iterable[str]:
        ...

    def get_logger(self, name: str) -> Optional[logging.Logger]:
        ...

    def root(self) -> logging.Logger:
        ...

    def configure(self, stream: IO[bytes]) -> None:
        ...

    def reset(self) -> None:
        ...


class StdlibLoggerRegistry:
    """
    Adaptador de `LoggerRegistry` sobre o `logging.Manager` global.

    Decisões arquiteturais:
        - A enumeração vem de `loggerDict`, que inclui placeholders
        - A configuração usa o schema de `logging.config.dictConfig`

    Limites explícitos:
        - Atua sobre o estado global do processo (não há isolamento)
    """

    def logger_names(self) -> Iterable[str]:
        """Nomes de todos os loggers registrados, incluindo placeholders."""
        return list(logging.root.manager.loggerDict.keys())

    def get_logger(self, name: str) -> Optional[logging.Logger]:
        """
        Retorna o logger registrado sob `name`, sem criá-lo.

        Returns:
            Optional[logging.Logger]: O logger, ou None para nomes
            desconhecidos e placeholders.
        """
        candidate = logging.root.manager.loggerDict.get(name)
        # PlaceHolder: nome intermediário ainda sem logger real
        if isinstance(candidate, logging.Logger):
            return candidate
        return None

    def root(self) -> logging.Logger:
        return logging.getLogger()

    def configure(self, stream: IO[bytes]) -> None:
        """
        Aplica uma configuração `dictConfig` escrita em YAML.

        Args:
            stream (IO[bytes]): Stream com o documento YAML.

        Raises:
            yaml.YAMLError: Documento YAML inválido.
            ValueError: Raiz do documento não é um mapa, ou schema rejeitado
                por `dictConfig`.
        """
        data = yaml.safe_load(stream)
        if not isinstance(data, dict):
            raise ValueError(
                f"Logging configuration root must be a mapping, got: {type(data).__name__}"
            )
        logging.config.dictConfig(data)

    def reset(self) -> None:
        """
        Remove e fecha os handlers de todos os loggers e zera seus níveis.

        Invariantes:
            - Todo logger real termina com nível NOTSET e sem handlers
            - O root termina em WARNING (o padrão da biblioteca padrão)
        """
        loggers = [self.get_logger(name) for name in self.logger_names()]
        for target in [self.root()] + [lg for lg in loggers if lg is not None]:
            for handler in list(target.handlers):
                target.removeHandler(handler)
                handler.close()
            target.setLevel(logging.NOTSET)
        self.root().setLevel(logging.WARNING)


def silence_noisy_loggers(names: Sequence[str] = NOISY_LOGGERS) -> None:
    for name in names:
        noisy = logging.getLogger(name)
        noisy.disabled = True
        noisy.propagate = False
        if not any(isinstance(h, logging.NullHandler) for h in noisy.handlers):
            noisy.addHandler(logging.NullHandler())


def _check_level(level: Level) -> Level:
    if isinstance(level, bool) or not isinstance(level, (int, str)):
        raise TypeError(f"Level must be an int or a level name, got: {type(level).__name__}")
    # getLevelName devolve o número para nomes registrados
    if isinstance(level, str) and not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown level: {level!r}")
    return level


class LoggingState:
    """
    Estado do logging global do processo.

    Attributes:
        initialized (bool): Verdadeiro a partir da primeira chamada a `init()`.
        current_level (Optional[int|str]): Último nível aplicado via `set_global_level`.
    """

    def __init__(
        self,
        registry: Optional[LoggerRegistry] = None,
        *,
        local_file: Union[str, Path] = LOG_CONFIG_LOCAL_FILE,
        resource: Union[str, Path] = LOG_CONFIG_RESOURCE,
        suppress_noise: bool = True,
        noise_suppressor: Callable[[], None] = silence_noisy_loggers,
    ) -> None:
        self.registry: LoggerRegistry = registry or StdlibLoggerRegistry()
        self.local_file = Path(local_file)
        self.resource = Path(resource)
        self.suppress_noise = suppress_noise
        self.noise_suppressor = noise_suppressor

        self.initialized = False
        self.current_level: Optional[Level] = None
        self._lock = threading.Lock()

    @contextmanager
    def _open_config_source(self) -> Iterator[IO[bytes]]:
        if self.local_file.is_file() and os.access(self.local_file, os.R_OK):
            source = self.local_file
        elif self.resource.is_file():
            source = self.resource
        else:
            raise FileNotFoundError(
                f"No logging configuration found at {self.local_file} or {self.resource}"
            )

        with source.open("rb") as f:
            yield f

    def _suppress_noise(self) -> None:
        try:
            self.noise_suppressor()
        except Exception:  # noqa: BLE001
            logger.error("Could not silence noisy third-party loggers.", exc_info=True)

    def init(self) -> bool:
        """
        Inicializa o logging global (no máximo uma vez).

        Etapas:
            1. Silenciamento de bibliotecas ruidosas (opcional, best-effort)
            2. Configuração a partir do arquivo local ou do recurso embutido

        Decisões arquiteturais:
            - Falhas de qualquer etapa são registradas em ERROR e engolidas
            - Uma falha no silenciamento não impede a configuração

        Returns:
            bool: True apenas para o chamador que executou a inicialização.
        """
        with self._lock:
            if self.initialized:
                return False
            self.initialized = True

            if self.suppress_noise:
                self._suppress_noise()

            try:
                with self._open_config_source() as stream:
                    self.registry.configure(stream)
            except Exception:  # noqa: BLE001
                logger.error(
                    "Could not load logging configuration from file system or package.",
                    exc_info=True,
                )
            return True

    def set_global_level(self, level: Level) -> None:
        """
        Aplica `level` a todos os loggers registrados, aos handlers do root e ao root.

        Invariantes:
            - Placeholders são ignorados
            - O nível é validado antes de qualquer alteração

        Args:
            level (Union[int, str]): Nível numérico ou nome registrado ("DEBUG", ...).

        Raises:
            ValueError: Nome de nível desconhecido.
            TypeError: `level` não é int nem str.
        """
        level = _check_level(level)

        for name in self.registry.logger_names():
            target = self.registry.get_logger(name)
            if target is not None:
                target.setLevel(level)

        root = self.registry.root()
        for handler in root.handlers:
            handler.setLevel(level)

        root.setLevel(level)
        self.current_level = level

    def add_global_handler(self, handler: logging.Handler) -> None:
        """
        Anexa `handler` ao root logger.

        Limites explícitos:
            - Não deduplica handlers equivalentes; apenas a mesma instância
              é ignorada (comportamento de `Logger.addHandler`)
        """
        self.registry.root().addHandler(handler)

    def disable_logging(self) -> None:
        """
        Desliga o logging global do processo.

        Etapas:
            1. `registry.reset()`
            2. `set_global_level(LEVEL_OFF)`
            3. Remoção de qualquer handler remanescente no root

        Invariantes:
            - O root termina sem handlers e em `LEVEL_OFF`
            - O flag `initialized` não é alterado: `init()` continua no-op
        """
        self.registry.reset()
        self.set_global_level(LEVEL_OFF)

        root = self.registry.root()
        while root.handlers:
            root.removeHandler(root.handlers[0])


_STATE = LoggingState()


def init() -> bool:
    """Inicializa o logging global do processo (ver `LoggingState.init`)."""
    return _STATE.init()


def set_global_level(level: Level) -> None:
    """Aplica `level` globalmente; nomes desconhecidos levantam `ValueError`."""
    _STATE.set_global_level(level)


def add_global_handler(handler: logging.Handler) -> None:
    _STATE.add_global_handler(handler)


def disable_logging() -> None:
    """Desliga o logging global; não reabre `init()`."""
    _STATE.disable_logging()


def is_initialized() -> bool:
    return _STATE.initialized
