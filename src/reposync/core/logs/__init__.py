# src/reposync/core/logs/__init__.py
"""Inicialização e mutação do logging global do processo."""

from .bootstrap import (
    LEVEL_OFF,
    LoggingState,
    StdlibLoggerRegistry,
    add_global_handler,
    disable_logging,
    init,
    is_initialized,
    set_global_level,
    silence_noisy_loggers,
)

__all__ = [
    "LEVEL_OFF",
    "LoggingState",
    "StdlibLoggerRegistry",
    "add_global_handler",
    "disable_logging",
    "init",
    "is_initialized",
    "set_global_level",
    "silence_noisy_loggers",
]
