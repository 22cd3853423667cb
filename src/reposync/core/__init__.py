# src/reposync/core/__init__.py
"""
Core do reposync.

Reúne os três componentes do bootstrap de configuração:

    - config  → DirectoryLocator e ConfigLoader
    - crypto  → capacidades de sonda/decifragem do descritor do repositório
    - logs    → LoggingBootstrap

O core é projetado para ser testável de forma isolada: todos os
colaboradores externos (codec, cifra, registry de loggers) são injetáveis.
"""
