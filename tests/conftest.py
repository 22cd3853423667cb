# tests/conftest.py
"""
Fixtures compartilhados para testes do reposync.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos de configuração mínimos e determinísticos (YAML)
- uma fábrica de repositórios locais em `tmp_path`
- um registry de loggers falso, que conta chamadas

Decisões arquiteturais:
    - Repositórios são materializados apenas em diretórios temporários
    - Testes de logging nunca tocam o logging global do processo
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

import logging
import time
from pathlib import Path

import pytest


# =====================================================
# Documentos de configuração
# =====================================================

@pytest.fixture
def config_yaml() -> str:
    """
    Documento de configuração local mínimo, sem master key.

    Returns:
        str: Conteúdo YAML de `.reposync/config`.
    """
    return """\
machine_name: laptop-01
display_name: Alice
connection:
  type: local
  settings:
    path: /srv/repo
"""


@pytest.fixture
def repo_yaml() -> str:
    """
    Descritor de repositório mínimo, em texto puro.

    Returns:
        str: Conteúdo YAML de `.reposync/repo`.
    """
    return """\
repo_id: 0f1e2d3c
chunker:
  type: fixed
  size: 16384
transformers:
  - type: gzip
"""


# =====================================================
# Repositórios locais em disco
# =====================================================

@pytest.fixture
def make_repo(tmp_path: Path, config_yaml: str, repo_yaml: str):
    """
    Fábrica de repositórios locais dentro de `tmp_path`.

    A função retornada cria `<root>/.reposync/` e, opcionalmente, os arquivos
    `config` e `repo`. Com `encrypt_with`, o descritor é cifrado com a master
    key fornecida e a chave é gravada no documento de config.

    Returns:
        Callable[..., Path]: Função que materializa o repositório e retorna `<root>`.
    """
    from reposync.core.config.codec import YamlDocumentCodec
    from reposync.core.config.documents import ConfigDocument
    from reposync.core.crypto.cipher import AesGcmCipher

    def _make(
        name: str = "r",
        *,
        config=None,
        repo=None,
        with_config: bool = True,
        with_repo: bool = True,
        encrypt_with=None,
    ) -> Path:
        root = tmp_path / name
        control = root / ".reposync"
        control.mkdir(parents=True)

        config_text = config_yaml if config is None else config
        repo_text = repo_yaml if repo is None else repo

        if encrypt_with is not None:
            codec = YamlDocumentCodec()
            document = codec.decode(config_text, ConfigDocument)
            config_text = codec.encode(
                ConfigDocument(
                    machine_name=document.machine_name,
                    display_name=document.display_name,
                    master_key=encrypt_with,
                    connection=document.connection,
                    raw=document.raw,
                )
            )

        if with_config:
            (control / "config").write_text(config_text, encoding="utf-8")

        if with_repo:
            if encrypt_with is not None:
                ciphertext = AesGcmCipher().encrypt(repo_text.encode("utf-8"), encrypt_with)
                (control / "repo").write_bytes(ciphertext)
            else:
                (control / "repo").write_text(repo_text, encoding="utf-8")

        return root

    return _make


# =====================================================
# Logging
# =====================================================

class CountingRegistry:
    """Registry de loggers falso: loggers isolados + contadores de chamadas."""

    def __init__(self, configure_delay: float = 0.0):
        self.configure_delay = configure_delay
        self.configure_calls = 0
        self.reset_calls = 0
        self.payloads = []
        self._root = logging.Logger("fake-root")
        self._loggers = {
            "app": logging.Logger("app"),
            "app.sync": logging.Logger("app.sync"),
            "app.placeholder": None,
        }

    def logger_names(self):
        return list(self._loggers)

    def get_logger(self, name):
        return self._loggers.get(name)

    def root(self):
        return self._root

    def configure(self, stream):
        self.configure_calls += 1
        self.payloads.append(stream.read())
        if self.configure_delay:
            time.sleep(self.configure_delay)
        self._root.addHandler(logging.NullHandler())

    def reset(self):
        self.reset_calls += 1
        for target in [self._root] + [lg for lg in self._loggers.values() if lg is not None]:
            for handler in list(target.handlers):
                target.removeHandler(handler)
            target.setLevel(logging.NOTSET)


@pytest.fixture
def counting_registry() -> CountingRegistry:
    return CountingRegistry()


@pytest.fixture
def suppressor_calls():
    """Lista + callable: cada execução do supressor de ruído adiciona um item."""
    calls = []

    def _suppress():
        calls.append(1)

    return calls, _suppress
