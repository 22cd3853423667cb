# src/reposync/core/config/loader.py
"""
Loader canônico de configuração do reposync.

Este módulo é responsável por carregar os dois documentos de configuração
de um repositório local e montar o objeto `Configuration` imutável entregue
ao restante da aplicação.

A configuração é resolvida a partir de:
    - `<local_dir>/.reposync/config` (documento local, obrigatório)
    - `<local_dir>/.reposync/repo`   (descritor do repositório, obrigatório,
      em texto puro ou criptografado com a master key do documento local)

Política de carregamento:
    1. Sem diretório de controle → "nenhuma configuração" (retorno `None`)
    2. Documento local ausente ou inválido → `ConfigLoadError`
    3. Descritor ausente ou inválido → `ConfigLoadError`
    4. Montagem de `Configuration`

Decisões arquiteturais:
    - "Não é um repositório" é distinto de "repositório quebrado"
    - A decisão cifrado/texto puro é tomada uma única vez, antes de decodificar
    - Existe um único ponto de chamada ao codec para o descritor
    - Falhas de colaboradores nunca são silenciadas: são encapsuladas com a causa

Invariantes:
    - Nenhum estado parcial é exposto ao chamador
    - Todo arquivo aberto é fechado antes do retorno

Limites explícitos:
    - Não conhece o schema completo dos documentos
    - Não implementa primitivas criptográficas (consome `EncryptionProbe`/`Decryptor`)
    - Não cria nem repara repositórios
"""

from __future__ import annotations

import enum
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from reposync.core.crypto.cipher import AesGcmCipher, Decryptor, EncryptionProbe

from .codec import DocumentCodec, Source, YamlDocumentCodec
from .documents import ConfigDocument, Configuration, MasterKey, RepositoryDocument
from .errors import REMEDIATION_HINT, ConfigLoadError
from .layout import CONTROL_DIR_NAME, config_file, control_dir, repo_file


logger = logging.getLogger(__name__)


class RepoFileKind(enum.Enum):
    PLAINTEXT = "plaintext"
    ENCRYPTED = "encrypted"


def classify_repo_file(path: Path, probe: EncryptionProbe) -> RepoFileKind:
    """Aplica a sonda de criptografia ao arquivo bruto, sem decodificá-lo."""
    return RepoFileKind.ENCRYPTED if probe.is_encrypted(path) else RepoFileKind.PLAINTEXT


def load_config_document(
    local_dir: Union[str, Path],
    *,
    codec: Optional[DocumentCodec] = None,
    control_dir_name: str = CONTROL_DIR_NAME,
) -> ConfigDocument:
    """
    Carrega o documento de configuração local (`.reposync/config`).

    Raises:
        ConfigLoadError: Se o arquivo não existir ou não puder ser decodificado.
    """
    codec = codec or YamlDocumentCodec()
    path = config_file(local_dir, control_dir_name)

    if not path.is_file():
        raise ConfigLoadError(
            f"Cannot find config file at {path}.",
            path=path,
            hint=REMEDIATION_HINT,
        )

    try:
        with path.open("rb") as f:
            return codec.decode(f, ConfigDocument)
    except Exception as e:  # noqa: BLE001
        raise ConfigLoadError(f"Cannot load config file: {e}", path=path, cause=e) from e


@contextmanager
def _repo_source(
    kind: RepoFileKind,
    path: Path,
    master_key: Optional[MasterKey],
    decryptor: Decryptor,
) -> Iterator[Source]:
    with path.open("rb") as f:
        if kind is RepoFileKind.ENCRYPTED:
            logger.info("Loading encrypted repo file from %s ...", path)
            yield decryptor.decrypt(f, master_key).decode("utf-8")
        else:
            logger.info("Loading (unencrypted) repo file from %s ...", path)
            yield f


def load_repository_document(
    local_dir: Union[str, Path],
    config_document: ConfigDocument,
    *,
    codec: Optional[DocumentCodec] = None,
    probe: Optional[EncryptionProbe] = None,
    decryptor: Optional[Decryptor] = None,
    control_dir_name: str = CONTROL_DIR_NAME,
) -> RepositoryDocument:
    """
    Carrega o descritor do repositório (`.reposync/repo`).

    O arquivo bruto é primeiro classificado pela sonda de criptografia:

        - ENCRYPTED  → exige `config_document.master_key`; o conteúdo é
                       decifrado, decodificado como UTF-8 e entregue ao codec
        - PLAINTEXT  → o stream do arquivo é entregue diretamente ao codec

    Decisões arquiteturais:
        - A ausência de master key é detectada antes de qualquer decifragem
        - A decifragem nunca é invocada para arquivos em texto puro
        - Erros da sonda, da decifragem e do codec viram `ConfigLoadError`

    Args:
        local_dir (Union[str, Path]): Diretório raiz do repositório local.
        config_document (ConfigDocument): Documento local já carregado.
        codec (Optional[DocumentCodec]): Codec de documentos (padrão: YAML).
        probe (Optional[EncryptionProbe]): Sonda de criptografia (padrão: AES-GCM).
        decryptor (Optional[Decryptor]): Capacidade de decifragem (padrão: AES-GCM).
        control_dir_name (str): Nome do diretório de controle.

    Returns:
        RepositoryDocument: Descritor decodificado.

    Raises:
        ConfigLoadError: Arquivo ausente, master key ausente, ou falha de
            sonda/decifragem/decodificação.
    """
    codec = codec or YamlDocumentCodec()
    if probe is None or decryptor is None:
        default_cipher = AesGcmCipher()
        probe = probe or default_cipher
        decryptor = decryptor or default_cipher

    path = repo_file(local_dir, control_dir_name)

    if not path.is_file():
        raise ConfigLoadError(
            f"Cannot find repo file at {path}.",
            path=path,
            hint=REMEDIATION_HINT,
        )

    try:
        kind = classify_repo_file(path, probe)
    except Exception as e:  # noqa: BLE001
        raise ConfigLoadError(f"Cannot load repo file: {e}", path=path, cause=e) from e

    master_key = config_document.master_key
    if kind is RepoFileKind.ENCRYPTED and master_key is None:
        raise ConfigLoadError(
            f"Repo file is encrypted but no master key configured in config file "
            f"{config_file(local_dir, control_dir_name)}.",
            path=path,
        )

    try:
        with _repo_source(kind, path, master_key, decryptor) as source:
            return codec.decode(source, RepositoryDocument)
    except Exception as e:  # noqa: BLE001
        raise ConfigLoadError(f"Cannot load repo file: {e}", path=path, cause=e) from e


def load_config(
    local_dir: Union[str, Path],
    *,
    codec: Optional[DocumentCodec] = None,
    probe: Optional[EncryptionProbe] = None,
    decryptor: Optional[Decryptor] = None,
    control_dir_name: str = CONTROL_DIR_NAME,
) -> Optional[Configuration]:
    """
    Carrega a configuração efetiva do repositório em `local_dir`.

    Política de resolução:
        - Sem diretório de controle: nenhuma configuração presente (`None`)
        - Documento local e descritor são ambos obrigatórios
        - O descritor pode estar criptografado com a master key do documento local

    Invariantes:
        - O retorno é `None` ou uma `Configuration` completamente montada
        - `Configuration.local_dir` é exatamente `local_dir` (como `Path`)

    Args:
        local_dir (Union[str, Path]): Diretório raiz do repositório
            (tipicamente o resultado de `find_control_directory`).
        codec (Optional[DocumentCodec]): Codec de documentos (padrão: YAML).
        probe (Optional[EncryptionProbe]): Sonda de criptografia.
        decryptor (Optional[Decryptor]): Capacidade de decifragem.
        control_dir_name (str): Nome do diretório de controle.

    Returns:
        Optional[Configuration]: Configuração montada, ou `None` se `local_dir`
        não contém diretório de controle.

    Raises:
        ConfigLoadError: Se o repositório existe mas sua configuração é inválida.
    """
    local_dir = Path(local_dir)
    app_dir = control_dir(local_dir, control_dir_name)

    if not app_dir.exists():
        logger.info("Not loading config, control dir does not exist: %s", app_dir)
        return None

    logger.info("Loading config from %s ...", local_dir)

    codec = codec or YamlDocumentCodec()
    config_document = load_config_document(
        local_dir, codec=codec, control_dir_name=control_dir_name
    )
    repository_document = load_repository_document(
        local_dir,
        config_document,
        codec=codec,
        probe=probe,
        decryptor=decryptor,
        control_dir_name=control_dir_name,
    )

    return Configuration(
        local_dir=local_dir,
        config=config_document,
        repo=repository_document,
        control_dir_name=control_dir_name,
    )
