# src/reposync/core/crypto/cipher.py
"""Cifra de arquivos de configuração (AES-GCM) e capacidades de sonda/decifragem.

O loader de configuração consome apenas duas capacidades:

    - EncryptionProbe.is_encrypted(path)   → classifica o arquivo pelo cabeçalho
    - Decryptor.decrypt(stream, key)       → devolve o texto puro em bytes

`AesGcmCipher` é a implementação padrão de ambas. Formato em disco:

    MAGIC (8 bytes) | VERSION (1 byte) | NONCE (12 bytes) | CIPHERTEXT + TAG

A chave do arquivo é derivada da master key via HKDF-SHA256, usando o
salt da própria master key.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO, TYPE_CHECKING, Protocol, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

if TYPE_CHECKING:
    from reposync.core.config.documents import MasterKey


MAGIC = b"REPOSYNC"
VERSION = 0x01
NONCE_SIZE = 12
HEADER_SIZE = len(MAGIC) + 1 + NONCE_SIZE

HKDF_INFO = b"reposync/repo"
KEY_SIZE = 32


class CipherError(Exception):
    """Arquivo cifrado inválido, versão não suportada ou falha de autenticação."""


class EncryptionProbe(Protocol):
    """Classifica um arquivo bruto como cifrado ou texto puro, sem decifrá-lo."""

    def is_encrypted(self, path: Union[str, Path]) -> bool:
        ...


class Decryptor(Protocol):
    """Decifra um stream cifrado com uma master key, devolvendo os bytes em texto puro."""

    def decrypt(self, stream: IO[bytes], key: MasterKey) -> bytes:
        ...


def derive_file_key(master_key: MasterKey) -> bytes:
    """
    Deriva a chave AES-256 do arquivo a partir da master key (HKDF-SHA256).

    Decisões arquiteturais:
        - O salt da master key é o salt do HKDF (vazio → None)
        - `HKDF_INFO` separa esta chave de qualquer outra derivada da mesma master key

    Returns:
        bytes: Chave de `KEY_SIZE` bytes.
    """
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=master_key.salt or None,
        info=HKDF_INFO,
    )
    return hkdf.derive(master_key.key)


class AesGcmCipher:
    """
    Sonda + decifragem (+ cifragem) de arquivos no formato `MAGIC|VERSION|NONCE|CT`.

    Invariantes:
        - O cabeçalho MAGIC é autenticado como dado associado (AAD)
        - Cada cifragem usa um nonce aleatório novo

    Limites explícitos:
        - Lê o arquivo inteiro em memória (documentos de configuração são pequenos)
        - Não faz rotação de chaves
    """

    def is_encrypted(self, path: Union[str, Path]) -> bool:
        """
        Indica se o arquivo começa com o cabeçalho `MAGIC`.

        Raises:
            OSError: Arquivo inexistente ou ilegível.
        """
        with open(path, "rb") as f:
            return f.read(len(MAGIC)) == MAGIC

    def encrypt(self, plaintext: bytes, key: MasterKey) -> bytes:
        """
        Cifra `plaintext` com a chave derivada de `key`.

        Returns:
            bytes: `MAGIC | VERSION | NONCE | CIPHERTEXT + TAG`.
        """
        nonce = os.urandom(NONCE_SIZE)
        ciphertext = AESGCM(derive_file_key(key)).encrypt(nonce, plaintext, MAGIC)
        return MAGIC + bytes([VERSION]) + nonce + ciphertext

    def decrypt(self, stream: IO[bytes], key: MasterKey) -> bytes:
        """
        Lê `stream` até o fim e devolve o texto puro autenticado.

        Args:
            stream (IO[bytes]): Conteúdo cifrado, a partir do primeiro byte.
            key (MasterKey): Master key do documento de config local.

        Returns:
            bytes: Texto puro.

        Raises:
            CipherError: Cabeçalho truncado ou ausente, versão não suportada,
                chave errada ou dados corrompidos.
        """
        data = stream.read()

        if len(data) < HEADER_SIZE:
            raise CipherError("Encrypted file is truncated: header incomplete")
        if data[: len(MAGIC)] != MAGIC:
            raise CipherError("Not an encrypted file: magic header mismatch")

        version = data[len(MAGIC)]
        if version != VERSION:
            raise CipherError(f"Unsupported encrypted file version: {version}")

        nonce = data[len(MAGIC) + 1 : HEADER_SIZE]
        try:
            return AESGCM(derive_file_key(key)).decrypt(nonce, data[HEADER_SIZE:], MAGIC)
        except InvalidTag as e:
            raise CipherError("Cannot decrypt file: wrong master key or corrupted data") from e
