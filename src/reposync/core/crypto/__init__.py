# src/reposync/core/crypto/__init__.py
"""Capacidades criptográficas consumidas pelo loader de configuração."""

from .cipher import AesGcmCipher, CipherError, Decryptor, EncryptionProbe

__all__ = ["AesGcmCipher", "CipherError", "Decryptor", "EncryptionProbe"]
