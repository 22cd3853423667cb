# src/reposync/core/config/codec.py
"""
Codec de documentos de configuração.

O loader decide QUAIS bytes (ou qual stream) entregar ao codec; o codec
decide apenas COMO convertê-los em documento. Qualquer implementação que
satisfaça `DocumentCodec` pode substituir o codec YAML padrão.

Formatos suportados (v1):
    - YAML (PyYAML, `safe_load` / `safe_dump`)

Invariantes:
    - Documento vazio é interpretado como mapa vazio
    - A raiz do documento deve ser um mapa (`dict`)
    - Toda falha de parse é reportada como `DocumentDecodeError`
"""

from __future__ import annotations

from typing import IO, Any, Dict, Protocol, Type, TypeVar, Union

import yaml  # PyYAML

from .errors import DocumentDecodeError


D = TypeVar("D")

Source = Union[str, bytes, IO[str], IO[bytes]]


class DocumentCodec(Protocol):
    def decode(self, source: Source, target: Type[D]) -> D:
        ...

    def encode(self, document: Any) -> str:
        ...


class YamlDocumentCodec:
    """Codec YAML padrão, baseado em PyYAML."""

    def _load_mapping(self, source: Source) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(source)
        except yaml.YAMLError as e:
            raise DocumentDecodeError(f"Invalid YAML document: {e}") from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise DocumentDecodeError(
                f"Document root must be a mapping, got: {type(data).__name__}"
            )
        return data

    def decode(self, source: Source, target: Type[D]) -> D:
        """
        Converte `source` em uma instância de `target`.

        Args:
            source: Texto, bytes ou stream aberto (texto ou binário).
            target: Classe do documento; deve expor `from_mapping(dict)`.

        Raises:
            DocumentDecodeError: Se o YAML for inválido ou a raiz não for um mapa.
        """
        return target.from_mapping(self._load_mapping(source))  # type: ignore[attr-defined]

    def encode(self, document: Any) -> str:
        return yaml.safe_dump(document.to_mapping(), sort_keys=True, allow_unicode=True)
