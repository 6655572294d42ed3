from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, Sequence

Document = Dict[str, Any]


class RecordStore(Protocol):
    """Generic document collections keyed by a flat collection name.

    Every document returned carries its store-assigned identifier under
    ``"id"``. Implementations raise ``StoreError`` on any backend failure.
    """

    def list_all(self, collection: str) -> Sequence[Document]:
        raise NotImplementedError

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        raise NotImplementedError

    def create(self, collection: str, fields: Document) -> str:
        raise NotImplementedError

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        """Merge ``fields`` into the document; a None value removes that field."""
        raise NotImplementedError

    def delete(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError
