"""Protocol definitions for document store implementations."""

from asyncio import Lock
from typing import Protocol, runtime_checkable

from app.schemas.document import Document


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """
    Protocol for whole-document stores.

    The store holds the entire application state as one JSON document and
    only supports replacing it wholesale. Both LocalDocumentStore and
    JsonBinDocumentStore conform to this protocol.
    """

    name: str
    lock: Lock

    async def load(self) -> Document:
        """Fetch the full document. Raises DocumentStoreError on any failure."""
        ...

    async def save(self, document: Document) -> None:
        """Overwrite the full document. Raises DocumentStoreError on failure."""
        ...

    async def initialize(self, document: Document) -> str:
        """Create the backing document and return where it lives."""
        ...

    async def close(self) -> None:
        """Release network resources, if any."""
        ...
