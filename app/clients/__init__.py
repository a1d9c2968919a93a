# app/clients/__init__.py

from app.clients.document_store import (
    JsonBinDocumentStore,
    LocalDocumentStore,
    build_document_store,
)
from app.clients.protocols import DocumentStoreProtocol

__all__ = [
    "DocumentStoreProtocol",
    "JsonBinDocumentStore",
    "LocalDocumentStore",
    "build_document_store",
]
