"""Ingestion module for fetching legal provisions from document stores."""

from .store import DocumentStore, InMemoryDocumentStore, JSONDocumentStore

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "JSONDocumentStore",
]
