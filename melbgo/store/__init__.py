"""Document store adapters"""
from .base import DocumentNotFoundError, DocumentStore, StoreError
from .memory import InMemoryDocumentStore

__all__ = [
    "DocumentStore",
    "DocumentNotFoundError",
    "StoreError",
    "InMemoryDocumentStore",
]
