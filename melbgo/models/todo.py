"""Checklist records"""
from .base import DocumentModel


class Todo(DocumentModel):
    id: str
    text: str
    is_completed: bool = False
    category: str = "todo"
