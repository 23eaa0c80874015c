"""Categories shared by the expense ledger and the to-do checklist"""
from .base import DocumentModel


class Category(DocumentModel):
    """Category label; default categories cannot be deleted"""
    id: str
    label: str
    color: str = ""
    is_default: bool = False
