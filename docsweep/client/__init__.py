# docsweep/client/__init__.py
from docsweep.client.models import Document, ListedChild
from docsweep.client.tree_client import TreeClient

__all__ = ["Document", "ListedChild", "TreeClient"]
