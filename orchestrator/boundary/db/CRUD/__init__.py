"""
CRUD operations module.

Exports: BaseCRUD, SourceCRUD, source_crud
"""

from orchestrator.boundary.db.CRUD.base_crud import BaseCRUD
from orchestrator.boundary.db.CRUD.source_crud import SourceCRUD, source_crud

__all__ = ["BaseCRUD", "SourceCRUD", "source_crud"]
