"""
SQLAlchemy models for the docbrowse document store.

Documents live in a single table keyed by (parent, collection, doc_id).
A document's fields are kept as a JSON mapping so that each document can
carry its own set of dynamically typed values. Top-level collections have an
empty parent; nested collections record the path of the document they
belong to (e.g. "users/alice").
"""
from typing import Any, Dict
from sqlalchemy import (
    String, Index, UniqueConstraint, JSON, Integer
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class Document(Base):
    """
    Document model: one record in a named collection.

    Attributes:
        id: Surrogate primary key
        parent: Path of the owning document, empty for top-level collections
        collection: Collection name
        doc_id: Document identifier, unique within its collection
        data: Field name to value mapping
    """
    __tablename__ = 'documents'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    parent: Mapped[str] = mapped_column(String(1024), nullable=False, default='')
    collection: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
    doc_id: Mapped[str] = mapped_column(String(256), nullable=False)
    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index('ix_documents_parent_collection', 'parent', 'collection'),
        UniqueConstraint('parent', 'collection', 'doc_id', name='uq_documents_path'),
    )

    def __repr__(self):
        return f"<Document(parent='{self.parent}', collection='{self.collection}', doc_id='{self.doc_id}')>"
