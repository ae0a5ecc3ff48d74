"""
Document store interface.

The browser only needs three things from a store: the list of top-level
collection names, bounded reads of a collection with an optional single-field
predicate, and a way to release the connection on exit.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from docbrowse.predicates import Predicate

MAX_MEMBERSHIP_VALUES = 10


class StoreError(Exception):
    """Raised when the document store cannot be reached or rejects a query."""
    pass


@dataclass
class DocumentSnapshot:
    """A document read from the store: a stable id plus its field data."""
    id: str
    data: Dict[str, Any] = field(default_factory=dict)


class DocumentStore(ABC):
    """Abstract base for document stores."""

    @abstractmethod
    def list_collections(self) -> List[str]:
        """Return the names of all top-level collections."""
        pass

    @abstractmethod
    def query(
        self,
        collection: str,
        predicate: Optional[Predicate] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[DocumentSnapshot]:
        """
        Read documents from a collection.

        Args:
            collection: Collection name
            predicate: Optional single-field filter
            offset: Number of matching documents to skip
            limit: Maximum number of documents to return (None for all)

        Returns:
            Matching documents in store order
        """
        pass

    def close(self) -> None:
        """Release any resources held by the store."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def check_predicate(predicate: Predicate) -> None:
    """Reject membership clauses longer than a store clause may carry."""
    if not predicate.operator.is_membership:
        return
    for clause in predicate.clauses():
        if len(clause) > MAX_MEMBERSHIP_VALUES:
            raise StoreError(
                f"'{predicate.operator.value}' supports at most "
                f"{MAX_MEMBERSHIP_VALUES} values per clause, got {len(clause)}"
            )
