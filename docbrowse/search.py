"""
Interactive search condition builder.

Collects a field, an operator and a raw value from the operator, previews
the matching documents and lets the operator apply, modify or discard the
condition. "Modify" starts a fresh attempt; nothing from the discarded
attempt carries over.
"""
import logging
import time
from enum import Enum
from typing import List, Optional

from rich.console import Console

from docbrowse.predicates import (
    DEFAULT_CHUNK_SIZE, Operator, Predicate, build_predicate
)
from docbrowse.prompts import Prompter, non_empty
from docbrowse.render import DisplayFormat, display_documents, print_notice
from docbrowse.store import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_LIMIT = 10


class SearchAction(Enum):
    APPLY = "Apply Search Condition"
    MODIFY = "Modify Search Condition"
    BACK = "Back to Documents"

    @classmethod
    def labels(cls) -> List[str]:
        return [action.value for action in cls]


class SearchSession:
    """Builds one search condition for a collection."""

    def __init__(
        self,
        store: DocumentStore,
        prompter: Prompter,
        console: Console,
        collection: str,
        display_format: DisplayFormat,
        preview_limit: int = DEFAULT_PREVIEW_LIMIT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        pause_seconds: float = 2.0,
    ):
        self.store = store
        self.prompter = prompter
        self.console = console
        self.collection = collection
        self.display_format = display_format
        self.preview_limit = preview_limit
        self.chunk_size = chunk_size
        self.pause_seconds = pause_seconds

    def prompt_predicate(self) -> Predicate:
        """Ask for field, operator and value, and build the predicate."""
        field = self.prompter.text("Field", validate=non_empty("Field name cannot be empty"))
        index, _ = self.prompter.select("Operator", Operator.symbols())
        operator = list(Operator)[index]
        raw = self.prompter.text("Query")
        return build_predicate(field, operator, raw, self.chunk_size)

    def show_preview(self, predicate: Predicate, documents):
        self.console.rule("Preview")
        self.console.print("Search condition:")
        self.console.print(f"  Field: {predicate.field}", markup=False)
        self.console.print(f"  Operator: {predicate.operator.value}", markup=False)
        self.console.print(f"  Value: {predicate.raw_value}", markup=False)
        display_documents(self.console, documents, self.display_format)
        self.console.rule("Preview")

    def run(self) -> Optional[Predicate]:
        """
        Run the builder until the operator applies or discards a condition.

        Returns:
            The applied predicate, or None when the preview was empty or the
            operator went back to the documents
        """
        while True:
            predicate = self.prompt_predicate()
            documents = self.store.query(self.collection, predicate, limit=self.preview_limit)

            if not documents:
                logger.debug(f"No matches for {predicate} in {self.collection!r}")
                print_notice(self.console, "No documents found.")
                time.sleep(self.pause_seconds)
                return None

            self.show_preview(predicate, documents)

            _, label = self.prompter.select("Select an action", SearchAction.labels())
            action = SearchAction(label)

            if action is SearchAction.APPLY:
                return predicate
            if action is SearchAction.BACK:
                return None
            logger.debug(f"Modifying search condition {predicate}")
