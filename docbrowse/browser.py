"""
Collection navigator and paginated document browser.

Navigation:
- Pick a collection (or Exit) from the store's current collection list
- Pick a display format once per collection
- Page forward and backward through the documents
- Set a search condition (see docbrowse.search) or clear it
- Go back to the collection list

Paging is offset based: every action re-reads one page with
offset = page * page_size and limit = page_size.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from rich.console import Console

from docbrowse.predicates import DEFAULT_CHUNK_SIZE, Predicate
from docbrowse.prompts import Prompter
from docbrowse.render import DisplayFormat, display_documents, print_notice
from docbrowse.search import DEFAULT_PREVIEW_LIMIT, SearchSession
from docbrowse.store import DocumentSnapshot, DocumentStore

logger = logging.getLogger(__name__)

EXIT_ITEM = "Exit"


@dataclass
class BrowseOptions:
    """Settings threaded from the command line into the navigator."""
    page_size: int = 10
    table_format: bool = False
    preview_limit: int = DEFAULT_PREVIEW_LIMIT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    pause_seconds: float = 2.0


class BrowseAction(Enum):
    NEXT_PAGE = "Next Page"
    PREVIOUS_PAGE = "Previous Page"
    NEW_SEARCH = "New Search Condition"
    CLEAR_SEARCH = "Clear Search Condition"
    BACK = "Back to Collections"

    @classmethod
    def labels(cls) -> List[str]:
        return [action.value for action in cls]


@dataclass
class BrowseState:
    """
    Position within one collection.

    Changing the active filter, whether setting or clearing it, always
    returns to the first page.
    """
    collection: str
    display_format: DisplayFormat
    page: int = 0
    active_filter: Optional[Predicate] = None

    def next_page(self):
        self.page += 1

    def previous_page(self):
        if self.page > 0:
            self.page -= 1

    def set_filter(self, predicate: Predicate):
        self.active_filter = predicate
        self.page = 0

    def clear_filter(self):
        self.active_filter = None
        self.page = 0


class DocumentBrowser:
    """Pages through one collection, optionally narrowed by a search condition."""

    def __init__(self, store: DocumentStore, prompter: Prompter, console: Console,
                 options: BrowseOptions):
        self.store = store
        self.prompter = prompter
        self.console = console
        self.options = options

    def fetch_page(self, state: BrowseState) -> List[DocumentSnapshot]:
        page_size = self.options.page_size
        return self.store.query(
            state.collection,
            state.active_filter,
            offset=state.page * page_size,
            limit=page_size,
        )

    def search(self, state: BrowseState) -> Optional[Predicate]:
        session = SearchSession(
            self.store,
            self.prompter,
            self.console,
            state.collection,
            state.display_format,
            preview_limit=self.options.preview_limit,
            chunk_size=self.options.chunk_size,
            pause_seconds=self.options.pause_seconds,
        )
        return session.run()

    def apply_action(self, state: BrowseState, action: BrowseAction) -> bool:
        """
        Apply one menu action to the browse state.

        Returns:
            False when the operator asked to go back to the collections
        """
        if action is BrowseAction.NEXT_PAGE:
            state.next_page()
        elif action is BrowseAction.PREVIOUS_PAGE:
            state.previous_page()
        elif action is BrowseAction.NEW_SEARCH:
            predicate = self.search(state)
            if predicate is not None:
                state.set_filter(predicate)
        elif action is BrowseAction.CLEAR_SEARCH:
            state.clear_filter()
        elif action is BrowseAction.BACK:
            return False
        return True

    def run(self, collection: str) -> BrowseState:
        """
        Browse a collection until it runs out of documents or the operator
        goes back.

        Returns:
            The final browse state
        """
        _, label = self.prompter.select("Select display format", DisplayFormat.labels())
        state = BrowseState(collection=collection, display_format=DisplayFormat(label))

        while True:
            documents = self.fetch_page(state)
            if not documents:
                print_notice(self.console, "No more documents available.")
                return state

            self.console.print(
                f"Page {state.page + 1} of collection '{collection}':\n",
                markup=False
            )
            display_documents(self.console, documents, state.display_format)

            _, label = self.prompter.select("Select an action", BrowseAction.labels())
            action = BrowseAction(label)
            logger.debug(f"{collection!r} page {state.page}: {action.value}")

            if not self.apply_action(state, action):
                return state


class CollectionNavigator:
    """Top-level loop: choose a collection to browse, or exit."""

    def __init__(self, store: DocumentStore, prompter: Prompter, console: Console,
                 options: Optional[BrowseOptions] = None):
        self.store = store
        self.prompter = prompter
        self.console = console
        self.options = options or BrowseOptions()
        self.browser = DocumentBrowser(store, prompter, console, self.options)

    def run(self):
        """Loop until the operator picks Exit. Collections are re-listed every time."""
        while True:
            collections = self.store.list_collections()
            index, choice = self.prompter.select(
                "Select a collection to browse or exit",
                collections + [EXIT_ITEM]
            )

            if index == len(collections):
                self.console.print("Goodbye!")
                return

            self.browser.run(choice)
