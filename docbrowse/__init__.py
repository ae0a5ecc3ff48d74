"""
docbrowse - interactive terminal browser for document databases.

Browse top-level collections, page through documents and narrow them down
with single-field search conditions, without writing queries by hand.

Example Usage:
    >>> from docbrowse import Database, CollectionNavigator, Prompter
    >>> from rich.console import Console
    >>> console = Console()
    >>> with Database(path="documents.db") as store:
    ...     CollectionNavigator(store, Prompter(console), console).run()
"""

__version__ = "0.1.0"

from docbrowse.db import Database
from docbrowse.store import DocumentStore, DocumentSnapshot, StoreError

from docbrowse.config import BrowseConfig, get_config, init_config

from docbrowse.predicates import Operator, Predicate, build_predicate, coerce_value
from docbrowse.utils import chunk

from docbrowse.prompts import Prompter, PromptAborted
from docbrowse.render import DisplayFormat
from docbrowse.search import SearchSession
from docbrowse.browser import BrowseOptions, BrowseState, CollectionNavigator, DocumentBrowser

__all__ = [
    "Database",
    "DocumentStore",
    "DocumentSnapshot",
    "StoreError",
    "BrowseConfig",
    "get_config",
    "init_config",
    "Operator",
    "Predicate",
    "build_predicate",
    "coerce_value",
    "chunk",
    "Prompter",
    "PromptAborted",
    "DisplayFormat",
    "SearchSession",
    "BrowseOptions",
    "BrowseState",
    "CollectionNavigator",
    "DocumentBrowser",
]
