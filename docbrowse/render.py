"""Rendering of fetched documents as rich tables or key/value blocks."""
import json
from enum import Enum
from typing import Any, List

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from docbrowse.store import DocumentSnapshot


class DisplayFormat(Enum):
    """How a page of documents is drawn, labeled as the format picker shows it."""
    TABLE = "Table Format"
    COLUMN = "Column Format"

    @classmethod
    def labels(cls) -> List[str]:
        return [fmt.value for fmt in cls]


def format_value(value: Any) -> str:
    """Format a document field value for display."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def _new_table(headers: List[str]) -> Table:
    table = Table(box=box.SIMPLE_HEAD, show_lines=True, header_style="bold cyan")
    for header in headers:
        table.add_column(Text(header.upper()), no_wrap=True)
    return table


def print_documents_table(console: Console, documents: List[DocumentSnapshot]):
    """Print documents as one table; columns come from the first document only."""
    if not documents:
        console.print("No documents found.")
        return

    headers = list(documents[0].data.keys())
    table = _new_table(headers)
    for doc in documents:
        table.add_row(*(Text(format_value(doc.data.get(h))) for h in headers))
    console.print(table)


def print_document_table(console: Console, doc: DocumentSnapshot):
    headers = list(doc.data.keys())
    table = _new_table(headers)
    table.add_row(*(Text(format_value(doc.data[h])) for h in headers))
    console.print(table)


def print_document_key_value(console: Console, doc: DocumentSnapshot):
    console.print()
    console.print(Text(f"Document ID: {doc.id}", style="bold"))
    for key, value in doc.data.items():
        console.print(Text(f"  {key}: {format_value(value)}"))


def print_documents_key_value(console: Console, documents: List[DocumentSnapshot]):
    """Print each document as an id line followed by indented key: value lines."""
    if not documents:
        console.print("No documents found.")
        return

    for doc in documents:
        print_document_key_value(console, doc)


def display_documents(console: Console, documents: List[DocumentSnapshot],
                      display_format: DisplayFormat):
    """Render a batch of documents in the chosen format."""
    if not documents:
        console.print("No documents found.")
        return

    if display_format is DisplayFormat.TABLE:
        print_documents_table(console, documents)
    else:
        print_documents_key_value(console, documents)


def display_document(console: Console, doc: DocumentSnapshot, table_format: bool = False):
    """
    Render a single document.

    Chooses the layout from the --table flag rather than a per-session
    display format. The interactive browser always asks for a display format
    and never calls this.
    """
    if table_format:
        print_document_table(console, doc)
    else:
        print_document_key_value(console, doc)


def print_notice(console: Console, message: str):
    """Print a short message between horizontal rules."""
    rule = "─" * (len(message) + 4)
    console.print(rule, style="dim")
    console.print(f" {message}", style="yellow", markup=False)
    console.print(rule, style="dim")
