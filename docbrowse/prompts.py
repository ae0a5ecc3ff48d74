"""
Interactive prompts for docbrowse.

Two primitives cover every interaction in the browser: picking one item from
a labeled list, and reading a line of free text with an optional validator.
Both are built on prompt_toolkit, with the option list drawn by rich.
"""
import logging
from typing import Callable, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style
from prompt_toolkit.validation import ValidationError, Validator
from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)

PROMPT_STYLE = Style.from_dict({
    'prompt': '#00aa00 bold',
})


class PromptAborted(Exception):
    """Raised when the operator interrupts a prompt (Ctrl-C or Ctrl-D)."""
    pass


def non_empty(message: str) -> Callable[[str], None]:
    """Build a validator that rejects empty input with the given message."""
    def validate(text: str) -> None:
        if text == "":
            raise ValueError(message)
    return validate


class _CallableValidator(Validator):
    """Adapt a plain `validate(text)` callable raising ValueError to prompt_toolkit."""

    def __init__(self, func: Callable[[str], None]):
        self.func = func

    def validate(self, document):
        try:
            self.func(document.text)
        except ValueError as e:
            raise ValidationError(message=str(e), cursor_position=len(document.text))


class _ChoiceValidator(Validator):
    """Accept an exact (case-insensitive) item label or a 1-based item number."""

    def __init__(self, items: List[str]):
        self.items = items

    def validate(self, document):
        if _resolve_choice(document.text, self.items) is None:
            raise ValidationError(
                message=f"Enter a number between 1 and {len(self.items)}",
                cursor_position=len(document.text)
            )


def _resolve_choice(text: str, items: List[str]) -> Optional[int]:
    """
    Map prompt input to an item index, or None if it names no item.

    A matching label wins over an item number, so an item labeled "3" is
    reachable by typing its label.
    """
    text = text.strip()
    lowered = text.lower()
    for index, item in enumerate(items):
        if item.lower() == lowered:
            return index
    if text.isdigit():
        index = int(text) - 1
        return index if 0 <= index < len(items) else None
    return None


class Prompter:
    """Terminal prompt service: select from a list or read a line of text."""

    def __init__(self, console: Optional[Console] = None,
                 session: Optional[PromptSession] = None):
        self.console = console or Console()
        self.session = session or PromptSession(style=PROMPT_STYLE)

    def _ask(self, message: str, **kwargs) -> str:
        try:
            return self.session.prompt([('class:prompt', message)], **kwargs)
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptAborted(f"Prompt '{message.strip()}' aborted") from e

    def select(self, label: str, items: List[str]) -> Tuple[int, str]:
        """
        Ask the operator to pick one item.

        Args:
            label: Heading shown above the options
            items: Option labels, shown numbered from 1

        Returns:
            Tuple of (0-based index, selected label)

        Raises:
            PromptAborted: If the prompt is interrupted
        """
        if not items:
            raise ValueError("select() needs at least one item")

        self.console.print(f"[bold cyan]{escape(label)}[/bold cyan]")
        for number, item in enumerate(items, 1):
            self.console.print(f"  [cyan]{number:>2}[/cyan]  {escape(item)}")

        answer = self._ask(
            "> ",
            completer=WordCompleter(items, ignore_case=True, sentence=True),
            validator=_ChoiceValidator(items),
            validate_while_typing=False,
        )
        index = _resolve_choice(answer, items)
        logger.debug(f"Selected {items[index]!r} for {label!r}")
        return index, items[index]

    def text(self, label: str, validate: Optional[Callable[[str], None]] = None) -> str:
        """
        Read one line of free text.

        Args:
            label: Prompt label
            validate: Optional callable raising ValueError for rejected input;
                the message is shown inline and the prompt repeats

        Raises:
            PromptAborted: If the prompt is interrupted
        """
        kwargs = {}
        if validate is not None:
            kwargs['validator'] = _CallableValidator(validate)
            kwargs['validate_while_typing'] = False
        return self._ask(f"{label}: ", **kwargs)
