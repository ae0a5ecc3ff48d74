"""Small helpers shared across docbrowse."""
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """
    Split items into consecutive groups of at most `size` elements.

    Args:
        items: Sequence to split
        size: Maximum group size (must be >= 1)

    Returns:
        List of groups in input order; the last group may be shorter.
        An empty input yields an empty list.
    """
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]
