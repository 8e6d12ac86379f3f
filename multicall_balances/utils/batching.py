from typing import Sequence, TypeVar

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """Split into consecutive slices of `size` items; the last one may be shorter."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [list(items[i: i + size]) for i in range(0, len(items), size)]


def flatten(chunks: Sequence[Sequence[T]]) -> list[T]:
    out: list[T] = []
    for part in chunks:
        out.extend(part)
    return out
