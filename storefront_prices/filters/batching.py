# storefront_prices/filters/batching.py

"""Identifier de-duplication and fixed-size batching."""

from collections.abc import Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")


def unique_in_order(values: Iterable[T]) -> list[T]:
    """Drop repeated values, keeping the first occurrence's position."""
    return list(dict.fromkeys(values))


def chunked(values: Sequence[T], size: int) -> list[list[T]]:
    """Split *values* into consecutive batches of at most *size* items.

    Raises:
        ValueError: if *size* is not positive.
    """
    if size < 1:
        msg = f"Batch size must be positive, got {size}"
        raise ValueError(msg)
    return [
        list(values[start:start + size])
        for start in range(0, len(values), size)
    ]
