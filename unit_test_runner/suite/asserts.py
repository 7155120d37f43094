"""Collection assertions for test authors."""

from collections.abc import Iterable
from typing import Any


def assert_sequence_equal(expected: Iterable[Any], actual: Iterable[Any]) -> None:
    """Assert both iterables yield equal items in the same order."""
    expected_items = list(expected)
    actual_items = list(actual)
    if expected_items != actual_items:
        raise AssertionError(
            f"Sequences differ: expected {expected_items!r}, got {actual_items!r}"
        )


def assert_set_equal(expected: Iterable[Any], actual: Iterable[Any]) -> None:
    """Assert both iterables contain the same items, ignoring order.

    Lengths must match as well, so duplicates are not silently collapsed.
    Items only need to support equality, not hashing.
    """
    expected_items = list(expected)
    actual_items = list(actual)

    if len(expected_items) != len(actual_items):
        raise AssertionError(
            f"Collections differ in length: expected {len(expected_items)}, "
            f"got {len(actual_items)}"
        )

    missing = [item for item in expected_items if item not in actual_items]
    unexpected = [item for item in actual_items if item not in expected_items]
    if missing or unexpected:
        raise AssertionError(
            f"Collections differ: missing {missing!r}, unexpected {unexpected!r}"
        )
