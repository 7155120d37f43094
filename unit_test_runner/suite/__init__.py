"""Authoring API for test modules run by unit_test_runner."""

from unit_test_runner.suite.asserts import assert_sequence_equal, assert_set_equal
from unit_test_runner.suite.base import SkippedError, TestSuite, skip
from unit_test_runner.suite.markers import (
    skip_test,
    test_class,
    test_method,
    test_with,
)

__all__ = [
    "SkippedError",
    "TestSuite",
    "assert_sequence_equal",
    "assert_set_equal",
    "skip",
    "skip_test",
    "test_class",
    "test_method",
    "test_with",
]
