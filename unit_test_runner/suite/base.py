"""Base class and skip signalling for test classes."""

from typing import NoReturn


class SkippedError(Exception):
    """Raised from a test method (or its init hook) to skip it.

    Carries no message and is never reported as an error.
    """

    def __init__(self) -> None:
        """Create the sentinel without a message."""
        super().__init__()


def skip() -> NoReturn:
    """Skip the currently running test method."""
    raise SkippedError


class TestSuite:
    """Optional base class providing the lifecycle hooks a test class may define.

    ``static_init`` and ``static_cleanup`` run once per class, around all of its
    test methods. ``init`` and ``cleanup`` run around every test method
    invocation; ``cleanup`` only runs when the method succeeded.
    """

    __test__ = False

    def static_init(self) -> None:
        """Run once before the first test method of the class."""

    def static_cleanup(self) -> None:
        """Run once after the last test method of the class."""

    def init(self) -> None:
        """Run before every test method invocation."""

    def cleanup(self) -> None:
        """Run after every successful test method invocation."""

    @staticmethod
    def skip() -> NoReturn:
        """Skip the currently running test method."""
        skip()
