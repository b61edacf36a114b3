"""Exceptions raised by the queue store."""


class QueueError(Exception):
    """Base exception for queue errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class IndexOutOfRange(QueueError, IndexError):
    """Raised when a mutator receives a position outside the queue bounds.

    The queue is left untouched when this is raised.
    """

    def __init__(self, operation: str, index: int, size: int) -> None:
        if size:
            msg = f"{operation}: index {index} not in [0, {size - 1}]"
        else:
            msg = f"{operation}: index {index} out of range for empty queue"
        super().__init__(msg, code="INDEX_OUT_OF_RANGE")
        self.operation = operation
        self.index = index
        self.size = size
