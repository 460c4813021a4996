from __future__ import annotations


class ContainerError(RuntimeError):
    """Error while retrieving an entry from the container.

    Raised by `Container.get` when a creator fails. The message is the
    original failure's message (empty when it had none) and `cause` keeps
    a reference to the original exception.
    """

    def __init__(self, message: str = "", *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class NotFoundError(ContainerError):
    """No entry was found for the requested identifier."""

    def __init__(self, id: str) -> None:  # noqa: A002
        super().__init__(f"No entry found for identifier: {id!r}")
        self.id = id
