from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from ._errors import ContainerError, NotFoundError


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContainerInterface(Protocol):
    """Public surface of an IoC container."""

    def get(self, id: str) -> Any: ...  # noqa: A002

    def has(self, id: str) -> bool: ...  # noqa: A002

    def bind(self, id: str, creator: Creator[Any]) -> None: ...  # noqa: A002

    def singleton(self, id: str, creator: Creator[Any]) -> None: ...  # noqa: A002

    def factory(self, id: str, creator: Creator[Callable[..., Any]]) -> None: ...  # noqa: A002

    def constant(self, id: str, creator: Creator[Any]) -> None: ...  # noqa: A002

    def alias(self, id: str, alias: str) -> None: ...  # noqa: A002


# A creator receives the container and produces the value
Creator = Callable[[ContainerInterface], T]


@dataclass(frozen=True)
class Binding:
    creator: Creator[Any]
    shared: bool = False
    constant: bool = False  # introspection only, resolved like any other binding


def _error_message(e: Exception) -> str:
    # str(KeyError("x")) is "'x'", keep the raw message instead
    if len(e.args) == 1 and isinstance(e.args[0], str):
        return e.args[0]
    return str(e)


class Container:
    """Minimal IoC container.

    - bind creators to string identifiers
    - shared (singleton) or transient bindings
    - single-level aliases.
    """

    def __init__(self) -> None:
        self._bindings: dict[str, Binding] = {}
        self._instances: dict[str, Any] = {}
        self._aliases: dict[str, str] = {}
        self._lock = threading.RLock()
        # One lock per shared id, held while its creator runs
        self._creation_locks: dict[str, threading.RLock] = {}

    def _register(self, id: str, creator: Creator[Any], *, shared: bool = False, constant: bool = False) -> None:  # noqa: A002
        with self._lock:
            self._bindings[id] = Binding(creator=creator, shared=shared, constant=constant)
        logger.debug("Bound %r (shared=%s, constant=%s)", id, shared, constant)

    def _canonical(self, id: str) -> str:  # noqa: A002
        # Single lookup: an alias of an alias is not followed
        return self._aliases.get(id, id)

    def _build(self, id: str, binding: Binding) -> Any:  # noqa: A002
        try:
            return binding.creator(self)
        except Exception as e:  # noqa: BLE001
            # A wrapped failure from a nested get was logged by the inner creator
            if not isinstance(e, ContainerError) or isinstance(e, NotFoundError):
                logger.warning("Creator for %r failed: %s: %s", id, type(e).__name__, e)
            raise ContainerError(_error_message(e), cause=e) from e

    def get(self, id: str) -> Any:  # noqa: A002
        """Resolve the identifier to a value.

        - Translate the identifier through the aliases.
        - Return the cached instance if the binding is shared and was resolved before.
        - Otherwise call the binding's creator with this container.

        The container lock is not held while a creator runs, so creators may
        resolve other entries from any thread. A shared creator still runs once.

        Raises `NotFoundError` when nothing is bound for the identifier and
        `ContainerError` when the creator fails.
        """
        with self._lock:
            canonical = self._canonical(id)

            if canonical in self._instances:
                return self._instances[canonical]

            binding = self._bindings.get(canonical)
            if binding is None:
                raise NotFoundError(canonical)

            if not binding.shared:
                creation_lock = None
            else:
                creation_lock = self._creation_locks.setdefault(canonical, threading.RLock())

        if creation_lock is None:
            return self._build(canonical, binding)

        with creation_lock:
            with self._lock:
                if canonical in self._instances:
                    return self._instances[canonical]

            instance = self._build(canonical, binding)

            with self._lock:
                self._instances[canonical] = instance
            logger.debug("Cached shared instance for %r", canonical)

            return instance

    def has(self, id: str) -> bool:  # noqa: A002
        """Return True if `get(id)` will not raise `NotFoundError`.

        It may still raise `ContainerError` if the creator fails.
        """
        with self._lock:
            canonical = self._canonical(id)
            return canonical in self._bindings or canonical in self._instances

    def __contains__(self, id: object) -> bool:  # noqa: A002
        return isinstance(id, str) and self.has(id)

    def binding(self, id: str) -> Binding | None:  # noqa: A002
        """Return the binding registered for the identifier, if any."""
        with self._lock:
            return self._bindings.get(self._canonical(id))

    def bind(self, id: str, creator: Creator[Any]) -> None:  # noqa: A002
        """Bind a creator, called on every resolution."""
        self._register(id, creator)

    def singleton(self, id: str, creator: Creator[Any]) -> None:  # noqa: A002
        """Bind a creator whose result is cached after the first resolution."""
        self._register(id, creator, shared=True)

    def factory(self, id: str, creator: Creator[Callable[..., Any]]) -> None:  # noqa: A002
        """Bind a creator returning a factory callable.

        Resolution returns the callable itself, it is not invoked.
        """
        self._register(id, creator)

    def constant(self, id: str, creator: Creator[Any]) -> None:  # noqa: A002
        """Bind a creator returning a fixed value.

        Example:
          container.constant("PI", lambda _: 3.14159)

        """
        self._register(id, creator, constant=True)

    def alias(self, id: str, alias: str) -> None:  # noqa: A002
        """Make `alias` resolve to `id`.

        `id` should be a canonical identifier, aliases are not followed transitively.
        """
        with self._lock:
            self._aliases[alias] = id
        logger.debug("Aliased %r -> %r", alias, id)
