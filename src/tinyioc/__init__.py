"""Minimal Inversion-of-Control container.

This package provides a small registry mapping string identifiers to creator
callables, resolved on demand, with shared (singleton) bindings and aliases.

Exports:
- `Container`: The container; bind creators with `bind`, `singleton`, `factory`
  or `constant`, alias identifiers with `alias` and resolve them with `get`.
- `Binding`: Read-only record of a creator and its `shared`/`constant` flags.
- `ContainerInterface`: Protocol describing the container's public surface.
- `Creator`: Type of the callables bound to identifiers, `Callable[[ContainerInterface], T]`.
- `ContainerError`: Raised when a creator fails during resolution.
- `NotFoundError`: Raised when no entry exists for an identifier.
"""

from ._container import Binding, Container, ContainerInterface, Creator
from ._errors import ContainerError, NotFoundError


__all__ = ["Binding", "Container", "ContainerError", "ContainerInterface", "Creator", "NotFoundError"]
