"""Token identifier (jti) sources."""

import uuid
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IdSource(Protocol):
    """Protocol for token identifier generators.

    Implementations must be safe to call from several threads at once and
    must never hand out the same value twice for the lifetime of the issuer.
    """

    def next_id(self) -> Any:
        """Return a new identifier. It is converted with ``str()``."""
        ...


class UUIDSource:
    """Default source backed by random 128-bit UUID4 values."""

    def next_id(self) -> uuid.UUID:
        return uuid.uuid4()


class CallableIdSource:
    """Adapts a zero-argument callable, e.g. ``uuid.uuid1``, to IdSource."""

    def __init__(self, factory: Callable[[], Any]) -> None:
        self._factory = factory

    def next_id(self) -> Any:
        return self._factory()


def as_id_source(source: IdSource | Callable[[], Any] | None) -> IdSource:
    """Normalize the ``id_source`` resolver option."""
    if source is None:
        return UUIDSource()
    if isinstance(source, IdSource):
        return source
    if callable(source):
        return CallableIdSource(source)
    raise TypeError(f"id_source must provide next_id() or be callable, got {type(source).__name__}")
