"""Typed payload marshalling between application records and claim mappings.

A typed payload is a dataclass or a pydantic model whose fields map 1:1 to
claim names. Fields can opt out of the token:

    @dataclass
    class Session(TokenPayload):
        role: str = ""
        cache_hits: int = exclude_from_payload(default=0)

    class Profile(BaseModel):
        email: str = ""
        local_only: str = Field(default="", exclude=True)

Claim values are converted back to the declared field types with pydantic's
TypeAdapter in lax mode, so an ISO timestamp claim restores a ``datetime``
field and a list claim restores a ``tuple`` field.
"""

import dataclasses
import functools
import logging
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Self, TypeVar

from pydantic import BaseModel, TypeAdapter

from simple_jwt.core.claims import is_reserved
from simple_jwt.errors import ExtractionError

logger = logging.getLogger("simple_jwt.payload")

EXCLUDE_FROM_PAYLOAD = "exclude_from_payload"

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PayloadField:
    """A field of a typed payload as seen by the marshaller."""

    name: str
    annotation: Any
    excluded: bool


def exclude_from_payload(
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    **kwargs: Any,
) -> Any:
    """A ``dataclasses.field()`` that is never written to or read from a token.

    Accepts the same keyword arguments as ``dataclasses.field()``.
    """
    metadata = {**(kwargs.pop("metadata", None) or {}), EXCLUDE_FROM_PAYLOAD: True}
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata, **kwargs,
    )


@functools.lru_cache(maxsize=128)
def payload_fields(payload_type: type) -> tuple[PayloadField, ...]:
    """List the fields of a payload type in declaration order.

    Raises:
        TypeError: If ``payload_type`` is neither a dataclass nor a pydantic model.
    """
    if isinstance(payload_type, type) and issubclass(payload_type, BaseModel):
        return tuple(
            PayloadField(name, info.annotation, _pydantic_excluded(info))
            for name, info in payload_type.model_fields.items()
        )

    if isinstance(payload_type, type) and dataclasses.is_dataclass(payload_type):
        try:
            hints = typing.get_type_hints(payload_type)
        except (NameError, TypeError):
            # Unresolvable forward references; fall back to the raw annotations.
            hints = {}
        return tuple(
            PayloadField(
                f.name,
                hints.get(f.name, Any if isinstance(f.type, str) else f.type),
                bool(f.metadata.get(EXCLUDE_FROM_PAYLOAD, False)),
            )
            for f in dataclasses.fields(payload_type)
        )

    raise TypeError(
        f"{getattr(payload_type, '__qualname__', payload_type)!r} is not a dataclass "
        "or pydantic model"
    )


def payload_to_claims(payload: Any) -> dict[str, Any]:
    """Convert a typed payload to a claim mapping.

    Excluded fields are skipped; every other value is passed through as is.
    Encoding values into the token format is the signing backend's job.

    Raises:
        TypeError: If the payload is not a dataclass or pydantic model instance.
    """
    return {
        spec.name: getattr(payload, spec.name)
        for spec in payload_fields(type(payload))
        if not spec.excluded
    }


def claims_to_payload(claims: Mapping[str, Any], target_type: type[T]) -> T:
    """Build a typed payload from a claim mapping.

    The target is constructed without arguments, then each claim whose name
    matches a non-excluded field is converted and assigned. Registered claims
    and unknown names are ignored. A field that cannot be converted or assigned
    is skipped with a warning and the rest of the payload is still filled.

    Raises:
        ExtractionError: If the target type is unsupported or cannot be
            constructed without arguments.
    """
    type_name = getattr(target_type, "__qualname__", repr(target_type))
    try:
        fields = {spec.name: spec for spec in payload_fields(target_type)}
    except TypeError as exc:
        raise ExtractionError(f"Unsupported payload type {type_name}") from exc

    try:
        instance = target_type()
    except Exception as exc:
        logger.error("Cannot construct payload type %s without arguments", type_name)
        raise ExtractionError(f"Cannot construct {type_name}: {exc}") from exc

    for name, value in claims.items():
        if is_reserved(name):
            continue
        spec = fields.get(name)
        if spec is None or spec.excluded:
            continue
        try:
            setattr(instance, name, _convert(spec.annotation, value))
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Skipped payload field %s.%s: %s", type_name, name, exc)

    return instance


class TokenPayload:
    """Optional base for typed payloads.

    Subclasses may override ``to_claims`` / ``from_claims`` to take full
    control of their claim layout; the resolver always goes through them.
    """

    __slots__ = ()

    def to_claims(self) -> dict[str, Any]:
        return payload_to_claims(self)

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> Self:
        return claims_to_payload(claims, cls)


def marshal(payload: Any) -> dict[str, Any]:
    """Turn a raw mapping or a typed payload into a fresh claim dict."""
    if payload is None:
        return {}
    if isinstance(payload, Mapping):
        return dict(payload)
    if isinstance(payload, TokenPayload):
        return dict(payload.to_claims())
    return payload_to_claims(payload)


def unmarshal(claims: Mapping[str, Any], target_type: type[T]) -> T:
    """Inverse of marshal for a typed target."""
    if isinstance(target_type, type) and issubclass(target_type, TokenPayload):
        return target_type.from_claims(claims)
    return claims_to_payload(claims, target_type)


def _pydantic_excluded(info) -> bool:
    if info.exclude is True:
        return True
    extra = info.json_schema_extra
    return isinstance(extra, dict) and bool(extra.get(EXCLUDE_FROM_PAYLOAD, False))


@functools.lru_cache(maxsize=256)
def _adapter(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def _convert(annotation: Any, value: Any) -> Any:
    if annotation is Any:
        return value
    try:
        adapter = _adapter(annotation)
    except TypeError:
        # Unhashable annotation objects cannot be cached.
        adapter = TypeAdapter(annotation)
    return adapter.validate_python(value)
