"""Tests for typed payload marshalling."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest
from pydantic import BaseModel, ConfigDict, Field

from conftest import ProfileModel, RolePayload, SessionPayload
from simple_jwt.core.payload import (
    TokenPayload,
    claims_to_payload,
    exclude_from_payload,
    marshal,
    payload_fields,
    payload_to_claims,
    unmarshal,
)
from simple_jwt.errors import ExtractionError


@dataclass(frozen=True)
class FrozenPayload:
    role: str = ""


@dataclass
class RequiredArgPayload:
    role: str


@dataclass
class SubjectShadowPayload:
    sub: str = "default"
    role: str = ""


@dataclass
class TuplePayload:
    scopes: tuple[str, ...] = ()
    tenant: uuid.UUID | None = None


class TaggedModel(BaseModel):
    name: str = ""
    hidden: str = Field(default="keep", json_schema_extra={"exclude_from_payload": True})


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""


# ---------------------------------------------------------------------------
# Field discovery
# ---------------------------------------------------------------------------


class TestPayloadFields:
    def test_dataclass_fields_in_declaration_order(self):
        fields = payload_fields(SessionPayload)
        assert [f.name for f in fields] == ["role", "level", "tags", "session_cache"]
        assert [f.excluded for f in fields] == [False, False, False, True]
        assert fields[1].annotation is int

    def test_pydantic_exclude_marker(self):
        fields = {f.name: f for f in payload_fields(ProfileModel)}
        assert fields["scratch"].excluded
        assert not fields["email"].excluded

    def test_pydantic_schema_extra_marker(self):
        fields = {f.name: f for f in payload_fields(TaggedModel)}
        assert fields["hidden"].excluded
        assert not fields["name"].excluded

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="not a dataclass"):
            payload_fields(dict)

    def test_exclude_from_payload_keeps_field_options(self):
        @dataclass
        class WithFactory:
            cache: list = exclude_from_payload(default_factory=list, metadata={"doc": "local"})

        (spec,) = payload_fields(WithFactory)
        assert spec.excluded
        assert WithFactory().cache == []


# ---------------------------------------------------------------------------
# Typed -> claims
# ---------------------------------------------------------------------------


class TestPayloadToClaims:
    def test_excluded_fields_skipped(self):
        payload = SessionPayload(role="admin", level=3, tags=["a"], session_cache="runtime")
        assert payload_to_claims(payload) == {"role": "admin", "level": 3, "tags": ["a"]}

    def test_values_passed_through_unchanged(self):
        tenant = uuid.uuid4()
        claims = payload_to_claims(ProfileModel(email="a@b.c", tenant=tenant))
        assert claims["tenant"] is tenant
        assert "scratch" not in claims

    def test_instance_required(self):
        with pytest.raises(TypeError):
            payload_to_claims(object())


# ---------------------------------------------------------------------------
# Claims -> typed
# ---------------------------------------------------------------------------


class TestClaimsToPayload:
    def test_fills_matching_fields(self):
        payload = claims_to_payload({"role": "admin", "level": 2, "tags": ["x"]}, SessionPayload)
        assert payload == SessionPayload(role="admin", level=2, tags=["x"])

    def test_excluded_field_keeps_default(self):
        payload = claims_to_payload({"session_cache": "from-token"}, SessionPayload)
        assert payload.session_cache == "local"

    def test_reserved_claims_never_restored(self):
        payload = claims_to_payload({"sub": "user-42", "role": "admin"}, SubjectShadowPayload)
        assert payload.sub == "default"
        assert payload.role == "admin"

    def test_unknown_claims_ignored(self):
        payload = claims_to_payload({"role": "admin", "unknown": 1}, RolePayload)
        assert payload.role == "admin"
        assert not hasattr(payload, "unknown")

    def test_type_compatible_conversion(self):
        tenant = uuid.uuid4()
        payload = claims_to_payload({"scopes": ["read", "write"], "tenant": str(tenant)}, TuplePayload)
        assert payload.scopes == ("read", "write")
        assert payload.tenant == tenant

    def test_pydantic_model_restored(self):
        joined = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
        payload = claims_to_payload(
            {"email": "a@b.c", "joined": "2024-01-02T03:04:05Z", "scratch": "leak"},
            ProfileModel,
        )
        assert payload.email == "a@b.c"
        assert payload.joined == joined
        assert payload.scratch == ""

    def test_bad_field_skipped_rest_filled(self, caplog):
        with caplog.at_level(logging.WARNING, logger="simple_jwt.payload"):
            payload = claims_to_payload({"level": "not-a-number", "role": "admin"}, SessionPayload)
        assert payload.level == 0
        assert payload.role == "admin"
        assert "level" in caplog.text

    def test_frozen_dataclass_fields_skipped(self, caplog):
        payload = claims_to_payload({"role": "admin"}, FrozenPayload)
        assert payload.role == ""
        assert "FrozenPayload.role" in caplog.text

    def test_frozen_model_fields_skipped(self):
        payload = claims_to_payload({"name": "x"}, FrozenModel)
        assert payload.name == ""

    def test_construction_failure_is_fatal(self):
        with pytest.raises(ExtractionError, match="RequiredArgPayload") as exc_info:
            claims_to_payload({"role": "admin"}, RequiredArgPayload)
        assert exc_info.value.code == "extraction_failed"

    def test_unsupported_target(self):
        with pytest.raises(ExtractionError, match="Unsupported"):
            claims_to_payload({"role": "admin"}, dict)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


@dataclass
class UpperPayload(TokenPayload):
    role: str = ""

    def to_claims(self):
        return {"ROLE": self.role.upper()}

    @classmethod
    def from_claims(cls, claims):
        return cls(role=claims.get("ROLE", "").lower())


class TestMarshal:
    def test_none_is_empty(self):
        assert marshal(None) == {}

    def test_mapping_copied(self):
        raw = {"role": "admin"}
        claims = marshal(raw)
        assert claims == raw
        assert claims is not raw

    def test_token_payload_override_used(self):
        assert marshal(UpperPayload(role="admin")) == {"ROLE": "ADMIN"}
        assert unmarshal({"ROLE": "ADMIN"}, UpperPayload).role == "admin"

    def test_plain_dataclass(self):
        @dataclass
        class Plain:
            items: list[int] = field(default_factory=list)

        assert marshal(Plain(items=[1, 2])) == {"items": [1, 2]}
        assert unmarshal({"items": [3]}, Plain).items == [3]
