"""Unit tests for kernel error hierarchy."""

from __future__ import annotations

import uuid

import pytest

from policy_gateway.kernel.errors import (
    AccessDeniedError,
    ApplicationError,
    BaseError,
    DomainError,
    EngineUnavailableError,
    ExternalServiceError,
    ForbiddenError,
    InfrastructureError,
    InternalError,
    InvalidInputError,
    MissingIdentityError,
    TimeoutError,
    UnauthorizedError,
    ValidationError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"

    def test_default_code(self) -> None:
        assert BaseError("m").code == "base_error"

    def test_custom_code(self) -> None:
        assert BaseError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_to_dict_includes_cause_repr(self) -> None:
        err = BaseError("wrapper", cause=ValueError("original"))
        d = err.to_dict()
        assert "original" in d["cause"]
        assert isinstance(err.__cause__, ValueError)

    def test_str_carries_code_and_message(self) -> None:
        assert str(BaseError("m", code="c")) == "[c] m"

    def test_to_dict_omits_empty_detail(self) -> None:
        assert BaseError("m").to_dict() == {"code": "base_error", "message": "m"}

    def test_repr(self) -> None:
        assert repr(BaseError("m")) == "BaseError(code='base_error', message='m')"


# ---------------------------------------------------------------------------
# Hierarchy
# ---------------------------------------------------------------------------


class TestHierarchy:
    @pytest.mark.parametrize(
        ("cls", "parent"),
        [
            (ValidationError, DomainError),
            (InvalidInputError, ValidationError),
            (UnauthorizedError, ApplicationError),
            (MissingIdentityError, UnauthorizedError),
            (ForbiddenError, ApplicationError),
            (AccessDeniedError, ForbiddenError),
            (TimeoutError, ApplicationError),
            (InternalError, ApplicationError),
            (ExternalServiceError, InfrastructureError),
            (EngineUnavailableError, ExternalServiceError),
        ],
    )
    def test_subclass(self, cls: type, parent: type) -> None:
        assert issubclass(cls, parent)
        assert issubclass(cls, BaseError)

    def test_app_timeout_does_not_shadow_builtin(self) -> None:
        assert not issubclass(TimeoutError, OSError)

    @pytest.mark.parametrize(
        ("err", "code"),
        [
            (InvalidInputError("blank subject"), "invalid_input"),
            (MissingIdentityError(), "missing_identity"),
            (AccessDeniedError(), "access_denied"),
            (EngineUnavailableError("policy-engine"), "engine_unavailable"),
        ],
    )
    def test_default_codes(self, err: BaseError, code: str) -> None:
        assert err.code == code


# ---------------------------------------------------------------------------
# Specific error payloads
# ---------------------------------------------------------------------------


class TestErrorPayloads:
    def test_validation_errors_list(self) -> None:
        err = ValidationError("bad", errors=[{"field": "subject", "message": "blank"}])
        assert err.to_dict()["errors"] == [{"field": "subject", "message": "blank"}]

    def test_validation_errors_default_empty(self) -> None:
        assert ValidationError("bad").errors == []

    def test_missing_identity_default_message(self) -> None:
        assert MissingIdentityError().message == "Authentication required"

    def test_forbidden_permission(self) -> None:
        err = ForbiddenError(permission="document:read")
        assert err.message == "Access denied"
        assert err.permission == "document:read"

    def test_internal_error_generates_opaque_id(self) -> None:
        err = InternalError(detail={"secret": "x"})
        uuid.UUID(err.error_id)
        assert err.to_dict() == {
            "code": "internal_error",
            "message": "An unexpected error occurred",
            "error_id": err.error_id,
        }

    def test_internal_error_ids_unique(self) -> None:
        assert InternalError().error_id != InternalError().error_id

    def test_external_service_fields(self) -> None:
        err = ExternalServiceError("policy-engine", status_code=502)
        assert err.service == "policy-engine"
        assert err.status_code == 502
        assert "policy-engine" in err.message
