"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from provctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="provision", data={"artifact": "deploy/app.war"})
        assert result.ok is True
        assert result.data == {"artifact": "deploy/app.war"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure(
            "provision",
            "PACKAGING",
            "disk full",
            warnings=["w"],
            step="repackage",
            completed=["expand"],
        )
        assert result.ok is False
        assert result.warnings == ["w"]
        assert result.error == ServiceError(
            code="PACKAGING",
            message="disk full",
            detail={"step": "repackage", "completed": ["expand"]},
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult.failure("gate", "INVALID_INPUT", "bad")
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is False
        assert parsed["error"]["code"] == "INVALID_INPUT"
        assert parsed["error"]["detail"] == {}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]
