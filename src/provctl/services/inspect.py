"""InspectService — read-only answers about bindings and version gating."""

from __future__ import annotations

import re

from provctl.domain.bindings import ServiceBinding, find_service
from provctl.domain.version import TOMCAT_8, is_below, parse_version, schema_for
from provctl.services.base import BaseService
from provctl.services.result import ServiceResult
from provctl.services.telemetry import traced


class InspectService(BaseService):
    """Dry-run views of the decisions :class:`ProvisionService` will make."""

    @traced
    def find_service(
        self,
        bindings: list[ServiceBinding],
        pattern: str | None = None,
    ) -> ServiceResult:
        """Report which binding would configure the database.

        Credentials are reduced to their key names.
        """
        op = "find_service"
        pattern = pattern or self._settings.service.filter
        try:
            match = find_service(bindings, pattern)
        except re.error as exc:
            return self._invalid(op, ValueError(f"Invalid filter {pattern!r}: {exc}"))

        data: dict[str, object] = {"filter": pattern, "bindings": len(bindings)}
        if match is None:
            data["service"] = None
            return ServiceResult(
                ok=True,
                op=op,
                data=data,
                warnings=[f"No service matching {pattern!r} is bound"],
            )

        data.update(
            service=match.name,
            label=match.label,
            tags=list(match.tags),
            credential_keys=sorted(match.credentials),
        )
        return ServiceResult(ok=True, op=op, data=data)

    def gate(self, raw_version: str) -> ServiceResult:
        """Report the configuration schema a runtime version selects."""
        op = "gate"
        try:
            version = parse_version(raw_version)
        except ValueError as exc:
            return self._invalid(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "version": str(version),
                "boundary": str(TOMCAT_8),
                "below_boundary": is_below(version),
                "schema": str(schema_for(version)),
            },
        )
