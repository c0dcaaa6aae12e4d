"""BaseService — shared foundation for provctl services.

Every service receives the frozen :class:`ProvSettings` at construction
time and reads its tunables from there, never from the environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from provctl.services.result import ServiceResult

if TYPE_CHECKING:
    from provctl.config.settings import ProvSettings


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ProvisionService(BaseService):
            def provision(self, request: ProvisionRequest) -> ServiceResult:
                filter = self._settings.service.filter
                ...
    """

    def __init__(self, settings: ProvSettings) -> None:
        self._settings = settings

    @staticmethod
    def _invalid(op: str, exc: ValueError) -> ServiceResult:
        """Failed result for input that never reached the filesystem."""
        return ServiceResult.failure(op, "INVALID_INPUT", str(exc))
