"""Provisioning error taxonomy.

Every fatal condition raised below the service layer is a
:class:`ProvisionError`. The service layer converts them into a failed
``ServiceResult`` using :attr:`ProvisionError.code`.

A missing service binding and an already existing properties file are
normal outcomes and have no exception type.
"""

from __future__ import annotations


class ProvisionError(Exception):
    """Base class for fatal provisioning failures."""

    code = "PROVISION_FAILED"


class StructuralConfigError(ProvisionError):
    """An expected XML element is missing or the document is malformed."""

    code = "STRUCTURAL_CONFIG"


class PackagingError(ProvisionError):
    """The application archive could not be written."""

    code = "PACKAGING"


class ExtractionError(ProvisionError):
    """The runtime archive could not be unpacked into the sandbox."""

    code = "EXTRACTION"


class MissingCredentialField(ProvisionError):
    """A required credential is absent from the bound service."""

    code = "MISSING_CREDENTIAL"

    def __init__(self, field: str) -> None:
        super().__init__(f"Service credentials are missing required field {field!r}")
        self.field = field
