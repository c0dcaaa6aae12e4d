"""First-write-wins creation of ``portal-ext.properties``.

The file's existence is the idempotency marker: once present, whether
generated by an earlier run or edited by hand, it is never rewritten.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from provctl.domain.properties import (
    DEFAULT_AUTO_DEPLOY_DIR,
    DEFAULT_DRIVER_CLASS,
    DatabaseCredentials,
    PoolSettings,
    render_portal_properties,
    unsafe_fields,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class WriteOutcome(StrEnum):
    CREATED = "created"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class PropertiesReport:
    """What happened to the properties file.

    *unescaped* names the credential fields written with a line break in
    them; it is empty when the file was skipped.
    """

    outcome: WriteOutcome
    unescaped: tuple[str, ...] = ()


def write_portal_properties(
    path: Path,
    credentials: Mapping[str, Any],
    *,
    pool: PoolSettings | None = None,
    driver_class: str = DEFAULT_DRIVER_CLASS,
    auto_deploy_dir: str = DEFAULT_AUTO_DEPLOY_DIR,
) -> PropertiesReport:
    """Create *path* from *credentials* unless it already exists.

    Raises MissingCredentialField when a required field is absent.
    Write failures propagate and leave no file behind.
    """
    if path.exists():
        logger.info("%s already exists, skipping database configuration", path)
        return PropertiesReport(WriteOutcome.SKIPPED)

    parsed = DatabaseCredentials.from_mapping(credentials)
    text = render_portal_properties(
        parsed,
        pool,
        driver_class=driver_class,
        auto_deploy_dir=auto_deploy_dir,
    )

    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        fh = path.open("x", encoding="utf-8", newline="\n")
    except FileExistsError:
        logger.info("%s appeared concurrently, skipping database configuration", path)
        return PropertiesReport(WriteOutcome.SKIPPED)

    try:
        with fh:
            fh.write(text)
    except OSError:
        path.unlink(missing_ok=True)
        raise

    logger.info("Created %s", path)
    return PropertiesReport(WriteOutcome.CREATED, tuple(unsafe_fields(parsed)))
