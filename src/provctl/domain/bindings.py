"""Service bindings and the single-service resolver.

Bindings arrive in the Cloud Foundry ``VCAP_SERVICES`` shape::

    {"p-mysql": [{"name": "lf-mysqldb-1", "label": "p-mysql",
                  "tags": ["mysql"], "credentials": {...}}]}

A flat JSON list of binding objects is accepted as well.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_FILTER = "lf-mysqldb"


class ServiceBinding(BaseModel):
    """One bound backing service. Read-only to the provisioner."""

    model_config = {"frozen": True}

    name: str
    label: str = ""
    tags: tuple[str, ...] = ()
    credentials: dict[str, Any] = Field(default_factory=dict)

    def candidates(self) -> list[str]:
        """Strings the filter is matched against, in priority order."""
        return [self.name, self.label, *self.tags]


def parse_services(raw: str | dict[str, Any] | list[Any] | None) -> list[ServiceBinding]:
    """Parse bindings from JSON text or already-decoded data.

    Empty input yields an empty list. Raises ValueError on malformed input.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        if not raw.strip():
            return []
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            msg = f"Service bindings are not valid JSON: {exc}"
            raise ValueError(msg) from exc

    if isinstance(raw, dict):
        entries: list[Any] = []
        for label, instances in raw.items():
            if not isinstance(instances, list):
                msg = f"Service label {label!r} must map to a list of bindings"
                raise ValueError(msg)
            for instance in instances:
                if isinstance(instance, dict):
                    entries.append({"label": label, **instance})
                else:
                    entries.append(instance)
    elif isinstance(raw, list):
        entries = raw
    else:
        msg = "Service bindings must be a JSON object or list"
        raise ValueError(msg)

    bindings: list[ServiceBinding] = []
    for entry in entries:
        if not isinstance(entry, dict) or "name" not in entry:
            msg = f"Service binding without a name: {entry!r}"
            raise ValueError(msg)
        name = str(entry["name"])
        tags = entry.get("tags") or []
        if not isinstance(tags, list):
            msg = f"Tags of service {name!r} must be a list"
            raise ValueError(msg)
        credentials = entry.get("credentials") or {}
        if not isinstance(credentials, dict):
            msg = f"Credentials of service {name!r} must be an object"
            raise ValueError(msg)
        bindings.append(
            ServiceBinding(
                name=name,
                label=str(entry.get("label") or ""),
                tags=tuple(str(tag) for tag in tags),
                credentials=dict(credentials),
            )
        )
    return bindings


def find_service(
    bindings: list[ServiceBinding],
    pattern: str | re.Pattern[str] = DEFAULT_FILTER,
) -> ServiceBinding | None:
    """Return the first binding whose name, label or a tag matches *pattern*.

    Matching is a case-sensitive regular-expression search, so
    ``lf-mysqldb`` matches ``lf-mysqldb-1``. Returns None when nothing
    matches.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    for binding in bindings:
        if any(regex.search(candidate) for candidate in binding.candidates() if candidate):
            return binding
    return None
