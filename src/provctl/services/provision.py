"""ProvisionService — turn a runtime archive and an exploded portal into a sandbox.

Pipeline: EXPAND → RESOURCES → LINKING → LISTENER → REPACKAGE → DATABASE → LIBRARIES

Each step must succeed before the next one runs. The first failure stops
the pipeline and is reported with the name of the failed step and the
steps already completed. Completed steps are not rolled back; the host
discards a sandbox whose provisioning failed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from provctl.domain.bindings import ServiceBinding, find_service
from provctl.domain.errors import ProvisionError
from provctl.domain.layout import SandboxLayout
from provctl.domain.version import ConfigSchema, Version, parse_version, schema_for
from provctl.infrastructure.packaging import repackage
from provctl.infrastructure.properties_file import write_portal_properties
from provctl.infrastructure.runtime import copy_resources, expand_runtime, link_libraries
from provctl.infrastructure.xml_config import configure_linking, configure_listener
from provctl.services.base import BaseService
from provctl.services.result import ServiceResult
from provctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProvisionRequest:
    """Everything the host resolved before invoking the provisioner."""

    app_dir: Path
    sandbox: Path
    archive: Path
    version: str
    application_name: str
    bindings: list[ServiceBinding] = field(default_factory=list)
    resources: list[Path] = field(default_factory=list)
    libraries: list[Path] = field(default_factory=list)


@dataclass
class _Run:
    """Per-run state threaded through the steps."""

    request: ProvisionRequest
    layout: SandboxLayout
    version: Version
    schema: ConfigSchema
    artifact: Path
    warnings: list[str] = field(default_factory=list)


_Step = Callable[[_Run], dict[str, Any]]


class ProvisionService(BaseService):
    """Provision a Tomcat sandbox for an exploded Liferay portal."""

    @traced
    def provision(self, request: ProvisionRequest) -> ServiceResult:
        op = "provision"

        try:
            version = parse_version(request.version)
            layout = SandboxLayout(request.sandbox)
            artifact = layout.artifact_path(request.application_name)
        except ValueError as exc:
            return ServiceResult.failure(
                op, "INVALID_INPUT", str(exc), step="validate", completed=[]
            )

        run = _Run(
            request=request,
            layout=layout,
            version=version,
            schema=schema_for(version),
            artifact=artifact,
        )
        data: dict[str, Any] = {
            "sandbox": str(layout.root),
            "version": str(version),
            "schema": str(run.schema),
        }

        steps: list[tuple[str, _Step]] = [
            ("expand", self._expand),
            ("resources", self._copy_resources),
            ("linking", self._configure_linking),
            ("listener", self._configure_listener),
            ("repackage", self._repackage),
            ("database", self._configure_database),
            ("libraries", self._link_libraries),
        ]

        completed: list[str] = []
        for name, step in steps:
            try:
                with trace_span(name) as span:
                    produced = step(run)
                    for key, value in produced.items():
                        span.annotate(key, value)
            except ProvisionError as exc:
                return self._aborted(op, exc.code, str(exc), name, completed, run)
            except ValueError as exc:
                return self._aborted(op, "INVALID_INPUT", str(exc), name, completed, run)
            except OSError as exc:
                return self._aborted(op, "IO_ERROR", str(exc), name, completed, run)
            data.update(produced)
            completed.append(name)

        logger.info("Provisioned %s into %s", request.application_name, layout.root)
        return ServiceResult(ok=True, op=op, data=data, warnings=run.warnings)

    @staticmethod
    def _aborted(
        op: str,
        code: str,
        message: str,
        step: str,
        completed: list[str],
        run: _Run,
    ) -> ServiceResult:
        logger.error("Provisioning failed at step %s: %s", step, message)
        return ServiceResult.failure(
            op,
            code,
            message,
            warnings=run.warnings,
            step=step,
            completed=list(completed),
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _expand(self, run: _Run) -> dict[str, Any]:
        run.layout.root.mkdir(parents=True, exist_ok=True)
        count = expand_runtime(
            run.request.archive,
            run.layout.root,
            strip_components=self._settings.tomcat.strip_components,
        )
        return {"runtime_entries": count}

    def _copy_resources(self, run: _Run) -> dict[str, Any]:
        copied = copy_resources(run.request.resources, run.layout.root)
        return {"resources": [str(path) for path in copied]}

    def _configure_linking(self, run: _Run) -> dict[str, Any]:
        configure_linking(run.layout.context_xml, run.schema)
        return {}

    def _configure_listener(self, run: _Run) -> dict[str, Any]:
        inserted = configure_listener(
            run.layout.server_xml,
            run.schema,
            self._settings.tomcat.listener_class,
        )
        return {"listener_inserted": inserted}

    def _repackage(self, run: _Run) -> dict[str, Any]:
        report = repackage(run.request.app_dir, run.artifact)
        if report.skipped_links:
            run.warnings.append(
                f"Skipped {report.skipped_links} dangling or external link(s) "
                f"in {run.request.app_dir}"
            )
        return {"artifact": str(report.destination), "artifact_files": report.file_count}

    def _configure_database(self, run: _Run) -> dict[str, Any]:
        pattern = self._settings.service.filter
        service = find_service(run.request.bindings, pattern)
        if service is None:
            run.warnings.append(
                f"No service matching {pattern!r} is bound; database not configured"
            )
            return {"service": None, "properties": "not_configured"}

        logger.info("Configuring database from service %s", service.name)
        portal = self._settings.portal
        target = run.layout.portal_properties
        report = write_portal_properties(
            target,
            service.credentials,
            pool=self._settings.pool,
            driver_class=portal.driver_class,
            auto_deploy_dir=portal.auto_deploy_dir,
        )
        for name in report.unescaped:
            run.warnings.append(
                f"Credential {name!r} contains a line break and was written unescaped"
            )
        return {
            "service": service.name,
            "properties": str(report.outcome),
            "properties_path": str(target),
        }

    def _link_libraries(self, run: _Run) -> dict[str, Any]:
        libraries = list(run.request.libraries)
        datasource = run.layout.datasource_jar(self._settings.tomcat.datasource_jar)
        if datasource.is_file():
            libraries.append(datasource)
        if not libraries:
            return {"linked_libraries": []}
        links = link_libraries(libraries, run.request.app_dir / "WEB-INF" / "lib")
        return {"linked_libraries": [str(link) for link in links]}
