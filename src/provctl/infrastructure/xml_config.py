"""Version-gated edits to Tomcat's ``conf/server.xml`` and ``conf/context.xml``.

Both edits share one contract: parse the file, locate the root element,
apply the edit chosen by the :class:`ConfigSchema`, and write the whole
document back. Comments and whitespace outside the edited element survive
the round trip.

Edits are not idempotent. Running either one twice against the same file
adds a second element, so they run exactly once per fresh sandbox.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from xml.dom import minidom
from xml.parsers.expat import ExpatError

from provctl.domain.errors import StructuralConfigError
from provctl.domain.version import ConfigSchema
from provctl.infrastructure.filesystem import atomic_write_text

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

JASPER_LISTENER = "org.apache.catalina.core.JasperListener"

_XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


# ---------------------------------------------------------------------------
# Read / write
# ---------------------------------------------------------------------------


def read_xml(path: Path) -> minidom.Document:
    """Parse *path*, raising StructuralConfigError if it is missing or malformed."""
    try:
        with path.open("rb") as fh:
            return minidom.parse(fh)
    except FileNotFoundError as exc:
        msg = f"Configuration file not found: {path}"
        raise StructuralConfigError(msg) from exc
    except ExpatError as exc:
        msg = f"Malformed XML in {path}: {exc}"
        raise StructuralConfigError(msg) from exc


def write_xml(path: Path, document: minidom.Document) -> None:
    """Serialize *document* to *path*, one top-level node per line."""
    nodes = [node.toxml() for node in document.childNodes]
    atomic_write_text(path, _XML_DECLARATION + "\n" + "\n".join(nodes) + "\n")


def root_element(document: minidom.Document, name: str, path: Path) -> minidom.Element:
    """Return the document element, which must be named *name*."""
    root = document.documentElement
    if root is None or root.tagName != name:
        found = root.tagName if root is not None else None
        msg = f"Expected root element <{name}> in {path}, found <{found}>"
        raise StructuralConfigError(msg)
    return root


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------


def _child_elements(parent: minidom.Element, name: str) -> list[minidom.Element]:
    return [
        node
        for node in parent.childNodes
        if node.nodeType == node.ELEMENT_NODE and node.tagName == name
    ]


def _leading_whitespace(node: minidom.Node) -> str:
    """Whitespace text immediately preceding *node*, or ``""``."""
    prev = node.previousSibling
    if prev is not None and prev.nodeType == prev.TEXT_NODE and not prev.data.strip():
        return prev.data
    return ""


def _insert_before(
    document: minidom.Document,
    parent: minidom.Element,
    element: minidom.Element,
    anchor: minidom.Node,
) -> None:
    """Insert *element* before *anchor*, copying the anchor's indentation."""
    indent = _leading_whitespace(anchor)
    parent.insertBefore(element, anchor)
    if indent:
        parent.insertBefore(document.createTextNode(indent), anchor)


def _append_child(
    document: minidom.Document,
    parent: minidom.Element,
    element: minidom.Element,
) -> None:
    """Append *element* as the last child, ahead of trailing whitespace."""
    last = parent.lastChild
    if last is not None and last.nodeType == last.TEXT_NODE and not last.data.strip():
        siblings = [node for node in parent.childNodes if node.nodeType == node.ELEMENT_NODE]
        indent = _leading_whitespace(siblings[0]) if siblings else last.data + "  "
        parent.insertBefore(document.createTextNode(indent), last)
        parent.insertBefore(element, last)
    else:
        parent.appendChild(element)


# ---------------------------------------------------------------------------
# Mutation sites
# ---------------------------------------------------------------------------


def configure_linking(context_xml: Path, schema: ConfigSchema) -> None:
    """Allow the webapp to follow symlinks.

    - Legacy: ``allowLinking="true"`` on ``<Context>``.
    - Modern: a ``<Resources allowLinking="true"/>`` child of ``<Context>``.
    """
    document = read_xml(context_xml)
    context = root_element(document, "Context", context_xml)

    if schema is ConfigSchema.LEGACY:
        context.setAttribute("allowLinking", "true")
    else:
        resources = document.createElement("Resources")
        resources.setAttribute("allowLinking", "true")
        _append_child(document, context, resources)

    write_xml(context_xml, document)
    logger.debug("Configured linking in %s (%s schema)", context_xml, schema)


def configure_listener(
    server_xml: Path,
    schema: ConfigSchema,
    class_name: str = JASPER_LISTENER,
) -> bool:
    """Insert the JSP listener before the first ``<Service>`` of ``<Server>``.

    Only legacy runtimes need the listener. For the modern schema the file
    is not read and False is returned.
    """
    if schema is not ConfigSchema.LEGACY:
        return False

    document = read_xml(server_xml)
    server = root_element(document, "Server", server_xml)

    services = _child_elements(server, "Service")
    if not services:
        msg = f"No <Service> element under <Server> in {server_xml}"
        raise StructuralConfigError(msg)

    listener = document.createElement("Listener")
    listener.setAttribute("className", class_name)
    _insert_before(document, server, listener, services[0])

    write_xml(server_xml, document)
    logger.debug("Inserted listener %s into %s", class_name, server_xml)
    return True
