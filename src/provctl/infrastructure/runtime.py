"""Sandbox preparation: runtime extraction, resource overlays, library links."""

from __future__ import annotations

import logging
import os
import shutil
import tarfile
from pathlib import Path, PurePosixPath

from provctl.domain.errors import ExtractionError

logger = logging.getLogger(__name__)


def _strip(name: str, components: int) -> str | None:
    parts = PurePosixPath(name).parts[components:]
    if not parts:
        return None
    return "/".join(parts)


def expand_runtime(archive: Path, sandbox: Path, *, strip_components: int = 1) -> int:
    """Extract a ``.tar.gz`` runtime into *sandbox*.

    The first *strip_components* path components of every member are
    dropped, like ``tar --strip-components``. Members are extracted with
    tarfile's ``data`` filter. Returns the number of members extracted.
    """
    sandbox.mkdir(parents=True, exist_ok=True)
    try:
        with tarfile.open(archive, "r:*") as tar:
            members: list[tarfile.TarInfo] = []
            for member in tar.getmembers():
                stripped = _strip(member.name, strip_components)
                if stripped is None:
                    continue
                if member.islnk():
                    linkname = _strip(member.linkname, strip_components)
                    if linkname is None:
                        continue
                    member.linkname = linkname
                member.name = stripped
                members.append(member)
            tar.extractall(sandbox, members=members, filter="data")
    except FileNotFoundError as exc:
        msg = f"Runtime archive not found: {archive}"
        raise ExtractionError(msg) from exc
    except (tarfile.TarError, OSError, EOFError) as exc:
        msg = f"Failed to expand {archive} into {sandbox}: {exc}"
        raise ExtractionError(msg) from exc

    logger.debug("Expanded %d entries from %s", len(members), archive)
    return len(members)


def copy_resources(overlays: list[Path], sandbox: Path) -> list[Path]:
    """Copy each overlay directory's contents over *sandbox*.

    Later overlays win over earlier ones. Raises ValueError for a missing
    overlay.
    """
    copied: list[Path] = []
    for overlay in overlays:
        if not overlay.is_dir():
            msg = f"Resource overlay is not a directory: {overlay}"
            raise ValueError(msg)
        shutil.copytree(overlay, sandbox, dirs_exist_ok=True)
        copied.append(overlay)
        logger.debug("Copied resources from %s", overlay)
    return copied


def link_libraries(libraries: list[Path], target_dir: Path) -> list[Path]:
    """Symlink each library into *target_dir* with a relative link.

    An existing entry with the same name is replaced. Raises ValueError
    for a library that does not exist.
    """
    target_dir.mkdir(parents=True, exist_ok=True)
    links: list[Path] = []
    for library in libraries:
        if not library.is_file():
            msg = f"Library not found: {library}"
            raise ValueError(msg)
        link = target_dir / library.name
        if link.is_symlink() or link.exists():
            link.unlink()
        link.symlink_to(os.path.relpath(library.resolve(), target_dir.resolve()))
        links.append(link)
    return links
