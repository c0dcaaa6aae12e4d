"""Repackaging of an exploded web application into a ``.war`` archive.

Entry names are relative to the application root. Hidden files and
directories (any path component starting with ``.``) are left out.

Symlinks are followed, to files and to directories alike, as long as they
resolve inside the application root. Links that point outside the root,
dangling links and directory links back into their own ancestry are
skipped and counted.

The archive is built in a hidden temp file beside the destination and
renamed into place only after it is complete.
"""

from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from provctl.domain.errors import PackagingError
from provctl.infrastructure.filesystem import is_hidden, temp_sibling

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageReport:
    """Summary of a finished repackage."""

    destination: Path
    file_count: int
    skipped_links: int = 0


@dataclass
class EntryListing:
    """``(path, arcname)`` pairs to archive, plus the links left out."""

    entries: list[tuple[Path, str]] = field(default_factory=list)
    skipped_links: int = 0

    def skip(self, path: Path, reason: str) -> None:
        logger.debug("Skipping link %s: %s", path, reason)
        self.skipped_links += 1


def collect_entries(source_dir: Path) -> EntryListing:
    """List every non-hidden entry under *source_dir*, sorted by arcname.

    Directory arcnames end with ``/``. Hidden directories are pruned
    without being descended into.
    """
    root = source_dir.resolve()
    listing = EntryListing()
    _collect(source_dir, PurePosixPath(), root, frozenset({root}), listing)
    listing.entries.sort(key=lambda entry: entry[1])
    return listing


def _collect(
    directory: Path,
    prefix: PurePosixPath,
    root: Path,
    ancestors: frozenset[Path],
    listing: EntryListing,
) -> None:
    for path in directory.iterdir():
        relative = prefix / path.name
        if is_hidden(relative):
            continue
        if path.is_symlink():
            if not path.exists():
                listing.skip(path, "dangling")
                continue
            target = path.resolve()
            if not target.is_relative_to(root):
                listing.skip(path, "outside application root")
                continue
            if target in ancestors:
                listing.skip(path, "cycle")
                continue
        if path.is_dir():
            listing.entries.append((path, f"{relative.as_posix()}/"))
            _collect(path, relative, root, ancestors | {path.resolve()}, listing)
        else:
            listing.entries.append((path, relative.as_posix()))


def repackage(source_dir: Path, destination: Path) -> PackageReport:
    """Zip *source_dir* into *destination*, replacing any existing file.

    Raises PackagingError on any failure; no partial archive is left at
    *destination*.
    """
    if not source_dir.is_dir():
        msg = f"Application directory not found: {source_dir}"
        raise PackagingError(msg)

    try:
        tmp_path = temp_sibling(destination, suffix=".war")
    except OSError as exc:
        msg = f"Cannot create {destination.parent}: {exc}"
        raise PackagingError(msg) from exc

    file_count = 0
    try:
        listing = collect_entries(source_dir)
        with zipfile.ZipFile(tmp_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for path, arcname in listing.entries:
                archive.write(path, arcname)
                if not arcname.endswith("/"):
                    file_count += 1
        tmp_path.replace(destination)
    except (OSError, ValueError, zipfile.LargeZipFile) as exc:
        tmp_path.unlink(missing_ok=True)
        msg = f"Failed to package {source_dir} into {destination}: {exc}"
        raise PackagingError(msg) from exc

    logger.debug("Packaged %d files from %s into %s", file_count, source_dir, destination)
    return PackageReport(
        destination=destination,
        file_count=file_count,
        skipped_links=listing.skipped_links,
    )
