"""Zip archive helpers for asset bundles."""

import io
import zipfile
from pathlib import Path

from sx.core.errors import HandlerError


def list_files(zip_data: bytes) -> list[str]:
    """Names of all file entries in the archive."""
    with zipfile.ZipFile(io.BytesIO(zip_data)) as zf:
        return [info.filename for info in zf.infolist() if not info.is_dir()]


def read_file(zip_data: bytes, name: str) -> bytes:
    """Read one entry from the archive.

    Raises:
        KeyError: If the entry does not exist
    """
    with zipfile.ZipFile(io.BytesIO(zip_data)) as zf:
        return zf.read(name)


def extract_zip(zip_data: bytes, target_dir: Path) -> None:
    """Extract every entry into target_dir.

    Raises:
        HandlerError: If an entry would land outside target_dir
    """
    target_dir.mkdir(parents=True, exist_ok=True)
    root = target_dir.resolve()
    with zipfile.ZipFile(io.BytesIO(zip_data)) as zf:
        for info in zf.infolist():
            destination = (root / info.filename).resolve()
            if not destination.is_relative_to(root):
                raise HandlerError(f"Archive entry escapes target directory: {info.filename}")
            if info.is_dir():
                destination.mkdir(parents=True, exist_ok=True)
                continue
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(zf.read(info))
            # Preserve the executable bit for hook scripts
            mode = (info.external_attr >> 16) & 0o777
            if mode:
                destination.chmod(mode)


def zip_directory(source_dir: Path) -> bytes:
    """Pack a directory into an in-memory zip, paths relative to source_dir.

    The .git directory is skipped.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for path in sorted(source_dir.rglob("*")):
            relative = path.relative_to(source_dir)
            if relative.parts and relative.parts[0] == ".git":
                continue
            if path.is_file():
                zf.write(path, relative.as_posix())
    return buffer.getvalue()
