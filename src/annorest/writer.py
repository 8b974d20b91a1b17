"""Write generated source to disk atomically."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from annorest.exceptions import WriteError


def write_generated(path: Union[str, Path], text: str) -> Path:
    """Write *text* to *path* atomically and return the resolved path.

    The temporary file is created in the destination directory so that
    ``os.replace`` is an atomic rename on POSIX systems. Either the previous
    file stays intact or the new content is complete.

    Raises:
        WriteError: If the directory cannot be created or the file written.
    """
    path = Path(path)
    try:
        _atomic_write(path, text)
    except OSError as exc:
        raise WriteError(f"Failed to write {path}: {exc}") from exc
    return path


def _atomic_write(path: Path, data: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
            newline="\n",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
