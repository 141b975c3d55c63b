"""
L4 Execution — Atomic file writes.

Cache files are only ever trusted by their existence, so they must
never exist half-written: bytes go to a temp file in the destination
directory and are renamed into place once complete.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

logger = logging.getLogger(__name__)


@contextmanager
def atomic_writer(path: Path) -> Iterator[BinaryIO]:
    """Open a binary temp file that replaces ``path`` on clean exit.

    On any exception the temp file is removed and ``path`` is untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".part")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            yield fh
        tmp.replace(path)
        logger.debug("Wrote %s", path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
