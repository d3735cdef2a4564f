"""
Writes downloaded DST data to disk.
"""

import logging
from pathlib import Path

import aiofiles

log = logging.getLogger(__name__)


async def write_output(path: Path, data: bytes) -> None:
    """
    Writes `data` to `path`, creating parent directories and replacing any
    existing file.
    """
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    async with aiofiles.open(path, "wb") as f:
        await f.write(data)
    log.debug(f"Wrote {len(data)} bytes to '{path}'")
