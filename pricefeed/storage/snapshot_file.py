from __future__ import annotations

import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from pricefeed.schemas.price import PriceSnapshot


class SnapshotFileError(Exception):
    status_code = 500
    error_code = "SNAPSHOT_ERROR"
    summary = "Price data could not be loaded."

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return f"{self.summary} Details: {self.detail}"


class SnapshotFileMissing(SnapshotFileError):
    status_code = 404
    error_code = "FILE_NOT_FOUND"
    summary = "Price data not available yet. Worker might not have run."


class SnapshotParseError(SnapshotFileError):
    status_code = 500
    error_code = "PARSE_ERROR"
    summary = "Failed to parse price data."


def read_snapshot(path: str | os.PathLike[str]) -> PriceSnapshot:
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise SnapshotFileMissing(str(exc)) from exc

    try:
        return PriceSnapshot.model_validate_json(raw)
    except ValidationError as exc:
        raise SnapshotParseError(str(exc)) from exc


def write_snapshot(path: str | os.PathLike[str], snapshot: PriceSnapshot) -> None:
    """Replace ``path`` with ``snapshot`` as pretty-printed JSON.

    The content goes to a temporary file next to the target which is then
    renamed over it, so readers see either the old file or the new one.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = snapshot.model_dump_json(indent=2)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        # mkstemp creates 0600; the API server may run as another user.
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, target)
    except Exception:
        Path(tmp_name).unlink(missing_ok=True)
        raise
