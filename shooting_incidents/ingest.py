"""Utilities to load the shooting incident dataset from NYC Open Data or disk."""
from __future__ import annotations

import io
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
import requests

from . import config
from .errors import MalformedInputError, SourceUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class LoadStats:
    """Capture summary statistics for a load."""

    source: str
    rows: int = 0
    columns: int = 0
    bytes_read: int = 0
    start_time: float = field(default_factory=time.monotonic)

    def as_dict(self) -> Dict[str, object]:
        return {
            "source": self.source,
            "rows": self.rows,
            "columns": self.columns,
            "bytes_read": self.bytes_read,
            "duration_seconds": round(time.monotonic() - self.start_time, 3),
        }


def is_remote(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


class IncidentLoader:
    """Fetches the incident CSV and parses it into a string-typed DataFrame."""

    def __init__(
        self,
        *,
        timeout: float = config.HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, url: str) -> str:
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.Timeout as exc:
            raise SourceUnavailableError(f"Timed out after {self.timeout}s fetching {url}") from exc
        except requests.RequestException as exc:
            raise SourceUnavailableError(f"Could not fetch {url}: {exc}") from exc
        return response.text

    def read_local(self, path: Path | str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedInputError(f"{path} is not UTF-8 text: {exc}") from exc
        except OSError as exc:
            raise SourceUnavailableError(f"Could not read {path}: {exc}") from exc

    def load(
        self,
        source: Optional[str] = None,
        *,
        snapshot_path: Path | str | None = None,
    ) -> pd.DataFrame:
        source = str(source or config.default_source())
        stats = LoadStats(source=source)

        text = self.fetch(source) if is_remote(source) else self.read_local(source)
        stats.bytes_read = len(text.encode("utf-8"))
        logger.debug("Read %s bytes from %s", stats.bytes_read, source)

        if snapshot_path:
            snapshot = Path(snapshot_path)
            snapshot.parent.mkdir(parents=True, exist_ok=True)
            snapshot.write_text(text, encoding="utf-8")
            logger.info("Wrote raw snapshot to %s", snapshot)

        frame = parse_incident_csv(text)
        stats.rows, stats.columns = frame.shape
        logger.info("Load completed: %s", stats.as_dict())
        return frame


def parse_incident_csv(text: str) -> pd.DataFrame:
    """Parse CSV text, keeping every value as a raw string."""
    if not text.strip():
        raise MalformedInputError("Dataset is empty")

    try:
        frame = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise MalformedInputError(f"Dataset is not parseable as CSV: {exc}") from exc

    missing = [column for column in config.REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise MalformedInputError(f"Dataset is missing required columns: {', '.join(missing)}")
    return frame


def load_incidents(
    source: Optional[str] = None,
    *,
    timeout: float = config.HTTP_TIMEOUT,
    session: Optional[requests.Session] = None,
    snapshot_path: Path | str | None = None,
) -> pd.DataFrame:
    loader = IncidentLoader(timeout=timeout, session=session)
    return loader.load(source, snapshot_path=snapshot_path)


__all__ = ["IncidentLoader", "LoadStats", "load_incidents", "parse_incident_csv"]
