"""Persistence of the most recent link check."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..analyzer.models import RiskResult

logger = logging.getLogger(__name__)


class LastCheckStore:
    """Keeps the last scored link as a JSON record in the data directory."""

    FILENAME = "last_check.json"

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / self.FILENAME

    def save(self, result: RiskResult) -> Path:
        """Save a result, replacing the previous one (atomic)."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

        record = result.to_dict()
        record["saved_at"] = datetime.now(timezone.utc).isoformat()

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(record, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)
        logger.debug("Saved last check for %s to %s", result.hostname, self.path)
        return self.path

    def load(self) -> Optional[RiskResult]:
        """Load the last result, or None if nothing was checked yet.

        Raises ValueError if the stored record is corrupt.
        """
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValueError(f"Corrupt last check file {self.path}: {exc}") from exc
        return RiskResult.from_dict(data)

    def saved_at(self) -> Optional[str]:
        """Timestamp of the stored record, if any."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
        return data.get("saved_at") if isinstance(data, dict) else None

    def clear(self) -> bool:
        """Delete the stored record. Returns True if one existed."""
        if not self.path.exists():
            return False
        self.path.unlink()
        return True
