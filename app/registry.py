import json
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import TypeAdapter

from .models import MID_STATUSES, MerchantSettings, MidConfig, WeightEntry, WeightTable

logger = logging.getLogger(__name__)

_MIDS = TypeAdapter(List[MidConfig])
_MERCHANTS = TypeAdapter(List[MerchantSettings])


class MidRegistry:
    """MID settings backed by a JSON array on disk."""

    def __init__(self, path: str) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._mids: Dict[str, MidConfig] = {}
        self.reload()

    def reload(self) -> None:
        mids = _MIDS.validate_json(self._path.read_text())
        with self._lock:
            self._mids = {m.id: m for m in mids}
        logger.info("Loaded %d MIDs from %s", len(mids), self._path)

    def list(self) -> List[MidConfig]:
        return list(self._mids.values())

    def get(self, mid_id: str) -> Optional[MidConfig]:
        return self._mids.get(mid_id)

    def set_status(self, mid_id: str, status: str) -> Optional[MidConfig]:
        if status not in MID_STATUSES:
            raise ValueError(f'Invalid status {status!r}. Must be exactly "ACTIVE" or "INACTIVE"')
        with self._lock:
            mid = self._mids.get(mid_id)
            if mid is None:
                return None
            updated = mid.model_copy(update={"status": status})
            mids = {**self._mids, mid_id: updated}
            # Only swap in once the file holds the new status
            self._write(mids)
            self._mids = mids
        logger.info("Updated MID %s: %s -> %s", mid_id, mid.status, status)
        return updated

    def _write(self, mids: Dict[str, MidConfig]) -> None:
        payload = [m.model_dump(mode="json", exclude_unset=True) for m in mids.values()]
        self._path.write_text(json.dumps(payload, indent=2))


def load_weight_table(path: Path) -> WeightTable:
    data = json.loads(path.read_text())
    return {
        country: [WeightEntry.model_validate({**row, "country": country}) for row in rows]
        for country, rows in data.items()
    }


class WeightRegistry:
    def __init__(self, path: str) -> None:
        self._path = Path(path)
        self._table: WeightTable = {}
        self.reload()

    def reload(self) -> None:
        self._table = load_weight_table(self._path)
        logger.info("Loaded routing weights for %d countries from %s", len(self._table), self._path)

    def table(self) -> WeightTable:
        return self._table


class MerchantDirectory:
    def __init__(self, path: str) -> None:
        self._path = Path(path)
        self._merchants: Dict[str, MerchantSettings] = {}
        self.reload()

    def reload(self) -> None:
        merchants = _MERCHANTS.validate_json(self._path.read_text())
        self._merchants = {m.business_id: m for m in merchants}

    def find(self, business_id: str) -> Optional[MerchantSettings]:
        return self._merchants.get(business_id)
