import json
import logging
import math
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

RECORD_TYPES = ("arr", "pilot", "time")


@dataclass(frozen=True)
class Record:
    """One logged achievement. Never updated once stored."""
    type: str
    name: str
    value: float
    details: str
    timestamp: int  # epoch milliseconds
    date: str
    month: str

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, raw: str) -> "Record":
        data = json.loads(raw)
        value = data["value"]
        timestamp = data["timestamp"]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"bad value: {value!r}")
        if not math.isfinite(value):
            raise ValueError(f"non-finite value: {value!r}")
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise TypeError(f"bad timestamp: {timestamp!r}")
        return cls(
            type=str(data["type"]),
            name=str(data["name"]),
            value=float(value),
            details=str(data.get("details") or ""),
            timestamp=timestamp,
            date=str(data.get("date") or ""),
            month=str(data.get("month") or ""),
        )


def current_month(as_of: datetime | None = None) -> str:
    # naive datetimes are taken as server-local time
    as_of = as_of or datetime.now()
    return as_of.astimezone().strftime("%Y-%m")


def month_prefix(record_type: str, as_of: datetime | None = None) -> str:
    return f"{current_month(as_of)}:{record_type}:"


def add_record(store, record_type: str, name: str, value: float, details: str = "",
               as_of: datetime | None = None) -> Record:
    """Persist a new record for the month of ``as_of`` (default: now).

    Callers validate ``record_type`` and ``value`` first.
    """
    as_of = (as_of or datetime.now()).astimezone()
    timestamp = int(as_of.timestamp() * 1000)
    record = Record(
        type=record_type,
        name=name,
        value=float(value),
        details=details,
        timestamp=timestamp,
        date=as_of.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        month=current_month(as_of),
    )
    # suffix keeps same-millisecond writes from overwriting each other
    key = f"{month_prefix(record_type, as_of)}{timestamp}:{uuid.uuid4().hex[:8]}"
    store.set(key, record.to_json())
    logger.info({"record_added": key, "name": name, "value": record.value})
    return record


def get_records(store, record_type: str, as_of: datetime | None = None) -> list[Record]:
    """All readable records of one type for the month of ``as_of``, oldest first."""
    records = []
    for key in store.keys(month_prefix(record_type, as_of)):
        raw = store.get(key)
        if not raw:
            continue
        try:
            records.append(Record.from_json(raw))
        except (ValueError, KeyError, TypeError, OverflowError) as e:
            logger.debug({"skipped_record": key, "error": str(e)})
    records.sort(key=lambda r: r.timestamp)
    return records
