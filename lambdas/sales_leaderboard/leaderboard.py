from dataclasses import dataclass

LEADERBOARD_SIZE = 10


@dataclass
class Entry:
    name: str
    total: float = 0.0
    count: int = 0

    @property
    def average(self) -> float:
        return self.total / self.count if self.count else 0.0


def build_leaderboard(records, record_type: str, limit: int = LEADERBOARD_SIZE) -> list[Entry]:
    """
    Rank contributors for one record type.

    Names group case-insensitively and display with the casing of the first
    record seen. ``time`` ranks by lowest average, ``arr`` and ``pilot`` by
    highest total. Ties keep first-seen order.
    """
    grouped: dict[str, Entry] = {}
    for r in records:
        entry = grouped.setdefault(r.name.casefold(), Entry(name=r.name))
        entry.total += r.value
        entry.count += 1

    ranked = list(grouped.values())
    if record_type == "time":
        ranked.sort(key=lambda e: e.average)
    else:
        ranked.sort(key=lambda e: e.total, reverse=True)
    return ranked[:limit]
