import logging
import math
from datetime import datetime

from .formatting import ephemeral, format_leaderboard, format_record, help_text
from .leaderboard import build_leaderboard
from .records import RECORD_TYPES, add_record, current_month, get_records

logger = logging.getLogger(__name__)

RECORD_USAGE = "❌ Usage: `/sales record <type> <name> <value> [details]`\nType must be: arr, pilot, or time"
LEADERBOARD_USAGE = "❌ Usage: `/sales leaderboard <type>`\nType must be: arr, pilot, or time"
BAD_TYPE = "❌ Type must be: arr, pilot, or time"
BAD_VALUE = "❌ Value must be a positive number"
UNKNOWN_COMMAND = "❌ Unknown command. Type `/sales help` for usage."


class UsageError(Exception):
    """Bad command input; the message goes back to the invoking user."""


def parse_value(raw: str) -> float:
    cleaned = raw.removeprefix("$").replace(",", "")
    try:
        value = float(cleaned)
    except ValueError:
        raise UsageError(BAD_VALUE) from None
    if not math.isfinite(value) or value <= 0:
        raise UsageError(BAD_VALUE)
    return value


def record_command(store, args: list[str], as_of: datetime) -> dict:
    if len(args) < 3:
        raise UsageError(RECORD_USAGE)
    record_type, name, raw_value, *details = args
    record_type = record_type.lower()
    if record_type not in RECORD_TYPES:
        raise UsageError(BAD_TYPE)
    value = parse_value(raw_value)

    record = add_record(store, record_type, name, value, " ".join(details), as_of=as_of)
    return format_record(record)


def leaderboard_command(store, record_type: str | None, as_of: datetime) -> dict:
    record_type = (record_type or "").lower()
    if record_type not in RECORD_TYPES:
        raise UsageError(LEADERBOARD_USAGE)

    records = get_records(store, record_type, as_of=as_of)
    leaderboard = build_leaderboard(records, record_type)
    return format_leaderboard(leaderboard, record_type, current_month(as_of))


def handle_command(text: str, store, as_of: datetime | None = None) -> dict:
    """Route one slash-command text to its flow and return the Slack payload.

    Input problems come back as ephemeral messages; store failures propagate.
    """
    as_of = as_of or datetime.now()
    parts = (text or "").split()
    command = parts[0].lower() if parts else ""
    logger.info({"command": command or "help", "args": len(parts) - 1 if parts else 0})

    try:
        if not command or command == "help":
            return help_text()
        if command == "record":
            return record_command(store, parts[1:], as_of)
        if command == "leaderboard":
            return leaderboard_command(store, parts[1] if len(parts) > 1 else None, as_of)
        if command in RECORD_TYPES:
            return leaderboard_command(store, command, as_of)
    except UsageError as e:
        return ephemeral(str(e))

    return ephemeral(UNKNOWN_COMMAND)
