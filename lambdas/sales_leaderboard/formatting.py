import math

MEDALS = ["🥇", "🥈", "🥉"]

HELP_TEXT = """*Sales Leaderboard Commands* 🏆

*Record achievements:*
`/sales record arr <name> <amount> [details]`
Example: `/sales record arr Sarah 50000 Acme Corp`

`/sales record pilot <name> <count> [details]`
Example: `/sales record pilot John 2 BigCo pilots`

`/sales record time <name> <days> [details]`
Example: `/sales record time Maria 14 TechStart deal`

*View leaderboards:*
`/sales leaderboard arr` - Top ARR this month
`/sales leaderboard pilot` - Most pilots this month
`/sales leaderboard time` - Fastest discovery→pilot

*Shortcuts:*
`/sales arr` - View ARR leaderboard
`/sales pilot` - View pilot leaderboard
`/sales time` - View time leaderboard"""

GENERIC_ERROR = "❌ An error occurred. Please try again."


def in_channel(text: str) -> dict:
    return {"response_type": "in_channel", "text": text}


def ephemeral(text: str) -> dict:
    return {"response_type": "ephemeral", "text": text}


def round_half_up(num: float) -> int:
    # values are positive; ints carry any magnitude
    return math.floor(num + 0.5)


def escape(text: str) -> str:
    """Escape the characters Slack treats as control sequences (&, <, >)."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def format_currency(num: float) -> str:
    """US dollars, no cents: 50000 -> $50,000."""
    return f"${round_half_up(num):,}"


def format_count(num: float) -> str:
    return str(int(num)) if float(num).is_integer() else f"{num:g}"


def plural(num: float, word: str) -> str:
    return word if num == 1 else f"{word}s"


def rank_label(idx: int) -> str:
    return MEDALS[idx] if idx < len(MEDALS) else f"{idx + 1}."


def format_entry(entry, record_type: str) -> str:
    if record_type == "arr":
        line = f"*{escape(entry.name)}* — {format_currency(entry.total)}"
    elif record_type == "pilot":
        return f"*{escape(entry.name)}* — {format_count(entry.total)} {plural(entry.total, 'pilot')}"
    else:
        line = f"*{escape(entry.name)}* — {round_half_up(entry.average)} days avg"
    if entry.count > 1:
        line += f" ({entry.count} deals)"
    return line


def format_leaderboard(leaderboard, record_type: str, month: str) -> dict:
    text = f"📊 *{record_type.upper()} Leaderboard - {month}*\n\n"
    if not leaderboard:
        return in_channel(text + "No records yet this month. Be the first! 🚀")

    for idx, entry in enumerate(leaderboard):
        text += f"{rank_label(idx)} {format_entry(entry, record_type)}\n"
    return in_channel(text)


def format_record(record) -> dict:
    text = "🎉 *New Record Added!*\n\n"
    if record.type == "arr":
        text += f"💰 *{escape(record.name)}* closed {format_currency(record.value)} ARR"
    elif record.type == "pilot":
        text += f"🚀 *{escape(record.name)}* signed {format_count(record.value)} {plural(record.value, 'pilot')}"
    else:
        text += f"⚡ *{escape(record.name)}* went from discovery to pilot in {round_half_up(record.value)} days"

    if record.details:
        text += f"\n_{escape(record.details)}_"
    return in_channel(text)


def help_text() -> dict:
    return ephemeral(HELP_TEXT)
