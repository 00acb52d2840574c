"""Text formatting helpers for user-facing messages."""
from datetime import datetime, timezone
from typing import Any, Dict, List

# Longest raw code, message or data shown per record
MAX_FIELD_LEN = 300


def escape_html(text: str) -> str:
    """Escape HTML special characters for Telegram."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def format_error_time(timestamp: Any) -> str:
    """Format a Unix timestamp as UTC time.

    Example: format_error_time(0) -> '1970-01-01 00:00:00'
    """
    try:
        moment = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return "?"
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def shorten(text: str, limit: int = MAX_FIELD_LEN) -> str:
    """Cut *text* to *limit* characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit - 1] + "…"


def format_error_record(record: Dict[str, Any], with_data: bool = False) -> str:
    """Format one cached error as a single line (plus data if asked).

    Fields are shortened before escaping, so a record always fits in one
    Telegram message.

    Example: '2024-01-01 10:00:00 [404] Not Found'
    """
    line = (
        f"{format_error_time(record.get('time'))} "
        f"[{escape_html(shorten(str(record.get('code'))))}] "
        f"{escape_html(shorten(str(record.get('message', ''))))}"
    )
    data = record.get("data")
    if with_data and data is not None:
        line += f"\n<pre>{escape_html(shorten(repr(data)))}</pre>"
    return line


def format_error_list(records: List[Dict[str, Any]], limit: int = 20) -> str:
    """Format the most recent *limit* errors, newest first."""
    recent = [r for r in records if isinstance(r, dict)][-limit:]
    return "\n".join(format_error_record(r) for r in reversed(recent))
