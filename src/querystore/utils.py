import datetime as _dt
import typing as _ty
from email.utils import parsedate_tz as _parsedate_tz, parsedate_to_datetime as _parsedate_to_datetime


def parsedate(date: str) -> _dt.datetime:
    """Parse an RFC 2822 date (``Tue, 15 Nov 1994 08:12:31 GMT``)."""
    if _parsedate_tz(date) is None:
        raise ValueError(f"not an ISO 8601 or RFC 2822 date: {date!r}")
    return _parsedate_to_datetime(date)


def as_text(value: _ty.Any) -> str | None:
    """Render a value the way it is stored in a query."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode()
    return str(value)


def is_sequence(value: _ty.Any) -> bool:
    return isinstance(value, _ty.Sequence) and not isinstance(value, (str, bytes))
