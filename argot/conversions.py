"""
Stateless string conversions for parsed values.

Parsed values are always strings; these adapters turn them into richer types at the
call site and never interact with parsing state:

    arguments = parser.parse(tokens)
    threads = to_int(arguments["threads"])
    endpoint = to_uri(arguments["endpoint"])

Every converter raises ValueError (with the offending text in the message) when the
string cannot be converted.
"""
import datetime
from urllib.parse import urlsplit


def to_uri(text, /):
    """
    parse an absolute URI; a scheme is required.

    returns urllib.parse.SplitResult (scheme, netloc, path, query, fragment).
    """
    try:
        uri = urlsplit(text)
    except ValueError as exception:
        raise ValueError("Failed to convert %s to URI: %s" % (text, exception)) from exception
    if not uri.scheme:
        raise ValueError("Failed to convert %s to URI: no scheme found." % text)
    return uri


def to_boolean(text, /):
    """accepts "true" or "false", case-insensitive."""
    match text.lower():
        case "true":
            return True
        case "false":
            return False
    raise ValueError("Failed to convert %s to boolean." % text)


def to_int(text, /):
    try:
        return int(text)
    except ValueError:
        raise ValueError("Failed to convert %s to integer." % text) from None


def to_float(text, /):
    try:
        return float(text)
    except ValueError:
        raise ValueError("Failed to convert %s to float." % text) from None


def to_set(text, /):
    """comma separated members: "a,b,a" → {"a", "b"}."""
    return set(text.split(","))


def to_map(text, /):
    """
    comma separated key=value pairs: "a=1,b=2" → {"a": "1", "b": "2"}.

    every pair must contain exactly one '='.
    """
    mapping = {}
    for pair in text.split(","):
        match pair.split("="):
            case [key, value]:
                mapping[key] = value
            case _:
                raise ValueError("Failed to convert %s to map: bad pair %r." % (text, pair))
    return mapping


def to_datetime(text, /):
    """
    ISO 8601 date or date-time, normalized to UTC.

    naive values are taken as UTC; "2015-01-01" is midnight UTC of that day.
    """
    try:
        moment = datetime.datetime.fromisoformat(text)
    except ValueError:
        raise ValueError("Failed to convert %s to date-time." % text) from None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=datetime.UTC)
    return moment.astimezone(datetime.UTC)


__all__ = (
    "to_uri",
    "to_boolean",
    "to_int",
    "to_float",
    "to_set",
    "to_map",
    "to_datetime",
)
