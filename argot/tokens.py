"""
Token classification for the dispatch engine.

Every raw token is classified once into a tagged variant that the parser consumes
with a match statement:

- Value(text)        → a non-empty token not starting with '-' ("input.txt", "7").
- LongOption(name)   → '--' followed by at least one character ("--dry-run" → "dry-run").
- ShortOption(name)  → '-' followed by at least one non-hyphen character ("-v" → "v").
- Malformed(token)   → anything else: "", "-", "--".

Classification is purely about shape: whether an option exists is decided by the parser.
"""
from collections import namedtuple

Value = namedtuple("Value", ("text",))
LongOption = namedtuple("LongOption", ("name",))
ShortOption = namedtuple("ShortOption", ("name",))
Malformed = namedtuple("Malformed", ("token",))


def classify(token, /):
    """
    classify one raw token by shape.

    examples
    - classify("file.txt") -> Value(text='file.txt')
    - classify("--camel-case") -> LongOption(name='camel-case')
    - classify("-f") -> ShortOption(name='f')
    - classify("-") -> Malformed(token='-')
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")
    if token and not token.startswith("-"):
        return Value(token)
    if token.startswith("--") and len(token) > 2:
        return LongOption(token[2:])
    if token.startswith("-") and len(token) > 1 and token[1] != "-":
        return ShortOption(token[1:])
    return Malformed(token)


def is_value(token, /):
    """True when 'token' can be consumed as a value (see Value)."""
    return isinstance(classify(token), Value)


__all__ = (
    "Value",
    "LongOption",
    "ShortOption",
    "Malformed",
    "classify",
    "is_value",
)
