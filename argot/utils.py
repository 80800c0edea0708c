"""
Argot utilities shared by the arguments, parser, and results layers.

Contents
- Unset: falsey "not given" marker, kept apart from None and "" because an empty
  string is a meaningful argument value.
- coalesce(object, default): swap Unset for a default, any other value passes through.
- rename(name): decorator pinning __name__/__qualname__ on generated functions, so
  tracebacks and reprs show "value" rather than "getter".
- mirror(name): read-only property over the "_name" slot; containers come back as
  tuple / MappingProxyType / frozenset views.
- camelize(name): the lookup key of an argument name ("--dry-run" → "dryRun").

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> camelize("--dry-run")
    'dryRun'
"""
import functools
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker.

    There is exactly one instance; calling UnsetType() hands it back. It is
    falsey, prints as "Unset", and refuses subclasses.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    'default' when 'object' is Unset, 'object' otherwise.

    - coalesce(Unset, "fallback") -> "fallback"
    - coalesce("", "fallback")    -> ""
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator: give the decorated callable the public name 'name'.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(callable):
        try:
            callable.__name__ = callable.__qualname__ = name
        except (AttributeError, TypeError):
            raise TypeError("rename() can only be applied to a renamable callable") from None
        return callable

    return decorator


def _freeze(object):
    # read-only views: sequences → tuple, mappings → proxy, sets → frozenset
    match object:
        case str():
            return object
        case Sequence():
            return tuple(object)
        case Mapping():
            return MappingProxyType(object)
        case Set():
            return frozenset(object)
    return object


def mirror(name, /):
    """
    Read-only property over the private attribute "_" + name.

        class Parser:
            prog = mirror("prog")   # reads self._prog
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def fget(self):
        return _freeze(getattr(self, "_" + name))

    return property(fget)


@functools.cache
def camelize(name, /):
    """
    Lookup key of an argument name.

    Leading hyphens go, the rest splits on '-' and '_' (empty pieces dropped), the
    first piece is lower-cased and every later piece gets a capital first letter.

    - camelize("--camel-case") -> "camelCase"
    - camelize("input_file")   -> "inputFile"
    - camelize("URI")          -> "uri"
    """
    if not isinstance(name, str):
        raise TypeError("camelize() argument must be a string")

    first, *rest = [piece for piece in re.split(r"[-_]", name.lstrip("-")) if piece] or [""]
    return first.lower() + "".join(piece[:1].upper() + piece[1:] for piece in rest)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "camelize",
    "UnsetType",
    "Unset",
)
