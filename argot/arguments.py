r"""
Argot argument specifications.

Overview
- Specs
  • PositionalArgument: mandatory argument identified by its index in the token stream.
  • OptionalArgument: named argument (--long, optionally aliased by a one-letter -x flag)
    carrying a default value; a boolean default ("true"/"false") makes it a switch.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the fields
    declared in __introspectable__ via read-only properties.

Metadata (sanitized on construction)
- name: letters, digits, and hyphens, stored without the "--" prefix.
- value: current string value; "" means unset / no default.
- options: permitted values; stored as a tuple without duplicates (sets are sorted so
  help output is stable). Empty means unconstrained.
- descr: help text, never parsed.
- index (positional only): zero-based registration order.
- flag (optional only): one letter, stored without the "-" prefix.

Validation highlights
- Names must match r"[^\W_]([^\W_]|-)*" (MalformedNameError).
- A non-empty value outside non-empty options fails with InvalidChoiceError.
- Flags must be a single letter, optionally prefixed by one "-" (MalformedFlagError).

Immutability
- Specs never change after construction. set_value/set_flag return the same instance when
  nothing changes, otherwise a new one built through copy.replace (which re-validates).

Quick example:
    >>> verbose = OptionalArgument("verbose", "false", "v")
    >>> verbose.is_switch
    True
    >>> verbose.toggle().value
    'true'
"""
import copy
import re
from collections.abc import Iterable, Set

from .faults import FaultCode, MalformedNameError, MalformedFlagError, InvalidChoiceError, getdoc
from .utils import *


class ArgumentType(type):
    """
    Metaclass of the specs.

    - __typename__: the class name in kebab case ("optional-argument"), used in
      messages and reprs.
    - every field named in __introspectable__ becomes a read-only property over its
      "_field" slot (see utils.mirror).
    - __repr__/__rich_repr__ list the introspectable fields in declaration order.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        fields = namespace.get("__introspectable__", ())
        self = super().__new__(
            cls,
            name,
            bases,
            namespace
            | {"__typename__": re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()}
            | {field: mirror(field) for field in fields},
        )

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__introspectable__:
                yield field, getattr(self, field)

        @rename("__repr__")
        def __repr__(self):
            # optional-argument(name='verbose', value='false', flag='v', ...)
            return f"{type(self).__typename__}({", ".join(f"{field}={value!r}" for field, value in self.__rich_repr__())})"

        self.__rich_repr__ = __rich_repr__
        self.__repr__ = __repr__
        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the metadata shared by every spec.

    Responsibilities
    - name: must be a string made of letters, digits, and hyphens, starting with a
      letter or digit; otherwise MalformedNameError.
    - value/descr: must be strings.
    - options: any iterable of strings (a bare string is rejected). Sets are sorted,
      other iterables keep their order; duplicates are collapsed.
    - choices: a non-empty value must belong to non-empty options (InvalidChoiceError).

    Side effects
    - Mutates the provided metadata dict in place.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not re.fullmatch(r"[^\W_]([^\W_]|-)*", name):
        raise MalformedNameError(
            "Can't handle argument: %s." % name,
            title="malformed argument name",
            code=FaultCode.MALFORMED_NAME,
            hint="use letters, digits, and hyphens only (for example: input-file or --input-file)",
            name=name,
            docs=getdoc(FaultCode.MALFORMED_NAME),
        )

    for field in ("value", "descr"):
        if not isinstance(metadata[field], str):
            raise TypeError(f"{cls.__typename__} {field!r} must be a string")

    if isinstance(options := metadata["options"], str) or not isinstance(options, Iterable):
        raise TypeError(f"{cls.__typename__} 'options' must be an iterable of strings")
    options = sorted(options) if isinstance(options, Set) else list(dict.fromkeys(options))
    if not all(isinstance(option, str) for option in options):
        raise TypeError(f"{cls.__typename__} 'options' must only contain strings")
    metadata["options"] = tuple(options)

    if (options := metadata["options"]) and (value := metadata["value"]) and value not in options:
        raise InvalidChoiceError(
            "`%s` must be chosen from {%s}, got \"%s\"" % (
                name, ", ".join('"%s"' % option for option in options), value
            ),
            title="invalid choice",
            code=FaultCode.INVALID_CHOICE,
            hint="pick one of: %s" % ", ".join(options),
            name=name,
            choices=options,
            value=value,
            docs=getdoc(FaultCode.INVALID_CHOICE),
        )


def _sanitize_flag(cls, metadata, /):
    """
    Internal: validate and normalize the short flag of an optional spec.

    Accepted forms are "" (no flag), "x", and "-x" where x is a single letter;
    the stored form never carries the prefix.
    """
    if not isinstance(flag := metadata["flag"], str):
        raise TypeError(f"{cls.__typename__} 'flag' must be a string")
    if not flag:
        return

    letter = flag.removeprefix("-")
    if len(letter) != 1 or not letter.isalpha():
        raise MalformedFlagError(
            "Can't handle flag: %s, make sure flag argument is prefixed by a single '-'." % flag,
            title="malformed flag",
            code=FaultCode.MALFORMED_FLAG,
            hint="use a single letter, for example: -v",
            flag=flag,
            docs=getdoc(FaultCode.MALFORMED_FLAG),
        )
    metadata["flag"] = letter


class Argument(metaclass=ArgumentType):
    """
    Shared capability of positional and optional specifications.

    Not instantiable on its own; see PositionalArgument and OptionalArgument.
    Instances compare and hash by their field values.
    """

    __introspectable__ = (
        "name",
        "value",
        "options",
        "descr",
    )

    def __new__(cls, metadata, /):
        if cls is Argument:
            raise TypeError("type 'Argument' cannot be instantiated directly")
        _sanitize_metadata(cls, metadata)
        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __setattr__(self, name, value, /):
        if not name.startswith("_"):
            raise AttributeError(f"{type(self).__typename__} is read-only")
        super().__setattr__(name, value)

    def _fields(self):
        return tuple(getattr(self, name) for name in type(self).__introspectable__)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self):
        return hash((type(self), self._fields()))

    def __replace__(self, /, **changes):
        return type(self)(**{name: getattr(self, name) for name in type(self).__introspectable__} | changes)

    def set_value(self, value, /):
        """
        Return a spec holding 'value'.

        The same instance is returned when the value does not change; otherwise the
        new spec is re-validated (InvalidChoiceError for values outside the options).
        """
        if value == self.value:
            return self
        return copy.replace(self, value=value)


class PositionalArgument(Argument):
    """
    Positional, mandatory argument specification.

    The index is fixed at registration and equals the position of the value among
    the positional tokens. Every positional must receive a value during parse.
    """

    __introspectable__ = (
        "index",
        "name",
        "value",
        "options",
        "descr",
    )

    def __new__(cls, index, name, value="", options=(), descr=""):
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"{cls.__typename__} 'index' must be an integer")
        if index < 0:
            raise ValueError(f"{cls.__typename__} 'index' cannot be negative")
        return super().__new__(cls, {
            "index": index,
            "name": name,
            "value": value,
            "options": options,
            "descr": descr,
        })


class OptionalArgument(Argument):
    """
    Named argument specification with a default value.

    Highlights
    - Referenced on the command line by "--name" or, when a flag is set, by "-x".
    - A switch is an optional whose value is a boolean literal: its token never
      consumes a following value, each occurrence negates the current value.
    """

    __introspectable__ = (
        "name",
        "value",
        "flag",
        "options",
        "descr",
    )

    def __new__(cls, name, value="", flag="", options=(), descr=""):
        metadata = {
            "name": name,
            "value": value,
            "flag": flag,
            "options": options,
            "descr": descr,
        }
        _sanitize_flag(cls, metadata)
        return super().__new__(cls, metadata)

    @property
    def long(self):
        """The canonical token, e.g. "--verbose"."""
        return "--" + self.name

    @property
    def short(self):
        """The flag token, e.g. "-v", or "" when no flag is set."""
        return "-" + self.flag if self.flag else ""

    @property
    def is_switch(self):
        return self.value.lower() in ("true", "false")

    def set_flag(self, flag, /):
        """
        Return a spec aliased by 'flag' ("x" or "-x"); "" leaves the spec unchanged.
        """
        if not flag:
            return self
        return copy.replace(self, flag=flag)

    def toggle(self):
        """
        Return the switch with its boolean value negated.
        """
        if not self.is_switch:
            raise TypeError(f"{type(self).__typename__} {self.long!r} is not a switch")
        return self.set_value("false" if self.value.lower() == "true" else "true")


__all__ = (
    "ArgumentType",
    "Argument",
    "PositionalArgument",
    "OptionalArgument",
)
