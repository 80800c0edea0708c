"""
Parsed results: a read-only mapping from normalized argument name to value.

Arguments is built once, after a successful parse, by folding the resolved specs
(positionals in index order, then optionals in registration order) under their
camel-cased names; later specs overwrite earlier ones on a name collision.

Lookups accept the normalized key itself or any spelling that normalizes to it:

    >>> arguments["dryRun"] == arguments["--dry-run"] == arguments["dry_run"]
    True

Unknown names raise NoSuchArgumentError (a KeyError). There is no default synthesis
here: every spec already carries its resolved or default value.
"""
from collections.abc import Mapping
from types import MappingProxyType

from .faults import FaultCode, NoSuchArgumentError, getdoc
from .utils import camelize


class Arguments(Mapping):
    """
    Immutable mapping of parsed argument values.

    - arguments[name] / get(arguments, name) → the resolved string value.
    - arguments.argument(name) → the resolved spec (PositionalArgument or OptionalArgument).
    - iteration yields the normalized names in fold order.
    """
    __slots__ = ("_records",)

    def __init__(self, records=(), /):
        folded = {}
        for record in records:
            folded[camelize(record.name)] = record
        object.__setattr__(self, "_records", MappingProxyType(folded))

    def __setattr__(self, name, value, /):
        raise AttributeError("'Arguments' object is read-only")

    def __delattr__(self, name, /):
        raise AttributeError("'Arguments' object is read-only")

    def _resolve(self, name):
        if name in self._records:
            return name
        if (key := camelize(name)) in self._records:
            return key
        raise NoSuchArgumentError(
            "No such argument: %s." % name,
            title="no such argument",
            code=FaultCode.NO_SUCH_ARGUMENT,
            hint="registered names: %s" % (", ".join(self._records) or "(none)"),
            name=name,
            docs=getdoc(FaultCode.NO_SUCH_ARGUMENT),
        )

    def argument(self, name, /):
        """
        Return the resolved spec registered under 'name'.
        """
        return self._records[self._resolve(name)]

    def __getitem__(self, name, /):
        return self.argument(name).value

    def __iter__(self):
        return iter(self._records)

    def __len__(self):
        return len(self._records)

    def __eq__(self, other):
        if isinstance(other, Arguments):
            return self._records == other._records
        return super().__eq__(other)

    __hash__ = None

    def __repr__(self):
        return "Arguments(%s)" % ", ".join(
            "%s=%s" % (key, record.value or "NULL") for key, record in self._records.items()
        )

    def __rich_repr__(self):
        for key, record in self._records.items():
            yield key, record.value


def get(arguments, name, /):
    """
    strict lookup: the value of 'name' in 'arguments', or NoSuchArgumentError.
    """
    if not isinstance(arguments, Arguments):
        raise TypeError("get() first argument must be an Arguments instance")
    return arguments[name]


__all__ = (
    "Arguments",
    "get",
)
