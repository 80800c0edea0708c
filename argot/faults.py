"""
Argot faults: parse errors, the help outcome, and how both reach the user.

Scope
- FaultCode: stable numbers for every user-facing error, one block per domain
  (211xx registration, 212xx dispatch, 213xx lookup).
- ParserException: message + read-only options (title, code, hint, and whatever
  context the raiser attaches: token, argument, choices...).
  • SpecificationError: bad registrations, raised by add_arg and the spec constructors.
  • DispatchError: bad input, raised by parse while consuming tokens.
  • NoSuchArgumentError: lookup of a name that was never registered.
- HelpRequested: the help switch was found; neither a success nor an error.
- trigger(fault, **options): the one way the presentation boundary surfaces a fault.
- getdoc(code): host-provided documentation for a code, if any.

Flow
- The core only raises; nothing is printed while parsing.
- Parser.run hands the fault to trigger() together with its shell/fancy/colorful
  options. Outside shell mode the enriched fault is raised again; in shell mode it is
  printed with rich and the process exits (1 for errors, 0 for help).

Host hooks (attributes of __main__, all optional)
- __codes__: {FaultCode: label} shown instead of the number.
- __docs__: {FaultCode: text} returned by getdoc().
- __styles__: palette overrides (see the style keys below and in formatter).
- __prog__: program name shown in fault headers.
"""
import copy
import re
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    stable fault numbers.

    - 211xx, registration: MALFORMED_NAME, MALFORMED_FLAG, INVALID_CHOICE
    - 212xx, dispatch: UNKNOWN_ARGUMENT, MISSING_VALUE (option tokens),
      TOO_MANY_ARGUMENTS, TOO_FEW_ARGUMENTS (positional arity)
    - 213xx, lookup: NO_SUCH_ARGUMENT
    """
    # --- registration (211xx) ---
    MALFORMED_NAME              = 21101
    MALFORMED_FLAG              = 21102
    INVALID_CHOICE              = 21103

    # --- option tokens (2121x) ---
    UNKNOWN_ARGUMENT            = 21211
    MISSING_VALUE               = 21212

    # --- positional arity (2122x) ---
    TOO_MANY_ARGUMENTS          = 21221
    TOO_FEW_ARGUMENTS           = 21222

    # --- lookup (213xx) ---
    NO_SUCH_ARGUMENT            = 21301

    def normalize(self):
        """the label the host maps this code to in __main__.__codes__, else the number."""
        return str(_host("__codes__", {}).get(self, self.value))


def _host(name, default, /):
    return getattr(sys.modules["__main__"], name, default)


def _palette(defaults, /):
    return defaultdict(str, defaults | _host("__styles__", {}))


def _prog(options, /):
    return _host("__prog__", getattr(options.get("tool"), "prog", "prog"))


def _titled(cls, /):
    # MissingValueError -> "missing value error"
    return re.sub(r"(?<!^)(?=[A-Z])", " ", cls.__name__).lower()


class ParserException(Exception):
    """
    base of every parser fault.

    'message' is the exact sentence shown to the user (and str(fault)). 'options' is
    a read-only mapping; derive a fault with more context through copy.replace().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def __rich__(self):
        colorful = self.options.get("colorful", False)
        styles = _palette({
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

        def styled(fragment, style):
            return Text(str(fragment), styles[style] if colorful else "")

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            styled(_prog(self.options), "prog-name"),
            " — ",
            styled(code.normalize() if code is not None else "-", "code"),
            " | ",
            styled(self.options.get("title", _titled(type(self))).title(), "error-title"),
            " ]",
        )
        body = [styled(self, "error-message")]
        if hint := self.options.get("hint"):
            body.append(Text.assemble(styled(" → ", "hint-arrow"), styled(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, /, **overrides):
        return type(self)(self.message, **self.options | overrides)


class SpecificationError(ParserException): ...
class DispatchError(ParserException): ...

class MalformedNameError(SpecificationError, ValueError): ...
class MalformedFlagError(SpecificationError, ValueError): ...
class InvalidChoiceError(SpecificationError, ValueError): ...

class TooManyArgsError(DispatchError): ...
class TooFewArgsError(DispatchError): ...
class MissingValueError(DispatchError): ...
class UnknownArgError(DispatchError): ...


class NoSuchArgumentError(ParserException, KeyError):
    """
    a parsed result was asked for a name that was never registered.

    being a KeyError keeps ``name in arguments`` and ``arguments.get(name, default)``
    working as on any mapping.
    """


class HelpRequested(Exception):
    """
    the help switch was found while dispatching.

    carries the plain usage text (``str(help)`` / ``help.text``); the 'formatter'
    option, when present, provides the styled rendering used in shell mode.
    """

    def __init__(self, text=Unset, /, **options):
        assert isinstance(text, str | UnsetType)
        self.text = coalesce(text, "")
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.text

    def __rich__(self):
        colorful = self.options.get("colorful", False)
        styles = _palette({"panel-title": "bold #FF4D94"})

        formatter = self.options.get("formatter")
        usage = formatter.render(colorful=colorful) if formatter is not None else Text(self.text)
        if not self.options.get("fancy", False):
            return usage
        return Panel(
            usage,
            title=Text(f"[ {_prog(self.options).upper()} HELP ]", styles["panel-title"] if colorful else ""),
            title_align="left",
        )

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        Console().print(self)
        sys.exit(0)

    def __replace__(self, /, **overrides):
        return type(self)(self.text, **self.options | overrides)


def trigger(fault, /, **options):
    """
    merge 'options' into 'fault' (copy.replace) and surface it.

    'fault' is a ParserException or HelpRequested, or anything else with callable
    __trigger__ and __replace__. usual options: tool, shell, fancy, colorful.
    """
    if not all(callable(getattr(fault, name, None)) for name in ("__trigger__", "__replace__")):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    documentation the host attached to 'code' in __main__.__docs__, or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return _host("__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "ParserException",
    "SpecificationError",
    "DispatchError",
    "MalformedNameError",
    "MalformedFlagError",
    "InvalidChoiceError",
    "TooManyArgsError",
    "TooFewArgsError",
    "MissingValueError",
    "UnknownArgError",
    "NoSuchArgumentError",
    "HelpRequested",
    "trigger",
    "getdoc",
)
