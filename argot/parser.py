"""
Argot parser: an immutable registry of argument specs and its token dispatch engine.

What this module provides
- Parser: the specification registry. Every registration returns a new Parser; the
  receiver is never modified, so a registry can be shared and reused freely.
- create_parser(...): a Parser with the help switch (--help/-h) pre-registered.

Registration rules (Parser.add_arg)
- "name"   → positional argument, appended at the next index (flag/value are ignored).
- "--name" → optional argument with a default value and an optional one-letter flag.
  Re-registering the same long name replaces the previous spec (last write wins).
- anything else fails with MalformedNameError.

Dispatch (Parser.parse)
- A single left-to-right pass, no backtracking. Optionals must precede positionals:
  once a positional value is consumed (the cutoff), option-shaped tokens are rejected.
- Switches (boolean defaults) are negated by each occurrence of their token; other
  optionals consume the following value token.
- Errors abort the whole parse (no partial result): TooManyArgsError, TooFewArgsError,
  MissingValueError, UnknownArgError, plus InvalidChoiceError for values outside options.
- The help switch short-circuits parsing with HelpRequested, carrying the usage text.
  Re-registering "--help" with a non-boolean default turns it into an ordinary optional.

Quick start
    parser = (
        create_parser("copy", "Copy a file.")
        .add_arg("--mode", "-m", "fast", {"fast", "safe"}, "how hard to try")
        .add_arg("--verbose", "-v", "false", descr="say more")
        .add_arg("source")
        .add_arg("target")
    )
    arguments = parser.parse(["-v", "a.txt", "b.txt"])
    arguments["verbose"]  # "true"
"""
import copy
import logging
import re
import sys
from types import MappingProxyType

from .arguments import PositionalArgument, OptionalArgument
from .faults import *
from .formatter import Formatter
from .results import Arguments
from .tokens import Value, LongOption, ShortOption, Malformed, classify, is_value
from .utils import *

log = logging.getLogger(__name__)

HELP = "--help"


class Parser:
    """
    Immutable specification registry.

    Fields
    - prog, descr: program name and description (help output only).
    - positionals: tuple of PositionalArgument, index order.
    - optionals: read-only mapping "--name" → OptionalArgument, registration order.
    - canonicals: read-only mapping "-x" → "--name" for every registered flag.
    - shell, colorful, fancy: presentation options used by run().
    """
    __slots__ = (
        "_prog",
        "_descr",
        "_positionals",
        "_optionals",
        "_canonicals",
        "_shell",
        "_colorful",
        "_fancy",
    )

    __introspectable__ = tuple(name.removeprefix("_") for name in __slots__)

    prog = mirror("prog")
    descr = mirror("descr")
    positionals = mirror("positionals")
    optionals = mirror("optionals")
    canonicals = mirror("canonicals")
    shell = mirror("shell")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    def __init__(
            self,
            prog="prog",
            descr="",
            positionals=(),
            optionals=MappingProxyType({}),
            canonicals=MappingProxyType({}),
            *,
            shell=False,
            colorful=False,
            fancy=False,
    ):
        if not isinstance(prog, str):
            raise TypeError("parser 'prog' must be a string")
        if not isinstance(descr, str):
            raise TypeError("parser 'descr' must be a string")

        for name, value in {
            "prog": prog,
            "descr": descr,
            "positionals": tuple(positionals),
            "optionals": MappingProxyType(dict(optionals)),
            "canonicals": MappingProxyType(dict(canonicals)),
            "shell": bool(shell),
            "colorful": bool(colorful),
            "fancy": bool(fancy),
        }.items():
            super().__setattr__("_" + name, value)

    def __setattr__(self, name, value, /):
        raise AttributeError("'Parser' object is read-only")

    def __replace__(self, /, **changes):
        return type(self)(**{name: getattr(self, "_" + name) for name in self.__introspectable__} | changes)

    def __repr__(self):
        return "parser(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "prog", self._prog
        yield "descr", self._descr
        yield "positionals", self._positionals
        yield "optionals", tuple(self._optionals.values())

    @property
    def formatter(self):
        return Formatter(self._prog, self._descr, self._positionals, self._optionals.values())

    @property
    def help(self):
        """The formatted usage text of this registry."""
        return self.formatter.text

    def add_arg(self, name, flag="", value="", options=(), descr=""):
        """
        Return a new parser with one more argument spec.

        parameters
        - name: "name" for a positional, "--name" for an optional.
        - flag: optionals only; one letter, "x" or "-x" ("" for none).
        - value: optionals only; the default value. "true"/"false" makes a switch.
        - options: permitted values (empty means unconstrained).
        - descr: help text.

        errors
        - MalformedNameError, MalformedFlagError, InvalidChoiceError; the receiver is
          left untouched in every case.
        """
        if not isinstance(name, str):
            raise TypeError("add_arg() 'name' must be a string")
        if not re.fullmatch(r"(--)?[^\W_]([^\W_]|-)*", name):
            raise MalformedNameError(
                "Can't handle argument: %s." % name,
                title="malformed argument name",
                code=FaultCode.MALFORMED_NAME,
                hint="use 'name' for a positional or '--name' for an optional argument",
                name=name,
                docs=getdoc(FaultCode.MALFORMED_NAME),
            )

        match classify(name):
            case Value(text):
                argument = PositionalArgument(len(self._positionals), text, options=options, descr=descr)
                log.debug("registered positional %r at index %d", argument.name, argument.index)
                return copy.replace(self, positionals=(*self._positionals, argument))
            case LongOption(text):
                argument = OptionalArgument(text, value, options=options, descr=descr).set_flag(flag)
                if argument.long in self._optionals:
                    log.debug("replacing optional %r", argument.long)
                canonicals = {
                    short: long for short, long in self._canonicals.items() if long != argument.long
                }
                if argument.flag:
                    canonicals[argument.short] = argument.long
                log.debug("registered optional %r (flag=%r, default=%r)", argument.long, argument.short, argument.value)
                return copy.replace(
                    self,
                    optionals=self._optionals | {argument.long: argument},
                    canonicals=canonicals,
                )

    def _resolve(self, token):
        """
        map an option-shaped token to the long name of a registered optional, or None.

        short flags go through the canonical table; long names must match exactly.
        """
        match classify(token):
            case LongOption():
                return token if token in self._optionals else None
            case ShortOption():
                return self._canonicals.get(token)
        return None

    def _set_positional(self, index, value):
        argument = self._positionals[index]
        if (updated := argument.set_value(value)) is argument:
            return self
        return copy.replace(self, positionals=(*self._positionals[:index], updated, *self._positionals[index + 1:]))

    def _set_optional(self, argument):
        if self._optionals.get(argument.long) is argument:
            return self
        return copy.replace(self, optionals=self._optionals | {argument.long: argument})

    def _help(self):
        formatter = self.formatter
        return HelpRequested(formatter.text, formatter=formatter, tool=self)

    def _dispatch(self, tokens):
        """
        consume 'tokens' against this registry and return the resolved registry.

        state
        - cursor: index of the head token.
        - position: index of the last filled positional (-1 before any).
        - cutoff: True once a positional value was consumed.

        transitions (head token)
        - Value: fills positional position + 1 (TooManyArgsError past the last one), sets cutoff.
        - LongOption/ShortOption resolving to --help (while it is a switch): raises HelpRequested.
        - LongOption/ShortOption before cutoff: switch → negated; otherwise the next token
          must be a Value (MissingValueError). Unresolved → UnknownArgError.
        - anything else: UnknownArgError.
        - end of input: every positional must be filled (TooFewArgsError).
        """
        parser = self
        cursor = 0
        position = -1
        cutoff = False

        while cursor < len(tokens):
            token = tokens[cursor]
            match classify(token):
                case Value(text):
                    if position + 1 >= len(parser._positionals):
                        raise TooManyArgsError(
                            "Too many positional arguments.",
                            title="too many positional arguments",
                            code=FaultCode.TOO_MANY_ARGUMENTS,
                            hint="expected %d positional argument(s), %r is one too many" % (len(parser._positionals), token),
                            token=token,
                            index=cursor,
                            docs=getdoc(FaultCode.TOO_MANY_ARGUMENTS),
                        )
                    position += 1
                    log.debug("token %d %r → positional %r", cursor, token, parser._positionals[position].name)
                    parser = parser._set_positional(position, text)
                    cutoff = True
                    cursor += 1
                case LongOption() | ShortOption():
                    long = parser._resolve(token)
                    if long == HELP and parser._optionals[long].is_switch:
                        log.debug("token %d %r → help requested", cursor, token)
                        raise self._help()
                    if cutoff:
                        raise UnknownArgError(
                            "Illegal argument: %s." % token,
                            title="optional argument after positional ones",
                            code=FaultCode.UNKNOWN_ARGUMENT,
                            hint="move %r before the positional arguments" % token,
                            token=token,
                            index=cursor,
                            docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
                        )
                    if long is None:
                        raise UnknownArgError(
                            "Unknown optional argument: %s." % token,
                            title="unknown optional argument",
                            code=FaultCode.UNKNOWN_ARGUMENT,
                            hint="try '%s --help' to see all available options" % self._prog,
                            token=token,
                            index=cursor,
                            docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
                        )

                    argument = parser._optionals[long]
                    if argument.is_switch:
                        log.debug("token %d %r → switch %r toggled", cursor, token, long)
                        parser = parser._set_optional(argument.toggle())
                        cursor += 1
                    elif cursor + 1 < len(tokens) and is_value(tokens[cursor + 1]):
                        log.debug("token %d %r → optional %r = %r", cursor, token, long, tokens[cursor + 1])
                        parser = parser._set_optional(argument.set_value(tokens[cursor + 1]))
                        cursor += 2
                    else:
                        raise MissingValueError(
                            "Missing value for optional argument %s" % token,
                            title="missing value",
                            code=FaultCode.MISSING_VALUE,
                            hint="pass a value after it (for example: %s <value>)" % token,
                            token=token,
                            argument=argument,
                            index=cursor,
                            docs=getdoc(FaultCode.MISSING_VALUE),
                        )
                case Malformed():
                    raise UnknownArgError(
                        "Illegal argument: %s." % token,
                        title="malformed argument",
                        code=FaultCode.UNKNOWN_ARGUMENT,
                        hint="try '%s --help' to see valid forms" % self._prog,
                        token=token,
                        index=cursor,
                        docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
                    )

        if position != len(parser._positionals) - 1:
            missing = [argument.name for argument in parser._positionals[position + 1:]]
            raise TooFewArgsError(
                "Too few positional arguments.",
                title="too few positional arguments",
                code=FaultCode.TOO_FEW_ARGUMENTS,
                hint="missing: %s" % ", ".join(missing),
                missing=missing,
                docs=getdoc(FaultCode.TOO_FEW_ARGUMENTS),
            )
        return parser

    def parse(self, tokens, /):
        """
        Parse a token list into an Arguments mapping.

        The receiver is not modified; on any error no result is produced.
        """
        if isinstance(tokens, str):
            raise TypeError("parse() argument must be a sequence of strings, not a string")
        tokens = tuple(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must only contain strings")

        log.debug("parsing %d token(s) with %r", len(tokens), self._prog)
        parser = self._dispatch(tokens)
        return Arguments([*parser._positionals, *parser._optionals.values()])

    def run(self, tokens=Unset, /):
        """
        Presentation boundary: parse and surface faults according to the parser options.

        - tokens default to sys.argv[1:].
        - shell=False: faults and help requests are raised (with runtime options merged).
        - shell=True: they are rendered with rich; errors exit with status 1, help with 0.
        """
        try:
            return self.parse(coalesce(tokens, sys.argv[1:]))
        except (ParserException, HelpRequested) as fault:
            trigger(fault, tool=self, shell=self._shell, fancy=self._fancy, colorful=self._colorful)


def create_parser(prog="prog", descr="", *, shell=False, colorful=False, fancy=False):
    """
    Return an empty Parser with the help switch (--help/-h) registered.
    """
    help = OptionalArgument("help", "false", "h", descr="print this help message")
    return Parser(
        prog,
        descr,
        optionals={help.long: help},
        canonicals={help.short: help.long},
        shell=shell,
        colorful=colorful,
        fancy=fancy,
    )


__all__ = (
    "Parser",
    "create_parser",
)
