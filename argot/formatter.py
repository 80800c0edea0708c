"""
Help/usage rendering for a finalized parser.

The Formatter consumes the registered specs and produces the help text shown when
the help switch is found. It holds no parsing state.

Layout
    usage: prog [--help|-h] [--mode {fast|safe}|-m {fast|safe}] [--name <value>] input

    A short program description.

    Positional arguments:
      input: file to read

    Optional arguments:
      --help|-h: (default: false) print this help message
      --mode {fast|safe}|-m {fast|safe}: (default: fast) how hard to try

- only described arguments are listed in the sections;
- an optional entry whose description would pass column 79 moves the description
  to the next line, indented by 8 spaces.

Palette keys (override any of them through a __styles__ mapping in __main__)
- usage-label, program-name, description-section, group-label
- option-name, flag-name, metavar, choice, default, argument-description
"""
from collections import defaultdict

from rich.text import Text


class Formatter:
    """
    Build the help text of a parser from its specs.

    - text: plain string (what HelpRequested carries).
    - render(colorful=...): the same content as a rich Text.
    """
    placeholder = "<value>"
    padding = 2
    indent = 8
    width = 79

    def __init__(self, prog, descr, positionals, optionals):
        self.prog = prog
        self.descr = descr
        self.positionals = tuple(positionals)
        self.optionals = tuple(optionals)

    @property
    def text(self):
        return self.render().plain

    def render(self, *, colorful=False):
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "description-section": "italic #A3A3A3",  # Neutral gray
            "group-label": "bold #FFFFFF",  # Pure white headers
            "option-name": "bold #00E6FF",  # CYAN for options
            "flag-name": "bold #22C55E",  # GREEN for switches
            "metavar": "bold #FFD600",  # AMBER for parameters
            "choice": "bold #FF4D94",  # MAGENTA → choices stand out
            "default": "#737373",  # Dim gray
            "argument-description": "#9CA3AF",  # Muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def metavar(argument):
            if argument.options:
                return Text.assemble("{", (("|".join(argument.options)), styler("choice")), "}")
            return Text(self.placeholder, styler("metavar"))

        def names(argument):
            style = styler("flag-name" if argument.is_switch else "option-name")
            forms = [argument.long] + ([argument.short] if argument.flag else [])
            if argument.is_switch:
                return Text("|").join(Text(form, style) for form in forms)
            return Text("|").join(Text.assemble((form, style), " ", metavar(argument)) for form in forms)

        help = Text()
        help.append("usage", styler("usage-label")).append(": ")
        help.append(self.prog, styler("program-name"))
        for argument in self.optionals:
            help.append(" ").append(Text.assemble("[", names(argument), "]"))
        for argument in self.positionals:
            help.append(" ").append(argument.name)
        help.append("\n")

        if self.descr:
            help.append("\n").append(self.descr, styler("description-section")).append("\n")

        if described := [argument for argument in self.positionals if argument.descr]:
            help.append("\n").append("Positional arguments", styler("group-label")).append(":\n")
            for argument in described:
                help.append(" " * self.padding).append(argument.name).append(": ")
                help.append(argument.descr, styler("argument-description")).append("\n")

        if described := [argument for argument in self.optionals if argument.descr]:
            help.append("\n").append("Optional arguments", styler("group-label")).append(":\n")
            for argument in described:
                preceding = Text.assemble(names(argument), ":")
                if argument.value:
                    preceding.append(" ").append("(default: %s)" % argument.value, styler("default"))
                preceding.append(" ")
                help.append(" " * self.padding).append(preceding)
                if len(preceding) + len(argument.descr) > self.width:
                    help.append("\n").append(" " * self.indent)
                help.append(argument.descr, styler("argument-description")).append("\n")

        help.rstrip()
        return help


__all__ = (
    "Formatter",
)
