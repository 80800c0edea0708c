from rich.pretty import pprint

from argot import *

__prog__ = "copy"

parser = (
    create_parser("copy", "Copy a file, optionally transforming it on the way.", shell=True, colorful=True, fancy=True)
    .add_arg("--mode", "-m", "fast", {"fast", "safe"}, "how hard to try")
    .add_arg("--verbose", "-v", "false", descr="say more")
    .add_arg("source", descr="file to read")
    .add_arg("target", descr="file to write")
)


if __name__ == '__main__':
    pprint(parser.run())
