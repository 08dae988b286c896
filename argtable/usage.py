"""
Usage rendering for argument tables.

Layout
    usage: prog [-v] -n <integer> [-I<integer>] [-m <choice>]
     -v : be verbose
     -n : number of runs
     -I : attached level
     -m : mode

- The summary line lists every option in table order; options that are not
  required are bracketed; value placeholders follow the name after a space,
  or directly for attached options; long summaries wrap with a hanging indent.
- The description block pads every name to the longest one.

Palette keys
- usage-label, program-name, option-name, required-name, placeholder,
  description, panel-title
  (override through a __styles__ mapping in __main__; colorful=False drops styles)
"""
from collections import defaultdict, deque

from rich.console import Group
from rich.containers import Lines
from rich.panel import Panel
from rich.text import Text

from . import faults
from .kinds import Kind
from .utils import *


def render(table, prog, /, *, console=Unset):
    """
    Print the usage summary and option descriptions of table.

    Parameters
    - table: ArgumentTable
    - prog: str, program name shown on the summary line.
    - console: rich Console; defaults to the shared stderr console of argtable.faults.
    """
    console = coalesce(console, faults.console)
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "option-name": "bold #00E6FF",
        "required-name": "bold #22C55E",
        "placeholder": "bold #FFD600",
        "description": "#9CA3AF",
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if table.colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not table.colorful:
            return Text(str(fragment))
        return Text(str(fragment), style)

    width = console.width - 4 * table.fancy

    usage = Text()
    usage.append("usage", styler("usage-label")).append(":")
    usage.append(" ")
    usage.append(text(prog, styler("program-name")))
    usage.append(" ")
    offset = len(usage)

    inputs = deque()
    for argument in table:
        input = Text.assemble(
            text(argument.name, styler("required-name" if argument.required else "option-name")),
            " " if argument.kind is not Kind.BOOLEAN and not argument.attached else "",
            text(argument.kind.placeholder, styler("placeholder")),
        )
        inputs.append(input if argument.required else Text.assemble("[", input, "]"))

    try:
        lines = Lines([inputs.popleft()])
    except IndexError:
        lines = Lines()

    while inputs:
        if len(lines[-1]) + 1 + len(input := inputs.popleft()) > width - offset:
            lines.append(input)
        else:
            lines[-1].append(Text(" ") + input)

    try:
        usage.append(lines.pop(0))
    except IndexError:
        pass
    for line in lines:
        usage.append("\n").append(" " * offset).append(line)

    renders = [usage]

    if len(table):
        padding = max(len(argument.name) for argument in table)
        indent = padding + 4
        block = Text()
        for index, argument in enumerate(table):
            block.append(" ").append(text(argument.name.ljust(padding), styler("option-name"))).append(" : ")
            if descr := text(argument.descr, styler("description")):
                wrapped = descr.wrap(console, max(width - indent, 1))
                block.append(wrapped.pop(0))
                for line in wrapped:
                    block.append("\n").append(" " * indent).append(line)
            block.append("\n" * (index < len(table) - 1))
        renders.append(block)

    renderable = Group(*renders)

    if table.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{prog} USAGE".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )

    console.print(renderable)


__all__ = (
    "render",
)
