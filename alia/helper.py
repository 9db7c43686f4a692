"""
Help printer.

Renders the static usage text of the alia command line with rich. Rendering
never fails and consumes no tokens; the interpreter simply calls the printer
when it meets the help verb.

Palette keys
- usage-label, program-name, usage-section
- group-label, verb-name, metavar, flag-name, verb-description
- examples-label, examples-dot, example
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# (spellings, metavars, description, accepted flags)
VERBS = (
    (("add", "a"), ("NAME", "CONTENT"), "add an alias", "-i ignore errors, -f overwrite an existing alias"),
    (("remove", "r"), ("NAME",), "remove an alias", "-i ignore errors, -f ignore a missing alias"),
    (("change", "c"), ("NAME", "CONTENT"), "change the content of an alias", "-i ignore errors, -f create a missing alias"),
    (("execute", "e"), ("NAME",), "execute an alias in the system shell", "-i ignore errors"),
    (("help", "h"), (), "display this message", ""),
)

EXAMPLES = (
    'alia add run_release "cargo run --release"',
    'alia add -if run_release "cargo run --release"',
    'alia change -i -f my_alias "echo test"',
    "alia execute my_alias",
    'alia add my_alias "echo test" remove my_alias',
)


class HelpPrinter:
    def __init__(self, *, console=None, colorful=True, fancy=False, prog="alia"):
        self.console = console or Console()
        self.colorful = colorful
        self.fancy = fancy
        self.prog = prog

    def __call__(self):
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan

            "group-label": "bold #FFFFFF",  # Pure white headers
            "verb-name": "bold #00E6FF",
            "metavar": "bold #FFD600",  # AMBER for parameters
            "flag-name": "bold #22C55E",  # GREEN for flags
            "verb-description": "#9CA3AF",  # Muted gray

            "examples-label": "bold #22C55E",
            "examples-dot": "#22C55E dim",
            "example": "#E5E7EB",

            "panel-title": "bold #FF4D94",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            if not self.colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        usage = Text.assemble(
            text("usage", "usage-label"), ": ",
            text(self.prog, "program-name"), " ",
            text("VERB [-FLAGS] [ARGS...] [VERB [-FLAGS] [ARGS...] ...]", "usage-section"),
        )

        table = Table.grid(padding=(0, 2))
        table.add_column(no_wrap=True)
        table.add_column()
        for spellings, metavars, description, flags in VERBS:
            head = Text(" | ").join(text(spelling, "verb-name") for spelling in spellings)
            for metavar in metavars:
                head.append(" ").append(text(metavar, "metavar"))
            body = text(description, "verb-description")
            if flags:
                body.append("\n").append(text(flags, "flag-name"))
            table.add_row(head, body)

        examples = Text()
        examples.append(text("examples", "examples-label")).append(":\n")
        for example in EXAMPLES:
            examples.append(text(" • ", "examples-dot")).append(text(example, "example")).append("\n")
        examples.append(text("commands can be chained; they run left to right until the first error.", "example"))

        renderable = Group(usage, Text(""), text("commands", "group-label") + Text(":"), table, Text(""), examples)
        if self.fancy:
            renderable = Panel(
                renderable,
                title=text("[ %s HELP ]" % self.prog.upper(), "panel-title"),
                title_align="left",
            )
        self.console.print(renderable)


__all__ = (
    "VERBS",
    "EXAMPLES",
    "HelpPrinter",
)
