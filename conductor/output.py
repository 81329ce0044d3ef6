"""
Terminal renderer used by the application, commands and controllers.

What this module provides
- Output: a thin layer over a rich Console with the toolkit's palette and the
  classic console-toolkit helpers:
  • messages: write, block, primary, success, info, notice, warning, danger,
    error, lite_error, lite_success
  • layout: title, section, a_list, multi_list, help_panel, panel, table

Styling
- Every helper uses named styles ("info", "comment", "error", ...) resolved
  through a rich Theme, so messages passed to write() may use rich markup such
  as "[info]name[/info]".
- Define a mapping named __styles__ in __main__ to override palette entries.
- With colorful=False every style resolves to "none" (plain text).
- With fancy=True the help screen is framed in a panel.
"""
from collections import defaultdict
from collections.abc import Iterable, Mapping

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.padding import Padding
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

PALETTE = {
    # === Message blocks ===
    "default": "",
    "primary": "bold #36C5F0",  # SKY-BLUE → important
    "success": "bold #22C55E",  # GREEN → success
    "info": "#00E6FF",  # CYAN → names, keys
    "comment": "#FFD600",  # AMBER → section labels
    "warning": "bold #F97316",  # ORANGE
    "danger": "bold #EF4444",  # RED
    "error": "bold #FF4D94",  # MAGENTA-PINK

    # === Layout ===
    "title": "bold #FFFFFF",
    "border": "#4B5563",  # Slate
    "description": "italic #A3A3A3",
    "value": "#D1D5DB",
    "panel-title": "bold #FF4D94",
}


def _stringify(value):
    # Flatten panel values the way listings show them.
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, Mapping):
        return ", ".join(f"{key}: {_stringify(item)}" for key, item in value.items())
    if isinstance(value, Iterable) and not isinstance(value, str):
        return ", ".join(map(_stringify, value))
    return str(value).strip()


class Output:
    """
    Renderer bound to a rich Console.

    Parameters
    - console: Console to print to (a default stdout console when omitted).
    - colorful: apply the palette; False renders plain text.
    - fancy: frame help screens in a panel.
    """

    def __init__(self, console=None, *, colorful=True, fancy=False):
        self.colorful = colorful
        self.fancy = fancy

        styles = defaultdict(str, PALETTE | getattr(__import__("__main__"), "__styles__", {}))
        self.theme = Theme({
            name: (style or "none") if colorful else "none" for name, style in styles.items()
        })

        self.console = console or Console()
        self.console.push_theme(self.theme)

    # -- messages ---------------------------------------------------------

    def write(self, messages, nl=True):
        """
        Print messages (a string or an iterable of strings); rich markup is honored.
        """
        if not isinstance(messages, str):
            messages = ("\n" if nl else "").join(map(str, messages))
        self.console.print(messages, end="\n" if nl else "", highlight=False)

    def block(self, messages, type="MESSAGE", style="default"):
        """
        Print messages as one styled block, the first line prefixed with "[TYPE]".
        """
        messages = [messages] if isinstance(messages, str) else list(map(str, messages))
        if not messages:
            messages = [""]
        if type is not None:
            messages[0] = "[%s] %s" % (type.upper(), messages[0])
        self.console.print(Text("\n".join(messages), style=style), highlight=False)

    def primary(self, messages):
        self.block(messages, "IMPORTANT", "primary")

    def success(self, messages):
        self.block(messages, "SUCCESS", "success")

    def info(self, messages):
        self.block(messages, "INFO", "info")

    def notice(self, messages):
        self.block(messages, "NOTICE", "comment")

    def warning(self, messages):
        self.block(messages, "WARNING", "warning")

    def danger(self, messages):
        self.block(messages, "DANGER", "danger")

    def error(self, messages):
        self.block(messages, "ERROR", "error")

    def lite_error(self, message):
        self.console.print(Text.assemble(("ERROR: ", "error"), str(message)), highlight=False)

    def lite_success(self, message):
        self.console.print(Text.assemble(("SUCCESS: ", "success"), str(message)), highlight=False)

    # -- layout -----------------------------------------------------------

    def title(self, title, width=80, char="="):
        """
        Print a centered, title-cased heading over a full-width rule.
        """
        width = width if isinstance(width, int) and width > 10 else 80
        self.console.print(
            Padding(Group(
                Text(title.strip().title(), style="title", justify="center"),
                Rule(characters=char, style="border"),
            ), (0, 0, 0, 2)),
            width=width + 2,
        )

    def section(self, title, body, width=80, char="-", pos="l", top_border=True, bottom_border=True):
        """
        Print a titled section; pos is "l", "m" or "r" for the title alignment.
        """
        width = width if isinstance(width, int) and width > 10 else 80
        body = body if isinstance(body, str) else "\n".join(map(str, body))
        justify = {"l": "left", "m": "center", "r": "right"}.get(pos, "left")
        border = Text((char.strip() or "-") * width, style="border")

        parts = [Text(title.strip().title(), style="title", justify=justify)]
        if top_border:
            parts.append(border)
        parts.append(Padding(Text(body), (0, 0, 0, 2)))
        if bottom_border:
            parts.append(border)

        self.console.print(Padding(Group(*parts), (0, 0, 0, 2)), width=width + 2)

    def _grid(self, data, key_style="info"):
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style=key_style, no_wrap=True)
        grid.add_column()
        for key, value in data.items():
            grid.add_row(str(key), _stringify(value))
        return Padding(grid, (0, 0, 0, 2))

    def a_list(self, title, data, key_style="info"):
        """
        Print a titled key/value list; data may also be a plain iterable of lines.
        """
        if title:
            self.console.print(Text(title.strip().title(), style="comment"))
        if isinstance(data, Mapping):
            self.console.print(self._grid(data, key_style))
        else:
            for item in ([data] if isinstance(data, str) else data):
                self.console.print(Padding(Text(str(item)), (0, 0, 0, 2)))

    def multi_list(self, data, key_style="info"):
        for title, items in data.items():
            self.a_list(title, items, key_style)

    def help_panel(self, usage, commands=None, options=None, examples=None, description=""):
        """
        Print a help screen: description, usage, options, commands and examples.

        commands and options are {name: description} mappings; examples is a
        string or an iterable of strings.
        """
        parts = []

        if description:
            parts.append(Text(description, style="description"))
            parts.append(Text(""))

        if usage:
            parts.append(Text.assemble(("Usage", "comment"), ":"))
            parts.append(Padding(Text(usage), (0, 0, 1, 2)))

        for label, entries in (("Options", options), ("Commands", commands)):
            if not entries:
                continue
            parts.append(Text.assemble((label, "comment"), ":"))
            parts.append(self._grid(entries))
            parts.append(Text(""))

        if examples:
            examples = [examples] if isinstance(examples, str) else list(examples)
            parts.append(Text.assemble(("Examples", "comment"), ":"))
            parts.append(Padding(Text("\n".join(examples)), (0, 0, 0, 2)))

        while parts and isinstance(parts[-1], Text) and not parts[-1].plain:
            parts.pop()

        renderable = Group(*parts)
        if self.fancy:
            renderable = Panel(renderable, title=Text("[ HELP ]", style="panel-title"), title_align="left", box=ROUNDED)

        self.console.print(renderable)

    def panel(self, data, title="Information Panel", border_char="*"):
        """
        Print an information panel of label/value rows; falsy values are skipped.
        A falsy border_char prints the rows without a frame.
        """
        if isinstance(data, Mapping):
            data = {label: value for label, value in data.items() if value}
        else:
            data = {"": data}

        grid = Table.grid(padding=(0, 1))
        grid.add_column(style="info", no_wrap=True)
        grid.add_column(style="value")
        for label, value in data.items():
            grid.add_row(str(label), _stringify(value))

        title = Text(title.strip().title(), style="title") if title else None

        if not border_char:
            if title:
                self.console.print(title)
            self.console.print(Padding(grid, (0, 0, 0, 2)))
            return

        self.console.print(Panel(grid, title=title, box=ROUNDED, border_style="border", expand=False))

    def table(self, data, title="Info List", show_border=True):
        """
        Print rows (a list of mappings) as a table; headers come from the first row.
        """
        data = list(data)
        table = Table(
            title=Text(title.strip().title(), style="title") if title else None,
            box=ROUNDED if show_border else None,
            border_style="border",
            header_style="comment",
        )

        for name in (data[0].keys() if data else ()):
            table.add_column(str(name))
        for row in data:
            table.add_row(*(Text(str(value), style="info") for value in row.values()))

        self.console.print(table)


__all__ = (
    "PALETTE",
    "Output",
)
