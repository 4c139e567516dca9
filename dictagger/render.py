"""
Rendering — Plain and Colorized Tag Output

Plain output is one ``<token> <TAG>`` pair per line (CoNLL style).
Pretty output pads the token column and colors each tag kind, with a
palette per scheme so IOB and BIOES output are easy to tell apart.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from rich.console import Console
from rich.text import Text

from dictagger.schemes import Scheme, Tag, TagKind

TOKEN_WIDTH = 55

# kind -> (bar/prefix style, class style)
PALETTES: dict[Scheme, dict[TagKind, tuple[str, str]]] = {
    Scheme.IOB: {
        TagKind.BEGINNING: ("bold red", "red"),
        TagKind.INSIDE: ("bold yellow", "bold yellow"),
        TagKind.OUTSIDE: ("dim", "dim"),
    },
    Scheme.BIOES: {
        TagKind.BEGINNING: ("bold green", "green"),
        TagKind.INSIDE: ("bold cyan", "bold cyan"),
        TagKind.OUTSIDE: ("dim", "dim"),
        TagKind.END: ("bold blue", "bold blue"),
        TagKind.SINGLE: ("bold magenta", "bold magenta"),
    },
}


def render_plain(tags: Iterable[Tag]) -> str:
    return "\n".join(str(tag) for tag in tags)


def pretty_line(tag: Tag, scheme: Union[str, Scheme] = Scheme.IOB) -> Text:
    palette = PALETTES[Scheme.parse(scheme)]
    prefix_style, label_style = palette.get(tag.kind, ("", ""))
    outside = tag.kind is TagKind.OUTSIDE

    line = Text()
    line.append(f"{tag.text:<{TOKEN_WIDTH}}", style="" if outside else "bold")
    line.append("  ▍ ", style=prefix_style.replace("bold ", ""))
    line.append(tag.kind.prefix, style=prefix_style)
    if not outside:
        line.append(tag.label, style=label_style)
    return line


def render_pretty(tags: Iterable[Tag], scheme: Union[str, Scheme] = Scheme.IOB) -> Text:
    scheme = Scheme.parse(scheme)
    return Text("\n").join(pretty_line(tag, scheme) for tag in tags)


class Renderer:
    """Writes tag sequences to a rich Console, colored or plain."""

    def __init__(
        self,
        scheme: Union[str, Scheme] = Scheme.IOB,
        color: bool = True,
        console: Optional[Console] = None,
    ):
        self.scheme = Scheme.parse(scheme)
        self.color = color
        # Tokens are raw text: no markup, emoji codes or highlighting
        self.console = console or Console(
            highlight=False, markup=False, emoji=False,
            no_color=not color, soft_wrap=True,
        )

    def write(self, tags: list[Tag]) -> None:
        if self.color:
            self.console.print(render_pretty(tags, self.scheme))
        else:
            self.console.print(render_plain(tags))

    def blank(self) -> None:
        self.console.print()
