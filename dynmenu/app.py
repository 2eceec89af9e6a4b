"""The menu window: command-line options, layout, drawing and the event loop."""

from __future__ import annotations

import re
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .arg import UsageError
from .config import Config, Scheme
from .errors import FatalError, die
from .menu import Action, Item, Menu, read_items

VERSION = "5.0"
USAGE = (
    "usage: dynmenu [-bfirv] [-l lines] [-h height] [-p prompt] [-fn font] [-m monitor]\n"
    "               [-nb color] [-nf color] [-sb color] [-sf color] [-w windowid]\n"
)
DEFAULT_FONT_PIXELS = 12

_CONTROL_MASK = 0x4
_ALT_MASK = 0x8
_SHIFT_MASK = 0x1


@dataclass
class Options:
    """What the command line asked for."""

    version: bool = False
    bottom: bool = False
    fast: bool = False
    centered: bool = False
    case_insensitive: bool = False
    reject_no_match: bool = False
    lines: int | None = None
    lineheight: int | None = None
    monitor: int = -1
    prompt: str | None = None
    font: str | None = None
    normal_bg: str | None = None
    normal_fg: str | None = None
    selected_bg: str | None = None
    selected_fg: str | None = None
    embed: str | None = None


@dataclass(frozen=True)
class Box:
    """A filled rectangle in the ``part`` colour of ``scheme``."""

    x: int
    y: int
    width: int
    height: int
    scheme: Scheme
    part: str


@dataclass(frozen=True)
class Label:
    """A rectangle in the scheme's background with text in its foreground."""

    x: int
    y: int
    width: int
    height: int
    text: str
    scheme: Scheme


def _atoi(value: str) -> int:
    found = re.match(r"\s*([+-]?\d+)", value)
    return int(found.group(1)) if found else 0


def _window_id(value: str | None) -> int:
    """Read a window id the way strtol with base 0 does; 0 if there is none."""
    if not value:
        return 0
    found = re.match(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)", value)
    if not found:
        return 0
    sign, digits = found.groups()
    if digits[:2].lower() == "0x":
        number = int(digits, 16)
    elif digits.startswith("0"):
        number = int(digits, 8)
    else:
        number = int(digits)
    return -number if sign == "-" else number


def _font_pixels(spec: str) -> int:
    found = re.search(r":pixelsize=([0-9]+(?:\.[0-9]*)?)", spec)
    return max(1, round(float(found.group(1)))) if found else DEFAULT_FONT_PIXELS


def _font_family(spec: str) -> str:
    return spec.split(":", 1)[0].strip()


def _half(value: int) -> int:
    """Halve like integer division in C, truncating towards zero."""
    return int(value / 2)


_MIN_LINEHEIGHT = Config().min_lineheight

_SWITCHES = {
    "-b": "bottom",
    "-f": "fast",
    "-c": "centered",
    "-i": "case_insensitive",
    "-r": "reject_no_match",
}

_VALUED: dict[str, tuple[str, Callable[[str], object]]] = {
    "-l": ("lines", _atoi),
    "-h": ("lineheight", lambda value: max(_atoi(value), _MIN_LINEHEIGHT)),
    "-m": ("monitor", _atoi),
    "-p": ("prompt", str),
    "-fn": ("font", str),
    "-nb": ("normal_bg", str),
    "-nf": ("normal_fg", str),
    "-sb": ("selected_bg", str),
    "-sf": ("selected_fg", str),
    "-w": ("embed", str),
}


def parse_args(argv: Sequence[str] | None = None) -> Options:
    """Parse the command line (without the program name).

    ``-v`` stops parsing at once. Raises :class:`UsageError` for an unknown
    option or an option that lacks its value.
    """
    if argv is None:
        argv = sys.argv[1:]
    options = Options()
    args = iter(argv)
    for arg in args:
        if arg == "-v":
            options.version = True
            return options
        if arg in _SWITCHES:
            setattr(options, _SWITCHES[arg], True)
            continue
        value = next(args, None)
        if value is None or arg not in _VALUED:
            raise UsageError(f"bad option: {arg}")
        name, convert = _VALUED[arg]
        setattr(options, name, convert(value))
    return options


def _configure(options: Options) -> Config:
    config = Config()
    if options.bottom:
        config.topbar = False
    if options.centered:
        config.centered = True
    if options.lines is not None:
        config.lines = options.lines
    if options.lineheight is not None:
        config.lineheight = max(options.lineheight, config.min_lineheight)
    if options.prompt is not None:
        config.prompt = options.prompt
    if options.font is not None:
        config.fonts[0] = options.font
    for scheme, part, value in (
        (Scheme.NORM, "bg", options.normal_bg),
        (Scheme.NORM, "fg", options.normal_fg),
        (Scheme.SEL, "bg", options.selected_bg),
        (Scheme.SEL, "fg", options.selected_fg),
    ):
        if value is not None:
            config.set_color(scheme, part, value)
    return config


def _approximate_width(font_height: int) -> Callable[[str], int]:
    def width(text: str) -> int:
        return len(text) * max(1, font_height // 2) + font_height

    return width


class MenuWindow:
    """Lays out and draws a :class:`Menu`, and runs it in a window.

    ``menu.text_width`` must give a text's width including the horizontal
    padding of one font height. The window is first placed in an area as
    wide as ``menu.menu_width``; :meth:`run` places it on the real screen.
    """

    def __init__(self, menu: Menu, options: Options, config: Config) -> None:
        self.menu = menu
        self.options = options
        self.config = config
        spec = config.fonts[0] if config.fonts else ""
        self.font_height = _font_pixels(spec)
        self.x = self.y = 0
        self.width = self.height = 0
        self.bar_height = 0
        self.prompt_width = 0
        self.input_width = 0
        self._place(menu.menu_width, (menu.lines + 1) * self._bar_height())

    @property
    def padding(self) -> int:
        """Sum of the left and right padding around text."""
        return self.font_height

    def _bar_height(self) -> int:
        return max(self.font_height + 2, self.config.lineheight)

    def _place(self, parent_width: int, parent_height: int) -> None:
        menu = self.menu
        textw = menu.text_width
        self.bar_height = self._bar_height()
        self.height = (menu.lines + 1) * self.bar_height
        prompt = self.config.prompt
        self.prompt_width = textw(prompt) - self.padding // 4 if prompt else 0
        widest = max((textw(item.text) for item in menu.items), default=0)
        if self.config.centered:
            self.width = min(
                max(widest + self.prompt_width, self.config.min_width), parent_width
            )
            self.x = _half(parent_width - self.width)
            self.y = _half(parent_height - self.height)
        else:
            self.width = parent_width
            self.x = 0
            self.y = 0 if self.config.topbar else parent_height - self.height
        self.input_width = min(widest, int(self.width / 3))
        menu.menu_width = self.width
        menu.prompt_width = self.prompt_width
        menu.input_width = self.input_width
        menu.match()

    def _fit(self, text: str, room: int) -> str:
        """Shorten ``text`` to ``room`` pixels, ending it in dots if cut."""

        def raw(part: str) -> int:
            return self.menu.text_width(part) - self.padding

        if raw(text) <= room:
            return text
        kept = 0
        for size in range(len(text) - 1, 0, -1):
            if raw(text[:size]) <= room:
                kept = size - 1
                break
        if not kept:
            return ""
        return text[: max(0, kept - 3)] + "." * min(3, kept)

    def _label(
        self, ops: list[Box | Label], x: int, y: int, width: int, text: str, scheme: Scheme
    ) -> int:
        fitted = self._fit(text, width - self.padding // 2)
        ops.append(Label(x, y, width, self.bar_height, fitted, scheme))
        return x + width

    def _scheme_for(self, item: Item) -> Scheme:
        if item is self.menu.selected_item:
            return Scheme.SEL
        return Scheme.OUT if item.out else Scheme.NORM

    def _visible(self) -> list[Item]:
        menu = self.menu
        if menu.page_start is None:
            return []
        end = len(menu.matches) if menu.next_page is None else menu.next_page
        return menu.matches[menu.page_start : end]

    def draw(self) -> list[Box | Label]:
        """Return the shapes that make up the menu, back to front."""
        menu = self.menu
        textw = menu.text_width
        bh = self.bar_height
        fh = self.font_height
        ops: list[Box | Label] = [Box(0, 0, self.width, self.height, Scheme.NORM, "bg")]
        x = y = 0
        if self.config.prompt:
            x = self._label(ops, x, 0, self.prompt_width, self.config.prompt, Scheme.SEL)

        width = self.width - x if menu.lines > 0 or not menu.matches else self.input_width
        self._label(ops, x, 0, width, menu.text, Scheme.NORM)
        curpos = textw(menu.text) - textw(menu.text[menu.cursor :]) + self.padding // 2 - 1
        if 0 <= curpos < width:
            ops.append(Box(x + curpos, 2 + (bh - fh) // 2, 2, fh - 4, Scheme.NORM, "fg"))

        numbers = menu.counter()
        if menu.lines > 0:
            for item in self._visible():
                y += bh
                self._label(ops, x, y, self.width - x, item.text, self._scheme_for(item))
        elif menu.matches:
            x += self.input_width
            width = textw("<")
            if menu.page_start:
                self._label(ops, x, 0, width, "<", Scheme.NORM)
            x += width
            for item in self._visible():
                room = self.width - x - textw(">") - textw(numbers)
                x = self._label(
                    ops, x, 0, min(textw(item.text), room), item.text, self._scheme_for(item)
                )
            if menu.next_page is not None:
                width = textw(">")
                self._label(ops, self.width - width - textw(numbers), 0, width, ">", Scheme.NORM)
        self._label(
            ops, self.width - textw(numbers), 0, textw(numbers), numbers, Scheme.NORM
        )
        return ops

    def _grab_keyboard(self, root) -> None:
        import tkinter

        if self.options.embed:
            return
        for _ in range(1000):
            try:
                root.grab_set_global()
                return
            except tkinter.TclError:
                time.sleep(0.001)
        die("cannot grab keyboard")

    def run(self) -> int:
        """Show the window and handle keys until the menu ends; return the exit status."""
        import tkinter
        from tkinter import font as tkfont

        kwargs: dict[str, str] = {"className": "dynmenu"}
        parent = _window_id(self.options.embed)
        if parent:
            kwargs["use"] = hex(parent)
        try:
            root = tkinter.Tk(**kwargs)
        except tkinter.TclError as exc:
            die("cannot open display: %s", exc)

        spec = self.config.fonts[0] if self.config.fonts else ""
        font_args: dict[str, object] = {"size": -_font_pixels(spec)}
        if _font_family(spec):
            font_args["family"] = _font_family(spec)
        font = tkfont.Font(root=root, **font_args)
        self.font_height = font.metrics("linespace")
        self.menu.text_width = lambda text: font.measure(text) + self.font_height
        self._place(root.winfo_screenwidth(), root.winfo_screenheight())

        if not parent:
            root.overrideredirect(True)
        root.geometry(f"{self.width}x{self.height}+{self.x}+{self.y}")
        canvas = tkinter.Canvas(
            root,
            width=self.width,
            height=self.height,
            highlightthickness=0,
            borderwidth=0,
            background=self.config.color(Scheme.NORM, "bg"),
        )
        canvas.pack()
        status = 1

        def render() -> None:
            canvas.delete("all")
            for op in self.draw():
                if op.width <= 0 or op.height <= 0:
                    continue
                right, bottom = op.x + op.width, op.y + op.height
                if isinstance(op, Box):
                    color = self.config.color(op.scheme, op.part)
                    canvas.create_rectangle(op.x, op.y, right, bottom, fill=color, outline="")
                    continue
                canvas.create_rectangle(
                    op.x, op.y, right, bottom,
                    fill=self.config.color(op.scheme, "bg"), outline="",
                )
                if op.text:
                    canvas.create_text(
                        op.x + self.padding // 2, op.y + op.height // 2,
                        text=op.text, anchor="w", font=font,
                        fill=self.config.color(op.scheme, "fg"),
                    )

        def finish(code: int) -> None:
            nonlocal status
            status = code
            root.destroy()

        def paste(selection: str) -> None:
            try:
                data = root.selection_get(selection=selection)
            except tkinter.TclError:
                data = ""
            if data:
                self.menu.insert(data.split("\n", 1)[0])
            render()

        def on_key(event) -> None:
            state = int(event.state)
            action, line = self.menu.handle_key(
                event.keysym or None,
                event.char or "",
                ctrl=bool(state & _CONTROL_MASK),
                alt=bool(state & _ALT_MASK),
                shift=bool(state & _SHIFT_MASK),
            )
            if line is not None:
                print(line, flush=True)
            if action is Action.ACCEPT:
                finish(0)
            elif action is Action.CANCEL:
                finish(1)
            elif action is Action.PASTE_PRIMARY:
                paste("PRIMARY")
            elif action is Action.PASTE_CLIPBOARD:
                paste("CLIPBOARD")
            elif action in (Action.REDRAW, Action.EMIT):
                render()

        root.bind("<KeyPress>", on_key)
        root.lift()
        root.wait_visibility()
        self._grab_keyboard(root)
        root.focus_force()
        render()
        root.mainloop()
        return status


def main(argv: Sequence[str] | None = None) -> int:
    """Run the menu on the lines of standard input; return the exit status."""
    try:
        options = parse_args(argv)
    except UsageError:
        sys.stderr.write(USAGE)
        return 1
    if options.version:
        print(f"dynmenu-{VERSION}")
        return 0
    config = _configure(options)
    font_height = _font_pixels(config.fonts[0] if config.fonts else "")
    items = read_items(sys.stdin)
    menu = Menu(
        items,
        text_width=_approximate_width(font_height),
        lines=config.lines,
        case_insensitive=options.case_insensitive,
        reject_no_match=options.reject_no_match,
        word_delimiters=config.word_delimiters,
    )
    try:
        return MenuWindow(menu, options, config).run()
    except FatalError as exc:
        print(exc, file=sys.stderr)
        return exc.status