"""Item matching, selection paging and line editing for the menu."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TextIO

TEXT_MAX_BYTES = 8191

_KEYPAD = {
    "KP_Left": "Left",
    "KP_Right": "Right",
    "KP_Up": "Up",
    "KP_Down": "Down",
    "KP_Home": "Home",
    "KP_End": "End",
    "KP_Next": "Next",
    "KP_Prior": "Prior",
    "KP_Page_Down": "Next",
    "KP_Page_Up": "Prior",
    "Page_Down": "Next",
    "Page_Up": "Prior",
    "KP_Delete": "Delete",
    "KP_Enter": "Return",
}

_CTRL_KEYS = {
    "a": "Home",
    "b": "Left",
    "c": "Escape",
    "d": "Delete",
    "e": "End",
    "f": "Right",
    "g": "Escape",
    "h": "BackSpace",
    "i": "Tab",
    "n": "Down",
    "p": "Up",
}

_ALT_KEYS = {
    "g": "Home",
    "G": "End",
    "h": "Up",
    "j": "Next",
    "k": "Prior",
    "l": "Down",
}


@dataclass
class Item:
    """One selectable line of input."""

    text: str
    out: bool = False


class Action(enum.Enum):
    """What the caller should do after a key press."""

    IGNORE = "ignore"
    REDRAW = "redraw"
    PASTE_PRIMARY = "paste-primary"
    PASTE_CLIPBOARD = "paste-clipboard"
    EMIT = "emit"
    ACCEPT = "accept"
    CANCEL = "cancel"


def cistrstr(s: str, sub: str) -> str | None:
    """Return the tail of ``s`` starting at ``sub``, ignoring case, or None."""
    needle = sub.lower()
    size = len(sub)
    for start in range(len(s)):
        if s[start : start + size].lower() == needle:
            return s[start:]
    return None


def read_items(stream: TextIO) -> list[Item]:
    """Read one item per line from ``stream``, dropping line endings."""
    return [Item(line[:-1] if line.endswith("\n") else line) for line in stream]


def _is_control(char: str) -> bool:
    return not char or ord(char[0]) < 0x20 or ord(char[0]) == 0x7F


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8", "surrogateescape"))


class Menu:
    """The input line, the filtered matches and the visible page."""

    def __init__(
        self,
        items: Iterable[Item],
        text_width: Callable[[str], int] = len,
        menu_width: int = 0,
        lines: int = 0,
        case_insensitive: bool = False,
        reject_no_match: bool = False,
        word_delimiters: str = " ",
    ) -> None:
        self.items = list(items)
        self.text_width = text_width
        self.menu_width = menu_width
        self.lines = max(0, min(lines, len(self.items)))
        self.case_insensitive = case_insensitive
        self.reject_no_match = reject_no_match
        self.word_delimiters = word_delimiters
        self.prompt_width = 0
        self.input_width = 0
        self.text = ""
        self.cursor = 0
        self.matches: list[Item] = []
        self.selected: int | None = None
        self.page_start: int | None = None
        self.prev_page: int | None = None
        self.next_page: int | None = None
        self.match()

    @property
    def selected_item(self) -> Item | None:
        """The highlighted match, if any."""
        return None if self.selected is None else self.matches[self.selected]

    def _contains(self, haystack: str, needle: str) -> bool:
        if self.case_insensitive:
            return cistrstr(haystack, needle) is not None
        return needle in haystack

    def _equal(self, a: str, b: str) -> bool:
        return a.lower() == b.lower() if self.case_insensitive else a == b

    def _starts_with(self, text: str, prefix: str) -> bool:
        if self.case_insensitive:
            return text.lower().startswith(prefix.lower())
        return text.startswith(prefix)

    def match(self) -> None:
        """Filter the items against the input: exact, then prefix, then substring."""
        tokens = [token for token in self.text.split(" ") if token]
        exact: list[Item] = []
        prefix: list[Item] = []
        substring: list[Item] = []
        for item in self.items:
            if not all(self._contains(item.text, token) for token in tokens):
                continue
            if not tokens or self._equal(self.text, item.text):
                exact.append(item)
            elif self._starts_with(item.text, tokens[0]):
                prefix.append(item)
            else:
                substring.append(item)
        self.matches = exact + prefix + substring
        self.selected = self.page_start = 0 if self.matches else None
        self.calc_offsets()

    def _page_limit(self) -> int:
        if self.lines > 0:
            return self.lines
        return self.menu_width - (
            self.prompt_width
            + self.input_width
            + self.text_width("<")
            + self.text_width(">")
        )

    def _item_width(self, item: Item, limit: int) -> int:
        if self.lines > 0:
            return 1
        return min(self.text_width(item.text), limit)

    def calc_offsets(self) -> None:
        """Work out where the previous and the next page begin."""
        start = self.page_start
        if start is None:
            self.prev_page = self.next_page = None
            return
        limit = self._page_limit()

        total = 0
        self.next_page = None
        for index, item in enumerate(self.matches[start:], start):
            total += self._item_width(item, limit)
            if total > limit:
                self.next_page = index
                break

        total = 0
        index = start
        while index > 0:
            total += self._item_width(self.matches[index - 1], limit)
            if total > limit:
                break
            index -= 1
        self.prev_page = index

    def _replace(self, start: int, end: int, new: str) -> bool:
        """Replace ``text[start:end]`` with ``new`` and leave the cursor after it."""
        removed = self.text[start:end]
        if _byte_length(self.text) + _byte_length(new) - _byte_length(removed) > TEXT_MAX_BYTES:
            return False
        saved = (self.text, self.cursor)
        self.text = self.text[:start] + new + self.text[end:]
        self.cursor = start + len(new)
        self.match()
        if not self.matches and self.reject_no_match:
            self.text, self.cursor = saved
            self.match()
            return False
        return True

    def insert(self, text: str) -> bool:
        """Insert ``text`` at the cursor; False if it was refused."""
        return self._replace(self.cursor, self.cursor, text)

    def delete_backward(self) -> bool:
        """Delete the character before the cursor; False at the start."""
        if self.cursor == 0:
            return False
        self._replace(self.cursor - 1, self.cursor, "")
        return True

    def delete_forward(self) -> bool:
        """Delete the character under the cursor; False at the end."""
        if self.cursor >= len(self.text):
            return False
        self.cursor += 1
        return self.delete_backward()

    def kill_right(self) -> None:
        """Drop everything from the cursor to the end of the input."""
        self.text = self.text[: self.cursor]
        self.match()

    def kill_left(self) -> None:
        """Drop everything before the cursor."""
        self._replace(0, self.cursor, "")

    def delete_word(self) -> None:
        """Delete the word before the cursor and the delimiters after it."""
        delims = self.word_delimiters
        while self.cursor > 0 and self.text[self.cursor - 1] in delims:
            if not self._replace(self.cursor - 1, self.cursor, ""):
                return
        while self.cursor > 0 and self.text[self.cursor - 1] not in delims:
            if not self._replace(self.cursor - 1, self.cursor, ""):
                return

    def move_word_edge(self, direction: int) -> None:
        """Move the cursor to the start (negative) or end (positive) of a word."""
        delims = self.word_delimiters
        if direction < 0:
            while self.cursor > 0 and self.text[self.cursor - 1] in delims:
                self.cursor -= 1
            while self.cursor > 0 and self.text[self.cursor - 1] not in delims:
                self.cursor -= 1
        else:
            size = len(self.text)
            while self.cursor < size and self.text[self.cursor] in delims:
                self.cursor += 1
            while self.cursor < size and self.text[self.cursor] not in delims:
                self.cursor += 1

    def counter(self) -> str:
        """The ``matches/items`` count shown at the right edge."""
        return f"{len(self.matches)}/{len(self.items)}"

    def complete(self) -> bool:
        """Replace the input with the selected item; False without a selection."""
        item = self.selected_item
        if item is None:
            return False
        encoded = item.text.encode("utf-8", "surrogateescape")[:TEXT_MAX_BYTES]
        self.text = encoded.decode("utf-8", "ignore")
        self.cursor = len(self.text)
        self.match()
        return True

    def handle_key(
        self,
        key: str | None,
        char: str = "",
        ctrl: bool = False,
        alt: bool = False,
        shift: bool = False,
    ) -> tuple[Action, str | None]:
        """Apply a key press.

        ``key`` is the key symbol name, or None when only ``char`` was typed.
        Returns the action for the caller and, for EMIT and ACCEPT, the line
        to print.
        """
        if key is None:
            return self._type(char)
        key = _KEYPAD.get(key, key)
        if ctrl:
            if key in _CTRL_KEYS:
                key = _CTRL_KEYS[key]
            elif key in ("j", "J", "m", "M"):
                key = "Return"
                ctrl = False
            elif key == "k":
                self.kill_right()
            elif key == "u":
                self.kill_left()
            elif key == "w":
                self.delete_word()
            elif key in ("y", "Y"):
                return (Action.PASTE_CLIPBOARD if shift else Action.PASTE_PRIMARY), None
            elif key == "Left":
                self.move_word_edge(-1)
                return Action.REDRAW, None
            elif key == "Right":
                self.move_word_edge(+1)
                return Action.REDRAW, None
            elif key == "Return":
                pass
            elif key == "bracketleft":
                return Action.CANCEL, None
            else:
                return Action.IGNORE, None
        elif alt:
            if key == "b":
                self.move_word_edge(-1)
                return Action.REDRAW, None
            if key == "f":
                self.move_word_edge(+1)
                return Action.REDRAW, None
            if key not in _ALT_KEYS:
                return Action.IGNORE, None
            key = _ALT_KEYS[key]
        return self._dispatch(key, char, ctrl, shift)

    def _type(self, char: str) -> tuple[Action, str | None]:
        if not _is_control(char):
            self.insert(char)
        return Action.REDRAW, None

    def _dispatch(
        self, key: str, char: str, ctrl: bool, shift: bool
    ) -> tuple[Action, str | None]:
        last = len(self.matches) - 1
        if key == "Delete":
            if not self.delete_forward():
                return Action.IGNORE, None
        elif key == "BackSpace":
            if not self.delete_backward():
                return Action.IGNORE, None
        elif key == "End":
            if self.cursor < len(self.text):
                self.cursor = len(self.text)
            else:
                if self.next_page is not None:
                    self.page_start = last
                    self.calc_offsets()
                    self.page_start = self.prev_page
                    self.calc_offsets()
                    while self.next_page is not None and self.page_start < last:
                        self.page_start += 1
                        self.calc_offsets()
                self.selected = last if self.matches else None
        elif key == "Escape":
            return Action.CANCEL, None
        elif key == "Home":
            first = 0 if self.matches else None
            if self.selected == first:
                self.cursor = 0
            else:
                self.selected = self.page_start = first
                self.calc_offsets()
        elif key in ("Left", "Up"):
            if key == "Left":
                sel = self.selected
                if self.cursor > 0 and (sel is None or sel == 0 or self.lines > 0):
                    self.cursor -= 1
                    return Action.REDRAW, None
                if self.lines > 0:
                    return Action.IGNORE, None
            if self.selected is not None and self.selected > 0:
                self.selected -= 1
                if self.selected + 1 == self.page_start:
                    self.page_start = self.prev_page
                    self.calc_offsets()
        elif key == "Next":
            if self.next_page is None:
                return Action.IGNORE, None
            self.selected = self.page_start = self.next_page
            self.calc_offsets()
        elif key == "Prior":
            if self.prev_page is None:
                return Action.IGNORE, None
            self.selected = self.page_start = self.prev_page
            self.calc_offsets()
        elif key == "Return":
            item = self.selected_item
            output = item.text if item is not None and not shift else self.text
            if not ctrl:
                return Action.ACCEPT, output
            if item is not None:
                item.out = True
            return Action.EMIT, output
        elif key in ("Right", "Down"):
            if key == "Right":
                if self.cursor < len(self.text):
                    self.cursor += 1
                    return Action.REDRAW, None
                if self.lines > 0:
                    return Action.IGNORE, None
            if self.selected is not None and self.selected < last:
                self.selected += 1
                if self.selected == self.next_page:
                    self.page_start = self.next_page
                    self.calc_offsets()
        elif key == "Tab":
            if not self.complete():
                return Action.IGNORE, None
        else:
            return self._type(char)
        return Action.REDRAW, None