# dynmenu

`dynmenu` is a small, keyboard-driven menu. It reads one item per line from
standard input, lets you narrow the list down by typing, and prints the item
you pick to standard output. It is meant for pipelines: feed it a list, get
one line back.

The package also ships `dynmenu-stest`, a filter that prints only those file
names that pass a set of tests (is a directory, is executable, is newer than a
given file, and so on). Together they make a simple application launcher.

The menu window is drawn with Tk (`tkinter` from the standard library), so
`dynmenu` needs a Python built with Tk and a display to open. `dynmenu-stest`
and the Python API need neither. There are no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## dynmenu

```
printf 'apple\nbanana\ncherry\n' | dynmenu -p 'fruit:'
```

Typing filters the items. The input is split on spaces and every word must
occur in an item for it to match. Exact matches of the whole input come first,
then items that start with the first word, then the rest, each group in input
order. A counter such as `3/10` at the right edge shows how many items match
out of how many were read.

Without `-l` the matches are laid out in one row, with `<` and `>` marking
that there are more on an earlier or a later page. With `-l lines` they are
shown as a vertical list.

### Options

| Option        | Meaning                                                   |
|---------------|-----------------------------------------------------------|
| `-v`          | print `dynmenu-5.0` and exit                              |
| `-b`          | show the menu at the bottom of the screen                 |
| `-c`          | centre the menu (at least 500 pixels wide)                |
| `-i`          | match items case-insensitively                            |
| `-r`          | refuse typed input that would leave no matching item      |
| `-l lines`    | show a vertical list of up to `lines` lines               |
| `-h height`   | minimum height of one menu line (at least 8)              |
| `-p prompt`   | prompt shown to the left of the input field               |
| `-fn font`    | font, as `Family:pixelsize=N`; other `:key=value` parts are ignored |
| `-nb color`   | normal background colour                                  |
| `-nf color`   | normal foreground colour                                  |
| `-sb color`   | selected background colour                                |
| `-sf color`   | selected foreground colour                                |
| `-w windowid` | embed the menu in this window (decimal, `0x` hex or `0` octal) |
| `-f`, `-m monitor` | accepted, but have no effect (see below)             |

An unknown option, or an option missing its value, prints the usage text and
exits with status 1.

### Keys

| Key                          | Action                                           |
|------------------------------|--------------------------------------------------|
| Return, Ctrl-j, Ctrl-m       | print the selected item (or the input) and exit 0 |
| Shift-Return                 | print the input text rather than the selection and exit 0 |
| Ctrl-Return                  | print the selection, mark it, and keep the menu open |
| Tab, Ctrl-i                  | copy the selected item into the input field      |
| Escape, Ctrl-c, Ctrl-g, Ctrl-[ | exit without output, status 1                  |
| Left / Right                 | move the cursor, or the selection at the ends of the input |
| Up / Down, Ctrl-p / Ctrl-n   | previous / next item                             |
| Page Up / Page Down          | previous / next page of items                    |
| Home, Ctrl-a                 | first item; pressed again, start of the input    |
| End, Ctrl-e                  | end of the input; pressed again, last item       |
| BackSpace, Ctrl-h            | delete the character before the cursor           |
| Delete, Ctrl-d               | delete the character under the cursor            |
| Ctrl-b / Ctrl-f              | as Left / Right                                  |
| Ctrl-k                       | delete to the end of the input                   |
| Ctrl-u                       | delete to the start of the input                 |
| Ctrl-w                       | delete the word before the cursor                |
| Ctrl-Left / Ctrl-Right       | move to the previous / next word edge            |
| Alt-b / Alt-f                | move to the previous / next word edge            |
| Ctrl-y / Ctrl-Shift-y        | paste the first line of the primary selection / clipboard |
| Alt-h / Alt-l                | previous / next item                             |
| Alt-k / Alt-j                | previous / next page                             |
| Alt-g / Alt-G                | as Home / End                                    |

Items printed with Ctrl-Return are drawn in a third colour scheme afterwards.

### What dynmenu does not do

* It does not pick a monitor. The window is placed on the screen Tk reports,
  and `-m` is read but not used.
* `-f` does not change the order of reading input and grabbing the keyboard:
  standard input is always read first.
* Fonts are looked up by family name and pixel size through Tk; there is no
  per-character fallback to other fonts.

## dynmenu-stest

```
dynmenu-stest [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]
```

Each named file (or each line of standard input when no files are given) is
tested, and the names that pass every requested test are printed. Flags may
be clustered, as in `-flx`, and `--` ends the flags.

| Flag      | Passes when the file...                                    |
|-----------|------------------------------------------------------------|
| `-a`      | may be hidden (names starting with `.` are otherwise skipped) |
| `-b`      | is a block special file                                    |
| `-c`      | is a character special file                                |
| `-d`      | is a directory                                             |
| `-e`      | exists                                                     |
| `-f`      | is a regular file                                          |
| `-g`      | has the set-group-id bit                                   |
| `-h`      | is a symbolic link                                         |
| `-n file` | was modified later than `file`                             |
| `-o file` | was modified earlier than `file`                           |
| `-p`      | is a named pipe                                            |
| `-r`      | is readable                                                |
| `-s`      | is not empty                                               |
| `-u`      | has the set-user-id bit                                    |
| `-w`      | is writable                                                |
| `-x`      | is executable                                              |

A file that cannot be stat'ed fails every test. If the file given to `-n` or
`-o` cannot be stat'ed, an error is printed and that test is left off.

Other flags:

* `-l` tests the entries of each named directory (including `.` and `..`)
  instead of the directory itself, and prints the entry names.
* `-q` prints nothing and exits 0 at the first file that passes.
* `-v` inverts the result: print the files that fail.

The exit status is 0 if any file passed, 1 if none did and 2 on a usage error.

For example, list the executable regular files in a directory:

```
dynmenu-stest -flx /usr/local/bin
```

## Using it from Python

* `dynmenu.menu` holds the matching and editing logic. `Menu` keeps the items,
  the input text, the cursor, the matches and the visible page;
  `Menu.handle_key(key, char, ctrl, alt, shift)` applies a key press and
  returns an `Action` with the line to print, if any. `read_items` turns a
  text stream into `Item` objects, and `cistrstr` is a case-insensitive
  substring search.
* `dynmenu.app` has `parse_args`, its `Options`, and `MenuWindow`, whose
  `draw()` returns the shapes of the menu without needing a display and whose
  `run()` opens the Tk window.
* `dynmenu.config` has the default settings as `Config` and the colour
  schemes as `Scheme`.
* `dynmenu.stest` exposes the file tests as `test_path(path, name, options)`
  and `run(paths, options, stdin, stdout)`, configured by its `Options`.
* `dynmenu.arg.parse_flags` parses clustered single-letter flags,
  `dynmenu.utf8` decodes single UTF-8 sequences, and `dynmenu.errors` has
  `FatalError` and `die`.

```python
import io
from dynmenu.menu import Menu, read_items

menu = Menu(read_items(io.StringIO("apple\nbanana\ncherry\n")))
menu.insert("an")
print([item.text for item in menu.matches])  # ['banana']
print(menu.counter())                        # 1/3
```