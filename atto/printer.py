"""Serialization of atto values back to text.

- `serialize` writes compact text that `parse` reads back to an equal tree.
- `pretty` lays the same text out over several lines when it is too long.
- `shorten` / `format_value` produce abbreviated text for messages.

Atoms are written in the Form they were read in whenever that Form can carry
their text; otherwise they fall back to a quoted string.
"""

from __future__ import annotations

import re
from io import StringIO

from atto.types.value import Atom, Form, List, Map

BARE_RE = re.compile(r'[^\s():"#\\\x00-\x1f\x7f]+\Z')

# ----------------- Escapes -----------------
ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
    "\x1b": "\\e",
}

ELLIPSIS = "⠤"  # braille dots, not confusable with "..." in data
MIN_SHORT_WIDTH = 6


def _escape_char(c: str, quote: bool) -> str:
    if c in ESCAPES and (quote or c != '"'):
        return ESCAPES[c]
    if c.isprintable():
        return c
    code = ord(c)
    if code < 0x100:
        return f"\\x{code:02x}"
    return f"\\u{{{code:x}}}"


def escape(text: str, quote: bool = True) -> str:
    return "".join(_escape_char(c, quote) for c in text)


def serialize_atom(atom: Atom) -> str:
    text = atom.text
    if atom.form is Form.BARE and BARE_RE.match(text):
        return text
    if atom.form is Form.GUARDED and '"#' not in text:
        return f'#"{text}"#'
    return f'"{escape(text)}"'


def _write(value, buffer: StringIO, document: bool = False) -> None:
    match value:
        case Atom():
            buffer.write(serialize_atom(value))
        case List(items=items):
            if not document:
                buffer.write("(")
            for i, item in enumerate(items):
                if i:
                    buffer.write(" ")
                _write(item, buffer)
            if not document:
                buffer.write(")")
        case Map(entries=entries):
            if not document:
                buffer.write("(")
            for i, (key, val) in enumerate(entries):
                if i:
                    buffer.write(" ")
                _write(key, buffer)
                buffer.write(": ")
                _write(val, buffer)
            if not document:
                buffer.write(")")
        case _:
            raise TypeError(f"Cannot serialize {value!r}")


def serialize(value, document: bool = False) -> str:
    """Compact text for `value`.

    With `document=True` the root List or Map is written without its
    enclosing parentheses, the way a top-level document is written.
    """
    with StringIO() as buffer:
        _write(value, buffer, document)
        return buffer.getvalue()


# ----------------- Pretty printer -----------------
DEFAULT_OPTIONS = {
    "indent": 2,
    "max_line_length": 80,
}


def _layout(value, level: int, options: dict, document: bool = False) -> str:
    indent = options["indent"]
    flat = serialize(value, document)
    if isinstance(value, Atom) or len(flat) + level * indent <= options["max_line_length"]:
        return flat

    child_level = level if document else level + 1
    pad = " " * (child_level * indent)
    lines = [] if document else ["("]
    if isinstance(value, List):
        for item in value.items:
            lines.append(pad + _layout(item, child_level, options))
    else:
        for key, val in value.entries:
            lines.append(f"{pad}{serialize(key)}: {_layout(val, child_level, options)}")
    if not document:
        lines.append(" " * (level * indent) + ")")
    return "\n".join(lines)


def pretty(value, indent: int = 2, max_line_length: int = 80, document: bool = False) -> str:
    """Multi-line text for `value`; subtrees that fit on one line stay flat."""
    options = dict(DEFAULT_OPTIONS, indent=indent, max_line_length=max_line_length)
    return _layout(value, 0, options, document)


# ----------------- Display -----------------
def shorten(text: str, width: int = 0) -> str:
    """Escape control characters and cut `text` to `width` characters.

    The cut keeps the start and the end and marks the gap with an ellipsis.
    A width of 0 disables shortening; small widths are raised to 6.
    """
    text = escape(text, quote=False)
    if width <= 0 or len(text) <= width:
        return text
    width = max(width, MIN_SHORT_WIDTH)
    if len(text) <= width:
        return text
    keep = width - 1
    head = text[: (keep + 1) // 2]
    tail = text[len(text) - keep // 2:] if keep // 2 else ""
    return f"{head}{ELLIPSIS}{tail}"


def format_value(value, width: int = 0) -> str:
    """Display form of any evaluator value, with long atoms shortened."""
    match value:
        case Atom():
            return shorten(value.text, width)
        case List(items=items):
            return "(" + " ".join(format_value(v, width) for v in items) + ")"
        case Map(entries=entries):
            return "(" + " ".join(
                f"{format_value(k, width)}: {format_value(v, width)}" for k, v in entries
            ) + ")"
        case _:
            return repr(value)
