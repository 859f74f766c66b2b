"""Reading XPM images: comment stripping, colour tables and pixel rows."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .colors import lookup_color

TRANSPARENT = 0xFF000000
_NAME_BUFFER = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be parsed into an image."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: 32-bit pixel values stored row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]


def split_words(text: str) -> list[str]:
    """Split on spaces and tabs, dropping empty words."""
    return re.findall(r"[^ \t]+", text)


def strip_comments(text: str) -> str:
    """Blank out ``/* */`` and ``//`` comments that lie outside quotes.

    Comment characters are replaced by spaces so the text keeps its length.
    """
    out: list[str] = []
    in_quote = False
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if not in_quote and text.startswith("/*", i):
            end = text.find("*/", i + 2)
            stop = n if end < 0 else end + 2
            out.append(" " * (stop - i))
            i = stop
            continue
        if not in_quote and text.startswith("//", i):
            end = text.find("\n", i + 2)
            stop = n if end < 0 else end
            out.append(" " * (stop - i))
            i = stop
            continue
        if ch == '"':
            in_quote = not in_quote
        out.append(ch)
        i += 1
    return "".join(out)


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of each complete pair of double quotes, in order."""
    pos = 0
    while True:
        start = text.find('"', pos)
        if start < 0:
            return
        end = text.find('"', start + 1)
        if end < 0:
            return
        yield text[start + 1:end]
        pos = end + 1


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _hex_value(text: str) -> int:
    match = re.match(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)", text)
    if not match or not match.group(2):
        return 0
    value = int(match.group(2), 16)
    if match.group(1) == "-":
        value = -value
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


def text_to_rgb(name: str, extra: str | None) -> int:
    """Turn a colour specification into an 0xRRGGBB value.

    ``#hex`` is read as hexadecimal. Otherwise ``extra``, when given, is joined
    to the name with a space and the result looked up by colour name; unknown
    names give 0 and ``none`` gives -1.
    """
    if name.startswith("#"):
        return _hex_value(name[1:])
    if extra is not None:
        name = f"{name} {extra}"[:_NAME_BUFFER]
    value = lookup_color(name)
    return 0 if value is None else value


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Build an image from the XPM strings: header, colours, then pixel rows."""
    source = iter(lines)

    def take(what: str) -> str:
        line = next(source, None)
        if line is None:
            raise XpmError(f"missing {what}")
        return line

    header = split_words(take("header"))
    if len(header) < 4:
        raise XpmError("header needs width, height, colour count and characters per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if not (width and height and ncolors and cpp):
        raise XpmError("header values must be non-zero")
    if width < 0 or height < 0 or ncolors < 0 or cpp < 0:
        raise XpmError("header values must be positive")

    # One or two characters per pixel: later definitions replace earlier ones.
    # More characters: the first definition of a key is the one used.
    later_wins = cpp <= 2
    colors: dict[str, int] = {}
    for _ in range(ncolors):
        line = take("colour definition")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour definition without 'c' key: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour definition without a colour: {line!r}")
        extra = words[index + 1] if index + 1 < len(words) else None
        rgb = text_to_rgb(words[index], extra)
        key = line[:cpp]
        if later_wins:
            colors[key] = rgb
        else:
            colors.setdefault(key, rgb)

    pixels: list[int] = []
    for _ in range(height):
        line = take("pixel row")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        for x in range(width):
            col = colors.get(line[x * cpp:(x + 1) * cpp], 0)
            if col == -1:
                col = TRANSPARENT
            pixels.append(col & 0xFFFFFFFF)
    return XpmImage(width, height, tuple(pixels))


def parse_xpm_text(text: str) -> XpmImage:
    """Parse the text of an XPM file."""
    return parse_xpm_lines(quoted_strings(strip_comments(text)))


def read_xpm_file(path: str | Path) -> XpmImage:
    """Read and parse an XPM file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)