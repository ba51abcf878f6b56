"""
Literal scanner for JavaScript/TypeScript config sources.

Config files are never evaluated. Values are read by locating a property
key in the text and scanning the literal that follows it: a string, an
array of strings, or a regular-expression literal. Anything else (an
identifier, a call, a template with substitutions) cannot be extracted and
is reported as absent.

The scanner is string-aware: brackets and comment markers that appear
inside quoted strings never affect depth counting.
"""

import logging
import re
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

_QUOTES = ("'", '"', "`")
_OPENERS = {"[": "]", "{": "}", "(": ")"}
_CLOSERS = {"]", "}", ")"}

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


@dataclass(frozen=True)
class LiteralValue:
    """A literal read from config source text."""

    kind: Literal["string", "array", "regex"]
    value: str | list[str]
    # False when an array held elements that are not plain strings
    complete: bool = True

    def as_list(self) -> list[str]:
        if isinstance(self.value, list):
            return list(self.value)
        return [self.value]


def strip_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments outside of string literals."""
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            end = _skip_string(text, i)
            if end is None:
                out.append(text[i:])
                break
            out.append(text[i:end])
            i = end
            continue
        if ch == "\\":
            # escaped character of a regex literal
            out.append(text[i : i + 2])
            i += 2
            continue
        if ch == "/" and i + 1 < n:
            nxt = text[i + 1]
            if nxt == "/":
                newline = text.find("\n", i)
                i = n if newline == -1 else newline
                continue
            if nxt == "*":
                close = text.find("*/", i + 2)
                i = n if close == -1 else close + 2
                out.append(" ")
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def _skip_string(text: str, start: int) -> int | None:
    """Return the index just past the string literal opening at ``start``."""
    quote = text[start]
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n" and quote != "`":
            return None
        i += 1
    return None


def _skip_regex(text: str, start: int) -> int | None:
    """Return the index just past the regex literal opening at ``start``."""
    i = start + 1
    n = len(text)
    in_class = False
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "\n":
            return None
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "/":
            i += 1
            while i < n and text[i].isalpha():
                i += 1
            return i
        i += 1
    return None


def unescape_js(body: str) -> str:
    """Decode the escape sequences of a JavaScript string literal body."""
    out: list[str] = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch == "\\" and i + 1 < n:
            nxt = body[i + 1]
            if nxt in _SIMPLE_ESCAPES:
                out.append(_SIMPLE_ESCAPES[nxt])
            elif nxt == "\n":
                pass  # line continuation
            else:
                out.append(nxt)
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def read_string(text: str, start: int) -> tuple[str, int] | None:
    """Read the string literal at ``start``; return its value and end index."""
    end = _skip_string(text, start)
    if end is None:
        return None
    body = text[start + 1 : end - 1]
    if text[start] == "`" and "${" in body:
        return None
    return unescape_js(body), end


def find_matching(text: str, open_index: int) -> int | None:
    """Index of the delimiter closing the one at ``open_index``, string-aware."""
    stack = [_OPENERS[text[open_index]]]
    i = open_index + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            end = _skip_string(text, i)
            if end is None:
                return None
            i = end
            continue
        if ch == "\\":
            i += 2
            continue
        if ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif ch in _CLOSERS:
            if ch != stack[-1]:
                return None
            stack.pop()
            if not stack:
                return i
        i += 1
    return None


def _read_array(text: str, open_index: int) -> tuple[LiteralValue, int] | None:
    close = find_matching(text, open_index)
    if close is None:
        logger.debug("Unbalanced array literal at offset %d", open_index)
        return None

    values: list[str] = []
    complete = True
    i = open_index + 1
    while i < close:
        ch = text[i]
        if ch.isspace() or ch == ",":
            i += 1
            continue
        if ch in _QUOTES:
            parsed = read_string(text, i)
            if parsed is None:
                complete = False
                end = _skip_string(text, i)
                i = close if end is None else end
                continue
            value, i = parsed
            values.append(value)
            continue
        if ch == "/":
            complete = False
            end = _skip_regex(text, i)
            i = close if end is None else end
            continue
        # Non-string element: skip to the next comma at this depth
        complete = False
        while i < close and text[i] != ",":
            if text[i] in _OPENERS:
                nested = find_matching(text, i)
                i = close if nested is None else nested + 1
            elif text[i] in _QUOTES:
                end = _skip_string(text, i)
                i = close if end is None else end
            else:
                i += 1
    return LiteralValue("array", values, complete), close + 1


def read_literal(text: str, start: int) -> LiteralValue | None:
    """Read the literal value beginning at ``start`` (leading whitespace allowed)."""
    i = start
    n = len(text)
    while i < n and text[i].isspace():
        i += 1
    if i >= n:
        return None

    ch = text[i]
    if ch == "[":
        parsed = _read_array(text, i)
        return parsed[0] if parsed else None
    if ch in _QUOTES:
        string = read_string(text, i)
        return LiteralValue("string", string[0]) if string else None
    if ch == "/" and i + 1 < n and text[i + 1] not in "/*":
        end = _skip_regex(text, i)
        if end is None:
            return None
        source = text[i + 1 : text.rindex("/", i, end)]
        return LiteralValue("regex", source)
    return None


def _key_regex(key: str) -> re.Pattern[str]:
    return re.compile(r"(?<![\w$.])(['\"]?)" + re.escape(key) + r"\1\s*:")


def _depth_profile(text: str) -> tuple[list[int], list[bool]]:
    """Bracket depth and in-string flag for every offset of ``text``."""
    depths = [0] * (len(text) + 1)
    in_string = [False] * (len(text) + 1)
    depth = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            end = _skip_string(text, i) or n
            depths[i] = depth
            # the opening quote itself is not "inside" the string
            for j in range(i + 1, end):
                depths[j] = depth
                in_string[j] = True
            i = end
            continue
        if ch in _CLOSERS:
            depth = max(depth - 1, 0)
        depths[i] = depth
        if ch in _OPENERS:
            depth += 1
        i += 1
    depths[n] = depth
    return depths, in_string


def find_key(text: str, key: str, top_level_only: bool = False) -> int | None:
    """
    Offset just past ``key:`` in ``text``, or None.

    Keys inside string literals are ignored. With ``top_level_only`` only
    keys at bracket depth zero of ``text`` count, so a nested
    ``coverage: { include: [...] }`` does not shadow a missing ``include``.
    """
    depths, in_string = _depth_profile(text)
    for match in _key_regex(key).finditer(text):
        start = match.start()
        if in_string[start]:
            continue
        if top_level_only and depths[start] != 0:
            continue
        return match.end()
    return None


def extract_value(text: str, key: str, top_level_only: bool = False) -> LiteralValue | None:
    """The literal following ``key:``, or None when absent or not a literal."""
    position = find_key(text, key, top_level_only)
    if position is None:
        return None
    return read_literal(text, position)


def extract_string_list(
    text: str, key: str, top_level_only: bool = False
) -> list[str] | None:
    """Strings of an array literal, or a single string wrapped in a list."""
    value = extract_value(text, key, top_level_only)
    if value is None or value.kind == "regex":
        return None
    items = value.as_list()
    return items or None


def extract_string(text: str, key: str, top_level_only: bool = False) -> str | None:
    value = extract_value(text, key, top_level_only)
    if value is None or value.kind != "string":
        return None
    return value.value  # type: ignore[return-value]


def find_object_block(text: str, opener: re.Pattern[str]) -> tuple[int, int] | None:
    """
    Bounds of the object body introduced by ``opener``.

    ``opener`` must match up to and including the opening ``{``. Returns the
    offsets of the first character inside the braces and of the closing
    brace, so ``text[start:end]`` is the body.
    """
    _, in_string = _depth_profile(text)
    for match in opener.finditer(text):
        if in_string[match.start()]:
            continue
        brace = match.end() - 1
        close = find_matching(text, brace)
        if close is None:
            logger.debug("Unbalanced object literal at offset %d", brace)
            return None
        return brace + 1, close
    return None


def mask_range(text: str, start: int, end: int) -> str:
    """Blank out ``text[start:end]`` keeping offsets and line breaks intact."""
    blanked = "".join("\n" if ch == "\n" else " " for ch in text[start:end])
    return text[:start] + blanked + text[end:]
