"""Recursive-descent parser for Lua table literals.

Handles the subset of Lua used by data modules on the wiki: tables with
bracketed (``["key"] =``, ``[1] =``) or bare (``key =``) keys, positional
entries, short strings with escapes, long strings (``[[...]]``), numbers,
booleans, ``nil`` and ``--`` comments. Keys are always returned as strings so
the tree maps directly onto JSON.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from ...core.exceptions import LuaParseError

logger = logging.getLogger(__name__)

_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "\n": "\n",
}

_NUMBER_RE = re.compile(r"0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_LONG_BRACKET_RE = re.compile(r"\[(=*)\[")
_HEX_ESCAPE_RE = re.compile(r"[0-9a-fA-F]{2}")
_UNICODE_ESCAPE_RE = re.compile(r"\{([0-9a-fA-F]+)\}")


class LuaTableParser:
    """Parse one Lua expression (optionally prefixed by ``return``) into Python data.

    A short string left open at the end of its line is closed there, which
    repairs the occasional unterminated value in hand-edited data modules.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.length = len(source)
        self.pos = 0
        self.repairs = 0

    def parse(self) -> Any:
        self._skip_ws_comments()
        if self._peek_keyword("return"):
            self.pos += len("return")
        value = self._parse_value()
        self._skip_ws_comments()
        if self.pos < self.length:
            raise LuaParseError(f"Unexpected trailing input {self._excerpt()!r}", self.pos)
        return value

    # -- scanning ---------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        if index >= self.length:
            return ""
        return self.source[index]

    def _peek_keyword(self, word: str) -> bool:
        if not self.source.startswith(word, self.pos):
            return False
        end = self.pos + len(word)
        return end >= self.length or not (self.source[end].isalnum() or self.source[end] == "_")

    def _excerpt(self, size: int = 20) -> str:
        return self.source[self.pos : self.pos + size]

    def _skip_ws_comments(self) -> None:
        while self.pos < self.length:
            ch = self.source[self.pos]
            if ch.isspace():
                self.pos += 1
                continue
            if self.source.startswith("--", self.pos):
                self.pos += 2
                long_match = _LONG_BRACKET_RE.match(self.source, self.pos)
                if long_match:
                    self._read_long_bracket(long_match)
                else:
                    newline = self.source.find("\n", self.pos)
                    self.pos = self.length if newline == -1 else newline + 1
                continue
            break

    def _expect(self, expected: str) -> None:
        self._skip_ws_comments()
        if not self.source.startswith(expected, self.pos):
            raise LuaParseError(
                f"Expected {expected!r}, got {self._excerpt()!r}", self.pos
            )
        self.pos += len(expected)

    # -- values -----------------------------------------------------------

    def _parse_value(self) -> Any:
        self._skip_ws_comments()
        ch = self._peek()
        if not ch:
            raise LuaParseError("Unexpected end of input while parsing value", self.pos)
        if ch == "{":
            return self._parse_table()
        if ch in ("'", '"'):
            return self._parse_string()
        if ch == "[":
            long_match = _LONG_BRACKET_RE.match(self.source, self.pos)
            if long_match:
                return self._read_long_bracket(long_match)
        if ch.isdigit() or ch in "+-." and self._starts_number():
            return self._parse_number()
        for keyword, value in (("true", True), ("false", False), ("nil", None)):
            if self._peek_keyword(keyword):
                self.pos += len(keyword)
                return value
        raise LuaParseError(f"Unexpected token {self._excerpt()!r}", self.pos)

    def _starts_number(self) -> bool:
        offset = 1 if self._peek() in "+-" else 0
        nxt = self._peek(offset)
        return nxt.isdigit() or (nxt == "." and self._peek(offset + 1).isdigit())

    def _parse_number(self) -> Any:
        start = self.pos
        sign = 1
        if self._peek() in "+-":
            sign = -1 if self._peek() == "-" else 1
            self.pos += 1
        match = _NUMBER_RE.match(self.source, self.pos)
        if not match:
            raise LuaParseError("Invalid number", start)
        text = match.group(0)
        self.pos = match.end()
        if text.lower().startswith("0x"):
            return sign * int(text, 16)
        if re.fullmatch(r"\d+", text):
            return sign * int(text)
        return sign * float(text)

    def _parse_string(self) -> str:
        quote = self.source[self.pos]
        start = self.pos
        self.pos += 1
        out: List[str] = []
        while self.pos < self.length:
            ch = self.source[self.pos]
            if ch == quote:
                self.pos += 1
                return "".join(out)
            if ch == "\n":
                # Lua short strings cannot span lines; treat the line end as the close quote.
                # A trailing comma on that line is the field separator, not content.
                self.repairs += 1
                logger.warning(f"Closed unterminated string starting at position {start}")
                text = "".join(out).rstrip()
                return text[:-1].rstrip() if text.endswith(",") else text
            if ch == "\\":
                nxt = self._peek(1)
                if not nxt:
                    break
                self.pos += 2
                if nxt.isdigit():
                    digits = nxt
                    while len(digits) < 3 and self._peek().isdigit():
                        digits += self.source[self.pos]
                        self.pos += 1
                    out.append(chr(int(digits)))
                elif nxt == "x":
                    out.append(self._read_escape(_HEX_ESCAPE_RE, "hexadecimal"))
                elif nxt == "u":
                    out.append(self._read_escape(_UNICODE_ESCAPE_RE, "unicode"))
                elif nxt == "z":
                    # \z skips the following run of whitespace, line breaks included.
                    while self.pos < self.length and self.source[self.pos].isspace():
                        self.pos += 1
                else:
                    out.append(_ESCAPES.get(nxt, nxt))
                continue
            out.append(ch)
            self.pos += 1

        self.repairs += 1
        logger.warning(f"Closed unterminated string starting at position {start} at end of input")
        return "".join(out)

    def _read_escape(self, pattern: "re.Pattern[str]", kind: str) -> str:
        match = pattern.match(self.source, self.pos)
        if not match:
            raise LuaParseError(f"Invalid {kind} escape {self._excerpt(6)!r}", self.pos)
        codepoint = int(match.group(match.lastindex or 0), 16)
        if codepoint > 0x10FFFF:
            raise LuaParseError(f"Escape value {codepoint:#x} out of range", self.pos)
        self.pos = match.end()
        return chr(codepoint)

    def _read_long_bracket(self, match: "re.Match[str]") -> str:
        level = match.group(1)
        closing = f"]{level}]"
        body_start = match.end()
        end = self.source.find(closing, body_start)
        if end == -1:
            raise LuaParseError("Unterminated long bracket", match.start())
        self.pos = end + len(closing)
        body = self.source[body_start:end]
        # A newline directly after the opening bracket is not part of the string.
        if body.startswith("\r\n"):
            return body[2:]
        if body.startswith("\n"):
            return body[1:]
        return body

    def _parse_table(self) -> Any:
        self._expect("{")
        keyed: Dict[str, Any] = {}
        positional: List[Any] = []

        while True:
            self._skip_ws_comments()
            if self._peek() == "}":
                self.pos += 1
                break
            if not self._peek():
                raise LuaParseError("Unterminated table", self.pos)

            repairs_before = self.repairs
            key = self._parse_field_key()
            value = self._parse_value()
            if key is None:
                positional.append(value)
            else:
                keyed[key] = value

            self._skip_ws_comments()
            if self._peek() in (",", ";"):
                self.pos += 1
            elif self._peek() != "}" and self.repairs == repairs_before:
                raise LuaParseError(
                    f"Expected ',' or '}}' after table field, got {self._excerpt()!r}", self.pos
                )

        if not keyed:
            return positional if positional else {}
        for index, value in enumerate(positional, start=1):
            keyed.setdefault(str(index), value)
        return keyed

    def _parse_field_key(self) -> Optional[str]:
        """Consume ``[expr] =`` or ``name =`` and return the key, or None for a positional field."""
        if self._peek() == "[" and not _LONG_BRACKET_RE.match(self.source, self.pos):
            self.pos += 1
            key = self._parse_value()
            self._expect("]")
            self._expect("=")
            return _key_to_str(key)

        ident = _IDENT_RE.match(self.source, self.pos)
        if ident and ident.group(0) not in ("true", "false", "nil"):
            checkpoint = self.pos
            self.pos = ident.end()
            self._skip_ws_comments()
            if self._peek() == "=" and self._peek(1) != "=":
                self.pos += 1
                return ident.group(0)
            self.pos = checkpoint
        return None


def _key_to_str(key: Any) -> str:
    if isinstance(key, bool) or key is None:
        return str(key).lower()
    if isinstance(key, float) and key.is_integer():
        return str(int(key))
    return str(key)


def parse_lua_table(source: str) -> Any:
    """Parse a Lua table literal; raises ``LuaParseError`` on malformed input."""
    return LuaTableParser(source).parse()
