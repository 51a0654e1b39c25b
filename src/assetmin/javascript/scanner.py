"""Single-pass JavaScript minifier.

The scanner keeps two characters in view, ``a`` (current) and ``b`` (ahead),
and decides per pair whether to emit ``a``, drop ``b``, or keep a newline that
automatic semicolon insertion depends on. String, template and regular
expression literals are copied through untouched. Comments are dropped except
``/*! ... */`` license blocks and ``/*@ ... */`` / ``//@`` conditional
comments.
"""

from __future__ import annotations

import re
import zlib

from assetmin.config import ScriptConfig
from assetmin.errors import UnterminatedTokenError

__all__ = ["JavaScriptMinifier", "minify_js"]

KEYWORDS = frozenset({"delete", "do", "for", "in", "instanceof", "return", "typeof", "yield"})

# A newline before one of these cannot be dropped without changing ASI.
_KEEP_NEWLINE_BEFORE = frozenset("(-+[#@")
# Characters after which a newline is kept when they end a line.
_KEEP_NEWLINE_AFTER = frozenset("}])+-\"'")
_STRING_DELIMITERS = frozenset("'\"`")
# A '/' after one of these starts a regular expression, not a division.
_REGEX_PRECEDERS = frozenset("(,=:[!&|?\n")

_KEYWORD_TAIL_RE = re.compile(
    r"(?:^|[^\w$])(?:" + "|".join(sorted(KEYWORDS)) + r") ?$"
)
_KEYWORD_TAIL_LEN = max(len(k) for k in KEYWORDS) + 10

# "a + +b" / "a - -b" must not collapse into "a++b" / "a--b".
_UNARY_PAIR_RE = re.compile(r"([+-])(\s+)([+-])")


def _is_alphanumeric(char: str | None) -> bool:
    if char is None or len(char) != 1:
        return False
    return char.isalnum() or char in "_$/"


class JavaScriptMinifier:
    """Minifies one script. Instances are single-use; call :meth:`minify` once."""

    def __init__(self, source: str, *, config: ScriptConfig | None = None) -> None:
        self.config = config or ScriptConfig()
        self._source = source
        self._locks: dict[str, str] = {}
        self._text = ""
        self._length = 0
        self._index = 0
        self._a: str | None = "\n"
        self._b: str | None = "\n"
        self._lookahead: str | None = None
        self._previous = "\n"
        self._output: list[str] = []

    def minify(self) -> str:
        text = self._lock(self._source)
        # a trailing newline keeps a comment on the last line from looking unclosed
        self._text = text + "\n"
        self._length = len(self._text)
        self._loop()
        return self._unlock("".join(self._output).strip())

    # --- locks ---------------------------------------------------------------

    def _lock(self, text: str) -> str:
        if not _UNARY_PAIR_RE.search(text):
            return text
        token = f'"LOCK---{zlib.crc32(text.encode())}"'
        self._locks[token] = " "
        return _UNARY_PAIR_RE.sub(lambda m: f"{m.group(1)}{token}{m.group(3)}", text)

    def _unlock(self, text: str) -> str:
        for token, replacement in self._locks.items():
            text = text.replace(token, replacement)
        return text

    # --- main loop -----------------------------------------------------------

    def _echo(self, chunk: str) -> None:
        self._output.append(chunk)
        self._previous = chunk[-1]

    def _loop(self) -> None:
        while self._a:
            a, b = self._a, self._b
            if a == "\n" and b is not None and b in _KEEP_NEWLINE_BEFORE:
                self._echo(a)
                self._save_string()
            elif a == "\n" and b == " ":
                pass
            elif a in ("\n", " "):
                if _is_alphanumeric(b):
                    self._echo(a)
                self._save_string()
            elif b == "\n":
                if len(a) > 1 or a in _KEEP_NEWLINE_AFTER or _is_alphanumeric(a):
                    self._echo(a)
                    self._save_string()
            elif b == " " and not _is_alphanumeric(a):
                pass
            elif a == "/" and b in ("'", '"'):
                self._save_regex()
                continue
            else:
                self._echo(a)
                self._save_string()

            self._b = self._get_real()
            if self._b == "/":
                last = self._a
                if last == " ":
                    last = self._previous
                if last in _REGEX_PRECEDERS or self._ends_in_keyword():
                    self._save_regex()

    def _ends_in_keyword(self) -> bool:
        tail = "".join(self._output[-_KEYWORD_TAIL_LEN:]) + (self._a or "")
        return _KEYWORD_TAIL_RE.search(tail[-_KEYWORD_TAIL_LEN:]) is not None

    # --- character access ----------------------------------------------------

    def _get_char(self) -> str | None:
        if self._lookahead is not None:
            char = self._lookahead
            self._lookahead = None
        else:
            if self._index >= self._length:
                return None
            char = self._text[self._index]
            self._index += 1
        if char == "\r":
            return "\n"
        if len(char) == 1 and char != "\n" and char < " ":
            return " "
        return char

    def _peek(self) -> str | None:
        if self._index >= self._length:
            return None
        char = self._text[self._index]
        if char == "\r":
            return "\n"
        if char != "\n" and char < " ":
            return " "
        return char

    def _get_next(self, needle: str) -> str | None:
        """Move the index to the next *needle* and return its first character."""
        position = self._text.find(needle, self._index)
        if position == -1:
            return None
        self._index = position
        return self._text[position]

    def _get_real(self) -> str | None:
        """Return the next character that is not part of a removable comment."""
        start = self._index
        char = self._get_char()
        if char != "/":
            return char

        self._lookahead = self._get_char()
        if self._lookahead == "/":
            self._skip_line_comment(start)
            return self._get_real()
        if self._lookahead == "*":
            self._skip_block_comment(start)
            return self._get_real()
        return char

    # --- comments ------------------------------------------------------------

    def _skip_line_comment(self, start: int) -> None:
        third = self._text[self._index] if self._index < self._length else None
        self._get_next("\n")
        self._lookahead = None
        if third == "@":
            self._lookahead = "\n" + self._text[start : self._index]

    def _skip_block_comment(self, start: int) -> None:
        self._get_char()  # '*'
        third = self._get_char()

        if third == "*" and self._peek() == "/":
            self._index += 1
            return

        if self._get_next("*/") is None:
            raise UnterminatedTokenError(
                f"Unclosed multiline comment at position: {start}", position=start
            )
        self._get_char()  # '*'
        self._get_char()  # '/'
        char = self._get_char()

        if (self.config.flagged_comments and third == "!") or third == "@":
            if start > 0:
                self._echo(self._a or "")
                self._a = " "
                if self._text[start - 1] == "\n":
                    self._echo("\n")
            self._echo(self._text[start : self._index - 1])

        self._lookahead = char

    # --- literals ------------------------------------------------------------

    def _save_string(self) -> None:
        """Shift ``b`` into ``a``; if it opens a string, copy the whole literal."""
        start = self._index
        self._a = self._b
        if self._a not in _STRING_DELIMITERS:
            return

        quote = self._a
        self._echo(quote)
        while True:
            self._a = self._get_char()
            if self._a is None:
                raise UnterminatedTokenError(
                    f"Unclosed string at position: {start}", position=start
                )
            if self._a == quote:
                return
            if self._a == "\n":
                if quote != "`":
                    raise UnterminatedTokenError(
                        f"Unclosed string at position: {start}", position=start
                    )
                self._echo(self._a)
            elif self._a == "\\":
                self._b = self._get_char()
                if self._b is None:
                    raise UnterminatedTokenError(
                        f"Unclosed string at position: {start}", position=start
                    )
                # escaped line continuations are dropped
                if self._b != "\n":
                    self._echo(self._a + self._b)
            else:
                self._echo(self._a)

    def _save_regex(self) -> None:
        start = self._index
        if self._a != " ":
            self._echo(self._a or "")
        self._echo(self._b or "")

        in_class = False  # a "/" inside [...] does not close the pattern
        while True:
            self._a = self._get_char()
            if self._a == "/" and not in_class:
                break
            if self._a == "\\":
                self._echo(self._a)
                self._a = self._get_char()
            elif self._a == "[":
                in_class = True
            elif self._a == "]":
                in_class = False
            if self._a is None or self._a == "\n":
                raise UnterminatedTokenError(
                    f"Unclosed regex pattern at position: {start}", position=start
                )
            self._echo(self._a)
        self._b = self._get_real()


def minify_js(source: str, *, flagged_comments: bool = True) -> str:
    """Minify a JavaScript source string."""
    config = ScriptConfig(flagged_comments=flagged_comments)
    return JavaScriptMinifier(source, config=config).minify()
