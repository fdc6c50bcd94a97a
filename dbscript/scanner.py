"""
Character‑level quote/escape tracking shared by the splitter and the
separator presence check.
"""
from __future__ import annotations


class ScannerState:
    """
    Quote and escape flags for one left‑to‑right pass over a script.

    Backslashes escape MySQL style: the backslash and the character after it
    are taken literally and never toggle a quote or start a delimiter.
    A fresh instance is created per pass; state is never carried across
    scripts.
    """

    __slots__ = ("in_single_quote", "in_double_quote", "in_escape", "track_double_quotes")

    def __init__(self, *, track_double_quotes: bool = True) -> None:
        self.in_single_quote = False
        self.in_double_quote = False
        self.in_escape = False
        self.track_double_quotes = track_double_quotes

    @property
    def quoted(self) -> bool:
        return self.in_single_quote or self.in_double_quote

    def advance(self, ch: str) -> bool:
        """
        Feed one character.  Returns ``True`` when *ch* was consumed by
        escape handling (the backslash itself or the escaped character).
        """
        if self.in_escape:
            self.in_escape = False
            return True
        if ch == "\\":
            self.in_escape = True
            return True
        if ch == "'" and not self.in_double_quote:
            self.in_single_quote = not self.in_single_quote
        elif ch == '"' and self.track_double_quotes and not self.in_single_quote:
            self.in_double_quote = not self.in_double_quote
        return False


def contains_sql_script_delimiters(script: str, delimiter: str) -> bool:
    """
    Does *delimiter* occur in *script* outside a single‑quoted literal?

    Only single quotes and backslash escapes are honoured here; double
    quotes are not, unlike :func:`dbscript.splitter.split_sql_script`.
    """
    if not delimiter:
        raise ValueError("'delimiter' must not be empty")

    state = ScannerState(track_double_quotes=False)
    for i, ch in enumerate(script):
        if state.advance(ch):
            continue
        if not state.in_single_quote and script.startswith(delimiter, i):
            return True
    return False
