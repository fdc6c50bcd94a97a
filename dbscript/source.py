from __future__ import annotations
import io
import pathlib
import typing as t

from dbscript.constants import DEFAULT_ENCODING


class ScriptSource:
    """
    Where a script comes from: a description used in diagnostics plus a way
    to get at its text.

    Either *opener* (returns a fresh binary stream, decoded with *encoding*)
    or *text* (already decoded) must be given.  ``encoding=None`` means the
    platform default; for text sources it is the encoding :meth:`open`
    uses to hand the text back as bytes.
    """

    def __init__(
        self,
        description: str,
        *,
        opener: t.Callable[[], t.BinaryIO] | None = None,
        text: str | None = None,
        encoding: str | None = DEFAULT_ENCODING,
    ) -> None:
        if (opener is None) == (text is None):
            raise ValueError("Exactly one of 'opener' or 'text' must be given")
        self.description: str = description
        self.encoding: str | None = encoding
        self._opener = opener
        self._text = text

    @classmethod
    def from_path(
        cls, path: pathlib.Path | str, encoding: str | None = DEFAULT_ENCODING
    ) -> "ScriptSource":
        path = pathlib.Path(path)
        return cls(f"file [{path}]", opener=lambda: path.open("rb"), encoding=encoding)

    @classmethod
    def from_bytes(
        cls, data: bytes, name: str = "<bytes>", encoding: str | None = DEFAULT_ENCODING
    ) -> "ScriptSource":
        return cls(f"byte array [{name}]", opener=lambda: io.BytesIO(data), encoding=encoding)

    @classmethod
    def from_string(cls, text: str, name: str = "<string>") -> "ScriptSource":
        return cls(f"string [{name}]", text=text, encoding=DEFAULT_ENCODING)

    def open(self) -> t.BinaryIO:
        """Return a new binary stream over the raw script bytes."""
        if self._opener is None:
            return io.BytesIO(self._text.encode(self.encoding or DEFAULT_ENCODING))
        return self._opener()

    def open_text(self) -> t.TextIO:
        """Return a new text stream with universal newlines."""
        if self._text is not None:
            return io.StringIO(self._text, newline=None)
        return io.TextIOWrapper(self.open(), encoding=self.encoding)

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"ScriptSource({self.description!r}, encoding={self.encoding!r})"
