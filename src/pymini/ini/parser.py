# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/12 22:36:09
# @Author : Kariko Lin

"""Turns INI text into a `Document`.

Reading happens in two steps:
1. `tokenize()` scans lines into `SectionHeader` / `KeyValue` events,
   dropping blank lines and comments and trimming names, keys and values;
2. `feed()` routes those events into a `Document`.

What is understood:

    ```ini
    ; comment
    # comment as well
    [section]   ; trailing comment after a header is fine
    key = value
    other: value with = and : inside
    empty =
    ```

Values are taken verbatim after trimming. No inline comments, no line
continuations, no type conversion.
"""

import logging
from dataclasses import dataclass, field
from io import StringIO, TextIOBase
from typing import Iterable, Iterator, Sequence
from warnings import warn

import chardet

from .model import Document
from ..abstract import FileHandler
from ..consts import (
    CODEC_CONFIDENCE,
    COMMENT_PREFIXES,
    DEFAULT_CODEC,
    DELIMITERS,
    FALLBACK_CODEC,
    STREAM_SOURCE,
    STRING_SOURCE
)
from ..errors import MiniLoadError, MiniSyntaxError, NoActiveSectionError
from ..utils import require_str

__all__ = [
    'SectionHeader', 'KeyValue', 'tokenize', 'feed',
    'MiniParser', 'load', 'loads'
]


@dataclass(frozen=True)
class SectionHeader:
    name: str
    lineno: int = field(default=0, compare=False)


@dataclass(frozen=True)
class KeyValue:
    key: str
    value: str
    lineno: int = field(default=0, compare=False)


Event = SectionHeader | KeyValue


def _split_pair(line: str, delimiters: Sequence[str]) -> tuple[str, str] | None:
    # the leftmost delimiter wins, whichever it is.
    hits = [(pos, d) for d in delimiters if (pos := line.find(d)) >= 0]
    if not hits:
        return None
    pos, delim = min(hits)
    return line[:pos].strip(), line[pos + len(delim):].strip()


def tokenize(
    lines: Iterable[str], *,
    comment_prefixes: Sequence[str] = COMMENT_PREFIXES,
    delimiters: Sequence[str] = DELIMITERS,
    source: str = STREAM_SOURCE
) -> Iterator[Event]:
    """Scan text lines into construction events.

    Raises `MiniSyntaxError` on the first line that is neither blank, a
    comment, a `[section]` header nor a `key = value` pair.
    """
    prefixes = tuple(comment_prefixes)
    for lineno, raw in enumerate(lines, 1):
        line = raw.strip()
        if lineno == 1:
            line = line.lstrip('\ufeff').strip()
        if not line or line.startswith(prefixes):
            continue

        if line[0] == '[':
            end = line.find(']')
            if end < 0:
                raise MiniSyntaxError(
                    'section header is missing "]"', lineno, source)
            rest = line[end + 1:].strip()
            if rest and not rest.startswith(prefixes):
                raise MiniSyntaxError(
                    f'unexpected text after section header: "{rest}"',
                    lineno, source)
            name = line[1:end].strip()
            if not name:
                raise MiniSyntaxError('empty section name', lineno, source)
            yield SectionHeader(name, lineno)
            continue

        pair = _split_pair(line, delimiters)
        if pair is None:
            raise MiniSyntaxError(
                f'expected "key = value", got "{line}"', lineno, source)
        if not pair[0]:
            raise MiniSyntaxError('empty key', lineno, source)
        yield KeyValue(*pair, lineno)


def feed(
    document: Document, events: Iterable[Event],
    source: str = STREAM_SOURCE
) -> Document:
    """Route tokenizer events into `document`, in order."""
    for ev in events:
        if isinstance(ev, SectionHeader):
            document.insert_section(ev.name)
            continue
        try:
            document.insert_key_and_value(ev.key, ev.value)
        except NoActiveSectionError as e:
            raise MiniSyntaxError(
                f'key "{ev.key}" appears before any section header',
                ev.lineno, source) from e
    return document


def _build(
    lines: Iterable[str], source_name: str,
    comment_prefixes: Sequence[str], delimiters: Sequence[str]
) -> Document:
    doc = Document(source_name)
    events = tokenize(
        lines,
        comment_prefixes=comment_prefixes,
        delimiters=delimiters,
        source=source_name)
    try:
        return feed(doc, events, source_name)
    except BaseException:
        doc.close()
        raise


class MiniParser(FileHandler[Document]):
    """Reads one INI file into a `Document`.

    `encoding=None` means the platform default; if that (or the given
    encoding) cannot decode the file, the codec is guessed by `chardet`.
    """

    def __init__(
        self, filename: str, encoding: str | None = None, *,
        comment_prefixes: Sequence[str] = COMMENT_PREFIXES,
        delimiters: Sequence[str] = DELIMITERS
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._comments = tuple(comment_prefixes)
        self._delims = tuple(delimiters)

    def readstream(
        self, buf: TextIOBase, source_name: str = STREAM_SOURCE
    ) -> Document:
        """读取解码好的字符串流。

        The document is only handed out once it is complete; on a syntax
        error the partial one is closed and the error propagates.
        """
        return _build(buf, source_name, self._comments, self._delims)

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        encoding = codec.get('encoding')
        if encoding is None or codec['confidence'] < CODEC_CONFIDENCE:
            encoding = DEFAULT_CODEC

        # fallbacks
        try:
            buf = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            warn(f'{filename}: cannot decode as {encoding}, '
                 f'falling back to {FALLBACK_CODEC}.')
            buf = raw.decode(FALLBACK_CODEC, errors='replace')
        else:
            logging.info(f'{filename}: decoded as {encoding}.')
        return StringIO(buf, newline=None)

    def read(self) -> Document:
        """读取`MiniParser`实例指定的文件。

        Raises `MiniLoadError` (`MiniSyntaxError` for malformed lines) with
        the underlying `OSError` (or `LookupError` for an unknown
        encoding) chained.
        """
        try:
            try:
                with open(self._fn, 'r', encoding=self._codec) as fp:
                    return self.readstream(fp, self._fn)
            except UnicodeDecodeError:
                return self.readstream(self._decode_file(self._fn), self._fn)
        except (OSError, LookupError) as e:
            raise MiniLoadError(f'cannot read {self._fn}: {e}') from e

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f" ({self._codec})"


def loads(
    text: str, source_name: str = STRING_SOURCE, *,
    comment_prefixes: Sequence[str] = COMMENT_PREFIXES,
    delimiters: Sequence[str] = DELIMITERS
) -> Document:
    """Build a `Document` from INI text already in memory."""
    require_str('text', text)
    # same line breaks as a file opened in text mode.
    return _build(
        StringIO(text, newline=None), source_name,
        comment_prefixes, delimiters)


def load(
    filename: str, encoding: str | None = None, *,
    comment_prefixes: Sequence[str] = COMMENT_PREFIXES,
    delimiters: Sequence[str] = DELIMITERS
) -> Document | None:
    """Read an INI file.

    Hint:
        If the file is NOT FOUND, NOT READABLE or malformed, the reason is
        logged as a warning and `None` is returned.

        Use `MiniParser(...).read()` instead if you'd like to handle the
        `MiniLoadError` yourself.
    """
    parser = MiniParser(
        filename, encoding,
        comment_prefixes=comment_prefixes, delimiters=delimiters)
    try:
        return parser.read()
    except MiniLoadError as e:
        logging.warning(f"INI document not loaded:\n  {e}")
        return None
