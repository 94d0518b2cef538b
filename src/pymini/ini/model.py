# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/12 21:47:26
# @Author : Kariko Lin

"""
Basically INI Structure: a document of sections, a section of entries.

    ```ini
    [section]        ; Document.insert_section('section')
    key = value      ; Document.insert_key_and_value('key', 'value')
    [section]        ; reopened, nothing new is created.
    key = other      ; ignored, the first value wins.
    ```

Sections and entries are *presented newest first*: `section_at(0)` is the
section created last, `key_at(s, 0)` the key added last. Positions therefore
shift whenever something new gets inserted.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterator

from ..errors import DocumentClosedError, NoActiveSectionError
from ..utils import newest_first, nth_newest, require_position, require_str

__all__ = ['Entry', 'Section', 'Document']


@dataclass(frozen=True, eq=False)
class Entry:
    """One `key = value` pair. Immutable; identified by its key alone."""
    key: str
    value: str

    def __post_init__(self) -> None:
        require_str('key', self.key)
        require_str('value', self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class Section(Mapping[str, str]):
    """INI 小节。A read-only mapping of its keys to values.

    Only `Document.insert_section` is supposed to create sections, and a
    section lives exactly as long as the document holding it.
    """

    def __init__(self, name: str) -> None:
        self._name = require_str('section name', name)
        # kept in insertion order, presented reversed.
        self._entries: list[Entry] = []
        self._keys: dict[str, int] = {}
        self._released = False

    def _check(self) -> None:
        if self._released:
            raise DocumentClosedError(
                f'section [{self._name}] belongs to a closed document')

    def _release(self) -> None:
        self._entries.clear()
        self._keys.clear()
        self._released = True

    @property
    def name(self) -> str:
        return self._name

    def find(self, key: str) -> Entry | None:
        """Exact, case-sensitive lookup. No trimming either."""
        self._check()
        idx = self._keys.get(require_str('key', key))
        return None if idx is None else self._entries[idx]

    def insert_entry(self, key: str, value: str) -> 'Section':
        """Add `key = value` unless `key` is already there.

        A duplicate key is not an error: the call succeeds and the value
        stored first is kept.
        """
        self._check()
        if self.find(key) is not None:
            logging.debug(
                f'[{self._name}] duplicate key "{key}" ignored.')
            return self
        entry = Entry(key, value)
        self._entries.append(entry)
        try:
            self._keys[key] = len(self._entries) - 1
        except MemoryError:
            self._entries.pop()
            raise
        return self

    def key_count(self) -> int:
        self._check()
        return len(self._entries)

    def key_at(self, position: int) -> str | None:
        self._check()
        entry = nth_newest(self._entries, require_position(position))
        return None if entry is None else entry.key

    def value_of(self, key: str) -> str | None:
        entry = self.find(key)
        return None if entry is None else entry.value

    def entries(self) -> list[Entry]:
        """All entries, in the same order as `key_at()`."""
        self._check()
        return list(newest_first(self._entries))

    def __getitem__(self, key: str) -> str:
        value = self.value_of(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        self._check()
        return key in self._keys

    def __len__(self) -> int:
        return self.key_count()

    def __iter__(self) -> Iterator[str]:
        self._check()
        return (i.key for i in newest_first(self._entries))

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._entries))


class Document(Mapping[str, Section]):
    """INI 文件表示。Owns every section and, through them, every entry.

    Built by a stream of `insert_section()` / `insert_key_and_value()`
    calls, then queried. `close()` releases the whole tree at once; the
    document and its sections are unusable afterwards.
    """

    def __init__(self, source_name: str) -> None:
        # informational only, e.g. the path the document was read from.
        self._source = require_str('source name', source_name)
        self._sections: list[Section] = []
        self._names: dict[str, int] = {}
        # index into self._sections; sections are never removed,
        # so the index stays valid for the document's lifetime.
        self._current: int | None = None
        self._closed = False

    def _check(self) -> None:
        if self._closed:
            raise DocumentClosedError(
                f'document "{self._source}" is already closed')

    def _find_section(self, name: str) -> Section | None:
        self._check()
        idx = self._names.get(require_str('section name', name))
        return None if idx is None else self._sections[idx]

    @property
    def source_name(self) -> str:
        self._check()
        return self._source

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current_section(self) -> Section | None:
        """The section the next key-value pair goes to."""
        self._check()
        return None if self._current is None else self._sections[self._current]

    # -- construction ---------------------------------------------------

    def insert_section(self, name: str) -> 'Document':
        """Declare `[name]`, creating it on first sight.

        Either way `name` becomes the current section, so a repeated header
        reopens the existing section instead of duplicating it.
        """
        self._check()
        idx = self._names.get(require_str('section name', name))
        if idx is None:
            section = Section(name)
            self._sections.append(section)
            try:
                self._names[name] = len(self._sections) - 1
            except MemoryError:
                self._sections.pop()
                raise
            idx = len(self._sections) - 1
        else:
            logging.debug(f'{self._source}: section [{name}] reopened.')
        self._current = idx
        return self

    def insert_key_and_value(self, key: str, value: str) -> 'Document':
        """Put `key = value` into the current section.

        Raises `NoActiveSectionError` if no section was declared yet, in
        which case nothing changes.
        """
        self._check()
        require_str('key', key)
        require_str('value', value)
        if self._current is None:
            raise NoActiveSectionError(key)
        self._sections[self._current].insert_entry(key, value)
        return self

    # -- queries --------------------------------------------------------

    def section_count(self) -> int:
        self._check()
        return len(self._sections)

    def key_count(self, section_name: str) -> int:
        section = self._find_section(section_name)
        return 0 if section is None else section.key_count()

    def section_at(self, position: int) -> str | None:
        self._check()
        section = nth_newest(self._sections, require_position(position))
        return None if section is None else section.name

    def key_at(self, section_name: str, position: int) -> str | None:
        section = self._find_section(section_name)
        return None if section is None else section.key_at(position)

    def value_of(self, section_name: str, key: str) -> str | None:
        section = self._find_section(section_name)
        return None if section is None else section.value_of(key)

    # -- lifetime -------------------------------------------------------

    def close(self) -> None:
        """Release every section and entry. Closing twice does nothing."""
        if self._closed:
            return
        for i in self._sections:
            i._release()
        self._sections.clear()
        self._names.clear()
        self._current = None
        self._closed = True
        logging.debug(f'{self._source}: document released.')

    def __enter__(self) -> 'Document':
        self._check()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- mapping protocol -----------------------------------------------

    def __getitem__(self, name: str) -> Section:
        section = self._find_section(name)
        if section is None:
            raise KeyError(name)
        return section

    def __contains__(self, name: object) -> bool:
        self._check()
        return name in self._names

    def __len__(self) -> int:
        return self.section_count()

    def __iter__(self) -> Iterator[str]:
        self._check()
        return (i.name for i in newest_first(self._sections))

    def __str__(self) -> str:
        return "INI document: " + self._source

    def __repr__(self) -> str:
        if self._closed:
            return '<Document "%s" (closed)>' % self._source
        return '<Document "%s" { .cnt = %d }>' % (
            self._source, len(self._sections))
