# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/12 21:08:17
# @Author : Kariko Lin

"""Exceptions raised by `pymini`.

Lookups never raise: a missing section, key or position is reported as
`None`. Everything below is either a misuse of the API or a failed load.
"""

__all__ = [
    'MiniError', 'InvalidInputError', 'NoActiveSectionError',
    'DocumentClosedError', 'MiniLoadError', 'MiniSyntaxError'
]


class MiniError(Exception):
    """Base class of every `pymini` error."""


class InvalidInputError(MiniError, TypeError):
    """A required name, key, value or position has the wrong type."""


class NoActiveSectionError(MiniError):
    """A key-value pair arrived before any section header."""

    def __init__(self, key: str) -> None:
        super().__init__(f'no active section to receive key "{key}"')
        self.key = key


class DocumentClosedError(MiniError):
    """The document was already released with `close()`."""


class MiniLoadError(MiniError):
    """Loading a document failed. No document is returned."""


class MiniSyntaxError(MiniLoadError):
    def __init__(self, msg: str, lineno: int, source: str = '<stream>'):
        super().__init__(f'{source}:{lineno}: {msg}')
        self.msg = msg
        self.lineno = lineno
        self.source = source
