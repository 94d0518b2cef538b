# -*- encoding: utf-8 -*-
# @File   : utils.py
# @Time   : 2026/10/12 21:20:03
# @Author : Kariko Lin

from typing import Sequence, TypeVar

from .errors import InvalidInputError

T = TypeVar('T')


def require_str(what: str, value: object) -> str:
    """Boundary check for names, keys and values."""
    if not isinstance(value, str):
        raise InvalidInputError(
            f'{what} must be str, not {type(value).__name__}')
    return value


def require_position(position: object) -> int:
    # bool is an int subclass, but `key_at(True)` is surely a mistake.
    if not isinstance(position, int) or isinstance(position, bool):
        raise InvalidInputError(
            f'position must be int, not {type(position).__name__}')
    return position


def nth_newest(items: Sequence[T], position: int) -> T | None:
    """Pick the `position`-th item counting from the most recently added.

    `items` is kept in insertion order, so the newest one sits at the end.
    Out-of-range positions (negative ones too) give `None`.
    """
    if position < 0 or position >= len(items):
        return None
    return items[len(items) - 1 - position]


def newest_first(items: Sequence[T]):
    return reversed(items)
