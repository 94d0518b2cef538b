# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/12 21:31:55
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Something that builds a `T` out of one file.

    Read only: nothing in this package writes files back.
    """
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
