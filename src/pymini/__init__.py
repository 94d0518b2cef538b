# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 21:02:36
# @Author : Kariko Lin

import logging

from .errors import (
    MiniError, InvalidInputError, NoActiveSectionError,
    DocumentClosedError, MiniLoadError, MiniSyntaxError
)
from .ini import (
    Entry, Section, Document,
    SectionHeader, KeyValue, tokenize, feed,
    MiniParser, load, loads
)

__all__ = [
    'Entry', 'Section', 'Document',
    'SectionHeader', 'KeyValue', 'tokenize', 'feed',
    'MiniParser', 'load', 'loads',
    'MiniError', 'InvalidInputError', 'NoActiveSectionError',
    'DocumentClosedError', 'MiniLoadError', 'MiniSyntaxError'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
