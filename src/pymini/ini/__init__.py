# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 21:44:10
# @Author : Kariko Lin

from .model import Entry, Section, Document
from .parser import (
    SectionHeader, KeyValue, tokenize, feed, MiniParser, load, loads
)
