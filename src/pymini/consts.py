# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/12 21:15:40
# @Author : Kariko Lin

COMMENT_PREFIXES = (';', '#')
DELIMITERS = ('=', ':')

# chardet guesses below this are not trusted.
CODEC_CONFIDENCE = 0.8
DEFAULT_CODEC = 'utf-8'
# last resort for legacy CJK configs.
FALLBACK_CODEC = 'gbk'

STREAM_SOURCE = '<stream>'
STRING_SOURCE = '<string>'
