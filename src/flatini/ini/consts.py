# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:11:40
# @Author : Kariko Lin

from enum import Enum

# where pairs before the first `[section]` go.
DEFAULT_SECTION = 'default'


class IniMark(str, Enum):
    COMMENT = '#'
    COMMENT_ALT = ';'
    SECTION_BEGIN = '['
    SECTION_END = ']'
    PAIRING = '='


# chars a key has to avoid if it should survive `to_text()` then `parse()`.
UNSAFE_KEY_CHARS = frozenset(i.value for i in IniMark)
# brackets are harmless after `=`, comment marks and `=` are not.
UNSAFE_VALUE_CHARS = frozenset((
    IniMark.COMMENT.value, IniMark.COMMENT_ALT.value, IniMark.PAIRING.value))
