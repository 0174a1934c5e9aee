# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 22:40:15
# @Author : Kariko Lin

from .consts import DEFAULT_SECTION, IniMark
from .model import IniClass, IniSection
from .parser import (
    IniParser,
    IniJsonParser,
    IniYamlParser,
    IniParseError,
    InvalidLine,
    DuplicateSection,
    MalformedSection,
    MalformedDocument,
    clean_line,
    parse
)
