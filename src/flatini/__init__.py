# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 22:41:02
# @Author : Kariko Lin

import logging

from .ini import (
    IniClass, IniSection, IniParser, IniJsonParser, IniYamlParser,
    IniParseError, InvalidLine, DuplicateSection, MalformedSection,
    MalformedDocument, DEFAULT_SECTION, parse
)

__all__ = [
    'IniClass', 'IniSection', 'IniParser', 'IniJsonParser', 'IniYamlParser',
    'IniParseError', 'InvalidLine', 'DuplicateSection', 'MalformedSection',
    'MalformedDocument', 'DEFAULT_SECTION', 'parse'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
