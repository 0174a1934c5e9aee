# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 21:20:03
# @Author : Kariko Lin

"""
Basically a flat INI structure: ordered sections, ordered pairs.

Neither section names nor keys are unique here, so both are kept in lists.
Reading always takes the *first* match.
"""

from dataclasses import dataclass, field
from os import PathLike
from typing import Iterator, TypedDict
from warnings import warn

from .consts import UNSAFE_KEY_CHARS, UNSAFE_VALUE_CHARS


class IniSectionMeta(TypedDict):
    """for JSON / YAML documents."""
    section: str
    pairs: list[list[str]]


@dataclass
class IniSection:
    """INI 小节。键值对按读入（或添加）顺序保存，允许重复键。"""
    name: str
    pairs: list[tuple[str, str]] = field(default_factory=list)

    def append(self, key: str, value: str) -> None:
        self.pairs.append((key, value))

    def get(self, key: str, default: str | None = None) -> str | None:
        for k, v in self.pairs:
            if k == key:
                return v
        return default

    def keys(self) -> list[str]:
        return [k for k, _ in self.pairs]

    def __len__(self) -> int:
        return len(self.pairs)

    def __str__(self) -> str:
        return f"[{self.name}]"

    def _to_meta(self) -> IniSectionMeta:
        return IniSectionMeta(
            section=self.name,
            pairs=[[k, v] for k, v in self.pairs])


class IniClass:
    """INI 文件表示。支持以下形式（不含注释）：

        ```ini
        key = val  ; 游离键值对归入 [default] 小节。

        [section]
        key233 = val666
        key233 = val114514  ; 重复键保留，但读取只认第一个。
        [section]           ; 重名小节同样保留。
        ```

    所有修改操作都是原地修改，并返回`self`以便链式调用。
    """
    def __init__(self, sections: list[IniSection] | None = None) -> None:
        self.__sections: list[IniSection] = (
            [] if sections is None else sections)

    @property
    def sections(self) -> list[IniSection]:
        return self.__sections

    def __iter__(self) -> Iterator[IniSection]:
        return iter(self.__sections)

    def __len__(self) -> int:
        return len(self.__sections)

    def __contains__(self, name: object) -> bool:
        return any(i.name == name for i in self.__sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniClass):
            return NotImplemented
        return self.__sections == other.sections

    def __repr__(self) -> str:
        return 'IniClass { .sections = %d }' % len(self.__sections)

    def __str__(self) -> str:
        return self.to_text()

    def _find(self, name: str) -> IniSection | None:
        for i in self.__sections:
            if i.name == name:
                return i
        return None

    def add_section(self, name: str) -> 'IniClass':
        """追加一个空小节，*不检查*重名。"""
        if name in self:
            warn(f'已存在名为 [{name}] 的小节，读取时只会读到第一个。')
        self.__sections.append(IniSection(name))
        return self

    def add_value(self, section: str, key: str, value: str) -> 'IniClass':
        """向*所有*同名小节追加键值对；找不到小节时则新建一个。

        注意：读取（`get_value()`、`get_section()`）只认第一个同名小节。
        """
        matched = [i for i in self.__sections if i.name == section]
        if not matched:
            self.__sections.append(IniSection(section, [(key, value)]))
            return self
        if len(matched) > 1:
            warn(f'[{section}] 共有 {len(matched)} 个同名小节，'
                 f'"{key}" 将被写入每一个。')
        for i in matched:
            i.append(key, value)
        return self

    def get_value(self, section: str, key: str) -> str | None:
        if (sect := self._find(section)) is None:
            return None
        return sect.get(key)

    def get_section(self, section: str) -> list[tuple[str, str]] | None:
        if (sect := self._find(section)) is None:
            return None
        return list(sect.pairs)

    def triples(self) -> Iterator[tuple[str, str, str]]:
        """Flatten into ordered `(section, key, value)`."""
        for sect in self.__sections:
            for k, v in sect.pairs:
                yield sect.name, k, v

    def to_text(self, *, delimiter: str = ' = ', blank_lines: int = 1) -> str:
        """Serialize as INI text.

        Every section ends with `blank_lines` empty lines,
        even if it has no pairs at all.
        """
        ret = []
        for sect in self.__sections:
            ret.append(f'[{sect.name}]\n')
            for k, v in sect.pairs:
                if UNSAFE_KEY_CHARS.intersection(k):
                    warn(f'[{sect.name}] 的键 "{k}" 含有 INI 语法字符，'
                         '再次读取时无法还原。')
                if UNSAFE_VALUE_CHARS.intersection(v):
                    warn(f'[{sect.name}] 中 "{k}" 的值含有注释符或`=`，'
                         '再次读取时会被截断或无法解析。')
                ret.append(f'{k}{delimiter}{v}\n')
            ret.append('\n' * blank_lines)
        return ''.join(ret)

    def write_to_file(
        self, filename: str | PathLike[str], encoding: str | None = None
    ) -> None:
        from .parser import IniParser
        IniParser(filename, encoding).write(self)

    @classmethod
    def read_from_file(
        cls, filename: str | PathLike[str], encoding: str | None = None
    ) -> 'IniClass':
        from .parser import IniParser
        return IniParser(filename, encoding).read()
