# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/12 22:02:48
# @Author : Kariko Lin

"""Text <-> `IniClass`.

The INI dialect here is the plain one:

    ```ini
    [section]
    key = value  ; or `# comment`
    ```

- `#` and `;` cut the line wherever they are, so there is no escaping.
- One `=` per line. `a = b = c` is an error instead of `a: "b = c"`.
- No multi-line values, no interpolation. Every value is a `str`.
"""

import json
import logging
from io import StringIO, TextIOBase
from os import PathLike

import chardet
import yaml

from ..abstract import FileHandler
from .consts import DEFAULT_SECTION, IniMark
from .model import IniClass, IniSection, IniSectionMeta


class IniParseError(Exception):
    """Base of everything `parse()` (and friends) would raise."""
    pass


class InvalidLine(IniParseError):
    def __init__(self, lineno: int, line: str) -> None:
        super().__init__(f'第 {lineno} 行无法解析：{line!r}')
        self.lineno = lineno
        self.line = line


# `DuplicateSection` and `MalformedSection` are never raised by `parse()`,
# which keeps duplicated sections and treats any `[...]` as a header.
class DuplicateSection(IniParseError):
    def __init__(self, name: str) -> None:
        super().__init__(f'小节 [{name}] 重复。')
        self.name = name


class MalformedSection(IniParseError):
    def __init__(self, lineno: int, line: str) -> None:
        super().__init__(f'第 {lineno} 行的小节声明有误：{line!r}')
        self.lineno = lineno
        self.line = line


class MalformedDocument(IniParseError):
    """JSON / YAML document not in `{"sections": [...]}` shape."""
    pass


def clean_line(line: str) -> str:
    """Strip comments (`#` first, then `;`) and surrounding whitespace."""
    line = line.split(IniMark.COMMENT, 1)[0]
    line = line.split(IniMark.COMMENT_ALT, 1)[0]
    return line.strip()


def parse(content: str) -> IniClass:
    """解析 INI 文本。

    游离于任何小节之前的键值对归入`[default]`小节；
    遇到第一个无法识别的行即抛出`InvalidLine`（行号从 1 开始）。
    """
    ret: list[IniSection] = []
    this_sect: IniSection | None = None
    for lineno, raw in enumerate(content.split('\n'), 1):
        if not (i := clean_line(raw)):
            continue
        if i.startswith(IniMark.SECTION_BEGIN) and \
                i.endswith(IniMark.SECTION_END):
            if this_sect is not None:
                ret.append(this_sect)
            this_sect = IniSection(i[1:-1].strip())
            continue
        pair = i.split(IniMark.PAIRING)
        if len(pair) != 2 or not (key := pair[0].strip()):
            raise InvalidLine(lineno, raw)
        if this_sect is None:
            this_sect = IniSection(DEFAULT_SECTION)
        this_sect.append(key, pair[1].strip())
    if this_sect is not None:
        ret.append(this_sect)
    logging.debug(f'INI parsed: {len(ret)} section(s).')
    return IniClass(ret)


class IniParser(FileHandler[IniClass]):
    @staticmethod
    def readstream(buf: TextIOBase) -> IniClass:
        """读取解码好的字符串流。

        如没有特殊需求，直接调用`self.read()`便是。
        """
        return parse(buf.read())

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode('gbk')
        return StringIO(buf)

    def read(self) -> IniClass:
        """读取`IniParser`实例指定的文件。

        注：文件不存在、无权限等`OSError`*不会*被转换为`IniParseError`。
        """
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp)
        except UnicodeDecodeError:
            logging.debug(f'{self._fn}: not {self._codec}, guessing codec.')
            return self.readstream(self._decode_file(self._fn))
        except OSError as e:
            logging.warning(f'Unable to read INI: {e}')
            raise

    def write(
        self, instance: IniClass, *,
        delimiter: str = ' = ',
        blank_lines: int = 1
    ) -> None:
        """保存到*一个* INI 文件（整体覆盖）。

        先序列化再打开文件，序列化失败时原文件保持不变。
        """
        text = instance.to_text(delimiter=delimiter, blank_lines=blank_lines)
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            fp.write(text)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def _load_meta(src: object) -> IniClass:
    if not isinstance(src, dict) or \
            not isinstance(sects := src.get('sections'), list):
        raise MalformedDocument('缺少 "sections" 列表。')
    ret = IniClass()
    for i in sects:
        if not isinstance(i, dict) or i.get('section') is None:
            raise MalformedDocument(f'无效的小节：{i!r}')
        sect = IniSection(str(i['section']))
        for pair in i.get('pairs') or []:
            if not isinstance(pair, list) or len(pair) != 2 \
                    or pair[0] is None:
                raise MalformedDocument(
                    f'[{sect.name}] 中无效的键值对：{pair!r}')
            # may there be some pure digits considered as int
            sect.append(str(pair[0]), '' if pair[1] is None else str(pair[1]))
        ret.sections.append(sect)
    return ret


def _dump_meta(instance: IniClass) -> dict[str, list[IniSectionMeta]]:
    return {'sections': [i._to_meta() for i in instance]}


class IniJsonParser(FileHandler[IniClass]):
    """`{"sections": [{"section": ..., "pairs": [[k, v], ...]}]}`.

    Lists instead of objects, so duplicated names and keys survive.
    """
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename, encoding)

    def read(self) -> IniClass:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            try:
                src = json.load(fp)
            except json.JSONDecodeError as e:
                raise MalformedDocument(str(e)) from e
        return _load_meta(src)

    def write(self, instance: IniClass, indent: int = 2) -> None:
        text = json.dumps(_dump_meta(instance),
                          ensure_ascii=False, indent=indent)
        with open(self._fn, 'w', encoding=self._codec) as fp:
            fp.write(text)


class IniYamlParser(FileHandler[IniClass]):
    """Same document shape as `IniJsonParser`, in YAML."""
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename, encoding)

    def read(self) -> IniClass:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            try:
                src = yaml.safe_load(fp)
            except yaml.YAMLError as e:
                raise MalformedDocument(str(e)) from e
        return _load_meta(src)

    def write(self, instance: IniClass, indent: int = 2) -> None:
        text = yaml.safe_dump(_dump_meta(instance), allow_unicode=True,
                              indent=indent, sort_keys=False)
        with open(self._fn, 'w', encoding=self._codec) as fp:
            fp.write(text)
