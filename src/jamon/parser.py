# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/12 21:27:09
# @Author : Kariko Lin

"""Reads (and writes) the config format below:

    ```ini
    key=value                # header pairs, only before the first [section]
    [section.name]           # anything between the brackets
    key2 = value with = sign # first '=' splits; '#...' is always a comment
    ref=${key}/suffix        # substituted from [section.name], then header
    ```

Substitution is a single pass over each value, looking only at pairs
*already read* (so file order matters) and leaving unknown `${...}` as is.
There is no escape for a literal `#` or `${`.
"""

import logging
from collections.abc import Iterator, Mapping
from enum import Enum
from io import StringIO, TextIOBase
from os import PathLike
from re import Match
from re import compile as regex
from typing import NamedTuple
from warnings import warn

import chardet

from .abstract import FileHandler
from .errors import SourceUnavailable
from .model import Document, Section

__all__ = [
    'LineKind', 'ParsedLine', 'classify', 'resolve',
    'JamonParser', 'load', 'loads'
]

logger = logging.getLogger(__name__)

# `${name}`, name being anything without braces. never nested.
TOKEN = regex(r'\$\{([^{}]+)\}')


class LineKind(str, Enum):
    SKIP = 'skip'  # blank, comment-only, or no '=' at all
    SECTION = 'section'
    PAIR = 'pair'


class ParsedLine(NamedTuple):
    kind: LineKind
    text: str = ''  # the line with comment cut and whitespace trimmed
    section: str | None = None
    key: str | None = None
    value: str | None = None

    @property
    def skip(self) -> bool:
        return self.kind is LineKind.SKIP


def classify(raw_line: str) -> ParsedLine:
    """Tell what one line of config is. Never raises.

    - `[name]` gives a `SECTION`, one bracket stripped from each end;
    - `key=value` gives a `PAIR`, split on the first '=' only.
      The key is kept as-is and the value keeps its leading spaces;
    - anything else (blank, comment, no '=') gives `SKIP`.
    """
    line = raw_line.split('#', 1)[0].strip(' \t\r\n')
    if not line:
        return ParsedLine(LineKind.SKIP)

    if len(line) > 1 and line[0] == '[' and line[-1] == ']':
        return ParsedLine(LineKind.SECTION, line, section=line[1:-1])

    key, eq, value = line.partition('=')
    if not eq:
        return ParsedLine(LineKind.SKIP, line)
    return ParsedLine(LineKind.PAIR, line, key=key, value=value.rstrip(' '))


def resolve(
    raw_value: str,
    current: Mapping[str, str] | None,
    root: Mapping[str, str] | None
) -> str:
    """Replace each `${name}` in `raw_value`.

    `current` wins over `root`; names found in neither stay literal.
    Replacements are not scanned again.
    """
    def lookup(match: Match[str]) -> str:
        name = match[1]
        for sect in (current, root):
            if sect is not None and name in sect:
                return sect[name]
        logger.debug('unresolved reference %s', match[0])
        return match[0]

    return TOKEN.sub(lookup, raw_value)


def _readlines(buf: TextIOBase) -> Iterator[str]:
    # a broken (or undecodable) stream ends the input, same as EOF.
    while True:
        try:
            line = buf.readline()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning('config stream stopped early: %s', e)
            return
        if not line:
            return
        yield line


class JamonParser(FileHandler[Document]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def readstream(buf: TextIOBase) -> Document:
        """Read a decoded text stream.

        If not that special, just call `self.read()`.
        """
        ret = Document()
        this_sect: str | None = None  # None as header
        for lineno, i in enumerate(_readlines(buf), 1):
            line = classify(i)
            match line.kind:
                case LineKind.SKIP:
                    if line.text:
                        logger.debug('line %d skipped: %r', lineno, line.text)
                case LineKind.SECTION:
                    this_sect = line.section
                    logger.debug('line %d enters [%s]', lineno, this_sect)
                case LineKind.PAIR:
                    sect = ret._section_for_write(this_sect)
                    sect._store(
                        line.key, resolve(line.value, sect, ret.header))
        return ret

    @property
    def encoding(self) -> str:
        """Used on both read and write, so a saved file reads back."""
        return self._codec or 'utf-8'

    @staticmethod
    def _guess_decode(raw: bytes) -> str:
        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            return raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            return raw.decode('latin-1')

    def _read(self) -> Document:
        with open(self._fn, 'rb') as fp:
            raw = fp.read()

        # decode the whole file up front: when the encoding got wrong,
        # just `UnicodeDecodeError` and fallback to `chardet`,
        # instead of a stream cut short halfway.
        try:
            buf = raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            logger.warning(
                '"%s" is not %s (%s), guessing encoding instead.',
                self._fn, self.encoding, e.reason)
            buf = self._guess_decode(raw)
        # keep `open()` newline translation.
        return self.readstream(StringIO(buf, newline=None))

    def read(self) -> Document:
        """Read the file this parser is bound to.

        Raises `SourceUnavailable` if it cannot be opened.
        Malformed lines never raise, they are skipped.
        """
        try:
            return self._read()
        except OSError as e:
            logger.warning('cannot read "%s": %s', self._fn, e)
            raise SourceUnavailable(self._fn, e.strerror or str(e)) from e

    @staticmethod
    def __output_section(sect: Section, delimiter: str, header: bool) -> str:
        ret = [f'[{sect.name}]'] if header else []
        for k, v in sect.items():
            if '#' in k or '=' in k or '#' in v:
                warn(
                    f'{sect} "{k}" contains "#" or "=", '
                    'which will not read back the same.')
            if '${' in v:
                warn(
                    f'{sect} "{k}" holds a `${{...}}` reference, '
                    'which may get substituted when read back.')
            if k.lstrip(' \t').startswith('[') and v.rstrip().endswith(']'):
                warn(
                    f'{sect} "{k}" is bracketed on both ends, '
                    'which will read back as a section header.')
            ret.append(f'{k}{delimiter}{v}')
        return '\n'.join(ret)

    @classmethod
    def writestream(
        cls, instance: Document, buf: TextIOBase, *,
        blank_lines: int = 1,
        delimiter: str = '='
    ) -> None:
        """Write header pairs first, then every section in order."""
        chunks = []
        if instance.header:
            chunks.append(cls.__output_section(
                instance.header, delimiter, header=False))
        for i in instance.values():
            chunks.append(cls.__output_section(i, delimiter, header=True))
        for i in chunks:
            buf.write(i)
            buf.write('\n' * (blank_lines + 1))

    def write(
        self, instance: Document, *,
        blank_lines: int = 1,
        delimiter: str = '='
    ) -> None:
        """Save to *one* config file.

        Note: substituted values are saved as substituted,
        the original `${...}` references are gone.
        """
        with open(self._fn, 'w', encoding=self.encoding) as fp:
            self.writestream(
                instance, fp, blank_lines=blank_lines, delimiter=delimiter)

    def __str__(self) -> str:
        return "config file: " + super().__str__() + f" ({self.encoding})"


def load(
    source: str | PathLike[str] | TextIOBase,
    encoding: str | None = None
) -> Document:
    """Load a config from a path, or from an opened text stream."""
    if isinstance(source, (str, PathLike)):
        return JamonParser(source, encoding).read()
    return JamonParser.readstream(source)


def loads(text: str) -> Document:
    return JamonParser.readstream(StringIO(text))
