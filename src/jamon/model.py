# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/12 21:15:42
# @Author : Kariko Lin

"""
Config document structure: sections of plain `str: str` pairs.

Both `Document` and `Section` are *read only* mappings to the user.
Only the parser fills them, through the underscored helpers below.
"""

from collections.abc import Iterator, Mapping

__all__ = ['ROOT_SECTION', 'Section', 'Document']

# section declaration is impossible to contain '#',
# since comments are cut off before headers are recognized.
ROOT_SECTION = '# root'


class Section(Mapping[str, str]):
    """Key-value pairs of one `[section]` (or of the file header).

    Absent keys read as empty strings through `get()`, so lookups never
    fail. Use `lookup()` if "absent" and "present but empty" matter.
    """
    def __init__(
        self, name: str = '', /,
        pairs: Mapping[str, str] | None = None
    ) -> None:
        self._name = name
        self._data: dict[str, str] = dict(pairs) if pairs else {}

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return f'[{self._name}] {self._data!r}'

    def _store(self, key: str, value: str) -> None:
        """for JamonParser reading. Later writes win."""
        self._data[key] = value

    def lookup(self, key: str) -> str | None:
        return self._data.get(key)

    def get(self, key: str, default: str = '') -> str:
        value = self._data.get(key)
        return default if value is None else value

    def has(self, key: str) -> bool:
        return key in self._data

    # lazy to implement auto converter. just manual.
    def get_bool(self, key: str) -> bool:
        """`1`, `y(es)`, `t(rue)`, `on` (any case) read as `True`."""
        value = self.get(key).strip().lower()
        return value == 'on' or value[:1] in ('1', 'y', 't')

    def get_int(self, key: str, default: int = 0) -> int:
        """Absent or non-numeric values give `default`."""
        try:
            return int(self.get(key).strip())
        except ValueError:
            return default

    def get_list(self, key: str, sep: str = ',') -> list[str]:
        value = self.get(key)
        if not value:
            return []
        return [i.strip() for i in value.split(sep)]

    def to_dict(self) -> dict[str, str]:
        return self._data.copy()


class Document(Mapping[str, Section]):
    """A whole config file.

        ```ini
        address = 127.0.0.1  # use self.get() / self.header for these.

        [service]
        address = ${address}:222
        ```

    Iterating yields user section names only; pairs written before the
    first header live in `self.header`.
    """
    def __init__(self) -> None:
        self.__header = Section(ROOT_SECTION)
        self.__sections: dict[str, Section] = {}

    @property
    def header(self) -> Section:
        """Pairs not belonging to any section."""
        return self.__header

    def __getitem__(self, name: str) -> Section:
        return self.__sections[name]

    def __contains__(self, name: object) -> bool:
        return name in self.__sections

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f'Document({self.to_dict()!r})'

    def _section_for_write(self, name: str | None) -> Section:
        """for JamonParser reading. `None` is the header.

        Sections are created here, on their first pair,
        so a bare `[header]` never shows up.
        """
        if name is None:
            return self.__header
        if name not in self.__sections:
            self.__sections[name] = Section(name)
        return self.__sections[name]

    def get(self, key: str, default: str = '') -> str:
        """Root-level value of `key`, or `default`.

        Note: unlike `Mapping.get`, this looks up a *key*, not a section.
        See `self.section()` for sections.
        """
        return self.__header.get(key, default)

    def has(self, key: str) -> bool:
        return self.__header.has(key)

    def section(self, name: str) -> Section:
        """Returns an empty `Section` if `name` is absent, for chaining."""
        if name in self.__sections:
            return self.__sections[name]
        return Section(name)

    def has_section(self, name: str) -> bool:
        return name in self.__sections

    def to_dict(self) -> dict[str, dict[str, str]]:
        ret = {}
        if self.__header:
            ret[ROOT_SECTION] = self.__header.to_dict()
        for name, sect in self.__sections.items():
            ret[name] = sect.to_dict()
        return ret
