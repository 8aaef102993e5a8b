"""
Tests for Document and Section accessors.
Absent keys and sections read as empty, never raise.
"""

import pytest

from jamon import ROOT_SECTION, Document, Section, loads


@pytest.fixture
def doc():
    return loads('''
A=B
C=D
E=

[category.a]
key=value
key2=value2

[category.b]
k=v
k.2=v.2
''')


class TestDocument:
    """Root-level and section accessors."""

    def test_root_getters(self, doc):
        assert doc.get('A') == 'B'
        assert doc.get('C') == 'D'
        assert doc.get('inexistent_key') == ''
        assert doc.get('inexistent_key', 'fallback') == 'fallback'

    def test_has(self, doc):
        assert doc.has('A')
        assert not doc.has('X')
        assert doc.has('E')
        assert doc.get('E') == ''

    def test_sections(self, doc):
        assert doc.section('category.a') == {'key': 'value', 'key2': 'value2'}
        assert doc.section('category.b') == {'k': 'v', 'k.2': 'v.2'}
        assert doc.has_section('category.a')
        assert doc.has_section('category.b')
        assert not doc.has_section('category.X')

    def test_missing_section_chains_safely(self, doc):
        missing = doc.section('inexistent')
        assert isinstance(missing, Section)
        assert len(missing) == 0
        assert missing.get('x') == ''
        assert not missing.has('x')
        assert not doc.has_section('inexistent')

    def test_mapping_protocol(self, doc):
        assert list(doc) == ['category.a', 'category.b']
        assert len(doc) == 2
        assert 'category.a' in doc
        assert ROOT_SECTION not in doc
        assert doc['category.b']['k.2'] == 'v.2'
        with pytest.raises(KeyError):
            doc['inexistent']

    def test_header(self, doc):
        assert doc.header.name == ROOT_SECTION
        assert doc.header == {'A': 'B', 'C': 'D', 'E': ''}

    def test_to_dict_is_detached(self, doc):
        data = doc.to_dict()
        data['category.a']['key'] = 'changed'
        assert doc.section('category.a').get('key') == 'value'

    def test_to_dict_omits_empty_root(self):
        assert loads('[s]\nk=v\n').to_dict() == {'s': {'k': 'v'}}

    def test_equality(self, doc):
        assert doc != Document()
        assert Document() == Document()
        assert loads('a=1\n[s]\nb=2') == loads('a=1\n\n[s] # c\nb=2\n')
        assert loads('a=1') != loads('[s]\na=1')


class TestSection:
    """Scoped getters."""

    def test_lookup_tells_absent_from_empty(self):
        sect = Section('s', {'empty': ''})
        assert sect.lookup('empty') == ''
        assert sect.lookup('missing') is None
        assert sect.get('missing') == ''
        assert sect.has('empty')
        assert not sect.has('missing')

    def test_is_read_only(self):
        sect = Section('s', {'k': 'v'})
        with pytest.raises(TypeError):
            sect['k'] = 'x'

    @pytest.mark.parametrize('value, expected', [
        ('1', True),
        ('yes', True),
        ('True', True),
        ('on', True),
        ('0', False),
        ('no', False),
        ('off', False),
        ('', False),
    ])
    def test_get_bool(self, value, expected):
        assert Section('s', {'flag': value}).get_bool('flag') is expected

    def test_get_bool_absent(self):
        assert Section('s').get_bool('flag') is False

    def test_get_int(self):
        sect = Section('s', {'port': ' 22', 'bad': 'x22'})
        assert sect.get_int('port') == 22
        assert sect.get_int('bad') == 0
        assert sect.get_int('missing', 8080) == 8080

    def test_get_list(self):
        sect = Section('s', {'hosts': 'a, b ,c', 'paths': '/x:/y'})
        assert sect.get_list('hosts') == ['a', 'b', 'c']
        assert sect.get_list('paths', sep=':') == ['/x', '/y']
        assert sect.get_list('missing') == []

    def test_str_and_repr(self):
        sect = Section('net', {'a': 'b'})
        assert str(sect) == '[net]'
        assert repr(sect) == "[net] {'a': 'b'}"
