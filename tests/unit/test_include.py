"""
Unit tests for source includes.
"""
import pytest

from slidemark.errors import UnresolvedInclude
from slidemark.include import SECTION_MARKER, resolve_include, split_sections


@pytest.fixture
def sectioned_file(tmp_path):
    path = tmp_path / 'Sections.java'
    path.write_text('\n'.join([
        'class A {',
        '}',
        f'// {SECTION_MARKER}',
        'class B {',
        '  int b;',
        '}',
    ]) + '\n', encoding='utf-8')
    return path


class TestSplitSections:

    def test_without_markers(self):
        assert split_sections(['a', 'b', 'c']) == [(1, 1), (2, 2), (3, 3)]

    def test_with_markers(self):
        lines = [SECTION_MARKER, 'a', 'b', SECTION_MARKER, SECTION_MARKER, 'c']
        assert split_sections(lines) == [(2, 3), (6, 6)]


class TestResolveInclude:

    def test_whole_file_strips_trailing_newline(self, sectioned_file):
        source = resolve_include(str(sectioned_file), 0, '', 'java')
        assert source.content.endswith('  int b;\n}')
        assert source.line_range == (1, 6)
        assert source.order is None

    def test_section(self, sectioned_file):
        source = resolve_include(str(sectioned_file), 2, 'Java', 'cpp')
        assert source.content == 'class B {\n  int b;\n}'
        assert source.line_range == (4, 6)
        assert source.language == 'Java'

    def test_default_language(self, sectioned_file):
        assert resolve_include(str(sectioned_file), 1, '', 'cpp').language == 'cpp'

    def test_relative_path(self, sectioned_file):
        source = resolve_include('Sections.java', 1, '', 'java', base_dir=sectioned_file.parent)
        assert source.content == 'class A {\n}'

    def test_section_out_of_range(self, sectioned_file):
        with pytest.raises(UnresolvedInclude) as excinfo:
            resolve_include(str(sectioned_file), 3, '', 'java', file_name='slides.md', line_number=7)
        assert 'section 3 requested' in str(excinfo.value)
        assert 'line 7' in str(excinfo.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(UnresolvedInclude) as excinfo:
            resolve_include('missing.java', 0, '', 'java', base_dir=tmp_path)
        assert excinfo.value.include_path == str(tmp_path / 'missing.java')
