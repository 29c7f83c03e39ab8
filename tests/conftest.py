"""
Pytest configuration and global fixtures.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from slidemark.parser import Parser
from slidemark.types import Presentation


def make_lines(text: str):
    """Split a text block into lines the way a file is read."""
    return text.splitlines(keepends=True)


@pytest.fixture
def presentation():
    """Presentation carrying the metadata normally read from metadata.properties."""
    return Presentation(
        slide_language='DE',
        title1='Title1',
        title2='Title2',
        section_number=3,
        section_name='Section 3',
        copyright='(c) 2014',
        author='Thomas Smits',
        default_language='java',
        description='Test Presentation',
        term='WS2014',
    )


@pytest.fixture
def parser():
    return Parser()


@pytest.fixture
def parse_text(parser, presentation):
    """Parse a markup snippet into the shared presentation."""
    def _parse(text: str, file_name: str = 'testfile.md'):
        parser.parse_lines(make_lines(text), file_name, 'java', presentation)
        return presentation
    return _parse


@pytest.fixture
def include_file(tmp_path):
    """Source file referenced by !INCLUDESRC directives."""
    path = tmp_path / 'src.java'
    path.write_text("THIS IS SOURCE CODE\nAT LEAST SOME", encoding='utf-8')
    return path
