"""
Unit tests for the renderer walk and the markdown renderer.
"""
import pytest

from slidemark.renderer import MarkdownRenderer, Renderer
from slidemark.toc import build_toc
from slidemark.types import ConversionConfig


class RecordingRenderer(Renderer):
    """Records the hooks called while walking a presentation."""

    def __init__(self, config):
        super().__init__(config)
        self.calls = []

    def _record(self, *call):
        self.calls.append(call)

    def chapter_start(self, title, number, id):
        self._record('chapter_start', title, number, id)

    def chapter_end(self):
        self._record('chapter_end')

    def slide_start(self, title, number, id, contains_code):
        self._record('slide_start', title, number, id, contains_code)

    def slide_end(self):
        self._record('slide_end')

    def toc_start(self):
        self._record('toc_start')

    def toc_entry(self, name, anchor):
        self._record('toc_entry', name, anchor)

    def toc_sub_entries_start(self):
        self._record('toc_sub_entries_start')

    def toc_sub_entry(self, name, anchor):
        self._record('toc_sub_entry', name, anchor)

    def toc_sub_entries_end(self):
        self._record('toc_sub_entries_end')

    def toc_end(self):
        self._record('toc_end')

    def text(self, content):
        self._record('text', content)

    def ul_start(self):
        self._record('ul_start')

    def ul_item(self, content):
        self._record('ul_item', content)

    def ul_end(self):
        self._record('ul_end')

    def code_start(self, language, caption):
        self._record('code_start', language, caption)

    def code(self, content):
        self._record('code', content)

    def code_end(self, caption):
        self._record('code_end', caption)

    def comment_start(self):
        self._record('comment_start')

    def comment_end(self):
        self._record('comment_end')

    def live_css(self, line_id, fragment):
        self._record('live_css', line_id, fragment)


@pytest.fixture
def config():
    return ConversionConfig()


class TestRendererWalk:

    def test_hook_order(self, parse_text, config):
        presentation = parse_text('# C\n## S\nIntro\n\n  * a\n    - b\n\n```java\nx\n```\n---\nNote\n')
        out = RecordingRenderer(config)
        out.render(presentation)
        assert out.calls == [
            ('chapter_start', 'C', 1, 'chap_1'),
            ('slide_start', 'S', 1, 'slide_1', True),
            ('text', 'Intro'),
            ('ul_start',),
            ('ul_item', 'a'),
            ('ul_start',),
            ('ul_item', 'b'),
            ('ul_end',),
            ('ul_end',),
            ('code_start', 'java', None),
            ('code', 'x'),
            ('code_end', None),
            ('comment_start',),
            ('text', 'Note'),
            ('comment_end',),
            ('slide_end',),
            ('chapter_end',),
        ]

    def test_skipped_slides_are_not_rendered(self, parse_text, config):
        presentation = parse_text('# C\n## Hidden --skip--\nSecret\n## Shown\nPublic\n')
        out = RecordingRenderer(config)
        out.render(presentation)
        assert ('slide_start', 'Shown', 2, 'slide_2', False) in out.calls
        assert ('text', 'Secret') not in out.calls

    def test_toc_and_buttons(self, parse_text, config):
        presentation = parse_text('# C\n## S\n((Live-CSS frag))\n')
        out = RecordingRenderer(config)
        out.render(presentation, build_toc(presentation))
        assert out.calls[:6] == [
            ('toc_start',),
            ('toc_entry', 'C', 'chap_1'),
            ('toc_sub_entries_start',),
            ('toc_sub_entry', 'S', 'slide_1'),
            ('toc_sub_entries_end',),
            ('toc_end',),
        ]
        assert ('live_css', 'testfile_3', 'frag') in out.calls


class TestMarkdownRenderer:

    def test_round_trip_of_common_constructs(self, parse_text, config):
        source = (
            '# Chapter\n'
            '## Slide\n'
            'Some text\n'
            '\n'
            '  * one\n'
            '    - nested\n'
            '\n'
            '  3. three\n'
            '  4. four\n'
            '\n'
            '```java\n'
            'int i = 7;\n'
            '```\n'
            '| A | B |\n'
            '|---|--:|\n'
            '| 1 | 2 |\n'
            '\n'
            '>! careful\n'
        )
        out = MarkdownRenderer(config)
        out.render(parse_text(source))
        text = out.getvalue()
        assert '# Chapter\n\n## Slide\n\nSome text\n\n' in text
        assert '  * one\n    * nested\n\n' in text
        assert '  3. three\n  4. four\n\n' in text
        assert '```java\nint i = 7;\n```\n' in text
        assert '| A | B |\n|---|--:|\n| 1 | 2 |\n' in text
        assert '>! careful\n' in text

    def test_toc_uses_messages(self, parse_text):
        config = ConversionConfig(messages={'toc': 'Inhalt'})
        presentation = parse_text('# C\n## S\n')
        out = MarkdownRenderer(config)
        out.render(presentation, build_toc(presentation))
        assert '<!-- Inhalt\nC (#chap_1)\n  S (#slide_1)\n-->\n' in out.getvalue()

    def test_close_writes_output_file(self, parse_text, tmp_path):
        config = ConversionConfig(output_path=tmp_path / 'out' / 'slides.md')
        out = MarkdownRenderer(config)
        out.render(parse_text('# C\n## S\n<br>\n<!-- Spacing: 2 -->\n'))
        out.close()
        written = (tmp_path / 'out' / 'slides.md').read_text(encoding='utf8')
        assert '<br>\n<!-- Spacing: 2 -->\n' in written
