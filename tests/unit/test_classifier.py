"""
Unit tests for the single line classifier.
"""
import pytest

import slidemark.classifier as cl
from slidemark.types import Alignment, ButtonKind


class TestTitles:

    def test_chapter_title(self):
        assert cl.chapter_title('# Chapter 1') == 'Chapter 1'
        assert cl.chapter_title('## Slide') is None
        assert cl.chapter_title('# C# in practice') == 'C# in practice'

    def test_indented_hash_is_not_a_title(self):
        assert cl.chapter_title('    # install deps') is None
        assert cl.slide_title('    ## not a slide') is None
        assert cl.chapter_title('  # Chapter') == 'Chapter'
        assert cl.is_source('    # install deps')

    def test_slide_title(self):
        assert cl.slide_title('## Slide 1.1') == 'Slide 1.1'
        assert cl.slide_title('### Heading') is None

    def test_skip_marker(self):
        line = '## Slide 1.4 --skip--'
        assert cl.is_skipped_slide(line)
        assert cl.strip_skip_marker(cl.slide_title(line)) == 'Slide 1.4'
        assert not cl.is_skipped_slide('## Slide 1.5')

    @pytest.mark.parametrize('line,expected', [
        ('### Heading 3', (3, 'Heading 3')),
        ('###### Deep', (6, 'Deep')),
        ('## Slide', None),
    ])
    def test_heading(self, line, expected):
        assert cl.heading(line) == expected


class TestLists:

    @pytest.mark.parametrize('line,expected', [
        ('  * Item 1', ('ul', 1, 'Item 1', None)),
        ('  - Item 1', ('ul', 1, 'Item 1', None)),
        ('    - Item 2.1', ('ul', 2, 'Item 2.1', None)),
        ('      * Item 3', ('ul', 3, 'Item 3', None)),
        ('  4. Item 4', ('ol', 1, 'Item 4', 4)),
        ('    12. Item', ('ol', 2, 'Item', 12)),
        ('* no indent', None),
        ('   * odd indent', None),
    ])
    def test_list_item(self, line, expected):
        assert cl.list_item(line) == expected

    def test_source_is_not_a_list(self):
        assert cl.is_source('    int i = 0;')
        assert not cl.is_source('    - item')
        assert cl.trim_code_prefix('      x') == '  x'


class TestBlocks:

    def test_quote_family(self):
        assert cl.quote('> text') == 'text'
        assert cl.quote_source('>> author') == 'author'
        assert cl.important('>! careful') == 'careful'
        assert cl.question('>? why') == 'why'
        assert cl.box('>: boxed') == 'boxed'
        assert cl.quote('>! careful') is None

    def test_comments_and_spacing(self):
        assert cl.is_comment('<!-- note -->')
        assert cl.comment('<!-- note -->') == ' note '
        assert cl.space_comment('<!-- Spacing: 4 -->') == 4
        assert cl.space_comment('<!-- Spacing:  -->') == 1
        assert cl.space_comment('<!-- note -->') is None
        assert cl.is_vertical_space(' <br> ')

    def test_regions(self):
        assert cl.fenced_code_start('```java') == ('java', None, None)
        assert cl.fenced_code_start('```java[3]{Listing}') == ('java', 3, 'Listing')
        assert cl.fenced_code_start('```') is None
        assert cl.is_fenced_code_end('```')
        assert cl.is_script_start('<script>') and cl.is_script_end('</script>')
        assert cl.is_equation_start('\\[') and cl.is_equation_end('\\]')
        assert cl.is_uml_start('@startuml') and cl.is_uml_end('@enduml')

    @pytest.mark.parametrize('line,expected', [
        ('@startuml', (None, None)),
        ('@startuml[50%]', ('50%', '50%')),
        ('@startuml[100%][70%]', ('100%', '70%')),
        ('@startuml 50%', None),
    ])
    def test_uml_widths(self, line, expected):
        assert cl.uml_start(line) == expected

    def test_separator(self):
        assert cl.is_separator('---')
        assert cl.is_separator('-----')
        assert not cl.is_separator('--')


class TestTables:

    def test_rows(self):
        assert cl.is_table_row('| a | b |')
        assert not cl.is_table_row('| a | b')
        assert cl.table_cells('| a | b c |') == ['a', 'b c']

    def test_separator_alignment(self):
        assert cl.is_table_separator('|---|:-:|')
        assert not cl.is_table_separator('| a | b |')
        assert cl.table_alignment('|---|:-:|--:||') == [
            Alignment.LEFT, Alignment.CENTER, Alignment.RIGHT, Alignment.SEPARATOR,
        ]


class TestInlineDirectives:

    def test_multiple_choice(self):
        assert cl.multiple_choice('[ ] A question') == (False, False, 'A question')
        assert cl.multiple_choice('[*] Right') == (True, False, 'Right')
        assert cl.multiple_choice('[x]. Inline') == (True, True, 'Inline')
        assert cl.multiple_choice('[a] nope') is None

    def test_image(self):
        assert cl.is_image('![](img/file.png)')
        assert cl.image('![](img/file.png)') == ('img/file.png', '', None, None, None)
        assert cl.image('![alt](a.png "Title")/10%//30%/') == ('a.png', 'alt', 'Title', '10%', '30%')
        assert cl.image('![alt](a.png)/10%/') == ('a.png', 'alt', None, '10%', None)

    def test_button(self):
        assert cl.button('((Button))') == (ButtonKind.PLAIN, None)
        assert cl.button('((Live-CSS Hugo))') == (ButtonKind.LIVE_CSS, 'Hugo')
        assert cl.button('((Unknown))') is None

    def test_code_include(self):
        assert cl.is_code_include('!INCLUDESRC "a.java"')
        assert cl.code_include('!INCLUDESRC "a.java"') == ('a.java', 0, '')
        assert cl.code_include('!INCLUDESRC[2] "a.java" Java') == ('a.java', 2, 'Java')
        assert cl.code_include('!INCLUDESRC a.java') is None

    def test_text_and_html(self):
        assert cl.is_text('Über alles')
        assert cl.is_text('`code` first')
        assert not cl.is_text('(paren)')
        assert cl.is_html('<b>x</b>')
        assert cl.is_normal('x') and not cl.is_normal(' x')
        assert cl.is_empty('   ')
