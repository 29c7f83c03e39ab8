# Copyright 2024 Liu Siyao
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import List, Optional

from slidemark.renderer.base import Renderer
from slidemark.types import Alignment, ButtonKind, MultipleChoice, Presentation

ALIGNMENT_MARKERS = {
    Alignment.LEFT: '---',
    Alignment.RIGHT: '--:',
    Alignment.CENTER: ':-:',
    Alignment.SEPARATOR: '',
}


class MarkdownRenderer(Renderer):
    # writes the tree back as normalized slide markup
    def __init__(self, config):
        super().__init__(config)
        self.list_kinds: List[str] = []
        self.ol_numbers: List[int] = []

    def presentation_start(self, presentation: Presentation):
        if presentation.title1:
            self.write(f'<!-- {presentation.title1} -->\n\n')

    def toc_start(self):
        self.write(f'<!-- {self.message("toc", "Contents")}\n')

    def toc_entry(self, name, anchor):
        self.write(f'{name} (#{anchor})\n')

    def toc_sub_entry(self, name, anchor):
        self.write(f'  {name} (#{anchor})\n')

    def toc_end(self):
        self.write('-->\n\n')

    def chapter_start(self, title, number, id):
        self.write(f'# {title}\n\n')

    def slide_start(self, title, number, id, contains_code):
        self.write(f'## {title}\n\n')

    def slide_end(self):
        self.write('\n')

    def heading(self, level, title):
        self.write('#' * level + ' ' + title + '\n\n')

    def text(self, content):
        self.write(content + '\n\n')

    def _list_prefix(self) -> str:
        return '  ' * len(self.list_kinds)

    def ul_start(self):
        self.list_kinds.append('ul')

    def ol_start(self, number=1):
        self.list_kinds.append('ol')
        self.ol_numbers.append(number)

    def ul_item(self, content):
        self.write(self._list_prefix() + '* ' + content + '\n')

    def ol_item(self, content):
        number = self.ol_numbers[-1]
        self.ol_numbers[-1] += 1
        self.write(f'{self._list_prefix()}{number}. {content}\n')

    def ul_end(self):
        self._list_end()

    def ol_end(self):
        self.ol_numbers.pop()
        self._list_end()

    def _list_end(self):
        self.list_kinds.pop()
        if not self.list_kinds:
            self.write('\n')

    def table_start(self, headers, alignment):
        if headers:
            self.write('| ' + ' | '.join(headers) + ' |\n')
            self.write('|' + '|'.join(ALIGNMENT_MARKERS[a] for a in alignment) + '|\n')

    def table_row(self, row, alignment):
        self.write('| ' + ' | '.join(row) + ' |\n')

    def table_end(self):
        self.write('\n')

    def _prefixed(self, prefix: str, content: str):
        self.write('\n'.join(prefix + line for line in content.split('\n')) + '\n\n')

    def quote(self, content, source):
        self._prefixed('> ', content)
        if source:
            self._prefixed('>> ', source)

    def important(self, content):
        self._prefixed('>! ', content)

    def question(self, content):
        self._prefixed('>? ', content)

    def box(self, content):
        self._prefixed('>: ', content)

    def code_start(self, language, caption):
        caption_tag = f'{{{caption}}}' if caption else ''
        self.write(f'```{language}{caption_tag}\n')

    def code(self, content):
        self.write(content + '\n')

    def code_end(self, caption):
        self.write('```\n\n')

    def image(self, location, formats, alt, title, width_slide, width_plain, source=None):
        title_part = f' "{title}"' if title and title != alt else ''
        widths = ''
        if width_slide is not None:
            widths += f'/{width_slide}/'
            if width_plain is not None:
                widths += f'/{width_plain}/'
        self.write(f'![{alt}]({location}{title_part}){widths}\n\n')

    def equation(self, content):
        self.write('\\[\n' + content + '\n\\]\n\n')

    def script(self, content):
        self.write('<script>\n' + content + '\n</script>\n\n')

    def html(self, content):
        self.write(content + '\n\n')

    def uml(self, picture_name, content, width_slide, width_plain):
        widths = ''
        if width_slide is not None:
            widths = f'[{width_slide}][{width_plain}]'
        self.write(f'@startuml{widths}\n{content}\n@enduml\n\n')

    def multiple_choice(self, question: MultipleChoice, inline: bool):
        mark = '*' if question.correct else ' '
        dot = '.' if inline else ''
        self.write(f'[{mark}]{dot} {question.text}\n')

    def multiple_choice_end(self, inline):
        self.write('\n')

    def vertical_space(self, amount=1):
        if amount == 1:
            self.write('<br>\n')
        else:
            self.write(f'<!-- Spacing: {amount} -->\n')

    def comment_start(self):
        self.write('---\n')

    def _button(self, kind: ButtonKind, fragment: Optional[str] = None):
        self.write(f'(({kind.value}{" " + fragment if fragment else ""}))\n')

    def button(self, line_id):
        self._button(ButtonKind.PLAIN)

    def button_with_log(self, line_id):
        self._button(ButtonKind.WITH_LOG)

    def button_with_log_pre(self, line_id):
        self._button(ButtonKind.WITH_LOG_PRE)

    def link_previous(self, line_id):
        self._button(ButtonKind.LINK_PREVIOUS)

    def live_css(self, line_id, fragment):
        self._button(ButtonKind.LIVE_CSS, fragment)

    def live_preview(self, line_id):
        self._button(ButtonKind.LIVE_PREVIEW)

    def live_preview_float(self, line_id):
        self._button(ButtonKind.LIVE_PREVIEW_FLOAT)
