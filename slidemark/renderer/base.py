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

import abc
import io
import os
from typing import List, Optional

from slidemark.types import (
    Alignment,
    ButtonElement,
    ButtonKind,
    ConversionConfig,
    ElementType,
    MultipleChoice,
    Presentation,
    SlideElement,
    TOC,
)


class Renderer(abc.ABC):
    """Walks a parsed presentation and calls one hook per construct.

    Every hook is a no-op here; concrete renderers override the ones their
    target format needs. Output goes to an in-memory buffer which `close()`
    writes to config.output_path, if set.
    """

    def __init__(self, config: ConversionConfig):
        self.config = config
        self.ofile = None
        if config.output_path is not None:
            os.makedirs(config.output_path.parent, exist_ok=True)
            self.ofile = open(config.output_path, 'w', encoding='utf8')
        self._buffer = io.StringIO()

    def write(self, text: str):
        self._buffer.write(text)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def message(self, key: str, default: str = '') -> str:
        """Localized string for `key`, as configured in config.messages."""
        return self.config.messages.get(key, default or key)

    def render(self, presentation: Presentation, toc: Optional[TOC] = None):
        self.presentation_start(presentation)
        if toc is not None:
            self.render_toc(toc)

        for chapter in presentation.chapters:
            self.chapter_start(chapter.title, chapter.number, chapter.id)
            for slide in chapter.slides:
                if slide.skip:
                    continue
                self.slide_start(slide.title, slide.number, slide.id, slide.contains_code)
                self.render_elements(slide.elements)
                self.slide_end()
            self.chapter_end()

        self.presentation_end(presentation)

    def render_toc(self, toc: TOC):
        self.toc_start()
        for entry in toc.entries:
            self.toc_entry(entry.name, entry.anchor)
            if entry.sub_entries:
                self.toc_sub_entries_start()
                for sub_entry in entry.sub_entries:
                    self.toc_sub_entry(sub_entry.name, sub_entry.anchor)
                self.toc_sub_entries_end()
        self.toc_end()

    def render_elements(self, elements: List[SlideElement]):
        for element in elements:
            self.render_element(element)

    def render_element(self, element: SlideElement):
        match element.type:
            case ElementType.Text:
                self.text(element.content)
            case ElementType.Heading:
                self.heading(element.level, element.title)
            case ElementType.UnorderedList:
                self.ul_start()
                self._render_entries(element.entries, self.ul_item)
                self.ul_end()
            case ElementType.OrderedList:
                self.ol_start(element.start_number)
                self._render_entries(element.entries, self.ol_item)
                self.ol_end()
            case ElementType.Source:
                self.code_start(element.language, element.caption)
                self.code(element.content)
                self.code_end(element.caption)
            case ElementType.Table:
                self.table_start(element.headers, element.alignment)
                for row in element.rows:
                    self.table_row(row, element.alignment)
                self.table_end()
            case ElementType.Quote:
                self.quote(element.content, element.source)
            case ElementType.Important:
                self.important(element.content)
            case ElementType.Question:
                self.question(element.content)
            case ElementType.Box:
                self.box(element.content)
            case ElementType.Script:
                self.script(element.content)
            case ElementType.Equation:
                self.equation(element.content)
            case ElementType.HTML:
                self.html(element.content)
            case ElementType.Image:
                self.image(element.location, element.formats, element.alt, element.title,
                           element.width_slide, element.width_plain,
                           element.license.source if element.license else None)
            case ElementType.UML:
                self.uml(element.picture_name, element.content, element.width_slide, element.width_plain)
            case ElementType.MultipleChoiceQuestions:
                self.multiple_choice_start(element.inline)
                for question in element.questions:
                    self.multiple_choice(question, element.inline)
                self.multiple_choice_end(element.inline)
            case ElementType.Button:
                self._render_button(element)
            case ElementType.VerticalSpace:
                self.vertical_space(element.amount)
            case ElementType.Comment:
                self.comment_start()
                self.render_elements(element.elements)
                self.comment_end()

    def _render_entries(self, entries, put_item):
        for entry in entries:
            if entry.type == ElementType.ListItem:
                put_item(entry.content)
            else:
                self.render_element(entry)

    def _render_button(self, element: ButtonElement):
        match element.kind:
            case ButtonKind.PLAIN:
                self.button(element.line_id)
            case ButtonKind.WITH_LOG:
                self.button_with_log(element.line_id)
            case ButtonKind.WITH_LOG_PRE:
                self.button_with_log_pre(element.line_id)
            case ButtonKind.LINK_PREVIOUS:
                self.link_previous(element.line_id)
            case ButtonKind.LIVE_CSS:
                self.live_css(element.line_id, element.fragment)
            case ButtonKind.LIVE_PREVIEW:
                self.live_preview(element.line_id)
            case ButtonKind.LIVE_PREVIEW_FLOAT:
                self.live_preview_float(element.line_id)

    # --- document brackets ---------------------------------------------

    def presentation_start(self, presentation: Presentation):
        pass

    def presentation_end(self, presentation: Presentation):
        pass

    def chapter_start(self, title: str, number: int, id: str):
        pass

    def chapter_end(self):
        pass

    def slide_start(self, title: str, number: int, id: str, contains_code: bool):
        pass

    def slide_end(self):
        pass

    # --- table of contents ---------------------------------------------

    def toc_start(self):
        pass

    def toc_entry(self, name: str, anchor: str):
        pass

    def toc_sub_entries_start(self):
        pass

    def toc_sub_entry(self, name: str, anchor: str):
        pass

    def toc_sub_entries_end(self):
        pass

    def toc_end(self):
        pass

    # --- elements ------------------------------------------------------

    def text(self, content: str):
        pass

    def heading(self, level: int, title: str):
        pass

    def ul_start(self):
        pass

    def ul_item(self, content: str):
        pass

    def ul_end(self):
        pass

    def ol_start(self, number: int = 1):
        pass

    def ol_item(self, content: str):
        pass

    def ol_end(self):
        pass

    def table_start(self, headers: List[str], alignment: List[Alignment]):
        pass

    def table_row(self, row: List[str], alignment: List[Alignment]):
        pass

    def table_end(self):
        pass

    def quote(self, content: str, source: Optional[str]):
        pass

    def important(self, content: str):
        pass

    def question(self, content: str):
        pass

    def box(self, content: str):
        pass

    def code_start(self, language: str, caption: Optional[str]):
        pass

    def code(self, content: str):
        pass

    def code_end(self, caption: Optional[str]):
        pass

    def image(self, location: str, formats: List[str], alt: str, title: str,
              width_slide: Optional[str], width_plain: Optional[str], source: Optional[str] = None):
        pass

    def equation(self, content: str):
        pass

    def script(self, content: str):
        pass

    def html(self, content: str):
        pass

    def uml(self, picture_name: str, content: str, width_slide: Optional[str], width_plain: Optional[str]):
        pass

    def multiple_choice_start(self, inline: bool):
        pass

    def multiple_choice(self, question: MultipleChoice, inline: bool):
        pass

    def multiple_choice_end(self, inline: bool):
        pass

    def vertical_space(self, amount: int = 1):
        pass

    def comment_start(self):
        pass

    def comment_end(self):
        pass

    def button(self, line_id: str):
        pass

    def button_with_log(self, line_id: str):
        pass

    def button_with_log_pre(self, line_id: str):
        pass

    def link_previous(self, line_id: str):
        pass

    def live_css(self, line_id: str, fragment: Optional[str]):
        pass

    def live_preview(self, line_id: str):
        pass

    def live_preview_float(self, line_id: str):
        pass

    def close(self):
        buffered_content = self._buffer.getvalue()
        if self.ofile is not None:
            if buffered_content:
                self.ofile.write(buffered_content)
            self.ofile.close()
            self.ofile = None
