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

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from tqdm import tqdm

import slidemark.classifier as cl
from slidemark.errors import MalformedDirective, UnbalancedRegion
from slidemark.include import resolve_include
from slidemark.types import (
    Alignment,
    BoxElement,
    ButtonElement,
    Chapter,
    CommentElement,
    ConversionConfig,
    EquationElement,
    HeadingElement,
    HTMLElement,
    ImageElement,
    ImportantElement,
    ListElement,
    ListItemElement,
    MultipleChoice,
    MultipleChoiceQuestionsElement,
    OrderedListElement,
    Presentation,
    QuestionElement,
    QuoteElement,
    ScriptElement,
    Slide,
    SlideElement,
    SourceElement,
    TableElement,
    TextBlockElement,
    TextElement,
    UMLElement,
    UnorderedListElement,
    VerticalSpaceElement,
)
from slidemark.utils import content_hash, detect_image_formats, make_line_id, read_lines

logger = logging.getLogger(__name__)


class Region(str, Enum):
    FencedCode = "fenced code"
    Script = "script"
    Equation = "equation"
    UML = "UML"


class TableMode(str, Enum):
    Header = "header"
    Body = "body"


# quote family kind -> element class
BOX_TYPES = {
    'quote': QuoteElement,
    'important': ImportantElement,
    'question': QuestionElement,
    'box': BoxElement,
}


@dataclass
class ParserState:
    """Everything the lines read so far left open."""
    file_name: Optional[str] = None
    line_number: int = 0
    default_language: str = ''

    chapter: Optional[Chapter] = None
    slide: Optional[Slide] = None
    target: Optional[List[SlideElement]] = None
    skipping: bool = False
    comment: Optional[CommentElement] = None

    lists: List[Tuple[int, ListElement]] = field(default_factory=list)
    blank_after_list: bool = False

    table: Optional[TableElement] = None
    table_mode: Optional[TableMode] = None
    table_rows: List[List[str]] = field(default_factory=list)

    box: Optional[TextBlockElement] = None
    box_kind: Optional[str] = None

    text: Optional[TextElement] = None
    html: Optional[HTMLElement] = None
    choices: Optional[MultipleChoiceQuestionsElement] = None

    region: Optional[Region] = None
    region_start: int = 0
    region_opener: str = ''
    region_lines: List[str] = field(default_factory=list)
    fence: Optional[Tuple[str, Optional[int], Optional[str]]] = None
    uml_widths: Tuple[Optional[str], Optional[str]] = (None, None)

    code_lines: Optional[List[str]] = None
    code_blanks: int = 0


class Parser:
    """Folds the lines of slide sources into a Presentation.

    Chapter and slide numbers continue across calls, so files have to be fed
    in their final order.
    """

    def __init__(self, config: Optional[ConversionConfig] = None):
        self.config = config or ConversionConfig()
        self.presentation: Optional[Presentation] = None
        self.state = ParserState()

    def parse_file(self, path: Union[str, Path], default_language: Optional[str],
                   presentation: Presentation) -> Presentation:
        path = Path(path)
        lines = read_lines(path)
        return self.parse_lines(lines, str(path), default_language, presentation)

    def parse_lines(self, lines: Iterable[str], file_name: Optional[str], default_language: Optional[str],
                    presentation: Presentation) -> Presentation:
        self.presentation = presentation
        self.state = ParserState(
            file_name=file_name,
            default_language=default_language or presentation.default_language,
            chapter=presentation.chapters[-1] if presentation.chapters else None,
        )

        for line_number, raw_line in enumerate(lines, 1):
            self.state.line_number = line_number
            self._process(raw_line.rstrip('\n').rstrip('\r'))

        self._finish_file()
        return presentation

    # --- line dispatch -------------------------------------------------

    def _process(self, line: str):
        st = self.state

        if st.region is not None:
            if self._is_region_end(line):
                self._close_region()
            else:
                st.region_lines.append(line)
            return

        if st.code_lines is not None:
            if cl.is_empty(line):
                st.code_blanks += 1
                return
            if line.startswith(cl.CODE_PREFIX):
                st.code_lines.extend([''] * st.code_blanks)
                st.code_blanks = 0
                st.code_lines.append(cl.trim_code_prefix(line))
                return
            self._close_code()

        title = cl.chapter_title(line)
        if title is not None:
            self._start_chapter(title)
            return

        title = cl.slide_title(line)
        if title is not None:
            self._start_slide(title, cl.is_skipped_slide(line))
            return

        if st.target is None:
            if not cl.is_empty(line) and not cl.is_comment(line):
                logger.warning(f'{st.file_name}:{st.line_number}: content outside of a slide ignored: {line}')
            return

        if cl.is_empty(line):
            self._close_blocks(keep='lists')
            if st.lists:
                st.blank_after_list = True
            return

        if cl.is_separator(line) and st.comment is None:
            self._start_comment()
            return

        item = cl.list_item(line)
        if item is not None:
            self._add_list_item(*item)
            return

        if st.lists and line[0].isspace() and not st.blank_after_list:
            last = st.lists[-1][1].last_item()
            if last is not None:
                last.append(line)
                return

        if cl.is_source(line):
            self._close_blocks()
            st.code_lines = [cl.trim_code_prefix(line)]
            st.code_blanks = 0
            return

        if st.table is not None and cl.is_table_separator(line):
            self._table_separator(line)
            return

        if cl.is_table_row(line):
            self._table_row(line)
            return

        if self._quote_family(line):
            return

        if self._open_region(line):
            return

        choice = cl.multiple_choice(line)
        if choice is not None:
            self._add_choice(*choice)
            return

        amount = cl.space_comment(line)
        if amount is not None:
            self._add(VerticalSpaceElement(amount=amount))
            return

        if cl.is_comment(line):
            return

        if cl.is_vertical_space(line):
            self._add(VerticalSpaceElement())
            return

        heading = cl.heading(line)
        if heading is not None:
            self._add(HeadingElement(level=heading[0], title=heading[1]))
            return

        if cl.is_code_include(line) and self._include(line):
            return

        button = cl.button(line)
        if button is not None:
            kind, fragment = button
            self._add(ButtonElement(kind=kind, fragment=fragment,
                                    line_id=make_line_id(st.file_name, st.line_number)))
            return

        if cl.is_image(line) and self._image(line):
            return

        if cl.is_html(line):
            if st.html is None:
                self._close_blocks()
                st.html = HTMLElement(content=line)
                self._add(st.html, close=False)
            else:
                st.html.append(line)
            return

        self._add_text(line)

    # --- structure -----------------------------------------------------

    def _start_chapter(self, title: str):
        self._close_slide()
        number = len(self.presentation.chapters) + 1
        self.state.chapter = Chapter(title=title, number=number, id=f'chap_{number}')
        self.presentation.chapters.append(self.state.chapter)
        logger.debug(f'Chapter {number}: {title}')

    def _start_slide(self, title: str, skip: bool):
        st = self.state
        self._close_slide()
        if st.chapter is None:
            logger.warning(f'{st.file_name}:{st.line_number}: slide "{title}" before any chapter, '
                           f'opening an untitled chapter')
            self._start_chapter('')

        number = len(self.presentation.slides()) + 1
        st.slide = Slide(title=cl.strip_skip_marker(title), number=number, id=f'slide_{number}',
                         skip=skip, file_name=st.file_name)
        st.chapter.slides.append(st.slide)
        st.skipping = skip
        # the body of a skipped slide is parsed and thrown away
        st.target = [] if skip else st.slide.elements

    def _start_comment(self):
        st = self.state
        self._close_blocks()
        st.comment = CommentElement()
        st.target.append(st.comment)
        st.target = st.comment.elements

    def _close_slide(self):
        st = self.state
        self._close_code()
        self._close_blocks()
        st.slide = None
        st.target = None
        st.comment = None
        st.skipping = False

    def _finish_file(self):
        st = self.state
        if st.region is not None:
            raise UnbalancedRegion(st.region.value, st.file_name, st.region_start, st.region_opener)
        self._close_slide()

    # --- block bookkeeping ---------------------------------------------

    def _close_blocks(self, keep: Optional[str] = None):
        """Close every open accumulating block except `keep`."""
        st = self.state
        if keep != 'text':
            st.text = None
        if keep != 'html':
            st.html = None
        if keep != 'choices':
            st.choices = None
        if keep != 'box':
            st.box = None
            st.box_kind = None
        if keep != 'table' and st.table is not None:
            self._close_table()
        if keep != 'lists':
            st.lists = []
            st.blank_after_list = False

    def _add(self, element, close: bool = True):
        if close:
            self._close_blocks()
        self.state.target.append(element)

    def _add_text(self, line: str):
        st = self.state
        if not cl.is_text(line):
            logger.debug(f'{st.file_name}:{st.line_number}: no construct recognized, treating as text')
        if st.text is None:
            self._close_blocks()
            st.text = TextElement(content=line.rstrip())
            self._add(st.text, close=False)
        else:
            st.text.append(line.rstrip())

    def _close_code(self):
        st = self.state
        if st.code_lines is None:
            return
        self._add(SourceElement(content='\n'.join(st.code_lines), language=st.default_language))
        st.code_lines = None
        st.code_blanks = 0

    # --- lists ---------------------------------------------------------

    def _add_list_item(self, kind: str, level: int, content: str, number: Optional[int]):
        st = self.state
        self._close_blocks(keep='lists')
        st.blank_after_list = False
        lists = st.lists

        while len(lists) > 1 and lists[-1][0] > level:
            lists.pop()
        if lists and lists[-1][0] > level:
            logger.warning(f'{st.file_name}:{st.line_number}: list item at level {level} is less indented '
                           f'than any open list, adding it at level {lists[-1][0]}')
            level = lists[-1][0]

        list_class = OrderedListElement if kind == 'ol' else UnorderedListElement
        if lists and lists[-1][0] == level and not isinstance(lists[-1][1], list_class):
            lists.pop()
            self._open_list(list_class, level, number)
        elif not lists or lists[-1][0] < level:
            if not lists and level > 1:
                logger.warning(f'{st.file_name}:{st.line_number}: list starts at level {level} '
                               f'without a parent list')
            self._open_list(list_class, level, number)

        lists[-1][1].add(ListItemElement(content=content.rstrip(), number=number))

    def _open_list(self, list_class, level: int, number: Optional[int]):
        st = self.state
        new_list = list_class(level=level)
        if isinstance(new_list, OrderedListElement) and number is not None:
            new_list.start_number = number
        if st.lists:
            st.lists[-1][1].add(new_list)
        else:
            st.target.append(new_list)
        st.lists.append((level, new_list))

    # --- tables --------------------------------------------------------

    def _table_row(self, line: str):
        st = self.state
        if st.table is None:
            self._close_blocks()
            st.table = TableElement()
            st.table_mode = TableMode.Header
            st.table_rows = []
            st.target.append(st.table)
        st.table_rows.append(cl.table_cells(line))

    def _table_separator(self, line: str):
        st = self.state
        if st.table_mode == TableMode.Body:
            logger.debug(f'{st.file_name}:{st.line_number}: second table separator ignored')
            return
        st.table.alignment = cl.table_alignment(line)
        if st.table_rows:
            st.table.headers = st.table_rows[0]
            st.table_rows = st.table_rows[1:]
        st.table_mode = TableMode.Body

    def _close_table(self):
        st = self.state
        table = st.table
        table.rows = st.table_rows
        if st.table_mode == TableMode.Header:
            # no separator line, so no header either
            table.headers = []
            table.alignment = []

        width = table.num_columns
        padded = False
        if table.headers and len(table.headers) < width:
            table.headers = table.headers + [''] * (width - len(table.headers))
            padded = True
        for idx, row in enumerate(table.rows):
            if len(row) < width:
                table.rows[idx] = row + [''] * (width - len(row))
                padded = True
        if len(table.alignment) < width:
            table.alignment = table.alignment + [Alignment.LEFT] * (width - len(table.alignment))
        if padded:
            logger.warning(f'{st.file_name}:{st.line_number}: table rows have different numbers of cells, '
                           f'padded to {width} columns')

        st.table = None
        st.table_mode = None
        st.table_rows = []

    # --- quotes and boxes ----------------------------------------------

    def _quote_family(self, line: str) -> bool:
        st = self.state
        source = cl.quote_source(line)
        if source is not None:
            if st.box_kind != 'quote':
                self._close_blocks()
                st.box = QuoteElement()
                st.box_kind = 'quote'
                st.target.append(st.box)
            st.box.source = source if st.box.source is None else st.box.source + '\n' + source
            return True

        for kind, extract in (('important', cl.important), ('question', cl.question),
                              ('box', cl.box), ('quote', cl.quote)):
            content = extract(line)
            if content is None:
                continue
            if st.box is not None and st.box_kind == kind:
                st.box.append(content)
            else:
                self._close_blocks()
                st.box = BOX_TYPES[kind](content=content)
                st.box_kind = kind
                st.target.append(st.box)
            return True
        return False

    # --- regions -------------------------------------------------------

    def _open_region(self, line: str) -> bool:
        st = self.state
        region = None
        fence = cl.fenced_code_start(line)
        if fence is not None:
            region = Region.FencedCode
            st.fence = fence
        elif cl.is_script_start(line):
            region = Region.Script
        elif cl.is_equation_start(line):
            region = Region.Equation
        elif cl.is_uml_start(line):
            widths = cl.uml_start(line)
            if widths is None:
                logger.warning(MalformedDirective("UML widths ignored", st.file_name, st.line_number, line))
                widths = (None, None)
            st.uml_widths = widths
            region = Region.UML

        if region is None:
            return False

        self._close_blocks()
        st.region = region
        st.region_start = st.line_number
        st.region_opener = line
        st.region_lines = []
        return True

    def _is_region_end(self, line: str) -> bool:
        match self.state.region:
            case Region.FencedCode:
                return cl.is_fenced_code_end(line)
            case Region.Script:
                return cl.is_script_end(line)
            case Region.Equation:
                return cl.is_equation_end(line)
            case Region.UML:
                return cl.is_uml_end(line)
        return False

    def _close_region(self):
        st = self.state
        content = '\n'.join(st.region_lines)
        match st.region:
            case Region.FencedCode:
                language, order, caption = st.fence
                element = SourceElement(content=content, language=language or st.default_language,
                                        order=order, caption=caption)
            case Region.Script:
                element = ScriptElement(content=content)
            case Region.Equation:
                element = EquationElement(content=content)
            case Region.UML:
                width_slide, width_plain = st.uml_widths
                element = UMLElement(content=content, picture_name=f'uml_{content_hash(content)}',
                                     width_slide=width_slide, width_plain=width_plain)
        st.target.append(element)
        st.region = None
        st.region_lines = []
        st.fence = None
        st.uml_widths = (None, None)

    # --- single line elements ------------------------------------------

    def _add_choice(self, correct: bool, inline: bool, text: str):
        st = self.state
        if st.choices is None:
            self._close_blocks()
            st.choices = MultipleChoiceQuestionsElement(inline=inline)
            st.target.append(st.choices)
        st.choices.add(MultipleChoice(text=text, correct=correct))

    def _include(self, line: str) -> bool:
        st = self.state
        directive = cl.code_include(line)
        if directive is None:
            logger.warning(MalformedDirective("include directive treated as text", st.file_name, st.line_number, line))
            return False
        if st.skipping:
            return True

        path, order, language = directive
        base_dir = Path(st.file_name).parent if st.file_name else None
        source = resolve_include(path, order, language, st.default_language, base_dir=base_dir,
                                 directive=line, file_name=st.file_name, line_number=st.line_number)
        self._add(source)
        return True

    def _image(self, line: str) -> bool:
        parsed = cl.image(line)
        if parsed is None:
            return False
        location, alt, title, width_slide, width_plain = parsed
        element = ImageElement(location=location, alt=alt, title=title if title is not None else alt,
                               width_slide=width_slide, width_plain=width_plain,
                               formats=detect_image_formats(location, self.config.image_dir,
                                                            self.config.image_formats))
        self._add(element)
        return True


def parse(config: ConversionConfig, files: Optional[List[Path]] = None) -> Presentation:
    """Parse `files` (default: config.source_files) in the given order."""
    presentation = Presentation.from_config(config)
    parser = Parser(config)
    for path in tqdm(files if files is not None else config.source_files, desc='Parsing sources'):
        logger.info(f'Parsing {path}')
        parser.parse_file(path, config.default_language, presentation)
    return presentation
