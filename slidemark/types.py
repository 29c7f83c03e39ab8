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

from enum import Enum
from pathlib import Path
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field, PrivateAttr, computed_field


class ConversionConfig(BaseModel):
    """Configuration for converting slide sources into a document tree."""

    source_files: List[Path] = []
    """Markdown sources, already sorted by the caller"""

    output_dir: Path = Path('.')
    """Directory receiving the converted files"""

    output_path: Optional[Path] = None
    """Path of the rendered file, set per output format"""

    slide_language: str = 'DE'
    title1: str = ''
    title2: str = ''
    section_number: Optional[int] = None
    section_name: str = ''
    copyright: str = ''
    author: str = ''
    default_language: str = 'java'
    """Language of code blocks without an explicit language"""
    description: str = ''
    term: str = ''
    create_index: bool = False
    bibliography: Optional[str] = None

    image_dir: Optional[Path] = None
    """Directory searched for alternative formats of referenced images"""

    image_formats: List[str] = ['svg', 'pdf', 'png', 'jpg', 'jpeg', 'gif']
    """Extensions probed when detecting image format variants"""

    messages: Dict[str, str] = {}
    """Localized strings used by renderers, keyed by message name"""

    toc_similarity_cutoff: int = 100
    """Minimal rapidfuzz ratio for two consecutive slide titles to share one TOC entry"""

    is_json: bool = False
    is_md: bool = False


class ElementType(str, Enum):
    Text = "Text"
    UnorderedList = "UnorderedList"
    OrderedList = "OrderedList"
    ListItem = "ListItem"
    Source = "Source"
    Table = "Table"
    Quote = "Quote"
    Important = "Important"
    Question = "Question"
    Box = "Box"
    Script = "Script"
    Equation = "Equation"
    HTML = "HTML"
    Image = "Image"
    UML = "UML"
    MultipleChoiceQuestions = "MultipleChoiceQuestions"
    Heading = "Heading"
    Button = "Button"
    VerticalSpace = "VerticalSpace"
    Comment = "Comment"


class Alignment(str, Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    CENTER = "CENTER"
    SEPARATOR = "SEPARATOR"


class ButtonKind(str, Enum):
    PLAIN = "Button"
    WITH_LOG = "Button-With-Log"
    WITH_LOG_PRE = "Button-With-Log-Pre"
    LINK_PREVIOUS = "Link-Previous"
    LIVE_CSS = "Live-CSS"
    LIVE_PREVIEW = "Live-Preview"
    LIVE_PREVIEW_FLOAT = "Live-Preview-Float"


class BaseElement(BaseModel):

    def to_s(self) -> str:
        return ''

    def digest(self) -> str:
        """Fingerprint of the textual content, empty for non-textual elements."""
        return ''

    def __str__(self) -> str:
        return self.to_s()


class TextBlockElement(BaseElement):
    """Element made of lines of text which are joined with newlines."""
    content: str = ''
    _has_lines: bool = PrivateAttr(default=False)

    def append(self, line: str):
        if self._has_lines or self.content:
            self.content = self.content + '\n' + line
        else:
            self.content = line
        self._has_lines = True

    def to_s(self) -> str:
        return self.content

    def digest(self) -> str:
        return self.content


class TextElement(TextBlockElement):
    type: Literal[ElementType.Text] = ElementType.Text


class ListItemElement(BaseElement):
    type: Literal[ElementType.ListItem] = ElementType.ListItem
    content: str
    number: Optional[int] = None
    """Literal number written in the source, ordered lists only"""

    def append(self, line: str):
        self.content = f'{self.content} {line.strip()}'

    def to_s(self) -> str:
        return self.content

    def digest(self) -> str:
        return self.content


class ListElement(BaseElement):
    level: int = 1
    """Indentation level (1-3) the list was opened at"""
    entries: List[Annotated[Union['ListItemElement', 'UnorderedListElement', 'OrderedListElement'],
                            Field(discriminator='type')]] = []

    def add(self, entry):
        self.entries.append(entry)

    def last_item(self) -> Optional[ListItemElement]:
        for entry in reversed(self.entries):
            if isinstance(entry, ListItemElement):
                return entry
        return None

    def to_s(self) -> str:
        return '\n'.join(entry.to_s() for entry in self.entries)

    def digest(self) -> str:
        return ''.join(entry.digest() + ' ' for entry in self.entries)


class UnorderedListElement(ListElement):
    type: Literal[ElementType.UnorderedList] = ElementType.UnorderedList


class OrderedListElement(ListElement):
    type: Literal[ElementType.OrderedList] = ElementType.OrderedList
    start_number: int = 1


class SourceElement(BaseElement):
    type: Literal[ElementType.Source] = ElementType.Source
    content: str = ''
    language: str = ''
    caption: Optional[str] = None
    order: Optional[int] = None
    """Position of the block in an animation sequence, from ```lang[N]"""
    include_path: Optional[str] = None
    line_range: Optional[Tuple[int, int]] = None
    """First and last line (1-based, inclusive) taken from include_path"""

    def to_s(self) -> str:
        return self.content

    def digest(self) -> str:
        return self.content


class TableElement(BaseElement):
    type: Literal[ElementType.Table] = ElementType.Table
    headers: List[str] = []
    alignment: List[Alignment] = []
    rows: List[List[str]] = []

    @property
    def num_columns(self) -> int:
        return max([len(self.headers)] + [len(row) for row in self.rows])

    def to_s(self) -> str:
        lines = []
        if self.headers:
            lines.append(' | '.join(self.headers))
        lines.extend(' | '.join(row) for row in self.rows)
        return '\n'.join(lines)

    def digest(self) -> str:
        return self.to_s()


class QuoteElement(TextBlockElement):
    type: Literal[ElementType.Quote] = ElementType.Quote
    source: Optional[str] = None


class ImportantElement(TextBlockElement):
    type: Literal[ElementType.Important] = ElementType.Important


class QuestionElement(TextBlockElement):
    type: Literal[ElementType.Question] = ElementType.Question


class BoxElement(TextBlockElement):
    type: Literal[ElementType.Box] = ElementType.Box


class ScriptElement(TextBlockElement):
    type: Literal[ElementType.Script] = ElementType.Script

    def digest(self) -> str:
        return ''


class EquationElement(TextBlockElement):
    type: Literal[ElementType.Equation] = ElementType.Equation


class HTMLElement(TextBlockElement):
    type: Literal[ElementType.HTML] = ElementType.HTML

    def digest(self) -> str:
        return ''


class ImageLicense(BaseModel):
    source: str


class ImageElement(BaseElement):
    type: Literal[ElementType.Image] = ElementType.Image
    location: str
    alt: str = ''
    title: str = ''
    width_slide: Optional[str] = None
    width_plain: Optional[str] = None
    formats: List[str] = []
    """Extensions under which the image is available"""
    license: Optional[ImageLicense] = None

    def to_s(self) -> str:
        return self.location


class UMLElement(TextBlockElement):
    type: Literal[ElementType.UML] = ElementType.UML
    picture_name: str = ''
    width_slide: Optional[str] = None
    width_plain: Optional[str] = None

    def digest(self) -> str:
        return ''


class MultipleChoice(BaseModel):
    text: str
    correct: bool = False


class MultipleChoiceQuestionsElement(BaseElement):
    type: Literal[ElementType.MultipleChoiceQuestions] = ElementType.MultipleChoiceQuestions
    inline: bool = False
    """Questions were written as `[ ].` and are rendered inside the text flow"""
    questions: List[MultipleChoice] = []

    def add(self, question: MultipleChoice):
        self.questions.append(question)

    def to_s(self) -> str:
        return '\n'.join(q.text for q in self.questions)

    def digest(self) -> str:
        return ''.join(q.text + ' ' for q in self.questions)


class HeadingElement(BaseElement):
    type: Literal[ElementType.Heading] = ElementType.Heading
    level: int
    title: str

    def to_s(self) -> str:
        return self.title

    def digest(self) -> str:
        return self.title


class ButtonElement(BaseElement):
    type: Literal[ElementType.Button] = ElementType.Button
    kind: ButtonKind = ButtonKind.PLAIN
    line_id: str
    fragment: Optional[str] = None
    """HTML fragment styled by a Live-CSS button"""


class VerticalSpaceElement(BaseElement):
    type: Literal[ElementType.VerticalSpace] = ElementType.VerticalSpace
    amount: int = 1


class CommentElement(BaseElement):
    type: Literal[ElementType.Comment] = ElementType.Comment
    elements: List['SlideElement'] = []

    def to_s(self) -> str:
        return '\n'.join(e.to_s() for e in self.elements)


SlideElement = Annotated[Union[
    TextElement,
    UnorderedListElement,
    OrderedListElement,
    SourceElement,
    TableElement,
    QuoteElement,
    ImportantElement,
    QuestionElement,
    BoxElement,
    ScriptElement,
    EquationElement,
    HTMLElement,
    ImageElement,
    UMLElement,
    MultipleChoiceQuestionsElement,
    HeadingElement,
    ButtonElement,
    VerticalSpaceElement,
    CommentElement,
], Field(discriminator='type')]


class Slide(BaseModel):
    title: str
    number: int
    id: str
    skip: bool = False
    file_name: Optional[str] = None
    elements: List[SlideElement] = []
    """Slide content; a trailing CommentElement holds the text after `---`"""

    @computed_field
    @property
    def contains_code(self) -> bool:
        return any(e.type == ElementType.Source for e in self.elements)

    @property
    def comment(self) -> Optional[CommentElement]:
        if self.elements and self.elements[-1].type == ElementType.Comment:
            return self.elements[-1]
        return None

    def digest(self) -> str:
        return ' '.join(e.digest() for e in self.elements if e.digest())


class Chapter(BaseModel):
    title: str
    number: int
    id: str
    slides: List[Slide] = []


class Presentation(BaseModel):
    slide_language: str = 'DE'
    title1: str = ''
    title2: str = ''
    section_number: Optional[int] = None
    section_name: str = ''
    copyright: str = ''
    author: str = ''
    default_language: str = 'java'
    description: str = ''
    term: str = ''
    create_index: bool = False
    bibliography: Optional[str] = None
    chapters: List[Chapter] = []

    @classmethod
    def from_config(cls, config: ConversionConfig) -> 'Presentation':
        return cls(**config.model_dump(include={
            'slide_language', 'title1', 'title2', 'section_number', 'section_name', 'copyright',
            'author', 'default_language', 'description', 'term', 'create_index', 'bibliography'}))

    def slides(self) -> List[Slide]:
        return [slide for chapter in self.chapters for slide in chapter.slides]


class TOCEntry(BaseModel):
    name: str
    anchor: str
    sub_entries: List['TOCEntry'] = []


class TOC(BaseModel):
    entries: List[TOCEntry] = []


ListElement.model_rebuild()
UnorderedListElement.model_rebuild()
OrderedListElement.model_rebuild()
CommentElement.model_rebuild()
Slide.model_rebuild()
TOCEntry.model_rebuild()
