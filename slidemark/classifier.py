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

"""Predicates telling which syntax a single source line expresses.

Every function looks at one line only. Extractors return ``None`` when the
line does not match; nothing in here raises.
"""

import re
from typing import List, Optional, Tuple

from slidemark.types import Alignment, ButtonKind

SKIP_MARKER = '--skip--'
CODE_PREFIX = '    '

# list level -> exact indentation
LIST_INDENT = {1: 2, 2: 4, 3: 6}

_UL_RE = {level: re.compile(r'^ {%d}[*\-] (.*)' % indent) for level, indent in LIST_INDENT.items()}
_OL_RE = {level: re.compile(r'^ {%d}([0-9]+)\. (.*)' % indent) for level, indent in LIST_INDENT.items()}

_COMMENT_RE = re.compile(r'<!--(.*)-->')
_SPACE_COMMENT_RE = re.compile(r'<!-- Spacing: ([0-9]*) -->')
_SOURCE_RE = re.compile(r'^ {4}[^*\-](.*)')
_TABLE_ROW_RE = re.compile(r'^\|(.*)\| *$')
_TABLE_SEPARATOR_RE = re.compile(r'^\|[-]{2,}\|.*')
_QUOTE_RE = re.compile(r'^> (.*)$')
_QUOTE_SOURCE_RE = re.compile(r'^>> (.*)$')
_IMPORTANT_RE = re.compile(r'^>! (.*)$')
_QUESTION_RE = re.compile(r'^>\? (.*)$')
_BOX_RE = re.compile(r'^>: (.*)$')
_TEXT_RE = re.compile(r'^[=\-A-Za-z0-9_ÄÖÜäöüß`*"].*$')
_MULTIPLE_CHOICE_RE = re.compile(r'^\[([ Xx*])\](\.?) (.*)')
_IMAGE_RE = re.compile(r'!\[(.*?)\]\((.+?)\)')
_IMAGE_FULL_RE = re.compile(r'^!\[(.*?)\]\((\S+?)(?: +"(.*?)")?\)(?:/(.*?)/)?(?:/(.*?)/)?\s*$')
_FENCE_START_RE = re.compile(r'^```([a-zA-Z0-9]*)(?:\[([1-9])\])?(?:\{(.*?)\})?')
_CHAPTER_RE = re.compile(r'^ {0,3}# (.*)')
_SLIDE_RE = re.compile(r'^ {0,3}## (.*)')
_HEADING_RE = re.compile(r'^(#{3,}) (.*)')
_UML_WIDTHS_RE = re.compile(r'^@startuml\[(.*?)\]\[(.*?)\]$')
_UML_WIDTH_RE = re.compile(r'^@startuml\[(.*)\]$')
_BUTTON_RE = re.compile(r'^\(\(([A-Za-z-]+)(?: (.*?))?\)\)$')
_INCLUDE_RE = re.compile(r'^!INCLUDESRC(?:\[([0-9]*?)\])? "(.*?)"(?: (.*?))?$')


def is_empty(line: str) -> bool:
    return not line.strip()


def comment(line: str) -> Optional[str]:
    match = _COMMENT_RE.search(line.strip())
    return match.group(1) if match else None


def is_comment(line: str) -> bool:
    return comment(line) is not None


def space_comment(line: str) -> Optional[int]:
    match = _SPACE_COMMENT_RE.search(line.strip())
    if not match:
        return None
    return int(match.group(1)) if match.group(1) else 1


def is_vertical_space(line: str) -> bool:
    return line.strip() == '<br>'


def is_source(line: str) -> bool:
    return bool(_SOURCE_RE.match(line))


def trim_code_prefix(line: str) -> str:
    if line.startswith(CODE_PREFIX):
        return line[len(CODE_PREFIX):]
    return line.lstrip(' ')


def is_table_row(line: str) -> bool:
    return bool(_TABLE_ROW_RE.match(line))


def is_table_separator(line: str) -> bool:
    return bool(_TABLE_SEPARATOR_RE.match(line.strip()))


def table_cells(line: str) -> List[str]:
    stripped = line.strip()
    if stripped.startswith('|'):
        stripped = stripped[1:]
    if stripped.endswith('|'):
        stripped = stripped[:-1]
    return [cell.strip() for cell in stripped.split('|')]


def table_alignment(line: str) -> List[Alignment]:
    """Column alignment encoded in a `|---|:--:|` header separator."""
    alignment = []
    for cell in table_cells(line):
        if not cell:
            alignment.append(Alignment.SEPARATOR)
        elif cell.startswith(':') and cell.endswith(':') and len(cell) > 1:
            alignment.append(Alignment.CENTER)
        elif cell.endswith(':'):
            alignment.append(Alignment.RIGHT)
        else:
            alignment.append(Alignment.LEFT)
    return alignment


def _group(pattern, line: str, group: int = 1) -> Optional[str]:
    match = pattern.match(line)
    return match.group(group) if match else None


def quote(line: str) -> Optional[str]:
    return _group(_QUOTE_RE, line)


def quote_source(line: str) -> Optional[str]:
    return _group(_QUOTE_SOURCE_RE, line)


def important(line: str) -> Optional[str]:
    return _group(_IMPORTANT_RE, line)


def question(line: str) -> Optional[str]:
    return _group(_QUESTION_RE, line)


def box(line: str) -> Optional[str]:
    return _group(_BOX_RE, line)


def is_normal(line: str) -> bool:
    return bool(line) and not line[0].isspace()


def is_text(line: str) -> bool:
    return bool(_TEXT_RE.match(line))


def multiple_choice(line: str) -> Optional[Tuple[bool, bool, str]]:
    """Returns (correct, inline, text) for `[ ]`, `[x]`, `[X]` and `[*]` lines."""
    match = _MULTIPLE_CHOICE_RE.match(line)
    if not match:
        return None
    return match.group(1) != ' ', match.group(2) == '.', match.group(3).rstrip()


def is_html(line: str) -> bool:
    return line.startswith('<')


def is_image(line: str) -> bool:
    return bool(_IMAGE_RE.search(line))


def image(line: str) -> Optional[Tuple[str, str, Optional[str], Optional[str], Optional[str]]]:
    """Returns (location, alt, title, width_slide, width_plain) of `![alt](loc "title")/ws//wp/`."""
    match = _IMAGE_FULL_RE.match(line.strip())
    if not match:
        return None
    alt, location, title, width_slide, width_plain = match.groups()
    return location, alt, title, width_slide, width_plain


def fenced_code_start(line: str) -> Optional[Tuple[str, Optional[int], Optional[str]]]:
    """Returns (language, order, caption) of a ```lang[N]{caption} line."""
    stripped = line.strip()
    if stripped == '```':
        return None
    match = _FENCE_START_RE.match(stripped)
    if not match:
        return None
    language, order, caption = match.groups()
    return language, int(order) if order else None, caption


def is_fenced_code_start(line: str) -> bool:
    return fenced_code_start(line) is not None


def is_fenced_code_end(line: str) -> bool:
    return line.strip() == '```'


def is_skipped_slide(line: str) -> bool:
    return SKIP_MARKER in line


def strip_skip_marker(title: str) -> str:
    return title.replace(SKIP_MARKER, '').strip()


def is_script_start(line: str) -> bool:
    return line.strip() == '<script>'


def is_script_end(line: str) -> bool:
    return line.strip() == '</script>'


def is_equation_start(line: str) -> bool:
    return line.strip() == '\\['


def is_equation_end(line: str) -> bool:
    return line.strip() == '\\]'


def is_separator(line: str) -> bool:
    return line.startswith('---')


def ul_item(line: str, level: int) -> Optional[str]:
    return _group(_UL_RE[level], line)


def ol_item(line: str, level: int) -> Optional[Tuple[int, str]]:
    match = _OL_RE[level].match(line)
    if not match:
        return None
    return int(match.group(1)), match.group(2)


def list_item(line: str) -> Optional[Tuple[str, int, str, Optional[int]]]:
    """Returns (kind, level, content, number) where kind is 'ul' or 'ol'."""
    for level in LIST_INDENT:
        content = ul_item(line, level)
        if content is not None:
            return 'ul', level, content, None
        numbered = ol_item(line, level)
        if numbered is not None:
            return 'ol', level, numbered[1], numbered[0]
    return None


def slide_title(line: str) -> Optional[str]:
    title = _group(_SLIDE_RE, line)
    return None if title is None else title.strip()


def chapter_title(line: str) -> Optional[str]:
    title = _group(_CHAPTER_RE, line)
    return None if title is None else title.strip()


def heading(line: str) -> Optional[Tuple[int, str]]:
    match = _HEADING_RE.match(line)
    if not match:
        return None
    return len(match.group(1)), match.group(2).strip()


def is_uml_start(line: str) -> bool:
    return line.strip().startswith('@startuml')


def uml_start(line: str) -> Optional[Tuple[Optional[str], Optional[str]]]:
    """Returns the (slide, plain) widths of a `@startuml[w1][w2]` line."""
    stripped = line.strip()
    match = _UML_WIDTHS_RE.match(stripped)
    if match:
        return match.group(1), match.group(2)
    match = _UML_WIDTH_RE.match(stripped)
    if match:
        return match.group(1), match.group(1)
    if stripped == '@startuml':
        return None, None
    return None


def is_uml_end(line: str) -> bool:
    return line.strip() == '@enduml'


def button(line: str) -> Optional[Tuple[ButtonKind, Optional[str]]]:
    """Returns (kind, fragment) of a `((Live-CSS fragment))` style macro."""
    match = _BUTTON_RE.match(line.strip())
    if not match:
        return None
    try:
        kind = ButtonKind(match.group(1))
    except ValueError:
        return None
    return kind, match.group(2)


def is_code_include(line: str) -> bool:
    return line.strip().startswith('!INCLUDESRC')


def code_include(line: str) -> Optional[Tuple[str, int, str]]:
    """Returns (path, order, language) of an `!INCLUDESRC[N] "path" lang` directive."""
    match = _INCLUDE_RE.match(line.strip())
    if not match:
        return None
    order, path, language = match.groups()
    return path, int(order) if order else 0, (language or '').strip()
