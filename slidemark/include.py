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
from pathlib import Path
from typing import List, Optional, Tuple, Union

from slidemark.errors import UnresolvedInclude
from slidemark.types import SourceElement
from slidemark.utils import read_lines

logger = logging.getLogger(__name__)

# A line containing this mark separates two sections of an included file
SECTION_MARKER = '-8<-'


def split_sections(lines: List[str]) -> List[Tuple[int, int]]:
    """Line ranges (1-based, inclusive) of the sections of an included file.

    Without any marker line every line is a section of its own.
    """
    if not any(SECTION_MARKER in line for line in lines):
        return [(idx, idx) for idx in range(1, len(lines) + 1)]

    sections = []
    start = 1
    for idx, line in enumerate(lines, 1):
        if SECTION_MARKER in line:
            if idx > start:
                sections.append((start, idx - 1))
            start = idx + 1
    if start <= len(lines):
        sections.append((start, len(lines)))
    return sections


def resolve_include(path: str, order: int, language: str, default_language: str,
                    base_dir: Optional[Union[str, Path]] = None, directive: Optional[str] = None,
                    file_name: Optional[str] = None, line_number: Optional[int] = None) -> SourceElement:
    target = Path(path)
    if not target.is_absolute() and base_dir is not None:
        target = Path(base_dir) / target

    if not target.is_file():
        raise UnresolvedInclude(f'Included file "{path}" not found', str(target),
                                file_name, line_number, directive)
    try:
        lines = read_lines(target)
    except OSError as e:
        raise UnresolvedInclude(f'Included file "{path}" cannot be read: {e}', str(target),
                                file_name, line_number, directive) from e

    effective_language = language if language else default_language

    if order == 0:
        logger.debug(f'Including whole file {target}')
        return SourceElement(content='\n'.join(lines).rstrip('\n'),
                             language=effective_language,
                             include_path=str(target),
                             line_range=(1, len(lines)) if lines else None)

    sections = split_sections(lines)
    if order < 1 or order > len(sections):
        raise UnresolvedInclude(f'Included file "{path}" has {len(sections)} sections, section {order} requested',
                                str(target), file_name, line_number, directive)

    first, last = sections[order - 1]
    logger.debug(f'Including lines {first}-{last} of {target}')
    return SourceElement(content='\n'.join(lines[first - 1:last]),
                         language=effective_language,
                         order=order,
                         include_path=str(target),
                         line_range=(first, last))
