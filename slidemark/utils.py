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

import hashlib
import logging
import re
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


def read_lines(path: Union[str, Path]) -> List[str]:
    """Read a text file completely, returning its lines without line terminators."""
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError:
        logger.warning(f'{path} is not valid UTF-8, reading it as latin-1')
        text = path.read_text(encoding='latin-1')
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return [line.rstrip('\r') for line in lines]


def make_line_id(file_name: Optional[str], line_number: int) -> str:
    stem = Path(file_name).stem if file_name else 'line'
    return re.sub(r'[^A-Za-z0-9]', '_', f'{stem}_{line_number}')


def content_hash(text: str) -> str:
    return hashlib.sha1(text.encode('utf-8')).hexdigest()[:12]


def detect_image_formats(location: str, image_dir: Optional[Path], formats: List[str]) -> List[str]:
    """Extensions under which the image `location` exists below image_dir.

    The extension written in the source always comes first.
    """
    location_path = Path(location)
    own_ext = location_path.suffix.lstrip('.').lower()

    found = []
    if image_dir is not None:
        candidate = Path(image_dir) / location_path
        for ext in formats:
            if candidate.with_suffix('.' + ext).is_file():
                found.append(ext)

    if own_ext in found:
        found.remove(own_ext)
    if own_ext:
        found.insert(0, own_ext)
    return found
