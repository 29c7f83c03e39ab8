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

from rapidfuzz import fuzz

from slidemark.types import TOC, Presentation, TOCEntry


def _same_title(previous: str, current: str, similarity_cutoff: int) -> bool:
    if previous == current:
        return True
    if similarity_cutoff >= 100:
        return False
    return fuzz.ratio(previous, current, score_cutoff=similarity_cutoff) > 0


def build_toc(presentation: Presentation, similarity_cutoff: int = 100) -> TOC:
    """Table of contents: one entry per chapter, one sub-entry per shown slide.

    Consecutive slides with the same title (animation steps, "continued"
    slides) only get the sub-entry of the first one.
    """
    toc = TOC()
    for chapter in presentation.chapters:
        entry = TOCEntry(name=chapter.title, anchor=chapter.id)
        last_name = None
        for slide in chapter.slides:
            if slide.skip:
                continue
            if last_name is not None and _same_title(last_name, slide.title, similarity_cutoff):
                continue
            entry.sub_entries.append(TOCEntry(name=slide.title, anchor=slide.id))
            last_name = slide.title
        toc.entries.append(entry)
    return toc
