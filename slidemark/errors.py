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

from typing import Optional


class SlidemarkError(Exception):
    """Base class for all errors raised while converting a presentation."""

    def __init__(self, message: str, file_name: Optional[str] = None,
                 line_number: Optional[int] = None, line: Optional[str] = None):
        self.message = message
        self.file_name = file_name
        self.line_number = line_number
        self.line = line
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = []
        if self.file_name is not None:
            location.append(f'file "{self.file_name}"')
        if self.line_number is not None:
            location.append(f'line {self.line_number}')
        text = self.message
        if location:
            text += ' (' + ', '.join(location) + ')'
        if self.line is not None:
            text += f': {self.line.rstrip()}'
        return text


class MalformedDirective(SlidemarkError):
    """A directive that does not follow its grammar."""


class UnresolvedInclude(SlidemarkError):
    """An !INCLUDESRC target that is missing or has no such section."""

    def __init__(self, message: str, include_path: str, file_name: Optional[str] = None,
                 line_number: Optional[int] = None, line: Optional[str] = None):
        self.include_path = include_path
        super().__init__(message, file_name, line_number, line)


class UnbalancedRegion(SlidemarkError):
    """A code, script, equation or UML region still open at end of input."""

    def __init__(self, region: str, file_name: Optional[str] = None,
                 line_number: Optional[int] = None, line: Optional[str] = None):
        self.region = region
        super().__init__(f'{region} region opened here is never closed', file_name, line_number, line)
