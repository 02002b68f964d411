# Copyright 2026 Justin Cook
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

"""
Render templates: colour schemes and header layout per style variant.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
BANNER_CONTACT: RGB = (220, 220, 220)


class Template(str, Enum):
    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"

    @classmethod
    def parse(cls, value) -> "Template":
        """Accepts a Template or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown template '{value}'. Expected one of: {names}") from None


@dataclass(frozen=True)
class TemplateStyle:
    primary: RGB
    secondary: RGB
    text: RGB
    banner: bool


_STYLES = {
    Template.MODERN: TemplateStyle(primary=(20, 184, 166), secondary=(100, 116, 139), text=(30, 41, 59), banner=True),
    Template.CLASSIC: TemplateStyle(primary=(59, 130, 246), secondary=(107, 114, 128), text=(17, 24, 39), banner=False),
    Template.MINIMAL: TemplateStyle(primary=(0, 0, 0), secondary=(75, 85, 99), text=(31, 41, 55), banner=False),
}


def get_style(template) -> TemplateStyle:
    return _STYLES[Template.parse(template)]
