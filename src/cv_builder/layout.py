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
Flow layout for resumes.

Sections are flowed top to bottom onto A4 pages. Text is wrapped to the
content width using real Helvetica metrics and a new page is started
whenever the next write would land below the bottom margin.

All geometry is in millimetres with the origin at the top-left corner of
the page and y growing downwards; text positions are baselines.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from cv_builder.models import ResumeRecord
from cv_builder.templates import BANNER_CONTACT, RGB, WHITE, Template, get_style

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# PAGE GEOMETRY
# ---------------------------------------------------------------------------
PAGE_WIDTH      = 210.0
PAGE_HEIGHT     = 297.0
MARGIN          = 20.0
CONTENT_WIDTH   = PAGE_WIDTH - 2 * MARGIN
LINE_HEIGHT     = 5.0

BANNER_HEIGHT   = 45.0
BANNER_NAME_Y   = 20.0
BANNER_BODY_Y   = 55.0
PLAIN_BODY_GAP  = 30.0

# ---------------------------------------------------------------------------
# TYPOGRAPHY
# ---------------------------------------------------------------------------
FONT_REGULAR    = "Helvetica"
FONT_BOLD       = "Helvetica-Bold"
FONT_ITALIC     = "Helvetica-Oblique"

SZ_NAME         = 24
SZ_TITLE        = 12
SZ_CONTACT      = 9
SZ_SECTION      = 11
SZ_BODY         = 10

RULE_WIDTH      = 0.5

LIST_SEPARATOR    = "  •  "
CONTACT_SEPARATOR = "  |  "

PLACEHOLDER_NAME  = "Your Name"
PLACEHOLDER_TITLE = "Professional Title"


@dataclass(frozen=True)
class TextRun:
    text: str
    x: float
    y: float
    font: str
    size: float
    color: RGB
    align: str = "left"


@dataclass(frozen=True)
class FilledRect:
    x: float
    y: float
    width: float
    height: float
    color: RGB


@dataclass(frozen=True)
class Rule:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB
    width: float = RULE_WIDTH


@dataclass
class Page:
    items: list = field(default_factory=list)

    def texts(self) -> List[str]:
        return [item.text for item in self.items if isinstance(item, TextRun)]

    def text_runs(self) -> List[TextRun]:
        return [item for item in self.items if isinstance(item, TextRun)]

    def lowest_baseline(self) -> float:
        return max((run.y for run in self.text_runs()), default=0.0)


@dataclass
class DocumentLayout:
    """The fully paginated result of a layout run."""
    pages: List[Page]
    title: str
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def texts(self) -> List[str]:
        return [text for page in self.pages for text in page.texts()]


@dataclass(frozen=True)
class Section:
    key: str
    title: str
    underline: float     # length of the rule under the title
    min_space: float     # room required before the title is written


SUMMARY        = Section("summary", "PROFESSIONAL SUMMARY", 40, 25)
SKILLS         = Section("skills", "SKILLS", 15, 20)
EXPERIENCE     = Section("experience", "EXPERIENCE", 25, 20)
EDUCATION      = Section("education", "EDUCATION", 23, 20)
PROJECTS       = Section("projects", "PROJECTS", 20, 20)
CERTIFICATIONS = Section("certifications", "CERTIFICATIONS", 30, 15)
LANGUAGES      = Section("languages", "LANGUAGES", 22, 15)

SECTIONS = (SUMMARY, SKILLS, EXPERIENCE, EDUCATION, PROJECTS, CERTIFICATIONS, LANGUAGES)


def drawable(text: str) -> str:
    """Replaces characters that cannot be encoded (lone surrogates) with ``?``."""
    return text.encode("utf-8", "replace").decode("utf-8")


def text_width(text: str, font: str = FONT_REGULAR, size: float = SZ_BODY) -> float:
    """Rendered width of ``text`` in millimetres."""
    return stringWidth(text, font, size) / mm


def wrap_text(text: str, max_width: float, font: str = FONT_REGULAR, size: float = SZ_BODY) -> List[str]:
    """
    Greedily wraps ``text`` into lines no wider than ``max_width``.

    Lines break only at whitespace; the spacing inside a line is kept as
    written. Explicit newlines start a new line. A single word wider than
    ``max_width`` gets a line of its own.
    """
    lines: List[str] = []
    for paragraph in (text or "").splitlines():
        start: Optional[int] = None
        end = 0
        for word in re.finditer(r"\S+", paragraph):
            if start is None:
                start = word.start()
            elif text_width(paragraph[start:word.end()], font, size) > max_width:
                lines.append(paragraph[start:end])
                start = word.start()
            end = word.end()
        if start is not None:
            lines.append(paragraph[start:end])
    return lines


def _present(value: str) -> bool:
    return bool(value and value.strip())


def _or(value: str, placeholder: str) -> str:
    return value if _present(value) else placeholder


class LayoutEngine:
    """
    Lays out one resume. Each instance owns its pages and cursor, so an
    engine must not be reused across resumes.
    """
    def __init__(self, resume: ResumeRecord, template=Template.MODERN):
        self.resume = resume
        self.template = Template.parse(template)
        self.style = get_style(self.template)
        self.pages: List[Page] = []
        self.y = MARGIN
        self.bottom = PAGE_HEIGHT - MARGIN

    # --- cursor & page management ---

    def _new_page(self):
        self.pages.append(Page())
        self.y = MARGIN
        if len(self.pages) > 1:
            logger.debug(f"    > Page break: starting page {len(self.pages)}")

    def _ensure_space(self, required: float = 0.0):
        """Starts a new page if ``required`` mm below the cursor would cross the bottom margin."""
        if self.y + required > self.bottom:
            self._new_page()

    def _emit(self, item):
        self.pages[-1].items.append(item)

    def _text(self, text: str, font: str, size: float, color: RGB, x: float = MARGIN, align: str = "left"):
        if text:
            self._emit(TextRun(drawable(text), x, self.y, font, size, color, align))

    def _right(self, text: str, font: str, size: float, color: RGB):
        self._text(text, font, size, color, x=PAGE_WIDTH - MARGIN, align="right")

    def _paragraph(self, text: str, font: str = FONT_REGULAR, size: float = SZ_BODY, color: Optional[RGB] = None):
        """Writes wrapped text line by line, breaking pages between lines as needed."""
        color = color or self.style.text
        for line in wrap_text(drawable(text), CONTENT_WIDTH, font, size):
            self._ensure_space()
            self._text(line, font, size, color)
            self.y += LINE_HEIGHT

    # --- header ---

    def _header(self):
        personal = self.resume.personal
        style = self.style

        if style.banner:
            self._emit(FilledRect(0, 0, PAGE_WIDTH, BANNER_HEIGHT, style.primary))
            name_y = BANNER_NAME_Y
            name_color, title_color, contact_color = WHITE, WHITE, BANNER_CONTACT
        else:
            name_y = MARGIN
            name_color, title_color, contact_color = style.text, style.primary, style.secondary

        self.y = name_y
        self._text(_or(personal.full_name, PLACEHOLDER_NAME), FONT_BOLD, SZ_NAME, name_color)

        self.y = name_y + 8
        self._text(_or(personal.title, PLACEHOLDER_TITLE), FONT_REGULAR, SZ_TITLE, title_color)

        contact = [p for p in (personal.email, personal.phone, personal.location) if _present(p)]
        links = [p for p in (personal.website, personal.linkedin, personal.github) if _present(p)]

        self.y = name_y + 15
        self._text(CONTACT_SEPARATOR.join(contact), FONT_REGULAR, SZ_CONTACT, contact_color)
        self.y = name_y + 20
        self._text(CONTACT_SEPARATOR.join(links), FONT_REGULAR, SZ_CONTACT, contact_color)

        self.y = BANNER_BODY_Y if style.banner else MARGIN + PLAIN_BODY_GAP

    # --- sections ---

    def _section_title(self, section: Section):
        self._ensure_space(section.min_space)
        self._text(section.title, FONT_BOLD, SZ_SECTION, self.style.primary)
        self.y += 2
        self._emit(Rule(MARGIN, self.y, MARGIN + section.underline, self.y, self.style.primary))
        self.y += 5

    def _dated_entry(self, required: float, heading: str, date: str, place: str, description: str):
        """Heading left with the date right, the place underneath, then the description."""
        self._ensure_space(required)
        self._text(heading, FONT_BOLD, SZ_BODY, self.style.text)
        self._right(date.strip(), FONT_REGULAR, SZ_BODY, self.style.secondary)

        self.y += LINE_HEIGHT
        self._ensure_space()
        self._text(place, FONT_REGULAR, SZ_BODY, self.style.primary)

        if _present(description):
            self.y += LINE_HEIGHT
            self._paragraph(description)
        self.y += 6

    def _summary(self):
        summary = self.resume.personal.summary
        if not _present(summary):
            return
        self._section_title(SUMMARY)
        self._paragraph(summary)
        self.y += 8

    def _skills(self):
        if not self.resume.skills:
            return
        self._section_title(SKILLS)
        self._paragraph(LIST_SEPARATOR.join(self.resume.skills))
        self.y += 8

    def _experience(self):
        if not self.resume.experience:
            return
        self._section_title(EXPERIENCE)
        for job in self.resume.experience:
            self._dated_entry(
                25,
                _or(job.title, "Job Title"),
                job.duration,
                _or(job.company, "Company"),
                job.description,
            )

    def _education(self):
        if not self.resume.education:
            return
        self._section_title(EDUCATION)
        for edu in self.resume.education:
            self._dated_entry(
                20,
                _or(edu.degree, "Degree"),
                edu.year,
                _or(edu.institution, "Institution"),
                edu.description,
            )

    def _projects(self):
        if not self.resume.projects:
            return
        self._section_title(PROJECTS)
        for project in self.resume.projects:
            self._ensure_space(20)
            self._text(_or(project.name, "Project Name"), FONT_BOLD, SZ_BODY, self.style.text)
            if _present(project.tech):
                self._right(project.tech, FONT_ITALIC, SZ_BODY, self.style.secondary)
            if _present(project.description):
                self.y += LINE_HEIGHT
                self._paragraph(project.description)
            self.y += 6

    def _certifications(self):
        if not self.resume.certifications:
            return
        self._section_title(CERTIFICATIONS)
        for cert in self.resume.certifications:
            self._ensure_space(10)
            self._text(f"{cert.name} - {cert.issuer} ({cert.year})", FONT_REGULAR, SZ_BODY, self.style.text)
            self.y += LINE_HEIGHT
        self.y += 3

    def _languages(self):
        if not self.resume.languages:
            return
        self._section_title(LANGUAGES)
        line = LIST_SEPARATOR.join(f"{lang.name} ({lang.level})" for lang in self.resume.languages)
        self._paragraph(line)
        self.y += 8

    def run(self) -> DocumentLayout:
        self._new_page()
        self._header()
        self._summary()
        self._skills()
        self._experience()
        self._education()
        self._projects()
        self._certifications()
        self._languages()

        title = drawable(_or(self.resume.personal.full_name, PLACEHOLDER_NAME))
        logger.debug(f"Laid out '{title}' on {len(self.pages)} page(s) using the {self.template.value} template")
        return DocumentLayout(pages=self.pages, title=title)


def layout_resume(resume: ResumeRecord, template=Template.MODERN) -> DocumentLayout:
    """Computes the paginated layout for ``resume`` in the given template."""
    return LayoutEngine(resume, template).run()


def find_section(layout: DocumentLayout, section: Section) -> Optional[Tuple[int, int]]:
    """(page index, item index) of a section's title run, or None if it was skipped."""
    for page_no, page in enumerate(layout.pages):
        for index, item in enumerate(page.items):
            if isinstance(item, TextRun) and item.text == section.title and item.font == FONT_BOLD \
                    and item.size == SZ_SECTION:
                return page_no, index
    return None
