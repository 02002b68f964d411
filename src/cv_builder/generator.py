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
Handles the generation of the final PDF CV.
"""

import logging
import os
import re
from io import BytesIO

from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from cv_builder.layout import DocumentLayout, FilledRect, Rule, TextRun, layout_resume
from cv_builder.models import ResumeRecord
from cv_builder.templates import Template

logger = logging.getLogger(__name__)

FILENAME_FALLBACK = "CV"
FILENAME_SUFFIX = "_Resume.pdf"


class CVBuilderError(Exception):
    """Base class for errors raised by the CV builder."""


class RenderError(CVBuilderError):
    """The PDF document could not be created or written."""


def derive_filename(full_name: str) -> str:
    """
    Builds the download name from the person's name,
    e.g. 'Ada Lovelace' -> 'Ada_Lovelace_Resume.pdf'.
    """
    safe_name = re.sub(r'[^\w\s.-]', '', full_name or '').strip()
    safe_name = re.sub(r'\s+', '_', safe_name)
    return f"{safe_name or FILENAME_FALLBACK}{FILENAME_SUFFIX}"


def _rgb(color):
    return tuple(channel / 255 for channel in color)


class PDFGenerator:
    """
    Generates a styled PDF resume from a ResumeRecord.
    """
    def __init__(self, template=Template.MODERN):
        self.template = Template.parse(template)

    def _paint(self, layout: DocumentLayout) -> bytes:
        """Draws every page of ``layout`` onto a fresh canvas and returns the PDF bytes."""
        page_height = layout.height
        buffer = BytesIO()

        # invariant=1 keeps timestamps and document IDs out of the file
        pdf = canvas.Canvas(buffer, pagesize=(layout.width * mm, layout.height * mm), invariant=1)
        pdf.setTitle(layout.title)
        pdf.setCreator("cv-builder")

        for page in layout.pages:
            for item in page.items:
                if isinstance(item, FilledRect):
                    pdf.setFillColorRGB(*_rgb(item.color))
                    pdf.rect(
                        item.x * mm,
                        (page_height - item.y - item.height) * mm,
                        item.width * mm,
                        item.height * mm,
                        stroke=0,
                        fill=1,
                    )
                elif isinstance(item, Rule):
                    pdf.setStrokeColorRGB(*_rgb(item.color))
                    pdf.setLineWidth(item.width * mm)
                    pdf.line(item.x1 * mm, (page_height - item.y1) * mm, item.x2 * mm, (page_height - item.y2) * mm)
                elif isinstance(item, TextRun):
                    pdf.setFont(item.font, item.size)
                    pdf.setFillColorRGB(*_rgb(item.color))
                    if item.align == "right":
                        pdf.drawRightString(item.x * mm, (page_height - item.y) * mm, item.text)
                    else:
                        pdf.drawString(item.x * mm, (page_height - item.y) * mm, item.text)
            pdf.showPage()

        pdf.save()
        return buffer.getvalue()

    def render(self, data: ResumeRecord) -> bytes:
        """
        Lays out and paints the resume.

        Returns:
            bytes: The complete PDF document.

        Raises:
            RenderError: If the canvas cannot be created or written.
        """
        layout = layout_resume(data, self.template)
        try:
            content = self._paint(layout)
        except Exception as e:
            logger.error(f"Error rendering PDF: {e}")
            raise RenderError(f"Could not render PDF: {e}") from e
        logger.info(f"    > Rendered {layout.page_count} page(s) with the {self.template.value} template")
        return content

    def generate(self, data: ResumeRecord, output_path: str) -> str:
        """
        Main entry point to generate the document on disk.

        Args:
            data (ResumeRecord): The structured resume.
            output_path (str): A directory (the filename is derived from the
                person's name) or the full path of the PDF to write.

        Returns:
            str: The path that was written.
        """
        if os.path.isdir(output_path) or not output_path.lower().endswith(".pdf"):
            output_path = os.path.join(output_path, derive_filename(data.personal.full_name))

        # Render fully in memory first so a failure never leaves a partial file
        content = self.render(data)

        try:
            directory = os.path.dirname(output_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(output_path, 'wb') as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error writing {output_path}: {e}")
            raise RenderError(f"Could not write {output_path}: {e}") from e

        logger.info(f"CV generated successfully: {output_path}")
        return output_path


def render(resume: ResumeRecord, template=Template.MODERN) -> bytes:
    """Renders ``resume`` to PDF bytes."""
    return PDFGenerator(template).render(resume)


def save(resume: ResumeRecord, template=Template.MODERN, output_dir: str = ".") -> str:
    """Renders ``resume`` into ``output_dir`` under the derived filename."""
    return PDFGenerator(template).generate(resume, output_dir)
