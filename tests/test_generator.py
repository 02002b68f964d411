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

import os
import shutil
import tempfile
import unittest
from io import BytesIO
from unittest.mock import patch

from pypdf import PdfReader

from cv_builder import generator
from cv_builder.generator import PDFGenerator, RenderError, CVBuilderError, derive_filename
from cv_builder.layout import layout_resume
from cv_builder.models import EntryList, Experience, PersonalInfo, ResumeRecord, sample_resume
from cv_builder.templates import Template

LONG_DESCRIPTION = "Kept the operation cards consistent across revisions of the engine. " * 6


def overflowing_resume():
    return ResumeRecord(
        personal=PersonalInfo(full_name="Ada Lovelace"),
        experience=EntryList(
            Experience(title=f"Engineer {i}", company="Acme", duration="2020", description=LONG_DESCRIPTION)
            for i in range(15)
        ),
    )


class TestDeriveFilename(unittest.TestCase):

    def test_name_whitespace_collapsed(self):
        self.assertEqual(derive_filename("Ada  Lovelace"), "Ada_Lovelace_Resume.pdf")

    def test_empty_name_uses_fallback(self):
        self.assertEqual(derive_filename(""), "CV_Resume.pdf")
        self.assertEqual(derive_filename("   "), "CV_Resume.pdf")
        self.assertEqual(derive_filename(None), "CV_Resume.pdf")

    def test_path_characters_dropped(self):
        self.assertEqual(derive_filename("Ada/Byron"), "AdaByron_Resume.pdf")
        self.assertNotIn("/", derive_filename("../etc/passwd"))


class TestPDFGenerator(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_render_is_byte_identical(self):
        resume = sample_resume()
        first = PDFGenerator(Template.CLASSIC).render(resume)
        second = PDFGenerator(Template.CLASSIC).render(resume)
        self.assertTrue(first.startswith(b"%PDF"))
        self.assertEqual(first, second)

    def test_templates_differ(self):
        resume = sample_resume()
        self.assertNotEqual(generator.render(resume, "modern"), generator.render(resume, "minimal"))

    def test_pdf_pages_match_layout(self):
        resume = overflowing_resume()
        content = generator.render(resume, Template.MINIMAL)
        reader = PdfReader(BytesIO(content))
        self.assertEqual(len(reader.pages), layout_resume(resume, Template.MINIMAL).page_count)
        self.assertGreaterEqual(len(reader.pages), 2)
        self.assertIn("Ada Lovelace", reader.pages[0].extract_text())
        self.assertEqual(reader.metadata.title, "Ada Lovelace")

    def test_empty_resume_single_page_with_placeholders(self):
        reader = PdfReader(BytesIO(generator.render(ResumeRecord())))
        self.assertEqual(len(reader.pages), 1)
        text = reader.pages[0].extract_text()
        self.assertIn("Your Name", text)
        self.assertIn("Professional Title", text)
        self.assertNotIn("SKILLS", text)

    def test_generate_into_directory_uses_derived_name(self):
        path = PDFGenerator().generate(sample_resume(), self.test_dir)
        self.assertEqual(path, os.path.join(self.test_dir, "Mukitu_Islam_Nishat_Resume.pdf"))
        self.assertTrue(os.path.exists(path))

    def test_generate_explicit_path_creates_parent(self):
        target = os.path.join(self.test_dir, "nested", "cv.pdf")
        path = generator.save(ResumeRecord(), Template.MODERN, target)
        self.assertEqual(path, target)
        with open(target, 'rb') as f:
            self.assertEqual(f.read(), generator.render(ResumeRecord(), Template.MODERN))

    @patch('cv_builder.generator.canvas.Canvas', side_effect=MemoryError("out of memory"))
    def test_canvas_failure_raises_render_error(self, mock_canvas):
        with self.assertRaises(RenderError) as ctx:
            PDFGenerator().render(sample_resume())
        self.assertIsInstance(ctx.exception, CVBuilderError)
        self.assertIsInstance(ctx.exception.__cause__, MemoryError)

    @patch('cv_builder.generator.canvas.Canvas', side_effect=MemoryError("out of memory"))
    def test_failed_render_writes_nothing(self, mock_canvas):
        with self.assertRaises(RenderError):
            PDFGenerator().generate(sample_resume(), self.test_dir)
        self.assertEqual(os.listdir(self.test_dir), [])

    def test_unencodable_characters_are_replaced(self):
        resume = ResumeRecord(personal=PersonalInfo(full_name="Ada \ud800 L", summary="Notes \udc80 on the engine."))
        self.assertIn("Ada ? L", layout_resume(resume, Template.CLASSIC).texts())
        self.assertEqual(layout_resume(resume).title, "Ada ? L")

        content = PDFGenerator(Template.CLASSIC).render(resume)
        self.assertTrue(content.startswith(b"%PDF"))
        text = PdfReader(BytesIO(content)).pages[0].extract_text()
        self.assertIn("Notes ? on the engine.", text)

    def test_non_latin_text_renders(self):
        resume = ResumeRecord(personal=PersonalInfo(full_name="মুকিতু ইসলাম"))
        content = PDFGenerator().render(resume)
        self.assertEqual(len(PdfReader(BytesIO(content)).pages), 1)

    def test_unwritable_destination_raises_render_error(self):
        blocker = os.path.join(self.test_dir, "file")
        with open(blocker, 'w') as f:
            f.write("x")
        with self.assertRaises(RenderError):
            PDFGenerator().generate(ResumeRecord(), os.path.join(blocker, "cv.pdf"))

if __name__ == '__main__':
    unittest.main()
