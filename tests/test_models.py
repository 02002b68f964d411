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

import unittest
from cv_builder.models import (
    EntryList, Experience, Education, Language, PersonalInfo, ResumeRecord, sample_resume,
)

class TestEntryList(unittest.TestCase):

    def test_add_assigns_ids_in_order(self):
        entries = EntryList()
        first = entries.add(Experience(title="A"))
        second = entries.add(Experience(title="B"))
        self.assertEqual(first.id, "1")
        self.assertEqual(second.id, "2")
        self.assertEqual([e.title for e in entries], ["A", "B"])

    def test_generated_ids_skip_existing(self):
        entries = EntryList([Experience(id="1"), Experience(id="2")])
        added = entries.add(Experience(title="New"))
        self.assertEqual(added.id, "3")

    def test_duplicate_id_rejected(self):
        entries = EntryList([Experience(id="x")])
        with self.assertRaises(ValueError):
            entries.add(Experience(id="x"))

    def test_update_in_place_keeps_order(self):
        entries = EntryList([Experience(id="a", title="A"), Experience(id="b", title="B"), Experience(id="c", title="C")])
        entries.update("b", title="Lead", company="Acme")
        self.assertEqual([e.title for e in entries], ["A", "Lead", "C"])
        self.assertEqual(entries.get("b").company, "Acme")

    def test_update_unknown_id(self):
        with self.assertRaises(KeyError):
            EntryList().update("missing", title="X")

    def test_update_cannot_change_id(self):
        entries = EntryList([Experience(id="a")])
        with self.assertRaises(ValueError):
            entries.update("a", id="b")

    def test_remove(self):
        entries = EntryList([Education(id="1", degree="BSc"), Education(id="2", degree="MSc")])
        removed = entries.remove("1")
        self.assertEqual(removed.degree, "BSc")
        self.assertEqual(len(entries), 1)
        self.assertNotIn("1", entries)
        with self.assertRaises(KeyError):
            entries.remove("1")

    def test_truthiness(self):
        self.assertFalse(EntryList())
        self.assertTrue(EntryList([Language(name="English")]))

    def test_copy_is_independent(self):
        entries = EntryList([Experience(id="1", title="A")])
        clone = entries.copy()
        clone.update("1", title="B")
        self.assertEqual(entries.get("1").title, "A")


class TestResumeRecord(unittest.TestCase):

    def test_add_skill_trims_and_deduplicates(self):
        resume = ResumeRecord()
        self.assertTrue(resume.add_skill("  Python "))
        self.assertFalse(resume.add_skill("Python"))
        self.assertFalse(resume.add_skill("   "))
        self.assertEqual(resume.skills, ["Python"])

    def test_remove_skill(self):
        resume = ResumeRecord(skills=["Go", "Rust"])
        self.assertTrue(resume.remove_skill("Go"))
        self.assertFalse(resume.remove_skill("Go"))
        self.assertEqual(resume.skills, ["Rust"])

    def test_with_personal_leaves_source_record_untouched(self):
        resume = ResumeRecord(personal=PersonalInfo(full_name="Ada"), skills=["Go"])
        updated = resume.with_personal(title="Engineer")
        updated.add_skill("Rust")
        self.assertEqual(updated.personal.title, "Engineer")
        self.assertEqual(resume.personal.title, "")
        self.assertEqual(resume.skills, ["Go"])

    def test_from_dict_camel_case(self):
        resume = ResumeRecord.from_dict({
            "personalInfo": {"fullName": "Ada Lovelace", "title": "Analyst", "email": None},
            "experience": [{"id": 7, "title": "Engineer", "company": "Acme", "duration": "2020-2022"}],
            "skills": ["Go", "Rust"],
            "languages": [{"name": "English", "level": "Native"}],
            "unknown": "ignored",
        })
        self.assertEqual(resume.personal.full_name, "Ada Lovelace")
        self.assertEqual(resume.personal.email, "")
        job = list(resume.experience)[0]
        self.assertEqual(job.id, "7")
        self.assertEqual(job.description, "")
        self.assertEqual(resume.skills, ["Go", "Rust"])
        self.assertEqual(list(resume.languages)[0].id, "1")
        self.assertFalse(resume.projects)

    def test_from_dict_snake_case(self):
        resume = ResumeRecord.from_dict({"personal": {"full_name": "Grace Hopper"}})
        self.assertEqual(resume.personal.full_name, "Grace Hopper")

    def test_from_dict_tolerates_missing_and_bad_entries(self):
        resume = ResumeRecord.from_dict({
            "education": None,
            "projects": ["not a dict", {"name": "Engine"}],
        })
        self.assertFalse(resume.education)
        self.assertEqual([p.name for p in resume.projects], ["Engine"])

    def test_from_dict_rekeys_clashing_ids(self):
        resume = ResumeRecord.from_dict({
            "experience": [{"id": "1", "title": "A"}, {"id": "1", "title": "B"}],
        })
        self.assertEqual([(e.id, e.title) for e in resume.experience], [("1", "A"), ("2", "B")])

    def test_to_dict_uses_document_keys(self):
        data = sample_resume().to_dict()
        self.assertEqual(data["personalInfo"]["fullName"], "Mukitu Islam Nishat")
        self.assertNotIn("full_name", data["personalInfo"])
        self.assertEqual(data["languages"][1], {"id": "2", "name": "Bengali", "level": "Native"})
        self.assertEqual(ResumeRecord.from_dict(data), sample_resume())

if __name__ == '__main__':
    unittest.main()
