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
Data models for the CV Builder application.
"""

import logging
from dataclasses import dataclass, field, fields, replace, asdict
from typing import Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class PersonalInfo:
    """Header details and the free-text professional summary."""
    full_name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""
    linkedin: str = ""
    github: str = ""
    summary: str = ""

@dataclass
class Education:
    """Represents a single education entry."""
    id: str = ""
    degree: str = ""
    institution: str = ""
    year: str = ""
    description: str = ""

@dataclass
class Experience:
    """Represents a single professional experience entry."""
    id: str = ""
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""

@dataclass
class Project:
    """Represents a personal or professional project."""
    id: str = ""
    name: str = ""
    description: str = ""
    tech: str = ""

@dataclass
class Certification:
    id: str = ""
    name: str = ""
    issuer: str = ""
    year: str = ""

@dataclass
class Language:
    id: str = ""
    name: str = ""
    level: str = ""


class EntryList:
    """
    Ordered collection of resume entries keyed by their stable ``id``.

    Lookups, updates and removals go through the id index instead of
    scanning the list. Iteration follows insertion order.
    """
    def __init__(self, entries=None):
        self._entries: Dict[str, object] = {}
        self._next_id = 1
        for entry in entries or []:
            self.add(entry)

    def _new_id(self) -> str:
        while str(self._next_id) in self._entries:
            self._next_id += 1
        new_id = str(self._next_id)
        self._next_id += 1
        return new_id

    def add(self, entry):
        """Appends an entry, assigning an id if it has none. Returns the stored entry."""
        if not entry.id:
            entry = replace(entry, id=self._new_id())
        if entry.id in self._entries:
            raise ValueError(f"Duplicate entry id: {entry.id}")
        self._entries[entry.id] = entry
        return entry

    def get(self, entry_id: str):
        return self._entries[entry_id]

    def update(self, entry_id: str, **changes):
        """Replaces the entry with ``entry_id`` by a copy carrying ``changes``."""
        if entry_id not in self._entries:
            raise KeyError(entry_id)
        if changes.get("id", entry_id) != entry_id:
            raise ValueError("Entry ids cannot be changed")
        updated = replace(self._entries[entry_id], **changes)
        self._entries[entry_id] = updated
        return updated

    def remove(self, entry_id: str):
        return self._entries.pop(entry_id)

    def copy(self) -> "EntryList":
        clone = EntryList()
        clone._entries = dict(self._entries)
        clone._next_id = self._next_id
        return clone

    def __iter__(self) -> Iterator:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __contains__(self, entry_id) -> bool:
        return entry_id in self._entries

    def __eq__(self, other) -> bool:
        if not isinstance(other, EntryList):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"EntryList({list(self)!r})"


def _text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _build(cls, raw: dict, aliases: Optional[Dict[str, str]] = None):
    """Builds a dataclass from a dict, ignoring unknown keys and coercing values to str."""
    aliases = aliases or {}
    kwargs = {}
    for f in fields(cls):
        keys = [f.name] + [k for k, v in aliases.items() if v == f.name]
        for key in keys:
            if key in raw:
                kwargs[f.name] = _text(raw[key])
                break
    return cls(**kwargs)


_PERSONAL_ALIASES = {"fullName": "full_name", "name": "full_name"}


@dataclass
class ResumeRecord:
    """
    Structured data representing a complete resume.
    This is the data object the layout engine renders.
    """
    personal: PersonalInfo = field(default_factory=PersonalInfo)
    education: EntryList = field(default_factory=EntryList)
    experience: EntryList = field(default_factory=EntryList)
    skills: List[str] = field(default_factory=list)
    projects: EntryList = field(default_factory=EntryList)
    certifications: EntryList = field(default_factory=EntryList)
    languages: EntryList = field(default_factory=EntryList)

    def add_skill(self, skill: str) -> bool:
        """Adds a trimmed skill unless it is empty or already listed."""
        skill = (skill or "").strip()
        if not skill or skill in self.skills:
            return False
        self.skills.append(skill)
        return True

    def remove_skill(self, skill: str) -> bool:
        if skill not in self.skills:
            return False
        self.skills = [s for s in self.skills if s != skill]
        return True

    def with_personal(self, **changes) -> "ResumeRecord":
        clone = self.copy()
        clone.personal = replace(clone.personal, **changes)
        return clone

    def copy(self) -> "ResumeRecord":
        return ResumeRecord(
            personal=replace(self.personal),
            education=self.education.copy(),
            experience=self.experience.copy(),
            skills=list(self.skills),
            projects=self.projects.copy(),
            certifications=self.certifications.copy(),
            languages=self.languages.copy(),
        )

    @classmethod
    def from_dict(cls, data: dict) -> "ResumeRecord":
        """
        Builds a record from a JSON-style dict.

        Accepts the camelCase document (``personalInfo.fullName``) as well as
        snake_case keys (``personal.full_name``). Missing values become empty.
        """
        data = data or {}

        def shaped(key, expected, default):
            value = data.get(key)
            if value is None:
                return default
            if not isinstance(value, expected):
                logger.warning(f"Ignoring '{key}': expected {expected.__name__}, got {type(value).__name__}")
                return default
            return value

        personal_raw = shaped("personalInfo", dict, None) or shaped("personal", dict, {})

        def entries(key, cls_):
            result = EntryList()
            for raw in shaped(key, list, []):
                if not isinstance(raw, dict):
                    continue
                entry = _build(cls_, raw)
                if entry.id in result:
                    # Re-key clashing ids instead of rejecting the document
                    entry = replace(entry, id="")
                result.add(entry)
            return result

        skills = [_text(s) for s in shaped("skills", list, []) if s is not None]

        return cls(
            personal=_build(PersonalInfo, personal_raw, _PERSONAL_ALIASES),
            education=entries("education", Education),
            experience=entries("experience", Experience),
            skills=skills,
            projects=entries("projects", Project),
            certifications=entries("certifications", Certification),
            languages=entries("languages", Language),
        )

    def to_dict(self) -> dict:
        """Serialises to the camelCase document shape."""
        personal = asdict(self.personal)
        personal["fullName"] = personal.pop("full_name")
        return {
            "personalInfo": personal,
            "education": [asdict(e) for e in self.education],
            "experience": [asdict(e) for e in self.experience],
            "skills": list(self.skills),
            "projects": [asdict(p) for p in self.projects],
            "certifications": [asdict(c) for c in self.certifications],
            "languages": [asdict(lang) for lang in self.languages],
        }


@dataclass
class CVOptimization:
    """Result of the CV optimisation webhook."""
    optimized_summary: str = ""
    skill_suggestions: List[str] = field(default_factory=list)
    improvement_tips: List[str] = field(default_factory=list)
    ats_score: int = 0
    from_mock: bool = False


def sample_resume() -> ResumeRecord:
    """The resume the builder starts with when no input is given."""
    return ResumeRecord(
        personal=PersonalInfo(
            full_name="Mukitu Islam Nishat",
            title="Full Stack MERN Developer | AI & SaaS Architect",
            email="contact@mukitu.dev",
            phone="+880 1XXX-XXXXXX",
            location="Bangladesh",
            website="mukitu.dev",
            linkedin="linkedin.com/in/mukitu",
            github="github.com/mukitu",
            summary=(
                "Professional Full Stack MERN Developer specializing in AI-driven SaaS solutions "
                "with 580+ successful client projects. Expert in building scalable, high-performance "
                "web applications using modern technologies."
            ),
        ),
        education=EntryList([
            Education(
                id="1",
                degree="Bachelor of Science in Computer Science & Engineering",
                institution="University Name",
                year="2021 - Present",
                description="Specializing in Software Engineering, AI/ML, and Cloud Computing",
            ),
        ]),
        experience=EntryList([
            Experience(
                id="1",
                title="Full Stack Developer",
                company="Freelance / Self-Employed",
                duration="2020 - Present",
                description=(
                    "Delivered 580+ projects for international clients. Specialized in React, "
                    "Node.js, AI integrations, and SaaS development."
                ),
            ),
        ]),
        skills=["React.js", "Node.js", "TypeScript", "MongoDB", "PostgreSQL",
                "Python", "AI/ML", "AWS", "Docker", "GraphQL"],
        projects=EntryList([
            Project(
                id="1",
                name="AI-Powered Analytics Platform",
                description="Enterprise analytics with real-time AI insights",
                tech="React, Node.js, TensorFlow, AWS",
            ),
        ]),
        certifications=EntryList([
            Certification(id="1", name="AWS Certified Developer", issuer="Amazon Web Services", year="2023"),
        ]),
        languages=EntryList([
            Language(id="1", name="English", level="Professional"),
            Language(id="2", name="Bengali", level="Native"),
        ]),
    )
