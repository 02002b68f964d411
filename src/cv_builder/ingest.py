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
Handles loading resume records from JSON files and URLs.
"""

import json
import logging
from typing import Optional

import requests

from cv_builder.config import Settings
from cv_builder.models import ResumeRecord

logger = logging.getLogger(__name__)


def _read_url(url: str, settings: Settings) -> Optional[str]:
    """Fetches the raw body of a resume document served over HTTP(S)."""
    try:
        response = requests.get(
            url,
            headers={'Accept': 'application/json'},
            timeout=settings.request_timeout,
            verify=settings.ca_bundle,
        )
        response.raise_for_status()
        return response.text
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to fetch resume from {url}: {e}")
        return None


def _read_file(path: str) -> Optional[str]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        logger.error(f"Error reading {path}: {e}")
        return None


def load_resume(source: str, settings: Optional[Settings] = None) -> Optional[ResumeRecord]:
    """
    Loads a resume from a local JSON file or an http(s) URL.

    Returns None (after logging why) if the source cannot be read or does
    not hold a JSON object.
    """
    settings = settings or Settings()

    if source.startswith(("http://", "https://")):
        logger.info(f"Fetching resume from: {source}")
        raw = _read_url(source, settings)
    else:
        logger.info(f"Reading resume from: {source}")
        raw = _read_file(source)

    if raw is None:
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Resume at {source} is not valid JSON: {e}")
        return None

    if not isinstance(data, dict):
        logger.error(f"Resume at {source} must be a JSON object, got {type(data).__name__}")
        return None

    resume = ResumeRecord.from_dict(data)
    logger.debug(
        f"    > Loaded {len(resume.experience)} experience, {len(resume.education)} education, "
        f"{len(resume.skills)} skill entries"
    )
    return resume


def dump_resume(resume: ResumeRecord, path: str) -> None:
    """Writes ``resume`` as a camelCase JSON document."""
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(resume.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")
    logger.info(f"Wrote resume JSON to: {path}")
