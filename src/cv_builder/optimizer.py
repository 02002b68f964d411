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
Client for the CV optimisation webhook.

The webhook is a user-configured automation endpoint (e.g. an n8n workflow)
that receives the resume as JSON and answers with an optimised summary,
skill suggestions and tips. Without a configured URL, or when the call
fails, a canned result is returned instead.
"""

import logging
from typing import List

import requests

from cv_builder.config import Settings
from cv_builder.models import CVOptimization, ResumeRecord

# Logger is configured in main.py
logger = logging.getLogger(__name__)

OPTIMIZE_ENDPOINT = "cv-optimize"


def mock_optimization() -> CVOptimization:
    return CVOptimization(
        optimized_summary="Configure your webhook URL (--webhook or CV_BUILDER_WEBHOOK_URL) for AI-powered CV optimization.",
        skill_suggestions=["TypeScript", "Cloud Architecture", "System Design"],
        improvement_tips=[
            "Add quantifiable achievements",
            "Use action verbs to start bullet points",
            "Include relevant keywords for ATS",
        ],
        ats_score=75,
        from_mock=True,
    )


def _string_list(value) -> List[str]:
    if not isinstance(value, list):
        raise ValueError(f"expected a list, got {type(value).__name__}")
    return [str(item) for item in value if item is not None]


def parse_optimization(payload) -> CVOptimization:
    """Validates a webhook response body. Raises ValueError if it is malformed."""
    if not isinstance(payload, dict):
        raise ValueError("response body must be a JSON object")
    try:
        score = int(payload.get("atsScore", 0))
    except (TypeError, ValueError):
        raise ValueError(f"atsScore is not a number: {payload.get('atsScore')!r}") from None
    return CVOptimization(
        optimized_summary=str(payload.get("optimizedSummary") or ""),
        skill_suggestions=_string_list(payload.get("skillSuggestions", [])),
        improvement_tips=_string_list(payload.get("improvementTips", [])),
        ats_score=max(0, min(100, score)),
    )


class MockGateway:
    """Used when no webhook is configured."""

    def optimize_cv(self, resume: ResumeRecord) -> CVOptimization:
        logger.warning("[!] No webhook configured. Using MOCK optimization result.")
        return mock_optimization()


class WebhookGateway:
    """POSTs the resume to ``{endpoint}/cv-optimize`` and parses the JSON answer."""

    def __init__(self, endpoint: str, timeout: float = 30, verify=True):
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.verify = verify

    @property
    def url(self) -> str:
        return f"{self.endpoint}/{OPTIMIZE_ENDPOINT}"

    def optimize_cv(self, resume: ResumeRecord) -> CVOptimization:
        try:
            logger.info(f"Calling optimization webhook: {self.url}")
            response = requests.post(
                self.url,
                json={"cvData": resume.to_dict()},
                timeout=self.timeout,
                verify=self.verify,
            )
            response.raise_for_status()
            return parse_optimization(response.json())
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"CV optimization failed: {e}")
            logger.warning("[!] Falling back to MOCK optimization result.")
            return mock_optimization()


def resolve_gateway(settings: Settings):
    """Picks the gateway for this call: the webhook when configured, the mock otherwise."""
    if settings.webhook_configured:
        return WebhookGateway(settings.webhook_url, timeout=settings.request_timeout, verify=settings.ca_bundle)
    return MockGateway()


def apply_optimization(resume: ResumeRecord, result: CVOptimization) -> ResumeRecord:
    """
    Returns a copy of ``resume`` with the optimised summary and any new
    suggested skills applied. The input record is left untouched.
    """
    optimized = resume.copy()
    summary = result.optimized_summary.strip()
    if summary and summary != resume.personal.summary:
        optimized = optimized.with_personal(summary=summary)
    added = [s for s in result.skill_suggestions if optimized.add_skill(s)]
    if added:
        logger.info(f"    > Added suggested skills: {', '.join(added)}")
    return optimized
