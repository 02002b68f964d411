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
Runtime settings, resolved once and passed explicitly to the code that needs them.

CA bundle resolution for proxy environments checks (in priority order):
  1. Explicit override via --ca-bundle CLI arg
  2. REQUESTS_CA_BUNDLE environment variable
  3. CURL_CA_BUNDLE environment variable
  4. SSL_CERT_FILE environment variable
  5. System defaults (True, i.e. certifi or the OS trust store)
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional, Union

from cv_builder.templates import Template

logger = logging.getLogger(__name__)

ENV_WEBHOOK_URL = "CV_BUILDER_WEBHOOK_URL"
ENV_TEMPLATE = "CV_BUILDER_TEMPLATE"
ENV_OUTPUT_DIR = "CV_BUILDER_OUTPUT_DIR"

DEFAULT_OUTPUT_DIR = "user_content/generated_cvs"
DEFAULT_TIMEOUT = 30


def resolve_ca_bundle(override: Optional[str] = None) -> Union[str, bool]:
    """
    Resolve the CA bundle to use for outbound HTTPS requests.

    Returns:
        str: Path to a CA bundle file, or
        bool: True to use the default system/certifi trust store.
    """
    if override:
        logger.info(f"CA bundle override set to: {override}")
        return override

    for var in ("REQUESTS_CA_BUNDLE", "CURL_CA_BUNDLE", "SSL_CERT_FILE"):
        value = os.environ.get(var)
        if value:
            logger.debug(f"Using CA bundle from {var}: {value}")
            return value

    return True


@dataclass(frozen=True)
class Settings:
    webhook_url: Optional[str] = None
    template: Template = Template.MODERN
    output_dir: str = DEFAULT_OUTPUT_DIR
    request_timeout: float = DEFAULT_TIMEOUT
    ca_bundle: Union[str, bool] = True

    @property
    def webhook_configured(self) -> bool:
        return bool(self.webhook_url)

    @classmethod
    def from_env(cls, webhook_url: Optional[str] = None, template=None, output_dir: Optional[str] = None,
                 request_timeout: Optional[float] = None, ca_bundle: Optional[str] = None) -> "Settings":
        """Reads settings from the environment; explicit arguments win when not None."""
        webhook_url = webhook_url if webhook_url is not None else os.environ.get(ENV_WEBHOOK_URL)
        webhook_url = (webhook_url or "").strip().rstrip("/") or None

        template = template if template is not None else os.environ.get(ENV_TEMPLATE) or Template.MODERN
        output_dir = output_dir if output_dir is not None else os.environ.get(ENV_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR

        return cls(
            webhook_url=webhook_url,
            template=Template.parse(template),
            output_dir=output_dir,
            request_timeout=request_timeout if request_timeout is not None else DEFAULT_TIMEOUT,
            ca_bundle=resolve_ca_bundle(ca_bundle),
        )
