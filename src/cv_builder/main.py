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
Main entry point for the CV Builder CLI.
"""

import argparse
import sys
import logging
from pathlib import Path

from collections import deque

from rich.console import Console
from rich.live import Live
from rich.text import Text

from cv_builder.config import Settings
from cv_builder.generator import PDFGenerator, RenderError
from cv_builder.ingest import dump_resume, load_resume
from cv_builder.models import sample_resume
from cv_builder.optimizer import apply_optimization, resolve_gateway
from cv_builder.templates import Template

logger = logging.getLogger(__name__)

class StatusLogHandler(logging.Handler):
    """
    Custom handler to store the last N logs for a scrolling status display.
    """
    def __init__(self, console, maxlen=5):
        super().__init__()
        self.console = console
        self.maxlen = maxlen
        self.logs = deque(maxlen=maxlen)
        self.live = None

    def emit(self, record):
        try:
            msg = self.format(record)
            self.logs.append(msg)
            if self.live:
                self.live.update(self.get_renderable())
        except Exception:
            self.handleError(record)

    def get_renderable(self):
        return Text("\n".join(self.logs), style="dim grey50")

def _console_level(verbosity: int, quiet: bool = False) -> int:
    if quiet or verbosity == 0:
        return logging.ERROR
    if verbosity == 1:
        return logging.WARNING
    if verbosity == 2:
        return logging.INFO
    return logging.DEBUG

def setup_logging(verbosity: int, quiet: bool = False, custom_handler: logging.Handler = None,
                  log_dir: str = "user_content/logs"):
    """
    Configures logging:
    - File: user_content/logs/cv.log (DEBUG)
    - Console: Default=INFO (status panel), -q=ERROR, -v=WARNING, -vv=INFO, -vvv=DEBUG
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_path / "cv.log")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root.addHandler(file_handler)

    level = _console_level(verbosity, quiet)
    handler = custom_handler or logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(handler)

    # Silence HTTP client chatter unless in super debug
    if verbosity < 3:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("requests").setLevel(logging.WARNING)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a resume to a paginated PDF")
    parser.add_argument("--input", help="Path or URL to a resume JSON document (default: built-in sample)")
    parser.add_argument("--template", choices=[t.value for t in Template],
                        help="Style variant (default: CV_BUILDER_TEMPLATE or 'modern')")
    parser.add_argument("--output", help="Output directory or .pdf path (default: CV_BUILDER_OUTPUT_DIR or user_content/generated_cvs)")
    parser.add_argument("--optimize", action="store_true", help="Run the CV optimization webhook before rendering")
    parser.add_argument("--webhook", help="Base URL of the automation webhook (overrides CV_BUILDER_WEBHOOK_URL)")
    parser.add_argument("--dump-sample", metavar="PATH", help="Write the sample resume JSON to PATH and exit")
    parser.add_argument("--ca-bundle", help="Path to a custom CA certificate bundle for HTTPS verification (proxy environments)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase output verbosity (-v=WARNING, -vv=INFO, -vvv=DEBUG)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status output (ERROR only)")
    return parser

def main(argv=None):
    try:
        sys.exit(_main_cli(argv))
    except KeyboardInterrupt:
        # Use stderr so it captures attention even if stdout is redirected or rich
        sys.stderr.write("\n\033[31m[-] Cancelled by user\033[0m\n")
        sys.exit(130)

def _main_cli(argv=None) -> int:
    """
    Parses arguments, configures logging and runs the build.
    """
    args = build_parser().parse_args(argv)

    if args.quiet:
        setup_logging(0, quiet=True)
        return run(args)

    if args.verbose:
        setup_logging(args.verbose)
        logger.info("--- CV Builder ---")
        return run(args)

    # Default mode: scrolling status panel
    console = Console()
    status_handler = StatusLogHandler(console)
    setup_logging(2, custom_handler=status_handler)
    with Live(status_handler.get_renderable(), refresh_per_second=4, console=console) as live:
        status_handler.live = live
        logger.info("--- CV Builder ---")
        return run(args)

def run(args) -> int:
    """
    Loads the resume, optionally optimises it and renders the PDF.
    Returns the process exit status.
    """
    settings = Settings.from_env(
        webhook_url=args.webhook,
        template=args.template,
        output_dir=args.output,
        ca_bundle=args.ca_bundle,
    )

    if args.dump_sample:
        dump_resume(sample_resume(), args.dump_sample)
        return 0

    # 1. Load
    if args.input:
        resume = load_resume(args.input, settings)
        if resume is None:
            logger.error("Could not load resume. Exiting.")
            return 1
    else:
        logger.info("No --input given, using the sample resume.")
        resume = sample_resume()

    # 2. Optimise
    if args.optimize:
        logger.info("Optimizing CV...")
        result = resolve_gateway(settings).optimize_cv(resume)
        if result.from_mock:
            logger.warning("[!] Mock result: the resume is rendered unchanged.")
        else:
            resume = apply_optimization(resume, result)
        logger.info(f"    > ATS Score: {result.ats_score}%")
        for tip in result.improvement_tips:
            logger.info(f"    > Tip: {tip}")

    # 3. Render
    logger.info(f"Rendering PDF with the '{settings.template.value}' template...")
    try:
        path = PDFGenerator(settings.template).generate(resume, settings.output_dir)
    except RenderError as e:
        logger.error(f"Error generating CV: {e}")
        return 1

    logger.info(f"Done! {path}")
    return 0

if __name__ == "__main__":
    main()
