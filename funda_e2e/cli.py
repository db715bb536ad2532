#!/usr/bin/env python3
"""
Funda E2E - command line runner

    funda-e2e run                      # all scenarios, headless
    funda-e2e run --interactive --slow-mo 250   # headed, CAPTCHAs solved by hand
    funda-e2e run --file tests/e2e/test_map_search.py
    funda-e2e run -k postcode
    funda-e2e install-browsers
    funda-e2e check-state
"""

import argparse
import logging
import os
import subprocess
import sys
from typing import List, Optional

import pytest

from funda_e2e.core.config import PROJECT_ROOT, settings
from funda_e2e.core.logging_setup import configure_logging
from funda_e2e.core.session_state import get_cookies, load_state

logger = logging.getLogger(__name__)

E2E_TESTS_DIR = PROJECT_ROOT / "tests" / "e2e"


def build_pytest_args(args: argparse.Namespace) -> List[str]:
    """Translate runner options into pytest / pytest-playwright arguments"""
    pytest_args = [args.file or str(E2E_TESTS_DIR), "-m", "e2e"]

    if args.headed:
        pytest_args.append("--headed")
    if args.slow_mo is not None:
        pytest_args.extend(["--slowmo", str(args.slow_mo)])
    if args.keyword:
        pytest_args.extend(["-k", args.keyword])
    if args.browser:
        pytest_args.extend(["--browser", args.browser])
    if args.verbose:
        pytest_args.append("-v")

    return pytest_args


def apply_run_mode(args: argparse.Namespace):
    """
    An interactive run is a headed run in which challenges are waited out.

    HEADLESS=false is set both on the loaded settings, which the e2e fixtures
    and ensure_logged_in read in this process, and in the environment.
    """
    if not args.interactive:
        return

    os.environ["HEADLESS"] = "false"
    settings.headless = False
    logger.info("[Runner] Interactive run, CAPTCHAs must be solved by hand")


def run_tests(args: argparse.Namespace) -> int:
    apply_run_mode(args)
    pytest_args = build_pytest_args(args)
    logger.info(f"[Runner] Running: pytest {' '.join(pytest_args)}")
    return int(pytest.main(pytest_args))


def install_browsers(args: argparse.Namespace) -> int:
    logger.info(f"[Runner] Installing Playwright browser: {args.browser}")
    try:
        subprocess.run([sys.executable, "-m", "playwright", "install", args.browser], check=True)
        logger.info("[Runner] ✅ Playwright browsers installed")
        return 0
    except subprocess.CalledProcessError as e:
        logger.error(f"[Runner] ❌ Failed to install Playwright: {e}")
        return 1


def check_state(args: argparse.Namespace) -> int:
    state_path = settings.get_state_path()
    cookies = get_cookies(load_state(state_path))

    if cookies:
        logger.info(f"[Runner] ✅ {state_path} holds {len(cookies)} cookies")
        return 0

    logger.warning(f"[Runner] ⚠️ No usable session state at {state_path}; run headed once to log in")
    return 1


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="funda-e2e", description="Run the funda end-to-end suite")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run end-to-end scenarios")
    run_parser.add_argument("--headed", action="store_true",
                            help="Show the browser; CAPTCHAs can then be solved by hand")
    run_parser.add_argument("--interactive", action="store_true",
                            help="Set HEADLESS=false and wait for CAPTCHAs to be solved by hand")
    run_parser.add_argument("--slow-mo", type=int, default=None,
                            help="Slow every browser operation down by this many ms")
    run_parser.add_argument("--file", default=None, help="Run a single test file")
    run_parser.add_argument("-k", dest="keyword", default=None, help="Only run tests matching this expression")
    run_parser.add_argument("--browser", default=None, help="chromium, firefox or webkit")
    run_parser.add_argument("-v", "--verbose", action="store_true")
    run_parser.set_defaults(func=run_tests)

    install_parser = subparsers.add_parser("install-browsers", help="Install Playwright browsers")
    install_parser.add_argument("--browser", default="chromium")
    install_parser.set_defaults(func=install_browsers)

    state_parser = subparsers.add_parser("check-state", help="Check the stored login session")
    state_parser.set_defaults(func=check_state)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging(settings)
    args = create_parser().parse_args(argv)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("[Runner] Cancelled by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
