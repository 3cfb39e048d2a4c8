#!/usr/bin/env python3
"""
Test Runner Script

Runs the EvacRoute test suite with coverage and JUnit reporting.

Usage:
    python scripts/run_tests.py              # Run all tests
    python scripts/run_tests.py --unit       # Run only unit tests
    python scripts/run_tests.py --quick      # Skip slow/integration tests

Author: EvacRoute Project
License: AGPL-3.0
"""

import json
import re
import subprocess
import sys
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEST_DIR = PROJECT_ROOT / "tests"


def run_tests(args=None):
    """
    Run test suite with pytest.

    Args:
        args: Additional pytest arguments
    """
    cmd = [
        sys.executable, "-m", "pytest",
        str(TEST_DIR),
        "-v",
        "--tb=short",
        "--cov=evacroute",
        "--cov-report=term-missing",
        f"--cov-report=json:{TEST_DIR / 'coverage.json'}",
        f"--junitxml={TEST_DIR / 'junit.xml'}",
    ]

    args = args or []
    if "--unit" in args:
        cmd.extend(["-m", "unit"])
    if "--quick" in args:
        cmd.extend(["-m", "not slow and not integration"])
    cmd.extend(arg for arg in args if not arg.startswith("--"))

    print("=" * 70)
    print(f"EvacRoute Test Suite - {datetime.now().isoformat()}")
    print("=" * 70)
    print(f"Command: {' '.join(cmd)}\n")

    return subprocess.run(cmd, cwd=PROJECT_ROOT).returncode


def generate_report():
    """Print a summary from the coverage and JUnit files."""
    coverage_file = TEST_DIR / "coverage.json"
    if coverage_file.exists():
        with open(coverage_file) as f:
            totals = json.load(f).get("totals", {})
        print(f"\nTotal Coverage: {totals.get('percent_covered', 0):.1f}%")

    junit_file = TEST_DIR / "junit.xml"
    if junit_file.exists():
        content = junit_file.read_text()
        counts = {}
        for name in ("tests", "failures", "errors", "skipped"):
            match = re.search(rf'{name}="(\d+)"', content)
            counts[name] = int(match.group(1)) if match else 0

        passed = counts["tests"] - counts["failures"] - counts["errors"] - counts["skipped"]
        print("\nTest Results:")
        print(f"  Total:   {counts['tests']}")
        print(f"  Passed:  {passed}")
        print(f"  Failed:  {counts['failures']}")
        print(f"  Errors:  {counts['errors']}")
        print(f"  Skipped: {counts['skipped']}")


if __name__ == "__main__":
    exit_code = run_tests(sys.argv[1:])
    generate_report()
    sys.exit(exit_code)
