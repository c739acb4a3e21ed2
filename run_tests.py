#!/usr/bin/env python3
"""
Test runner script for YASS.
"""

import sys
import subprocess
from pathlib import Path


def run_tests(target="tests/"):
    """Run the tests under a path."""
    print(f"Running YASS tests in {target}...")
    print("=" * 50)

    project_dir = Path(__file__).parent

    try:
        result = subprocess.run([
            sys.executable, "-m", "pytest",
            target,
            "-v",
            "--tb=short",
            "--color=yes"
        ], cwd=project_dir, capture_output=False)

        print("\n" + "=" * 50)
        if result.returncode == 0:
            print("All tests passed!")
        else:
            print("Some tests failed!")

        return result.returncode

    except FileNotFoundError:
        print("pytest not found. Please install the dev extra:")
        print("pip install -e .[dev]")
        return 1
    except Exception as e:
        print(f"Error running tests: {e}")
        return 1


if __name__ == "__main__":
    if len(sys.argv) > 1:
        # Run a specific test module or directory
        exit_code = run_tests(f"tests/{sys.argv[1]}")
    else:
        exit_code = run_tests()

    sys.exit(exit_code)
