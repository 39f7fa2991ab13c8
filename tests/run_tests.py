#!/usr/bin/env python3
"""
Test Runner for the Buyflex storefront

USAGE:
    python tests/run_tests.py [options]

    Options:
    --catalog        Run catalog engine, pagination and shop-view tests
    --services       Run cart, checkout, support and admin tests
    --chat           Run FlexBot tests
    --api            Run HTTP API tests
    --all            Run all available tests
    --coverage       Run tests with coverage reporting
    --verbose        Run with verbose output
"""

import argparse
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent

SUITES = {
    "catalog": ["tests/test_catalog_query.py", "tests/test_pagination.py", "tests/test_shop_timers.py"],
    "services": ["tests/test_cart_checkout.py", "tests/test_support_admin.py"],
    "chat": ["tests/test_chat_agent.py"],
    "api": ["tests/test_api.py"],
}


def run_command(command, description):
    """Run a command and report the outcome."""
    print(f"\n{'='*60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(command)}")
    print(f"{'='*60}")

    try:
        subprocess.run(command, check=True, cwd=project_root)
        print(f"\n✅ {description} completed successfully!")
        return True
    except subprocess.CalledProcessError as e:
        print(f"\n❌ {description} failed with exit code {e.returncode}")
        return False


def build_command(paths, verbose=False, coverage=False):
    command = [sys.executable, "-m", "pytest", *paths]
    if verbose:
        command.append("-v")
    if coverage:
        command.extend(["--cov=storefront", "--cov-report=term-missing"])
    return command


def main():
    """Parse arguments and run the selected suites."""
    parser = argparse.ArgumentParser(
        description="Test Runner for the Buyflex storefront",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python tests/run_tests.py --catalog
  python tests/run_tests.py --api --verbose
  python tests/run_tests.py --all --coverage
        """
    )
    for name in SUITES:
        parser.add_argument(f"--{name}", action="store_true", help=f"Run {name} tests")
    parser.add_argument("--all", action="store_true", help="Run all available tests")
    parser.add_argument("--coverage", action="store_true", help="Run tests with coverage reporting")
    parser.add_argument("--verbose", action="store_true", help="Run with verbose output")
    args = parser.parse_args()

    print("🧪 Buyflex Storefront Test Runner")
    print("=" * 60)

    if args.all:
        ok = run_command(build_command(["tests/"], args.verbose, args.coverage), "All Tests")
        sys.exit(0 if ok else 1)

    selected = [name for name in SUITES if getattr(args, name)]
    if not selected:
        parser.print_help()
        return

    results = {}
    for name in selected:
        command = build_command(SUITES[name], args.verbose, args.coverage)
        results[name] = run_command(command, f"{name.capitalize()} Tests")

    print(f"\n{'='*60}")
    for name, ok in results.items():
        print(f"{'✅' if ok else '❌'} {name}")
    sys.exit(0 if all(results.values()) else 1)


if __name__ == "__main__":
    main()
