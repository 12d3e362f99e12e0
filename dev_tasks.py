#!/usr/bin/env python3
"""
Development tasks for schemaql: clean, format, lint, test, install-dev.
"""

import os
import shutil
import subprocess
import sys

SOURCES = "schemaql tests examples"


def run_command(command, check=True):
    print(f"Running: {command}")
    result = subprocess.run(command, shell=True, check=check)
    return result.returncode == 0


def clean():
    print("Cleaning caches...")
    for path in [".pytest_cache", ".mypy_cache", "htmlcov", ".coverage"]:
        if os.path.isdir(path):
            shutil.rmtree(path, ignore_errors=True)
        elif os.path.exists(path):
            os.remove(path)
    for root, dirs, _files in os.walk("."):
        if "__pycache__" in dirs:
            shutil.rmtree(os.path.join(root, "__pycache__"), ignore_errors=True)
    print("Clean completed.")


def format_code():
    run_command(f"black {SOURCES}")
    run_command(f"isort {SOURCES}")


def lint():
    ok = run_command("mypy schemaql", check=False)
    ok = run_command(f"flake8 {SOURCES}", check=False) and ok
    if not ok:
        print("Linting failed.")
        sys.exit(1)
    print("Linting passed.")


def test():
    run_command("pytest tests/ -v --cov=schemaql --cov-report=term")


def install_dev():
    run_command("pip install -e .[dev,test]")


COMMANDS = {
    "clean": clean,
    "format": format_code,
    "lint": lint,
    "test": test,
    "install-dev": install_dev,
}


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print("Usage: python dev_tasks.py <command>")
        print("Commands: " + ", ".join(COMMANDS))
        sys.exit(1)
    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
