"""Development bootstrap helpers.

- Installs the package with its test extras (pip install -e .[test] - optional).
- Ensures Playwright browsers and OS dependencies are available.
"""
from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def run(cmd: list[str]) -> None:
    """Run a command and stream output."""
    print(f"$ {' '.join(cmd)}")
    subprocess.run(cmd, check=True, cwd=ROOT)


def install_playwright(with_deps: bool = False, chrome: bool = False) -> None:
    cmd = [sys.executable, "-m", "playwright", "install"]
    if with_deps:
        cmd.append("--with-deps")
    cmd.append("chromium")
    if chrome:
        cmd.append("chrome")
    run(cmd)


def main() -> None:
    parser = argparse.ArgumentParser(description="Bootstrap local development")
    parser.add_argument(
        "--with-deps",
        action="store_true",
        help="Install system dependencies (Linux CI) via playwright install --with-deps",
    )
    parser.add_argument(
        "--chrome",
        action="store_true",
        help="Also install the branded Chrome channel used when use_chrome_channel is on",
    )
    parser.add_argument(
        "--skip-deps",
        action="store_true",
        help="Skip pip install -e . if dependencies already installed",
    )
    args = parser.parse_args()

    if not args.skip_deps:
        run([sys.executable, "-m", "pip", "install", "-e", ".[test]"])

    install_playwright(with_deps=args.with_deps, chrome=args.chrome)
    print("Bootstrap complete")


if __name__ == "__main__":
    main()
