# examples/setup.py
"""
Simple script that validates if all the dependencies are installed and imports the main module.
"""


def handle_deps():
    from fastapi import FastAPI
    from pydantic import BaseModel
    from rich.console import Console
    from sqlalchemy import text


def handle_sift():
    from sift import __version__, log

    log.setup("INFO")
    log.success(f"sift-py importable (version {__version__})")


if __name__ == "__main__":
    handle_deps()
    handle_sift()
