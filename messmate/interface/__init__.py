"""Mini README: Interactive interfaces for MessMate.

Exports the FastAPI application factory serving the JSON front end. The
Typer CLI lives in the root-level ``manage_mess.py`` script.
"""

from .web_app import create_application

__all__ = ["create_application"]
