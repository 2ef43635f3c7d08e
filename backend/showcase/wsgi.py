"""WSGI entry point for gunicorn (``showcase.wsgi:app``)."""

from __future__ import annotations

from showcase.factory import create_app

app = create_app()
