"""
Name: ASGI Entrypoint (docshare.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling

Notes:
  - uvicorn docshare.main:app
  - No configuration or IO should live here
"""

from docshare.api.main import app

__all__ = ["app"]
