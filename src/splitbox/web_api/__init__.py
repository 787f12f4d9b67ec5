"""
splitbox Web API
================
FastAPI-based HTTP surface for preparing and splitting item lists.

Quick Start:
    uvicorn splitbox.web_api.main:app --reload
"""
from .main import app

__all__ = ["app"]
