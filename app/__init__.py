"""Streamlit front end for Ledgerlite."""

from .main import main

__all__ = ["main"]
