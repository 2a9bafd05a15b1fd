"""Page modules for the Ledgerlite Streamlit application."""

from .transactions import render_page as render_transactions_page

__all__ = ["render_transactions_page"]
