"""Ledgerlite transactions dashboard."""

from __future__ import annotations

import streamlit as st

from app.layout import inject_css, render_navbar
from app.pages import render_transactions_page
from config import get_settings, setup_logging


def main() -> None:
    """Application entrypoint for the Ledgerlite dashboard."""

    st.set_page_config(
        page_title="Ledgerlite | Transactions",
        page_icon="📊",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    settings = get_settings()
    setup_logging(settings.log_level)

    inject_css()
    render_navbar("transactions")
    render_transactions_page(settings)


if __name__ == "__main__":
    main()
