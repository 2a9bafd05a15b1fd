"""Shared layout primitives for the Ledgerlite Streamlit app."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass

import streamlit as st


@dataclass(frozen=True)
class NavigationLink:
    slug: str
    label: str
    enabled: bool = True


NAV_LINKS: tuple[NavigationLink, ...] = (
    NavigationLink("dashboard", "Dashboard", False),
    NavigationLink("budget", "Budget", False),
    NavigationLink("transactions", "Transactions", True),
    NavigationLink("accounts", "Accounts", False),
)


def inject_css() -> None:
    """Inject global CSS tokens and component styling into the Streamlit app."""

    st.markdown(
        """
        <style>
          :root {
            --gap: 16px;
            --radius: 12px;
            --card-bg: #FFFFFF;
            --border: #E6EAF2;
            --shadow: 0 1px 2px rgba(16, 24, 40, 0.05), 0 1px 3px rgba(16, 24, 40, 0.06);
          }

          body, [data-testid="stAppViewContainer"] > .main {
            background: #F4F6FB;
          }

          .block-container {
            max-width: 1200px;
            padding-top: 2.5rem;
            padding-bottom: 4rem;
          }

          .ps-nav {
            display: flex;
            align-items: center;
            justify-content: space-between;
            gap: 2rem;
            padding: 0.9rem 0;
          }

          .ps-nav__brand {
            font-size: 1.5rem;
            font-weight: 700;
            color: #0B3FD6;
          }

          .ps-nav__links {
            display: flex;
            align-items: center;
            gap: 1.8rem;
          }

          .ps-nav__link {
            font-weight: 600;
            color: #5C6478;
            text-decoration: none;
          }

          .ps-nav__link.is-active {
            color: #1D4ED8;
            border-bottom: 3px solid #1D4ED8;
          }

          .ps-nav__link.is-disabled {
            color: #B7C1D9;
            cursor: not-allowed;
          }

          .ps-card-anchor {
            display: none;
          }

          [data-testid="stVerticalBlock"]:has(> .ps-card-anchor) {
            background: var(--card-bg);
            border: 1px solid var(--border);
            border-radius: var(--radius);
            box-shadow: var(--shadow);
            padding: 16px;
            margin-bottom: var(--gap);
          }

          .ps-card__head {
            display: flex;
            align-items: center;
            justify-content: space-between;
            gap: 12px;
            font-weight: 600;
            color: #111827;
          }

          .ps-chip {
            font-size: 12px;
            padding: 2px 8px;
            border-radius: 999px;
            border: 1px solid #D6DEFF;
            background: #F0F4FF;
            color: #3346FF;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a reusable Ledgerlite card."""

    chip_html = f'<span class="ps-chip">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="ps-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="ps-card__head"><span class="ps-card__title">{title}</span>'
            f'{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def render_navbar(active_page: str) -> None:
    """Render the dashboard navigation bar with active state."""

    link_markup: list[str] = []
    for link in NAV_LINKS:
        css_class = "ps-nav__link"
        if link.slug == active_page:
            css_class += " is-active"
        if not link.enabled:
            css_class += " is-disabled"
        link_markup.append(f'<span class="{css_class}">{link.label}</span>')

    st.markdown(
        f"""
        <nav class="ps-nav">
            <div class="ps-nav__brand">Ledgerlite</div>
            <div class="ps-nav__links">{''.join(link_markup)}</div>
        </nav>
        """,
        unsafe_allow_html=True,
    )
