"""
Browser family classification.

Ordered, case-insensitive substring rules. Edge ships a Chrome-like user
agent and Chrome's contains "safari", so the order below must not change:

    edg      -> Edge
    chrome   -> Chrome  (not Edge)
    safari   -> Safari  (no chrome token)
    firefox  -> Firefox
    else     -> Other
"""

from __future__ import annotations

from .models import BrowserFamily

EDGE_TOKEN = "edg"
CHROME_TOKEN = "chrome"
SAFARI_TOKEN = "safari"
FIREFOX_TOKEN = "firefox"


def classify_browser(user_agent: str | None) -> BrowserFamily:
    """Map a raw user agent to a browser family. Total: never raises."""
    if not user_agent:
        return BrowserFamily.OTHER

    ua_lower = user_agent.lower()

    if EDGE_TOKEN in ua_lower:
        return BrowserFamily.EDGE
    if CHROME_TOKEN in ua_lower:
        return BrowserFamily.CHROME
    if SAFARI_TOKEN in ua_lower:
        return BrowserFamily.SAFARI
    if FIREFOX_TOKEN in ua_lower:
        return BrowserFamily.FIREFOX

    return BrowserFamily.OTHER
