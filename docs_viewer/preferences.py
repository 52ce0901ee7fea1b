"""Viewer preferences and per-request view state."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .constants import DARK_MODE_KEY, PREFERENCE_MAX_AGE

SIDEBAR_PARAM = "sidebar"
SIDEBAR_CLOSED = "closed"


class CookiePreferenceStore:
    """Boolean preferences kept in long-lived browser cookies.

    Values are stored as ``"true"``/``"false"`` under a fixed key so they
    survive across sessions. A missing or unrecognised value reads as the
    default.

    Args:
        cookies: Cookies sent with the current request.
    """

    def __init__(self, cookies: Mapping[str, str]):
        self._cookies = cookies

    def get(self, key: str, default: bool = False) -> bool:
        value = self._cookies.get(key)
        if value == "true":
            return True
        if value == "false":
            return False
        return default

    def set(self, response, key: str, value: bool) -> None:
        """Persist `value` on `response` (a Flask/Werkzeug response)."""
        response.set_cookie(
            key,
            "true" if value else "false",
            max_age=PREFERENCE_MAX_AGE,
            samesite="Lax",
            httponly=True,
        )


@dataclass
class ViewState:
    """Application-level view state owned by the page coordinator.

    Attributes:
        dark_mode: Whether the dark theme is active; loaded from the
            preference store on every page and saved when toggled.
        sidebar_open: Whether the folder sidebar is shown; per request.
    """

    dark_mode: bool = False
    sidebar_open: bool = True

    @classmethod
    def load(cls, store: CookiePreferenceStore, args: Mapping[str, str]) -> ViewState:
        return cls(
            dark_mode=store.get(DARK_MODE_KEY),
            sidebar_open=args.get(SIDEBAR_PARAM) != SIDEBAR_CLOSED,
        )

    def toggle_dark_mode(self, store: CookiePreferenceStore, response) -> None:
        self.dark_mode = not self.dark_mode
        store.set(response, DARK_MODE_KEY, self.dark_mode)
