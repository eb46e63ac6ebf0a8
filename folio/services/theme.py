"""Light/dark theme preference.

The theme is not global state: it is resolved from the request's ``theme``
cookie (falling back to the configured default) and handed to handlers
through the ``current_theme`` dependency. Toggling returns a new value
that the caller writes back to the cookie.
"""

import logging
from enum import Enum

from fastapi import Cookie

from folio.config import get_settings

logger = logging.getLogger(__name__)

THEME_COOKIE = "theme"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


def resolve_theme(value: str | None) -> Theme:
    """Parse a stored theme value, falling back to the configured default."""
    if value:
        try:
            return Theme(value)
        except ValueError:
            logger.debug("Ignoring unknown theme value %r", value)
    try:
        return Theme(get_settings().default_theme)
    except ValueError:
        logger.warning(
            "Invalid default_theme %r, using light", get_settings().default_theme
        )
        return Theme.LIGHT


def current_theme(theme: str | None = Cookie(default=None)) -> Theme:
    """FastAPI dependency: the theme for this request."""
    return resolve_theme(theme)
