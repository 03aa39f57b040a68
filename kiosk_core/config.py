"""
Configuration Module for the Kiosk Core
=======================================

This module centralizes the settings and constants used by the kiosk core.
Values are read from environment variables once, at import time. A local
`.env` file is loaded first so a kiosk can be configured without exporting
variables in the shell.

Configuration Categories:
-------------------------
- **Session Configuration**: Default language and restaurant for a kiosk
  session. These are passed explicitly into each order session through
  `SessionConfig`; the customization engine itself never reads them.

- **Input Validation**: Limits on free-text instructions and line item
  quantities entered on the customization screen.

Environment Variables:
----------------------
- KIOSK_LANGUAGE: Default UI language code (default: "en")
- KIOSK_SUPPORTED_LANGUAGES: Comma-separated language codes (default: "en,nl,fr,de,es")
- KIOSK_RESTAURANT_ID: Restaurant this kiosk belongs to (default: "")
- MAX_SPECIAL_INSTRUCTIONS_LENGTH: Max instructions length (default: 500)
- MAX_LINE_ITEM_QUANTITY: Max quantity of one line item (default: 99)

Usage:
------
    from kiosk_core.config import SessionConfig, MAX_SPECIAL_INSTRUCTIONS_LENGTH

    config = SessionConfig.from_env()
"""

import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

load_dotenv()


# =============================================================================
# Session Configuration
# =============================================================================
# A kiosk is installed in one restaurant and shows its menu in the customer's
# language. Both are chosen when a session starts.

DEFAULT_LANGUAGE_CODE: str = os.getenv("KIOSK_LANGUAGE", "en").strip().lower() or "en"

_languages_env = os.getenv("KIOSK_SUPPORTED_LANGUAGES", "en,nl,fr,de,es")
SUPPORTED_LANGUAGES: List[str] = [
    code.strip().lower()
    for code in _languages_env.split(",")
    if code.strip()
] or [DEFAULT_LANGUAGE_CODE]

DEFAULT_RESTAURANT_ID: str = os.getenv("KIOSK_RESTAURANT_ID", "")


# =============================================================================
# Input Validation Configuration
# =============================================================================

# Kitchen tickets print instructions verbatim, so keep them short
MAX_SPECIAL_INSTRUCTIONS_LENGTH: int = int(os.getenv("MAX_SPECIAL_INSTRUCTIONS_LENGTH", "500"))

# Upper bound of the quantity stepper on the customization screen
MAX_LINE_ITEM_QUANTITY: int = int(os.getenv("MAX_LINE_ITEM_QUANTITY", "99"))


class SessionConfig(BaseModel):
    """
    Explicit configuration for one kiosk order session.

    Attributes:
        language_code: UI language for the session (e.g., "en", "nl")
        restaurant_id: Restaurant whose menu is being ordered from
    """
    model_config = ConfigDict(frozen=True)

    language_code: str = DEFAULT_LANGUAGE_CODE
    restaurant_id: str = DEFAULT_RESTAURANT_ID

    @field_validator("language_code", mode="before")
    @classmethod
    def _fallback_language(cls, value):
        code = (value or "").strip().lower()
        if code not in SUPPORTED_LANGUAGES:
            return DEFAULT_LANGUAGE_CODE
        return code

    @classmethod
    def from_env(cls) -> "SessionConfig":
        """Build a session config from the module-level defaults."""
        return cls(language_code=DEFAULT_LANGUAGE_CODE, restaurant_id=DEFAULT_RESTAURANT_ID)
