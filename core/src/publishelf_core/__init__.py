from publishelf_core.config import Settings, load_settings
from publishelf_core.cookies import (
    CookieOptions,
    get_clear_cookie_options,
    get_cookie_options,
    parse_token_expiry,
)

__version__ = "0.1.0"

__all__ = [
    "CookieOptions",
    "Settings",
    "__version__",
    "get_clear_cookie_options",
    "get_cookie_options",
    "load_settings",
    "parse_token_expiry",
]
