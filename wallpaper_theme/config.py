import logging
import os
from dataclasses import dataclass
from typing import Dict, Tuple


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ThemeSettings:
    port: int
    timeout: float
    sample_scale: float
    discard_stale: bool
    allow_local_sources: bool
    log_level: str

    @classmethod
    def from_env(cls) -> "ThemeSettings":
        return cls(
            port=int(os.getenv("PORT", "5600")),
            timeout=float(os.getenv("SOURCE_TIMEOUT", "10.0")),
            sample_scale=float(os.getenv("SAMPLE_SCALE", "0.1")),
            discard_stale=_env_flag("THEME_DISCARD_STALE", "true"),
            allow_local_sources=_env_flag("THEME_ALLOW_LOCAL_SOURCES", "false"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


SETTINGS = ThemeSettings.from_env()


# Built-in "aurora" palette: primary, secondary, accent, gradient start, gradient end.
FALLBACK_PALETTE_HEX: Tuple[str, str, str, str, str] = (
    "#A78BFA",
    "#818CF8",
    "#C084FC",
    "#1E1B4B",
    "#312E81",
)

PALETTE_TOKENS: Tuple[str, ...] = (
    "primary",
    "secondary",
    "accent",
    "bg-gradient-start",
    "bg-gradient-end",
)

SHADE_TOKENS: Tuple[str, ...] = (
    "bg-color",
    "accent-light-tint",
    "darker-color",
    "dark-color",
    "text-color-dark",
    "whitish-color",
)

TOKEN_NAMES: Tuple[str, ...] = PALETTE_TOKENS + SHADE_TOKENS

DEFAULT_TOKENS: Dict[str, str] = {
    **dict(zip(PALETTE_TOKENS, FALLBACK_PALETTE_HEX)),
    "bg-color": "#BBD6FD",
    "accent-light-tint": "#E2EEFF",
    "darker-color": "#3569B2",
    "dark-color": "#4382EC",
    "text-color-dark": "#1B3041",
    "whitish-color": "#FFFFFF",
}


def configure_logging() -> logging.Logger:
    logging.basicConfig(level=SETTINGS.log_level)
    return logging.getLogger("wallpaper-theme")
