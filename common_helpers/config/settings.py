"""
Configuration settings for the helper collection.

**Conceptual**: The helpers themselves are stateless, but a few ambient
behaviours are tunable per process: today that is how numpy reports
floating-point degeneracies (division by zero, 0/0) hit by the numeric
helpers. This module exposes those knobs as strongly-typed, frozen settings
objects loaded from environment variables (optionally via a .env file).

**Why centralized config?**
  - Single source of truth for tunables instead of scattered os.getenv calls.
  - Easy to test (inject fake settings, or monkeypatch env and reset).
  - Fail-fast validation (a typo in a mode name is a clear ValueError at
    first use, not a confusing numpy error deep inside a helper).

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Try to load .env file if present (dev/local environments)
try:
    from dotenv import load_dotenv
    # Load .env from project root
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)
except ImportError:
    # python-dotenv not installed; assume environment variables are set externally
    pass


# Modes accepted for floating-point error reporting.
# "raise" is intentionally absent: degenerate numeric input must never raise.
FLOAT_ERROR_MODES = ("ignore", "warn", "log")


@dataclass(frozen=True)
class NumericSettings:
    """
    Configuration for the numeric interpolation helpers.

    **Conceptual**: Helpers such as map(), smoothstep() and linstep() divide by
    (b - a). When a == b the result is nan or +/-inf, exactly as IEEE-754
    arithmetic dictates; overflow on huge array inputs likewise becomes inf.
    This setting only controls whether such an event is silent, surfaces as
    a numpy RuntimeWarning, or is written to the package logger. It never
    changes the returned value.

    Attributes:
        float_errors: One of "ignore" (default), "warn" or "log".
    """
    float_errors: str = "ignore"

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.float_errors not in FLOAT_ERROR_MODES:
            raise ValueError(
                f"COMMON_HELPERS_FLOAT_ERRORS must be one of {', '.join(FLOAT_ERROR_MODES)}, "
                f"got: {self.float_errors!r}"
            )

    @classmethod
    def from_env(cls) -> "NumericSettings":
        """
        Load numeric settings from environment variables.

        **Environment variables**:
          - COMMON_HELPERS_FLOAT_ERRORS (optional): "ignore", "warn" or "log".
            Defaults to "ignore" if not set. Case-insensitive.

        Returns:
            NumericSettings object with values loaded from environment.

        Raises:
            ValueError: If COMMON_HELPERS_FLOAT_ERRORS holds an unknown mode.

        Usage example:
            >>> # In .env file:
            >>> # COMMON_HELPERS_FLOAT_ERRORS=warn
            >>>
            >>> settings = NumericSettings.from_env()
            >>> print(settings.float_errors)  # "warn"
        """
        float_errors = os.getenv("COMMON_HELPERS_FLOAT_ERRORS", "ignore").strip().lower()
        return cls(float_errors=float_errors)


@dataclass(frozen=True)
class Settings:
    """
    Global settings for the helper collection.

    **Usage pattern**:
      ```python
      from common_helpers.config.settings import get_settings

      mode = get_settings().numeric.float_errors
      ```

    Attributes:
        numeric: Settings for the numeric helpers.
    """
    numeric: NumericSettings = field(default_factory=NumericSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load global settings from environment variables.

        Returns:
            Settings object with all subsystem settings loaded from environment.

        Raises:
            ValueError: If any subsystem setting is invalid.
        """
        return cls(numeric=NumericSettings.from_env())


# Lazily-initialized singleton. Tests call reset_settings() to force a reload.
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    **Conceptual**: Settings are loaded from the environment on first call,
    then cached for reuse, so reading them from a hot numeric path costs a
    single global lookup.

    Returns:
        Global Settings singleton.

    Raises:
        ValueError: If the environment holds invalid settings.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    **Testing pattern**:
      ```python
      def test_something(monkeypatch):
          monkeypatch.setenv("COMMON_HELPERS_FLOAT_ERRORS", "warn")
          reset_settings()
          assert get_settings().numeric.float_errors == "warn"
      ```

    Returns:
        None (side effect: clears global settings cache).
    """
    global _default_settings
    _default_settings = None
