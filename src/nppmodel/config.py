"""Configuration for the NPP computation engine.

Configuration is injected per call (``config=...``) or taken from the
module-level default managed by :func:`configure`. The default is seeded
lazily from ``$NPPMODEL_CONFIG`` or ``~/.nppmodel/config.json`` when
either exists.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from nppmodel.exceptions import ConfigurationError

logger = logging.getLogger("nppmodel")

_CONFIG_ENV_VAR = "NPPMODEL_CONFIG"
_DEFAULT_CONFIG_PATH = Path("~/.nppmodel/config.json")
_SUPPORTED_DTYPES: frozenset[str] = frozenset({"float32", "float64"})


class Config(BaseModel):
    """Engine configuration model.

    Immutable pydantic model. Every ``compute_*`` call resolves its
    ``Config`` once at entry, so a concurrent ``configure()`` never
    changes settings halfway through a batch.

    Args:
        dtype: Floating-point dtype used for the raster algebra.
        max_workers: Number of threads used to evaluate batch frames.
            ``1`` evaluates frames sequentially.
        clamp_fpar: Clip FPAR to ``[0, 1]`` before computing APAR.
        strict_shapes: Reject frames whose grids are not 2-D or do not
            share one shape, returning a diagnostic instead of computing.

    Example:
        >>> cfg = Config(max_workers=4)
        >>> cfg.dtype
        'float64'
    """

    model_config = ConfigDict(frozen=True, validate_default=True, extra="forbid")

    dtype: str = "float64"
    max_workers: int = 1
    clamp_fpar: bool = False
    strict_shapes: bool = False

    @field_validator("dtype")
    @classmethod
    def _validate_dtype(cls, v: str) -> str:
        """Ensure dtype is a supported floating-point type."""
        if v not in _SUPPORTED_DTYPES:
            msg = f"dtype must be one of {sorted(_SUPPORTED_DTYPES)}"
            raise ValueError(msg)
        return v

    @field_validator("max_workers")
    @classmethod
    def _validate_max_workers(cls, v: int) -> int:
        """Ensure worker count is positive."""
        if v < 1:
            msg = "max_workers must be at least 1"
            raise ValueError(msg)
        return v


_default_config: Config | None = None


def configure(**kwargs: Any) -> None:
    """Set module-level default configuration.

    Creates a new ``Config`` from the current defaults merged with
    the provided keyword arguments.

    Args:
        **kwargs: Any ``Config`` field (e.g. ``max_workers``,
            ``clamp_fpar``).

    Raises:
        ValidationError: If a provided value fails pydantic validation.

    Example:
        >>> configure(max_workers=4, dtype="float32")
    """
    global _default_config  # noqa: PLW0603
    current = get_default_config().model_dump()
    current.update(kwargs)
    _default_config = Config(**current)


def get_default_config() -> Config:
    """Return the current module-level default configuration.

    On first use the default is seeded from the file found by
    :func:`resolve_config_path`, or built from field defaults when no
    file exists.

    Raises:
        ConfigurationError: If the resolved file cannot be parsed.
    """
    global _default_config  # noqa: PLW0603
    if _default_config is None:
        path = resolve_config_path()
        _default_config = load_config(path) if path is not None else Config()
    return _default_config


def resolve_config_path(
    explicit: Path | None = None,
) -> Path | None:
    """Resolve the configuration file path.

    Resolution order:
        1. *explicit* argument (highest priority)
        2. ``NPPMODEL_CONFIG`` environment variable
        3. Default ``~/.nppmodel/config.json``

    Args:
        explicit: An explicit path supplied by the caller.

    Returns:
        Resolved ``Path``, or ``None`` if no config file exists
        at the selected location.
    """
    if explicit is not None:
        path = Path(explicit).expanduser()
    elif os.environ.get(_CONFIG_ENV_VAR):
        path = Path(os.environ[_CONFIG_ENV_VAR]).expanduser()
    else:
        path = _DEFAULT_CONFIG_PATH.expanduser()

    if not path.exists():
        logger.debug("No config file at %s", path)
        return None
    return path


def load_config(path: Path | str) -> Config:
    """Load a ``Config`` from a JSON file.

    Args:
        path: Absolute or ``~``-prefixed path to the JSON file.

    Returns:
        Validated ``Config`` instance.

    Raises:
        ConfigurationError: If the file is missing, unreadable, or does
            not contain a JSON object.
        ValidationError: If a field value fails pydantic validation.
    """
    resolved = Path(path).expanduser()
    try:
        text = resolved.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(
            what="Cannot read config file",
            cause=f"File not found: {resolved}",
            fix=(
                f"Create {resolved} with engine settings, "
                f"or set the {_CONFIG_ENV_VAR} environment variable"
            ),
        ) from None
    except PermissionError:
        raise ConfigurationError(
            what="Cannot read config file",
            cause=f"Permission denied: {resolved}",
            fix=f"Check file permissions on {resolved}",
        ) from None

    try:
        parsed: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            what="Invalid config file format",
            cause=f"JSON parse error in {resolved}: {exc}",
            fix='Ensure the file contains valid JSON, e.g. {"max_workers": 4}',
        ) from None

    if not isinstance(parsed, dict):
        raise ConfigurationError(
            what="Invalid config file format",
            cause=f"Expected a JSON object in {resolved}, got {type(parsed).__name__}",
            fix='Ensure the file contains a JSON object, e.g. {"max_workers": 4}',
        )

    logger.debug("Loaded config from %s", resolved)
    return Config(**parsed)
