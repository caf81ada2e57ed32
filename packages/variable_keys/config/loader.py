"""Settings loading with injectable sources.

Precedence is always explicit params, then ``VARIABLE_KEYS_*`` environment
variables (``__`` separates nested keys), then the YAML file, then model
defaults. For example ``VARIABLE_KEYS_LOGGING__LEVEL=DEBUG`` sets
``logging.level``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import DEFAULT_CONFIG_PATH, VariableKeysSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    config_path: str | Path | None = None,
) -> VariableKeysSettings:
    """Load settings, optionally replacing the process env or YAML path.

    ``environ`` stands in for ``os.environ`` and ``config_path`` for
    ``DEFAULT_CONFIG_PATH``; both default to the real sources.
    """
    resolved_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    class _LoadedSettings(VariableKeysSettings):
        _config_path: ClassVar[Path] = resolved_path
        _environ: ClassVar[Mapping[str, str] | None] = environ

    return _LoadedSettings(**dict(cli_params or {}))
