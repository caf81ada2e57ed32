"""Application bootstrap: settings -> logging + populated registry."""

from __future__ import annotations

from packages.variable_keys.config import VariableKeysSettings, load_settings
from packages.variable_keys.logging import configure_logging, fields, get_logger, log_context
from packages.variable_keys.registry import VariableKeysRegistry

_LOGGER = get_logger(__name__)


def bootstrap(
    settings: VariableKeysSettings | None = None,
    *,
    configure: bool = True,
) -> VariableKeysRegistry:
    """Build a registry populated from configured model mappings.

    Settings are loaded through ``load_settings`` when not supplied. With
    ``configure`` set, root logging is configured from ``settings.logging``
    first. The registry inherits ``settings.default_morph_type``.
    """
    resolved = settings if settings is not None else load_settings()
    if configure:
        configure_logging(
            level=resolved.logging.level,
            json_output=resolved.logging.json_output,
            service=resolved.logging.service,
            environment=resolved.logging.environment,
        )

    registry = VariableKeysRegistry(default_morph_type=resolved.default_morph_type)
    registry.map(
        {
            model: mapping.model_dump(exclude_none=True)
            for model, mapping in resolved.models.items()
        }
    )
    with log_context({fields.MODEL_COUNT: len(resolved.models)}):
        _LOGGER.info("Variable keys registry bootstrapped")
    return registry
