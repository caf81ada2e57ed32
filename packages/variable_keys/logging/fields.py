"""Structured log field names emitted by variable keys."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"

MODEL = "model"
PRIMARY_KEY_TYPE = "primary_key_type"
MORPH_TYPE = "morph_type"
MODEL_COUNT = "model_count"

SERVICE = "service"
ENVIRONMENT = "environment"
