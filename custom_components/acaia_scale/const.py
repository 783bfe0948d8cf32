"""Constants for the Acaia Scale integration."""

DOMAIN = "acaia_scale"

# Config entry keys, exactly one of address / name / model is set
CONF_MODEL = "model"
CONF_VALIDATE_CHECKSUM = "validate_checksum"

DEFAULT_VALIDATE_CHECKSUM = False
