"""Constants shared across the sequent package."""

# Threshold above which a registration logs a possible-leak warning.
DEFAULT_MAX_LISTENERS = 10

# Reserved event that receives errors raised by listeners of other events.
LISTENER_ERROR_EVENT = "listener-error"

ERR_INVALID_ARG_TYPE = "ERR_INVALID_ARG_TYPE"
ERR_OUT_OF_RANGE = "ERR_OUT_OF_RANGE"
