"""Logger for ilnav."""

from ilnavcommon.logging.logging_provider import LOGGING_PROVIDER

ILNAV_LOGGER = LOGGING_PROVIDER.new_logger("ilnav", hook_exception=True)
