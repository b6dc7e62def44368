"""Process entry point for the BCDA client descriptor.

Call `startup()` once when the process starts. An invalid descriptor
raises ConfigurationError here so the process fails fast instead of
running half-configured.
"""

from bulkdata_config.descriptor.loader import get_config
from bulkdata_config.descriptor.models import ApiClientConfig
from bulkdata_config.logging.audit import setup_logging


def startup() -> ApiClientConfig:
    setup_logging()
    return get_config()
