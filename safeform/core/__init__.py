# Core module exports
from safeform.core.config import Settings, get_settings
from safeform.core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    unbind_context,
    form_logger,
    validation_logger,
    service_logger,
    flow_logger,
)
