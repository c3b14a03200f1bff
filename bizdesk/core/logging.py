"""Logging setup: every record is tagged with the current tenant."""

import logging

from bizdesk.core.tenant_scope import get_current_tenant

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [tenant=%(tenant)s] %(message)s"
HANDLER_NAME = "bizdesk"


class TenantLogFilter(logging.Filter):
    """Injects the current tenant identifier as ``record.tenant``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.tenant = get_current_tenant() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once at application start."""
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(TenantLogFilter())

    root = logging.getLogger()
    # Idempotent across app reloads
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())
