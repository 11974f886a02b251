import logging

from src.payroll_system.payroll_system.common.logging_config import PACKAGE_LOGGER, configure_logging, reset_logging


def test_configure_logging_is_idempotent():
    try:
        logger = configure_logging("warning")
        configure_logging("WARNING")

        assert logger.name == PACKAGE_LOGGER
        assert PACKAGE_LOGGER.endswith("payroll_system.payroll_system")
        assert logger.level == logging.WARNING
        assert sum(1 for h in logger.handlers if getattr(h, "_payroll_handler", False)) == 1
        assert logger.propagate is False
    finally:
        reset_logging()
