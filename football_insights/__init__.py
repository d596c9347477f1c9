from .config import PACKAGE_LOGGER, setup_logger

setup_logger(PACKAGE_LOGGER)
