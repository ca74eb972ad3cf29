# Common utilities
from rcslicense.common.config import Config as Config
from rcslicense.common.crypto import CryptoUtils as CryptoUtils
from rcslicense.common.logging_utils import setup_logger as setup_logger
from rcslicense.common.mixins import Configurable as Configurable

__all__ = ["Config", "Configurable", "CryptoUtils", "setup_logger"]
