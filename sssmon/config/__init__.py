from .config import RunConfig, MAX_LOG_FILE_NAME_LENGTH
from .config_manager import ConfigManager

__all__ = ['RunConfig', 'ConfigManager', 'MAX_LOG_FILE_NAME_LENGTH']
