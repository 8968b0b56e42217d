"""Utils module."""
from utils.data_uri import parse_data_uri, to_data_uri, abbreviate_data_uris
from utils.logger import setup_logger, get_logger, app_logger

__all__ = [
    "parse_data_uri",
    "to_data_uri",
    "abbreviate_data_uris",
    "setup_logger",
    "get_logger",
    "app_logger"
]
