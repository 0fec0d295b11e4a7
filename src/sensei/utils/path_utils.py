# src/sensei/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for retrieving the paths the application reads from.
    """

    @staticmethod
    def get_package_root() -> Path:
        """Returns the absolute path of the installed 'sensei' package."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        """Returns the optional settings.json that ships next to the package."""
        return PathUtils.get_package_root() / "settings.json"
