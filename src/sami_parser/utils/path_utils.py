# src/sami_parser/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving the package paths the parser depends on.
    """

    @staticmethod
    def get_package_root() -> Path:
        """
        Returns the absolute path of the installed 'sami_parser' package.
        (e.g., /path/to/site-packages/sami_parser)
        """
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_file() -> Path:
        """Returns the path to the bundled settings.json file."""
        return PathUtils.get_package_root() / "settings.json"
