import logging
from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

ORGANIZATION = "LiveFilter"
APPLICATION = "UI"
GROUP = "filter"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class FilterSettings:
    """User preferences for the filtering views, stored in QSettings."""
    search_column: int = 0
    refresh_on_add: bool = False
    placeholder_text: str = "Filter..."
    log_level: str = "INFO"

    @classmethod
    def load(cls, settings: Optional[QSettings] = None) -> "FilterSettings":
        settings = settings or QSettings(ORGANIZATION, APPLICATION)
        loaded = cls()
        settings.beginGroup(GROUP)
        try:
            raw_column = settings.value("search_column", loaded.search_column)
            try:
                loaded.search_column = int(raw_column)
            except (TypeError, ValueError):
                logger.warning(f"Invalid setting {GROUP}/search_column={raw_column!r}; using 0")
            if loaded.search_column < 0:
                logger.warning(f"Invalid setting {GROUP}/search_column={loaded.search_column}; using 0")
                loaded.search_column = 0

            loaded.refresh_on_add = settings.value("refresh_on_add", loaded.refresh_on_add, type=bool)
            loaded.placeholder_text = str(settings.value("placeholder_text", loaded.placeholder_text))

            level = str(settings.value("log_level", loaded.log_level)).upper()
            if level in _LOG_LEVELS:
                loaded.log_level = level
            else:
                logger.warning(f"Invalid setting {GROUP}/log_level={level!r}; using INFO")
        finally:
            settings.endGroup()
        return loaded

    def save(self, settings: Optional[QSettings] = None):
        settings = settings or QSettings(ORGANIZATION, APPLICATION)
        settings.beginGroup(GROUP)
        settings.setValue("search_column", self.search_column)
        settings.setValue("refresh_on_add", self.refresh_on_add)
        settings.setValue("placeholder_text", self.placeholder_text)
        settings.setValue("log_level", self.log_level)
        settings.endGroup()
        settings.sync()

    def apply_logging(self):
        """Set the root logger level from `log_level`."""
        logging.getLogger().setLevel(getattr(logging, self.log_level, logging.INFO))
