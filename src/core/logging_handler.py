import logging
from PySide6.QtCore import QObject, Signal


class QtLogHandler(logging.Handler, QObject):
    """
    Redirects Python logging records to a Qt Signal.
    """
    new_record = Signal(str, str, str) # level, source, message

    def __init__(self, level=logging.NOTSET):
        logging.Handler.__init__(self, level)
        QObject.__init__(self)

    @staticmethod
    def short_source(name: str) -> str:
        """Strip the package path from a logger name: src.core.filtered_view -> filtered_view."""
        if name.startswith("src."):
            return name.split(".")[-1]
        return name

    def emit(self, record):
        try:
            # Qt object may already be deleted during shutdown
            if not hasattr(self, 'new_record'):
                return

            msg = self.format(record)
            self.new_record.emit(record.levelname, self.short_source(record.name), msg)
        except RuntimeError:
            # Qt object deleted
            pass
        except Exception:
            self.handleError(record)
