# status_bar_handler.py
import logging


class StatusBarHandler(logging.Handler):
    """Forwards log records to a UI callback(msg: str, level: int)."""

    def __init__(self, callback, level=logging.INFO):
        super().__init__(level)
        self.callback = callback
        self.setFormatter(logging.Formatter('%(message)s'))

    def emit(self, record):
        try:
            msg = self.format(record).strip()
            if msg:
                self.callback(msg, record.levelno)
        except Exception:
            self.handleError(record)
