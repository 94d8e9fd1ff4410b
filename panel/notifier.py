import logging


class Notifier:
    """User-facing notifications (the toast surface). Default goes to logging."""

    def __init__(self, logger=None):
        self.logger = logger or logging.getLogger('panel.notifications')

    def success(self, message):
        self.logger.info(message)

    def info(self, message):
        self.logger.info(message)

    def warning(self, message):
        self.logger.warning(message)

    def error(self, message):
        self.logger.error(message)
