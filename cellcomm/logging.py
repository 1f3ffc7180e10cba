# code adapted from https://github.com/aristoteleo/dynamo-release/blob/master/dynamo/dynamo_logger.py
import logging
import sys
import time


def format_logging_message(msg, logging_level, indent_level=1, indent_space_num=6):
    indent_str = "-" * indent_space_num
    prefix = indent_str * indent_level
    prefix = "|" + prefix[1:]
    if logging_level == logging.INFO:
        prefix += ">"
    elif logging_level == logging.WARNING:
        prefix += "?"
    elif logging_level == logging.CRITICAL:
        prefix += "!!"
    elif logging_level == logging.DEBUG:
        prefix += ">>>"
    new_msg = prefix + " " + str(msg)
    return new_msg


class Logger:
    """cellcomm's logger, with indented messages and simple timing of progress."""

    FORMAT = "%(message)s"

    def __init__(self, namespace="main", level=None):
        self.namespace = namespace
        self.logger = logging.getLogger(namespace)
        self.previous_timestamp = time.time()
        self.time_passed = 0

        # To-do: add file handler in future
        # e.g. logging.FileHandler(log_path)
        if not self.logger.handlers:
            self.logger_stream_handler = logging.StreamHandler(sys.stdout)
            self.logger_stream_handler.setFormatter(logging.Formatter(self.FORMAT))
            self.logger.addHandler(self.logger_stream_handler)
        else:
            self.logger_stream_handler = self.logger.handlers[0]
        self.logger.propagate = False

        if level is None:
            self.logger.setLevel(logging.INFO)
        else:
            self.logger.setLevel(level)

    def setLevel(self, *args, **kwargs):
        return self.logger.setLevel(*args, **kwargs)

    def debug(self, message, indent_level=1, *args, **kwargs):
        message = format_logging_message(message, logging.DEBUG, indent_level=indent_level)
        return self.logger.debug(message, *args, **kwargs)

    def info(self, message, indent_level=1, *args, **kwargs):
        message = format_logging_message(message, logging.INFO, indent_level=indent_level)
        return self.logger.info(message, *args, **kwargs)

    def warning(self, message, indent_level=1, *args, **kwargs):
        message = format_logging_message(message, logging.WARNING, indent_level=indent_level)
        return self.logger.warning(message, *args, **kwargs)

    def exception(self, message, indent_level=1, *args, **kwargs):
        message = format_logging_message(message, logging.ERROR, indent_level=indent_level)
        return self.logger.exception(message, *args, **kwargs)

    def error(self, message, indent_level=1, *args, **kwargs):
        message = format_logging_message(message, logging.ERROR, indent_level=indent_level)
        return self.logger.error(message, *args, **kwargs)

    def info_insert_attribute(self, key, obj_attr="net", indent_level=1, *args, **kwargs):
        message = "<insert> %s to %s in CommunicationObject" % (key, obj_attr)
        return self.info(message, indent_level=indent_level, *args, **kwargs)

    def log_time(self):
        now = time.time()
        self.time_passed = now - self.previous_timestamp
        self.previous_timestamp = now
        return self.time_passed

    def finish_progress(self, progress_name="", time_unit="s", indent_level=1):
        self.log_time()
        self.info("[%s] completed [%.4f%s]" % (progress_name, self.time_passed, time_unit), indent_level=indent_level)


class LoggerManager:

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    EXCEPTION = logging.ERROR

    main_logger = Logger("cellcomm")

    @staticmethod
    def get_main_logger():
        return LoggerManager.main_logger

    @staticmethod
    def main_set_level(level):
        LoggerManager.main_logger.setLevel(level)

    @staticmethod
    def main_info(message, indent_level=1):
        LoggerManager.main_logger.info(message, indent_level)

    @staticmethod
    def main_debug(message, indent_level=1):
        LoggerManager.main_logger.debug(message, indent_level)

    @staticmethod
    def main_warning(message, indent_level=1):
        LoggerManager.main_logger.warning(message, indent_level)

    @staticmethod
    def main_exception(message, indent_level=1):
        LoggerManager.main_logger.exception(message, indent_level)

    @staticmethod
    def main_info_insert_attribute(key, obj_attr="net", indent_level=1):
        LoggerManager.main_logger.info_insert_attribute(key, obj_attr=obj_attr, indent_level=indent_level)

    @staticmethod
    def main_log_time():
        LoggerManager.main_logger.log_time()

    @staticmethod
    def main_finish_progress(progress_name=""):
        LoggerManager.main_logger.finish_progress(progress_name=progress_name)


logger_manager = LoggerManager
