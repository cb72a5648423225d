import logging
from logging.handlers import RotatingFileHandler
import os
import json
from datetime import datetime, timezone
from typing import Optional
import traceback

from schooldesk.core.config import settings


class CustomJsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""
    def __init__(self, **kwargs):
        super().__init__()
        self.kwargs = kwargs

    def format(self, record):
        json_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if record.exc_info:
            json_record['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }

        if self.kwargs.get('extra_fields'):
            for field in self.kwargs['extra_fields']:
                if hasattr(record, field):
                    json_record[field] = getattr(record, field)

        return json.dumps(json_record, default=str)


class LoggerFactory:
    """Factory class for creating and configuring loggers"""

    @staticmethod
    def create_logger(name: str, log_dir: Optional[str] = None, level: str = "INFO"):
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level))

        # Remove existing handlers if any
        if logger.handlers:
            logger.handlers.clear()

        handlers = {'console': logging.StreamHandler()}

        # File logging is opt-in
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            handlers['app'] = RotatingFileHandler(
                os.path.join(log_dir, 'app.log'),
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5
            )
            handlers['error'] = RotatingFileHandler(
                os.path.join(log_dir, 'error.log'),
                maxBytes=10 * 1024 * 1024,
                backupCount=5
            )

        for handler_name, handler in handlers.items():
            if handler_name == 'error':
                handler.setLevel(logging.ERROR)
            else:
                handler.setLevel(getattr(logging, level))

            # JSON for files, plain text for the console
            if isinstance(handler, RotatingFileHandler):
                handler.setFormatter(CustomJsonFormatter(extra_fields=['request_id', 'user_id', 'path']))
            else:
                handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                ))

            logger.addHandler(handler)

        return logger


# Create default logger instance
logger = LoggerFactory.create_logger("schooldesk", settings.LOG_DIR, settings.LOG_LEVEL)
