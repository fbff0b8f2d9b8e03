import logging
import sys
import json
from datetime import datetime, timezone
from typing import Optional

PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def setup_logger(name: Optional[str], level: str = "INFO", log_file: Optional[str] = None,
                 json_format: bool = False):
    logger = logging.getLogger(name)
    logger.setLevel(level)

    formatter = JsonFormatter() if json_format else logging.Formatter(PLAIN_FORMAT)

    # Replace only handlers installed by an earlier call
    for handler in list(logger.handlers):
        if getattr(handler, "_pricecast", False):
            logger.removeHandler(handler)
            handler.close()

    # Console Handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler._pricecast = True
    logger.addHandler(console_handler)

    # File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler._pricecast = True
        logger.addHandler(file_handler)

    return logger
