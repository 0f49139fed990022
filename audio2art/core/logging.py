import logging
from pathlib import Path


class AccessLogFilter(logging.Filter):
    """Filter to suppress noisy access logs."""
    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        # Health probes hit every few seconds
        if "/health" in msg:
            return False
        return True

def setup_logging(level: int | str = logging.INFO, log_file: str | None = "logs/app.log") -> None:
    """Configure application logging."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Formatter
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Console Handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File Handler
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Filter uvicorn access logs to remove noise
    logging.getLogger("uvicorn.access").addFilter(AccessLogFilter())


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
