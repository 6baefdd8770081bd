"""
Run logging helpers.
"""

import logging
from datetime import datetime
from pathlib import Path


def setup_run_logger(log_dir=None, name="edgesim", level=logging.INFO):
    """
    Configure the package logger for one run.

    Messages go to the console; when ``log_dir`` is given they are also
    written to a timestamped ``run_*.log`` file there. Returns the logger
    and the log path (None without a log directory).
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    log_path = None
    if log_dir is not None and str(log_dir).strip():
        resolved_log_dir = Path(str(log_dir).strip()).expanduser()
        resolved_log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = resolved_log_dir / f"run_{timestamp}.log"

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
        )
        logger.addHandler(file_handler)
        log_path = str(log_path)

    return logger, log_path
