import logging

__all__ = ["logger", "enable_stderr_logging", "short_exc"]

logger = logging.getLogger("streamsource")
logger.addHandler(logging.NullHandler())


def enable_stderr_logging(level=logging.DEBUG):
    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)-8s %(message)s'))
    logger.addHandler(stderr_handler)
    logger.setLevel(level)
    return stderr_handler


def short_exc(e):
    return f"{e.__class__.__name__}: {e}"
