import logging
import sys

# Chatty client libraries; their request logs repeat what the jobs already log.
_QUIET_LOGGERS = ("httpx", "openai", "google", "psycopg.pool")


class Log:
    """Process-wide logger facade for the worker, its jobs and providers.

    Records carry the thread name so lines from concurrent jobs can be told
    apart.
    """

    _logger: logging.Logger = logging.getLogger("docdiff")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level, attach a stdout handler once and quiet client libraries."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] [%(threadName)s] %(message)s")
            )
            cls._logger.addHandler(handler)
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, exc: BaseException, **kwargs: object) -> None:
        """Log an error with the traceback of ``exc``, raised or not."""
        cls._logger.error(message, exc_info=exc, extra=kwargs)
