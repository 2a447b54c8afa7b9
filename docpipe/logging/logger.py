import logging
import sys

_FORMAT = "%(asctime)s [%(levelname)s] {component}: %(message)s"


class Log:
    """Centralized logging shared by the processing API, the status API and the worker.

    Each process calls ``configure`` once with its component name so that
    interleaved output from several processes stays attributable.
    """

    _logger: logging.Logger = logging.getLogger("docpipe")

    @classmethod
    def configure(cls, log_level: str, component: str = "docpipe") -> None:
        cls._logger.setLevel(log_level.upper())
        formatter = logging.Formatter(_FORMAT.format(component=component))
        if not cls._logger.handlers:
            cls._logger.addHandler(logging.StreamHandler(sys.stdout))
        for handler in cls._logger.handlers:
            handler.setFormatter(formatter)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log an error together with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
