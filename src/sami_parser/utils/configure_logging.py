import logging
import sys
from tqdm import tqdm

from sami_parser.managers.config_manager import config_manager


class LogWithTqdm(logging.Handler):
    """
    A custom logging handler that redirects logging output to `tqdm.write()`,
    ensuring that log messages do not interfere with the batch progress bar.
    """
    def emit(self, record):
        try:
            msg = self.format(record)
            # Write to stderr for consistency with tqdm's default stream.
            tqdm.write(msg, file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def _resolve_level(level, fallback):
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level


def configure_logger(general_level=None, module_specific_levels=None, silenced_loggers=None):
    """
    Configures the root logger and specific module loggers with a
    TQDM-friendly handler. Without an explicit level, 'debug.level'
    from settings.json is used.
    """
    if general_level is None:
        general_level = config_manager.get_nested("debug.level", "WARNING")

    handler = LogWithTqdm()
    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"
    )
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(general_level, logging.INFO))

    # Replace existing handlers so repeated calls do not duplicate output.
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    if module_specific_levels:
        for name, level in module_specific_levels.items():
            logging.getLogger(name).setLevel(_resolve_level(level, logging.INFO))

    if silenced_loggers:
        for name, level in silenced_loggers.items():
            logging.getLogger(name).setLevel(_resolve_level(level, logging.CRITICAL))
