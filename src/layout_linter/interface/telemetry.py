"""Telemetry adapter writing through the logging module."""

import logging

from layout_linter import __version__


class LoggingTelemetry:
    """TelemetryPort implementation; verbosity follows the ``layout_linter`` logger level."""

    def __init__(self, project_name: str = "LAYOUT-LINTER", logger: logging.Logger | None = None) -> None:
        self.project_name = project_name
        self._logger = logger or logging.getLogger("layout_linter")

    @staticmethod
    def configure(verbose: bool = False) -> None:
        """Install a stderr handler once; ``verbose`` lowers the level to DEBUG."""
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
        logging.getLogger("layout_linter").setLevel(logging.DEBUG if verbose else logging.WARNING)

    def step(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def handshake(self) -> None:
        self._logger.info("%s %s online", self.project_name, __version__)
