"""
rustfmt formatter for Rust code.
"""

from __future__ import annotations

import logging
import subprocess

from ..config import FormatterConfig
from ..errors import FormatterError
from .base import Formatter

logger = logging.getLogger(__name__)


class RustfmtFormatter(Formatter):
    """Formatter piping code through rustfmt."""

    def __init__(self):
        self._available: dict[str, bool] = {}

    def is_available(self, config: FormatterConfig) -> bool:
        """Check if the configured rustfmt executable runs."""
        if config.command not in self._available:
            try:
                result = subprocess.run(
                    [config.command, "--version"],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available[config.command] = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available[config.command] = False
        return self._available[config.command]

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Rust code using rustfmt.

        The code goes through stdin and the result is read from stdout, in
        a single blocking round-trip.

        Args:
            code: Rust source code to format
            config: Formatter configuration

        Returns:
            Formatted code

        Raises:
            FormatterError: If rustfmt is missing, times out or exits non-zero
        """
        cmd = [config.command, "--emit", "stdout"]
        if config.edition:
            cmd.extend(["--edition", config.edition])

        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=config.timeout,
            )
        except FileNotFoundError as e:
            raise FormatterError(f"Formatter executable not found: {config.command}") from e
        except subprocess.TimeoutExpired as e:
            raise FormatterError(f"{config.command} timed out after {config.timeout}s") from e

        if result.returncode != 0:
            raise FormatterError(f"{config.command} failed with exit code {result.returncode}: {result.stderr.strip()}")
        return result.stdout


def format_with_rustfmt(code: str, edition: str = "2021") -> str:
    """
    Convenience function to format Rust code with rustfmt.

    Args:
        code: Rust source code
        edition: Rust edition passed to rustfmt

    Returns:
        Formatted code
    """
    formatter = RustfmtFormatter()
    config = FormatterConfig(enabled=True, edition=edition)
    return formatter.format(code, config)
