"""
Runtime configuration for b64img.

Collects CLI options and environment overrides into one object that
flows through the dispatcher.

Environment variables:
    B64IMG_OUTPUT_DIR    Default output directory (CLI -o wins)
    B64IMG_HTTP_TIMEOUT  Download timeout in seconds (default: 30)
    B64IMG_LOG_LEVEL     Logging level name or number (default: WARNING)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DECODED_DIR = "decoded"
DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass
class ConvertConfig:
    """
    Configuration for a single conversion run.

    Attributes:
        output_dir: Explicit output directory, None for the per-operation default
        pretty: Indent JSON output
        verbose: Log progress information
        assume_yes: Overwrite existing decoded files without prompting
        http_timeout: Download timeout in seconds
        decoded_dir_name: Directory under the cwd for extracted payloads
        log_level: Logging level for the stderr handler
    """

    output_dir: Path | None = None
    pretty: bool = False
    verbose: bool = False
    assume_yes: bool = False
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    decoded_dir_name: str = DEFAULT_DECODED_DIR
    log_level: int = logging.WARNING

    def __post_init__(self):
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir)
        if self.verbose and self.log_level > logging.INFO:
            self.log_level = logging.INFO

    def payload_dir(self) -> Path:
        """Directory for payloads extracted from JSON or text."""
        if self.output_dir is not None:
            return self.output_dir
        return Path.cwd() / self.decoded_dir_name


def _parse_log_level(value: str) -> int:
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level


def get_config(
    output_dir: str | Path | None = None,
    pretty: bool = False,
    verbose: bool = False,
    assume_yes: bool = False,
) -> ConvertConfig:
    """
    Create a configuration from CLI values and the environment.

    Args:
        output_dir: Output directory from the command line
        pretty: Pretty-print JSON output
        verbose: Enable progress logging
        assume_yes: Skip overwrite prompts

    Returns:
        Configured ConvertConfig instance

    Raises:
        ValueError: If an environment override cannot be parsed
    """
    config = ConvertConfig(pretty=pretty, assume_yes=assume_yes)

    env_output = os.environ.get("B64IMG_OUTPUT_DIR")
    if output_dir:
        config.output_dir = Path(output_dir)
    elif env_output:
        config.output_dir = Path(env_output)

    env_timeout = os.environ.get("B64IMG_HTTP_TIMEOUT")
    if env_timeout:
        config.http_timeout = float(env_timeout)

    env_level = os.environ.get("B64IMG_LOG_LEVEL")
    if env_level:
        config.log_level = _parse_log_level(env_level)

    if verbose:
        config.verbose = True
        config.log_level = min(config.log_level, logging.INFO)

    return config
