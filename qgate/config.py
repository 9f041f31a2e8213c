"""
Configuration for qgate.

Numerical tolerances and logging defaults live in one dataclass. A
process-wide instance is returned by get_config() and can be swapped with
set_config(), e.g. in tests that need a looser unitarity check.
"""

import os
from dataclasses import dataclass, replace


@dataclass
class QgateConfig:
    """Settings shared by every module of the package."""

    # Allowed deviation of alpha_r^2 + alpha_i^2 + beta_r^2 + beta_i^2 from 1
    unitary_tolerance: float = 1e-10

    # Level passed to setup_logging() when none is given explicitly
    log_level: str = "WARNING"

    # Number of parsed symbolic expressions kept in memory; a config with a
    # different size starts a fresh cache on the next evaluation
    parse_cache_size: int = 1024

    def __post_init__(self):
        if self.unitary_tolerance < 0:
            raise ValueError(
                f"unitary_tolerance must be non-negative, got {self.unitary_tolerance}"
            )
        if self.parse_cache_size < 0:
            raise ValueError(
                f"parse_cache_size must be non-negative, got {self.parse_cache_size}"
            )
        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls, base=None):
        """Build a config from QGATE_* environment variables.

        Args:
            base: Config whose values are used where no variable is set
                (default: a fresh QgateConfig)

        Returns:
            New QgateConfig
        """
        base = base if base is not None else cls()
        changes = {}
        if "QGATE_UNITARY_TOLERANCE" in os.environ:
            changes["unitary_tolerance"] = float(os.environ["QGATE_UNITARY_TOLERANCE"])
        if "QGATE_LOG_LEVEL" in os.environ:
            changes["log_level"] = os.environ["QGATE_LOG_LEVEL"]
        return replace(base, **changes)


DEFAULT_CONFIG = QgateConfig()

_active_config = DEFAULT_CONFIG


def get_config():
    """Return the active configuration."""
    return _active_config


def set_config(config):
    """Replace the active configuration and return the previous one."""
    global _active_config
    if not isinstance(config, QgateConfig):
        raise TypeError(f"Expected QgateConfig, got {type(config)}")
    previous = _active_config
    _active_config = config
    return previous
