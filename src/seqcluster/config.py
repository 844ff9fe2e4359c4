"""
Configuration management for seqcluster.

Loads clustering defaults from environment variables (typically from a .env
file). Uses python-dotenv to load .env automatically.

Usage:
    from seqcluster.config import config

    config.sequence_dissimilarity   # "hamming" unless overridden
    config.na_syms                  # ["*", "%"]

    # Re-read the environment (e.g. in tests)
    cfg = ClusteringConfig.from_env()
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Look for .env in project root (parent of src/)
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

ENV_PREFIX = "SEQCLUSTER_"
DEFAULT_NA_SYMS = ["*", "%"]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _parse_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class ClusteringConfig:
    """Default options applied when a clustering call leaves them unset."""

    sequence_dissimilarity: str = "hamming"
    numeric_dissimilarity: str = "euclidean"
    method: str = "pam"
    na_syms: List[str] = field(default_factory=lambda: list(DEFAULT_NA_SYMS))
    weighted: bool = False
    lambda_: float = 1.0
    pam_max_swaps: int = 100
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate numeric settings."""
        try:
            self.lambda_ = float(self.lambda_)
        except (TypeError, ValueError) as e:
            raise ValueError(f"lambda must be a number, got {self.lambda_!r}") from e
        if int(self.pam_max_swaps) < 1:
            raise ValueError(
                f"pam_max_swaps must be >= 1, got {self.pam_max_swaps}"
            )
        self.pam_max_swaps = int(self.pam_max_swaps)
        self.log_level = str(self.log_level).upper()

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "ClusteringConfig":
        """
        Build a configuration from ``SEQCLUSTER_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            ClusteringConfig with unset variables left at their defaults

        Raises:
            ValueError: If a variable holds an unparseable value
        """
        env = os.environ if environ is None else environ

        def get(key: str) -> Optional[str]:
            return env.get(ENV_PREFIX + key)

        kwargs = {}
        if get("SEQUENCE_DISSIMILARITY"):
            kwargs["sequence_dissimilarity"] = get("SEQUENCE_DISSIMILARITY")
        if get("NUMERIC_DISSIMILARITY"):
            kwargs["numeric_dissimilarity"] = get("NUMERIC_DISSIMILARITY")
        if get("METHOD"):
            kwargs["method"] = get("METHOD")
        if get("NA_SYMS") is not None:
            kwargs["na_syms"] = _parse_list(get("NA_SYMS"))
        if get("WEIGHTED") is not None:
            kwargs["weighted"] = _parse_bool(ENV_PREFIX + "WEIGHTED", get("WEIGHTED"))
        if get("LAMBDA"):
            kwargs["lambda_"] = get("LAMBDA")
        if get("PAM_MAX_SWAPS"):
            try:
                kwargs["pam_max_swaps"] = int(get("PAM_MAX_SWAPS"))
            except ValueError as e:
                raise ValueError(
                    f"{ENV_PREFIX}PAM_MAX_SWAPS must be an integer, "
                    f"got {get('PAM_MAX_SWAPS')!r}"
                ) from e
        if get("LOG_LEVEL"):
            kwargs["log_level"] = get("LOG_LEVEL")
        return cls(**kwargs)


# Global config instance
config = ClusteringConfig.from_env()
