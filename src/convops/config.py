import os

from msgspec import Struct

from convops.exceptions import ConfigurationError

DEFAULT_MAX_HISTORY_SIZE = 50

SESSION_FILE_NAME = ".convops.json"
SESSION_FILE_ENV = "CONVOPS_SESSION_FILE"
MAX_HISTORY_SIZE_ENV = "CONVOPS_MAX_HISTORY_SIZE"


class EngineConfig(Struct, frozen=True):
    max_history_size: int = DEFAULT_MAX_HISTORY_SIZE

    def __post_init__(self) -> None:
        if self.max_history_size < 1:
            raise ConfigurationError(f"max_history_size must be a positive integer, got {self.max_history_size}.")


def max_history_size_from_env(default: int = DEFAULT_MAX_HISTORY_SIZE) -> int:
    """
    Reads CONVOPS_MAX_HISTORY_SIZE, falling back to ``default`` when unset.
    """
    raw = os.environ.get(MAX_HISTORY_SIZE_ENV)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{MAX_HISTORY_SIZE_ENV} must be an integer, got '{raw}'.") from e
    return EngineConfig(max_history_size=value).max_history_size
