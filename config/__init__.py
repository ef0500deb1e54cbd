from .config_store import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    BallConfig,
    ConfigStore,
    ControlConfig,
    FieldConfig,
    RobotConfig,
    SocketConfig,
    get_config,
    get_config_status,
    reset,
    resolve_hostname,
)

# NOTE: The process-wide store is built lazily by get_config(); consumers
# that need it at import time should call get_config() themselves so the
# hostname lookup happens after logging is configured.

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "BallConfig",
    "ConfigStore",
    "ControlConfig",
    "FieldConfig",
    "RobotConfig",
    "SocketConfig",
    "get_config",
    "get_config_status",
    "reset",
    "resolve_hostname",
]
