# config/config_store.py

import logging
import math
import socket
import threading
from collections.abc import Callable, Iterator
from dataclasses import asdict, dataclass, field, fields
from types import MappingProxyType
from typing import Any, ClassVar

import yaml

from utils.errors import ConfigError, HostResolutionError, UnknownKeyError
from utils.logging import get_logger

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Literal defaults
# ---------------------------------------------------------------------------

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8000

ROBOT_RADIUS = 0.125
BALL_RADIUS = 0.021335

FIELD_WIDTH = 4.5
FIELD_HEIGHT = 3.0

KEYBOARD_SPEED = 0.5
KEYBOARD_TURN_RATE = math.pi
JOYSTICK_SPEED = 1.5
JOYSTICK_TURN_RATE = math.pi * 2


@dataclass(frozen=True)
class SocketConfig:
    """Where the dashboard connects to."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


@dataclass(frozen=True)
class RobotConfig:
    radius: float = ROBOT_RADIUS  # meters


@dataclass(frozen=True)
class BallConfig:
    radius: float = BALL_RADIUS  # meters


@dataclass(frozen=True)
class FieldConfig:
    """Playing-field bounding box in meters."""

    width: float = FIELD_WIDTH
    height: float = FIELD_HEIGHT


@dataclass(frozen=True)
class ControlConfig:
    """Speeds mapped to one input device (m/s and rad/s)."""

    speed: float
    turn_rate: float = field(metadata={"key": "turnRate"})


HostnameResolver = Callable[[], Any]


def _key_name(f) -> str:
    return f.metadata.get("key", f.name)


def resolve_hostname(
    resolver: HostnameResolver | None = None, default: str = DEFAULT_HOST
) -> tuple[str, bool]:
    """Ask the environment for its hostname, falling back to ``default``.

    Args:
        resolver: Zero-argument callable returning the hostname. Defaults to
            ``socket.gethostname``.
        default: Host used when the resolver fails or returns nothing usable.

    Returns:
        Tuple of (host, resolved). ``resolved`` is False when the default
        was substituted.
    """
    resolver = resolver or socket.gethostname
    try:
        hostname = resolver()
        if not isinstance(hostname, str) or not hostname.strip():
            raise HostResolutionError(f"resolver returned {hostname!r}")
        return hostname.strip(), True
    except (OSError, HostResolutionError) as e:
        logger.warning(
            "Hostname resolution failed (%s); falling back to %s",
            e,
            default,
            extra={"config_key": "socket.host"},
        )
        return default, False


class ConfigStore:
    """
    Read-only store of the dashboard constants.

    Values are addressed by dotted keys such as ``"socket.port"`` or
    ``"keyboard.turnRate"``. Groups are also reachable as attributes
    (``store.field.width``). Nothing can be changed after construction.
    """

    GROUPS: ClassVar[tuple[str, ...]] = (
        "socket",
        "robot",
        "ball",
        "field",
        "keyboard",
        "joystick",
    )

    def __init__(
        self,
        socket: SocketConfig | None = None,
        robot: RobotConfig | None = None,
        ball: BallConfig | None = None,
        field: FieldConfig | None = None,
        keyboard: ControlConfig | None = None,
        joystick: ControlConfig | None = None,
        host_resolved: bool = False,
    ) -> None:
        groups = {
            "socket": socket or SocketConfig(),
            "robot": robot or RobotConfig(),
            "ball": ball or BallConfig(),
            "field": field or FieldConfig(),
            "keyboard": keyboard
            or ControlConfig(speed=KEYBOARD_SPEED, turn_rate=KEYBOARD_TURN_RATE),
            "joystick": joystick
            or ControlConfig(speed=JOYSTICK_SPEED, turn_rate=JOYSTICK_TURN_RATE),
        }
        values: dict[str, Any] = {}
        for group_name, group in groups.items():
            object.__setattr__(self, group_name, group)
            for f in fields(group):
                values[f"{group_name}.{_key_name(f)}"] = getattr(group, f.name)

        object.__setattr__(self, "host_resolved", host_resolved)
        object.__setattr__(self, "_values", MappingProxyType(values))

    @classmethod
    def load(cls, hostname_resolver: HostnameResolver | None = None) -> "ConfigStore":
        """Build a store, resolving ``socket.host`` from the environment."""
        host, resolved = resolve_hostname(hostname_resolver)
        store = cls(socket=SocketConfig(host=host), host_resolved=resolved)
        logger.info(
            "Configuration loaded (socket=%s:%s, host_resolved=%s)",
            host,
            store.socket.port,
            resolved,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Configuration snapshot:\n%s", store.to_yaml())
        return store

    def get(self, key: str) -> Any:
        """
        Retrieves the value for a dotted key.

        Args:
            key (str): Dotted path, e.g. ``"field.width"``.

        Returns:
            Any: The literal stored under that key.

        Raises:
            UnknownKeyError: If the key is not one of the recognized paths.
        """
        try:
            return self._values[key]
        except (KeyError, TypeError):
            raise UnknownKeyError(key) from None

    def keys(self) -> tuple[str, ...]:
        return tuple(self._values)

    def as_dict(self) -> dict[str, dict[str, Any]]:
        """Nested copy of every group, keyed the way consumers spell them."""
        snapshot: dict[str, dict[str, Any]] = {}
        for group_name in self.GROUPS:
            group = getattr(self, group_name)
            raw = asdict(group)
            snapshot[group_name] = {_key_name(f): raw[f.name] for f in fields(group)}
        return snapshot

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.as_dict(), sort_keys=False)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __setattr__(self, name: str, value: Any) -> None:
        raise ConfigError(f"ConfigStore is read-only; cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise ConfigError(f"ConfigStore is read-only; cannot delete '{name}'")

    def __repr__(self) -> str:
        return f"ConfigStore({dict(self._values)!r})"


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------

_store: ConfigStore | None = None
_store_lock = threading.Lock()


def get_config(hostname_resolver: HostnameResolver | None = None) -> ConfigStore:
    """Return the process-wide store, building it on first use.

    ``hostname_resolver`` only matters for the call that builds the store.
    """
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = ConfigStore.load(hostname_resolver)
    return _store


def get_config_status() -> dict[str, Any]:
    """Return config health status for observability.

    Returns:
        Dict with config_status, host_resolved, and whether config is loaded.
    """
    if _store is None:
        return {
            "config_status": "not_loaded",
            "host_resolved": False,
            "config_loaded": False,
        }
    return {
        "config_status": "ok" if _store.host_resolved else "degraded",
        "host_resolved": _store.host_resolved,
        "config_loaded": True,
    }


def reset() -> None:
    """Drop the process-wide store (useful for testing)."""
    global _store
    with _store_lock:
        _store = None
