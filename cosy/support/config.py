"""
Config Repository
Nested application settings addressed with dotted keys
"""

import copy
import threading
from typing import Any, Optional, Dict


class ConfigRepository:
    """
    Configuration repository with dot notation access

    Usage:
        config = ConfigRepository({'app': {'name': 'cosy', 'debug': True}})

        app_name = config.get('app.name')
        limit = config.get('rate_limit.max_requests', 100)

        config.set('app.debug', False)

        if config.has('logging.channels.dispatch'):
            ...

    Keys are matched case-insensitively: 'app.NAME' and 'APP.name' read
    the same value.
    """

    def __init__(self, items: Optional[Dict[str, Any]] = None):
        self._lock = threading.Lock()
        self._items: Dict[str, Any] = {}
        if items:
            self.merge(items)

    def get(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Value at a dotted key such as 'app.name', or everything when key is None"""
        if key is None:
            return self.all()

        # Stored keys are already lower-cased by _normalize
        value: Any = self._items
        for part in key.lower().split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def set(self, key: str, value: Any):
        """
        Set configuration value at runtime

        Intermediate sections are created as needed.

        Example:
            config.set('app.debug', True)
        """
        parts = key.lower().split('.')
        with self._lock:
            target = self._items
            for part in parts[:-1]:
                if not isinstance(target.get(part), dict):
                    target[part] = {}
                target = target[part]
            target[parts[-1]] = self._normalize(value)

    def has(self, key: str) -> bool:
        marker = object()
        return self.get(key, marker) is not marker

    def all(self) -> Dict[str, Any]:
        """Get a copy of every configuration value"""
        return copy.deepcopy(self._items)

    def merge(self, items: Dict[str, Any]):
        """
        Deep-merge a dict of values into the repository

        Example:
            config.merge({'logging': {'default': 'dispatch'}})
        """
        with self._lock:
            self._merge_into(self._items, self._normalize(items))

    def as_object(self, key: str, default: Any = None) -> Any:
        """
        A config section with attribute access

        Example:
            rate_limit = config.as_object('rate_limit')
            rate_limit.max_requests
        """
        value = self.get(key, default)

        if isinstance(value, dict):
            return ConfigObject(**value)

        return value

    @classmethod
    def _normalize(cls, value: Any) -> Any:
        """Lower-case dict keys recursively so lookups stay case-insensitive"""
        if isinstance(value, dict):
            return {str(k).lower(): cls._normalize(v) for k, v in value.items()}
        return value

    @classmethod
    def _merge_into(cls, target: Dict[str, Any], source: Dict[str, Any]):
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                cls._merge_into(target[key], value)
            else:
                target[key] = value

    def __getitem__(self, key: str) -> Any:
        marker = object()
        value = self.get(key, marker)
        if value is marker:
            raise KeyError(key)
        return value

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __repr__(self) -> str:
        return f"<ConfigRepository sections={sorted(self._items)}>"


class ConfigObject:
    """Read-only attribute view over a config section; nested sections become ConfigObjects too"""

    def __init__(self, **values):
        self.__dict__.update({
            key: ConfigObject(**value) if isinstance(value, dict) else value
            for key, value in values.items()
        })

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: value.to_dict() if isinstance(value, ConfigObject) else value
            for key, value in self.__dict__.items()
        }

    def __getattr__(self, name):
        # Only reached for names missing from __dict__
        raise AttributeError(f"Config section has no key '{name}'")

    def __repr__(self):
        return f"ConfigObject({self.to_dict()!r})"
