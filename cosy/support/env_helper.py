"""
EnvHelper - environment variables with .env support
"""
import os
import threading
from pathlib import Path
from typing import Any, Callable, Optional, Union

from dotenv import load_dotenv

TRUTHY = ('true', '1', 'yes', 'on')


class EnvHelper:
    """
    Reads environment variables, loading the project's .env file on first access

    Variables already present in the process environment win over the file.

    Usage:
        EnvHelper.initialize(project_root / '.env')
        debug = EnvHelper.get_bool('APP_DEBUG')
        deadline = EnvHelper.get_float('DISPATCH_DEADLINE', 30.0)
    """

    _lock = threading.Lock()
    _env_path: Optional[Path] = None
    _loaded: bool = False

    @classmethod
    def initialize(cls, env_path: Union[str, Path, None] = None):
        """Point the helper at a .env file (default: ./.env) without loading it"""
        cls._env_path = Path(env_path) if env_path else Path.cwd() / '.env'

    @classmethod
    def load(cls, env_path: Union[str, Path, None] = None, override: bool = False) -> bool:
        """
        Load the .env file into os.environ

        Returns:
            bool: False when the file does not exist
        """
        with cls._lock:
            if env_path:
                cls._env_path = Path(env_path)
            elif cls._env_path is None:
                cls.initialize()

            cls._loaded = True
            if not cls._env_path.exists():
                return False
            return load_dotenv(cls._env_path, override=override)

    @classmethod
    def _ensure_loaded(cls):
        if not cls._loaded:
            cls.load()

    @classmethod
    def get(cls, key: str, default: Any = None, cast: Optional[Callable[[str], Any]] = None) -> Any:
        """
        Value of an environment variable, optionally converted with ``cast``

        A value ``cast`` rejects with ValueError yields ``default``.
        """
        cls._ensure_loaded()
        value = os.environ.get(key)
        if value is None:
            return default
        if cast is None:
            return value
        try:
            return cast(value)
        except ValueError:
            return default

    @classmethod
    def get_bool(cls, key: str, default: bool = False) -> bool:
        return cls.get(key, default, cast=lambda value: value.strip().lower() in TRUTHY)

    @classmethod
    def get_int(cls, key: str, default: int = 0) -> int:
        return cls.get(key, default, cast=int)

    @classmethod
    def get_float(cls, key: str, default: float = 0.0) -> float:
        return cls.get(key, default, cast=float)

    @classmethod
    def has(cls, key: str) -> bool:
        cls._ensure_loaded()
        return key in os.environ

    @classmethod
    def reset(cls):
        """Forget the loaded state so the next access reloads the .env file"""
        with cls._lock:
            cls._env_path = None
            cls._loaded = False
