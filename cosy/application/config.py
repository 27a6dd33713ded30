"""
Application Configuration
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type, TYPE_CHECKING, Union

from cosy.defaults import DEFAULT_APP_NAME, DEFAULT_APP_ENV, DEFAULT_USER_DATA_PATH
from cosy.support.env_helper import EnvHelper

if TYPE_CHECKING:
    from cosy.service_provider import ServiceProvider

ENVIRONMENTS = ('development', 'production', 'test')


@dataclass
class ApplicationConfig:
    """
    Settings the Application is created with

    Attributes:
        name: Application name
        env: 'development', 'production' or 'test'
        debug: Log framework internals
        user_data_path: Directory for per-user data
        providers: Extra service provider classes, registered after the defaults
        middleware: Global middleware, registered on the router before boot
        settings: Values merged into the config repository
    """
    name: str = DEFAULT_APP_NAME
    env: str = DEFAULT_APP_ENV
    debug: bool = False
    user_data_path: Union[str, Path] = DEFAULT_USER_DATA_PATH
    providers: List[Type['ServiceProvider']] = field(default_factory=list)
    middleware: List[Callable[..., Any]] = field(default_factory=list)
    settings: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.env not in ENVIRONMENTS:
            raise ValueError(
                f"Unknown environment '{self.env}', expected one of: {', '.join(ENVIRONMENTS)}"
            )
        self.user_data_path = Path(self.user_data_path)

    @classmethod
    def from_env(cls, env_path: Optional[Union[str, Path]] = None, **overrides) -> 'ApplicationConfig':
        """
        Build the configuration from environment variables (.env supported)

        Reads APP_NAME, APP_ENV, APP_DEBUG and APP_USER_DATA; keyword
        arguments take precedence.

        Example:
            config = ApplicationConfig.from_env(providers=[WindowServiceProvider])
        """
        if env_path:
            EnvHelper.load(env_path)

        values = {
            'name': EnvHelper.get('APP_NAME', DEFAULT_APP_NAME),
            'env': EnvHelper.get('APP_ENV', DEFAULT_APP_ENV).lower(),
            'debug': EnvHelper.get_bool('APP_DEBUG', False),
            'user_data_path': EnvHelper.get('APP_USER_DATA', DEFAULT_USER_DATA_PATH),
        }
        values.update(overrides)
        return cls(**values)

    def to_settings(self) -> Dict[str, Any]:
        """The 'app' config section derived from this configuration"""
        return {
            'app': {
                'name': self.name,
                'env': self.env,
                'debug': self.debug,
                'user_data_path': str(self.user_data_path),
            }
        }
