"""
Config Service Provider
Seeds the configuration repository from the application configuration
"""
from cosy.constants import CONFIG_ABSTRACT, CONFIG_ALIASES
from cosy.service_provider import ServiceProvider
from cosy.support.config import ConfigRepository


class ConfigServiceProvider(ServiceProvider):
    """Registers the 'config' repository"""

    def register(self):
        app_config = self.app.config()

        repository = ConfigRepository(app_config.to_settings())
        repository.merge(app_config.settings)

        self.app.instance(CONFIG_ABSTRACT, repository)
        for alias in CONFIG_ALIASES:
            self.app.alias(alias, CONFIG_ABSTRACT)
