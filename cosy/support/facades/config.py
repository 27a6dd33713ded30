"""
Config Facade
"""
from cosy.constants import CONFIG_ABSTRACT
from cosy.support.facades.facade import Facade


class Config(Facade):
    """
    Config Facade

    Example:
        Config.get('app.name')
        Config.set('rate_limit.max_requests', 10)
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return CONFIG_ABSTRACT
