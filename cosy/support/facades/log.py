"""
Log Facade
"""
from cosy.constants import LOG_ABSTRACT
from cosy.support.facades.facade import Facade


class Log(Facade):
    """
    Log Facade

    Example:
        Log.info('Window opened')
        Log.channel('dispatch').warning('Slow handler')
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return LOG_ABSTRACT
