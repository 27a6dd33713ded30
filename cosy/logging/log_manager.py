"""
Log Manager
Named log channels backed by standard library loggers
"""
import logging
from typing import Any, Dict, Optional

from cosy.defaults import DEFAULT_LOG_CHANNEL, DEFAULT_LOG_FORMAT
from cosy.logging import ROOT_LOGGER
from cosy.logging.logger_config import LoggerConfig


class LogManager:
    """
    Resolves named channels to configured loggers

    Channel configuration (``logging.channels`` in config):
        {
            'app': {'level': 'info'},
            'dispatch': {'level': 'debug', 'format': 'json', 'file': 'logs/dispatch.log'},
        }

    Channels without configuration fall back to a logger that propagates
    to the framework root logger.

    Example:
        Log.channel('dispatch').info('request started', extra={'channel': 'ping'})
        Log.info('application ready')
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        config = config or {}
        self.default_channel = config.get('default', DEFAULT_LOG_CHANNEL)
        self.channel_configs: Dict[str, Dict[str, Any]] = dict(config.get('channels', {}))
        self.channels: Dict[str, logging.Logger] = {}

    def channel(self, name: Optional[str] = None) -> logging.Logger:
        """Get (and configure on first use) the logger for a channel"""
        name = name or self.default_channel
        if name not in self.channels:
            self.channels[name] = self._create_channel(name)
        return self.channels[name]

    def _create_channel(self, name: str) -> logging.Logger:
        logger_name = f"{ROOT_LOGGER}.{name}"
        channel_config = self.channel_configs.get(name)

        if channel_config is None:
            return logging.getLogger(logger_name)

        return LoggerConfig.setup_logger(
            logger_name,
            level=channel_config.get('level'),
            format_type=channel_config.get('format', DEFAULT_LOG_FORMAT),
            log_file=channel_config.get('file'),
            console=channel_config.get('console', True),
            filter_sensitive=channel_config.get('filter_sensitive', True),
        )

    def get_channels(self) -> Dict[str, logging.Logger]:
        """Get every channel created so far"""
        return dict(self.channels)

    def shutdown(self):
        """Flush and close the handlers of every configured channel"""
        for logger in self.channels.values():
            for handler in list(logger.handlers):
                handler.flush()
                handler.close()
                logger.removeHandler(handler)
        self.channels.clear()

    # Level shortcuts on the default channel

    def debug(self, message: str, *args, **kwargs):
        self.channel().debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self.channel().info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self.channel().warning(message, *args, **kwargs)

    warn = warning

    def error(self, message: str, *args, **kwargs):
        self.channel().error(message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self.channel().critical(message, *args, **kwargs)
