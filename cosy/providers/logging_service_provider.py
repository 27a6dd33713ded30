"""
Logging Service Provider
Initializes application-wide structured logging
"""
import logging

from cosy.constants import CONFIG_ABSTRACT, LOG_ABSTRACT, LOG_ALIASES
from cosy.defaults import DEFAULT_LOG_FORMAT
from cosy.logging import ROOT_LOGGER
from cosy.logging.log_manager import LogManager
from cosy.logging.logger_config import LoggerConfig
from cosy.service_provider import ServiceProvider


class LoggingServiceProvider(ServiceProvider):
    """Logging service provider - sets up structured logging"""

    def register(self):
        """Register logging services"""
        config = self.app.make(CONFIG_ABSTRACT)

        self.setup_application_logger(config)

        self.app.instance(LOG_ABSTRACT, LogManager(config.get('logging', {})))
        for alias in LOG_ALIASES:
            self.app.alias(alias, LOG_ABSTRACT)

    def setup_application_logger(self, config):
        """
        Setup the framework root logger from config

        Config keys (all optional):
            logging.level: defaults to a level derived from the environment
            logging.format: 'text' or 'json'
            logging.file: rotating log file path
            logging.console: stream handler, on by default in debug mode

        Without a file or console handler the root logger keeps propagating,
        so host applications and test runners see framework records.
        """
        env = self.app.config('env')
        level = config.get('logging.level') or LoggerConfig.get_level_by_environment(env)
        log_file = config.get('logging.file')
        console = config.get('logging.console', self.app.config('debug'))

        if not log_file and not console:
            logging.getLogger(ROOT_LOGGER).setLevel(LoggerConfig.resolve_level(level))
            return

        LoggerConfig.setup_logger(
            ROOT_LOGGER,
            level=level,
            format_type=config.get('logging.format', DEFAULT_LOG_FORMAT),
            log_file=log_file,
            console=console,
            additional_sensitive_keys=config.get('logging.sensitive_keys'),
        )

    def shutdown(self):
        """Flush and close channel handlers"""
        self.app.make(LOG_ABSTRACT).shutdown()
