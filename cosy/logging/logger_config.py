"""
Logging Configuration
Channel loggers with rotation, JSON output and credential redaction
"""
import json
import logging
import logging.handlers
import re
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from cosy.defaults import DEFAULT_LOG_BACKUP_COUNT, DEFAULT_LOG_MAX_BYTES


class SensitiveDataFilter(logging.Filter):
    """
    Redacts credentials from log messages and their arguments

    Dispatch arguments often carry passwords or tokens, so every handler
    built by LoggerConfig gets this filter unless told otherwise.
    """

    # Matched as quoted keys in JSON ("token": "...") or repr ('token': '...') form
    SENSITIVE_KEYS = [
        'password', 'passwd', 'pwd', 'api_key', 'api_secret', 'token',
        'access_token', 'refresh_token', 'jwt', 'secret', 'secret_key',
    ]

    # (pattern, replacement) applied after key redaction
    TEXT_RULES: List[Tuple[str, str]] = [
        (r'(Bearer\s+)[A-Za-z0-9\-_=]+\.[A-Za-z0-9\-_=]+\.?[A-Za-z0-9\-_.+/=]*', r'\1[REDACTED]'),
        (
            r'-----BEGIN\s+(?:RSA\s+)?PRIVATE\s+KEY-----[\s\S]+?-----END\s+(?:RSA\s+)?PRIVATE\s+KEY-----',
            '[REDACTED PRIVATE KEY]',
        ),
    ]

    def __init__(self, additional_keys: Optional[List[str]] = None):
        super().__init__()
        keys = '|'.join(re.escape(key) for key in self.SENSITIVE_KEYS + list(additional_keys or []))
        self.key_pattern = re.compile(
            r'''(["'](?:%s)["']\s*:\s*)(["'])(?:(?!\2).)*\2''' % keys,
            re.IGNORECASE
        )
        self.rules = [(re.compile(pattern, re.IGNORECASE), replacement)
                      for pattern, replacement in self.TEXT_RULES]

    def filter(self, record: logging.LogRecord) -> bool:
        # Never drops a record, only rewrites it
        record.msg = self._redact_value(record.msg)
        if isinstance(record.args, dict):
            record.args = {key: self._redact_value(value) for key, value in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self._redact_value(arg) for arg in record.args)
        return True

    def _redact_value(self, value: Any) -> Any:
        return self.redact(value) if isinstance(value, str) else value

    def redact(self, text: str) -> str:
        """Return text with credential values replaced by [REDACTED]"""
        text = self.key_pattern.sub(r'\1\2[REDACTED]\2', text)
        for pattern, replacement in self.rules:
            text = pattern.sub(replacement, text)
        return text


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record

    Fields passed with ``extra=`` (channel, duration_ms, ...) are added at
    the top level; values json cannot encode are written as their repr.
    """

    # Standard LogRecord attributes, never copied as extra fields
    RESERVED_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {'message', 'taskName'}

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            entry['stack'] = record.stack_info

        entry.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in self.RESERVED_ATTRS
        )
        return json.dumps(entry, default=repr)


class LoggerConfig:
    """
    Builds configured loggers for framework and application channels
    """
    TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    ENVIRONMENT_LEVELS = {
        'production': logging.WARNING,
        'development': logging.DEBUG,
        'test': logging.ERROR,
    }

    @staticmethod
    def setup_logger(
        name: str,
        level: Union[int, str, None] = None,
        format_type: str = 'text',
        log_file: Optional[Union[str, Path]] = None,
        console: bool = True,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
        filter_sensitive: bool = True,
        additional_sensitive_keys: Optional[List[str]] = None,
    ) -> logging.Logger:
        """
        Configure the named logger, replacing any handlers it already has

        Args:
            name: Logger name
            level: Level name or number (defaults to INFO)
            format_type: 'json' or 'text'
            log_file: Rotating log file path; no file handler when None
            console: Attach a stderr stream handler
            max_bytes: Rotation size (default: DEFAULT_LOG_MAX_BYTES)
            backup_count: Rotated files kept (default: DEFAULT_LOG_BACKUP_COUNT)
            filter_sensitive: Attach a SensitiveDataFilter to every handler
            additional_sensitive_keys: Extra keys the filter redacts

        A logger left without handlers propagates to its parent, so
        'cosy.notes' with console=False still reaches 'cosy'.

        Example:
            logger = LoggerConfig.setup_logger(
                'cosy.dispatch',
                level='DEBUG',
                format_type='json',
                log_file='logs/dispatch.log'
            )
        """
        logger = logging.getLogger(name)
        logger.setLevel(LoggerConfig.resolve_level(level))

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        handlers = LoggerConfig._build_handlers(
            log_file,
            console,
            DEFAULT_LOG_MAX_BYTES if max_bytes is None else max_bytes,
            DEFAULT_LOG_BACKUP_COUNT if backup_count is None else backup_count,
        )
        formatter = JSONFormatter() if format_type == 'json' else logging.Formatter(LoggerConfig.TEXT_FORMAT)
        redaction = SensitiveDataFilter(additional_sensitive_keys) if filter_sensitive else None

        for handler in handlers:
            handler.setFormatter(formatter)
            if redaction:
                handler.addFilter(redaction)
            logger.addHandler(handler)

        logger.propagate = not handlers
        return logger

    @staticmethod
    def _build_handlers(log_file, console: bool, max_bytes: int, backup_count: int) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []
        if log_file:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
            ))
        if console:
            handlers.append(logging.StreamHandler())
        return handlers

    @staticmethod
    def resolve_level(level: Union[int, str, None]) -> int:
        """Convert a level name ('debug', 'INFO', ...) or number to a logging level"""
        if level is None:
            return logging.INFO
        if isinstance(level, int):
            return level
        resolved = logging.getLevelName(str(level).upper())
        return resolved if isinstance(resolved, int) else logging.INFO

    @staticmethod
    def get_level_by_environment(environment: str) -> int:
        """Default level for 'production', 'development', 'test' (INFO otherwise)"""
        return LoggerConfig.ENVIRONMENT_LEVELS.get(environment.lower(), logging.INFO)
