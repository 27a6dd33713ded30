"""
Centralized Error Handler
"""
from cosy.logging import getLogger
from cosy.exceptions.custom import FrameworkException, HandlerError
import traceback
from typing import Dict, Any, Optional


class ErrorHandler:
    """
    Converts dispatch errors into failure envelopes and reports them
    """
    def __init__(self, debug: bool = False, include_trace: bool = False):
        """
        Initialize error handler
        Args:
            debug: Enable debug mode (expose messages of unexpected errors)
            include_trace: Log the stack trace for client errors as well
        """
        self.debug = debug
        self.include_trace = include_trace and debug
        self.logger = getLogger('cosy.dispatch')

    def handle_error(self, error: Exception, channel: Optional[str] = None) -> Dict[str, Any]:
        """
        Handle error and return a failure envelope
        """
        status_code = self.get_status_code(error)
        self._log_error(error, channel, status_code)
        return {
            'success': False,
            'error': self._get_error_message(error),
        }

    def _get_error_message(self, error: Exception) -> str:
        """
        Get the message sent back to the caller
        """
        if isinstance(error, FrameworkException):
            return error.message

        # Errors that escaped the router unwrapped
        message = str(error)
        if message:
            return message
        if self.debug:
            return error.__class__.__name__
        return "Unknown error"

    def get_status_code(self, error: Exception) -> int:
        """
        Determine status code from error
        """
        if hasattr(error, 'status_code'):
            return error.status_code

        return 500

    def _log_error(self, error: Exception, channel: Optional[str], status_code: int):
        """
        Log error with context
        """
        original = error.original if isinstance(error, HandlerError) else error
        log_data = {
            'error_type': original.__class__.__name__,
            'error_message': str(error),
            'status_code': status_code,
            'channel': channel,
        }

        if status_code >= 500:
            self.logger.error(
                f"{status_code} Error: {original.__class__.__name__}",
                extra=log_data,
                exc_info=(type(original), original, original.__traceback__)
            )
        elif status_code >= 400:
            if self.include_trace:
                log_data['trace'] = traceback.format_exception(
                    type(original), original, original.__traceback__
                )
            self.logger.warning(
                f"{status_code} Error: {original.__class__.__name__}",
                extra=log_data
            )
        else:
            self.logger.info(
                f"{status_code} Response",
                extra=log_data
            )
