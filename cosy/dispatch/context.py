"""
Dispatch Context
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class DispatchContext:
    """
    Per-call context handed to middleware and handlers

    Attributes:
        source: Transport the call came from ('local', 'http', 'console')
        sender_id: Identifier of the calling peer
        metadata: Transport-supplied values (headers, token, ...)
        auth: Set by AuthMiddleware once the caller is authenticated
    """
    source: str = 'local'
    sender_id: Optional[Any] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    auth: Optional[Any] = None
