"""
Auth Middleware
Authentication and permission checks for dispatched channels
"""
import inspect
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

import jwt

from cosy.exceptions import ForbiddenException, UnauthorizedException
from cosy.logging import getLogger
from cosy.middleware.base_middleware import Middleware

logger = getLogger('cosy.auth')

DEFAULT_PERMISSIONS = ['read', 'write']


@dataclass
class AuthContext:
    """Who is calling and what they may do"""
    authenticated: bool = False
    permissions: List[str] = field(default_factory=list)
    subject: Optional[Any] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    def has_permissions(self, permissions: Sequence[str]) -> bool:
        return all(permission in self.permissions for permission in permissions)


Authenticator = Callable[[Any], Union[AuthContext, Awaitable[AuthContext]]]


def default_authenticator(context: Any) -> AuthContext:
    """
    Trust the dispatch context

    An AuthContext already attached to the context is used as is;
    otherwise the sender is considered authenticated with read and
    write permissions.
    """
    existing = getattr(context, 'auth', None)
    if isinstance(existing, AuthContext):
        return existing

    return AuthContext(
        authenticated=True,
        permissions=list(DEFAULT_PERMISSIONS),
        subject=getattr(context, 'sender_id', None),
    )


class JwtAuthenticator:
    """
    Authenticate calls carrying a JWT in ``context.metadata['token']``

    The token may be given bare or as 'Bearer <token>'. The 'sub' claim
    becomes the subject and the permissions claim the permission list.

    Usage:
        jwt_auth = JwtAuthenticator(secret=Config.get('auth.jwt_secret'))
        router.use(AuthMiddleware(authenticator=jwt_auth))

        token = jwt_auth.issue_token('user-1', permissions=['read'])
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = 'HS256',
        token_key: str = 'token',
        permissions_claim: str = 'permissions',
        leeway: int = 0,
    ):
        if not secret:
            raise ValueError("JwtAuthenticator requires a secret")
        self.secret = secret
        self.algorithm = algorithm
        self.token_key = token_key
        self.permissions_claim = permissions_claim
        self.leeway = leeway

    def __call__(self, context: Any) -> AuthContext:
        metadata = getattr(context, 'metadata', None) or {}
        token = metadata.get(self.token_key)

        if not token:
            return AuthContext(error="Authentication required")

        if token.lower().startswith('bearer '):
            token = token[7:].strip()

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm], leeway=self.leeway)
        except jwt.ExpiredSignatureError:
            return AuthContext(error="Token has expired")
        except jwt.InvalidTokenError:
            return AuthContext(error="Invalid token")

        return AuthContext(
            authenticated=True,
            permissions=list(payload.get(self.permissions_claim, [])),
            subject=payload.get('sub'),
            metadata={'claims': payload},
        )

    def issue_token(
        self,
        subject: str,
        permissions: Optional[List[str]] = None,
        ttl_seconds: int = 3600,
        **claims,
    ) -> str:
        """Create a signed token for a subject"""
        now = datetime.now(timezone.utc)
        payload = {
            'sub': subject,
            self.permissions_claim: list(permissions or []),
            'iat': now,
            'exp': now + timedelta(seconds=ttl_seconds),
            **claims,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)


class AuthMiddleware(Middleware):
    """
    Authentication middleware

    Behavior:
    - required and not authenticated: UnauthorizedException (401)
    - missing any of ``permissions``: ForbiddenException (403)
    - otherwise the AuthContext is stored on ``context.auth`` and the
      call continues

    Usage in routes:
        router.alias_middleware('auth', AuthMiddleware())
        router.get('settings:save', handler).middleware('auth')
        router.get('files:delete', handler).middleware(require_permissions('write'))
    """

    def __init__(
        self,
        required: bool = True,
        permissions: Optional[Sequence[str]] = None,
        authenticator: Optional[Authenticator] = None,
    ):
        self.required = required
        self.permissions = list(permissions or [])
        self.authenticator = authenticator or default_authenticator

    async def authenticate(self, context: Any) -> AuthContext:
        auth = self.authenticator(context)
        if inspect.isawaitable(auth):
            auth = await auth
        return auth

    async def before_dispatch(self, context: Any, channel: str, args):
        auth = await self.authenticate(context)

        if self.required and not auth.authenticated:
            logger.warning(f"Unauthenticated call to [{channel}]")
            raise UnauthorizedException(auth.error or "Authentication required")

        if self.permissions and not auth.has_permissions(self.permissions):
            logger.warning(f"Permission denied for [{channel}], requires: {', '.join(self.permissions)}")
            raise ForbiddenException(
                f"Insufficient permissions, requires: {', '.join(self.permissions)}"
            )

        if context is not None and hasattr(context, 'auth'):
            context.auth = auth


def require_permissions(*permissions: str) -> AuthMiddleware:
    """Auth middleware that also requires every given permission"""
    return AuthMiddleware(permissions=permissions)


def optional_auth(authenticator: Optional[Authenticator] = None) -> AuthMiddleware:
    """Auth middleware that attaches the AuthContext but lets anonymous calls through"""
    return AuthMiddleware(required=False, authenticator=authenticator)
