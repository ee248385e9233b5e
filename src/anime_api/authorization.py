"""Authentication and authorization ahead of routing.

AuthorizationMiddleware evaluates the rule table in policy.py before the
request reaches the router, so unrouted paths and undecodable bodies are
gated like any other request. Policy failures are answered through
error_handlers.domain_error_handler, the same writer the routes use.
"""

import structlog
from fastapi.security import HTTPBasicCredentials
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from anime_api.error_handlers import domain_error_handler
from anime_api.exceptions import DomainError, UnauthenticatedError
from anime_api.policy import AuthorizationPolicy, policy
from anime_api.security import Principal, basic_auth
from anime_api.services.user import authenticate


async def _read_credentials(request: Request) -> HTTPBasicCredentials | None:
    try:
        return await basic_auth(request)
    except StarletteHTTPException as exc:
        raise UnauthenticatedError("Invalid authentication credentials") from exc


async def resolve_principal(request: Request) -> Principal | None:
    """Verify Basic credentials against the credential store.

    The lookup opens its own session from ``app.state.session_factory``;
    the request's transactional session belongs to the route.
    """
    credentials = await _read_credentials(request)
    if credentials is None:
        return None
    async with request.app.state.session_factory() as db:
        return await authenticate(db, credentials.username, credentials.password)


class AuthorizationMiddleware:
    """Pure ASGI middleware; register it inside RequestIDMiddleware."""

    def __init__(self, app: ASGIApp, route_policy: AuthorizationPolicy = policy) -> None:
        self.app = app
        self.policy = route_policy

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        rule = self.policy.match(request.method, request.url.path)
        principal = None
        if not rule.public:
            try:
                principal = await resolve_principal(request)
                self.policy.authorize(rule, principal)
            except DomainError as exc:
                response = await domain_error_handler(request, exc)
                await response(scope, receive, send)
                return

        if principal is not None:
            structlog.contextvars.bind_contextvars(username=principal.username)
        request.state.principal = principal
        await self.app(scope, receive, send)
