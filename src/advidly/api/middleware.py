"""Cookie-based session middleware."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from advidly.services.sessions import SessionStore


class SessionMiddleware(BaseHTTPMiddleware):
    """Resolves the session cookie into ``request.state.session``.

    Handlers log a user in by assigning a new session to
    ``request.state.session`` and log out by setting it to ``None``; the cookie
    is written or cleared accordingly once the handler has returned.
    """

    def __init__(
        self,
        app: ASGIApp,
        store: SessionStore,
        cookie_name: str = "advidly.sid",
        secure: bool = False,
    ) -> None:
        super().__init__(app)
        self.store = store
        self.cookie_name = cookie_name
        self.secure = secure

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        cookie = request.cookies.get(self.cookie_name)
        incoming = self.store.get(cookie)
        request.state.session = incoming

        response = await call_next(request)

        outgoing = getattr(request.state, "session", None)
        if outgoing is not None and (incoming is None or outgoing.id != incoming.id):
            response.set_cookie(
                self.cookie_name,
                outgoing.id,
                max_age=int(self.store.ttl.total_seconds()),
                httponly=True,
                samesite="lax",
                secure=self.secure,
            )
        elif outgoing is None and cookie:
            # Logged out, expired, or an id this server never issued
            response.delete_cookie(
                self.cookie_name,
                httponly=True,
                samesite="lax",
                secure=self.secure,
            )
        return response
