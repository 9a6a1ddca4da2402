"""FastAPI dependencies.

All stateful services hang off ``app.state.services`` so each application
instance (and each test) gets its own storage, sessions and queue.
"""

from dataclasses import dataclass
from typing import Annotated, Protocol, TypeVar

from fastapi import Depends, HTTPException, Request, status

from advidly.config import Settings
from advidly.db.storage import MemStorage
from advidly.services.analytics import AnalyticsService
from advidly.services.auth import AuthService
from advidly.services.processing import ProcessingQueue
from advidly.services.sessions import Session, SessionStore
from advidly.services.storage import UploadStorage


@dataclass
class AppServices:
    """Everything a request handler may need, built once per application."""

    settings: Settings
    storage: MemStorage
    sessions: SessionStore
    uploads: UploadStorage
    processing: ProcessingQueue
    auth: AuthService
    analytics: AnalyticsService


def get_services(request: Request) -> AppServices:
    """Get the service container of the running application."""
    return request.app.state.services


ServicesDep = Annotated[AppServices, Depends(get_services)]


def get_storage(services: ServicesDep) -> MemStorage:
    return services.storage


StorageDep = Annotated[MemStorage, Depends(get_storage)]


def get_optional_session(request: Request) -> Session | None:
    """Session resolved by the session middleware, if any."""
    return getattr(request.state, "session", None)


def get_current_session(
    session: Annotated[Session | None, Depends(get_optional_session)],
) -> Session:
    """Require a logged-in session."""
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return session


OptionalSessionDep = Annotated[Session | None, Depends(get_optional_session)]
CurrentSessionDep = Annotated[Session, Depends(get_current_session)]


class Owned(Protocol):
    user_id: int


T = TypeVar("T", bound=Owned)


def ensure_owned(
    record: T | None, session: Session, noun: str, action: str = "access"
) -> T:
    """Apply the existence-then-ownership check to a loaded record.

    Raises:
        HTTPException: 404 if the record does not exist, 403 if it belongs to
            another user.
    """
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{noun.capitalize()} not found",
        )
    if record.user_id != session.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action} this {noun}",
        )
    return record
