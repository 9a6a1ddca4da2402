"""Registration, login and session endpoints."""

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import EmailStr, Field, model_validator
from pydantic_core import PydanticCustomError

from advidly.api.deps import CurrentSessionDep, OptionalSessionDep, ServicesDep
from advidly.api.schemas import ApiModel, MessageResponse
from advidly.domain.enums import UserType
from advidly.domain.patches import CamelModel
from advidly.logging import get_logger
from advidly.services.auth import DuplicateUserError, InvalidCredentialsError, Registration

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = get_logger(__name__)


class RegisterRequest(CamelModel):
    """Request to create an account."""

    email: EmailStr
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=6, max_length=128)
    confirm_password: str
    full_name: str = Field(..., min_length=1, max_length=255)
    user_type: UserType

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise PydanticCustomError("password_mismatch", "Passwords don't match")
        return self


class LoginRequest(CamelModel):
    """Request to log in."""

    email: EmailStr
    password: str


class UserResponse(ApiModel):
    """Public user fields. The password hash is never included."""

    id: int
    email: str
    username: str
    full_name: str
    user_type: UserType


class AuthStatusResponse(ApiModel):
    is_authenticated: bool
    user_type: UserType | None = None


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a company or creator account along with its profile.",
)
async def register(request: RegisterRequest, services: ServicesDep) -> UserResponse:
    """Register a new user."""
    try:
        user = await services.auth.register(
            Registration(
                email=request.email,
                username=request.username,
                password=request.password,
                full_name=request.full_name,
                user_type=request.user_type,
            )
        )
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=UserResponse,
    summary="Log in",
    description="Check credentials and start a session (sets the session cookie).",
)
async def login(
    request: Request,
    credentials: LoginRequest,
    services: ServicesDep,
    current: OptionalSessionDep,
) -> UserResponse:
    """Log a user in."""
    try:
        user = await services.auth.authenticate(credentials.email, credentials.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    if current is not None:
        services.sessions.destroy(current.id)
    request.state.session = services.sessions.create(user.id, user.user_type)

    logger.info("user_logged_in", user_id=user.id)
    return UserResponse.model_validate(user)


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out",
    description="Destroy the current session and clear its cookie.",
)
async def logout(
    request: Request, services: ServicesDep, current: OptionalSessionDep
) -> MessageResponse:
    """Log the current user out."""
    if current is None:
        return MessageResponse(message="No active session")

    services.sessions.destroy(current.id)
    request.state.session = None
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
)
async def me(session: CurrentSessionDep, services: ServicesDep) -> UserResponse:
    """Get the logged-in user."""
    user = services.storage.get_user(session.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(user)


@router.get(
    "/status",
    response_model=AuthStatusResponse,
    summary="Session status",
    description="Report whether the caller is logged in, and as which user type.",
    responses={401: {"model": AuthStatusResponse}},
)
async def auth_status(current: OptionalSessionDep) -> AuthStatusResponse | JSONResponse:
    """Check authentication status without touching storage."""
    if current is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"isAuthenticated": False},
        )
    return AuthStatusResponse(is_authenticated=True, user_type=current.user_type)
