"""
Authentication Endpoints.

Signup, email verification, login and logout, plus the signed-in user's own
account and suspension status. The access token is returned in the body and
set as an HTTP-only session cookie.
"""

from datetime import timedelta

from fastapi import APIRouter, Response, status

from classifieds.core.database.entities.seller_profiles import SellerProfile
from classifieds.core.database.entities.users import User
from classifieds.core.errors import (
    ConflictError,
    NotAuthenticatedError,
    PermissionDeniedError,
    UserBannedError,
    ValidationFailedError,
)
from classifieds.core.logging_config import get_logger
from classifieds.core.models.io.auth import (
    BanStatusRead,
    CurrentUserRead,
    LoginRequest,
    SessionRead,
    SignupRequest,
    UserRead,
    VerifyEmailRequest,
)
from classifieds.core.models.io.common import ActionResult
from classifieds.core.models.io.profiles import SellerProfileRead
from classifieds.core.security import (
    create_signed_token,
    decode_signed_token,
    hash_password,
    normalise_email,
    verify_password,
)
from classifieds.server.core.config import settings
from classifieds.server.services.deps import AnyPrincipalDep, Principal, ReposDep

logger = get_logger(__name__)

router = APIRouter()

MIN_PASSWORD_LENGTH = 6


def _current_user(principal: Principal) -> CurrentUserRead:
    return CurrentUserRead(
        user=UserRead.model_validate(principal.user),
        profile=SellerProfileRead.model_validate(principal.profile) if principal.profile else None,
    )


def issue_access_token(user: User) -> str:
    auth = settings.auth
    return create_signed_token(
        user_id=user.id,
        email=user.email,
        token_type="access",
        secret=auth.jwt_secret,
        algorithm=auth.jwt_algorithm,
        expires_delta=timedelta(minutes=auth.access_token_minutes),
    )


def issue_email_token(user: User) -> str:
    auth = settings.auth
    return create_signed_token(
        user_id=user.id,
        email=user.email,
        token_type="email_verify",
        secret=auth.jwt_secret,
        algorithm=auth.jwt_algorithm,
        expires_delta=timedelta(hours=auth.email_token_hours),
    )


@router.post(
    "/signup",
    response_model=ActionResult[UserRead],
    status_code=status.HTTP_201_CREATED,
    summary="Sign Up",
    description="Create an account and its seller profile. An email verification token is issued.",
    responses={
        201: {"description": "Account created"},
        400: {"description": "Missing email or password, or password too short"},
        409: {"description": "Email already registered"},
    },
)
async def signup(body: SignupRequest, repos: ReposDep) -> ActionResult[UserRead]:
    """
    Create a new account.

    - **email** / **password**: required, password of at least 6 characters.
    - **business_name**: optional, copied into the seller profile.
    """
    if not (body.email or "").strip() or not body.password:
        raise ValidationFailedError("Email et mot de passe requis")
    if len(body.password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailedError("Le mot de passe doit contenir au moins 6 caractères")

    email = normalise_email(body.email)
    if await repos.users.get_by_email(email) is not None:
        raise ConflictError("Un compte existe déjà avec cet email")

    user = await repos.users.create(User(email=email, password_hash=hash_password(body.password)))
    await repos.profiles.create(SellerProfile(user_id=user.id, business_name=body.business_name))

    # No mail delivery: the verification link is only logged.
    token = issue_email_token(user)
    logger.info(f"Account created for {email}; verification link: {settings.site_url}/auth/verify-email?token={token}")
    return ActionResult(data=UserRead.model_validate(user))


@router.post(
    "/verify-email",
    response_model=ActionResult[UserRead],
    summary="Verify Email",
    description="Confirm an email address with the token issued at signup.",
    responses={401: {"description": "Invalid or expired token"}},
)
async def verify_email(body: VerifyEmailRequest, repos: ReposDep) -> ActionResult[UserRead]:
    auth = settings.auth
    payload = decode_signed_token(
        token=body.token, secret=auth.jwt_secret, algorithms=[auth.jwt_algorithm], expected_type="email_verify"
    )
    user = await repos.users.get_by_id(payload.user_id)
    if user is None:
        raise NotAuthenticatedError("Lien de vérification invalide")
    if not user.email_verified:
        user.email_verified = True
        user = await repos.users.update(user)
        logger.info(f"Email verified for {user.email}")
    return ActionResult(data=UserRead.model_validate(user))


@router.post(
    "/login",
    response_model=SessionRead,
    summary="Log In",
    description="Exchange email and password for an access token; also sets the session cookie.",
    responses={
        400: {"description": "Missing email or password"},
        401: {"description": "Wrong credentials"},
        403: {"description": "Account suspended or email not verified"},
    },
)
async def login(body: LoginRequest, response: Response, repos: ReposDep) -> SessionRead:
    """
    Log in with email and password.

    Suspended accounts are refused. When email verification is required,
    unverified accounts are refused too.
    """
    if not (body.email or "").strip() or not body.password:
        raise ValidationFailedError("Email et mot de passe requis")

    user = await repos.users.get_by_email(normalise_email(body.email))
    if user is None or not verify_password(body.password, user.password_hash):
        raise NotAuthenticatedError("Email ou mot de passe incorrect")

    profile = await repos.profiles.get_by_user_id(user.id)
    if profile is not None and profile.banned:
        logger.info(f"Refused login for banned user {user.id}")
        raise UserBannedError()
    if settings.auth.require_email_verification and not user.email_verified:
        raise PermissionDeniedError("Veuillez confirmer votre adresse email")

    user = await repos.users.record_sign_in(user)
    token = issue_access_token(user)
    auth = settings.auth
    response.set_cookie(
        key=auth.session_cookie_name,
        value=token,
        max_age=auth.access_token_minutes * 60,
        httponly=True,
        secure=auth.session_cookie_secure,
        samesite="lax",
    )
    return SessionRead(access_token=token, **_current_user(Principal(user=user, profile=profile)).model_dump())


@router.post(
    "/logout",
    response_model=ActionResult,
    summary="Log Out",
    description="Clear the session cookie.",
)
async def logout(response: Response) -> ActionResult:
    response.delete_cookie(settings.auth.session_cookie_name)
    return ActionResult()


@router.get(
    "/me",
    response_model=CurrentUserRead,
    summary="Current User",
    description="Return the signed-in user and their seller profile (also for suspended accounts).",
    responses={401: {"description": "Not signed in"}},
)
async def me(principal: AnyPrincipalDep) -> CurrentUserRead:
    return _current_user(principal)


@router.get(
    "/banned",
    response_model=BanStatusRead,
    summary="Suspension Status",
    description="Return the ban reason and date shown on the suspension page.",
)
async def banned_status(principal: AnyPrincipalDep) -> BanStatusRead:
    profile = principal.profile
    if profile is None:
        return BanStatusRead(banned=False)
    return BanStatusRead(banned=profile.banned, banned_reason=profile.banned_reason, banned_at=profile.banned_at)
