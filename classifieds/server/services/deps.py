"""
Request Dependencies.

Annotated aliases for the database session, the repository bundle, the
signed-in principal and the shared services, so routers declare what they
need in their signatures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from classifieds.core.database.entities.seller_profiles import SellerProfile
from classifieds.core.database.entities.users import User
from classifieds.core.database.repositories import RepoBundle, build_repos
from classifieds.core.database.session import get_session
from classifieds.core.errors import (
    NotAuthenticatedError,
    PermissionDeniedError,
    UserBannedError,
)
from classifieds.core.logging_config import get_logger
from classifieds.core.security import decode_signed_token
from classifieds.server.core.config import settings
from classifieds.server.core.constant import ROLE_ADMIN
from classifieds.server.services.realtime import MessageBroker, get_broker
from classifieds.server.services.storage import ImageStorage, get_storage

logger = get_logger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(slots=True)
class Principal:
    """The signed-in user and their seller profile."""

    user: User
    profile: Optional[SellerProfile]

    @property
    def id(self) -> str:
        return self.user.id

    @property
    def is_admin(self) -> bool:
        return self.profile is not None and self.profile.role == ROLE_ADMIN

    @property
    def is_banned(self) -> bool:
        return self.profile is not None and self.profile.banned


SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repos(session: SessionDep) -> RepoBundle:
    """Bundle every repository over the request's session."""
    return build_repos(session)


ReposDep = Annotated[RepoBundle, Depends(get_repos)]
StorageDep = Annotated[ImageStorage, Depends(get_storage)]
BrokerDep = Annotated[MessageBroker, Depends(get_broker)]


def _request_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.auth.session_cookie_name)


async def _load_principal(repos: RepoBundle, token: str) -> Principal:
    auth = settings.auth
    payload = decode_signed_token(token=token, secret=auth.jwt_secret, algorithms=[auth.jwt_algorithm])
    user = await repos.users.get_by_id(payload.user_id)
    if user is None:
        raise NotAuthenticatedError()
    profile = await repos.profiles.get_by_user_id(user.id)
    return Principal(user=user, profile=profile)


async def get_optional_principal(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer_scheme)],
    repos: ReposDep,
) -> Optional[Principal]:
    """Resolve the caller if they carry a valid session, else ``None``.

    Public pages stay reachable with a stale cookie, so an invalid token is
    treated as anonymous here.
    """
    token = _request_token(request, credentials)
    if not token:
        return None
    try:
        return await _load_principal(repos, token)
    except NotAuthenticatedError:
        logger.debug("Ignoring invalid session token on a public route")
        return None


async def get_principal_allow_banned(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer_scheme)],
    repos: ReposDep,
) -> Principal:
    """Resolve the caller, accepting suspended accounts.

    Only the account, logout and suspension routes use this directly.
    """
    token = _request_token(request, credentials)
    if not token:
        raise NotAuthenticatedError()
    return await _load_principal(repos, token)


async def get_current_principal(
    principal: Annotated[Principal, Depends(get_principal_allow_banned)],
) -> Principal:
    """Resolve the caller and refuse suspended accounts."""
    if principal.is_banned:
        raise UserBannedError()
    return principal


async def require_admin(principal: Annotated[Principal, Depends(get_current_principal)]) -> Principal:
    """Resolve the caller and refuse anyone who is not an admin."""
    if not principal.is_admin:
        raise PermissionDeniedError("Accès refusé")
    return principal


OptionalPrincipalDep = Annotated[Optional[Principal], Depends(get_optional_principal)]
AnyPrincipalDep = Annotated[Principal, Depends(get_principal_allow_banned)]
PrincipalDep = Annotated[Principal, Depends(get_current_principal)]
AdminDep = Annotated[Principal, Depends(require_admin)]
