"""Caller identity resolution from a header set by the upstream identity provider."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from taskkit.core.api.dependencies import get_session
from taskkit.core.exceptions import UnauthenticatedError
from taskkit.core.logging import add_request_context, get_logger
from taskkit.core.types import parse_ulid
from taskkit.modules.user import UserRepository

logger = get_logger(__name__)

DEFAULT_IDENTITY_HEADER = "X-User-Id"


class HeaderIdentity:
    """Resolve the authenticated user id forwarded in a trusted request header.

    Token issuance and verification happen upstream; this dependency only
    checks that the forwarded id is a well-formed ULID of an existing user.
    """

    def __init__(self, header_name: str = DEFAULT_IDENTITY_HEADER) -> None:
        """Initialize resolver for the given header name."""
        self.header_name = header_name

    async def __call__(self, request: Request, session: Annotated[AsyncSession, Depends(get_session)]) -> ULID:
        raw = request.headers.get(self.header_name, "").strip()
        if not raw:
            raise UnauthenticatedError()

        user_id = parse_ulid(raw)
        if user_id is None or not await UserRepository(session).exists_by_id(user_id):
            logger.info("identity.rejected", header=self.header_name)
            raise UnauthenticatedError()

        add_request_context(user_id=str(user_id))
        return user_id


# Default resolver; ServiceBuilder.with_identity() overrides it for custom headers
get_current_user_id = HeaderIdentity()
