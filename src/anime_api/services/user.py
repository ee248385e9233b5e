"""Credential resolution and provisioning."""

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from anime_api.exceptions import UsernameTakenError
from anime_api.logging import get_logger
from anime_api.models import User
from anime_api.repositories.user import add_user, get_user_by_username
from anime_api.security import (
    Principal,
    Role,
    format_authorities,
    hash_password,
    parse_authorities,
    verify_password,
)

logger = get_logger(__name__)


async def authenticate(db: AsyncSession, username: str, password: str) -> Principal | None:
    """Resolve Basic credentials to a Principal, or None if they do not verify.

    argon2 verification is CPU-bound, so it runs in the threadpool rather than
    on the event loop.
    """
    user = await get_user_by_username(db, username)
    if user is None:
        logger.info("authentication_failed", username=username, reason="unknown_user")
        return None
    if not await run_in_threadpool(verify_password, password, user.password):
        logger.info("authentication_failed", username=username, reason="bad_password")
        return None
    return Principal(username=user.username, roles=parse_authorities(user.authorities))


async def create_user(
    db: AsyncSession,
    *,
    username: str,
    password: str,
    roles: set[Role],
    name: str | None = None,
) -> User:
    if await get_user_by_username(db, username) is not None:
        raise UsernameTakenError(username)
    hashed = await run_in_threadpool(hash_password, password)
    user = User(
        name=name or username,
        username=username,
        password=hashed,
        authorities=format_authorities(roles),
    )
    await add_user(db, user)
    logger.info("user_created", username=username, roles=user.authorities)
    return user
