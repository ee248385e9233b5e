"""Password hashing and the authenticated identity type."""

from dataclasses import dataclass, field
from enum import StrEnum

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from fastapi.security import HTTPBasic

_pwd_hasher = PasswordHasher()

# auto_error=False: a missing header must reach the policy, which lets public
# routes through and turns everything else into a 401 with our error body.
basic_auth = HTTPBasic(auto_error=False)


class Role(StrEnum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated identity handed to the authorization policy."""

    username: str
    roles: frozenset[Role] = field(default_factory=frozenset)

    def has_any_role(self, roles: frozenset[Role]) -> bool:
        return not self.roles.isdisjoint(roles)


def hash_password(password: str) -> str:
    return _pwd_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return _pwd_hasher.verify(hashed_password, password)
    except (VerificationError, InvalidHashError):
        return False


def parse_authorities(authorities: str) -> frozenset[Role]:
    """Parse a stored "ADMIN,USER" column; a legacy "ROLE_" prefix is accepted."""
    roles = set()
    for raw in authorities.split(","):
        name = raw.strip().upper().removeprefix("ROLE_")
        if name in Role.__members__:
            roles.add(Role(name))
    return frozenset(roles)


def format_authorities(roles: frozenset[Role] | set[Role]) -> str:
    return ",".join(sorted(role.value for role in roles))
