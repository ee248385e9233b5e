"""Factory functions for creating model instances in tests."""

from anime_api.models import Anime, User
from anime_api.security import Role, format_authorities, hash_password

DEFAULT_PASSWORD = "devdojo"


def make_anime(*, name: str = "Tensei Shitara Slime Datta Ken") -> Anime:
    return Anime(name=name)


def make_user(
    *,
    username: str = "devdojo",
    password: str = DEFAULT_PASSWORD,
    roles: set[Role] | None = None,
    name: str | None = None,
) -> User:
    return User(
        name=name or username.title(),
        username=username,
        password=hash_password(password),
        authorities=format_authorities(roles if roles is not None else {Role.USER}),
    )
