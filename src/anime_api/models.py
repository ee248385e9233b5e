"""SQLAlchemy models.

Define all ORM models here. They must inherit from Base so that
Alembic's autogenerate can detect them.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from anime_api.db.session import Base  # noqa: F401 — re-exported for convenience


class Anime(Base):
    __tablename__ = "animes"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))


class User(Base):
    """Stored credential: argon2 password hash plus comma-separated role names."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    username: Mapped[str] = mapped_column(String(100), unique=True)
    password: Mapped[str] = mapped_column(String(255))
    authorities: Mapped[str] = mapped_column(String(100))
