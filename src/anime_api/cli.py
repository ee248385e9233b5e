"""Operator CLI: provision credentials and run the server."""

import asyncio

import typer
import uvicorn

from anime_api.db.session import async_session
from anime_api.exceptions import UsernameTakenError
from anime_api.security import Role
from anime_api.services.user import create_user

app = typer.Typer(no_args_is_help=True, help="Anime API operator commands")


async def _create_user(username: str, password: str, roles: set[Role], name: str | None) -> str:
    async with async_session() as session:
        user = await create_user(
            session, username=username, password=password, roles=roles, name=name
        )
        await session.commit()
        return user.authorities


@app.command("create-user")
def create_user_command(
    username: str = typer.Argument(..., help="Login name, unique"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Plain-text password"
    ),
    role: list[Role] = typer.Option(
        [Role.USER], "--role", "-r", case_sensitive=False, help="Role to grant, repeatable"
    ),
    name: str | None = typer.Option(None, help="Display name, defaults to the username"),
) -> None:
    """Store a user with an argon2-hashed password in the credential store."""
    try:
        authorities = asyncio.run(_create_user(username, password, set(role), name))
    except UsernameTakenError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Created user {username} with roles {authorities}")


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API under uvicorn."""
    uvicorn.run("anime_api.main:app", host=host, port=port, reload=reload, log_config=None)


if __name__ == "__main__":
    app()
