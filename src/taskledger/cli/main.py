"""taskledger CLI — run the server and do small admin jobs.

Usage:
    taskledger serve                      # Run the API with uvicorn
    taskledger create-user alice          # Register a user (prompts for password)
    taskledger sweep-sessions             # Delete expired sessions once
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys

import click

from taskledger.config import settings


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


async def _create_user(username: str, password: str):
    from taskledger.auth.credentials import CredentialService
    from taskledger.db.engine import async_session_factory

    async with async_session_factory() as db:
        return await CredentialService(db).register(username, password)


async def _sweep_sessions() -> int:
    from taskledger.services.session_sweeper import SessionSweeper

    return await SessionSweeper().sweep_once()


@click.group()
def cli():
    """taskledger — task and account tracking backend."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default from settings).")
@click.option("--port", default=None, type=int, help="Port (default from settings).")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes.")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "taskledger.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("create-user")
@click.argument("username")
@click.password_option()
def create_user(username: str, password: str):
    """Register USERNAME with a prompted password."""
    from taskledger.errors import DuplicateUsername

    try:
        user = _run(_create_user(username, password))
    except DuplicateUsername as e:
        click.secho(f"Error: {e.message}", fg="red", err=True)
        sys.exit(1)
    click.secho(f"Created user {user.username} ({user.id})", fg="green")


@cli.command("sweep-sessions")
def sweep_sessions():
    """Delete expired sessions now instead of waiting for the sweeper."""
    removed = _run(_sweep_sessions())
    click.echo(f"Removed {removed} expired session(s)")


def main():
    cli()


if __name__ == "__main__":
    main()
