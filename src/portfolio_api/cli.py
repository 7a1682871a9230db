"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from portfolio_api.config import AppConfig, load_config
from portfolio_api.logging.interaction_log import InteractionLog

app = typer.Typer(
    name="portfolio-api",
    help="Portfolio site backend: plan generator, chatbot and interaction log",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(config: AppConfig, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _open_log(config: AppConfig) -> InteractionLog:
    if not config.store.database_url:
        console.print("[red]DATABASE_URL is not set (env or store.database_url in config.yaml)[/red]")
        raise typer.Exit(1)
    return InteractionLog(config.store.database_url, write_attempts=config.store.write_attempts)


def _truncate(text: str | None, width: int = 60) -> str:
    if not text:
        return ""
    text = " ".join(text.split())
    return text if len(text) <= width else text[: width - 1] + "…"


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from portfolio_api.api.app import create_app

    config = load_config(config_path)
    _setup_logging(config, verbose)
    if reload:
        uvicorn.run(
            "portfolio_api.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            log_config=None,
        )
        return
    uvicorn.run(create_app(config), host=host, port=port, log_config=None)


@app.command("init-db")
def init_db(
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
) -> None:
    """Create the log tables and indexes (safe to run repeatedly)."""
    config = load_config(config_path)
    _setup_logging(config)
    log = _open_log(config)

    async def _run() -> None:
        try:
            await log.ensure_schema()
        finally:
            await log.dispose()

    try:
        asyncio.run(_run())
    except Exception as exc:
        console.print(f"[red]Schema provisioning failed: {exc}[/red]")
        raise typer.Exit(1)
    console.print("[green]Log tables ready.[/green]")


@app.command()
def logs(
    log_type: str = typer.Option("plan", "--type", "-t", help="plan or chatbot"),
    limit: int = typer.Option(20, "--limit", "-n", help="Number of records"),
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
) -> None:
    """Show the most recent interaction log records."""
    if log_type not in ("plan", "chatbot"):
        console.print(f"[red]--type must be plan or chatbot, got {log_type!r}[/red]")
        raise typer.Exit(1)
    config = load_config(config_path)
    _setup_logging(config)
    log = _open_log(config)

    async def _fetch():
        try:
            if log_type == "plan":
                return await log.list_plan_records(limit)
            return await log.list_chat_records(limit)
        finally:
            await log.dispose()

    records = asyncio.run(_fetch())
    if not records:
        console.print("[yellow]No records.[/yellow]")
        return

    table = Table(title=f"{log_type} logs (newest first)")
    table.add_column("id", justify="right")
    table.add_column("timestamp")
    if log_type == "plan":
        table.add_column("company")
        table.add_column("url?")
        table.add_column("plan chars", justify="right")
        table.add_column("error")
        for r in records:
            table.add_row(
                str(r.id),
                r.timestamp.isoformat(sep=" ", timespec="seconds"),
                _truncate(r.company_name, 30),
                "yes" if r.is_url else "",
                str(r.plan_length),
                _truncate(r.error, 40),
            )
    else:
        table.add_column("message")
        table.add_column("turns", justify="right")
        table.add_column("response")
        table.add_column("error")
        for r in records:
            table.add_row(
                str(r.id),
                r.timestamp.isoformat(sep=" ", timespec="seconds"),
                _truncate(r.message, 40),
                str(r.conversation_history_length),
                _truncate(r.response, 40),
                _truncate(r.error, 30),
            )
    console.print(table)


@app.command()
def stats(
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
) -> None:
    """Show total record counts per log table."""
    config = load_config(config_path)
    _setup_logging(config)
    log = _open_log(config)

    async def _fetch() -> dict:
        try:
            return await log.get_stats()
        finally:
            await log.dispose()

    result = asyncio.run(_fetch())
    console.print(f"Plan generator: [bold]{result['planGenerator']['total']}[/bold]")
    console.print(f"Chatbot:        [bold]{result['chatbot']['total']}[/bold]")


if __name__ == "__main__":
    app()
