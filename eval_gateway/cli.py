from __future__ import annotations

import asyncio
from typing import Optional

import typer

from .console.orchestrator import ConsolePhase, ConsoleState, EvaluationConsole
from .console.renderer import render_state
from .shared.config import Config
from .shared.evaluation_client import EvaluationClient
from .shared.logging import LoggingManager


app = typer.Typer(add_completion=False, help="Nural AI evaluation gateway and console")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", help="bind port (default from config)"),
):
    """Run the gateway under uvicorn."""
    import uvicorn

    from .app import create_app

    config = Config()
    uvicorn.run(create_app(config), host=host or config.server_host, port=port or config.server_port)


async def _ask(prompt: str, gateway_url: Optional[str]) -> ConsoleState:
    async with EvaluationClient(base_url=gateway_url) as client:
        console = EvaluationConsole(client)
        await console.start()
        await console.submit_query(prompt)
        await console.wait_for_refreshes()
        return console.state


@app.command("ask")
def ask(
    prompt: str = typer.Argument(..., help="prompt to evaluate"),
    gateway_url: Optional[str] = typer.Option(None, "--gateway-url", help="gateway base URL (default from config)"),
):
    """Submit one prompt and print the score cards."""
    config = Config()
    LoggingManager.setup_logging(config.log_level, config.library_log_levels)

    state = asyncio.run(_ask(prompt, gateway_url))
    typer.echo(render_state(state))
    if state.phase is ConsolePhase.FAILED:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
