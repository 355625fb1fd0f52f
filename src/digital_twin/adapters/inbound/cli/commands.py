"""CLI interface for the digital twin agent."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from ....config import settings
from ....config.logging import setup_logging
from ....core.domain import ChatMessage, OrchestratorResult
from ....core.services import RagOrchestrator
from ...common.exception_handler import format_exception_json

app = typer.Typer(
    name="digital-twin",
    help="Portfolio digital twin: chat, search and maintain the knowledge base",
    add_completion=False,
)

console = Console(force_terminal=True, legacy_windows=False)

# Shows full stack traces
DEBUG_MODE = settings.debug


def handle_cli_error(exc: Exception) -> None:
    """Display an error in the CLI.

    In debug mode, shows full JSON error details. Otherwise shows a short
    message with the error code.
    """
    error_data = format_exception_json(exc, include_trace=DEBUG_MODE)

    if DEBUG_MODE:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
        return

    error = error_data["error"]
    console.print(f"\n[red]Error [{error.get('code', 'UNKNOWN')}]:[/] {error['message']}")
    console.print(f"[dim]Type: {error['type']}[/]")
    console.print("[dim]Set DEBUG=true for full details[/]")


def get_orchestrator() -> RagOrchestrator:
    from ....composition.container import get_orchestrator as build_orchestrator

    settings.ensure_directories()
    return build_orchestrator()


async def _answer(
    orchestrator: RagOrchestrator,
    question: str,
    session_id: str | None = None,
    history: list[ChatMessage] | None = None,
) -> OrchestratorResult:
    result = await orchestrator.handle_message(question, session_id=session_id, history=history)
    # Notifications run on this event loop; let them finish before it closes
    await orchestrator.drain_notifications()
    return result


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    setup_logging(level="DEBUG" if verbose else settings.log_level, json_format=settings.log_json)


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question for the digital twin"),
) -> None:
    """Ask a single question and print the answer."""
    try:
        orchestrator = get_orchestrator()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    with console.status("[bold green]Thinking...[/]"):
        result = asyncio.run(_answer(orchestrator, question))

    console.print(Markdown(result.answer))
    console.print(f"\n[dim]Session: {result.session_id}[/]")


@app.command()
def chat() -> None:
    """Start an interactive chat session."""
    console.print(
        Panel.fit(
            f"[bold cyan]{settings.twin_name}[/]\n"
            f"[dim]Digital twin of {settings.owner_name}[/]\n\n"
            "Examples:\n"
            "• What is your educational background?\n"
            "• Which projects have you built?\n"
            "• What do you use Python for?\n\n"
            "[dim]Type 'quit' or 'exit' to leave[/]",
            title="Digital Twin",
            border_style="cyan",
        )
    )

    try:
        orchestrator = get_orchestrator()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    session_id: str | None = None
    history: list[ChatMessage] = []

    while True:
        try:
            query = Prompt.ask("\n[bold cyan]You[/]")

            if query.lower() in ("quit", "exit", "q"):
                console.print("[dim]Goodbye![/]")
                break

            if not query.strip():
                continue

            with console.status("[bold green]Thinking...[/]"):
                result = asyncio.run(_answer(orchestrator, query, session_id, list(history)))

            session_id = result.session_id
            history.append(ChatMessage(role="user", content=query))
            history.append(ChatMessage(role="assistant", content=result.answer))

            console.print()
            console.print(
                Panel(
                    Markdown(result.answer),
                    title=f"[bold cyan]{settings.twin_name}[/]",
                    border_style="cyan",
                )
            )

        except KeyboardInterrupt:
            console.print("\n[dim]Goodbye![/]")
            break
        except Exception as exc:
            handle_cli_error(exc)


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    top_k: int = typer.Option(5, "--top-k", "-k", min=1, help="Maximum number of results"),
) -> None:
    """Run a similarity search over the knowledge base."""
    from ....composition.container import get_index_cache, get_repository

    try:
        index = get_index_cache().get(get_repository().load())
        result = index.search(query, top_k)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    if not result.documents:
        console.print("[yellow]No matching documents.[/]")
        return

    table = Table(title=f"Results for '{query}'")
    table.add_column("Score", justify="right")
    table.add_column("ID", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Content")
    for doc in result.documents:
        table.add_row(f"{doc.score:.3f}", doc.id, doc.category, doc.content[:80])
    console.print(table)

    relevance = "[green]yes[/]" if result.has_relevant_content else "[red]no[/]"
    console.print(f"Relevant content: {relevance} (max score {result.max_score:.3f})")


@app.command()
def ingest(
    pdf_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CV PDF to ingest"),
) -> None:
    """Replace the CV documents in the knowledge base with chunks of a PDF."""
    from ....composition.container import get_ingestion_service

    try:
        with console.status("[bold green]Extracting and indexing...[/]"):
            report = get_ingestion_service().ingest_pdf(pdf_path)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    console.print(f"[green]✓[/] Ingested [bold]{report.source}[/]")
    console.print(f"  Added: {report.documents_added}")
    console.print(f"  Removed: {report.documents_removed}")
    console.print(f"  Total documents: {report.total_documents}")
    for doc in report.preview:
        console.print(f"  [dim]{doc.id}: {doc.content[:60]}...[/]")


@app.command()
def status() -> None:
    """Show the current configuration and knowledge base size."""
    from ....composition.container import get_repository

    console.print("[bold]Digital Twin Status[/]\n")
    console.print(f"Retriever backend: {settings.retriever_backend}")
    console.print(f"Answer backend: {settings.llm_backend}")
    console.print(f"Notifier backend: {settings.notifier_backend}")

    if settings.llm_backend == "openrouter":
        if settings.openrouter_api_key:
            console.print("✅ OpenRouter API key configured")
        else:
            console.print("❌ OpenRouter API key not set (set OPENROUTER_API_KEY in .env)")

    try:
        count = len(get_repository().load())
        console.print(f"✅ Knowledge base: {count} documents ({settings.knowledge_base_path})")
    except Exception as exc:
        handle_cli_error(exc)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind"),
    port: int = typer.Option(8000, help="Port to bind"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "digital_twin.adapters.inbound.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
