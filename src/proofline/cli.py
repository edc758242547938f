"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from proofline.clients.assistant import build_assistant
from proofline.config import load_config
from proofline.engine.service import EditorService
from proofline.errors import ProoflineError
from proofline.models.suggestion import SuggestionStatus
from proofline.store.sqlite_store import SQLiteSuggestionStore
from proofline.utils.text import normalize_text, word_count

app = typer.Typer(
    name="proofline",
    help="Writing assistant: suggestions, readability and summaries for your documents",
    no_args_is_help=True,
)
console = Console()

SEVERITY_COLORS = {"high": "red", "medium": "yellow", "low": "dim"}


def _service(user: str | None, verbose: bool = False) -> EditorService:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    config = load_config()
    store = SQLiteSuggestionStore(config.store.resolved_db_path)
    return EditorService(
        store,
        user or os.environ.get("PROOFLINE_USER", "local"),
        assistant=build_assistant(config.llm),
        config=config,
    )


def _run(coro):
    try:
        return asyncio.run(coro)
    except ProoflineError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


UserOption = typer.Option(None, "--user", "-u", help="Owner id (default: $PROOFLINE_USER or 'local')")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Show debug logs")


@app.command()
def new(
    title: str = typer.Argument("Untitled document", help="Document title"),
    source: Path = typer.Option(None, "--from", help="Initial content from a text/HTML file"),
    user: str = UserOption,
    verbose: bool = VerboseOption,
) -> None:
    """Create a document."""
    service = _service(user, verbose)

    async def _create():
        doc = await service.create_document(title)
        if source is not None:
            await service.save_content(doc.id, source.read_text(encoding="utf-8"))
        return doc

    doc = _run(_create())
    console.print(f"[green]Created {doc.id}[/green] ({doc.title})")


@app.command("list")
def list_documents(user: str = UserOption, verbose: bool = VerboseOption) -> None:
    """List your documents."""
    service = _service(user, verbose)
    docs = _run(service.list_documents())
    table = Table("ID", "Title", "Words", "Readability", "Updated")
    for doc in docs:
        score = f"{doc.readability_score:.1f}" if doc.readability_score is not None else "-"
        table.add_row(doc.id, doc.title, str(word_count(doc.content)), score, f"{doc.updated_at:%Y-%m-%d %H:%M}")
    console.print(table)


@app.command()
def edit(
    document_id: str = typer.Argument(help="Document id"),
    source: Path = typer.Argument(help="Text/HTML file with the new content"),
    user: str = UserOption,
    verbose: bool = VerboseOption,
) -> None:
    """Replace a document's content with a file's contents."""
    if not source.exists():
        console.print(f"[red]File not found: {source}[/red]")
        raise typer.Exit(1)
    service = _service(user, verbose)
    _run(service.save_content(document_id, source.read_text(encoding="utf-8")))
    console.print(f"[green]Saved {document_id}[/green]")


@app.command()
def check(
    document_id: str = typer.Argument(help="Document id"),
    user: str = UserOption,
    verbose: bool = VerboseOption,
) -> None:
    """Generate suggestions for the current content and list them."""
    service = _service(user, verbose)

    async def _check():
        doc = await service.get_document(document_id)
        result = await service.generate_suggestions(document_id, normalize_text(doc.content))
        pending = await service.get_suggestions(document_id, SuggestionStatus.PENDING)
        return result, pending

    result, pending = _run(_check())
    if result.stale:
        console.print("[yellow]Document changed during analysis; batch discarded[/yellow]")
    source = "AI" if result.origin.value == "ai" else f"pattern fallback ({result.failure})"
    console.print(f"[dim]{result.count} suggestion(s) from {source}[/dim]")
    _print_suggestions(pending)


@app.command()
def suggestions(
    document_id: str = typer.Argument(help="Document id"),
    all_: bool = typer.Option(False, "--all", help="Include accepted and dismissed"),
    user: str = UserOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show stored suggestions."""
    service = _service(user, verbose)
    status = None if all_ else SuggestionStatus.PENDING
    _print_suggestions(_run(service.get_suggestions(document_id, status)))


@app.command()
def apply(
    document_id: str = typer.Argument(help="Document id"),
    suggestion_id: str = typer.Argument(help="Suggestion id"),
    user: str = UserOption,
    verbose: bool = VerboseOption,
) -> None:
    """Apply a suggestion to the stored content."""
    service = _service(user, verbose)
    if _run(service.apply_suggestion(document_id, suggestion_id)):
        console.print("[green]Applied[/green]")
    else:
        console.print("[yellow]Suggestion no longer applies; run `check` again[/yellow]")


@app.command()
def dismiss(
    document_id: str = typer.Argument(help="Document id"),
    suggestion_id: str = typer.Argument(help="Suggestion id"),
    user: str = UserOption,
    verbose: bool = VerboseOption,
) -> None:
    """Dismiss a suggestion."""
    service = _service(user, verbose)
    _run(service.mark_suggestion(document_id, suggestion_id, SuggestionStatus.DISMISSED))
    console.print("[dim]Dismissed[/dim]")


@app.command()
def readability(
    document_id: str = typer.Argument(help="Document id"),
    user: str = UserOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show the readability grade of a document."""
    service = _service(user, verbose)
    analysis = _run(service.get_readability(document_id))
    body = f"Score: {analysis.score:.1f} | [bold]{analysis.grade}[/bold]"
    if analysis.insights:
        body += "\n" + "\n".join(f"- {i}" for i in analysis.insights)
    if analysis.recommendations:
        body += "\n\n[cyan]Recommendations[/cyan]\n" + "\n".join(f"- {r}" for r in analysis.recommendations)
    console.print(Panel(body, title=f"Readability ({analysis.origin.value})"))


@app.command()
def summary(
    document_id: str = typer.Argument(help="Document id"),
    user: str = UserOption,
    verbose: bool = VerboseOption,
) -> None:
    """Print a TLDR of a document."""
    service = _service(user, verbose)
    result = _run(service.summarize_document(document_id))
    body = result.summary
    if result.key_points:
        body += "\n\n" + "\n".join(f"- {p}" for p in result.key_points)
    body += f"\n\n[dim]{result.word_count} words, {result.compression_ratio:.0%} of original[/dim]"
    console.print(Panel(body, title="TLDR"))


def _print_suggestions(items) -> None:
    if not items:
        console.print("[green]No suggestions to review.[/green]")
        return
    table = Table("ID", "Type", "Severity", "Original", "Suggested", "Status")
    for s in items:
        color = SEVERITY_COLORS.get(s.severity.value, "white")
        table.add_row(
            s.id,
            s.type.value,
            f"[{color}]{s.severity.value}[/{color}]",
            s.original_text,
            s.suggested_text,
            s.status.value,
        )
    console.print(table)


if __name__ == "__main__":
    app()
