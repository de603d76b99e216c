"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import anthropic
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from linguist.clients.llm_client import LLMClient
from linguist.clients.search_client import SearchClient
from linguist.config import AppConfig, load_config
from linguist.editing.session import ReviewSession
from linguist.logging.cost_calculator import calculate_cost
from linguist.logging.models import UsageLog
from linguist.logging.usage_store import UsageStore
from linguist.models.suggestion import AnalysisResult, SuggestionType, ToneTarget
from linguist.pipeline.plagiarism_checker import PlagiarismChecker
from linguist.pipeline.rewriter import Rewriter
from linguist.pipeline.text_analyzer import TextAnalyzer

app = typer.Typer(
    name="linguist",
    help="AI writing assistant: analyze, review and apply suggestions",
    no_args_is_help=True,
)
console = Console()

CATEGORY_STYLES: dict[SuggestionType, str] = {
    SuggestionType.GRAMMAR: "underline red",
    SuggestionType.CLARITY: "underline blue",
    SuggestionType.TONE: "underline magenta",
    SuggestionType.ENGAGEMENT: "underline green",
    SuggestionType.STRATEGIC: "underline yellow",
    SuggestionType.FORMATTING: "underline cyan",
}

_AUTH_ERRORS = (anthropic.AuthenticationError, anthropic.PermissionDeniedError)


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _read_text(path: Path) -> str:
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def _load_analysis(path: Path) -> AnalysisResult:
    try:
        return AnalysisResult.model_validate_json(_read_text(path))
    except ValueError as e:
        console.print(f"[red]Invalid analysis file {path}: {e}[/red]")
        raise typer.Exit(1)


def _usage_store(config: AppConfig) -> UsageStore:
    return UsageStore(db_path=config.usage.resolved_db_path)


def _record(
    config: AppConfig,
    mode: str,
    started: float,
    llm: LLMClient | None = None,
    search: SearchClient | None = None,
    **fields,
) -> None:
    calls = llm.get_token_summary()["calls"] if llm else []
    searches = search.get_search_count() if search else 0
    log = UsageLog(
        mode=mode,
        total_input_tokens=sum(c[1] for c in calls),
        total_output_tokens=sum(c[2] for c in calls),
        search_count=searches,
        elapsed_seconds=time.time() - started,
        estimated_cost_usd=calculate_cost(calls, searches),
        **fields,
    )
    _usage_store(config).save_log(log)


def _fail_llm(e: Exception) -> None:
    if isinstance(e, _AUTH_ERRORS):
        console.print(
            "[red]AI authentication failed. Set a valid ANTHROPIC_API_KEY and try again.[/red]"
        )
    else:
        console.print(f"[red]AI request failed: {e}[/red]")
    raise typer.Exit(1)


def _print_suggestions(analysis: AnalysisResult) -> None:
    table = Table(title=f"{len(analysis.suggestions)} suggestions")
    table.add_column("ID", style="dim")
    table.add_column("Type")
    table.add_column("Original", style="strike")
    table.add_column("Suggested", style="bold")
    table.add_column("Why")
    for s in analysis.suggestions:
        table.add_row(
            s.id,
            Text(s.category.value, style=CATEGORY_STYLES.get(s.category, "")),
            s.original_text,
            s.suggested_text,
            s.explanation,
        )
    console.print(table)


@app.command()
def analyze(
    file: Path = typer.Argument(help="Text file to analyze"),
    tone: ToneTarget = typer.Option(None, "--tone", "-t", case_sensitive=False, help="Target tone"),
    save: Path = typer.Option(None, "--save", "-s", help="Write the analysis JSON here"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Analyze a draft and list suggestions."""
    _setup_logging(verbose)
    config = load_config()
    text = _read_text(file)
    if not text.strip():
        console.print("[yellow]Nothing to analyze: the file is empty.[/yellow]")
        raise typer.Exit(1)
    tone = tone or config.editor.tone

    llm = LLMClient(timeout=config.llm.timeout, model=config.llm.model)
    analyzer = TextAnalyzer(llm)
    started = time.time()
    with console.status("Analyzing..."):
        try:
            analysis = asyncio.run(analyzer.analyze(text, tone))
        except Exception as e:
            _record(config, "analyze", started, llm, tone=tone.value, success=False, error_message=str(e))
            _fail_llm(e)

    _record(
        config,
        "analyze",
        started,
        llm,
        model=config.llm.model,
        tone=tone.value,
        suggestion_count=len(analysis.suggestions),
    )

    console.print(
        Panel(
            f"Score: {analysis.overall_score} | Readability: {analysis.readability_score} "
            f"({analysis.readability_level}) | Tone: {analysis.tone_detected}\n{analysis.summary}",
            title="Report",
        )
    )
    _print_suggestions(analysis)

    if save:
        save.parent.mkdir(parents=True, exist_ok=True)
        save.write_text(analysis.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
        console.print(f"[green]Analysis saved: {save}[/green]")


@app.command()
def apply(
    file: Path = typer.Argument(help="Text file the analysis was made for"),
    analysis_file: Path = typer.Argument(help="Analysis JSON written by `analyze --save`"),
    ids: list[str] = typer.Option(None, "--id", help="Suggestion id to accept (repeatable)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the result here instead of stdout"),
) -> None:
    """Accept suggestions (all pending ones unless --id is given)."""
    session = ReviewSession(_read_text(file), _load_analysis(analysis_file))

    if ids:
        skipped = []
        for suggestion_id in ids:
            try:
                result = session.accept(suggestion_id)
            except KeyError:
                console.print(f"[red]Unknown suggestion id: {suggestion_id}[/red]")
                raise typer.Exit(1)
            if not result.applied:
                skipped.append(suggestion_id)
        applied_count = len(ids) - len(skipped)
    else:
        batch = session.accept_all()
        skipped = sorted(batch.skipped_ids)
        applied_count = len(batch.applied_ids)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(session.document, encoding="utf-8")
        console.print(f"[green]Saved: {output}[/green]")
    else:
        typer.echo(session.document)

    console.print(f"[green]{applied_count} applied[/green]", end="")
    if skipped:
        console.print(f", [yellow]{len(skipped)} could not be located: {', '.join(skipped)}[/yellow]")
    else:
        console.print()


@app.command()
def review(
    file: Path = typer.Argument(help="Text file to review"),
    analysis_file: Path = typer.Argument(help="Analysis JSON written by `analyze --save`"),
) -> None:
    """Show the draft with pending suggestions highlighted."""
    session = ReviewSession(_read_text(file), _load_analysis(analysis_file))
    rendered = Text()
    located = set()
    for seg in session.overlay():
        if seg.is_highlight:
            located.add(seg.suggestion_id)
            rendered.append(seg.text, style=CATEGORY_STYLES.get(seg.category, "underline"))
        else:
            rendered.append(seg.text)
    console.print(Panel(rendered, title=str(file)))

    stale = [s.id for s in session.pending if s.id not in located]
    console.print(f"[dim]{session.word_count} words | {session.char_count} characters[/dim]")
    if stale:
        console.print(f"[yellow]Not shown ({len(stale)}): {', '.join(stale)}[/yellow]")


@app.command()
def rewrite(
    file: Path = typer.Argument(help="Text file to rewrite"),
    instruction: str = typer.Option(..., "--instruction", "-i", help="How to rewrite it"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the result here instead of stdout"),
) -> None:
    """Rewrite a draft following an instruction."""
    config = load_config()
    text = _read_text(file)
    llm = LLMClient(timeout=config.llm.timeout, model=config.llm.rewrite_model)
    started = time.time()
    with console.status("Rewriting..."):
        try:
            rewritten = asyncio.run(Rewriter(llm).rewrite(text, instruction))
        except Exception as e:
            _record(config, "rewrite", started, llm, success=False, error_message=str(e))
            _fail_llm(e)
    _record(config, "rewrite", started, llm, model=config.llm.rewrite_model)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rewritten, encoding="utf-8")
        console.print(f"[green]Saved: {output}[/green]")
    else:
        typer.echo(rewritten)


@app.command()
def plagiarism(
    file: Path = typer.Argument(help="Text file to check"),
) -> None:
    """Search the web for passages of the draft."""
    config = load_config()
    text = _read_text(file)
    try:
        search = SearchClient()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    checker = PlagiarismChecker(
        search,
        max_chars=config.search.max_chars,
        max_queries=config.search.max_queries,
        max_results=config.search.max_results,
        search_depth=config.search.search_depth,
    )
    started = time.time()
    with console.status("Searching the web..."):
        result = asyncio.run(checker.check(text))
    _record(config, "plagiarism", started, search=search)

    color = {"clean": "green", "suspicious": "yellow", "detected": "red"}[result.status]
    console.print(
        Panel(
            f"[bold {color}]{result.originality_score}% original ({result.status})[/bold {color}]",
            title="Originality",
        )
    )
    for m in result.matches:
        console.print(f"  - [{m.similarity}] {m.source_title} ({m.source_url})")
        console.print(f"    [dim]{m.segment}[/dim]")


@app.command()
def usage() -> None:
    """Show the prompt counter and this month's usage."""
    config = load_config()
    store = _usage_store(config)
    stats = store.get_monthly_stats()
    console.print(
        Panel(
            f"Prompts (all time): {store.prompt_count()}\n"
            f"Runs: {stats['total_runs']} | Success: {stats['success_rate']:.0f}%\n"
            f"Tokens: {stats['total_input_tokens']} in / {stats['total_output_tokens']} out | "
            f"Searches: {stats['total_searches']}\n"
            f"Estimated cost: ${stats['total_cost_usd']:.4f}",
            title=f"Usage {stats['month']}",
        )
    )


if __name__ == "__main__":
    app()
