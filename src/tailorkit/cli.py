"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tailorkit.clients.ollama_client import OllamaClient
from tailorkit.config import AppConfig, load_config
from tailorkit.errors import TailorError
from tailorkit.export.pdf_renderer import (
    render_cover_letter_pdf,
    render_resume_pdf,
    safe_filename,
)
from tailorkit.parsers.resume_loader import load_base_resume
from tailorkit.pipeline.service import TailorService

app = typer.Typer(
    name="tailorkit",
    help="Tailor a base resume and draft cover letters with a local Ollama model",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read_jd(jd: Path) -> str:
    if not jd.exists():
        console.print(f"[red]Job description file not found: {jd}[/red]")
        raise typer.Exit(1)
    return jd.read_text(encoding="utf-8")


def _config(config_path: Path | None, resume: Path | None) -> AppConfig:
    config = load_config(config_path)
    if resume is not None:
        config = replace(config, resume=replace(config.resume, path=str(resume)))
    return config


async def _run(config: AppConfig, method: str, request: dict):
    async with OllamaClient(
        base_url=config.ollama.base_url,
        model=config.ollama.model,
        timeout=config.ollama.timeout,
    ) as llm:
        service = TailorService(llm, config)
        return await getattr(service, method)(request)


@app.command()
def tailor(
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    company: str = typer.Option(None, "--company", "-c", help="Company name"),
    resume: Path = typer.Option(None, "--resume", help="Base resume JSON (defaults to config)"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file (.pdf or .json)"),
    config_path: Path = typer.Option(None, "--config", help="config.yaml path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Tailor the base resume to a job description."""
    _setup_logging(verbose)
    config = _config(config_path, resume)
    jd_text = _read_jd(jd)

    with console.status(f"Tailoring resume with {config.ollama.model}..."):
        try:
            result = asyncio.run(_run(config, "tailor", {"jobDescription": jd_text, "companyName": company}))
        except TailorError as e:
            console.print(f"[red]{e.detail}[/red]")
            raise typer.Exit(1)

    if output is None:
        output = Path("./output") / safe_filename("Resume_for", company)
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() == ".json":
        output.write_text(result.model_dump_json(indent=2, exclude={"metadata"}), encoding="utf-8")
    else:
        output.write_bytes(render_resume_pdf(result))
    console.print(f"\n[green]Resume saved: {output}[/green]")

    sources = result.metadata.get("sources", {})
    table = Table(title="Field sources")
    table.add_column("Field")
    table.add_column("Source")
    table.add_row("summary", sources.get("summary", "-"))
    for entry, source in zip(result.experience, sources.get("experience", [])):
        table.add_row(f"experience: {entry.company}", source)
    for entry, source in zip(result.projects, sources.get("projects", [])):
        table.add_row(f"project: {entry.title}", source)
    console.print(table)

    if result.metadata.get("parse_failures"):
        console.print("\n[yellow]Some model output could not be parsed; original content was kept.[/yellow]")
    console.print(
        f"[dim]tokens: {result.metadata.get('input_tokens', 0)} in / "
        f"{result.metadata.get('output_tokens', 0)} out, "
        f"{result.metadata.get('elapsed_seconds', 0):.1f}s[/dim]"
    )


@app.command("cover-letter")
def cover_letter(
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    company: str = typer.Option(None, "--company", "-c", help="Company name"),
    resume: Path = typer.Option(None, "--resume", help="Base resume JSON (defaults to config)"),
    output: Path = typer.Option(None, "--output", "-o", help="Output file (.pdf or .txt)"),
    config_path: Path = typer.Option(None, "--config", help="config.yaml path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Draft a cover letter for a job description."""
    _setup_logging(verbose)
    config = _config(config_path, resume)
    jd_text = _read_jd(jd)

    with console.status("Writing cover letter..."):
        try:
            letter = asyncio.run(_run(config, "cover_letter", {"jobDescription": jd_text, "companyName": company}))
        except TailorError as e:
            console.print(f"[red]{e.detail}[/red]")
            raise typer.Exit(1)

    console.print(Panel(letter.body, title=f"Cover Letter for {company}" if company else "Cover Letter"))

    if output is None:
        output = Path("./output") / safe_filename("cover_letter_for", company)
    output.parent.mkdir(parents=True, exist_ok=True)
    if output.suffix.lower() == ".txt":
        output.write_text(letter.body, encoding="utf-8")
    else:
        output.write_bytes(render_cover_letter_pdf(letter.body, company))
    console.print(f"[green]Cover letter saved: {output}[/green]")


@app.command("show-resume")
def show_resume(
    resume: Path = typer.Option(None, "--resume", help="Base resume JSON (defaults to config)"),
    config_path: Path = typer.Option(None, "--config", help="config.yaml path"),
) -> None:
    """Validate and print the base resume."""
    config = _config(config_path, resume)
    try:
        base = load_base_resume(config.resume.resolved_path)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print_json(json.dumps(base.model_dump(), ensure_ascii=False))


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Port"),
) -> None:
    """Serve the JSON API (/api/tailor, /api/coverletter)."""
    import uvicorn

    uvicorn.run("tailorkit.api:app", host=host, port=port)


if __name__ == "__main__":
    app()
