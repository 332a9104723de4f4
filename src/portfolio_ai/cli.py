"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from portfolio_ai.clients.llm_client import LLMClient
from portfolio_ai.config import AppConfig, load_config
from portfolio_ai.errors import ConfigurationError, GenerationError
from portfolio_ai.parsers.input_parser import load_data_file, load_jd_file, load_list_file
from portfolio_ai.pipeline.post_linker import PostLinker, build_post_links_prompt
from portfolio_ai.pipeline.resume_generator import ResumeGenerator
from portfolio_ai.usage import calculate_cost

app = typer.Typer(
    name="portfolio-ai",
    help="AI-assisted resume content and post linking for portfolio sites",
    no_args_is_help=True,
)
console = Console()

_state = {"verbose": False}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and token usage"),
) -> None:
    _state["verbose"] = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _require_file(path: Path, what: str) -> None:
    if not path.exists():
        console.print(f"[red]{what} not found: {path}[/red]")
        raise typer.Exit(1)


def _load(what: str, loader, *args):
    """Run an input loader, turning unreadable or malformed files into exit 1."""
    try:
        return loader(*args)
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid {what}: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _setup(config_path: Path | None) -> tuple[AppConfig, LLMClient]:
    try:
        app_config = load_config(config_path)
        return app_config, LLMClient.from_config(app_config)
    except (ConfigurationError, yaml.YAMLError) as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _run(coro):
    try:
        return asyncio.run(coro)
    except (GenerationError, ValueError) as e:
        console.print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _print_usage(llm: LLMClient) -> None:
    if not _state["verbose"]:
        return
    summary = llm.get_token_summary()
    console.print(
        f"[dim]Tokens: {summary['input']} in / {summary['output']} out, "
        f"~${calculate_cost(summary['calls']):.4f}[/dim]"
    )


def _write_or_print(payload, output: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        console.print_json(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]Saved: {output}[/green]")


@app.command()
def resume(
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    profile: Path = typer.Option(..., "--profile", help="User profile (YAML or JSON)"),
    projects: Path = typer.Option(None, "--projects", help="Selected projects (YAML or JSON list)"),
    size: str = typer.Option(None, "--size", "-s", help="small | medium | large"),
    output: Path = typer.Option(None, "--output", "-o", help="Write result JSON here"),
    config: Path = typer.Option(None, "--config", help="config.yaml path"),
) -> None:
    """Generate a tailored summary and project descriptions."""
    _require_file(jd, "Job description file")
    _require_file(profile, "Profile file")
    if projects is not None:
        _require_file(projects, "Projects file")

    jd_text = _load("job description file", load_jd_file, str(jd))
    user_profile = _load("profile file", load_data_file, str(profile))
    selected = _load("projects file", load_list_file, str(projects), "projects") if projects else []

    app_config, llm = _setup(config)
    generator = ResumeGenerator(llm, default_size=app_config.generation.default_size)

    with console.status("Generating resume content..."):
        result = _run(generator.generate(jd_text, user_profile, selected, size))

    _write_or_print(result.model_dump(), output)
    _print_usage(llm)


@app.command()
def improve(
    text: str = typer.Argument(help="Resume text to improve"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    context: str = typer.Option("", "--context", "-c", help="Extra context, e.g. project title"),
    size: str = typer.Option(None, "--size", "-s", help="small | medium | large"),
    config: Path = typer.Option(None, "--config", help="config.yaml path"),
) -> None:
    """Rewrite one resume item for a job description."""
    _require_file(jd, "Job description file")
    jd_text = _load("job description file", load_jd_file, str(jd))
    app_config, llm = _setup(config)
    generator = ResumeGenerator(llm, default_size=app_config.generation.default_size)

    with console.status("Improving text..."):
        improved = _run(generator.improve_text(text, jd_text, context, size))

    console.print(Panel(improved, title="Improved text"))
    _print_usage(llm)


@app.command()
def links(
    posts: Path = typer.Argument(help="Posts (YAML or JSON list, or {posts: [...]})"),
    output: Path = typer.Option(None, "--output", "-o", help="Write links JSON here"),
    config: Path = typer.Option(None, "--config", help="config.yaml path"),
) -> None:
    """Propose links between portfolio posts."""
    _require_file(posts, "Posts file")
    post_list = _load("posts file", load_list_file, str(posts), "posts")
    app_config, llm = _setup(config)
    linker = PostLinker(llm, excerpt_chars=app_config.generation.link_excerpt_chars)

    with console.status("Proposing links..."):
        proposals = _run(linker.propose_links(post_list))

    if output is not None:
        _write_or_print({"links": [p.to_wire() for p in proposals]}, output)
    elif not proposals:
        console.print("[yellow]No links proposed.[/yellow]")
    else:
        table = Table(title=f"Proposed links ({len(proposals)})")
        table.add_column("Source")
        table.add_column("Type")
        table.add_column("Target")
        table.add_column("Reason")
        for p in proposals:
            table.add_row(p.source_id, p.link_type.value, p.target_id, p.reason)
        console.print(table)
    _print_usage(llm)


@app.command("prompt-links")
def prompt_links(
    posts: Path = typer.Argument(help="Posts (YAML or JSON list, or {posts: [...]})"),
    config: Path = typer.Option(None, "--config", help="config.yaml path"),
) -> None:
    """Print the link prompt without calling the model."""
    _require_file(posts, "Posts file")
    post_list = _load("posts file", load_list_file, str(posts), "posts")
    app_config = _load("config file", load_config, config)
    prompt = _load(
        "posts file",
        build_post_links_prompt,
        post_list,
        app_config.generation.link_excerpt_chars,
    )
    console.print(prompt, markup=False, highlight=False)


if __name__ == "__main__":
    app()
