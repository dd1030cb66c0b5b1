from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

from year_pack.constants import SUPPORTED_LANGUAGES
from year_pack.engine import generate_year_pack
from year_pack.errors import ConfigurationError, RecordFormatError
from year_pack.logging_setup import configure_from_settings, get_logger
from year_pack.paths import Paths
from year_pack.prompt import generate_prompt_template
from year_pack.records import load_records
from year_pack.schemas import validate_input
from year_pack.settings import Settings, load_settings
from year_pack.text.sanitizer import sanitize as sanitize_text

console = Console()

app = typer.Typer(help="Sanitized year-in-review packs from chat history.")


def _load_settings(env: str) -> Settings:
    settings = load_settings(env)
    configure_from_settings(settings)
    return settings


@app.callback()
def main(
    ctx: typer.Context,
    env: str = typer.Option(
        "dev", "--env", envvar="YEAR_PACK_ENV", help="Config environment"
    ),
):
    load_dotenv(override=False)
    ctx.ensure_object(dict)
    ctx.obj["ENV"] = env
    ctx.obj["SETTINGS"] = _load_settings(env)


@app.command()
def health(ctx: typer.Context):
    settings = ctx.obj["SETTINGS"]
    console.print(
        {
            "ok": True,
            "env": ctx.obj["ENV"],
            "reports": str(Paths.reports()),
            "log_level": settings.logging.level,
        }
    )


@app.command()
def sanitize(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text to sanitize"),
    max_length: Optional[int] = typer.Option(
        None, "--max-length", min=1, help="Truncation limit (defaults to engine config)"
    ),
):
    """Print TEXT after the full sanitization pipeline."""
    limit = max_length or ctx.obj["SETTINGS"].engine.max_line_chars
    typer.echo(sanitize_text(text, limit))


@app.command()
def build(
    ctx: typer.Context,
    input_path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="JSON or JSONL export"
    ),
    year: Optional[int] = typer.Option(None, "--year", help="Calendar year (default: current)"),
    language: Optional[str] = typer.Option(
        None, "--language", help=f"Report language: {', '.join(SUPPORTED_LANGUAGES)}"
    ),
    workspace: Optional[str] = typer.Option(None, "--workspace", help="Only this workspace"),
    max_samples: Optional[int] = typer.Option(None, "--max-samples"),
    max_sample_length: Optional[int] = typer.Option(None, "--max-sample-length"),
    topics_count: Optional[int] = typer.Option(None, "--topics-count"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible topics"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output JSON path"),
    prompt: bool = typer.Option(True, "--prompt/--no-prompt", help="Also write the prompt template"),
):
    """Build the year pack for INPUT_PATH and write it as JSON."""
    settings: Settings = ctx.obj["SETTINGS"]
    log = get_logger("year_pack.build")

    try:
        config = validate_input(
            {
                "year": year,
                "language": language,
                "workspace": workspace,
                "max_samples": max_samples,
                "max_sample_length": max_sample_length,
                "topics_count": topics_count,
                "seed": seed,
            }
        )
    except ConfigurationError as e:
        for violation in e.violations:
            console.print(f"[red]invalid option[/] {violation}")
        raise typer.Exit(code=2)

    try:
        loaded = load_records(
            input_path, config.year, config.workspace, settings.engine.max_records
        )
    except RecordFormatError as e:
        raise typer.BadParameter(str(e), param_hint="INPUT_PATH")
    result = generate_year_pack(
        loaded.records, config, loaded.session_count, engine=settings.engine
    )
    if result.status == "no_data":
        console.print(f"[yellow]{result.message}[/]")
        raise typer.Exit(code=1)

    year_pack = result.year_pack
    if out is None:
        out = Paths.ensure_reports() / f"year_pack_{config.year}.json"
    if settings.runtime.dry_run:
        log.info("Write skipped", reason="dry-run", out=str(out))
    else:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(year_pack.to_json(), encoding="utf-8")
        log.info("Year pack written", out=str(out))
        if prompt:
            prompt_path = out.with_name(f"{out.stem}_prompt.md")
            prompt_path.write_text(
                generate_prompt_template(year_pack, config.language), encoding="utf-8"
            )
            log.info("Prompt template written", out=str(prompt_path))

    console.print(f"[bold cyan]year-pack[/] {config.year} ({config.language})")
    console.print(f"sessions: {loaded.session_count}")
    console.print(f"questions: {year_pack.stats.total_questions}")
    console.print(f"topics: {len(year_pack.topics)}")
    console.print(f"samples: {len(year_pack.samples.questions)}")
    console.print(f"written: {out}")


if __name__ == "__main__":
    app()
