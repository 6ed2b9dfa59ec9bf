"""Command-line interface for TransDesk."""

import asyncio
import json
import sys
from pathlib import Path

import click
import httpx

from .core.config import AppConfig
from .core.exceptions import MalformedWirePayloadError, TransDeskError
from .core.logging import setup_logging
from .core.models import EntityKind
from .core.orchestrator import FieldStatus
from .core.persistence import deserialize
from .core.progress import ProgressCalculator
from .core.session import EditorSession
from .core.store import TranslationStore

KIND_CHOICE = click.Choice([kind.value for kind in EntityKind])


def _error(message: str) -> None:
    click.echo(click.style("Error: ", fg="red") + message, err=True)
    sys.exit(1)


def _progress_color(value: int) -> str:
    if value == 100:
        return "green"
    return "yellow" if value > 0 else "red"


@click.group()
@click.version_option(prog_name="transdesk")
@click.option("--log-level", default=None, help="Logging level (default: TRANSDESK_LOG_LEVEL or INFO)")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also log to this file (default: TRANSDESK_LOG_FILE)",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None, log_file: Path | None):
    """TransDesk - keep blog content in sync across languages."""
    try:
        config = AppConfig.from_env()
    except ValueError as e:
        _error(str(e))
    if log_file is None and config.log_file:
        log_file = Path(config.log_file)
    setup_logging(log_level or config.log_level, log_file)
    ctx.obj = config


@main.command()
@click.pass_obj
def languages(config: AppConfig):
    """List the configured languages."""
    catalog = config.catalog
    for lang in catalog:
        marker = click.style(" (default)", fg="cyan") if lang.code == catalog.default else ""
        click.echo(f"  {lang.code:<6} {lang.name}{marker}")


@main.command()
@click.argument("payload_file", type=click.Path(exists=True, path_type=Path))
@click.option("--kind", "-k", type=KIND_CHOICE, default="article", help="Entity kind of the payload")
@click.pass_obj
def progress(config: AppConfig, payload_file: Path, kind: str):
    """Show translation progress of a saved API payload."""
    try:
        with open(payload_file, "r", encoding="utf-8") as f:
            payload = json.load(f)
        loaded = deserialize(payload, kind, default_language=config.default_language)
    except json.JSONDecodeError as e:
        _error(f"{payload_file} is not valid JSON ({e})")
    except MalformedWirePayloadError as e:
        _error(str(e))

    store = TranslationStore(loaded.entity, loaded.translations)
    calculator = ProgressCalculator(store)
    catalog = config.catalog
    codes = [store.default_language] + [c for c in catalog.codes if c != store.default_language]
    codes += [r.language for r in store.translations if r.language not in codes]

    click.echo(f"Translation progress ({kind}):")
    for code, value in calculator.progress_map(codes).items():
        label = f"{code} (default)" if code == store.default_language else code
        click.echo(f"  {label:<14} " + click.style(f"{value:>3}%", fg=_progress_color(value)))

    overall = calculator.overall(c for c in codes if c != store.default_language)
    click.echo(f"  Overall: {overall}%")

    for dropped in loaded.report.dropped:
        detail = f" ({dropped.language})" if dropped.language else ""
        click.echo(
            click.style("Warning: ", fg="yellow")
            + f"dropped translation entry #{dropped.index}{detail}: {dropped.reason}"
        )


@main.command()
@click.argument("entity_id", required=False)
@click.option("--kind", "-k", type=KIND_CHOICE, default="article", help="Entity kind")
@click.option("--source", "-s", default=None, help="Source language (default: default language)")
@click.option("--target", "-t", required=True, help="Target language")
@click.option("--field", "-f", "field_name", default=None, help="Translate one field only")
@click.option("--dry-run", is_flag=True, help="Print the result without saving")
@click.pass_obj
def translate(
    config: AppConfig,
    entity_id: str | None,
    kind: str,
    source: str | None,
    target: str,
    field_name: str | None,
    dry_run: bool,
):
    """Auto-translate an entity through the blog API."""
    if entity_id is None and kind != EntityKind.SITE_SETTINGS.value:
        _error(f"An id is required to translate a {kind}")

    registry = config.build_providers()
    if not registry.is_configured():
        _error("No translation provider configured. Set TRANSDESK_PROVIDER first.")

    async def _run() -> None:
        session = await EditorSession.open(
            kind,
            config.catalog,
            config.build_transport(kind),
            entity_id=entity_id,
            translator=registry.active,
            protect_content=config.protect_content,
        )
        session.binding.select_languages(source=source or session.catalog.default, target=target)
        if field_name:
            session.binding.select_field(field_name)
            results = [await session.translate_active_field()]
        else:
            results = (await session.translate_all()).results

        for result in results:
            color = {"translated": "green", "skipped": "yellow", "failed": "red"}[result.status.value]
            line = f"  {result.field:<16} " + click.style(result.status.value, fg=color)
            if result.error:
                line += f" ({result.error})"
            click.echo(line)

        if dry_run:
            click.echo(json.dumps(session.payload(), indent=2, ensure_ascii=False, default=str))
        elif any(r.status == FieldStatus.TRANSLATED for r in results):
            await session.save()
            click.echo(click.style("Saved.", fg="green"))

    try:
        asyncio.run(_run())
    except httpx.HTTPError as e:
        _error(f"API request failed: {e}")
    except TransDeskError as e:
        _error(str(e))


if __name__ == "__main__":
    main()
