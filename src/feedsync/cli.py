"""CLI interface for feedsync using Typer."""

import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from typing_extensions import Annotated

from . import __version__
from .core.errors import FeedsyncError
from .main import FeedsyncApp
from .utils.paths import get_project_dir


app = typer.Typer(
    name="feedsync",
    help="Resolve video hosting links into feeds and export them as OPML",
    add_completion=False,
)

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")]


def _load_app(config_file: Optional[Path], verbose: bool = False) -> FeedsyncApp:
    app_instance = FeedsyncApp(config_file)
    if verbose:
        app_instance.set_verbose()
    return app_instance


@app.command()
def classify(
    url: Annotated[str, typer.Argument(help="Channel, playlist, user or group link")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the result as JSON")] = False,
    config_file: ConfigOption = None,
) -> None:
    """Resolve a link into provider, link type and item id."""
    try:
        source = _load_app(config_file).classify(url)
    except (FeedsyncError, OSError) as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(source.model_dump(mode="json"), indent=2))
    else:
        typer.echo(f"Provider:  {source.provider.value}")
        typer.echo(f"Link type: {source.link_type.value}")
        typer.echo(f"Item id:   {source.item_id}")


@app.command()
def add(
    feed_id: Annotated[str, typer.Argument(help="Identifier to store the feed under")],
    url: Annotated[str, typer.Argument(help="Channel, playlist, user or group link")],
    title: Annotated[str, typer.Option("--title", "-t", help="Feed title")] = "",
    description: Annotated[str, typer.Option("--description", "-d", help="Feed description")] = "",
    config_file: ConfigOption = None,
) -> None:
    """Classify a link and store it as a feed."""
    try:
        app_instance = _load_app(config_file)
        record = app_instance.register(feed_id, url, title=title, description=description)
    except (FeedsyncError, OSError) as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Added {record.id} ({record.source})")


@app.command()
def remove(
    feed_id: Annotated[str, typer.Argument(help="Feed identifier")],
    config_file: ConfigOption = None,
) -> None:
    """Remove a stored feed."""
    try:
        app_instance = _load_app(config_file)
        removed = app_instance.store.remove_feed(feed_id)
    except (FeedsyncError, OSError) as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    if not removed:
        typer.echo(f"Feed '{feed_id}' not found")
        raise typer.Exit(1)
    typer.echo(f"✓ Removed {feed_id}")


@app.command(name="list")
def list_feeds(
    config_file: ConfigOption = None,
) -> None:
    """List stored feeds."""
    try:
        app_instance = _load_app(config_file)
        records = app_instance.store.list_feeds()
    except (FeedsyncError, OSError) as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    if not records:
        typer.echo("No feeds stored")
        return

    for record in records:
        source = record.source or "unclassified"
        typer.echo(f"{record.id}\t{source}\t{record.title}")


@app.command()
def opml(
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write OPML to this file")] = None,
    timeout: Annotated[Optional[float], typer.Option("--timeout", help="Abort the export after this many seconds")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show detailed output")] = False,
    config_file: ConfigOption = None,
) -> None:
    """Export configured feeds as OPML."""
    try:
        app_instance = _load_app(config_file, verbose=verbose)
        document = app_instance.export_opml(timeout=timeout)
    except (FeedsyncError, OSError) as e:
        typer.echo(f"✗ Error: {e}", err=True)
        raise typer.Exit(1)

    if output is None:
        typer.echo(document, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8")
    typer.echo(f"✓ Wrote {output}")


@app.command()
def config(
    show: Annotated[bool, typer.Option("--show", help="Show current config")] = False,
    example: Annotated[bool, typer.Option("--example", help="Generate example config")] = False,
    config_file: ConfigOption = None,
) -> None:
    """Manage feedsync configuration."""
    if example:
        from .config import create_example_config
        typer.echo(create_example_config())
    elif show:
        try:
            from .config import load_config
            config_obj = load_config(config_file)
            typer.echo(yaml.safe_dump(config_obj.model_dump(mode="json"), default_flow_style=False, indent=2, sort_keys=False))
        except (FeedsyncError, OSError) as e:
            typer.echo(f"✗ Error loading config: {e}", err=True)
            raise typer.Exit(1)
    else:
        typer.echo("Use --show to view config or --example to generate example")


@app.command()
def info(
    config_file: ConfigOption = None,
) -> None:
    """Show version and project information."""
    typer.echo(f"Feedsync v{__version__}")
    typer.echo(f"Data Directory: {get_project_dir()}")

    try:
        info_data = _load_app(config_file).get_info()
    except (FeedsyncError, OSError) as e:
        typer.echo(f"Warning: Could not load application info: {e}")
        return

    typer.echo(f"\nApplication Info:")
    typer.echo(f"  Config file: {info_data.get('config_file', 'N/A')}")
    typer.echo(f"  Feeds file: {info_data.get('feeds_file', 'N/A')}")
    typer.echo(f"  Hostname: {info_data.get('hostname', 'N/A')}")
    typer.echo(f"  Log level: {info_data.get('log_level', 'N/A')}")
    typer.echo(f"  Configured feeds: {info_data.get('total_feeds', 0)}")
    typer.echo(f"  OPML feeds: {info_data.get('opml_feeds', 0)}")
    typer.echo(f"  Stored feeds: {info_data.get('stored_feeds', 0)}")


if __name__ == "__main__":
    app()
