"""
Command-line interface for the frame pipeline.
Provides commands for publishing, exporting and inspecting sprite frames.
"""

import os
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import PipelineConfig, ENV_PREFIX
from .catalog import NecroDancerCatalog, DataPaths, CatalogError, ItemEntity, EnemyEntity
from .processing import FrameSetBuilder, FrameExtractor, MultiScaleResizer, ProcessingError
from .publishing import create_publisher, LocalDirectoryPublisher, PublishError
from .pipeline import ImagePipeline, PipelineError, RunSummary

# Initialize typer app and rich console
app = typer.Typer(
    name="crypt-images",
    help="Sprite frame pipeline - Slice sprite sheets into sized frames and publish them",
    add_completion=False,
    rich_markup_mode="rich",
    epilog="""
[bold]Examples:[/bold]
  [cyan]crypt-images run ./data https://account.blob.core.windows.net/crypt?sv=...[/cyan]
  [cyan]crypt-images run ./data ./out[/cyan]                          Publish into a local directory
  [cyan]crypt-images frames bat.png --frames 4 --name bat --category enemies[/cyan]
  [cyan]CRYPT_IMAGES_PUBLISH_WORKERS=8 crypt-images run ./data ./out[/cyan]

[bold]Environment Variables:[/bold]
  Use [cyan]crypt-images config --env-vars[/cyan] to see all available variables.
    """
)
console = Console()


@app.command()
def run(
    data_dir: Path = typer.Argument(..., help="Game data directory containing the catalog"),
    store_url: str = typer.Argument(..., help="Container URL or local output directory"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Concurrent uploads"),
    keep_going: bool = typer.Option(False, "--keep-going", help="Publish healthy entities when some fail")
):
    """Slice every catalog entity and publish all frame variants."""
    try:
        config = _load_config(config_file)
    except (ValueError, OSError) as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(1)

    config.data_dir = str(data_dir)
    config.store_url = store_url
    if workers is not None:
        config.max_publish_workers = workers
    if keep_going:
        config.fail_fast = False

    errors = config.validate()
    if errors:
        console.print("[red]Configuration validation errors:[/red]")
        for error in errors:
            console.print(f"  • {error}")
        raise typer.Exit(1)

    console.print(f"[bold blue]Publishing frames from {data_dir} to {store_url}...[/bold blue]")

    try:
        catalog = NecroDancerCatalog(DataPaths(Path(config.data_dir), config.catalog_file))
        publisher = create_publisher(
            config.store_url,
            timeout=config.request_timeout,
            pool_size=config.max_publish_workers,
            public_access=config.container_public_access,
        )
    except (CatalogError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        summary = ImagePipeline(config, catalog, publisher).run()
    except PipelineError as e:
        console.print(f"[red]Pipeline failed:[/red] {e}")
        if e.summary is not None:
            _display_run_summary(e.summary)
        raise typer.Exit(1)
    except (CatalogError, PublishError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        publisher.close()

    _display_run_summary(summary)
    console.print(f"[green]✓[/green] Published {summary.variants_published} variants")


@app.command()
def frames(
    sheet: Path = typer.Argument(..., help="Sprite sheet image"),
    frame_count: int = typer.Option(1, "--frames", "-n", help="Frames per row"),
    name: Optional[str] = typer.Option(None, "--name", help="Entity name (defaults to the file stem)"),
    category: str = typer.Option("items", "--category", help="items or enemies"),
    enemy_type: str = typer.Option("", "--type", help="Enemy type qualifier"),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Write variants to this directory")
):
    """Slice a single sprite sheet and list (or write) its variants."""
    if category not in ("items", "enemies"):
        console.print(f"[red]Unknown category:[/red] {category}")
        raise typer.Exit(1)

    entity_name = name or sheet.stem
    if category == "enemies":
        entity = EnemyEntity(entity_name, sheet, frame_count, enemy_type)
    else:
        entity = ItemEntity(entity_name, sheet, frame_count)

    config = PipelineConfig.default()
    builder = FrameSetBuilder(
        FrameExtractor(config.compression_level),
        MultiScaleResizer(config.compression_level),
    )

    try:
        variants = builder.build(entity)
    except ProcessingError as e:
        console.print(f"[red]Cannot slice {sheet}:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"Frames for {entity.base_name}")
    table.add_column("Name", style="cyan")
    table.add_column("Frame", style="yellow")
    table.add_column("Size", style="yellow")
    table.add_column("Bytes", style="green")
    for variant in variants:
        table.add_row(variant.name, str(variant.frame_index), variant.size_tag, str(len(variant.data)))
    console.print(table)

    if output_dir is not None:
        publisher = LocalDirectoryPublisher(output_dir)
        publisher.ensure_container()
        try:
            for variant in variants:
                publisher.put(variant.name, variant.data)
        except PublishError as e:
            console.print(f"[red]Cannot write variants:[/red] {e}")
            raise typer.Exit(1)
        console.print(f"[green]✓[/green] Wrote {len(variants)} variants to {output_dir}")


@app.command()
def catalog(
    data_dir: Path = typer.Argument(..., help="Game data directory containing the catalog"),
    catalog_file: str = typer.Option("necrodancer.xml", "--catalog", help="Catalog file name")
):
    """List the entities the catalog supplies."""
    try:
        adapter = NecroDancerCatalog(DataPaths(data_dir, catalog_file))
        entities = adapter.get_entities()
    except CatalogError as e:
        console.print(f"[red]Catalog error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"Catalog ({len(entities)} entities)")
    table.add_column("Base Name", style="cyan")
    table.add_column("Frames", style="yellow")
    table.add_column("Sheet", style="dim")
    table.add_column("Exists", width=6)
    for entity in entities:
        exists = "[green]✓[/green]" if Path(entity.sheet_path).exists() else "[red]✗[/red]"
        table.add_row(entity.base_name, str(entity.frame_count), str(entity.sheet_path), exists)
    console.print(table)


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    validate_config: bool = typer.Option(False, "--validate", help="Validate configuration file"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file path"),
    env_vars: bool = typer.Option(False, "--env-vars", help="Show available environment variables")
):
    """Manage pipeline configuration."""
    if env_vars:
        _display_env_vars()
        return

    if not (show or validate_config):
        console.print("Use --show to display configuration, --validate to check it, or --env-vars to see environment variables.")
        return

    try:
        pipeline_config = _load_config(config_file)
    except (ValueError, OSError) as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(1)

    if show:
        _display_config(pipeline_config)

    if validate_config:
        errors = pipeline_config.validate()
        if errors:
            console.print("[red]Configuration validation errors:[/red]")
            for error in errors:
                console.print(f"  • {error}")
            raise typer.Exit(1)
        console.print("[green]✓ Configuration is valid[/green]")


@app.command()
def version():
    """Show version information."""
    console.print(f"crypt-images [bold]{__version__}[/bold]")


def _load_config(config_file: Optional[Path]) -> PipelineConfig:
    """Load configuration from file or use defaults with environment variable support."""
    config = None

    if config_file:
        if not config_file.exists():
            console.print(f"[red]Configuration file not found:[/red] {config_file}")
            raise typer.Exit(1)
        config = PipelineConfig.from_file(config_file)
        console.print(f"[dim]Using configuration: {config_file}[/dim]")
    else:
        for config_path in (Path("crypt_images.toml"), Path("crypt_images.json")):
            if config_path.exists():
                console.print(f"[dim]Using configuration: {config_path}[/dim]")
                config = PipelineConfig.from_file(config_path)
                break

        if config is None:
            console.print("[dim]Using default configuration[/dim]")
            config = PipelineConfig()

    config = PipelineConfig._apply_env_overrides(config)

    env_vars_used = [key for key in os.environ if key.startswith(ENV_PREFIX)]
    if env_vars_used:
        console.print(f"[dim]Environment overrides applied: {len(env_vars_used)} variables[/dim]")

    return config


def _display_run_summary(summary: RunSummary) -> None:
    """Display pipeline run summary."""
    console.print("\n[bold]Run Summary[/bold]")

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Total execution time", f"{summary.duration:.2f}s")
    table.add_row("Entities", str(summary.entities_total))
    table.add_row("Entities built", str(summary.entities_built))
    table.add_row("Variants published", str(summary.variants_published))
    console.print(table)

    if summary.failed_entities:
        failed = Table(title="Failed Entities")
        failed.add_column("Entity", style="cyan")
        failed.add_column("Error", style="red")
        for base_name, error in summary.failed_entities.items():
            failed.add_row(base_name, error)
        console.print(failed)


def _display_config(config: PipelineConfig) -> None:
    """Display configuration in a formatted table."""
    table = Table(title="Frame Pipeline Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Data Directory", config.data_dir)
    table.add_row("Catalog File", config.catalog_file)
    table.add_row("Store URL", config.store_url or "-")
    table.add_row("Create Container", str(config.create_container))
    table.add_row("Public Access", str(config.container_public_access))
    table.add_row("Content Type", config.content_type)
    table.add_row("Cache Control", config.cache_control)
    table.add_row("Request Timeout", f"{config.request_timeout}s")
    table.add_row("Compression Level", str(config.compression_level))
    table.add_row("Fail Fast", str(config.fail_fast))
    table.add_row("Build Workers", str(config.max_build_workers))
    table.add_row("Publish Workers", str(config.max_publish_workers))
    table.add_row("Log Level", config.log_level)

    console.print(table)


def _display_env_vars() -> None:
    """Display available environment variables for configuration."""
    table = Table(title="Frame Pipeline Environment Variables")
    table.add_column("Environment Variable", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Example", style="green")

    env_vars = [
        ("CRYPT_IMAGES_DATA_DIR", "Game data directory", "data"),
        ("CRYPT_IMAGES_CATALOG_FILE", "Catalog file name", "necrodancer.xml"),
        ("CRYPT_IMAGES_STORE_URL", "Container URL or output directory", "https://account.blob.core.windows.net/crypt"),
        ("CRYPT_IMAGES_CREATE_CONTAINER", "Create the container first (true/false)", "true"),
        ("CRYPT_IMAGES_CACHE_CONTROL", "Cache-Control for published blobs", "max-age=604800"),
        ("CRYPT_IMAGES_REQUEST_TIMEOUT", "Upload timeout in seconds", "30"),
        ("CRYPT_IMAGES_COMPRESSION_LEVEL", "PNG compression level (0-9)", "6"),
        ("CRYPT_IMAGES_FAIL_FAST", "Abort before publishing on entity errors (true/false)", "true"),
        ("CRYPT_IMAGES_BUILD_WORKERS", "Concurrent frame set builds", "4"),
        ("CRYPT_IMAGES_PUBLISH_WORKERS", "Concurrent uploads", "16"),
        ("CRYPT_IMAGES_LOG_LEVEL", "Log level", "INFO"),
    ]

    for var_name, description, example in env_vars:
        table.add_row(var_name, description, example)

    console.print(table)
    console.print("\n[dim]Set these environment variables to override configuration file settings.[/dim]")


if __name__ == "__main__":
    app()
