"""``boxcloud publish TAG VERSION`` — publish a local .box to the registry.

Reads the access token from ``--token``, ``VAGRANT_CLOUD_TOKEN`` or the
legacy ``ATLAS_TOKEN``.  Ctrl-C requests a cooperative cancel: the step in
flight finishes, no further step starts.
"""

from __future__ import annotations

import logging
import signal
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from boxcloud.config import BoxCloudSettings, load_publish_config
from boxcloud.core.publisher import BoxPublisher
from boxcloud.errors import BoxCloudError, ConfigurationError, PublishCancelledError
from boxcloud.models.artifacts import LocalBoxArtifact
from boxcloud.ui import ConsoleUi

console = Console()
logger = logging.getLogger(__name__)


def publish_cmd(
    box_tag: str = typer.Argument(..., help="Box tag in the form namespace/name."),
    version: str = typer.Argument(..., help="Version to create or update."),
    artifact: str = typer.Option(
        ..., "--artifact", "-a", help="Path to the local .box file."
    ),
    provider: str = typer.Option(
        ..., "--provider", "-p", help="Provider name, e.g. virtualbox."
    ),
    description: str = typer.Option(
        "", "--description", "-d", help="Version description (markdown)."
    ),
    no_release: bool = typer.Option(
        False, "--no-release", help="Leave the version unreleased."
    ),
    box_download_url: str = typer.Option(
        "",
        "--box-download-url",
        help="Self-hosted download URL; may use {artifact_id} and {provider}.",
    ),
    token: Optional[str] = typer.Option(
        None, "--token", help="Registry access token.", show_default=False
    ),
    url: Optional[str] = typer.Option(
        None, "--url", help="Registry API base URL."
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (defaults to BOXCLOUD_LOG_LEVEL)."
    ),
) -> None:
    """Publish a box version: create version, attach provider, upload, release."""
    settings = BoxCloudSettings()
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config, resolved = load_publish_config(
            box_tag=box_tag,
            version=version,
            provider=provider,
            artifact=artifact,
            version_description=description,
            no_release=no_release,
            access_token=token,
            vagrant_cloud_url=url,
            box_download_url=box_download_url,
            settings=settings,
        )
    except ConfigurationError as exc:
        console.print("[bold red]Invalid configuration:[/bold red]")
        for problem in exc.problems:
            console.print(f"  [red]- {problem}[/red]")
        raise typer.Exit(code=1)

    publisher = BoxPublisher(
        config,
        warn_atlas_token=resolved.warn_atlas_token,
        timeout=settings.request_timeout,
    )

    def _on_interrupt(signum, frame) -> None:
        console.print("[yellow]Interrupt received, stopping after the current step...[/yellow]")
        publisher.cancel()

    ui = ConsoleUi(console)
    previous = signal.signal(signal.SIGINT, _on_interrupt)
    try:
        result = publisher.publish(ui, LocalBoxArtifact.from_path(config.artifact))
    except PublishCancelledError as exc:
        console.print(f"[bold yellow]Cancelled:[/bold yellow] {exc}")
        raise typer.Exit(code=130)
    except BoxCloudError as exc:
        ui.error(f"Publish failed: {exc}")
        raise typer.Exit(code=1)
    finally:
        signal.signal(signal.SIGINT, previous)

    console.print()
    console.print(
        Panel(
            "\n".join([
                "[bold green]Publish complete![/bold green]",
                "",
                f"[bold]Box:[/bold]      {result.box_tag}",
                f"[bold]Version:[/bold]  {config.version}",
                f"[bold]Provider:[/bold] {result.provider_name}",
                f"[bold]Released:[/bold] {'no' if config.no_release else 'yes'}",
            ]),
            title="[bold]Vagrant Cloud[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
