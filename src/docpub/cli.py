"""CLI for docpub.

Commands:
- attach: Upload files as inline attachments of an article
- access-policy: Set who can view/manage a section
- call: Invoke any Help Center operation and print the JSON result
"""

from __future__ import annotations

import json
from concurrent.futures import Future
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol, cast

import typer
from rich import print as rprint
from rich import print_json
from tqdm import tqdm

from . import __version__
from .access_policy import set_section_access_policy
from .client import HelpCenterClient
from .config import ZendeskConfig
from .exceptions import ConfigurationError, HelpCenterApiError, InvalidMetadataError
from .infrastructure.endpoints import EndpointArgumentsError
from .observability import set_log_level
from .types import ArticleAttachment


class ClientBuilder(Protocol):
    """Protocol for constructing the Help Center client used by commands."""

    def __call__(self, config: ZendeskConfig) -> HelpCenterClient:
        """Build a client for `config`."""
        ...


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    client_builder: ClientBuilder
    dotenv_path: str | None = None

    def build_client(self) -> HelpCenterClient:
        """Load configuration from the environment and build a client."""
        try:
            config = ZendeskConfig.from_env(self.dotenv_path)
        except (ConfigurationError, ValueError) as exc:
            rprint(f"[red]✗ Configuration error:[/red] {exc}")
            raise typer.Exit(code=1) from exc
        return self.client_builder(config)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the docpub entry point.")


class UnknownResourceError(typer.BadParameter):
    """Raised when `call` names a resource or operation the client does not expose."""

    def __init__(self, resource: str, operation: str) -> None:
        super().__init__(f"Unknown operation: {resource}.{operation}")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _parse_argument(value: str) -> object:
    """Decode JSON arguments (ids, payloads); anything else stays a string."""
    try:
        return json.loads(value)
    except ValueError:
        return value


def _content_url(record: object) -> str | None:
    if not isinstance(record, dict):
        return None
    attachment = cast(ArticleAttachment, record)
    return attachment.get("content_url")


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"docpub {__version__}")
        raise typer.Exit()


def _await(future: Future[object]) -> object:
    try:
        return future.result()
    except HelpCenterApiError as exc:
        rprint(f"[red]✗ {exc}[/red]")
        if exc.body:
            rprint(f"  {exc.body}")
        raise typer.Exit(code=1) from exc


def create_app(client_builder: ClientBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided client builder."""
    app = typer.Typer(
        add_completion=False,
        help="Publish documentation to a Zendesk Help Center.",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        env_file: Annotated[
            str | None,
            typer.Option("--env-file", help="Path to a .env file with Zendesk credentials"),
        ] = None,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", "-v", help="Enable debug logging"),
        ] = False,
        quiet: Annotated[
            bool,
            typer.Option("--quiet", "-q", help="Only log errors"),
        ] = False,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the docpub version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        if verbose and quiet:
            raise typer.BadParameter("--verbose and --quiet are mutually exclusive")
        if verbose:
            set_log_level("DEBUG")
        elif quiet:
            set_log_level("ERROR")
        ctx.obj = CliContext(client_builder=client_builder, dotenv_path=env_file)

    @app.command()
    def attach(
        ctx: typer.Context,
        article_id: Annotated[int, typer.Argument(help="Article to attach the files to")],
        files: Annotated[
            list[Path],
            typer.Argument(exists=True, dir_okay=False, help="Files to upload"),
        ],
    ) -> None:
        """Upload files as inline attachments of an article."""
        state = _get_context(ctx)
        failures = 0
        with state.build_client() as client:
            uploads = [(path, client.articleattachments.create(article_id, path)) for path in files]
            for path, future in tqdm(uploads, total=len(uploads), desc="Uploading attachments"):
                try:
                    record = future.result()
                except HelpCenterApiError as exc:
                    failures += 1
                    rprint(f"[red]✗ {path}:[/red] {exc}")
                    continue
                url = _content_url(record)
                rprint(f"[green]✓ Uploaded:[/green] {path} → {url or '(no attachment record)'}")
        if failures:
            rprint(f"[red]{failures} of {len(files)} uploads failed[/red]")
            raise typer.Exit(code=1)

    @app.command(name="access-policy")
    def access_policy(
        ctx: typer.Context,
        section_id: Annotated[int, typer.Argument(help="Section to update")],
        viewable_by: Annotated[
            str | None,
            typer.Option("--viewable-by", help="everybody, signed_in_users or staff"),
        ] = None,
        manageable_by: Annotated[
            str | None,
            typer.Option("--manageable-by", help="staff or managers"),
        ] = None,
    ) -> None:
        """Set a section's access policy."""
        state = _get_context(ctx)
        access: dict[str, str] = {}
        if viewable_by is not None:
            access["viewableBy"] = viewable_by
        if manageable_by is not None:
            access["manageableBy"] = manageable_by

        with state.build_client() as client:
            try:
                future = set_section_access_policy(section_id, {"access": access}, client)
            except InvalidMetadataError as exc:
                raise typer.BadParameter(str(exc)) from exc
            result = _await(future)

        if result is None:
            rprint("[yellow]No access policy values supplied; nothing updated[/yellow]")
            return
        rprint(f"[green]✓ Access policy updated for section {section_id}[/green]")
        print_json(data=result)

    @app.command()
    def call(
        ctx: typer.Context,
        resource: Annotated[str, typer.Argument(help="Resource kind, e.g. articles")],
        operation: Annotated[str, typer.Argument(help="Operation name, e.g. show")],
        args: Annotated[
            list[str] | None,
            typer.Argument(help="Positional arguments; JSON values are decoded"),
        ] = None,
    ) -> None:
        """Invoke any Help Center operation and print the JSON result."""
        state = _get_context(ctx)
        with state.build_client() as client:
            operations = client.surface.get(resource)
            if operations is None or operation not in operations:
                raise UnknownResourceError(resource, operation)
            parsed = [_parse_argument(value) for value in args or []]
            try:
                result = _await(operations[operation](*parsed))
            except EndpointArgumentsError as exc:
                raise typer.BadParameter(str(exc)) from exc
        if result is None:
            rprint("[green]✓ Done (empty response)[/green]")
            return
        print_json(data=result)

    _ = (main, attach, access_policy, call)

    return app
