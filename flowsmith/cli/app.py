"""Main Typer application — inspect creators and try creation calls.

Entry point: ``flowsmith`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from flowsmith.config import config
from flowsmith.core.dispatcher import CreationDispatcher, creator_name
from flowsmith.core.factory import CreationFailed, Factory
from flowsmith.models.requests import RequestKind
from flowsmith.plugins.loader import CreatorLoader, CreatorLoadError, build_dispatcher

console = Console()

app = typer.Typer(
    name="flowsmith",
    help="Flowsmith: event-dispatched workflow artifact factory.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)
create_app = typer.Typer(
    help="Broadcast a creation request and print the result.",
    no_args_is_help=True,
)
app.add_typer(create_app, name="create")

CreatorOption = typer.Option(
    None,
    "--creator",
    "-c",
    help="Extra creator as kind=module:attr (repeatable).",
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        config.log_level, "--log-level", help="Logging level."
    ),
) -> None:
    """Flowsmith command line."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        console.print(f"[red]Unknown log level:[/red] {log_level}")
        raise typer.Exit(code=2)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _dispatcher(extra: list[str] | None) -> CreationDispatcher:
    try:
        dispatcher = build_dispatcher(config)
        CreatorLoader(dispatcher).load_all(extra or [])
    except CreatorLoadError as exc:
        console.print(f"[red]Creator load error:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    return dispatcher


def _render(result: Any) -> str:
    if isinstance(result, BaseModel):
        return result.model_dump_json(indent=2)
    return repr(result)


def _run(creation: Any) -> None:
    try:
        result = creation()
    except CreationFailed as exc:
        console.print(f"[red]Creation failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(_render(result), highlight=False, markup=False)


@app.command(name="creators", help="List registered creators per request.")
def creators_cmd(creator: Optional[List[str]] = CreatorOption) -> None:
    dispatcher = _dispatcher(creator)

    table = Table(title="Registered Creators")
    table.add_column("Kind", style="cyan")
    table.add_column("Request", style="green")
    table.add_column("Creators")

    for kind in RequestKind:
        names = [creator_name(c, qualified=False) for c in dispatcher.creators_for(kind)]
        table.add_row(kind.alias, kind.value, "\n".join(names) or "[dim]none[/dim]")

    console.print(table)


@create_app.command(name="manager", help="Create a workflow manager.")
def create_manager_cmd(
    provider_name: str = typer.Argument(..., help="Provider name, e.g. a table name."),
    workflow_type: Optional[str] = typer.Option(
        None, "--type", "-t", help="Optional workflow type limitation."
    ),
    creator: Optional[List[str]] = CreatorOption,
) -> None:
    factory = Factory(_dispatcher(creator))
    _run(lambda: factory.create_manager(provider_name, workflow_type))


@create_app.command(name="entity", help="Create a workflow entity for a model.")
def create_entity_cmd(
    provider_name: Optional[str] = typer.Argument(None, help="Provider name hint."),
    model: str = typer.Option("{}", "--model", "-m", help="Model as JSON."),
    creator: Optional[List[str]] = CreatorOption,
) -> None:
    try:
        data = json.loads(model)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid model JSON:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    factory = Factory(_dispatcher(creator))
    _run(lambda: factory.create_entity(data, provider_name))


@create_app.command(name="form", help="Create a form.")
def create_form_cmd(
    form_type: str = typer.Argument(..., help="Form type."),
    creator: Optional[List[str]] = CreatorOption,
) -> None:
    factory = Factory(_dispatcher(creator))
    _run(lambda: factory.create_form(form_type))


@create_app.command(name="user", help="Create the acting user.")
def create_user_cmd(creator: Optional[List[str]] = CreatorOption) -> None:
    factory = Factory(_dispatcher(creator))
    _run(factory.create_user)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
