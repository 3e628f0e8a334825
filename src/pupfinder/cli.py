"""Command-line interface for pupfinder."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from pupfinder.config import CONFIG_DIR_NAME, Config, render_config_toml
from pupfinder.models import Dog
from pupfinder.payload import ParseError, parse_payload_text
from pupfinder.presentation import LEARN_MORE, about_rows, call_to_action, headline, list_row
from pupfinder.sources import PayloadSourceError, make_source
from pupfinder.state import DogsState


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """pupfinder: browse adoptable dogs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _config(path: str | None) -> Config:
    root = Path(path).resolve() if path else None
    return Config.load(root) if root else Config.load_from_cwd()


def _load_state(path: str | None) -> DogsState:
    config = _config(path)
    try:
        with make_source(config) as source:
            state = DogsState(source)
            state.load()
    # ParseError is a ValueError, as are bad [source] settings
    except (ValueError, PayloadSourceError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    return state


# --------------------------------------------------------------------------- #
# Rendering
# --------------------------------------------------------------------------- #

def _render_list(dogs: tuple[Dog, ...]) -> None:
    if not dogs:
        click.echo("No dogs available.")
        return
    click.echo(f"{'ID':>4}  {'Name':<20}  Breed")
    click.echo("-" * 60)
    for dog in dogs:
        name, breed = list_row(dog)
        click.echo(f"{dog.id:>4}  {click.style(f'{name:<20}', bold=True)}  {breed}")


def _render_details(dog: Dog) -> None:
    click.echo(f"\n{'='*60}")
    click.secho(dog.name, bold=True)
    click.echo(dog.breed)
    click.echo(dog.location)
    click.echo("-" * 60)
    click.echo(headline(dog))
    click.echo("-" * 60)
    click.echo(dog.meet)
    click.echo()
    for title, text in about_rows(dog):
        click.echo(f"{click.style(title + ':', bold=True)} {text}")
    click.echo()
    click.echo(call_to_action(dog))
    click.echo(f"[{LEARN_MORE}] {dog.adoption_url}")


# --------------------------------------------------------------------------- #
# init
# --------------------------------------------------------------------------- #

@main.command()
@click.option("--path", default=".", help="Project root directory")
@click.option("--file", "payload_file", default=None, help="Read dogs from this JSON file")
@click.option("--url", default=None, help="Fetch dogs from this URL")
@click.option("--timeout", default=10.0, show_default=True, help="HTTP timeout in seconds")
@click.option("--force", is_flag=True, help="Overwrite an existing config")
def init(path: str, payload_file: str | None, url: str | None, timeout: float, force: bool):
    """Write .pupfinder/config.toml choosing where the dogs come from."""
    if payload_file and url:
        raise click.UsageError("--file and --url are mutually exclusive")

    config_file = Path(path).resolve() / CONFIG_DIR_NAME / "config.toml"
    if config_file.exists() and not force:
        click.echo(f"Config already exists: {config_file} (use --force to replace)")
        return

    if payload_file:
        text = render_config_toml("file", path=payload_file)
    elif url:
        text = render_config_toml("http", url=url, timeout=timeout)
    else:
        text = render_config_toml()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(text)
    click.echo(f"Wrote {config_file}")


# --------------------------------------------------------------------------- #
# list / show / open
# --------------------------------------------------------------------------- #

@main.command("list")
@click.option("--path", default=None, help="Project root (default: auto-detect)")
def list_dogs(path: str | None):
    """List all adoptable dogs."""
    state = _load_state(path)
    _render_list(state.dogs.get())


@main.command()
@click.argument("dog_id", type=int)
@click.option("--path", default=None, help="Project root")
def show(dog_id: int, path: str | None):
    """Show the details of one dog."""
    state = _load_state(path)
    dog = state.select_dog(dog_id)
    if dog is None:
        click.echo(f"Dog {dog_id} not found.", err=True)
        sys.exit(1)
    _render_details(dog)


@main.command("open")
@click.argument("dog_id", type=int)
@click.option("--path", default=None, help="Project root")
def open_page(dog_id: int, path: str | None):
    """Open a dog's adoption page in the browser."""
    state = _load_state(path)
    dog = state.select_dog(dog_id)
    if dog is None:
        click.echo(f"Dog {dog_id} not found.", err=True)
        sys.exit(1)
    click.echo(f"Opening {dog.adoption_url}")
    click.launch(dog.adoption_url)


# --------------------------------------------------------------------------- #
# browse
# --------------------------------------------------------------------------- #

@main.command()
@click.option("--path", default=None, help="Project root")
def browse(path: str | None):
    """Interactively browse the list and open dog details."""
    from pupfinder.navigation import Navigator, Screen

    state = _load_state(path)
    nav = Navigator(state, open_url=click.launch)

    while True:
        if nav.current is Screen.LIST:
            _render_list(state.dogs.get())
            choice = click.prompt("\nDog id (q to quit)", default="q", show_default=False)
            if choice.strip().lower() == "q":
                return
            try:
                dog_id = int(choice)
            except ValueError:
                click.echo(f"Not an id: {choice}")
                continue
            if not nav.activate_row(dog_id):
                click.echo(f"Dog {dog_id} not found.")
        else:
            dog = state.selected_dog.get()
            if dog is not None:
                _render_details(dog)
            choice = click.prompt(
                "\n[o]pen page, [b]ack, [q]uit",
                type=click.Choice(["o", "b", "q"]),
                default="b",
            )
            if choice == "o":
                nav.open_adoption_page()
            elif choice == "b":
                nav.back()
            else:
                return


# --------------------------------------------------------------------------- #
# validate
# --------------------------------------------------------------------------- #

@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(file: Path):
    """Strictly parse a payload file and report problems."""
    try:
        dogs = parse_payload_text(file.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        click.echo(f"Invalid payload: not UTF-8 ({exc.reason} at byte {exc.start})", err=True)
        sys.exit(1)
    except ParseError as exc:
        click.echo(f"Invalid payload: {exc}", err=True)
        sys.exit(1)
    click.echo(f"OK: {len(dogs)} dogs")


# --------------------------------------------------------------------------- #
# serve
# --------------------------------------------------------------------------- #

@main.command()
@click.option("--path", default=None, help="Project root")
def serve(path: str | None):
    """Start the MCP server on stdio."""
    from pupfinder.mcp_server import run_server

    asyncio.run(run_server(_config(path)))
