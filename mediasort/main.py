"""
Point d'entrée CLI de MediaSort.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import scan, sort
from .adapters.cli.helpers import console
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="mediasort",
    help="Tri automatique de fichiers videos (series et films)",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """MediaSort - Tri de series et de films."""
    if quiet:
        state["quiet"] = True
    else:
        state["verbose"] = verbose

    if quiet or verbose:
        _setup_logging(_console_level(get_config().log_level))


app.command()(sort)
app.command()(scan)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


def _console_level(default: str) -> str:
    """Niveau de log console selon les options -v / -q."""
    if state["quiet"]:
        return "ERROR"
    if state["verbose"] >= 2:
        return "TRACE"
    if state["verbose"] == 1:
        return "DEBUG"
    return default


def _setup_logging(log_level: str) -> None:
    settings = get_config()
    configure_logging(
        log_level=log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    console.print("[bold]Configuration MediaSort[/bold]")
    console.print(f"Séries : {config.tv_dir}", highlight=False)
    console.print(f"Films : {config.movie_dir}", highlight=False)
    console.print(f"Extensions : {config.extensions}", highlight=False)
    console.print(f"Concurrence : {config.concurrency}", highlight=False)
    console.print(f"Limite de fichiers : {config.file_limit}", highlight=False)
    console.print(f"Délai de surveillance : {config.watch_delay:g}s", highlight=False)
    console.print(
        f"Surveillance : {'polling' if config.watch_polling else 'native'}",
        highlight=False,
    )
    console.print(
        f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}",
        highlight=False,
    )
    console.print(f"Niveau de log : {config.log_level}", highlight=False)


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    console.print(f"MediaSort v{__version__}", highlight=False)


def main() -> None:
    """Point d'entrée de l'application."""
    settings = get_config()
    _setup_logging(settings.log_level)

    logger.debug("Démarrage de MediaSort", version=__version__)

    app()


if __name__ == "__main__":
    main()
