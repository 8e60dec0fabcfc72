"""
Utilitaires partages pour les commandes CLI de MediaSort.

Ce module fournit :
- console : instance Rich Console partagee
- with_container : decorateur injectant un container initialise
- exit_on_error : conversion des erreurs fatales en code de sortie
- build_sort_config : options CLI superposees aux Settings
"""

from functools import wraps
from pathlib import Path
from typing import Any, Optional

import typer
from dependency_injector import providers
from loguru import logger
from rich.console import Console
from rich.markup import escape

from mediasort.config import Settings
from mediasort.container import Container
from mediasort.core.errors import MediaSortError
from mediasort.core.value_objects import PathConfig, SortConfig

console = Console()


def with_container():
    """
    Decorateur qui injecte un container initialise en premier argument.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            container.console.override(providers.Object(console))
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


def exit_on_error(func):
    """
    Convertit les erreurs fatales en message unique et code de sortie.

    MediaSortError -> message rouge, code 1 ; Ctrl-C -> code 130.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except MediaSortError as e:
            logger.debug("Erreur fatale", error=str(e), error_type=type(e).__name__)
            console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
            raise typer.Exit(code=1) from e
        except KeyboardInterrupt:
            console.print("[yellow]Interrupted[/yellow]")
            raise typer.Exit(code=130)
    return wrapper


def _pick(value: Any, default: Any) -> Any:
    """Option CLI si fournie, sinon valeur des Settings."""
    return default if value is None else value


def build_sort_config(
    settings: Settings,
    targets: list[Path],
    tv_dir: Optional[Path] = None,
    movie_dir: Optional[Path] = None,
    tv_template: Optional[str] = None,
    movie_template: Optional[str] = None,
    extensions: Optional[str] = None,
    concurrency: Optional[int] = None,
    file_limit: Optional[int] = None,
    watch_delay: Optional[float] = None,
    **flags: bool,
) -> SortConfig:
    """
    Construit la SortConfig d'une invocation.

    Les options laissees a None reprennent la valeur des Settings.
    Les drapeaux booleens (recursive, dry_run, ...) sont passes tels quels.

    Raises:
        ConfigError: combinaison d'options invalide
    """
    return SortConfig(
        targets=tuple(targets),
        tv_dir=_pick(tv_dir, settings.tv_dir),
        movie_dir=_pick(movie_dir, settings.movie_dir),
        path_config=PathConfig(
            tv_template=_pick(tv_template, settings.tv_template),
            movie_template=_pick(movie_template, settings.movie_template),
        ),
        extensions=_pick(extensions, settings.extensions),
        concurrency=_pick(concurrency, settings.concurrency),
        file_limit=_pick(file_limit, settings.file_limit),
        watch_delay=_pick(watch_delay, settings.watch_delay),
        **flags,
    )
