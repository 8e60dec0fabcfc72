"""
Commandes CLI de tri : sort (boucle complete) et scan (decouverte seule).
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from dependency_injector import providers
from rich.markup import escape

from mediasort.adapters.cli.helpers import (
    build_sort_config,
    console,
    exit_on_error,
    with_container,
)

TargetsArgument = Annotated[
    list[Path],
    typer.Argument(help="Fichiers ou repertoires a trier"),
]
ExtensionsOption = Annotated[
    Optional[str],
    typer.Option("--extensions", "-e", help="Extensions autorisees (ex: mp4,avi,mkv)"),
]
FileLimitOption = Annotated[
    Optional[int],
    typer.Option("--file-limit", "-l", help="Nombre maximum de fichiers par passage"),
]
RecursiveOption = Annotated[
    bool,
    typer.Option("--recursive", "-r", help="Parcourir les sous-repertoires"),
]
SkipHiddenOption = Annotated[
    bool,
    typer.Option("--skip-hidden", "-s", help="Ignorer les fichiers et repertoires caches"),
]


@exit_on_error
def sort(
    targets: TargetsArgument,
    tv_dir: Annotated[
        Optional[Path],
        typer.Option("--tv-dir", help="Repertoire de destination des series"),
    ] = None,
    movie_dir: Annotated[
        Optional[Path],
        typer.Option("--movie-dir", help="Repertoire de destination des films"),
    ] = None,
    tv_template: Annotated[
        Optional[str],
        typer.Option("--tv-template", help="Gabarit du chemin des episodes"),
    ] = None,
    movie_template: Annotated[
        Optional[str],
        typer.Option("--movie-template", help="Gabarit du chemin des films"),
    ] = None,
    extensions: ExtensionsOption = None,
    concurrency: Annotated[
        Optional[int],
        typer.Option("--concurrency", "-c", help="Nombre de fichiers tries simultanement"),
    ] = None,
    file_limit: FileLimitOption = None,
    recursive: RecursiveOption = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-d", help="Simule sans modifier les fichiers"),
    ] = False,
    skip_hidden: SkipHiddenOption = False,
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", "-o", help="Ecraser les fichiers existants"),
    ] = False,
    overwrite_if_larger: Annotated[
        bool,
        typer.Option(
            "--overwrite-if-larger",
            help="Ecraser seulement si le nouveau fichier est plus gros",
        ),
    ] = False,
    watch: Annotated[
        bool,
        typer.Option("--watch", "-w", help="Relancer le tri a chaque changement"),
    ] = False,
    watch_delay: Annotated[
        Optional[float],
        typer.Option("--watch-delay", help="Delai (secondes) avant de relancer le tri"),
    ] = None,
) -> None:
    """Trie les fichiers videos vers les repertoires series et films."""
    options = dict(
        tv_dir=tv_dir,
        movie_dir=movie_dir,
        tv_template=tv_template,
        movie_template=movie_template,
        extensions=extensions,
        concurrency=concurrency,
        file_limit=file_limit,
        watch_delay=watch_delay,
        recursive=recursive,
        dry_run=dry_run,
        skip_hidden=skip_hidden,
        overwrite=overwrite,
        overwrite_if_larger=overwrite_if_larger,
        watch=watch,
    )
    asyncio.run(_sort_async(targets, options))


@with_container()
async def _sort_async(container, targets: list[Path], options: dict) -> None:
    """Implementation async de la commande sort."""
    sort_config = build_sort_config(container.config(), targets, **options)
    container.sort_config.override(providers.Object(sort_config))

    sorter = container.sort_service()
    try:
        await sorter.run()
    finally:
        await _close_api(container)


async def _close_api(container) -> None:
    """Ferme le client TMDB et son cache (rien a fermer hors ligne)."""
    if not container.config().tmdb_enabled:
        return
    tmdb_client = container.tmdb_client()
    await tmdb_client.close()
    container.api_cache().close()


@exit_on_error
def scan(
    targets: TargetsArgument,
    recursive: RecursiveOption = False,
    skip_hidden: SkipHiddenOption = False,
    extensions: ExtensionsOption = None,
    file_limit: FileLimitOption = None,
) -> None:
    """Liste les fichiers qui seraient tries, sans rien deplacer."""
    options = dict(
        extensions=extensions,
        file_limit=file_limit,
        recursive=recursive,
        skip_hidden=skip_hidden,
    )
    asyncio.run(_scan_async(targets, options))


@with_container()
async def _scan_async(container, targets: list[Path], options: dict) -> None:
    """Implementation de la commande scan (scanner seul)."""
    sort_config = build_sort_config(container.config(), targets, **options)
    container.sort_config.override(providers.Object(sort_config))

    run = container.scanner_service().scan()

    for candidate in run.candidates.values():
        size_mb = candidate.size_bytes / (1024 * 1024)
        console.print(
            f"{escape(f'[#{candidate.id}]')} {escape(str(candidate.path))}"
            f" [dim]({size_mb:.1f} MB)[/dim]",
            highlight=False,
        )

    console.print(
        f"\nTotal: {run.total} files found "
        f"({run.stats.found} checked, {len(run.directories)} directories)",
        highlight=False,
    )
