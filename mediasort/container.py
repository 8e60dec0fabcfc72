"""
Container d'injection de dependances via dependency-injector.

Les adaptateurs et services sans etat sont des Singletons ; les services
qui dependent de la configuration d'un tri (SortConfig) sont des Factory
alimentees par le provider sort_config, fourni par la commande CLI.
"""

from dependency_injector import containers, providers
from rich.console import Console

from .adapters.api.cache import APICache
from .adapters.api.tmdb_client import TMDBClient
from .adapters.file_system import FileSystemAdapter
from .adapters.parsing.guessit_parser import GuessitFilenameParser
from .config import Settings
from .core.value_objects import SortConfig
from .services.dispatcher import DispatcherService
from .services.formatter import PathFormatterService
from .services.matcher import MatcherService
from .services.placer import PlacerService
from .services.resolver import ResolverService
from .services.scanner import ScannerService
from .services.sorter import SortService
from .services.watcher import WatcherService, default_observer_factory


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.sort_config.override(providers.Object(sort_config))
        sorter = container.sort_service()
        await sorter.run()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Configuration du tri - fournie par la commande (override)
    sort_config = providers.Dependency(instance_of=SortConfig)

    # Console partagee pour les lignes de progression
    console = providers.Singleton(Console)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)
    filename_parser = providers.Singleton(GuessitFilenameParser)

    # Cache API - Singleton pour partage entre les taches de tri
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Client TMDB - desactive si la cle API n'est pas definie
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
        language=config.provided.tmdb_language,
    )

    # Services sans etat - Singletons
    matcher_service = providers.Singleton(MatcherService)
    path_formatter = providers.Singleton(PathFormatterService)

    resolver_service = providers.Singleton(
        ResolverService,
        filename_parser=filename_parser,
        matcher=matcher_service,
        api_client=tmdb_client,
        match_score_threshold=config.provided.match_score_threshold,
    )

    # Services du tri - Factory car dependent de sort_config
    scanner_service = providers.Factory(
        ScannerService,
        file_system=file_system,
        config=sort_config,
    )

    placer_service = providers.Factory(
        PlacerService,
        file_system=file_system,
        formatter=path_formatter,
        config=sort_config,
    )

    dispatcher_service = providers.Factory(
        DispatcherService,
        resolver=resolver_service,
        placer=placer_service,
        config=sort_config,
        console=console,
    )

    watcher_service = providers.Factory(
        WatcherService,
        observer_factory=providers.Callable(
            default_observer_factory,
            polling=config.provided.watch_polling,
        ),
        console=console,
    )

    sort_service = providers.Factory(
        SortService,
        scanner=scanner_service,
        dispatcher=dispatcher_service,
        watcher=watcher_service,
        config=sort_config,
        console=console,
    )
