"""
Service de surveillance des repertoires scannes.

Utilise watchdog (Observer natif, ou PollingObserver sur les systemes
sans notification) pour attendre le premier changement dans un des
repertoires du dernier passage, puis temporise avant de rendre la main.
"""

import asyncio
from pathlib import Path
from typing import Callable, Iterable, Optional

from loguru import logger
from rich.console import Console
from rich.markup import escape
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver
from watchdog.observers.polling import PollingObserver

from mediasort.core.errors import WatchError


# Evenements sans modification du contenu des repertoires
IGNORED_EVENT_TYPES = frozenset({"opened", "closed_no_write"})

# Intervalle de verification de l'etat du thread observateur (secondes)
OBSERVER_CHECK_INTERVAL = 1.0


class ChangeHandler(FileSystemEventHandler):
    """
    Handler watchdog qui resout un future asyncio au premier changement.

    Appele depuis le thread de l'observateur : le future n'est manipule
    que sur la boucle via call_soon_threadsafe.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, changed: asyncio.Future) -> None:
        super().__init__()
        self._loop = loop
        self._changed = changed

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type in IGNORED_EVENT_TYPES:
            return
        self._loop.call_soon_threadsafe(self._notify, event)

    def _notify(self, event: FileSystemEvent) -> None:
        if not self._changed.done():
            self._changed.set_result(event)


def default_observer_factory(polling: bool = False) -> Callable[[], BaseObserver]:
    """Retourne la fabrique d'observateur (natif ou polling)."""
    return PollingObserver if polling else Observer


class WatcherService:
    """
    Attend un changement dans les repertoires du dernier scan.

    Chaque appel cree son propre observateur : aucune souscription ne
    survit d'un passage a l'autre.
    """

    def __init__(
        self,
        observer_factory: Optional[Callable[[], BaseObserver]] = None,
        console: Optional[Console] = None,
    ) -> None:
        """
        Args:
            observer_factory: Fabrique d'observateur watchdog (Observer par defaut)
            console: Console rich pour les notifications utilisateur
        """
        self._observer_factory = observer_factory or Observer
        self._console = console or Console()

    async def wait_for_change(self, directories: Iterable[Path], delay: float) -> None:
        """
        Bloque jusqu'au premier changement ou a l'arret de l'observateur.

        Args:
            directories: Repertoires a surveiller (non recursif, un par un)
            delay: Temporisation en secondes avant de rendre la main

        Raises:
            WatchError: liste vide ou souscription impossible
        """
        directories = sorted(directories)
        if not directories:
            raise WatchError("No directories to watch")

        loop = asyncio.get_running_loop()
        changed = loop.create_future()
        handler = ChangeHandler(loop, changed)
        observer = self._observer_factory()

        for directory in directories:
            try:
                observer.schedule(handler, str(directory), recursive=False)
            except OSError as e:
                self._abort(observer)
                raise WatchError(f"Failed to watch directory: {e}") from e
            self._console.print(
                f"Watching [cyan]{escape(str(directory))}[/cyan] for changes...",
                highlight=False,
            )

        try:
            observer.start()
        except OSError as e:
            self._abort(observer)
            raise WatchError(f"Failed to create file watcher: {e}") from e

        try:
            await self._wait(observer, changed)
        except asyncio.CancelledError:
            observer.stop()
            raise

        # Liberation en arriere-plan, sans attendre la fin du thread
        loop.run_in_executor(None, self._release, observer)

        self._console.print(f"Change detected, re-sorting in {delay:g}s...", highlight=False)
        await asyncio.sleep(delay)

    @staticmethod
    async def _wait(observer: BaseObserver, changed: asyncio.Future) -> None:
        """Attend un evenement, ou la mort du thread observateur (branche erreur)."""
        while True:
            done, _ = await asyncio.wait({changed}, timeout=OBSERVER_CHECK_INTERVAL)
            if done:
                event = changed.result()
                logger.debug(
                    "Changement detecte",
                    event_type=event.event_type,
                    path=str(event.src_path),
                )
                return
            if not observer.is_alive():
                logger.warning("L'observateur de fichiers s'est arrete")
                return

    @staticmethod
    def _abort(observer: BaseObserver) -> None:
        """Retire les souscriptions et arrete les emetteurs deja demarres."""
        observer.unschedule_all()
        observer.stop()

    @staticmethod
    def _release(observer: BaseObserver) -> None:
        observer.stop()
        observer.join()
