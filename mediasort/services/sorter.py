"""
Boucle de controle du tri.

Enchaine Scan -> Tri -> (surveillance ? -> Attente -> Scan | -> Fin).
Chaque passage repart de zero : aucun candidat ni repertoire n'est
conserve d'un cycle a l'autre.
"""

from enum import Enum
from typing import Optional

from loguru import logger
from rich.console import Console

from mediasort.core.entities import SortRun
from mediasort.core.errors import MediaSortError, WatchError
from mediasort.core.value_objects import SortConfig
from mediasort.services.dispatcher import DispatcherService
from mediasort.services.scanner import ScannerService
from mediasort.services.watcher import WatcherService


class SortState(Enum):
    """Etats de la boucle de controle."""

    SCANNING = "scanning"
    SORTING = "sorting"
    WATCHING = "watching"
    DONE = "done"
    ERROR = "error"


class SortService:
    """
    Pilote les passages successifs de tri.

    Etat initial SCANNING ; etats terminaux DONE (sans surveillance)
    et ERROR (toute erreur fatale, propagee a l'appelant).
    """

    def __init__(
        self,
        scanner: ScannerService,
        dispatcher: DispatcherService,
        watcher: WatcherService,
        config: SortConfig,
        console: Optional[Console] = None,
    ) -> None:
        """
        Args:
            scanner: Service de scan (un SortRun neuf par passage)
            dispatcher: Service de resolution/placement concurrent
            watcher: Service de surveillance des repertoires
            config: Configuration du tri
            console: Console rich pour le resume de fin de passage
        """
        self._scanner = scanner
        self._dispatcher = dispatcher
        self._watcher = watcher
        self._config = config
        self._console = console or Console()
        self.state = SortState.SCANNING
        self.passes = 0

    async def run(self) -> None:
        """
        Execute la boucle jusqu'a DONE, ou jusqu'a la premiere erreur fatale.

        Raises:
            MediaSortError: ScanError / WatchError (l'etat passe a ERROR)
        """
        self.state = SortState.SCANNING
        try:
            while True:
                run = await self.run_once()
                if not self._config.watch:
                    self.state = SortState.DONE
                    return

                self.state = SortState.WATCHING
                await self._watcher.wait_for_change(
                    run.directories, self._config.watch_delay
                )
                self.state = SortState.SCANNING
        except MediaSortError:
            self.state = SortState.ERROR
            raise

    async def run_once(self) -> SortRun:
        """Un passage complet : scan puis tri de tous les candidats."""
        self.state = SortState.SCANNING
        run = self._scanner.scan()
        # Rien a surveiller : abandon avant le moindre deplacement
        if self._config.watch and not run.directories:
            raise WatchError("No directories to watch")

        self.state = SortState.SORTING
        await self._dispatcher.dispatch(run)

        self.passes += 1
        logger.info(
            "Passage termine",
            passes=self.passes,
            found=run.stats.found,
            matched=run.stats.matched,
            moved=run.stats.moved,
        )
        self._console.print(
            f"Found {run.stats.found} files, {run.stats.matched} matched, "
            f"{run.stats.moved} moved"
            f"{' (dry run)' if self._config.dry_run else ''}",
            style="dim",
            highlight=False,
        )
        return run
