"""
Service de dispatch concurrent des candidats.

Chaque candidat passe par le resolveur puis le placeur, avec au plus
N taches admises simultanement. Les erreurs sont isolees par candidat :
elles sont journalisees et n'interrompent jamais le lot.
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.console import Console
from rich.markup import escape

from mediasort.core.entities import Candidate, SortRun
from mediasort.core.errors import SortError
from mediasort.core.ports.resolver import IResolver
from mediasort.core.value_objects import SortConfig
from mediasort.services.placer import PlacementOutcome, PlacerService


class DispatcherService:
    """
    Orchestre la resolution et le placement de tous les candidats d'un passage.

    - Semaphore de capacite `concurrency` (porte d'admission)
    - asyncio.gather comme barriere de fin
    - Un verrou par destination : deux candidats visant le meme chemin
      sont places l'un apres l'autre, le second voit le fichier du premier
    """

    def __init__(
        self,
        resolver: IResolver,
        placer: PlacerService,
        config: SortConfig,
        console: Optional[Console] = None,
    ) -> None:
        self._resolver = resolver
        self._placer = placer
        self._config = config
        self._console = console or Console()
        self._destination_locks: dict[Path, asyncio.Lock] = {}
        self._in_flight = 0
        self.peak_in_flight = 0

    async def dispatch(self, run: SortRun) -> None:
        """
        Traite chaque candidat exactement une fois.

        Ne leve jamais pour une erreur individuelle : le passage est
        considere complet meme si tous les fichiers ont echoue.
        """
        if self._config.dry_run:
            self._console.print(f"[cyan]{escape('[Dryrun]')}[/cyan]")

        self._destination_locks = {}
        self._in_flight = 0
        self.peak_in_flight = 0
        semaphore = asyncio.Semaphore(self._config.concurrency)

        await asyncio.gather(
            *(self._admit(semaphore, run, candidate) for candidate in run.candidates.values())
        )

    async def _admit(
        self,
        semaphore: asyncio.Semaphore,
        run: SortRun,
        candidate: Candidate,
    ) -> None:
        async with semaphore:
            self._in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self._in_flight)
            try:
                await self._sort_candidate(run, candidate)
            finally:
                self._in_flight -= 1

    async def _sort_candidate(self, run: SortRun, candidate: Candidate) -> None:
        """Resout puis place un candidat, en capturant son erreur."""
        try:
            match = await self._resolver.resolve(candidate.path)
            candidate.result = match
            destination = self._placer.destination_for(match)
            candidate.destination = destination

            self._report_success(run, candidate, match.path, destination)

            lock_key = Path(os.path.abspath(destination))
            lock = self._destination_locks.setdefault(lock_key, asyncio.Lock())
            async with lock:
                result = await asyncio.to_thread(
                    self._placer.place, candidate, match, destination
                )
        except SortError as e:
            self._report_failure(run, candidate, e)
            return
        except Exception as e:
            logger.opt(exception=e).error(
                "Erreur inattendue", candidate_id=candidate.id, source=str(candidate.path)
            )
            self._report_failure(run, candidate, e)
            return

        # En dry-run, le deplacement simule compte comme un deplacement
        if result.outcome in (PlacementOutcome.MOVED, PlacementOutcome.DRY_RUN):
            run.stats.moved += 1

    def _report_success(
        self,
        run: SortRun,
        candidate: Candidate,
        source: Path,
        destination: Path,
    ) -> None:
        self._console.print(
            f"{self._prefix(run, candidate)} [green]{escape(str(source))}[/green]\n"
            f"  └─> [green]{escape(str(destination))}[/green]",
            highlight=False,
        )

    def _report_failure(self, run: SortRun, candidate: Candidate, error: Exception) -> None:
        candidate.error = error
        logger.warning(
            "Echec du tri",
            candidate_id=candidate.id,
            total=run.total,
            source=str(candidate.path),
            error=str(error),
        )
        self._console.print(
            f"{self._prefix(run, candidate)} [red]{escape(str(candidate.path))}[/red]\n"
            f"  └─> {escape(str(error))}",
            highlight=False,
        )

    @staticmethod
    def _prefix(run: SortRun, candidate: Candidate) -> str:
        return escape(f"[#{candidate.id}/{run.total}]")
