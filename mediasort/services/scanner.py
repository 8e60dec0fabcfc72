"""
Service de scan des chemins cibles.

Parcourt les cibles configurees, applique les filtres (extension,
fichiers caches, recursion, limite de fichiers) et construit le
SortRun du passage : candidats dans l'ordre de decouverte et
repertoires a surveiller.
"""

import stat
from pathlib import Path

from loguru import logger

from mediasort.core.entities import SortRun
from mediasort.core.errors import ScanError
from mediasort.core.ports.file_system import IFileSystem
from mediasort.core.value_objects import SortConfig


class ScannerService:
    """
    Service de decouverte des fichiers a trier.

    Le parcours est iteratif (pile explicite) et pre-ordre : les
    identifiants des candidats suivent l'ordre de decouverte, entrees
    d'un repertoire triees par nom.

    La limite de fichiers est un plafond souple : une fois atteinte,
    les entrees suivantes sont ignorees sans erreur.
    """

    def __init__(self, file_system: IFileSystem, config: SortConfig) -> None:
        """
        Initialise le service de scan.

        Args:
            file_system: Implementation de IFileSystem pour stat et listing
            config: Configuration du tri
        """
        self._file_system = file_system
        self._config = config
        self._extensions = config.valid_extensions

    def scan(self) -> SortRun:
        """
        Construit un nouveau SortRun a partir des cibles.

        Returns:
            SortRun contenant candidats, repertoires et compteurs

        Raises:
            ScanError: stat ou listing impossible, repertoire imbrique sans
                       mode recursif, ou aucun fichier triable trouve
        """
        run = SortRun()

        for target in self._config.targets:
            try:
                info = self._file_system.stat(target)
            except OSError as e:
                raise ScanError(f"Cannot access target '{target}': {e}") from e
            self._walk(run, target, info)

        logger.debug(
            "Scan termine",
            found=run.stats.found,
            matched=run.stats.matched,
            directories=len(run.directories),
        )

        if run.total == 0 and not (self._config.watch and run.directories):
            raise ScanError(f"No sortable files found ({run.stats.found} files checked)")
        return run

    def _walk(self, run: SortRun, target: Path, target_info) -> None:
        """Parcours pre-ordre d'une cible avec une pile explicite."""
        stack = [(target, target_info, True)]

        while stack:
            path, info, explicit = stack.pop()

            if not explicit and self._config.skip_hidden and path.name.startswith("."):
                continue
            if run.total >= self._config.file_limit:
                continue

            if stat.S_ISREG(info.st_mode):
                self._add_file(run, path, info)
            elif stat.S_ISDIR(info.st_mode):
                if not self._config.recursive and not explicit:
                    raise ScanError("Recursive mode (-r) is required to sort directories")
                run.directories.add(path)
                entries = self._list(path)
                # Ordre inverse : le premier enfant est depile en premier
                for child, child_info in reversed(entries):
                    stack.append((child, child_info, False))
            # liens symboliques, tubes, peripheriques : ignores

    def _add_file(self, run: SortRun, path: Path, info) -> None:
        """Compte le fichier et le retient si son extension est autorisee."""
        # Cible repetee, ou fichier cible deja atteint via son repertoire
        if path in run.candidates:
            return
        run.stats.found += 1
        if path.suffix.lower() not in self._extensions:
            return
        candidate = run.add_candidate(path, info.st_size, info.st_mode)
        logger.debug("Candidat", candidate_id=candidate.id, source=str(path))

    def _list(self, directory: Path):
        """Liste un repertoire, tout echec est fatal pour le passage."""
        try:
            return self._file_system.list_dir(directory)
        except OSError as e:
            raise ScanError(f"Cannot list directory '{directory}': {e}") from e
