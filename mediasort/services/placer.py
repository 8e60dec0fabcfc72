"""
Service de placement des fichiers tries.

Ce module calcule la destination finale d'un candidat resolu et
deplace le fichier avec:
- Politique de collision (overwrite / overwrite-if-larger)
- Creation idempotente des repertoires de destination
- Deplacement des sous-titres associes (best-effort)
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from loguru import logger

from mediasort.core.entities import Candidate
from mediasort.core.errors import (
    DestinationExistsError,
    PlacementError,
    UnsupportedMediaTypeError,
)
from mediasort.core.ports.file_system import IFileSystem
from mediasort.core.ports.resolver import IPathFormatter
from mediasort.core.value_objects import MediaType, ResolvedMatch, SortConfig


# Extensions des sous-titres deplaces avec la video
SUBTITLE_EXTENSIONS = (".srt", ".sub", ".idx", ".ass", ".ssa", ".vtt")


class PlacementOutcome(Enum):
    """
    Issue d'un placement reussi.

    MOVED: Fichier deplace vers sa destination
    ALREADY_SORTED: La destination est deja le chemin courant
    DRY_RUN: Deplacement simule, aucune modification
    """

    MOVED = "moved"
    ALREADY_SORTED = "already_sorted"
    DRY_RUN = "dry_run"


@dataclass
class PlacementResult:
    """
    Resultat d'un placement.

    Attributs:
        outcome: Issue du placement
        destination: Chemin de destination calcule
        subtitles: Sous-titres effectivement deplaces
    """

    outcome: PlacementOutcome
    destination: Path
    subtitles: list[Path] = field(default_factory=list)


class PlacerService:
    """
    Service de placement d'un candidat a son emplacement canonique.

    Les operations fichiers sont synchrones : le dispatcher les execute
    dans un thread et serialise les placements vers une meme destination.
    """

    def __init__(
        self,
        file_system: IFileSystem,
        formatter: IPathFormatter,
        config: SortConfig,
    ) -> None:
        """
        Initialise le service de placement.

        Args:
            file_system: Implementation de IFileSystem (stat, mkdir, move)
            formatter: Formateur des chemins relatifs de destination
            config: Configuration du tri (repertoires, dry-run, overwrite)
        """
        self._file_system = file_system
        self._formatter = formatter
        self._config = config

    def destination_for(self, match: ResolvedMatch) -> Path:
        """
        Calcule le chemin de destination complet d'une correspondance.

        Raises:
            UnsupportedMediaTypeError: type sans repertoire de base
            PathFormatError: gabarit inapplicable
        """
        if match.media_type == MediaType.SERIES:
            base_dir = self._config.tv_dir
        elif match.media_type == MediaType.MOVIE:
            base_dir = self._config.movie_dir
        else:
            raise UnsupportedMediaTypeError(f"Invalid result type: {match.media_type.value}")

        relative = self._formatter.format(match, self._config.path_config)
        return base_dir / relative

    def place(
        self,
        candidate: Candidate,
        match: ResolvedMatch,
        destination: Path,
    ) -> PlacementResult:
        """
        Deplace le fichier du candidat vers sa destination.

        Args:
            candidate: Candidat a placer (taille capturee au scan)
            match: Correspondance resolue (chemin source canonique)
            destination: Chemin calcule par destination_for

        Returns:
            PlacementResult decrivant l'issue

        Raises:
            DestinationExistsError: collision sans permission d'ecraser
            PlacementError: echec de creation des repertoires ou du deplacement
        """
        source = match.path

        if self._same_path(source, destination):
            logger.debug("Deja trie", candidate_id=candidate.id, source=str(source))
            return PlacementResult(PlacementOutcome.ALREADY_SORTED, destination)

        if self._config.dry_run:
            return PlacementResult(PlacementOutcome.DRY_RUN, destination)

        self._check_collision(candidate, destination)

        try:
            self._file_system.make_dirs(destination.parent)
        except OSError as e:
            raise PlacementError(f"Cannot create directory '{destination.parent}'", e) from e

        try:
            self._file_system.move(source, destination)
        except OSError as e:
            raise PlacementError(f"Cannot move '{source}'", e) from e

        logger.info(
            "Fichier deplace",
            candidate_id=candidate.id,
            source=str(source),
            destination=str(destination),
        )
        subtitles = self._move_subtitles(source, destination)
        return PlacementResult(PlacementOutcome.MOVED, destination, subtitles)

    def _check_collision(self, candidate: Candidate, destination: Path) -> None:
        """
        Applique la politique d'ecrasement si la destination existe.

        L'ecrasement n'a lieu que si overwrite est actif, ou si
        overwrite_if_larger est actif et le nouveau fichier est
        strictement plus gros que le fichier existant.
        """
        if not self._file_system.exists(destination):
            return

        if self._config.overwrite:
            return

        existing_size = self._file_system.get_size(destination)
        if self._config.overwrite_if_larger and candidate.size_bytes > existing_size:
            logger.debug(
                "Ecrasement d'un fichier plus petit",
                destination=str(destination),
                new_size=candidate.size_bytes,
                existing_size=existing_size,
            )
            return

        raise DestinationExistsError(destination)

    def _move_subtitles(self, source: Path, destination: Path) -> list[Path]:
        """Deplace les sous-titres de meme nom de base, sans jamais echouer."""
        moved = []
        for ext in SUBTITLE_EXTENSIONS:
            subtitle = source.with_suffix(ext)
            if not self._file_system.exists(subtitle):
                continue
            target = destination.with_suffix(ext)
            try:
                self._file_system.move(subtitle, target)
            except OSError as e:
                logger.debug("Sous-titre non deplace", source=str(subtitle), error=str(e))
                continue
            moved.append(target)
        return moved

    @staticmethod
    def _same_path(source: Path, destination: Path) -> bool:
        return os.path.abspath(source) == os.path.abspath(destination)
