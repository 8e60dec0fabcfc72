"""
Etat d'un passage de tri (scan -> tri), reconstruit a chaque cycle.
"""

from dataclasses import dataclass, field
from pathlib import Path

from mediasort.core.entities.candidate import Candidate


@dataclass
class RunStats:
    """Compteurs indicatifs d'un passage (examines, retenus, deplaces)."""

    found: int = 0
    matched: int = 0
    moved: int = 0


@dataclass
class SortRun:
    """
    Etat possede par la boucle de controle pour un seul passage.

    Attributs :
        candidates : Candidats indexes par chemin, dans l'ordre des identifiants
        directories : Repertoires parcourus (liste de surveillance)
        stats : Compteurs du passage
    """

    candidates: dict[Path, Candidate] = field(default_factory=dict)
    directories: set[Path] = field(default_factory=set)
    stats: RunStats = field(default_factory=RunStats)

    @property
    def total(self) -> int:
        """Nombre de candidats du passage."""
        return len(self.candidates)

    def add_candidate(self, path: Path, size_bytes: int, mode: int) -> Candidate:
        """Cree le candidat suivant (identifiant = taille courante + 1)."""
        candidate = Candidate(
            id=len(self.candidates) + 1,
            path=path,
            size_bytes=size_bytes,
            mode=mode,
        )
        self.candidates[path] = candidate
        self.stats.matched += 1
        return candidate
