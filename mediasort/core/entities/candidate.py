"""
Entite Candidate : un fichier decouvert en attente de tri.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mediasort.core.value_objects.resolved_match import ResolvedMatch


@dataclass
class Candidate:
    """
    Fichier decouvert lors d'un scan, en attente de resolution et placement.

    Un Candidate appartient exclusivement au passage qui l'a decouvert.
    Pendant le tri, seule la tache qui le traite ecrit dans result/error.

    Attributs :
        id : Numero de sequence (commence a 1, ordre de decouverte)
        path : Chemin du fichier tel que decouvert
        size_bytes : Taille au moment de la decouverte
        mode : Mode st_mode au moment de la decouverte
        result : Correspondance resolue (remplie pendant le tri)
        destination : Chemin de destination calcule (rempli pendant le tri)
        error : Erreur rencontree pendant le tri
    """

    id: int
    path: Path
    size_bytes: int = 0
    mode: int = 0
    result: Optional[ResolvedMatch] = None
    destination: Optional[Path] = None
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        """Vrai si le tri de ce candidat a echoue."""
        return self.error is not None
