"""
Interfaces ports des collaborateurs de resolution et de formatage.

Le resolveur transforme un chemin en correspondance structuree ; le
formateur transforme cette correspondance en chemin relatif de destination.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from mediasort.core.value_objects.resolved_match import ResolvedMatch
from mediasort.core.value_objects.sort_config import PathConfig


class IResolver(ABC):
    """Contrat du resolveur de metadonnees."""

    @abstractmethod
    async def resolve(self, path: Path) -> ResolvedMatch:
        """
        Resout un fichier en correspondance structuree.

        Leve:
            ResolveError si aucune correspondance n'est trouvee
        """
        ...


class IPathFormatter(ABC):
    """Contrat du formateur de chemins de destination."""

    @abstractmethod
    def format(self, match: ResolvedMatch, path_config: PathConfig) -> Path:
        """
        Calcule le chemin relatif de destination d'une correspondance.

        Leve:
            PathFormatError si le gabarit ne peut pas etre applique
        """
        ...
