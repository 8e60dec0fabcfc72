"""
Interface port pour le parsing de noms de fichiers video.
"""

from abc import ABC, abstractmethod
from typing import Optional

from mediasort.core.value_objects.parsed_info import MediaType, ParsedFilename


class IFilenameParser(ABC):
    """
    Interface pour le parsing de noms de fichiers video.

    Definit le contrat pour extraire les informations structurees
    (titre, annee, saison, episode) depuis un nom de fichier.
    L'implementation utilise la bibliotheque guessit.
    """

    @abstractmethod
    def parse(
        self, filename: str, type_hint: Optional[MediaType] = None
    ) -> ParsedFilename:
        """
        Parse un nom de fichier video et extrait les informations structurees.

        Args:
            filename: Nom du fichier a parser (sans le chemin)
            type_hint: Indication du type de media attendu.

        Retourne:
            ParsedFilename avec les informations extraites.
            Le champ title est toujours renseigne.
        """
        ...
