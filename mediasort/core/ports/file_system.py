"""
Interfaces ports pour le système de fichiers.

Interfaces abstraites (ports) définissant les contrats pour les opérations
fichiers utilisées par le scanner et le placeur. Contrairement à une API
booléenne, les opérations mutantes lèvent OSError afin que l'appelant
puisse rapporter la cause précise de l'échec.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path


class IFileSystem(ABC):
    """
    Interface pour les opérations de base sur les fichiers.

    Définit les opérations pour interagir avec le système de fichiers :
    lecture des métadonnées, listing de répertoires, création de répertoires
    et déplacement de fichiers.
    """

    @abstractmethod
    def stat(self, path: Path, follow_symlinks: bool = True) -> os.stat_result:
        """
        Lit les métadonnées d'un chemin.

        Args :
            path : Chemin à interroger
            follow_symlinks : Si False, décrit le lien lui-même

        Lève :
            OSError si le chemin est inaccessible
        """
        ...

    @abstractmethod
    def list_dir(self, path: Path) -> list[tuple[Path, os.stat_result]]:
        """
        Liste les entrées d'un répertoire, triées par nom.

        Les métadonnées sont lues sans suivre les liens symboliques.

        Lève :
            OSError si le répertoire ne peut pas être lu
        """
        ...

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Vérifie si un chemin existe."""
        ...

    @abstractmethod
    def get_size(self, path: Path) -> int:
        """
        Récupère la taille du fichier en octets.

        Retourne :
            Taille du fichier en octets, ou 0 si le fichier n'existe pas
        """
        ...

    @abstractmethod
    def make_dirs(self, path: Path) -> None:
        """
        Crée un répertoire et tous ses parents (idempotent).

        Lève :
            OSError si la création échoue
        """
        ...

    @abstractmethod
    def move(self, source: Path, destination: Path) -> None:
        """
        Déplace un fichier, en remplaçant la destination si elle existe.

        Lève :
            OSError si le déplacement échoue
        """
        ...
