"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem pour les operations fichiers reelles.
"""

import errno
import os
import shutil
import uuid
from pathlib import Path

from mediasort.core.ports.file_system import IFileSystem


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.

    Les operations mutantes propagent OSError ; c'est au service appelant
    de decider si l'echec est fatal ou non.
    """

    def stat(self, path: Path, follow_symlinks: bool = True) -> os.stat_result:
        """Lit les metadonnees d'un chemin."""
        return os.stat(path, follow_symlinks=follow_symlinks)

    def list_dir(self, path: Path) -> list[tuple[Path, os.stat_result]]:
        """
        Liste les entrees d'un repertoire, triees par nom.

        Utilise os.scandir et lit les metadonnees sans suivre les liens :
        un lien symbolique apparait comme tel et sera ignore par le scanner.
        """
        entries: list[tuple[Path, os.stat_result]] = []
        with os.scandir(path) as it:
            for entry in it:
                entries.append((path / entry.name, entry.stat(follow_symlinks=False)))
        entries.sort(key=lambda item: item[0].name)
        return entries

    def exists(self, path: Path) -> bool:
        """Verifie si un chemin existe."""
        return path.exists()

    def get_size(self, path: Path) -> int:
        """
        Recupere la taille du fichier en octets.

        Retourne 0 si le fichier n'existe pas.
        """
        try:
            return path.stat().st_size
        except OSError:
            return 0

    def make_dirs(self, path: Path) -> None:
        """Cree le repertoire et ses parents (sans erreur s'il existe)."""
        path.mkdir(parents=True, exist_ok=True)

    def move(self, source: Path, destination: Path) -> None:
        """
        Deplace un fichier de maniere atomique quand c'est possible.

        Utilise os.replace pour un deplacement atomique sur le meme filesystem.
        Pour un deplacement cross-filesystem (EXDEV), passe par une copie
        intermediaire vers un fichier temporaire, renomme ensuite en place,
        puis supprime la source. Cette seconde voie n'est pas atomique.
        """
        try:
            os.replace(source, destination)
            return
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise

        # Cross-filesystem: nom temporaire unique dans le repertoire cible
        temp = destination.with_name(f".tmp_{uuid.uuid4().hex}_{destination.name}")
        try:
            shutil.copy2(source, temp)
            os.replace(temp, destination)
        except OSError:
            if temp.exists():
                temp.unlink()
            raise
        source.unlink()
