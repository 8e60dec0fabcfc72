"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

- IFileSystem : Opérations fichiers du scanner et du placeur
- IFilenameParser : Parsing de noms de fichiers
- IMediaAPIClient, SearchResult : APIs de métadonnées média
- IResolver, IPathFormatter : Résolution et formatage des destinations
"""

from mediasort.core.ports.api_clients import IMediaAPIClient, SearchResult
from mediasort.core.ports.file_system import IFileSystem
from mediasort.core.ports.parser import IFilenameParser
from mediasort.core.ports.resolver import IPathFormatter, IResolver

__all__ = [
    "IFileSystem",
    "IFilenameParser",
    "IMediaAPIClient",
    "SearchResult",
    "IPathFormatter",
    "IResolver",
]
