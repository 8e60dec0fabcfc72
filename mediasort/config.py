"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe MEDIASORT_,
et peut optionnellement être fournie via un fichier .env.

Ces valeurs servent de défauts aux options de la CLI. La clé API TMDB est optionnelle :
sans elle, le résolveur fonctionne hors ligne à partir du nom de fichier.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mediasort.core.value_objects.sort_config import (
    DEFAULT_EXTENSIONS,
    DEFAULT_MOVIE_TEMPLATE,
    DEFAULT_TV_TEMPLATE,
)


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MEDIASORT_.
    Exemple : MEDIASORT_TV_DIR=/media/tv

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIASORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Destinations par type de média
    tv_dir: Path = Field(default=Path("."))
    movie_dir: Path = Field(default=Path("."))

    # Gabarits de chemins (syntaxe str.format)
    tv_template: str = Field(default=DEFAULT_TV_TEMPLATE)
    movie_template: str = Field(default=DEFAULT_MOVIE_TEMPLATE)

    # Tri
    extensions: str = Field(default=DEFAULT_EXTENSIONS)
    concurrency: int = Field(default=6, ge=1)
    file_limit: int = Field(default=1000, ge=1)

    # Surveillance
    watch_delay: float = Field(default=3.0, ge=0)
    watch_polling: bool = Field(default=False)

    # Résolution (TMDB optionnel)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_language: str = Field(default="en-US")
    match_score_threshold: int = Field(default=70, ge=0, le=100)
    cache_dir: Path = Field(default=Path("~/.cache/mediasort"))

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("~/.cache/mediasort/logs/mediasort.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("tv_dir", "movie_dir", "cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v or ".").expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)
