"""
Configuration immutable d'une execution de tri.

SortConfig est construite une seule fois par invocation (options CLI
superposees aux Settings) et validee immediatement : toute incoherence
leve ConfigError avant le moindre scan.
"""

from dataclasses import dataclass, field
from pathlib import Path

from mediasort.core.errors import ConfigError

DEFAULT_TV_TEMPLATE = (
    "{title}/Season {season:02d}/{title} - S{season:02d}{episode_range}{ext}"
)
DEFAULT_MOVIE_TEMPLATE = "{title}{year_suffix}/{title}{year_suffix}{ext}"
DEFAULT_EXTENSIONS = "mp4,avi,mkv"


def parse_extensions(extensions: str) -> frozenset[str]:
    """
    Normalise une liste d'extensions separees par des virgules.

    "mkv, .MP4" -> {".mkv", ".mp4"}. Les entrees vides sont ignorees.
    """
    normalized = set()
    for raw in extensions.split(","):
        ext = raw.strip().lstrip(".").lower()
        if ext:
            normalized.add(f".{ext}")
    return frozenset(normalized)


@dataclass(frozen=True)
class PathConfig:
    """Gabarits (syntaxe str.format) des chemins de destination relatifs."""

    tv_template: str = DEFAULT_TV_TEMPLATE
    movie_template: str = DEFAULT_MOVIE_TEMPLATE


@dataclass(frozen=True)
class SortConfig:
    """
    Ensemble des options reconnues pour un tri.

    Invariants (verifies dans __post_init__):
    - au moins une cible
    - overwrite et overwrite_if_larger sont mutuellement exclusifs
    - watch necessite recursive
    - concurrency >= 1, file_limit >= 1, watch_delay >= 0
    """

    targets: tuple[Path, ...]
    tv_dir: Path = Path(".")
    movie_dir: Path = Path(".")
    path_config: PathConfig = field(default_factory=PathConfig)
    extensions: str = DEFAULT_EXTENSIONS
    concurrency: int = 6
    file_limit: int = 1000
    recursive: bool = False
    dry_run: bool = False
    skip_hidden: bool = False
    overwrite: bool = False
    overwrite_if_larger: bool = False
    watch: bool = False
    watch_delay: float = 3.0

    def __post_init__(self) -> None:
        # Normalisation (dataclass gelee: passer par object.__setattr__)
        object.__setattr__(self, "targets", tuple(Path(t) for t in self.targets))
        object.__setattr__(self, "tv_dir", Path(self.tv_dir or "."))
        object.__setattr__(self, "movie_dir", Path(self.movie_dir or "."))

        if not self.targets:
            raise ConfigError("At least one target path is required")
        if self.watch and not self.recursive:
            raise ConfigError("Recursive mode is required to watch directories")
        if self.overwrite and self.overwrite_if_larger:
            raise ConfigError(
                "Overwrite is already specified, overwrite-if-larger is redundant"
            )
        if self.concurrency < 1:
            raise ConfigError(f"Concurrency must be at least 1 (got {self.concurrency})")
        if self.file_limit < 1:
            raise ConfigError(f"File limit must be at least 1 (got {self.file_limit})")
        if self.watch_delay < 0:
            raise ConfigError(f"Watch delay cannot be negative (got {self.watch_delay})")
        if not self.valid_extensions:
            raise ConfigError(f"No valid extension in '{self.extensions}'")

    @property
    def valid_extensions(self) -> frozenset[str]:
        """Extensions autorisees, en minuscules avec le point."""
        return parse_extensions(self.extensions)
