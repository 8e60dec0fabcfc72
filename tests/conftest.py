"""
Fixtures pytest partagees pour les tests MediaSort.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des interfaces (IFileSystem, IResolver)
- Arborescence de fichiers temporaire
"""

import io
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from mediasort.core.ports.file_system import IFileSystem
from mediasort.core.ports.resolver import IResolver


@pytest.fixture
def mock_file_system() -> MagicMock:
    """
    Mock de IFileSystem pour les tests.

    Par defaut aucune destination n'existe et les operations reussissent.
    """
    mock = MagicMock(spec=IFileSystem)
    mock.exists.return_value = False
    mock.get_size.return_value = 500 * 1024 * 1024  # 500 MB par defaut
    mock.make_dirs.return_value = None
    mock.move.return_value = None
    return mock


@pytest.fixture
def mock_resolver() -> AsyncMock:
    """Mock de IResolver (configurer resolve.side_effect dans chaque test)."""
    return AsyncMock(spec=IResolver)


@pytest.fixture
def output_console() -> Console:
    """Console rich qui ecrit dans un buffer (sortie lisible via file.getvalue())."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def media_tree(tmp_path: Path) -> Path:
    """
    Arborescence de telechargements de test.

    in/
        Show.Name.S01E02.mkv (+ .srt)
        Inception.2010.1080p.mkv
        notes.txt
        .hidden.mkv
        sub/
            Show.Name.S01E03.mp4
            deeper/
                Show.Name.S01E04.avi
        .cache/
            Other.Show.S02E01.mkv
    """
    root = tmp_path / "in"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / ".cache").mkdir()

    (root / "Show.Name.S01E02.mkv").write_bytes(b"x" * 200)
    (root / "Show.Name.S01E02.srt").write_text("1\n00:00:01,000 --> 00:00:02,000\nHi\n")
    (root / "Inception.2010.1080p.mkv").write_bytes(b"x" * 300)
    (root / "notes.txt").write_text("not a video")
    (root / ".hidden.mkv").write_bytes(b"x" * 10)
    (root / "sub" / "Show.Name.S01E03.mp4").write_bytes(b"x" * 100)
    (root / "sub" / "deeper" / "Show.Name.S01E04.avi").write_bytes(b"x" * 100)
    (root / ".cache" / "Other.Show.S02E01.mkv").write_bytes(b"x" * 50)
    return root
