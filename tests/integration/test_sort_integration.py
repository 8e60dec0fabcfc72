"""
Tests d'integration du tri avec les vrais adaptateurs.

Ces tests utilisent le container DI reel (pas de mocks) : FileSystemAdapter,
GuessitFilenameParser, resolution hors ligne, placement et surveillance
par PollingObserver.
"""

import asyncio
import io
from pathlib import Path

import pytest
from dependency_injector import providers
from rich.console import Console

from mediasort.config import Settings
from mediasort.container import Container
from mediasort.core.value_objects import SortConfig
from mediasort.services.sorter import SortState


@pytest.fixture
def integration_settings(tmp_path: Path) -> Settings:
    """Settings hors ligne, cache et logs dans tmp_path."""
    return Settings(
        _env_file=None,  # Ignorer le fichier .env pour les tests
        tmdb_api_key=None,
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "test.log",
        watch_polling=True,
    )


@pytest.fixture
def downloads(tmp_path: Path) -> Path:
    """Repertoire de telechargements avec un episode, son sous-titre et un film."""
    root = tmp_path / "in"
    root.mkdir()
    (root / "Show.Name.S01E02.mkv").write_bytes(b"e" * 200)
    (root / "Show.Name.S01E02.srt").write_text("subtitle")
    (root / "The.Matrix.1999.1080p.BluRay.x264.mkv").write_bytes(b"m" * 300)
    return root


def _container(settings: Settings, config: SortConfig) -> Container:
    container = Container()
    container.config.override(providers.Object(settings))
    container.sort_config.override(providers.Object(config))
    container.console.override(
        providers.Object(Console(file=io.StringIO(), width=300, color_system=None))
    )
    return container


def _output(container: Container) -> str:
    return container.console().file.getvalue()


class TestSortFlow:
    """Tri complet d'un passage."""

    @pytest.mark.asyncio
    async def test_episode_and_movie_are_placed(self, tmp_path, downloads, integration_settings):
        config = SortConfig(
            targets=(downloads,),
            tv_dir=tmp_path / "tv",
            movie_dir=tmp_path / "movies",
        )
        container = _container(integration_settings, config)

        sorter = container.sort_service()
        await sorter.run()

        episode = tmp_path / "tv" / "Show Name" / "Season 01" / "Show Name - S01E02.mkv"
        assert episode.read_bytes() == b"e" * 200
        assert episode.with_suffix(".srt").read_text() == "subtitle"
        movie = tmp_path / "movies" / "The Matrix (1999)" / "The Matrix (1999).mkv"
        assert movie.read_bytes() == b"m" * 300
        assert list(downloads.iterdir()) == []
        assert sorter.state == SortState.DONE

        output = _output(container)
        assert f"{downloads / 'Show.Name.S01E02.mkv'}" in output
        assert f"└─> {episode}" in output
        assert "Found 3 files, 2 matched, 2 moved" in output

    @pytest.mark.asyncio
    async def test_dry_run_mutates_nothing(self, tmp_path, downloads, integration_settings):
        config = SortConfig(
            targets=(downloads,),
            tv_dir=tmp_path / "tv",
            movie_dir=tmp_path / "movies",
            dry_run=True,
        )
        container = _container(integration_settings, config)
        before = sorted(p.name for p in downloads.iterdir())

        await container.sort_service().run()

        assert sorted(p.name for p in downloads.iterdir()) == before
        assert not (tmp_path / "tv").exists()
        assert not (tmp_path / "movies").exists()
        assert "[Dryrun]" in _output(container)

    @pytest.mark.asyncio
    async def test_second_run_is_already_sorted(self, tmp_path, downloads, integration_settings):
        """Re-trier la bibliotheque elle-meme ne deplace rien."""
        tv = tmp_path / "tv"
        first = SortConfig(targets=(downloads,), tv_dir=tv, movie_dir=tmp_path / "movies")
        await _container(integration_settings, first).sort_service().run()

        second = SortConfig(targets=(tv,), tv_dir=tv, recursive=True)
        container = _container(integration_settings, second)
        await container.sort_service().run()

        assert (tv / "Show Name" / "Season 01" / "Show Name - S01E02.mkv").exists()
        assert "1 matched, 0 moved" in _output(container)


class TestWatchFlow:
    """Surveillance : un nouveau fichier declenche un second passage."""

    @pytest.mark.asyncio
    async def test_new_file_triggers_resort(self, tmp_path, downloads, integration_settings):
        config = SortConfig(
            targets=(downloads,),
            tv_dir=tmp_path / "tv",
            movie_dir=tmp_path / "movies",
            recursive=True,
            watch=True,
            watch_delay=0,
        )
        container = _container(integration_settings, config)

        async def second_pass():
            while sorter.passes < 2:
                await asyncio.sleep(0.05)

        sorter = container.sort_service()
        task = asyncio.create_task(sorter.run())
        try:
            while sorter.state != SortState.WATCHING:
                await asyncio.sleep(0.05)
            await asyncio.sleep(1.5)
            (downloads / "Show.Name.S01E03.mkv").write_bytes(b"n" * 100)

            await asyncio.wait_for(second_pass(), timeout=15)
        finally:
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        assert (tmp_path / "tv" / "Show Name" / "Season 01" / "Show Name - S01E03.mkv").exists()
        assert "Change detected" in _output(container)
