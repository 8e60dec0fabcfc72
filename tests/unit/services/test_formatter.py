"""
Tests unitaires pour PathFormatterService et sanitize_for_filesystem.
"""

from pathlib import Path

import pytest

from mediasort.core.errors import PathFormatError
from mediasort.core.value_objects import MediaType, PathConfig, ResolvedMatch
from mediasort.services.formatter import (
    PathFormatterService,
    format_episode_range,
    sanitize_for_filesystem,
)
from tests.fixtures.media import make_movie_match, make_series_match


@pytest.fixture
def formatter() -> PathFormatterService:
    return PathFormatterService()


class TestSanitize:
    """Tests pour sanitize_for_filesystem."""

    def test_special_chars_become_dashes(self):
        assert sanitize_for_filesystem("Mission: Impossible") == "Mission- Impossible"
        assert sanitize_for_filesystem("AC/DC") == "AC-DC"

    def test_question_mark_becomes_ellipsis(self):
        assert sanitize_for_filesystem("What If?") == "What If..."

    def test_ligatures(self):
        assert sanitize_for_filesystem("Cœur") == "Coeur"

    def test_truncated(self):
        assert len(sanitize_for_filesystem("a" * 300)) == 200

    def test_empty(self):
        assert sanitize_for_filesystem("") == ""


class TestEpisodeRange:
    def test_single(self):
        assert format_episode_range(2, None) == "E02"

    def test_multi(self):
        assert format_episode_range(2, 3) == "E02-E03"

    def test_none(self):
        assert format_episode_range(None, None) == ""


class TestDefaultTemplates:
    """Gabarits par defaut."""

    def test_series(self, formatter):
        match = make_series_match(Path("/in/Show.Name.S01E02.mkv"))

        result = formatter.format(match, PathConfig())

        assert result == Path("Show Name/Season 01/Show Name - S01E02.mkv")

    def test_multi_episode(self, formatter):
        match = make_series_match(
            Path("/in/Show.S02E05E06.mkv"), season=2, episode=5, episode_end=6
        )

        result = formatter.format(match, PathConfig())

        assert result.name == "Show Name - S02E05-E06.mkv"

    def test_movie_with_year(self, formatter):
        match = make_movie_match(Path("/in/Inception.2010.1080p.MKV"))

        result = formatter.format(match, PathConfig())

        assert result == Path("Inception (2010)/Inception (2010).mkv")

    def test_movie_without_year(self, formatter):
        match = make_movie_match(Path("/in/Inception.mp4"), year=None)

        assert formatter.format(match, PathConfig()) == Path("Inception/Inception.mp4")

    def test_title_is_sanitized(self, formatter):
        match = make_movie_match(Path("/in/x.mkv"), title="Mission: Impossible", year=1996)

        result = formatter.format(match, PathConfig())

        assert result.parts[0] == "Mission- Impossible (1996)"


class TestCustomTemplates:
    """Gabarits personnalises et erreurs."""

    def test_episode_title_field(self, formatter):
        config = PathConfig(tv_template="{title}/S{season}E{episode:02d} {episode_title}{ext}")
        match = make_series_match(Path("/in/a.mkv"), episode_title="Pilot")

        assert formatter.format(match, config) == Path("Show Name/S1E02 Pilot.mkv")

    def test_unknown_placeholder(self, formatter):
        config = PathConfig(movie_template="{title}/{resolution}{ext}")

        with pytest.raises(PathFormatError, match="Unknown placeholder"):
            formatter.format(make_movie_match(Path("/in/a.mkv")), config)

    def test_bad_format_spec(self, formatter):
        config = PathConfig(movie_template="{title:02d}{ext}")

        with pytest.raises(PathFormatError, match="Invalid template"):
            formatter.format(make_movie_match(Path("/in/a.mkv")), config)

    def test_series_without_episode(self, formatter):
        match = make_series_match(Path("/in/a.mkv"), episode=None)

        with pytest.raises(PathFormatError):
            formatter.format(match, PathConfig())

    def test_absolute_result_rejected(self, formatter):
        config = PathConfig(movie_template="/{title}{ext}")

        with pytest.raises(PathFormatError, match="relative"):
            formatter.format(make_movie_match(Path("/in/a.mkv")), config)

    def test_parent_reference_rejected(self, formatter):
        config = PathConfig(movie_template="../{title}{ext}")

        with pytest.raises(PathFormatError, match=r"\.\."):
            formatter.format(make_movie_match(Path("/in/a.mkv")), config)

    def test_empty_title_rejected(self, formatter):
        match = ResolvedMatch(path=Path("/in/a.mkv"), media_type=MediaType.MOVIE, title="   ")

        with pytest.raises(PathFormatError, match="Empty title"):
            formatter.format(match, PathConfig())
