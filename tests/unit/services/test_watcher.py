"""
Tests unitaires pour WatcherService.

Un observateur factice remplace watchdog pour piloter les evenements ;
un test d'integration utilise le PollingObserver reel.
"""

import asyncio
from pathlib import Path

import pytest
from watchdog.events import FileCreatedEvent, FileOpenedEvent
from watchdog.observers.polling import PollingObserver

from mediasort.core.errors import WatchError
from mediasort.services.watcher import ChangeHandler, WatcherService, default_observer_factory


class FakeObserver:
    """Observateur minimal : enregistre les souscriptions, vivant jusqu'a stop()."""

    def __init__(self, fail_on: Path = None, fail_start: bool = False) -> None:
        self.scheduled: list[str] = []
        self.handler = None
        self.started = False
        self.alive = True
        self.unscheduled = False
        self._fail_on = fail_on
        self._fail_start = fail_start

    def schedule(self, handler, path, recursive=False):
        if self._fail_on is not None and Path(path) == self._fail_on:
            raise OSError(f"No such directory: {path}")
        assert recursive is False
        self.handler = handler
        self.scheduled.append(path)

    def start(self):
        if self._fail_start:
            raise OSError("inotify instance limit reached")
        self.started = True

    def unschedule_all(self):
        self.unscheduled = True

    def stop(self):
        self.alive = False

    def join(self, timeout=None):
        return None

    def is_alive(self):
        return self.alive


async def _wait_started(observer: FakeObserver) -> None:
    while not observer.started:
        await asyncio.sleep(0)


# ====================
# Souscription
# ====================


class TestSubscription:
    """Souscription a chaque repertoire."""

    @pytest.mark.asyncio
    async def test_empty_directory_set_fails(self, output_console):
        watcher = WatcherService(observer_factory=FakeObserver, console=output_console)

        with pytest.raises(WatchError, match="No directories to watch"):
            await watcher.wait_for_change(set(), delay=0)

    @pytest.mark.asyncio
    async def test_schedule_failure_is_fatal(self, tmp_path, output_console):
        missing = tmp_path / "missing"
        observer = FakeObserver(fail_on=missing)
        watcher = WatcherService(observer_factory=lambda: observer, console=output_console)

        with pytest.raises(WatchError, match="Failed to watch directory"):
            await watcher.wait_for_change({tmp_path, missing}, delay=0)

        assert observer.unscheduled
        assert not observer.is_alive()

    @pytest.mark.asyncio
    async def test_start_failure_is_fatal(self, tmp_path, output_console):
        observer = FakeObserver(fail_start=True)
        watcher = WatcherService(observer_factory=lambda: observer, console=output_console)

        with pytest.raises(WatchError, match="Failed to create file watcher"):
            await watcher.wait_for_change({tmp_path}, delay=0)

        assert observer.unscheduled
        assert not observer.is_alive()


# ====================
# Attente
# ====================


class TestWaitForChange:
    """Debloquage sur evenement ou arret de l'observateur."""

    @pytest.mark.asyncio
    async def test_unblocks_on_first_event(self, tmp_path, output_console):
        observer = FakeObserver()
        watcher = WatcherService(observer_factory=lambda: observer, console=output_console)
        dirs = {tmp_path / "a", tmp_path / "b"}

        task = asyncio.create_task(watcher.wait_for_change(dirs, delay=0))
        await _wait_started(observer)
        assert sorted(observer.scheduled) == sorted(str(d) for d in dirs)

        observer.handler.dispatch(FileCreatedEvent(str(tmp_path / "a" / "new.mkv")))
        await asyncio.wait_for(task, timeout=5)

        output = output_console.file.getvalue()
        assert f"Watching {tmp_path / 'a'} for changes..." in output
        assert "Change detected, re-sorting in 0s..." in output

    @pytest.mark.asyncio
    async def test_opened_events_are_ignored(self, tmp_path, output_console):
        observer = FakeObserver()
        watcher = WatcherService(observer_factory=lambda: observer, console=output_console)

        task = asyncio.create_task(watcher.wait_for_change({tmp_path}, delay=0))
        await _wait_started(observer)

        observer.handler.dispatch(FileOpenedEvent(str(tmp_path / "a.mkv")))
        await asyncio.sleep(0.05)
        assert not task.done()

        observer.handler.dispatch(FileCreatedEvent(str(tmp_path / "b.mkv")))
        await asyncio.wait_for(task, timeout=5)

    @pytest.mark.asyncio
    async def test_dead_observer_unblocks(self, tmp_path, output_console):
        """Un observateur arrete est traite comme la branche erreur."""
        observer = FakeObserver()
        watcher = WatcherService(observer_factory=lambda: observer, console=output_console)

        task = asyncio.create_task(watcher.wait_for_change({tmp_path}, delay=0))
        await _wait_started(observer)
        observer.alive = False

        await asyncio.wait_for(task, timeout=5)

    @pytest.mark.asyncio
    async def test_debounce_delay(self, tmp_path, output_console):
        observer = FakeObserver()
        watcher = WatcherService(observer_factory=lambda: observer, console=output_console)
        loop = asyncio.get_running_loop()

        task = asyncio.create_task(watcher.wait_for_change({tmp_path}, delay=0.2))
        await _wait_started(observer)
        observer.handler.dispatch(FileCreatedEvent(str(tmp_path / "x.mkv")))
        started = loop.time()
        await asyncio.wait_for(task, timeout=5)

        assert loop.time() - started >= 0.2


class TestChangeHandler:
    def test_only_first_event_resolves(self):
        loop = asyncio.new_event_loop()
        try:
            future = loop.create_future()
            handler = ChangeHandler(loop, future)

            handler._notify(FileCreatedEvent("/a"))
            handler._notify(FileCreatedEvent("/b"))

            assert future.result().src_path == "/a"
        finally:
            loop.close()


class TestObserverFactory:
    def test_polling_factory(self):
        assert default_observer_factory(polling=True) is PollingObserver

    def test_native_factory(self):
        assert default_observer_factory(polling=False) is not PollingObserver


class TestRealObserver:
    """Integration avec le PollingObserver de watchdog."""

    @pytest.mark.asyncio
    async def test_polling_observer_detects_new_file(self, tmp_path, output_console):
        watcher = WatcherService(
            observer_factory=lambda: PollingObserver(timeout=0.1),
            console=output_console,
        )

        task = asyncio.create_task(watcher.wait_for_change({tmp_path}, delay=0))
        await asyncio.sleep(0.5)
        (tmp_path / "Show.Name.S01E05.mkv").write_bytes(b"x")

        await asyncio.wait_for(task, timeout=10)
        assert "Change detected" in output_console.file.getvalue()
