from typing import Any, Callable, List, Optional  # noqa

from filepipe.utils import OSUtils
from filepipe.watcher.shared import ConfigError


DEFAULT_INTERVAL = 1.0


class WatchedFile(object):
    """A single file and the steps run whenever it changes.

    The file is stat'd as soon as it is created, so a path that does not
    exist or whose metadata cannot be read raises ``FileMetadataError``
    here rather than once the engine is running.
    """
    def __init__(self, path, finalize_step, osutils=None):
        # type: (str, Callable, Optional[OSUtils]) -> None
        if not callable(finalize_step):
            raise ConfigError('finalize step for %s is not callable' % path)
        if osutils is None:
            osutils = OSUtils()
        self._path = path
        self.last_modified = osutils.mtime(path)
        self.transform_steps = []  # type: List[Callable]
        self.finalize_step = finalize_step

    @classmethod
    def create(cls, path, finalize_step, osutils=None):
        # type: (str, Callable, Optional[OSUtils]) -> WatchedFile
        return cls(path, finalize_step, osutils=osutils)

    @property
    def path(self):
        # type: () -> str
        return self._path

    def add_transform(self, step):
        # type: (Callable) -> WatchedFile
        if not callable(step):
            raise ConfigError(
                'transform step for %s is not callable' % self._path)
        self.transform_steps.append(step)
        return self

    def __repr__(self):
        # type: () -> str
        return 'WatchedFile(path=%r, transforms=%s)' % (
            self._path, len(self.transform_steps))


class WatchSet(object):
    """Ordered files plus the polling configuration shared by all of them."""
    def __init__(self, decode_step):
        # type: (Callable) -> None
        if not callable(decode_step):
            raise ConfigError('decode step is not callable')
        self.decode_step = decode_step
        self.files = []  # type: List[WatchedFile]
        self.interval = DEFAULT_INTERVAL
        self.max_retries = None  # type: Optional[int]
        self.run_once = False

    @classmethod
    def create(cls, decode_step):
        # type: (Callable) -> WatchSet
        return cls(decode_step)

    def add_file(self, watched_file):
        # type: (WatchedFile) -> WatchSet
        # Duplicate paths are allowed, each entry is processed on its own.
        self.files.append(watched_file)
        return self

    def with_interval(self, seconds):
        # type: (float) -> WatchSet
        if isinstance(seconds, bool) or \
                not isinstance(seconds, (int, float)):
            raise ConfigError('interval must be a number of seconds, got %r'
                              % (seconds,))
        if seconds < 0:
            raise ConfigError('interval must be non-negative, got %r'
                              % (seconds,))
        self.interval = float(seconds)
        return self

    def with_max_retries(self, max_retries):
        # type: (Optional[int]) -> WatchSet
        if max_retries is not None:
            if isinstance(max_retries, bool) or \
                    not isinstance(max_retries, int) or max_retries < 0:
                raise ConfigError(
                    'max_retries must be a non-negative integer, got %r'
                    % (max_retries,))
        self.max_retries = max_retries
        return self

    def run_only_once(self, run_once=True):
        # type: (bool) -> WatchSet
        if not isinstance(run_once, bool):
            raise ConfigError('run_once must be true or false, got %r'
                              % (run_once,))
        self.run_once = run_once
        return self

    def launch(self, osutils=None, reporter=None):
        # type: (Optional[OSUtils], Optional[Callable[[str], Any]]) -> None
        from filepipe.watcher.stat import PipelineEngine
        PipelineEngine(self, osutils=osutils, reporter=reporter).run()
