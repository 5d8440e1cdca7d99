import enum
import logging

from typing import Any, Callable, List, Optional  # noqa

from filepipe.utils import OSUtils
from filepipe.watcher.registry import WatchedFile, WatchSet  # noqa
from filepipe.watcher.shared import (
    Done,
    Fail,
    FinalizeResult,
    Retry,
    RetriesExhaustedError,
    StepFailedError,
)


LOG = logging.getLogger(__name__)


class FileState(enum.Enum):
    NEVER_RUN = 'never-run'
    SEEN = 'seen'


class RetryBudget(object):
    """Remaining retries for a single step invocation.

    ``None`` means retries are unbounded.
    """
    def __init__(self, max_retries):
        # type: (Optional[int]) -> None
        self._remaining = max_retries

    def consume(self):
        # type: () -> bool
        """Use up one retry, returning False once none are left."""
        if self._remaining is None:
            return True
        self._remaining -= 1
        return self._remaining > 0


class PipelineEngine(object):
    def __init__(self, watch_set, osutils=None, reporter=None):
        # type: (WatchSet, Optional[OSUtils], Optional[Callable[[str], Any]]) -> None  # noqa
        if osutils is None:
            osutils = OSUtils()
        if reporter is None:
            reporter = LOG.warning
        self._watch_set = watch_set
        self._osutils = osutils
        self._reporter = reporter
        self._states = [FileState.NEVER_RUN
                        for _ in watch_set.files]  # type: List[FileState]

    def run(self):
        # type: () -> None
        LOG.info('Watching %s file(s) every %ss',
                 len(self._watch_set.files), self._watch_set.interval)
        while True:
            self.poll()
            if self._watch_set.run_once:
                LOG.debug('Single pass complete, stopping.')
                return

    def poll(self):
        # type: () -> int
        """Run one pass over every watched file.

        Returns the number of files that were processed.
        """
        files = self._watch_set.files
        # Files may be added to the watch set after the engine was built.
        self._states.extend(
            [FileState.NEVER_RUN] * (len(files) - len(self._states)))
        processed = 0
        for index, watched_file in enumerate(files):
            if not self._check_file(index, watched_file):
                continue
            self._process(watched_file)
            processed += 1
            self._osutils.sleep(self._watch_set.interval)
        return processed

    def _check_file(self, index, watched_file):
        # type: (int, WatchedFile) -> bool
        new_mtime = self._osutils.mtime(watched_file.path)
        if self._states[index] is FileState.NEVER_RUN:
            self._states[index] = FileState.SEEN
        elif new_mtime == watched_file.last_modified:
            return False
        # Recorded before any step runs so a failed run is not repeated
        # for the same change.
        watched_file.last_modified = new_mtime
        return True

    def _process(self, watched_file):
        # type: (WatchedFile) -> None
        path = watched_file.path
        LOG.info('Processing %s', path)
        decode_step = self._watch_set.decode_step
        value = self._run_step(
            path, lambda step=decode_step, path=path: step(path))
        for step in watched_file.transform_steps:
            value = self._run_step(
                path, lambda step=step, value=value: step(value))
        self._finalize(watched_file, value)
        LOG.debug('Finished processing %s', path)

    def _run_step(self, path, step):
        # type: (str, Callable[[], Any]) -> Any
        budget = RetryBudget(self._watch_set.max_retries)
        while True:
            outcome = step()
            if isinstance(outcome, Done):
                return outcome.value
            if isinstance(outcome, Fail):
                raise StepFailedError(outcome.reason, path=path)
            if not isinstance(outcome, Retry):
                raise TypeError(
                    'step must return Done, Retry or Fail, not %s'
                    % type(outcome).__name__)
            if not budget.consume():
                raise RetriesExhaustedError(
                    'no more retries, last reason: %s' % outcome.reason,
                    path=path)
            self._report(outcome.reason)
            self._osutils.sleep(self._watch_set.interval)

    def _finalize(self, watched_file, value):
        # type: (WatchedFile, Any) -> None
        budget = RetryBudget(self._watch_set.max_retries)
        while True:
            result = FinalizeResult.coerce(watched_file.finalize_step(value))
            if result.ok:
                return
            if not budget.consume():
                raise RetriesExhaustedError(
                    'no more retries, last reason: %s' % result.reason,
                    path=watched_file.path)
            self._report(result.reason)
            self._osutils.sleep(self._watch_set.interval)

    def _report(self, reason):
        # type: (str) -> None
        try:
            self._reporter(reason)
        except Exception:
            LOG.debug('Reporter raised while reporting %r', reason,
                      exc_info=True)
