from typing import Any, Optional  # noqa


class WatcherError(Exception):
    pass


class ConfigError(WatcherError):
    pass


class FileMetadataError(WatcherError, IOError):
    def __init__(self, path, message):
        # type: (str, str) -> None
        super(FileMetadataError, self).__init__(message)
        self.path = path


class PipelineError(WatcherError):
    """Raised when the engine stops because a file could not be processed."""
    def __init__(self, reason, path=None):
        # type: (str, Optional[str]) -> None
        self.reason = reason
        self.path = path
        if path is not None:
            message = '%s: %s' % (path, reason)
        else:
            message = reason
        super(PipelineError, self).__init__(message)


class StepFailedError(PipelineError):
    pass


class RetriesExhaustedError(PipelineError):
    pass


class StepOutcome(object):
    """Result of a decode or transform step.

    A step returns exactly one of ``Done``, ``Retry`` or ``Fail``.
    """
    def __eq__(self, other):
        # type: (Any) -> bool
        return type(self) is type(other) and vars(self) == vars(other)

    def __ne__(self, other):
        # type: (Any) -> bool
        return not self == other

    def __repr__(self):
        # type: () -> str
        return '%s(%r)' % (self.__class__.__name__,
                           list(vars(self).values())[0])


class Done(StepOutcome):
    def __init__(self, value):
        # type: (Any) -> None
        self.value = value


class Retry(StepOutcome):
    def __init__(self, reason):
        # type: (str) -> None
        self.reason = reason


class Fail(StepOutcome):
    def __init__(self, reason):
        # type: (str) -> None
        self.reason = reason


class FinalizeResult(object):
    """Result of a finalize step, either ``Ok`` or ``Err``."""
    ok = False

    @classmethod
    def coerce(cls, result):
        # type: (Any) -> FinalizeResult
        # Plain functions may return None for success or a reason string.
        if isinstance(result, FinalizeResult):
            return result
        if result is None:
            return Ok()
        if isinstance(result, str):
            return Err(result)
        raise TypeError(
            'finalize step must return Ok, Err, None or str, not %s'
            % type(result).__name__)


class Ok(FinalizeResult):
    ok = True

    def __eq__(self, other):
        # type: (Any) -> bool
        return isinstance(other, Ok)

    def __ne__(self, other):
        # type: (Any) -> bool
        return not self == other

    def __repr__(self):
        # type: () -> str
        return 'Ok()'


class Err(FinalizeResult):
    def __init__(self, reason):
        # type: (str) -> None
        self.reason = reason

    def __eq__(self, other):
        # type: (Any) -> bool
        return isinstance(other, Err) and self.reason == other.reason

    def __ne__(self, other):
        # type: (Any) -> bool
        return not self == other

    def __repr__(self):
        # type: () -> str
        return 'Err(%r)' % self.reason
