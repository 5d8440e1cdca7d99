from filepipe.watcher.registry import WatchedFile, WatchSet
from filepipe.watcher.shared import (
    ConfigError,
    Done,
    Err,
    Fail,
    FileMetadataError,
    Ok,
    PipelineError,
    Retry,
    RetriesExhaustedError,
    StepFailedError,
    WatcherError,
)
from filepipe.watcher.stat import PipelineEngine


__version__ = '0.1.0'

__all__ = [
    'ConfigError',
    'Done',
    'Err',
    'Fail',
    'FileMetadataError',
    'Ok',
    'PipelineEngine',
    'PipelineError',
    'Retry',
    'RetriesExhaustedError',
    'StepFailedError',
    'WatchSet',
    'WatchedFile',
    'WatcherError',
]
