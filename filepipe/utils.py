import os
import time

from filepipe.watcher.shared import FileMetadataError


class OSUtils(object):
    def mtime(self, path):
        # type: (str) -> int
        try:
            stat_result = os.stat(path)
        except OSError as e:
            raise FileMetadataError(
                path, 'failed to read metadata of %s: %s' % (path, e))
        return stat_result.st_mtime_ns

    def sleep(self, seconds):
        # type: (float) -> None
        time.sleep(seconds)
