import argparse
import logging
import sys

from typing import List, Optional  # noqa

from filepipe import __version__
from filepipe.config import load_watch_set
from filepipe.watcher.shared import (
    ConfigError,
    FileMetadataError,
    PipelineError,
)
from filepipe.watcher.stat import PipelineEngine


LOG = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'


def create_parser():
    # type: () -> argparse.ArgumentParser
    parser = argparse.ArgumentParser(
        prog='filepipe',
        description='Run a step pipeline over files whenever they change.')
    parser.add_argument('--version', action='version',
                        version='%(prog)s ' + __version__)
    subparsers = parser.add_subparsers(dest='command')
    subparsers.required = True

    run = subparsers.add_parser('run', help='Watch the files in a config.')
    run.add_argument('config', help='Path to the YAML config file.')
    run.add_argument('--once', action='store_true', default=None,
                     help='Process every file once, then exit.')
    run.add_argument('--interval', type=float,
                     help='Seconds to sleep between files and retries.')
    run.add_argument('--max-retries', type=int,
                     help='Retries allowed per step invocation.')
    run.add_argument('--log-level', default='INFO',
                     choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def run(args):
    # type: (argparse.Namespace) -> int
    try:
        watch_set = load_watch_set(args.config)
        if args.interval is not None:
            watch_set.with_interval(args.interval)
        if args.max_retries is not None:
            watch_set.with_max_retries(args.max_retries)
        if args.once:
            watch_set.run_only_once(True)
    except (ConfigError, FileMetadataError) as e:
        LOG.error('%s', e)
        return 2
    try:
        PipelineEngine(watch_set).run()
    except PipelineError as e:
        LOG.error('Pipeline stopped: %s', e)
        return 1
    except FileMetadataError as e:
        LOG.error('%s', e)
        return 2
    except KeyboardInterrupt:
        LOG.info('Interrupted, stopping.')
    return 0


def main(argv=None):
    # type: (Optional[List[str]]) -> int
    args = create_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format=LOG_FORMAT)
    return run(args)


if __name__ == '__main__':
    sys.exit(main())
