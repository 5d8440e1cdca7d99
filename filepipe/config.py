"""Build a WatchSet from a YAML file.

Steps are referenced by import path, e.g. ``mypkg.steps:normalize``::

    interval: 0.5
    max_retries: 3
    run_once: false
    decode: mypkg.steps:read_json
    files:
      - path: data/input.json
        finalize: mypkg.steps:publish
        transforms:
          - mypkg.steps:normalize

Relative file paths are resolved against the directory of the config file.
"""
import importlib
import logging
import os

from typing import Any, Callable, Dict, Optional  # noqa

import yaml

from filepipe.utils import OSUtils
from filepipe.watcher.registry import WatchedFile, WatchSet
from filepipe.watcher.shared import ConfigError


LOG = logging.getLogger(__name__)


def load_yaml(path):
    # type: (str) -> Dict[str, Any]
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (IOError, OSError) as e:
        raise ConfigError('Unable to read config file %s: %s' % (path, e))
    except yaml.YAMLError as e:
        raise ConfigError('Invalid YAML in %s: %s' % (path, e))
    if not isinstance(data, dict):
        raise ConfigError('Config must be a mapping: %s' % path)
    return data


def resolve_step(reference):
    # type: (str) -> Callable
    if not isinstance(reference, str) or ':' not in reference:
        raise ConfigError(
            'Step reference must look like "module:attribute", got %r'
            % (reference,))
    module_name, _, attr_path = reference.partition(':')
    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError('Unable to import %s: %s' % (module_name, e))
    for attr in attr_path.split('.'):
        try:
            obj = getattr(obj, attr)
        except AttributeError:
            raise ConfigError('%s has no attribute %s' % (module_name,
                                                          attr_path))
    if not callable(obj):
        raise ConfigError('%s is not callable' % reference)
    return obj


def _required(mapping, key, where):
    # type: (Dict[str, Any], str, str) -> Any
    try:
        return mapping[key]
    except KeyError:
        raise ConfigError('Missing required key "%s" in %s' % (key, where))


def build_watch_set(config, base_dir='.', osutils=None):
    # type: (Dict[str, Any], str, Optional[OSUtils]) -> WatchSet
    watch_set = WatchSet(resolve_step(_required(config, 'decode', 'config')))
    if 'interval' in config:
        watch_set.with_interval(config['interval'])
    if 'max_retries' in config:
        watch_set.with_max_retries(config['max_retries'])
    if 'run_once' in config:
        watch_set.run_only_once(config['run_once'])
    files = _required(config, 'files', 'config')
    if not isinstance(files, list):
        raise ConfigError('"files" must be a list')
    for i, entry in enumerate(files):
        where = 'files[%s]' % i
        if not isinstance(entry, dict):
            raise ConfigError('%s must be a mapping' % where)
        path = _required(entry, 'path', where)
        if not isinstance(path, str):
            raise ConfigError('%s.path must be a string' % where)
        transforms = entry.get('transforms') or []
        if not isinstance(transforms, list):
            raise ConfigError('%s.transforms must be a list' % where)
        path = os.path.join(base_dir, path)
        watched = WatchedFile(
            path, resolve_step(_required(entry, 'finalize', where)),
            osutils=osutils)
        for reference in transforms:
            watched.add_transform(resolve_step(reference))
        watch_set.add_file(watched)
        LOG.debug('Registered %r', watched)
    return watch_set


def load_watch_set(path, osutils=None):
    # type: (str, Optional[OSUtils]) -> WatchSet
    config = load_yaml(path)
    base_dir = os.path.dirname(os.path.abspath(path))
    return build_watch_set(config, base_dir=base_dir, osutils=osutils)
