import os

import pytest

from filepipe.config import (
    build_watch_set,
    load_watch_set,
    load_yaml,
    resolve_step,
)
from filepipe.watcher.shared import ConfigError


CONFIG = '''
interval: 0.5
max_retries: 3
run_once: true
decode: teststeps:read_text
files:
  - path: input.txt
    finalize: teststeps:write_out
    transforms:
      - teststeps:upper
  - path: input.txt
    finalize: teststeps:write_out
'''


def test_load_watch_set(tmpdir, steps_module):
    import teststeps
    tmpdir.join('input.txt').write('hello')
    config = tmpdir.join('filepipe.yaml')
    config.write(CONFIG)

    watch_set = load_watch_set(str(config))

    assert watch_set.interval == 0.5
    assert watch_set.max_retries == 3
    assert watch_set.run_once is True
    assert watch_set.decode_step is teststeps.read_text
    assert [f.path for f in watch_set.files] == [
        str(tmpdir.join('input.txt'))] * 2
    assert watch_set.files[0].transform_steps == [teststeps.upper]
    assert watch_set.files[1].transform_steps == []
    assert watch_set.files[0].finalize_step is teststeps.write_out


def test_defaults_when_options_missing(tmpdir, steps_module):
    tmpdir.join('input.txt').write('hello')
    watch_set = build_watch_set({
        'decode': 'teststeps:read_text',
        'files': [{'path': 'input.txt', 'finalize': 'teststeps:write_out'}],
    }, base_dir=str(tmpdir))
    assert watch_set.interval == 1.0
    assert watch_set.max_retries is None
    assert watch_set.run_once is False


@pytest.mark.parametrize('reference', [
    'teststeps',
    'no_such_module_anywhere:func',
    'teststeps:missing',
    'teststeps:not_callable',
    42,
])
def test_resolve_step_errors(steps_module, reference):
    with pytest.raises(ConfigError):
        resolve_step(reference)


def test_resolve_step_dotted_module():
    assert resolve_step('os.path:join') is os.path.join


@pytest.mark.parametrize('config', [
    {'files': []},
    {'decode': 'teststeps:read_text'},
    {'decode': 'teststeps:read_text', 'files': 'input.txt'},
    {'decode': 'teststeps:read_text', 'files': ['input.txt']},
    {'decode': 'teststeps:read_text', 'files': [{'path': 'input.txt'}]},
    {'decode': 'teststeps:read_text', 'files': [], 'interval': -1},
    {'decode': 'teststeps:read_text', 'files': [], 'max_retries': 'x'},
    {'decode': 'teststeps:read_text', 'files': [], 'run_once': 'false'},
    {'decode': 'teststeps:read_text',
     'files': [{'path': 5, 'finalize': 'teststeps:write_out'}]},
    {'decode': 'teststeps:read_text',
     'files': [{'path': ['input.txt'], 'finalize': 'teststeps:write_out'}]},
    {'decode': 'teststeps:read_text',
     'files': [{'path': 'input.txt', 'finalize': 'teststeps:write_out',
                'transforms': 'teststeps:upper'}]},
])
def test_invalid_config(tmpdir, steps_module, config):
    tmpdir.join('input.txt').write('hello')
    with pytest.raises(ConfigError):
        build_watch_set(config, base_dir=str(tmpdir))


def test_load_yaml_rejects_non_mapping(tmpdir):
    config = tmpdir.join('list.yaml')
    config.write('- a\n- b\n')
    with pytest.raises(ConfigError):
        load_yaml(str(config))


def test_load_yaml_invalid_syntax(tmpdir):
    config = tmpdir.join('bad.yaml')
    config.write('files: [unclosed\n')
    with pytest.raises(ConfigError):
        load_yaml(str(config))


def test_load_yaml_missing_file(tmpdir):
    with pytest.raises(ConfigError):
        load_yaml(str(tmpdir.join('missing.yaml')))


def test_empty_yaml_is_empty_mapping(tmpdir):
    config = tmpdir.join('empty.yaml')
    config.write('')
    assert load_yaml(str(config)) == {}
