import sys

import mock
import pytest

from filepipe.utils import OSUtils


@pytest.fixture
def osutils():
    # Real mtimes, but sleeps are recorded instead of blocking.
    real = OSUtils()
    fake = mock.Mock(spec=OSUtils)
    fake.mtime.side_effect = real.mtime
    return fake


@pytest.fixture
def steps_module(tmpdir, monkeypatch):
    """Writes an importable ``teststeps`` module and returns its dir."""
    monkeypatch.delitem(sys.modules, 'teststeps',
                        raising=False)
    moddir = tmpdir.mkdir('mods')
    moddir.join('teststeps.py').write(STEPS_SOURCE)
    monkeypatch.syspath_prepend(str(moddir))
    return moddir


STEPS_SOURCE = '''
from filepipe import Done, Err, Fail, Ok, Retry


def read_text(path):
    with open(path) as f:
        return Done(f.read())


def upper(value):
    return Done(value.upper())


def always_fail(value):
    return Fail('bad input %s' % value.strip())


def write_out(value):
    with open(value_target(), 'a') as f:
        f.write(value)
    return Ok()


def value_target():
    import os
    return os.environ['FILEPIPE_TEST_OUT']


not_callable = 42
'''
