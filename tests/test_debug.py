"""Tests for the debug sink."""

import io
import logging
import threading

from sshutil import debug


def make_logger(name, stream):
    logger = logging.getLogger(name)
    logger.handlers[:] = []
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger


def test_default_is_silent():
    d = debug.Debugger()
    assert d.logger is None
    d.log('sshutil %s', 'nothing happens')


def test_set_log_concurrently():
    d = debug.Debugger()
    loggers = [logging.getLogger('sshutil.test.fizz'),
               logging.getLogger('sshutil.test.buzz')]
    threads = [threading.Thread(target=d.set_log, args=(l,)) for l in loggers]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert d.logger in loggers


def test_log():
    d = debug.Debugger()
    buf = io.StringIO()

    t = threading.Thread(target=lambda: (
        d.set_log(make_logger('sshutil.test.log', buf)),
        d.log('fizz %s', 'buzz')))
    t.start()
    d.log('foo')
    t.join()

    assert 'fizz buzz\n' in buf.getvalue()
    d.log('bar 100%')
    assert 'bar 100%' in buf.getvalue()


def test_concurrent_readers():
    d = debug.Debugger()
    buf = io.StringIO()
    d.set_log(make_logger('sshutil.test.readers', buf))

    threads = [threading.Thread(target=d.log, args=('line %d', i)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(buf.getvalue().splitlines()) == 20


def test_module_log():
    debug.log('foo')


def test_set_debug():
    logger = logging.getLogger('sshutil.test.set_debug')
    debug.set_debug(logger)
    assert debug.get_debug() is logger
    debug.set_debug(None)
    assert debug.get_debug() is None
