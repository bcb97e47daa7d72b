# Copyright 2026 LaczenJMS
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""
Process wide debug sink.

Nothing is logged by default. Point the sink at a ``logging.Logger`` (or any
object with a ``debug(msg, *args)`` method) with :func:`set_debug`.
"""

import threading

class _RWLock(object):
    """Many readers or one writer."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    def acquire_read(self):
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            while self._writing or self._readers > 0:
                self._cond.wait()
            self._writing = True

    def release_write(self):
        with self._cond:
            self._writing = False
            self._cond.notify_all()

class Debugger(object):

    def __init__(self):
        self._lock = _RWLock()
        self._logger = None

    @property
    def logger(self):
        self._lock.acquire_read()
        try:
            return self._logger
        finally:
            self._lock.release_read()

    def set_log(self, logger):
        self._lock.acquire_write()
        try:
            self._logger = logger
        finally:
            self._lock.release_write()

    def log(self, fmt, *args):
        logger = self.logger
        if logger is None:
            return
        logger.debug(fmt, *args)

_debug = Debugger()

def set_debug(logger):
    """Activate the sshutil debugger with logger. Pass None to silence it
    again. The logger itself must be thread-safe, as logging.Logger is."""
    _debug.set_log(logger)

def get_debug():
    return _debug.logger

def log(fmt, *args):
    _debug.log(fmt, *args)
