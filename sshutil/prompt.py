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
Operator prompts.
"""

import getpass
import sys

class Prompter(object):
    """
    Requests a response to a question, usually from the end user.
    """

    def prompt(self, question, echo=True):
        """Share the question and return the response. If echo is False the
        response should be suppressed in the input mechanism."""
        raise NotImplementedError

class IOPrompter(Prompter):
    """
    Prompts through a pair of streams, typically sys.stdin and sys.stdout.
    """

    def __init__(self, inp, out):
        self.inp = inp
        self.out = out

    def _isatty(self):
        isatty = getattr(self.inp, 'isatty', None)
        return isatty is not None and isatty()

    def prompt(self, question, echo=True):
        """Write the question to out and read one line from inp. If echo is
        False and inp is a terminal the typed response is not shown."""
        if not echo and self._isatty():
            return getpass.getpass(question, stream=self.out)

        self.out.write(question)
        self.out.flush()
        line = self.inp.readline()
        if isinstance(line, bytes):
            line = line.decode('utf-8')
        return line.rstrip("\r\n")

def io_prompt(inp, out):
    return IOPrompter(inp, out)

STD_PROMPTER = IOPrompter(sys.stdin, sys.stdout)
