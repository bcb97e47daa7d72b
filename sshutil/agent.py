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
SSH agent access.
"""

import os
import socket

import paramiko.agent

SSH_AGENT_SOCKET = "SSH_AUTH_SOCK"

class SocketAgent(paramiko.agent.AgentSSH):
    """:py:class:`paramiko.agent.AgentSSH` talking to an agent over an
    already connected socket. The agent's identities are fetched on
    construction."""

    def __init__(self, conn):
        paramiko.agent.AgentSSH.__init__(self)
        self._connect(conn)

    def close(self):
        self._close()

def agent_with_socket(path):
    """Connect to the SSH agent listening on the unix socket path. Raises
    OSError if the socket cannot be dialed."""
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.connect(path)
        return SocketAgent(sock)
    except Exception:
        sock.close()
        raise

def std_agent():
    """Connect to the agent named by SSH_AUTH_SOCK."""
    return agent_with_socket(os.environ.get(SSH_AGENT_SOCKET, ""))
