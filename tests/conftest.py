import base64
import os
import shutil
import socket
import struct
import tempfile
import threading
from pathlib import Path

import paramiko
import pytest

from sshutil import debug

KEY_DIR = Path(__file__).parent / 'testdata' / 'keys'


def key_path(name):
    return str(KEY_DIR / name)


def read_pub(name):
    """Return (type, base64 blob) from the companion .pub file."""
    parts = (KEY_DIR / (name + '.pub')).read_text().split()
    assert len(parts) >= 2
    return parts[0], parts[1]


@pytest.fixture
def password():
    return (KEY_DIR / 'password').read_text().strip()


@pytest.fixture(autouse=True)
def reset_debug():
    yield
    debug.set_debug(None)


def _recv_all(conn, n):
    data = b''
    while len(data) < n:
        chunk = conn.recv(n - len(data))
        if not chunk:
            raise EOFError
        data += chunk
    return data


@pytest.fixture
def agent_socket():
    """Path of a unix socket served by a minimal SSH agent that answers the
    identities request with the keys in the rsa and ecdsa .pub files."""
    tmpdir = tempfile.mkdtemp(prefix='sshutil')
    path = os.path.join(tmpdir, 'agent.sock')
    server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    server.bind(path)
    server.listen(1)

    identities = [read_pub('rsa'), read_pub('ecdsa')]
    m = paramiko.Message()
    m.add_byte(bytes([12]))  # SSH2_AGENT_IDENTITIES_ANSWER
    m.add_int(len(identities))
    for _, blob in identities:
        m.add_string(base64.b64decode(blob))
        m.add_string('test')
    answer = paramiko.Message()
    answer.add_string(m.asbytes())
    answer = answer.asbytes()

    def serve():
        try:
            conn, _ = server.accept()
        except OSError:
            return
        with conn:
            try:
                length = struct.unpack('>I', _recv_all(conn, 4))[0]
                _recv_all(conn, length)
                conn.sendall(answer)
                conn.recv(1)
            except (EOFError, OSError):
                pass

    t = threading.Thread(target=serve, daemon=True)
    t.start()
    yield path
    server.close()
    t.join(timeout=2)
    shutil.rmtree(tmpdir, ignore_errors=True)
