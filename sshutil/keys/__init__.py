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
Private key loading for SSH client authentication.

A KeyPair names a private key file and, optionally, the password protecting
it. Calling KeyPair.signer() reads the file and returns a Signer, or raises
KeyFileError carrying the file name and the underlying error.
"""

import os.path

from .. import debug
from ..errors import (SSHUtilError, KeyFileError, FileUnreadable,
                      DecryptionFailed)
from . import pem
from . import keytypes
from .signer import Signer, PublicKey, Signature

class KeyPair(object):

    __slots__ = ('_file', '_password')

    def __init__(self, file, password=None):
        if isinstance(password, str):
            password = password.encode('utf-8')
        elif isinstance(password, (bytes, bytearray)):
            password = bytes(password)
        elif password is not None:
            raise TypeError("password must be str or bytes, not {}".format(
                type(password).__name__))
        self._file = file
        self._password = password

    @property
    def file(self):
        return self._file

    @property
    def password(self):
        return self._password

    def __repr__(self):
        return "<KeyPair file={!r}, encrypted={}>".format(
            self._file, self._password is not None)

    def signer(self):
        """Load the key file and return a Signer for it."""
        try:
            s = self._load()
        except SSHUtilError as e:
            debug.log("sshutil: failed to load key %s: %s", self._file, e)
            raise KeyFileError(self._file, e) from e
        debug.log("sshutil: loaded %s key from %s", s.public_key().type(), self._file)
        return s

    def _load(self):
        try:
            with open(self._file, 'rb') as f:
                raw = f.read()
        except OSError as e:
            raise FileUnreadable(str(e)) from e

        block = pem.decode(raw)
        encrypted = pem.is_encrypted(block)
        debug.log("sshutil: loading %s key from %s (encrypted: %s)",
                  block.type, self._file, encrypted)

        if not encrypted:
            return Signer(keytypes.parse_unencrypted(block))

        key_type = keytypes.KeyType.from_label(block.type)
        der = pem.decrypt(block, self._password)
        try:
            key = key_type.parse(der)
        except SSHUtilError as e:
            # indistinguishable from a wrong password with lucky padding
            raise DecryptionFailed() from e
        finally:
            pem.wipe(der)
        return Signer(key)

def key(file):
    """KeyPair for a key file that is not password protected."""
    return KeyPair(file)

def encrypted_key(file, password):
    """KeyPair for a password protected key file."""
    return KeyPair(file, password)

def ssh_dir(file):
    """Resolve file relative to the current user's ~/.ssh directory. Falls
    back to file itself if the current user cannot be determined."""
    try:
        import pwd
        home = pwd.getpwuid(os.getuid()).pw_dir
    except (ImportError, KeyError) as e:
        debug.log("unable to find current user: %s", e)
        return file
    return os.path.normpath(os.path.join(home, ".ssh", file))

def user_key(file):
    return key(ssh_dir(file))

def encrypted_user_key(file, password):
    return encrypted_key(ssh_dir(file), password)

def load(path, passwd=None):
    """Load the key at path and return its Signer."""
    return KeyPair(path, passwd).signer()
