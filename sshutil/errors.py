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
Errors raised while loading private keys.
"""

class SSHUtilError(Exception):
    pass

class NoPemBlock(SSHUtilError):
    """Raised when the key file does not contain PEM framing."""
    def __init__(self, msg="no PEM block found"):
        super().__init__(msg)

class NoPasswordSupplied(SSHUtilError):
    """Raised to indicate that the key is password protected, but a
    password was not specified."""
    def __init__(self, msg="no password provided for encrypted key"):
        super().__init__(msg)

class DecryptionFailed(SSHUtilError):
    """Raised when an encrypted key cannot be decrypted. A wrong password
    and a corrupt or unsupported encryption header look the same."""
    def __init__(self, msg="decryption failed: incorrect password or corrupt key"):
        super().__init__(msg)

class UnsupportedKeyType(SSHUtilError):
    def __init__(self, label, reason=None):
        self.label = label
        msg = "unsupported private key type {!r}".format(label)
        if reason:
            msg = "{} ({})".format(msg, reason)
        super().__init__(msg)

class MalformedKeyStructure(SSHUtilError):
    pass

class FileUnreadable(SSHUtilError):
    pass

class KeyFileError(SSHUtilError):
    """
    Raised from any of the key loading methods, composing around the source
    error and including the filename of the key that generated it.
    """

    def __init__(self, file, err):
        self.file = file
        self.err = err
        super().__init__(file, err)

    def __str__(self):
        return "sshutil: key error \"{}\": {}".format(self.file, self.err)
