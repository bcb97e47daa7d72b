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
PEM decoding and OpenSSL legacy PEM decryption.

Encrypted blocks carry the RFC 1421 style headers written by OpenSSL::

    Proc-Type: 4,ENCRYPTED
    DEK-Info: AES-128-CBC,CFCD34D9C9D957C52B6FF12E2FD2AECB

Only the first block of a file is located and its headers read here; base64
decoding and decryption are left to Crypto.IO.PEM.
"""

import re

from Crypto.IO import PEM

from ..errors import NoPemBlock, NoPasswordSupplied, DecryptionFailed

DEK_INFO = "DEK-Info"

_PEM_RE = re.compile(
    r"-----BEGIN ([^\r\n-]+)-----[ \t]*\r?\n(.*?)-----END \1-----",
    re.DOTALL)

class PemBlock(object):
    """
    A decoded PEM block: type label, header fields and the raw body. text
    holds the armoured block as found in the file.
    """

    def __init__(self, type, headers, body, text=None):
        self.type = type
        self.headers = headers
        self.body = body
        self.text = text

    def __repr__(self):
        return "<PemBlock type={!r}, headers={}, bodylen={}>".format(
            self.type, sorted(self.headers), len(self.body))

def wipe(buf):
    """Zero a mutable buffer in place. Immutable bytes are left alone."""
    if isinstance(buf, bytearray):
        for i in range(len(buf)):
            buf[i] = 0

def _parse_headers(lines):
    headers = {}
    last = None
    i = 0
    while i < len(lines):
        line = lines[i]
        if not line.strip():
            # blank line separates the headers from the body
            if headers:
                i += 1
            break
        if line[:1] in (" ", "\t") and last is not None:
            headers[last] += line.strip()
        elif ":" in line:
            name, value = line.split(":", 1)
            last = name.strip()
            headers[last] = value.strip()
        else:
            break
        i += 1
    return headers, lines[i:]

def decode(data):
    """Decode the first PEM block found in data. Anything before or after
    the block is ignored."""
    if isinstance(data, bytes):
        try:
            data = data.decode('ascii')
        except UnicodeDecodeError:
            # binary junk around the block is allowed
            data = data.decode('latin-1')
    m = _PEM_RE.search(data)
    if m is None:
        raise NoPemBlock()

    label = m.group(1)
    headers, rest = _parse_headers(m.group(2).splitlines())
    # headers stripped, so PEM.decode only base64 decodes the body
    armour = "-----BEGIN {0}-----\n{1}\n-----END {0}-----\n".format(
        label, "\n".join(rest))
    try:
        body = PEM.decode(armour)[0]
    except (ValueError, IndexError):
        raise NoPemBlock("no PEM block found: invalid base64 body")

    return PemBlock(label, headers, body, m.group(0))

def is_encrypted(block):
    return DEK_INFO in block.headers

def decrypt(block, password):
    """
    Decrypt an encrypted PEM block. Returns the plaintext DER as a bytearray
    so the caller can wipe it once done.
    """
    if password is None:
        raise NoPasswordSupplied()
    if block.text is None:
        raise DecryptionFailed()

    # every failure below reads the same, whatever its cause
    try:
        der, _, encrypted = PEM.decode(block.text, passphrase=bytes(password))
    except (ValueError, TypeError, IndexError, KeyError):
        raise DecryptionFailed() from None
    if not encrypted:
        raise DecryptionFailed()
    return bytearray(der)
