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
Private key structure parsers.

Encrypted PEM blocks are dispatched on their type label alone; the closed set
of supported labels is :class:`KeyType`. Unencrypted blocks go through
:func:`parse_unencrypted`, which additionally understands the OpenSSH native
container and unencrypted PKCS#8.
"""

from enum import Enum

from Crypto.IO import PEM, PKCS8
from Crypto.PublicKey import RSA, DSA, ECC
import paramiko

from ..errors import MalformedKeyStructure, UnsupportedKeyType

OPENSSH_LABEL = "OPENSSH PRIVATE KEY"
PKCS8_LABEL = "PRIVATE KEY"

OPENSSH_MAGIC = b"openssh-key-v1\x00"

OID_RSA = "1.2.840.113549.1.1.1"
OID_DSA = "1.2.840.10040.4.1"
OID_EC = "1.2.840.10045.2.1"
OID_ED25519 = "1.3.101.112"

# pycryptodome raises ZeroDivisionError for a zero modulus
_PARSE_ERRORS = (ValueError, IndexError, TypeError, ArithmeticError)

def _private(key):
    if not key.has_private():
        raise ValueError("not a private key")
    return key

def _parse_rsa(der):
    return _private(RSA.import_key(der))

def _parse_ec(der):
    return _private(ECC.import_key(der))

def _parse_dsa(der):
    return _private(DSA.import_key(der))

class KeyType(Enum):
    RSA = "RSA PRIVATE KEY"
    EC = "EC PRIVATE KEY"
    DSA = "DSA PRIVATE KEY"

    @classmethod
    def from_label(cls, label):
        try:
            return cls(label)
        except ValueError:
            raise UnsupportedKeyType(label) from None

    def parse(self, der):
        """Parse the DER structure implied by this key type."""
        parser = _PARSERS[self]
        try:
            return parser(bytes(der))
        except _PARSE_ERRORS as e:
            raise MalformedKeyStructure(
                "malformed {}: {}".format(self.value, e)) from e

_PARSERS = {
    KeyType.RSA: _parse_rsa,
    KeyType.EC: _parse_ec,
    KeyType.DSA: _parse_dsa,
}

def parse(label, der):
    return KeyType.from_label(label).parse(der)

def _parse_pkcs8(der):
    try:
        oid = PKCS8.unwrap(der)[0]
    except _PARSE_ERRORS as e:
        raise MalformedKeyStructure("malformed PKCS#8 key: {}".format(e)) from e

    if oid == OID_RSA:
        parser = _parse_rsa
    elif oid == OID_DSA:
        parser = _parse_dsa
    elif oid in (OID_EC, OID_ED25519):
        parser = _parse_ec
    else:
        raise UnsupportedKeyType(PKCS8_LABEL, "algorithm {}".format(oid))

    try:
        return parser(der)
    except _PARSE_ERRORS as e:
        raise MalformedKeyStructure("malformed PKCS#8 key: {}".format(e)) from e

def _openssh_dss(priv):
    # Crypto.PublicKey.DSA does not read the OpenSSH container
    p, q, g, y, x = [priv.get_mpint() for i in range(5)]
    return DSA.construct((y, g, p, q, x))

def parse_openssh(data):
    """Parse an unencrypted openssh-key-v1 container holding one key."""
    data = bytes(data)
    if not data.startswith(OPENSSH_MAGIC):
        raise MalformedKeyStructure("invalid OpenSSH private key header")

    try:
        m = paramiko.Message(data[len(OPENSSH_MAGIC):])
        cipher = m.get_text()
        kdf = m.get_text()
        m.get_string()  # kdf options
        if cipher != "none" or kdf != "none":
            raise UnsupportedKeyType(OPENSSH_LABEL,
                                     "passphrase protected ({})".format(cipher))
        if m.get_int() != 1:
            raise MalformedKeyStructure("OpenSSH key file must hold exactly one key")
        m.get_string()  # public key blob

        priv = paramiko.Message(m.get_string())
        if priv.get_int() != priv.get_int():
            raise MalformedKeyStructure("OpenSSH private section check mismatch")
        ktype = priv.get_text()
    except _PARSE_ERRORS as e:
        raise MalformedKeyStructure("malformed OpenSSH key: {}".format(e)) from e

    try:
        if ktype == "ssh-rsa":
            return _private(RSA.import_key(PEM.encode(data, OPENSSH_LABEL)))
        if ktype.startswith("ecdsa-sha2-") or ktype == "ssh-ed25519":
            return _private(ECC.import_key(PEM.encode(data, OPENSSH_LABEL)))
        if ktype == "ssh-dss":
            return _openssh_dss(priv)
    except _PARSE_ERRORS as e:
        raise MalformedKeyStructure("malformed {} key: {}".format(ktype, e)) from e
    raise UnsupportedKeyType(OPENSSH_LABEL, ktype)

def parse_unencrypted(block):
    """Parse a PEM block that carries no encryption header."""
    if block.type == OPENSSH_LABEL:
        return parse_openssh(block.body)
    if block.type == PKCS8_LABEL:
        return _parse_pkcs8(block.body)
    return parse(block.type, block.body)
