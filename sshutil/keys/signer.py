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
Signing identities built from parsed private keys.
"""

import base64
from collections import namedtuple

from Crypto.Hash import SHA1, SHA256, SHA384, SHA512
from Crypto.PublicKey.DSA import DsaKey
from Crypto.PublicKey.ECC import EccKey
from Crypto.PublicKey.RSA import RsaKey
from Crypto.Signature import DSS, eddsa, pkcs1_15
from Crypto.Util.number import long_to_bytes
import paramiko

from ..errors import UnsupportedKeyType

# normalised pycryptodome curve name: (ssh curve id, hash, field bytes)
ECDSA_CURVES = {
    "p256": ("nistp256", SHA256, 32),
    "p384": ("nistp384", SHA384, 48),
    "p521": ("nistp521", SHA512, 66),
}

RSA_SIGNATURE_HASHES = {
    "ssh-rsa": SHA1,
    "rsa-sha2-256": SHA256,
    "rsa-sha2-512": SHA512,
}

RSA_SIGNATURE_FORMAT = "rsa-sha2-256"

def _curve(key):
    return key.curve.lower().replace("nist ", "").replace("-", "")

def _key_kind(key):
    if isinstance(key, RsaKey):
        return 'rsa'
    if isinstance(key, DsaKey):
        return 'dsa'
    if isinstance(key, EccKey):
        curve = _curve(key)
        if curve == "ed25519":
            return 'ed25519'
        if curve in ECDSA_CURVES:
            return 'ecdsa'
        raise UnsupportedKeyType("EC PRIVATE KEY", "curve {}".format(key.curve))
    raise TypeError("unsupported key object {!r}".format(type(key).__name__))

class Signature(namedtuple('Signature', ['format', 'blob'])):
    """An SSH signature: algorithm name and signature blob."""

    __slots__ = ()

    def marshal(self):
        m = paramiko.Message()
        m.add_string(self.format)
        m.add_string(self.blob)
        return m.asbytes()

class PublicKey(object):
    """
    Public half of a signing identity, in SSH terms.
    """

    def __init__(self, key):
        self.kind = _key_kind(key)
        self.key = key

    def _openssh(self):
        line = self.key.export_key(format='OpenSSH')
        if isinstance(line, bytes):
            line = line.decode('ascii')
        return line.strip()

    def type(self):
        return self._openssh().split()[0]

    def marshal(self):
        """SSH wire encoding of the key (RFC 4253 6.6, RFC 5656, RFC 8709)."""
        return base64.b64decode(self._openssh().split()[1])

    def authorized_key(self):
        return " ".join(self._openssh().split()[:2])

    def verify(self, data, signature):
        """Return True if signature is a valid signature of data by this key."""
        try:
            self._verify(bytes(data), signature)
        except (ValueError, TypeError):
            return False
        return True

    def _verify(self, data, sig):
        if self.kind == 'rsa':
            if sig.format not in RSA_SIGNATURE_HASHES:
                raise ValueError("signature format mismatch")
            h = RSA_SIGNATURE_HASHES[sig.format].new(data)
            pkcs1_15.new(self.key).verify(h, sig.blob)
            return
        if sig.format != self.type():
            raise ValueError("signature format mismatch")
        if self.kind == 'dsa':
            verifier = DSS.new(self.key, 'deterministic-rfc6979', encoding='binary')
            verifier.verify(SHA1.new(data), sig.blob)
        elif self.kind == 'ecdsa':
            _, hashmod, size = ECDSA_CURVES[_curve(self.key)]
            m = paramiko.Message(sig.blob)
            rs = long_to_bytes(m.get_mpint(), size) + long_to_bytes(m.get_mpint(), size)
            verifier = DSS.new(self.key, 'deterministic-rfc6979', encoding='binary')
            verifier.verify(hashmod.new(data), rs)
        else:
            eddsa.new(self.key, 'rfc8032').verify(data, sig.blob)

    def __eq__(self, other):
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.marshal() == other.marshal()

    def __hash__(self):
        return hash(self.marshal())

    def __repr__(self):
        return "<PublicKey {}>".format(self.type())

class Signer(object):
    """
    Wrapper around a private key (RSA, DSA, ECDSA or Ed25519) that signs
    data the way SSH expects for that key type.
    """

    def __init__(self, key):
        self.kind = _key_kind(key)
        self.key = key

    def public_key(self):
        if self.kind in ('ecdsa', 'ed25519'):
            return PublicKey(self.key.public_key())
        return PublicKey(self.key.publickey())

    def sign(self, data):
        data = bytes(data)
        if self.kind == 'rsa':
            h = RSA_SIGNATURE_HASHES[RSA_SIGNATURE_FORMAT].new(data)
            return Signature(RSA_SIGNATURE_FORMAT, pkcs1_15.new(self.key).sign(h))

        if self.kind == 'dsa':
            signer = DSS.new(self.key, 'deterministic-rfc6979', encoding='binary')
            return Signature("ssh-dss", signer.sign(SHA1.new(data)))

        if self.kind == 'ecdsa':
            curve_id, hashmod, size = ECDSA_CURVES[_curve(self.key)]
            signer = DSS.new(self.key, 'deterministic-rfc6979', encoding='binary')
            rs = signer.sign(hashmod.new(data))
            # binary encoding is r || s, both padded to the curve order size
            half = len(rs) // 2
            m = paramiko.Message()
            m.add_mpint(int.from_bytes(rs[:half], 'big'))
            m.add_mpint(int.from_bytes(rs[half:], 'big'))
            return Signature("ecdsa-sha2-" + curve_id, m.asbytes())

        return Signature("ssh-ed25519", eddsa.new(self.key, 'rfc8032').sign(data))

    def __repr__(self):
        return "<Signer {}>".format(self.public_key().type())
