from __future__ import annotations

import base64
from email.utils import formatdate
from functools import cached_property

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, padding, rsa
from cryptography.hazmat.primitives.serialization import load_pem_private_key

from .errors import ValidationError


class Signer:
    """Credential holder that produces auth headers for every outgoing request.

    With a token the request carries ``Authorization: Bearer <token>``;
    otherwise the ``date`` header is signed with the private key following
    the HTTP Signature scheme used by CloudAPI.
    """

    def __init__(self, key: bytes, key_id: str, token: str | None = None):
        self.key = key
        self.key_id = key_id
        self.token = token

    @cached_property
    def _private_key(self):
        try:
            return load_pem_private_key(self.key, password=None)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"unable to load key: {e}") from e

    @property
    def algorithm(self) -> str:
        pk = self._private_key
        if isinstance(pk, rsa.RSAPrivateKey):
            return "rsa-sha256"
        if isinstance(pk, ec.EllipticCurvePrivateKey):
            return "ecdsa-sha256"
        if isinstance(pk, ed25519.Ed25519PrivateKey):
            return "ed25519"
        raise ValidationError("unsupported key type")

    def sign(self, data: bytes) -> str:
        algorithm = self.algorithm
        pk = self._private_key
        if algorithm == "rsa-sha256":
            raw = pk.sign(data, padding.PKCS1v15(), hashes.SHA256())
        elif algorithm == "ecdsa-sha256":
            raw = pk.sign(data, ec.ECDSA(hashes.SHA256()))
        else:
            raw = pk.sign(data)
        return base64.b64encode(raw).decode("ascii")

    def authorization(self, date: str) -> str:
        signature = self.sign(f"date: {date}".encode("utf-8"))
        return (
            f'Signature keyId="{self.key_id}",algorithm="{self.algorithm}",'
            f'headers="date",signature="{signature}"'
        )

    def headers(self, now: float | None = None) -> dict[str, str]:
        date = formatdate(now, usegmt=True)
        headers = {"Date": date}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        else:
            headers["Authorization"] = self.authorization(date)
        return headers
