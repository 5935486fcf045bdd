"""
Arweave wallet signer (RSA hash scheme).
"""
import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from eth_account.messages import defunct_hash_message

from ..exceptions import AddressError, ArgumentError, SigningError
from ..utils import b64url_decode, b64url_encode
from . import Signer, SignerType

logger = logging.getLogger(__name__)

# Arweave uses RSA-PSS with SHA-256 and a salt as long as the digest
PSS_SALT_LENGTH = 32
ARWEAVE_KEY_SIZE = 4096


def _pss() -> padding.PSS:
    return padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=PSS_SALT_LENGTH)


def _int_from_b64url(value: str) -> int:
    return int.from_bytes(b64url_decode(value), "big")


def _int_to_b64url(value: int) -> str:
    return b64url_encode(value.to_bytes((value.bit_length() + 7) // 8, "big"))


def _to_bytes(message: Union[str, bytes]) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    if isinstance(message, (bytes, bytearray)):
        return bytes(message)
    raise ArgumentError(f"Message must be str or bytes, got {type(message).__name__}")


class ArweaveSigner(Signer):
    """
    Signer backed by an Arweave RSA keypair.

    Messages are first hashed with the Ethereum personal-message prefix
    (EIP-191) and the 32-byte digest is signed with RSA-PSS. The signature
    is emitted as ``"<b64url signature>,<b64url modulus>"`` so a verifier
    can recover the public key without a lookup.
    """

    def __init__(self, private_key: rsa.RSAPrivateKey):
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise ArgumentError("ArweaveSigner requires an RSA private key")
        self._private_key = private_key
        n = private_key.public_key().public_numbers().n
        self._modulus = n.to_bytes((n.bit_length() + 7) // 8, "big")

    @classmethod
    def from_jwk(cls, jwk: Dict[str, Any]) -> "ArweaveSigner":
        """
        Load a signer from an Arweave JWK dictionary.

        Raises:
            ArgumentError: If the JWK is not a usable RSA private key
        """
        try:
            n = _int_from_b64url(jwk["n"])
            e = _int_from_b64url(jwk["e"])
            d = _int_from_b64url(jwk["d"])
            p = _int_from_b64url(jwk["p"])
            q = _int_from_b64url(jwk["q"])
            dp = _int_from_b64url(jwk["dp"]) if "dp" in jwk else rsa.rsa_crt_dmp1(d, p)
            dq = _int_from_b64url(jwk["dq"]) if "dq" in jwk else rsa.rsa_crt_dmq1(d, q)
            qi = _int_from_b64url(jwk["qi"]) if "qi" in jwk else rsa.rsa_crt_iqmp(p, q)
            numbers = rsa.RSAPrivateNumbers(
                p=p, q=q, d=d, dmp1=dp, dmq1=dq, iqmp=qi,
                public_numbers=rsa.RSAPublicNumbers(e=e, n=n),
            )
            return cls(numbers.private_key())
        except (KeyError, TypeError, ValueError) as e:
            raise ArgumentError(f"Invalid Arweave JWK: {str(e)}") from e

    @classmethod
    def from_keyfile(cls, path: Union[str, Path]) -> "ArweaveSigner":
        """Load a signer from an Arweave keyfile (JWK JSON)."""
        try:
            with open(path, "r") as f:
                jwk = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ArgumentError(f"Cannot read Arweave keyfile {path}: {str(e)}") from e
        return cls.from_jwk(jwk)

    @classmethod
    def generate(cls, key_size: int = ARWEAVE_KEY_SIZE) -> "ArweaveSigner":
        """Generate a fresh keypair."""
        return cls(rsa.generate_private_key(public_exponent=65537, key_size=key_size))

    def to_jwk(self) -> Dict[str, str]:
        """Export the keypair as an Arweave JWK dictionary."""
        numbers = self._private_key.private_numbers()
        return {
            "kty": "RSA",
            "e": _int_to_b64url(numbers.public_numbers.e),
            "n": _int_to_b64url(numbers.public_numbers.n),
            "d": _int_to_b64url(numbers.d),
            "p": _int_to_b64url(numbers.p),
            "q": _int_to_b64url(numbers.q),
            "dp": _int_to_b64url(numbers.dmp1),
            "dq": _int_to_b64url(numbers.dmq1),
            "qi": _int_to_b64url(numbers.iqmp),
        }

    @property
    def modulus(self) -> bytes:
        """Raw public modulus (the data item ``owner`` field)"""
        return self._modulus

    def sign_raw(self, data: bytes) -> bytes:
        """
        Sign raw bytes with RSA-PSS/SHA-256, without any prefixing.

        Raises:
            SigningError: If the RSA operation fails
        """
        try:
            return self._private_key.sign(data, _pss(), hashes.SHA256())
        except Exception as e:
            logger.error(f"RSA signing failed: {e}")
            raise SigningError(f"RSA signing failed: {str(e)}") from e

    def sign(self, message: Union[str, bytes]) -> str:
        digest = bytes(defunct_hash_message(primitive=_to_bytes(message)))
        sig = self.sign_raw(digest)
        return f"{b64url_encode(sig)},{b64url_encode(self._modulus)}"

    def owner(self) -> str:
        return b64url_encode(self._modulus)

    def wallet_address(self) -> str:
        try:
            return b64url_encode(hashlib.sha256(self._modulus).digest())
        except Exception as e:
            raise AddressError(f"Cannot derive Arweave address: {str(e)}") from e

    def signer_type(self) -> SignerType:
        return SignerType.RSA


def verify_arweave_signature(message: Union[str, bytes], signature: str) -> bool:
    """
    Verify a ``"<sig>,<modulus>"`` signature produced by ``ArweaveSigner.sign``.

    Returns:
        True if the signature is valid for the embedded public key
    """
    try:
        sig_b64, owner_b64 = signature.split(",", 1)
        n = _int_from_b64url(owner_b64)
        public_key = rsa.RSAPublicNumbers(e=65537, n=n).public_key()
        digest = bytes(defunct_hash_message(primitive=_to_bytes(message)))
        public_key.verify(b64url_decode(sig_b64), digest, _pss(), hashes.SHA256())
        return True
    except (InvalidSignature, ValueError):
        return False
