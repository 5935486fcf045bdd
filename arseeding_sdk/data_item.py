"""
ANS-104 data items: construction, signing and (de)serialization.

Binary layout (integers little-endian)::

    signature type   2 bytes
    signature        512 bytes
    owner            512 bytes
    target           1 byte presence flag (+ 32 bytes)
    anchor           1 byte presence flag (+ 32 bytes)
    tag count        8 bytes
    tag bytes length 8 bytes
    tags             Avro-encoded array of {name: bytes, value: bytes}
    data             rest of the item
"""
import hashlib
import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Protocol, Tuple, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .exceptions import ArgumentError, DecodeError, SigningError
from .models import Tag
from .signer.arweave import PSS_SALT_LENGTH, ArweaveSigner
from .utils import b64url_encode

logger = logging.getLogger(__name__)

SIGNATURE_TYPE_ARWEAVE = 1
SIGNATURE_LENGTH = 512
OWNER_LENGTH = 512
TARGET_LENGTH = 32
ANCHOR_LENGTH = 32
MAX_TAGS = 128

TagsLike = Union[Mapping[str, str], Iterable[Tag], None]


def _sha384(data: bytes) -> bytes:
    return hashlib.sha384(data).digest()


def deep_hash(data: Union[bytes, List]) -> bytes:
    """Arweave deep hash (SHA-384) of a blob or nested list of blobs."""
    if isinstance(data, list):
        acc = _sha384(b"list" + str(len(data)).encode())
        for chunk in data:
            acc = _sha384(acc + deep_hash(chunk))
        return acc
    tag = b"blob" + str(len(data)).encode()
    return _sha384(_sha384(tag) + _sha384(data))


def _encode_long(n: int) -> bytes:
    # Avro long: zigzag then base-128 varint
    z = (n << 1) ^ (n >> 63)
    out = bytearray()
    while z > 0x7F:
        out.append((z & 0x7F) | 0x80)
        z >>= 7
    out.append(z)
    return bytes(out)


def _decode_long(buf: bytes, pos: int) -> Tuple[int, int]:
    shift = 0
    z = 0
    while True:
        if pos >= len(buf):
            raise DecodeError("Truncated Avro long in tags")
        b = buf[pos]
        pos += 1
        z |= (b & 0x7F) << shift
        if not b & 0x80:
            break
        shift += 7
    return (z >> 1) ^ -(z & 1), pos


def normalize_tags(tags: TagsLike) -> List[Tag]:
    if tags is None:
        return []
    if isinstance(tags, Mapping):
        return [Tag(name=k, value=v) for k, v in tags.items()]
    return [t if isinstance(t, Tag) else Tag(name=t[0], value=t[1]) for t in tags]


def encode_tags(tags: List[Tag]) -> bytes:
    """Avro-encode tags. An empty tag list encodes to zero bytes."""
    if not tags:
        return b""
    out = bytearray(_encode_long(len(tags)))
    for tag in tags:
        for part in (tag.name.encode("utf-8"), tag.value.encode("utf-8")):
            out += _encode_long(len(part))
            out += part
    out += _encode_long(0)
    return bytes(out)


def decode_tags(raw: bytes) -> List[Tag]:
    if not raw:
        return []
    tags: List[Tag] = []
    pos = 0
    while True:
        count, pos = _decode_long(raw, pos)
        if count == 0:
            break
        if count < 0:
            # negative count is followed by the block's byte size
            count = -count
            _, pos = _decode_long(raw, pos)
        for _ in range(count):
            parts = []
            for _ in range(2):
                length, pos = _decode_long(raw, pos)
                if length < 0 or pos + length > len(raw):
                    raise DecodeError("Invalid tag length")
                parts.append(raw[pos:pos + length].decode("utf-8"))
                pos += length
            tags.append(Tag(name=parts[0], value=parts[1]))
    return tags


@dataclass
class DataItem:
    """An ANS-104 data item signed with an Arweave key"""
    owner: bytes
    data: bytes
    tags: List[Tag] = field(default_factory=list)
    target: bytes = b""
    anchor: bytes = b""
    signature: bytes = b""
    signature_type: int = SIGNATURE_TYPE_ARWEAVE

    def __post_init__(self):
        if len(self.owner) != OWNER_LENGTH:
            raise ArgumentError(f"owner must be {OWNER_LENGTH} bytes, got {len(self.owner)}")
        if self.target and len(self.target) != TARGET_LENGTH:
            raise ArgumentError(f"target must be {TARGET_LENGTH} bytes, got {len(self.target)}")
        if self.anchor and len(self.anchor) != ANCHOR_LENGTH:
            raise ArgumentError(f"anchor must be {ANCHOR_LENGTH} bytes, got {len(self.anchor)}")
        if len(self.tags) > MAX_TAGS:
            raise ArgumentError(f"at most {MAX_TAGS} tags are allowed, got {len(self.tags)}")

    @property
    def raw_tags(self) -> bytes:
        return encode_tags(self.tags)

    @property
    def id(self) -> str:
        """Item id: base64url SHA-256 of the signature"""
        if not self.signature:
            raise ArgumentError("Data item is not signed")
        return b64url_encode(hashlib.sha256(self.signature).digest())

    def signature_data(self) -> bytes:
        """Deep hash the signer must sign."""
        return deep_hash([
            b"dataitem",
            b"1",
            str(self.signature_type).encode(),
            self.owner,
            self.target,
            self.anchor,
            self.raw_tags,
            self.data,
        ])

    def sign(self, signer: ArweaveSigner) -> "DataItem":
        if signer.modulus != self.owner:
            raise SigningError("Signer key does not match data item owner")
        self.signature = signer.sign_raw(self.signature_data())
        return self

    def verify(self) -> bool:
        """Check the signature against the embedded owner."""
        if len(self.signature) != SIGNATURE_LENGTH:
            return False
        n = int.from_bytes(self.owner, "big")
        public_key = rsa.RSAPublicNumbers(e=65537, n=n).public_key()
        try:
            public_key.verify(
                self.signature,
                self.signature_data(),
                padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=PSS_SALT_LENGTH),
                hashes.SHA256(),
            )
            return True
        except InvalidSignature:
            return False

    def serialize(self) -> bytes:
        if len(self.signature) != SIGNATURE_LENGTH:
            raise ArgumentError("Data item must be signed before serialization")
        raw_tags = self.raw_tags
        out = bytearray()
        out += self.signature_type.to_bytes(2, "little")
        out += self.signature
        out += self.owner
        out += (b"\x01" + self.target) if self.target else b"\x00"
        out += (b"\x01" + self.anchor) if self.anchor else b"\x00"
        out += len(self.tags).to_bytes(8, "little")
        out += len(raw_tags).to_bytes(8, "little")
        out += raw_tags
        out += self.data
        return bytes(out)

    @classmethod
    def from_bytes(cls, raw: bytes) -> "DataItem":
        """
        Parse a serialized data item.

        Raises:
            DecodeError: If the bytes are not a valid Arweave-signed data item
        """
        try:
            signature_type = int.from_bytes(raw[0:2], "little")
            if signature_type != SIGNATURE_TYPE_ARWEAVE:
                raise DecodeError(f"Unsupported signature type {signature_type}")
            pos = 2
            signature = raw[pos:pos + SIGNATURE_LENGTH]
            pos += SIGNATURE_LENGTH
            owner = raw[pos:pos + OWNER_LENGTH]
            pos += OWNER_LENGTH

            target = b""
            if raw[pos] == 1:
                target = raw[pos + 1:pos + 1 + TARGET_LENGTH]
                pos += TARGET_LENGTH
            pos += 1
            anchor = b""
            if raw[pos] == 1:
                anchor = raw[pos + 1:pos + 1 + ANCHOR_LENGTH]
                pos += ANCHOR_LENGTH
            pos += 1

            tag_count = int.from_bytes(raw[pos:pos + 8], "little")
            tags_length = int.from_bytes(raw[pos + 8:pos + 16], "little")
            pos += 16
            tags = decode_tags(raw[pos:pos + tags_length])
            pos += tags_length
            if len(tags) != tag_count:
                raise DecodeError(f"Tag count mismatch: header says {tag_count}, found {len(tags)}")

            return cls(
                owner=owner, data=raw[pos:], tags=tags, target=target,
                anchor=anchor, signature=signature, signature_type=signature_type,
            )
        except (IndexError, ArgumentError, UnicodeDecodeError) as e:
            raise DecodeError(f"Malformed data item: {str(e)}") from e


class ItemSigner(Protocol):
    """Anything that turns data plus tags into signed, serialized item bytes"""

    def create_and_sign(self, data: bytes, tags: TagsLike) -> bytes:
        ...


class ArweaveItemSigner:
    """Creates ANS-104 data items signed with an Arweave wallet"""

    def __init__(self, signer: ArweaveSigner):
        if len(signer.modulus) != OWNER_LENGTH:
            raise ArgumentError(f"Data items need a {OWNER_LENGTH * 8}-bit Arweave key")
        self.signer = signer

    def create_data_item(self, data: bytes, tags: TagsLike = None, target: bytes = b"") -> DataItem:
        return DataItem(
            owner=self.signer.modulus,
            data=bytes(data),
            tags=normalize_tags(tags),
            target=target,
            anchor=os.urandom(ANCHOR_LENGTH),
        )

    def create_and_sign(self, data: bytes, tags: TagsLike) -> bytes:
        item = self.create_data_item(data, tags).sign(self.signer)
        logger.debug(f"Signed data item {item.id} ({len(item.data)} bytes, {len(item.tags)} tags)")
        return item.serialize()
