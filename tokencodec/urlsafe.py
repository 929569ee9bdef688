import base64
from dataclasses import dataclass

from .errors import MalformedRecordError

_URL_SAFE = str.maketrans({"+": "-", "/": "_", "=": None})


@dataclass(frozen=True)
class HashRecord:
    algorithm: str
    hash: str
    salt: str


def encode_base64(text: str) -> str:
    """Standard (padded) base64 of the UTF-8 bytes of ``text``."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def to_url_safe(text: str = "") -> str:
    """Replace ``+`` and ``/`` and drop every ``=``."""
    return text.translate(_URL_SAFE)


def decode_url_safe(text: str) -> str:
    # padding was stripped, put it back before decoding
    padded = text + "=" * (-len(text) % 4)
    raw = base64.urlsafe_b64decode(padded.encode("ascii"))
    return raw.decode("utf-8")


def decompose_hash_record(record: str) -> HashRecord:
    """Split ``$algorithm.hash.salt`` into its three parts."""
    if not isinstance(record, str):
        raise MalformedRecordError("hash record must be a string")
    parts = record.split(".")
    if len(parts) != 3:
        raise MalformedRecordError(f"hash record has {len(parts)} segments, expected 3")
    algorithm, digest, salt = parts
    if algorithm.startswith("$"):
        algorithm = algorithm[1:]
    if not algorithm:
        raise MalformedRecordError("hash record has no algorithm")
    return HashRecord(algorithm=algorithm, hash=digest, salt=salt)
