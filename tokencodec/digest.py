import base64

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import constant_time, hashes, hmac

# Node-style digest names accepted by createHmac
HASHES = {
    "md5": hashes.MD5,
    "sha1": hashes.SHA1,
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha512-224": hashes.SHA512_224,
    "sha512-256": hashes.SHA512_256,
    "sha3-224": hashes.SHA3_224,
    "sha3-256": hashes.SHA3_256,
    "sha3-384": hashes.SHA3_384,
    "sha3-512": hashes.SHA3_512,
    "sm3": hashes.SM3,
}

OUTPUT_TYPES = ("base64", "hex")


def resolve_hash(algorithm: str) -> hashes.HashAlgorithm:
    if not isinstance(algorithm, str):
        raise TypeError("algorithm must be a string")
    name = algorithm.lower().replace("_", "-")
    try:
        return HASHES[name]()
    except KeyError:
        raise UnsupportedAlgorithm(f"{algorithm} is not a supported HMAC digest") from None


def create_hmac_string(message: str = "", secret: str = "", algorithm: str = "sha512",
                       output_type: str = "base64") -> str:
    """Keyed hash of ``message``, encoded as ``output_type``.

    HMAC does not encrypt; the same message and key always give the same digest.
    """
    if output_type not in OUTPUT_TYPES:
        raise ValueError(f"unknown output type {output_type!r}")
    mac = hmac.HMAC(secret.encode("utf-8"), resolve_hash(algorithm))
    mac.update(message.encode("utf-8"))
    digest = mac.finalize()
    if output_type == "hex":
        return digest.hex()
    return base64.b64encode(digest).decode("ascii")


def strings_match(a: str, b: str) -> bool:
    """Constant-time comparison of two strings."""
    return constant_time.bytes_eq(a.encode("utf-8"), b.encode("utf-8"))
