"""Codec primitives: URL-safe base64, hash-record decomposition, HMAC digests."""
from .urlsafe import encode_base64, to_url_safe, decode_url_safe, decompose_hash_record, HashRecord
from .digest import create_hmac_string, resolve_hash, strings_match
from .errors import TokenAuthError, MalformedTokenError, MalformedRecordError
