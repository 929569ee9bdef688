"""Three-part HMAC-signed tokens: ``header.payload.signature``.

Every segment is URL-safe base64 with padding stripped. The signature is never
decoded; verification recomputes it from the first two segments and compares
the result in constant time.
"""
import binascii
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cryptography.exceptions import UnsupportedAlgorithm

from tokencodec import (MalformedTokenError, create_hmac_string, decode_url_safe,
                        encode_base64, strings_match, to_url_safe)
from .config import TOKEN_TYPE, EngineConfig

log = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def _to_json(obj: dict) -> str:
    # compact and insertion-ordered, same bytes as JSON.stringify
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class ParsedToken:
    header: dict
    payload: dict


class TokenEngine:
    def __init__(self, config: Optional[EngineConfig] = None,
                 clock: Optional[Callable[[], float]] = None):
        self.config = config or EngineConfig()
        self._clock = clock or now_ms

    def build_header_payload_segment(self, header: dict, payload: dict) -> Optional[str]:
        """Return ``b64url(header).b64url(payload)``, or None if either is missing."""
        if not header or not payload:
            return None
        header_b64 = to_url_safe(encode_base64(_to_json(header)))
        payload_b64 = to_url_safe(encode_base64(_to_json(payload)))
        return to_url_safe(header_b64 + "." + payload_b64)

    def sign(self, segment: str, secret: Optional[str] = None,
             algorithm: Optional[str] = None) -> str:
        digest = create_hmac_string(
            segment,
            secret if secret is not None else self.config.secret,
            algorithm or self.config.algorithm,
            self.config.output_type,
        )
        return to_url_safe(digest)

    def create_token(self, header: dict, payload: dict,
                     secret: Optional[str] = None) -> Optional[str]:
        """Sign with ``header["alg"]``, falling back to the configured algorithm.

        Returns None when header, payload or secret is missing or empty.
        """
        if secret is None:
            secret = self.config.secret
        if not header or not payload or not secret:
            return None
        segment = self.build_header_payload_segment(header, payload)
        return segment + "." + self.sign(segment, secret, header.get("alg") or self.config.algorithm)

    def create_token_with_algorithm(self, header: Optional[dict], payload: dict,
                                    secret: Optional[str] = None,
                                    algorithm: Optional[str] = None) -> Optional[str]:
        """Like ``create_token`` but ``alg`` and ``typ`` are always overwritten."""
        if secret is None:
            secret = self.config.secret
        if not payload or not secret:
            return None
        algorithm = algorithm or self.config.algorithm
        forced = {**(header or {}), "alg": algorithm, "typ": TOKEN_TYPE}
        segment = self.build_header_payload_segment(forced, payload)
        return segment + "." + self.sign(segment, secret, algorithm)

    def parse_token(self, token: str) -> ParsedToken:
        if not isinstance(token, str):
            raise MalformedTokenError("token must be a string")
        parts = token.split(".")
        if len(parts) != 3:
            raise MalformedTokenError(f"token has {len(parts)} segments, expected 3")
        decoded = []
        for name, part in zip(("header", "payload"), parts[:2]):
            try:
                value = json.loads(decode_url_safe(part), parse_constant=_reject_constant)
            except (binascii.Error, UnicodeError, ValueError, RecursionError) as e:
                raise MalformedTokenError(f"token {name} is not valid base64 JSON") from e
            if not isinstance(value, dict):
                raise MalformedTokenError(f"token {name} is not a JSON object")
            decoded.append(value)
        return ParsedToken(header=decoded[0], payload=decoded[1])

    def is_signature_valid(self, token: str, secret: Optional[str] = None) -> bool:
        try:
            parsed = self.parse_token(token)
        except MalformedTokenError as e:
            log.debug("signature check on malformed token: %s", e)
            return False
        algorithm = parsed.header.get("alg") or self.config.algorithm
        if not isinstance(algorithm, str):
            log.debug("token alg is not a string")
            return False
        head, body, signature = token.split(".")
        try:
            expected = self.sign(head + "." + body, secret, algorithm)
        except UnsupportedAlgorithm:
            log.debug("token alg %r is not supported", algorithm)
            return False
        return strings_match(expected, signature)

    def is_expired(self, token: str, max_age_seconds: float) -> bool:
        """True while the token is still FRESH.

        ``payload["time"]`` is the creation time in epoch milliseconds; the
        token is fresh when it is at most ``max_age_seconds`` old. A missing or
        non-numeric ``time`` counts as stale.
        """
        try:
            created = self.parse_token(token).payload.get("time")
        except MalformedTokenError as e:
            log.debug("freshness check on malformed token: %s", e)
            return False
        if not _is_number(created):
            return False
        return self._clock() - created <= max_age_seconds * 1000

    def read_token(self, token: str, secret: Optional[str] = None,
                   max_age_seconds: Optional[float] = None) -> Optional[ParsedToken]:
        """Parse ``token`` if its signature holds and, when asked, it is fresh."""
        if not self.is_signature_valid(token, secret):
            return None
        if max_age_seconds is not None and not self.is_expired(token, max_age_seconds):
            return None
        return self.parse_token(token)
