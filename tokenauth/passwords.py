"""Salted password-hash records of the form ``$algorithm.hash.salt``."""
import logging
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm

from tokencodec import (MalformedRecordError, create_hmac_string, decompose_hash_record,
                        strings_match, to_url_safe)
from .config import EngineConfig
from .tokens import now_ms

log = logging.getLogger(__name__)


class PasswordHashEngine:
    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def _secret(self, secret: Optional[str]) -> str:
        return secret if secret is not None else self.config.secret

    def generate_salt(self, seed: Optional[str] = None, secret: Optional[str] = None,
                      algorithm: Optional[str] = None) -> str:
        """HMAC of ``seed`` (default: current epoch milliseconds), URL-safe.

        Only as unpredictable as the seed and secret are; two calls in the same
        millisecond with the same secret give the same salt.
        """
        if seed is None:
            seed = str(now_ms())
        digest = create_hmac_string(seed, self._secret(secret),
                                    algorithm or self.config.algorithm, self.config.output_type)
        return to_url_safe(digest)

    def build_record(self, password: str = "", salt: str = "", secret: Optional[str] = None,
                     algorithm: Optional[str] = None) -> str:
        algorithm = algorithm or self.config.algorithm
        digest = create_hmac_string(password + salt, self._secret(secret), algorithm,
                                    self.config.output_type)
        return to_url_safe("$" + algorithm + "." + digest + "." + salt)

    def hash_password(self, password: str, secret: Optional[str] = None,
                      algorithm: Optional[str] = None) -> str:
        salt = self.generate_salt(secret=secret, algorithm=algorithm)
        return self.build_record(password, salt, secret, algorithm)

    def verify(self, password: str, stored_record: str, secret: Optional[str] = None) -> bool:
        if not isinstance(password, str):
            return False
        try:
            record = decompose_hash_record(stored_record)
            recomputed = self.build_record(password, record.salt, secret, record.algorithm)
        except MalformedRecordError as e:
            log.debug("password verify on malformed record: %s", e)
            return False
        except UnsupportedAlgorithm:
            log.debug("password record uses an unsupported algorithm")
            return False
        return strings_match(recomputed, stored_record)
