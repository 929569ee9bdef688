import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from tokencodec.digest import OUTPUT_TYPES

log = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "sha512"
DEFAULT_SECRET = "dev-secret"
DEFAULT_OUTPUT_TYPE = "base64"
TOKEN_TYPE = "JWT"


@dataclass(frozen=True)
class EngineConfig:
    """Defaults shared by every call on an engine. Never mutated after construction."""
    algorithm: str = DEFAULT_ALGORITHM
    secret: str = DEFAULT_SECRET
    output_type: str = DEFAULT_OUTPUT_TYPE

    def __post_init__(self):
        if self.output_type not in OUTPUT_TYPES:
            raise ValueError(f"output_type must be one of {OUTPUT_TYPES}, got {self.output_type!r}")

    @classmethod
    def from_env(cls, prefix: str = "TOKENAUTH_") -> "EngineConfig":
        load_dotenv(find_dotenv(usecwd=True))
        cfg = cls(
            algorithm=os.getenv(prefix + "ALGORITHM") or DEFAULT_ALGORITHM,
            secret=os.getenv(prefix + "SECRET") or DEFAULT_SECRET,
            output_type=os.getenv(prefix + "OUTPUT_TYPE") or DEFAULT_OUTPUT_TYPE,
        )
        if cfg.secret == DEFAULT_SECRET:
            log.warning("%sSECRET is not set, using the default development secret", prefix)
        return cfg
