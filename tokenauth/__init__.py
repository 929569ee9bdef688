"""Auth package: HMAC-signed tokens and salted password-hash records."""
from functools import lru_cache

from tokencodec.errors import TokenAuthError, MalformedTokenError, MalformedRecordError
from .config import EngineConfig, DEFAULT_ALGORITHM, DEFAULT_SECRET, DEFAULT_OUTPUT_TYPE, TOKEN_TYPE
from .tokens import TokenEngine, ParsedToken
from .passwords import PasswordHashEngine


@lru_cache(maxsize=None)
def default_config() -> EngineConfig:
    return EngineConfig.from_env()


def default_tokens() -> TokenEngine:
    return TokenEngine(default_config())


def default_passwords() -> PasswordHashEngine:
    return PasswordHashEngine(default_config())
