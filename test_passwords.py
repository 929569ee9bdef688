"""
Password hash engine tests: salts, records and verification.

Usage:
    pytest test_passwords.py
"""
import base64
import hashlib
import hmac

import pytest
from cryptography.exceptions import UnsupportedAlgorithm

from tokenauth import EngineConfig, PasswordHashEngine

SECRET = "my-secret-key"


@pytest.fixture
def engine():
    return PasswordHashEngine()


def test_record_format(engine):
    record = engine.build_record("hunter2", "salty", SECRET, "sha512")
    digest = base64.b64encode(hmac.new(SECRET.encode(), b"hunter2salty", hashlib.sha512).digest()).decode()
    url_safe = digest.replace("+", "-").replace("/", "_").replace("=", "")
    assert record == f"$sha512.{url_safe}.salty"


def test_record_is_deterministic(engine):
    assert engine.build_record("pw", "salt", SECRET, "sha256") == engine.build_record("pw", "salt", SECRET, "sha256")
    assert engine.build_record("pw", "salt", SECRET) != engine.build_record("pw", "salt2", SECRET)


def test_record_unknown_algorithm_raises(engine):
    with pytest.raises(UnsupportedAlgorithm):
        engine.build_record("pw", "salt", SECRET, "nope")


def test_verify(engine):
    salt = engine.generate_salt(secret=SECRET)
    record = engine.build_record("correct horse", salt, SECRET, "sha512")
    assert engine.verify("correct horse", record, SECRET)
    assert not engine.verify("wrong horse", record, SECRET)
    assert not engine.verify("correct horse", record, SECRET + "x")


def test_verify_uses_record_algorithm():
    engine = PasswordHashEngine(EngineConfig(algorithm="sha512"))
    record = engine.build_record("pw", "salt", SECRET, "sha3-256")
    assert record.startswith("$sha3-256.")
    assert engine.verify("pw", record, SECRET)


@pytest.mark.parametrize("record", ["not-a-valid-record", "", "$sha512.a.b.c", "$nope.hash.salt", None])
def test_verify_malformed_is_false(engine, record):
    assert engine.verify("anything", record, SECRET) is False


def test_verify_tampered_record(engine):
    record = engine.build_record("pw", "salt", SECRET)
    head, digest, salt = record.split(".")
    assert not engine.verify("pw", f"{head}.{digest}.other", SECRET)
    assert not engine.verify("pw", f"{head}.{digest[:-1]}.{salt}", SECRET)


def test_generate_salt(engine):
    salt = engine.generate_salt("seed", SECRET)
    assert salt == engine.generate_salt("seed", SECRET)
    assert salt != engine.generate_salt("seed2", SECRET)
    assert not set(salt) & set("+/=.")


def test_generate_salt_default_seed_is_url_safe(engine):
    assert not set(engine.generate_salt()) & set("+/=.")


def test_hash_password_round_trip():
    engine = PasswordHashEngine(EngineConfig(secret="configured"))
    record = engine.hash_password("s3cret")
    assert record.startswith("$sha512.")
    assert engine.verify("s3cret", record)
    assert not engine.verify("s3cret", record, "another-secret")


@pytest.mark.parametrize("password", [None, 12345, b"pw"])
def test_verify_non_string_password_is_false(engine, password):
    record = engine.build_record("pw", "salt", SECRET)
    assert engine.verify(password, record, SECRET) is False
