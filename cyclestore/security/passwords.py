from passlib.context import CryptContext


_password_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Verified against when the email is unknown so both failure paths cost the same
_DUMMY_HASH = _password_context.hash("cyclestore-timing-equalizer")


def hash_password(plain_password: str) -> str:
    return _password_context.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return _password_context.verify(plain_password, password_hash)
    except ValueError:
        # Unrecognized or corrupt hash in the store
        return False


def burn_password_check(plain_password: str) -> None:
    _password_context.verify(plain_password, _DUMMY_HASH)
