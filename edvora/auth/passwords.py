from passlib.context import CryptContext

# argon2 salts every hash independently and verifies in constant time.
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Spend the same time as a real verification when no user matched."""
    pwd_context.dummy_verify()
