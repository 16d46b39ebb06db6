from edvora.auth import passwords


def test_hash_password_never_returns_plaintext() -> None:
    hashed = passwords.hash_password('secret1')

    assert hashed != 'secret1'
    assert 'secret1' not in hashed
    assert hashed.startswith('$argon2')


def test_hash_password_salts_each_hash() -> None:
    assert passwords.hash_password('secret1') != passwords.hash_password('secret1')


def test_verify_password_checks_against_hash() -> None:
    hashed = passwords.hash_password('secret1')

    assert passwords.verify_password('secret1', hashed)
    assert not passwords.verify_password('secret2', hashed)
