from backend.auth.passwords import hash_password, verify_password


def test_hash_password_uses_bcrypt_cost_factor_ten() -> None:
    hashed = hash_password('secret123')

    assert hashed.startswith('$2b$10$')
    assert 'secret123' not in hashed


def test_hash_password_is_salted() -> None:
    assert hash_password('secret123') != hash_password('secret123')


def test_verify_password_accepts_matching_secret() -> None:
    hashed = hash_password('secret123')

    assert verify_password('secret123', hashed) is True
    assert verify_password('secret124', hashed) is False


def test_verify_password_rejects_non_bcrypt_values() -> None:
    assert verify_password('secret123', '') is False
    assert verify_password('secret123', 'plaintext-secret123') is False


def test_long_passwords_hash_and_verify() -> None:
    password = 'p' * 100

    assert verify_password(password, hash_password(password))
