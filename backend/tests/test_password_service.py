"""
Tests unitaires pour le hachage des mots de passe.
"""

from unittest.mock import patch

from app.services import password_service
from app.services.password_service import burn_verification, hash_password, verify_password


def test_hash_different_du_mot_de_passe():
    digest = hash_password("pw123456")
    assert digest != "pw123456"
    assert digest.startswith("$2")


def test_hash_sale():
    """Deux hachages du même mot de passe diffèrent (sel aléatoire)."""
    assert hash_password("pw123456") != hash_password("pw123456")


def test_verify_mot_de_passe_correct():
    assert verify_password("pw123456", hash_password("pw123456")) is True


def test_verify_mot_de_passe_incorrect():
    assert verify_password("mauvais", hash_password("pw123456")) is False


def test_verify_hash_illisible():
    """Un hash corrompu en base ne doit jamais valider un mot de passe."""
    assert verify_password("pw123456", "pas-un-hash-bcrypt") is False


def test_mot_de_passe_long_tronque_a_72_octets():
    long_password = "a" * 100
    digest = hash_password(long_password)
    assert verify_password(long_password, digest) is True
    assert verify_password("a" * 72, digest) is True


def test_burn_verification_calcule_le_hash_factice_une_seule_fois():
    with patch.object(password_service, "_dummy_hash", None), \
            patch("app.services.password_service.hash_password", wraps=hash_password) as mock_hash:
        burn_verification("x")
        burn_verification("y")
    assert mock_hash.call_count == 1
