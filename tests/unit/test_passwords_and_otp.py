from __future__ import annotations

from plategenie.services.ids import normalize_id
from plategenie.services.otp import OTP_LENGTH, generate_otp, render_otp_email
from plategenie.services.passwords import PasswordHasher


class TestPasswordHasher:
    def test_hash_and_verify(self) -> None:
        hasher = PasswordHasher(rounds=4)

        hashed = hasher.hash("secret1")

        assert hashed != "secret1"
        assert hasher.verify("secret1", hashed) is True
        assert hasher.verify("secret2", hashed) is False

    def test_missing_or_foreign_hash(self) -> None:
        hasher = PasswordHasher(rounds=4)

        assert hasher.verify("secret1", None) is False
        assert hasher.verify("secret1", "not-a-bcrypt-hash") is False


class TestOtp:
    def test_code_is_six_digits(self) -> None:
        for _ in range(50):
            code = generate_otp()
            assert len(code) == OTP_LENGTH
            assert code.isdigit()

    def test_email_contains_code_and_validity(self) -> None:
        body = render_otp_email("042133", 5)

        assert "042133" in body
        assert "valid for 5 minutes" in body


class TestNormalizeId:
    def test_canonical_form(self) -> None:
        assert normalize_id("1B4E28BA-2FA1-11D2-883F-0016D3CCA427") == "1b4e28ba-2fa1-11d2-883f-0016d3cca427"

    def test_rejects_garbage(self) -> None:
        assert normalize_id("abc") is None
        assert normalize_id(None) is None
