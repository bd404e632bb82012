"""
Token issuing and verification tests
"""

from blog_service.app.core.security import create_access_token, read_principal

SECRET = "test-secret"


class TestAccessTokens:
    def test_token_names_its_principal(self):
        token = create_access_token("alice", SECRET, 60)

        assert read_principal(token, SECRET) == "alice"

    def test_expired_token_is_rejected(self):
        token = create_access_token("alice", SECRET, -10)

        assert read_principal(token, SECRET) is None

    def test_tampered_claims_are_rejected(self):
        header, _, signature = create_access_token("alice", SECRET, 60).split(".")
        forged_claims = create_access_token("mallory", SECRET, 60).split(".")[1]

        assert read_principal(f"{header}.{forged_claims}.{signature}", SECRET) is None

    def test_token_signed_with_other_key_is_rejected(self):
        token = create_access_token("alice", SECRET, 60)

        assert read_principal(token, "another-secret") is None

    def test_empty_principal_is_rejected(self):
        token = create_access_token("", SECRET, 60)

        assert read_principal(token, SECRET) is None

    def test_garbage_is_rejected(self):
        assert read_principal("not-a-token", SECRET) is None
        assert read_principal("a.b.c", SECRET) is None
        assert read_principal("", SECRET) is None
