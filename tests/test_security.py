import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.config import settings
from app.core.errors import AuthError
from app.security import create_access_token, verify_access_token

ISSUED_AT = datetime(2025, 6, 23, 12, 0, tzinfo=timezone.utc)


class TestAccessToken:

    def test_round_trip_claims(self):
        user_id = uuid.uuid4()
        token = create_access_token(user_id, now=ISSUED_AT)

        claims = verify_access_token(token, now=ISSUED_AT)

        assert claims.sub == user_id
        assert claims.exp == int((ISSUED_AT + timedelta(hours=24)).timestamp())

    def test_accepted_just_before_24_hours(self):
        token = create_access_token(uuid.uuid4(), now=ISSUED_AT)
        verify_access_token(token, now=ISSUED_AT + timedelta(hours=23, minutes=59))

    def test_rejected_just_after_24_hours(self):
        token = create_access_token(uuid.uuid4(), now=ISSUED_AT)
        with pytest.raises(AuthError) as exc_info:
            verify_access_token(token, now=ISSUED_AT + timedelta(hours=24, minutes=1))
        assert exc_info.value.reason == "expired"

    def test_token_signed_with_other_secret(self):
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "exp": int((ISSUED_AT + timedelta(hours=1)).timestamp())},
            "some-other-secret",
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(AuthError) as exc_info:
            verify_access_token(token, now=ISSUED_AT)
        assert exc_info.value.reason == "bad signature"

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
    def test_garbage_is_malformed(self, token):
        with pytest.raises(AuthError) as exc_info:
            verify_access_token(token, now=ISSUED_AT)
        assert exc_info.value.reason == "malformed"

    def test_missing_subject_is_malformed(self):
        token = jwt.encode(
            {"exp": int((ISSUED_AT + timedelta(hours=1)).timestamp())},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(AuthError) as exc_info:
            verify_access_token(token, now=ISSUED_AT)
        assert exc_info.value.reason == "malformed"

    def test_non_uuid_subject_is_malformed(self):
        token = jwt.encode(
            {"sub": "42", "exp": int((ISSUED_AT + timedelta(hours=1)).timestamp())},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(AuthError) as exc_info:
            verify_access_token(token, now=ISSUED_AT)
        assert exc_info.value.reason == "malformed"

    def test_reason_is_not_the_public_message(self):
        token = create_access_token(uuid.uuid4(), now=ISSUED_AT)
        with pytest.raises(AuthError) as exc_info:
            verify_access_token(token, now=ISSUED_AT + timedelta(days=2))
        assert exc_info.value.message == "Invalid or expired token"
        assert exc_info.value.status_code == 401

    def test_missing_expiry_is_malformed(self):
        token = jwt.encode({"sub": str(uuid.uuid4())}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        with pytest.raises(AuthError) as exc_info:
            verify_access_token(token, now=ISSUED_AT)
        assert exc_info.value.reason == "malformed"

    def test_expiry_uses_given_clock_not_wall_clock(self):
        # issued in 2001, so a wall-clock check would reject both
        future = datetime(2100, 1, 1, tzinfo=timezone.utc)
        past = datetime(2001, 1, 1, tzinfo=timezone.utc)
        verify_access_token(create_access_token(uuid.uuid4(), now=past), now=past + timedelta(hours=1))
        with pytest.raises(AuthError) as exc_info:
            verify_access_token(create_access_token(uuid.uuid4(), now=past), now=future)
        assert exc_info.value.reason == "expired"
