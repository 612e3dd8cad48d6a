from datetime import datetime, timedelta, timezone

import jwt

from app.core.config import settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def make_token(sub="user-1", email="user@church.org", role="member", expires_in=3600, secret=None):
    payload = {
        "sub": sub,
        "email": email,
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret or settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def bearer(**claims):
    return {"Authorization": f"Bearer {make_token(**claims)}"}


def png_upload(name="photo.png"):
    return ("images", (name, PNG_BYTES, "image/png"))


def as_naive_utc(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def utc_now_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
