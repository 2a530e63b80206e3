from __future__ import annotations

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError


class AdminAuthService:
    """Use case: unlock the admin view with the single shared password."""

    def __init__(self, password_hash: str):
        self._password_hash = password_hash

    def authenticate(self, password: str) -> None:
        try:
            ok = bool(password) and check_password_hash(self._password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hash values
            ok = False

        if not ok:
            raise AuthenticationError("รหัสผ่านไม่ถูกต้อง")
