import hmac

from .config import Settings


class CredentialValidator:
    """Проверка логина администратора по статическим значениям из настроек."""

    def __init__(self, settings: Settings):
        self._username = settings.admin_username
        self._password = settings.admin_password

    def validate(self, username: str, password: str) -> bool:
        # оба сравнения выполняются всегда
        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        pass_ok = hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        return user_ok and pass_ok
