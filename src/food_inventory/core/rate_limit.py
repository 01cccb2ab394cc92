from slowapi import Limiter
from slowapi.util import get_remote_address


def build_limiter() -> Limiter:
    """Ein Limiter pro App, der Zähler-Speicher liegt im Prozess."""
    return Limiter(key_func=get_remote_address)
