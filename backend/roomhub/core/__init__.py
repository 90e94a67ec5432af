from .config import settings
from .security import check_password, hash_password, issue_access_token, read_access_token

__all__ = [
    "settings",
    "check_password",
    "hash_password",
    "issue_access_token",
    "read_access_token",
]
