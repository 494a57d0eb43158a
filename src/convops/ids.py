"""Opaque identifiers for messages and branches."""

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase

MESSAGE_ID_PREFIX = "msg"
BRANCH_ID_PREFIX = "branch"


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_message_id() -> str:
    """
    Returns a new message id of the form ``msg_<millis>_<9 base36 chars>``.

    The millisecond prefix keeps ids roughly sortable; the random suffix makes
    collisions within the same millisecond negligible.
    """
    return f"{MESSAGE_ID_PREFIX}_{now_ms()}_{_random_suffix(9)}"


def generate_branch_id() -> str:
    """Returns a new branch id of the form ``branch_<millis>_<6 base36 chars>``."""
    return f"{BRANCH_ID_PREFIX}_{now_ms()}_{_random_suffix(6)}"
