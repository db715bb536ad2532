"""Random registration data"""

import random
import secrets
import string
import time

PASSWORD_CHARS = string.ascii_letters + string.digits + '!@#$%^&*()'


def generate_random_email(domain: str = "example.com") -> str:
    """
    Unique throwaway address for account registration.

    Examples:
        >>> generate_random_email()
        "test_1718000000000_3f9a2b1c4d5e6f70@example.com"
    """
    timestamp = int(time.time() * 1000)
    return f"test_{timestamp}_{secrets.token_hex(8)}@{domain}"


def generate_random_password(length: int = 12) -> str:
    """
    Random password with at least one uppercase letter, lowercase letter,
    digit and symbol. Lengths below 4 still yield those four characters.
    """
    chars = ['A', 'a', '1', '!']

    for _ in range(len(chars), length):
        chars.append(random.choice(PASSWORD_CHARS))

    random.shuffle(chars)
    return ''.join(chars)
