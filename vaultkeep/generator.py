"""
Random password generation.
"""

import secrets
import string

from . import config


def build_alphabet(include_symbols: bool = True, include_numbers: bool = True) -> str:
    """Build the character set: letters always, digits and symbols on request."""
    chars = string.ascii_lowercase + string.ascii_uppercase
    if include_numbers:
        chars += string.digits
    if include_symbols:
        chars += config.PASSWORD_GENERATOR_SYMBOLS
    return chars


def generate_password(length: int = config.PASSWORD_GENERATOR_DEFAULT_LENGTH,
                      include_symbols: bool = True,
                      include_numbers: bool = True) -> str:
    """
    Generate a password of exactly ``length`` characters.

    Each character is drawn independently from the alphabet, so a requested
    character class is not guaranteed to appear in every password.
    """
    length = int(length)
    if length < 0:
        raise ValueError("Password length must not be negative")

    chars = build_alphabet(include_symbols, include_numbers)
    # Generate password using secrets module
    return ''.join(secrets.choice(chars) for _ in range(length))
