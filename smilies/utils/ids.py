"""
Random blob name generation.

Blob keys are never derived from the client's filename; each upload gets a
fresh random name in the 8.3 style, e.g. 'k3f9x0qa.7bz'.
"""
import secrets
import string


# Lowercase alphanumerics keep names URL-safe and case-insensitive-filesystem safe
BLOB_NAME_CHARS = string.ascii_lowercase + string.digits


def _random_chars(length: int) -> str:
    return "".join(secrets.choice(BLOB_NAME_CHARS) for _ in range(length))


def generate_blob_name(stem_length: int = 8, suffix_length: int = 3) -> str:
    """
    Generate a random blob name.

    Args:
        stem_length: Characters before the dot (default: 8)
        suffix_length: Characters after the dot (default: 3)

    Returns:
        Random name using [a-z0-9] characters

    Examples:
        >>> generate_blob_name()
        'k3f9x0qa.7bz'

    Notes:
        - 11 random characters give ~56 bits of entropy
        - A collision is still handled by the upload service, which replaces
          the existing blob
    """
    return f"{_random_chars(stem_length)}.{_random_chars(suffix_length)}"
