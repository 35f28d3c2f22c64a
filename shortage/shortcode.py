"""Short name generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random short names for links."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, default_length: int = 8, rng: Optional[random.Random] = None):
        """Initialize short name generator.

        Args:
            default_length: Default length for generated names
            rng: Random source (an OS-backed ``SystemRandom`` by default)
        """
        self.default_length = default_length
        self.rng = rng or random.SystemRandom()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short name.

        Args:
            length: Length of the name (uses default if not specified)

        Returns:
            Random Base62 string
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.BASE62_CHARS, k=length))

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code has valid format (alphanumeric, '-' or '_').

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.BASE62_CHARS or c in '-_' for c in code)
