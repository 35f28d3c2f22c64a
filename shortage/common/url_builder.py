"""Short URL building utilities."""


def build_short_url(short_name: str, base_url: str) -> str:
    """Build the complete short URL shown to users.

    Args:
        short_name: The registered short name
        base_url: Base URL (e.g., https://example.com)

    Returns:
        Complete short URL
    """
    return f"{base_url.rstrip('/')}/{short_name}"
