"""SHA-256 content hashing for index entries"""

import hashlib


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 hash of content, so consumers can detect changed posts."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
