"""Project fingerprinting: deterministic content identifiers."""

from stackprint.fingerprint.generator import (
    FingerprintGenerator,
    generate_fingerprint,
)
from stackprint.fingerprint.hashing import (
    hash_content,
    hash_directory_tree,
    hash_file,
    hash_multiple,
)
from stackprint.fingerprint.schemas import (
    FingerprintComponents,
    FingerprintResult,
)

__all__ = [
    "FingerprintComponents",
    "FingerprintGenerator",
    "FingerprintResult",
    "generate_fingerprint",
    "hash_content",
    "hash_directory_tree",
    "hash_file",
    "hash_multiple",
]
