# Copyright 2025 The digest-signing Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Registry of the digest algorithms supported by the library.

The set of algorithms is closed: every unkeyed algorithm in `HashAlgorithm` has
exactly one keyed (HMAC) counterpart in `KeyedHashAlgorithm`. Adding a new
algorithm means adding a member to both enums.

Algorithms can be given as enum members or as their names. A missing or
unrecognized name is not an error: it selects SHA-512 (or HMAC-SHA-512 for keyed
digests), which is the documented default.

```python
>>> resolve_keyed_hash_algorithm("HMAC_SHA256")
<KeyedHashAlgorithm.HMAC_SHA256: 'hmac-sha256'>
>>> new_hmac("hmac-sha256", b"key").digest_size
32
```
"""

import enum
import hashlib
import logging

from digest_signing._hashing import memory


logger = logging.getLogger(__name__)


class HashAlgorithm(str, enum.Enum):
    """Unkeyed digest algorithms. Values are `hashlib` names."""

    MD5 = "md5"
    RIPEMD160 = "ripemd160"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    @property
    def digest_size(self) -> int:
        """The size, in bytes, of the digests for this algorithm."""
        return hashlib.new(self.value).digest_size


class KeyedHashAlgorithm(str, enum.Enum):
    """Keyed (HMAC) digest algorithms."""

    HMAC_MD5 = "hmac-md5"
    HMAC_RIPEMD160 = "hmac-ripemd160"
    HMAC_SHA1 = "hmac-sha1"
    HMAC_SHA256 = "hmac-sha256"
    HMAC_SHA384 = "hmac-sha384"
    HMAC_SHA512 = "hmac-sha512"

    @property
    def hash_algorithm(self) -> HashAlgorithm:
        """The unkeyed algorithm used inside the HMAC construction."""
        return HashAlgorithm(self.value.removeprefix("hmac-"))

    @property
    def digest_size(self) -> int:
        """The size, in bytes, of the digests for this algorithm."""
        return self.hash_algorithm.digest_size


DEFAULT_HASH_ALGORITHM = HashAlgorithm.SHA512
DEFAULT_KEYED_HASH_ALGORITHM = KeyedHashAlgorithm.HMAC_SHA512


def _normalize(name: str) -> str:
    return "".join(c for c in name.lower() if c not in "-_ ")


_HASH_ALGORITHMS = {_normalize(a.value): a for a in HashAlgorithm}
_KEYED_HASH_ALGORITHMS = {_normalize(a.value): a for a in KeyedHashAlgorithm}


def resolve_hash_algorithm(
    algorithm: HashAlgorithm | str | None,
) -> HashAlgorithm:
    """Maps an algorithm name to a `HashAlgorithm`.

    Names are matched ignoring case, dashes and underscores, so `"SHA-256"`,
    `"sha_256"` and `"sha256"` all select `HashAlgorithm.SHA256`.

    Args:
        algorithm: The algorithm, or its name. `None` selects the default.

    Returns:
        The requested algorithm, or SHA-512 if it is missing or unknown.
    """
    if isinstance(algorithm, HashAlgorithm):
        return algorithm
    if algorithm is None:
        return DEFAULT_HASH_ALGORITHM

    resolved = _HASH_ALGORITHMS.get(_normalize(str(algorithm)))
    if resolved is None:
        logger.warning(
            f"Unknown hash algorithm {algorithm!r}, "
            f"using {DEFAULT_HASH_ALGORITHM.value}"
        )
        return DEFAULT_HASH_ALGORITHM
    return resolved


def resolve_keyed_hash_algorithm(
    algorithm: KeyedHashAlgorithm | str | None,
) -> KeyedHashAlgorithm:
    """Maps an algorithm name to a `KeyedHashAlgorithm`.

    Names are matched like in `resolve_hash_algorithm`, so `"HMAC_SHA256"`
    and `"hmac-sha256"` are equivalent.

    Args:
        algorithm: The algorithm, or its name. `None` selects the default.

    Returns:
        The requested algorithm, or HMAC-SHA-512 if it is missing or unknown.
    """
    if isinstance(algorithm, KeyedHashAlgorithm):
        return algorithm
    if algorithm is None:
        return DEFAULT_KEYED_HASH_ALGORITHM

    resolved = _KEYED_HASH_ALGORITHMS.get(_normalize(str(algorithm)))
    if resolved is None:
        logger.warning(
            f"Unknown keyed hash algorithm {algorithm!r}, "
            f"using {DEFAULT_KEYED_HASH_ALGORITHM.value}"
        )
        return DEFAULT_KEYED_HASH_ALGORITHM
    return resolved


def new_hash(algorithm: HashAlgorithm | str | None) -> memory.Hash:
    """Builds a fresh unkeyed engine for the requested algorithm."""
    return memory.Hash(resolve_hash_algorithm(algorithm).value)


def new_hmac(
    algorithm: KeyedHashAlgorithm | str | None, key: bytes
) -> memory.HMAC:
    """Builds a fresh keyed engine for the requested algorithm and key."""
    resolved = resolve_keyed_hash_algorithm(algorithm)
    return memory.HMAC(resolved.hash_algorithm.value, key)
