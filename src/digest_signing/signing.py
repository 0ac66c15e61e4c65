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


"""High level API for the signing interface of `digest_signing` library.

The module allows signing a file with a key and the default algorithm
(HMAC-SHA-512):

```python
digest_signing.signing.sign("model.bin", "model.bin.signed", key=b"secret")
```

The module allows customizing the signing configuration before signing:

```python
digest_signing.signing.Config().use_keyed_hash(
    algorithm="hmac-sha256", key=b"secret"
).sign("model.bin", "model.bin.signed")
```

The same signing configuration can be used to sign multiple files:

```python
signing_config = digest_signing.signing.Config().use_key_file(
    "signing.key", algorithm="hmac-sha256"
)

for path in all_files:
    signing_config.sign(path, f"{path}.signed")
```

The verifier needs the same algorithm and key, see `digest_signing.verifying`.
"""

import os
import pathlib
import sys
from typing import Optional

from digest_signing import errors
from digest_signing import hashing
from digest_signing._hashing import algorithms
from digest_signing._signing import signed_file


if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


PathLike = str | os.PathLike


def sign(
    source_path: PathLike,
    signed_path: PathLike,
    *,
    key: bytes,
    algorithm: hashing.KeyedHashAlgorithm | str = (
        hashing.KeyedHashAlgorithm.HMAC_SHA512
    ),
) -> None:
    """Signs a file with a key.

    Args:
        source_path: The file to sign.
        signed_path: Where to write the signed file. Overwritten if present.
        key: The secret key.
        algorithm: The keyed digest algorithm. Default is HMAC-SHA-512.
    """
    Config().use_keyed_hash(algorithm=algorithm, key=key).sign(
        source_path, signed_path
    )


class Config:
    """Configuration to use when signing files.

    A configuration holds the keyed digest algorithm and the key. The key is
    mandatory and has no default; signing without one raises
    `MissingKeyError`.
    """

    def __init__(self):
        """Initializes the default configuration for signing."""
        self._algorithm = hashing.KeyedHashAlgorithm.HMAC_SHA512
        self._key: Optional[bytes] = None
        self._chunk_size = signed_file.CHUNK_SIZE

    @property
    def algorithm(self) -> hashing.KeyedHashAlgorithm:
        """The keyed digest algorithm used when signing."""
        return self._algorithm

    def sign(self, source_path: PathLike, signed_path: PathLike) -> None:
        """Signs a file using the current configuration.

        Args:
            source_path: The file to sign.
            signed_path: Where to write the signed file.

        Raises:
            MissingKeyError: No key has been configured.
            SourceNotFoundError: `source_path` is not a readable file.
        """
        signed_file.sign_file(
            self._algorithm,
            self._key,
            source_path,
            signed_path,
            chunk_size=self._chunk_size,
        )

    def sign_bytes(self, content: bytes) -> bytes:
        """Returns the signed form of `content`, using this configuration."""
        if self._key is None:
            raise errors.MissingKeyError("A key is required to sign")
        return signed_file.sign_bytes(self._algorithm, self._key, content)

    def use_keyed_hash(
        self,
        *,
        algorithm: hashing.KeyedHashAlgorithm | str = (
            hashing.KeyedHashAlgorithm.HMAC_SHA512
        ),
        key: bytes,
    ) -> Self:
        """Configures signing with a key held in memory.

        Args:
            algorithm: The keyed digest algorithm. Unknown names select
              HMAC-SHA-512.
            key: The secret key.

        Return:
            The new signing configuration.
        """
        if key is None:
            raise errors.MissingKeyError("A key is required")
        self._algorithm = algorithms.resolve_keyed_hash_algorithm(
            algorithm
        )
        self._key = bytes(key)
        return self

    def use_key_file(
        self,
        key_path: PathLike,
        *,
        algorithm: hashing.KeyedHashAlgorithm | str = (
            hashing.KeyedHashAlgorithm.HMAC_SHA512
        ),
    ) -> Self:
        """Configures signing with a key read from a file.

        The whole file content, as raw bytes, is the key.

        Args:
            key_path: The path to the key file.
            algorithm: The keyed digest algorithm.

        Return:
            The new signing configuration.
        """
        return self.use_keyed_hash(
            algorithm=algorithm, key=pathlib.Path(key_path).read_bytes()
        )

    def set_chunk_size(self, chunk_size: int) -> Self:
        """Sets the size of the buffer used to copy the source file.

        Args:
            chunk_size: The buffer size, in bytes. Must be positive.

        Return:
            The new signing configuration.
        """
        if chunk_size <= 0:
            raise ValueError(
                f"Chunk size must be strictly positive, got {chunk_size}."
            )
        self._chunk_size = chunk_size
        return self
