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


"""High level API for the verification interface of `digest_signing` library.

Verification needs the algorithm and key used during signing, since a signed
file does not record them:

```python
if not digest_signing.verifying.verify("model.bin.signed", key=b"secret"):
    raise SystemExit("model.bin.signed has been tampered with")
```

The verification configuration can also be built once and reused:

```python
verifying_config = digest_signing.verifying.Config().use_keyed_hash(
    algorithm="hmac-sha256", key=b"secret"
)

for path in all_files:
    assert verifying_config.verify(f"{path}.signed")
```

A `False` result means the contents do not match the header: the file was
modified, or it was signed with a different algorithm or key. Failures to
perform the verification at all (missing key, missing file, I/O errors) are
raised as exceptions instead.
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


def verify(
    signed_path: PathLike,
    *,
    key: bytes,
    algorithm: hashing.KeyedHashAlgorithm | str = (
        hashing.KeyedHashAlgorithm.HMAC_SHA512
    ),
) -> bool:
    """Verifies a signed file with a key.

    Args:
        signed_path: The signed file.
        key: The secret key used when signing.
        algorithm: The keyed digest algorithm used when signing.

    Returns:
        Whether the file's header matches its contents.
    """
    return (
        Config()
        .use_keyed_hash(algorithm=algorithm, key=key)
        .verify(signed_path)
    )


class Config:
    """Configuration to use when verifying signed files.

    The configuration must match the one used during signing.
    """

    def __init__(self):
        """Initializes the default configuration for verification."""
        self._algorithm = hashing.KeyedHashAlgorithm.HMAC_SHA512
        self._key: Optional[bytes] = None
        self._chunk_size = signed_file.CHUNK_SIZE

    @property
    def algorithm(self) -> hashing.KeyedHashAlgorithm:
        """The keyed digest algorithm used when verifying."""
        return self._algorithm

    def verify(self, signed_path: PathLike) -> bool:
        """Verifies a signed file using the current configuration.

        Args:
            signed_path: The signed file.

        Returns:
            Whether the file's header matches its contents.

        Raises:
            MissingKeyError: No key has been configured.
            SourceNotFoundError: `signed_path` is not a readable file.
        """
        return signed_file.verify_file(
            self._algorithm,
            self._key,
            signed_path,
            chunk_size=self._chunk_size,
        )

    def verify_bytes(self, signed: bytes) -> bool:
        """Verifies signed contents held in memory."""
        if self._key is None:
            raise errors.MissingKeyError("A key is required to verify")
        return signed_file.verify_bytes(self._algorithm, self._key, signed)

    def use_keyed_hash(
        self,
        *,
        algorithm: hashing.KeyedHashAlgorithm | str = (
            hashing.KeyedHashAlgorithm.HMAC_SHA512
        ),
        key: bytes,
    ) -> Self:
        """Configures verification with a key held in memory.

        Args:
            algorithm: The keyed digest algorithm used when signing.
            key: The secret key used when signing.

        Return:
            The new verification configuration.
        """
        if key is None:
            raise errors.MissingKeyError("A key is required")
        self._algorithm = algorithms.resolve_keyed_hash_algorithm(algorithm)
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
        """Configures verification with a key read from a file.

        Args:
            key_path: The path to the key file. Its raw bytes are the key.
            algorithm: The keyed digest algorithm used when signing.

        Return:
            The new verification configuration.
        """
        return self.use_keyed_hash(
            algorithm=algorithm, key=pathlib.Path(key_path).read_bytes()
        )

    def set_chunk_size(self, chunk_size: int) -> Self:
        """Sets the amount of data read at once while hashing.

        Return:
            The new verification configuration.
        """
        if chunk_size <= 0:
            raise ValueError(
                f"Chunk size must be strictly positive, got {chunk_size}."
            )
        self._chunk_size = chunk_size
        return self
