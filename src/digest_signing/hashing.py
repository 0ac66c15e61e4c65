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


"""High level API for computing digests with the `digest_signing` library.

Two digest engines are provided. `Hasher` computes unkeyed digests, optionally
salted:

```python
hasher = digest_signing.hashing.Hasher(HashAlgorithm.SHA256)
salt = hasher.create_salt(16)
digest = hasher.compute_digest(b"message")  # sha256(b"message" + salt)
```

`KeyedHasher` computes HMAC digests, with the key bound to the engine:

```python
with digest_signing.hashing.KeyedHasher(
    KeyedHashAlgorithm.HMAC_SHA256, key=b"secret"
) as hasher:
    digest = hasher.compute_digest(b"message")
    with open("model.bin", "rb") as f:
        file_digest = hasher.compute_stream(f)
```

Every engine remembers the last message (`origin`) and the last digest
(`hashed_bytes`) until it is reset or a new digest is computed. Engines are not
safe to share between threads: each caller should create its own.

Text inputs are encoded as UTF-8 and text digests are returned in Base64.
"""

import abc
import logging
import os
from typing import BinaryIO, Optional

from digest_signing import errors
from digest_signing import salt as salt_generator
from digest_signing._hashing import algorithms
from digest_signing._hashing import hashing
from digest_signing._hashing import io


logger = logging.getLogger(__name__)


HashAlgorithm = algorithms.HashAlgorithm
KeyedHashAlgorithm = algorithms.KeyedHashAlgorithm


def _require_bytes(value: Optional[bytes], what: str) -> bytes:
    if value is None:
        raise errors.ArgumentRequiredError(f"{what} is required")
    return bytes(value)


def _require_text(value: Optional[str], what: str) -> bytes:
    if value is None:
        raise errors.ArgumentRequiredError(f"{what} is required")
    return value.encode("utf-8")


def _require_message(message: Optional[bytes]) -> bytes:
    if not message:
        raise errors.EmptyInputError("Cannot hash an empty message")
    return message


class _DigestEngine(metaclass=abc.ABCMeta):
    """Shared state and behavior of `Hasher` and `KeyedHasher`.

    An engine owns at most one primitive (`hashing.StreamingHashEngine`) at a
    time. Whenever the configuration changes, the previous primitive is dropped
    before the next one is built.
    """

    def __init__(self, origin: Optional[bytes] = None):
        self._engine: Optional[hashing.StreamingHashEngine] = None
        self._origin: Optional[bytes] = None
        self._digest: Optional[hashing.Digest] = None
        self._closed = False
        if origin is not None:
            self.set_origin(origin)

    @property
    @abc.abstractmethod
    def algorithm(self) -> algorithms.HashAlgorithm | KeyedHashAlgorithm:
        """The algorithm used by this engine."""

    @abc.abstractmethod
    def _build_engine(self) -> Optional[hashing.StreamingHashEngine]:
        """Builds a fresh primitive for the current configuration."""

    def _suffix(self) -> bytes:
        """Bytes appended to every message before hashing."""
        return b""

    def _configure(self) -> None:
        self._engine = None
        self._engine = self._build_engine()

    def _require_engine(self) -> hashing.StreamingHashEngine:
        if self._closed:
            raise ValueError("Digest engine is closed")
        return self._engine

    @property
    def digest_size(self) -> int:
        """The size, in bytes, of the digests produced by the engine."""
        return self.algorithm.digest_size

    @property
    def digest_size_bits(self) -> int:
        """The size, in bits, of the digests produced by the engine."""
        return self.digest_size * 8

    @property
    def origin(self) -> Optional[bytes]:
        """The last message set or hashed."""
        return self._origin

    @property
    def origin_text(self) -> Optional[str]:
        """The last message, decoded as UTF-8."""
        if self._origin is None:
            return None
        return self._origin.decode("utf-8")

    def set_origin(self, origin: bytes) -> None:
        """Sets the message to hash in `compute`."""
        self._origin = _require_bytes(origin, "Origin bytes")

    def set_origin_text(self, origin: str) -> None:
        """Sets the message to hash in `compute`, from UTF-8 text."""
        self._origin = _require_text(origin, "Origin text")

    @property
    def hashed_bytes(self) -> Optional[bytes]:
        """The last computed digest, `None` if there is none."""
        if self._digest is None:
            return None
        return self._digest.digest_value

    @property
    def hashed_base64(self) -> Optional[str]:
        """The last computed digest in Base64."""
        if self._digest is None:
            return None
        return self._digest.digest_base64

    @property
    def hashed_hex(self) -> Optional[str]:
        """The last computed digest in hexadecimal."""
        if self._digest is None:
            return None
        return self._digest.digest_hex

    def compute(self) -> bytes:
        """Computes the digest of the current `origin`.

        Returns:
            The digest, also available as `hashed_bytes` afterwards.

        Raises:
            EmptyInputError: The origin is missing or empty.
        """
        if not self._origin:
            raise errors.EmptyInputError("Cannot hash an empty message")

        engine = self._require_engine()
        engine.reset(self._origin)
        suffix = self._suffix()
        if suffix:
            engine.update(suffix)

        self._digest = engine.compute()
        return self._digest.digest_value

    def _compute_message(self, message: Optional[bytes]) -> bytes:
        self.set_origin(_require_message(message))
        return self.compute()

    def compute_stream(
        self, stream: BinaryIO, *, chunk_size: int = 8192
    ) -> bytes:
        """Computes the digest of a binary stream, reading it in chunks.

        The stream is read from its current position until EOF, so streams
        larger than memory can be hashed. Empty streams are allowed. The
        stream's contents do not become the `origin`.

        Args:
            stream: A stream opened for reading in binary mode.
            chunk_size: The amount of data to read at once.

        Returns:
            The digest, also available as `hashed_bytes` afterwards.
        """
        if stream is None:
            raise errors.ArgumentRequiredError("Input stream is required")

        hasher = io.StreamHasher(
            stream,
            self._require_engine(),
            chunk_size=chunk_size,
            suffix=self._suffix(),
        )
        self._digest = hasher.compute()
        return self._digest.digest_value

    def compute_file(
        self, path: str | os.PathLike, *, chunk_size: int = 8192
    ) -> bytes:
        """Computes the digest of a file's contents, reading it in chunks."""
        if path is None:
            raise errors.ArgumentRequiredError("File path is required")

        hasher = io.FileHasher(
            path,
            self._require_engine(),
            chunk_size=chunk_size,
            suffix=self._suffix(),
        )
        self._digest = hasher.compute()
        return self._digest.digest_value

    def reset(self) -> None:
        """Forgets the origin and the last digest and rebuilds the primitive."""
        self._origin = None
        self._digest = None
        self._closed = False
        self._configure()

    def close(self) -> None:
        """Drops the primitive and any key or salt material."""
        self._engine = None
        self._origin = None
        self._digest = None
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class Hasher(_DigestEngine):
    """Computes unkeyed digests, with an optional salt.

    When a non-empty salt is set, the digest covers the message followed by the
    salt (`message || salt`). The salt is never prepended.
    """

    def __init__(
        self,
        algorithm: HashAlgorithm | str | None = HashAlgorithm.SHA512,
        *,
        origin: Optional[bytes] = None,
        salt: Optional[bytes] = None,
    ):
        """Initializes an unkeyed digest engine.

        Args:
            algorithm: The digest algorithm. Unknown names select SHA-512.
            origin: Optional message to hash in `compute`.
            salt: Optional salt appended to every message.
        """
        super().__init__(origin)
        self._algorithm = algorithms.resolve_hash_algorithm(algorithm)
        self._salt: Optional[bytes] = None
        self.set_salt(salt)
        self._configure()

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    def _build_engine(self) -> hashing.StreamingHashEngine:
        logger.debug(f"Configuring {self._algorithm.value} engine")
        return algorithms.new_hash(self._algorithm)

    def _suffix(self) -> bytes:
        return self._salt if self.salt_enabled else b""

    @property
    def salt(self) -> Optional[bytes]:
        """The active salt, `None` if unset."""
        return self._salt

    @property
    def salt_text(self) -> Optional[str]:
        """The active salt, decoded as UTF-8."""
        if self._salt is None:
            return None
        return self._salt.decode("utf-8")

    @property
    def salt_enabled(self) -> bool:
        """Whether a non-empty salt is set."""
        return bool(self._salt)

    def set_salt(self, salt: Optional[bytes]) -> None:
        """Sets the salt. Passing `None` or empty bytes disables salting."""
        self._salt = None if salt is None else bytes(salt)

    def set_salt_text(self, salt: str) -> None:
        """Sets the salt from UTF-8 text."""
        self._salt = _require_text(salt, "Salt text")

    def create_salt(self, length: int) -> bytes:
        """Generates a random salt of `length` bytes and makes it active."""
        self._salt = salt_generator.generate(length)
        return self._salt

    def compute_digest(
        self, message: Optional[bytes], salt: Optional[bytes] = None
    ) -> bytes:
        """Computes the digest of `message`, optionally setting a new salt.

        Args:
            message: The message to hash. Becomes the new `origin`.
            salt: If given, replaces the active salt before hashing.

        Raises:
            EmptyInputError: The message is missing or empty.
        """
        _require_message(message)
        if salt is not None:
            self.set_salt(salt)
        return self._compute_message(message)

    def compute_text_digest(
        self, text: str, salt: Optional[str] = None
    ) -> str:
        """Computes the digest of UTF-8 `text` and returns it in Base64.

        Args:
            text: The message to hash.
            salt: If given, replaces the active salt before hashing.
        """
        origin = _require_message(_require_text(text, "Origin text"))
        if salt is not None:
            self.set_salt_text(salt)
        self.set_origin(origin)
        self.compute()
        return self.hashed_base64

    def reset(self) -> None:
        """Forgets origin, digest and salt and rebuilds the primitive."""
        self._salt = None
        super().reset()

    def close(self) -> None:
        self._salt = None
        super().close()


class KeyedHasher(_DigestEngine):
    """Computes keyed (HMAC) digests.

    The key is bound to the primitive when the primitive is built, so changing
    the key rebuilds the primitive. Messages are hashed as given; no salt is
    ever appended in keyed mode.
    """

    def __init__(
        self,
        algorithm: KeyedHashAlgorithm | str | None = (
            KeyedHashAlgorithm.HMAC_SHA512
        ),
        key: Optional[bytes] = None,
        *,
        origin: Optional[bytes] = None,
    ):
        """Initializes a keyed digest engine.

        Args:
            algorithm: The keyed algorithm. Unknown names select HMAC-SHA-512.
            key: The secret key. Can also be set later with `set_key`.
            origin: Optional message to hash in `compute`.
        """
        super().__init__(origin)
        self._algorithm = algorithms.resolve_keyed_hash_algorithm(algorithm)
        self._key: Optional[bytes] = None
        if key is not None:
            self._key = bytes(key)
        self._configure()

    @property
    def algorithm(self) -> KeyedHashAlgorithm:
        return self._algorithm

    def _build_engine(self) -> Optional[hashing.StreamingHashEngine]:
        if self._key is None:
            return None
        logger.debug(f"Configuring {self._algorithm.value} engine")
        return algorithms.new_hmac(self._algorithm, self._key)

    def _require_engine(self) -> hashing.StreamingHashEngine:
        engine = super()._require_engine()
        if engine is None:
            raise errors.MissingKeyError("A key is required for keyed digests")
        return engine

    @property
    def key(self) -> Optional[bytes]:
        """The active key, `None` if unset."""
        return self._key

    @property
    def key_text(self) -> Optional[str]:
        """The active key, decoded as UTF-8."""
        if self._key is None:
            return None
        return self._key.decode("utf-8")

    def set_key(self, key: bytes) -> None:
        """Binds a new key, rebuilding the primitive."""
        self._key = _require_bytes(key, "Key bytes")
        self._configure()

    def set_key_text(self, key: str) -> None:
        """Binds a new key given as UTF-8 text, rebuilding the primitive."""
        self._key = _require_text(key, "Key text")
        self._configure()

    def create_key(self, length: int) -> bytes:
        """Generates a random key of `length` bytes and binds it."""
        self.set_key(salt_generator.generate(length))
        return self._key

    def compute_digest(
        self, message: Optional[bytes], key: Optional[bytes] = None
    ) -> bytes:
        """Computes the keyed digest of `message`, optionally binding a key.

        Args:
            message: The message to hash. Becomes the new `origin`.
            key: If given, replaces the active key before hashing.

        Raises:
            EmptyInputError: The message is missing or empty.
            MissingKeyError: No key has been set.
        """
        _require_message(message)
        if key is not None:
            self.set_key(key)
        return self._compute_message(message)

    def compute_text_digest(self, text: str, key: Optional[str] = None) -> str:
        """Computes the keyed digest of UTF-8 `text`, returned in Base64.

        Args:
            text: The message to hash.
            key: If given, replaces the active key (as UTF-8 text).
        """
        origin = _require_message(_require_text(text, "Origin text"))
        if key is not None:
            self.set_key_text(key)
        self.set_origin(origin)
        self.compute()
        return self.hashed_base64

    def reset(self) -> None:
        """Forgets origin, digest and key. A new key must be set afterwards."""
        self._key = None
        super().reset()

    def close(self) -> None:
        self._key = None
        super().close()
