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


"""Signed file format and its sign/verify operations.

A signed file is the keyed digest of the original contents followed by the
original contents, unmodified:

    [ digest (digest_size bytes) ][ original bytes ]

There is no magic number, version, algorithm tag or length field. The verifier
must use the same algorithm and key as the signer. Using a different algorithm
or key is indistinguishable from tampering: verification returns `False`.

Files are processed as streams with a fixed size buffer, so files of any size
can be signed and verified in constant memory. The source is read twice while
signing: once to compute the digest and once to copy it after the header.

Example:
```python
>>> sign_file("hmac-sha256", b"k", "model.bin", "model.bin.signed")
>>> verify_file("hmac-sha256", b"k", "model.bin.signed")
True
```
"""

import io
import logging
import os
import pathlib
from typing import BinaryIO

from cryptography.hazmat.primitives import constant_time

from digest_signing import errors
from digest_signing import hashing
from digest_signing._hashing import algorithms


logger = logging.getLogger(__name__)


# Size of the buffer used to copy the source after the header.
CHUNK_SIZE = 1024


def header_size(algorithm: hashing.KeyedHashAlgorithm | str | None) -> int:
    """The size, in bytes, of the header of files signed with `algorithm`."""
    return algorithms.resolve_keyed_hash_algorithm(algorithm).digest_size


def _check_key(key: bytes | None) -> None:
    if key is None:
        raise errors.MissingKeyError("A key is required to sign or verify")


def _check_readable_file(path: pathlib.Path) -> None:
    if not path.is_file() or not os.access(path, os.R_OK):
        raise errors.SourceNotFoundError(
            f"File {path} does not exist or cannot be read"
        )


def _check_chunk_size(chunk_size: int) -> None:
    if chunk_size <= 0:
        raise ValueError(
            f"Chunk size must be strictly positive, got {chunk_size}."
        )


def sign_stream(
    algorithm: hashing.KeyedHashAlgorithm | str | None,
    key: bytes,
    source: BinaryIO,
    destination: BinaryIO,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> bytes:
    """Writes the signed form of `source` into `destination`.

    Both streams are owned by the caller and are not closed. The source is read
    from its start and must be seekable. The destination is written from its
    current position.

    Args:
        algorithm: The keyed digest algorithm.
        key: The secret key.
        source: The contents to sign, opened for reading in binary mode.
        destination: Where to write the signed contents.
        chunk_size: The size of the buffer used to copy the source.

    Returns:
        The digest written as header.

    Raises:
        MissingKeyError: `key` is `None`.
        ArgumentRequiredError: A stream is `None`.
    """
    _check_key(key)
    _check_chunk_size(chunk_size)
    if source is None or destination is None:
        raise errors.ArgumentRequiredError(
            "Source and destination are required"
        )

    with hashing.KeyedHasher(algorithm, key) as hasher:
        source.seek(0)
        digest = hasher.compute_stream(source, chunk_size=chunk_size)
        destination.write(digest)

        source.seek(0)
        while True:
            data = source.read(chunk_size)
            if not data:
                break
            destination.write(data)

    return digest


def verify_stream(
    algorithm: hashing.KeyedHashAlgorithm | str | None,
    key: bytes,
    stream: BinaryIO,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> bool:
    """Checks that the header of a signed stream matches its body.

    The stream is read from its current position. The digests are compared in
    constant time. A stream shorter than the header never verifies.

    Args:
        algorithm: The keyed digest algorithm used when signing.
        key: The secret key used when signing.
        stream: The signed contents, opened for reading in binary mode.
        chunk_size: The amount of data to read at once.

    Returns:
        Whether the stored digest matches the digest of the body.

    Raises:
        MissingKeyError: `key` is `None`.
        ArgumentRequiredError: `stream` is `None`.
    """
    _check_key(key)
    _check_chunk_size(chunk_size)
    if stream is None:
        raise errors.ArgumentRequiredError("Input stream is required")

    with hashing.KeyedHasher(algorithm, key) as hasher:
        stored_digest = stream.read(hasher.digest_size)
        computed_digest = hasher.compute_stream(stream, chunk_size=chunk_size)

    return constant_time.bytes_eq(stored_digest, computed_digest)


def sign_file(
    algorithm: hashing.KeyedHashAlgorithm | str | None,
    key: bytes,
    source_path: str | os.PathLike,
    signed_path: str | os.PathLike,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> None:
    """Signs `source_path`, writing the signed file at `signed_path`.

    An existing file at `signed_path` is truncated. If an error occurs while
    writing, the file at `signed_path` is left incomplete and must not be used.

    Raises:
        MissingKeyError: `key` is `None`.
        SourceNotFoundError: `source_path` is not a readable file.
        ValueError: Both paths point to the same file.
        OSError: Reading or writing failed.
    """
    _check_key(key)
    source_path = pathlib.Path(source_path)
    signed_path = pathlib.Path(signed_path)
    _check_readable_file(source_path)
    if signed_path.exists() and source_path.samefile(signed_path):
        raise ValueError(f"Cannot sign {source_path} in place")

    logger.debug(f"Signing {source_path} into {signed_path}")
    with open(source_path, "rb") as source:
        with open(signed_path, "wb") as destination:
            digest = sign_stream(
                algorithm, key, source, destination, chunk_size=chunk_size
            )
    logger.info(
        f"Signed {source_path} with {len(digest)}-byte header"
        f" {digest.hex()}"
    )


def verify_file(
    algorithm: hashing.KeyedHashAlgorithm | str | None,
    key: bytes,
    signed_path: str | os.PathLike,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> bool:
    """Verifies the signed file at `signed_path`.

    Returns:
        Whether the header matches the contents. `False` is also returned when
        the file was signed with another algorithm or key.

    Raises:
        MissingKeyError: `key` is `None`.
        SourceNotFoundError: `signed_path` is not a readable file.
        OSError: Reading failed.
    """
    _check_key(key)
    signed_path = pathlib.Path(signed_path)
    _check_readable_file(signed_path)

    with open(signed_path, "rb") as stream:
        verified = verify_stream(algorithm, key, stream, chunk_size=chunk_size)

    if verified:
        logger.info(f"Verified {signed_path}")
    else:
        logger.info(f"Digest mismatch for {signed_path}")
    return verified


def sign_bytes(
    algorithm: hashing.KeyedHashAlgorithm | str | None,
    key: bytes,
    content: bytes,
) -> bytes:
    """Returns the signed form of `content`."""
    if content is None:
        raise errors.ArgumentRequiredError("Content is required")
    destination = io.BytesIO()
    sign_stream(algorithm, key, io.BytesIO(content), destination)
    return destination.getvalue()


def verify_bytes(
    algorithm: hashing.KeyedHashAlgorithm | str | None,
    key: bytes,
    signed: bytes,
) -> bool:
    """Verifies signed contents held in memory."""
    if signed is None:
        raise errors.ArgumentRequiredError("Signed content is required")
    return verify_stream(algorithm, key, io.BytesIO(signed))


def split(
    algorithm: hashing.KeyedHashAlgorithm | str | None, signed: bytes
) -> tuple[bytes, bytes]:
    """Splits signed contents into the stored digest and the original bytes.

    No verification is performed.
    """
    if signed is None:
        raise errors.ArgumentRequiredError("Signed content is required")
    size = header_size(algorithm)
    return signed[:size], signed[size:]
