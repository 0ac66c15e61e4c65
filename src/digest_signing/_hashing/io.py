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


"""Machinery for computing digests over streams and files.

Example usage for `StreamHasher`:
```python
>>> with open("/tmp/file", "w") as f:
...     f.write("abcd")
>>> with open("/tmp/file", "rb") as f:
...     hasher = StreamHasher(f, memory.Hash("sha256"))
...     digest = hasher.compute()
>>> digest.digest_hex
'88d4266fd4e6338d13b845fcf289579d209c897823b9217da3e161936f031589'
```

Example usage for `FileHasher`:
```python
>>> hasher = FileHasher("/tmp/file", memory.Hash("sha256"))
>>> digest = hasher.compute()
>>> digest.digest_hex
'88d4266fd4e6338d13b845fcf289579d209c897823b9217da3e161936f031589'
```
"""

import pathlib
from typing import BinaryIO

from typing_extensions import override

from digest_signing._hashing import hashing


class StreamHasher(hashing.HashEngine):
    """Hash engine that computes the digest of an opened binary stream.

    The stream is read exactly once, from its current position until EOF, in
    chunks of `chunk_size` bytes. Each chunk is passed to the `update` method of
    an inner `hashing.StreamingHashEngine`, so memory use does not depend on the
    stream size and the digest does not depend on the chunk size.

    The stream is owned by the caller: it is neither rewound nor closed. After
    `compute` the stream is positioned at EOF.
    """

    def __init__(
        self,
        stream: BinaryIO,
        content_hasher: hashing.StreamingHashEngine,
        *,
        chunk_size: int = 8192,
        suffix: bytes = b"",
    ):
        """Initializes an instance to hash a stream with a `HashEngine`.

        Args:
            stream: The stream to hash, opened for reading in binary mode.
            content_hasher: A `hashing.StreamingHashEngine` instance used to
              compute the digest of the stream.
            chunk_size: The amount of data to read at once. Default is 8KB. A
              special value of 0 signals to attempt to read everything in a
              single call.
            suffix: Bytes hashed after the stream contents, e.g. a salt.
        """
        if chunk_size < 0:
            raise ValueError(
                f"Chunk size must be non-negative, got {chunk_size}."
            )

        self._stream = stream
        self._content_hasher = content_hasher
        self._chunk_size = chunk_size
        self._suffix = suffix

    def set_stream(self, stream: BinaryIO) -> None:
        """Redefines the stream to be hashed in `compute`."""
        self._stream = stream

    @property
    @override
    def digest_name(self) -> str:
        return self._content_hasher.digest_name

    @override
    def compute(self) -> hashing.Digest:
        self._content_hasher.reset()

        if self._chunk_size == 0:
            self._content_hasher.update(self._stream.read())
        else:
            while True:
                data = self._stream.read(self._chunk_size)
                if not data:
                    break
                self._content_hasher.update(data)

        if self._suffix:
            self._content_hasher.update(self._suffix)

        digest = self._content_hasher.compute()
        return hashing.Digest(self.digest_name, digest.digest_value)

    @property
    @override
    def digest_size(self) -> int:
        """The size, in bytes, of the digests produced by the engine."""
        return self._content_hasher.digest_size


class FileHasher(StreamHasher):
    """Hash engine that computes the digest of a file, given its path.

    The file is opened and closed on every call to `compute`.
    """

    def __init__(
        self,
        file: pathlib.Path | str,
        content_hasher: hashing.StreamingHashEngine,
        *,
        chunk_size: int = 8192,
        suffix: bytes = b"",
    ):
        """Initializes an instance to hash a file with a `HashEngine`.

        Args:
            file: The file to hash. Use `set_file` to reset it.
            content_hasher: A `hashing.StreamingHashEngine` instance used to
              compute the digest of the file.
            chunk_size: The amount of file to read at once. Default is 8KB. A
              special value of 0 signals to attempt to read everything in a
              single call.
            suffix: Bytes hashed after the file contents, e.g. a salt.
        """
        super().__init__(
            None, content_hasher, chunk_size=chunk_size, suffix=suffix
        )
        self._file = pathlib.Path(file)

    def set_file(self, file: pathlib.Path | str) -> None:
        """Redefines the file to be hashed in `compute`."""
        self._file = pathlib.Path(file)

    @override
    def compute(self) -> hashing.Digest:
        with open(self._file, "rb") as f:
            self.set_stream(f)
            try:
                return super().compute()
            finally:
                self.set_stream(None)
