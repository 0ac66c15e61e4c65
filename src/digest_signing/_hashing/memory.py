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


"""Digest engines that operate on data already in memory.

Example usage for `Hash`:
```python
>>> hasher = Hash("sha256", b"abcd")
>>> digest = hasher.compute()
>>> digest.digest_hex
'88d4266fd4e6338d13b845fcf289579d209c897823b9217da3e161936f031589'
```

Or, passing the data directly in `update`:
```python
>>> hasher = Hash("sha256")
>>> hasher.update(b"ab")
>>> hasher.update(b"cd")
>>> digest = hasher.compute()
>>> digest.digest_hex
'88d4266fd4e6338d13b845fcf289579d209c897823b9217da3e161936f031589'
```

Example usage for `HMAC`, with the key bound when the engine is created:
```python
>>> hasher = HMAC("sha256", b"Jefe", b"what do ya want for nothing?")
>>> hasher.compute().digest_hex
'5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843'
```
"""

import hashlib
import hmac

from typing_extensions import override

from digest_signing._hashing import hashing


class Hash(hashing.StreamingHashEngine):
    """An unkeyed digest engine backed by `hashlib`."""

    def __init__(self, algorithm: str, initial_data: bytes = b""):
        """Initializes an instance of an unkeyed hash engine.

        Args:
            algorithm: A name accepted by `hashlib.new`.
            initial_data: Optional initial data to hash.

        Raises:
            ValueError: The algorithm is not supported by the local `hashlib`.
        """
        self._algorithm = algorithm
        self._hasher = hashlib.new(algorithm, initial_data)

    @override
    def update(self, data: bytes) -> None:
        self._hasher.update(data)

    @override
    def reset(self, data: bytes = b"") -> None:
        self._hasher = hashlib.new(self._algorithm, data)

    @override
    def compute(self) -> hashing.Digest:
        return hashing.Digest(self.digest_name, self._hasher.digest())

    @property
    @override
    def digest_name(self) -> str:
        return self._algorithm

    @property
    @override
    def digest_size(self) -> int:
        return self._hasher.digest_size


class HMAC(hashing.StreamingHashEngine):
    """A keyed digest engine backed by `hmac`.

    The key is bound when the engine is created. Resetting the engine starts a
    new message under the same key; binding a different key requires a new
    engine.
    """

    def __init__(self, algorithm: str, key: bytes, initial_data: bytes = b""):
        """Initializes an instance of a keyed hash engine.

        Args:
            algorithm: A name accepted by `hashlib.new`, used as the inner
              digest of the HMAC construction.
            key: The secret key. May be empty, but not `None`.
            initial_data: Optional initial data to hash.
        """
        if key is None:
            raise ValueError("HMAC engines require a key")

        self._algorithm = algorithm
        self._key = bytes(key)
        self._hasher = hmac.new(self._key, initial_data, algorithm)

    @override
    def update(self, data: bytes) -> None:
        self._hasher.update(data)

    @override
    def reset(self, data: bytes = b"") -> None:
        self._hasher = hmac.new(self._key, data, self._algorithm)

    @override
    def compute(self) -> hashing.Digest:
        return hashing.Digest(self.digest_name, self._hasher.digest())

    @property
    @override
    def digest_name(self) -> str:
        return f"hmac-{self._algorithm}"

    @property
    @override
    def digest_size(self) -> int:
        return self._hasher.digest_size
