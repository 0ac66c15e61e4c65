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


"""Keyed digests and signed files.

The API is split into 3 main components (and a glue `digest_signing.errors`
module for the exceptions raised by the public interfaces):

- `digest_signing.hashing`: digest engines. `Hasher` computes unkeyed digests
  (MD5, RIPEMD-160, SHA-1, SHA-256, SHA-384, SHA-512), optionally salted.
  `KeyedHasher` computes the HMAC form of the same algorithms. Both hash byte
  strings, UTF-8 text and streams of any size.
- `digest_signing.signing`: responsible with turning a file into a signed file,
  that is, the keyed digest of the file followed by the file itself.
- `digest_signing.verifying`: responsible with recomputing the digest of a
  signed file's contents and comparing it with the stored one.

Signing a file with the default algorithm (HMAC-SHA-512):

```python
digest_signing.signing.sign("model.bin", "model.bin.signed", key=b"secret")
```

Verifying it later, with the same key:

```python
digest_signing.verifying.verify("model.bin.signed", key=b"secret")
```

The signed file does not record the algorithm or the key, so both sides must
agree on them. `digest_signing.salt.generate` can be used to create keys.
"""

from digest_signing import errors
from digest_signing import hashing
from digest_signing import salt
from digest_signing import signing
from digest_signing import verifying


__version__ = "1.0.0"


__all__ = ["errors", "hashing", "salt", "signing", "verifying"]
