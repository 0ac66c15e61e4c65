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


import io as _io
import pathlib

import pytest

from digest_signing._hashing import io
from digest_signing._hashing import memory


# some constants used throughout testing
_HEADER: str = "Some "
_CONTENT: str = "text."  # note that these have the same length
_FULL_CONTENT = _HEADER + _CONTENT
_UNUSED_PATH = pathlib.Path("unused")


@pytest.fixture(scope="class")
def sample_file(tmp_path_factory):
    file_path = tmp_path_factory.mktemp("dir") / "text.txt"
    file_path.write_text(_FULL_CONTENT)
    return file_path


@pytest.fixture(scope="class")
def sample_file_content_only(tmp_path_factory):
    file_path = tmp_path_factory.mktemp("dir") / "text.txt"
    file_path.write_text(_CONTENT)
    return file_path


@pytest.fixture(scope="class")
def expected_digest():
    # To ensure that the expected file digest is always up to date, use the
    # memory hashing and create a fixture for the expected value.
    hasher = memory.Hash("sha256", _FULL_CONTENT.encode("utf-8"))
    digest = hasher.compute()
    return digest.digest_hex


@pytest.fixture(scope="class")
def expected_content_digest():
    hasher = memory.Hash("sha256", _CONTENT.encode("utf-8"))
    digest = hasher.compute()
    return digest.digest_hex


class TestStreamHasher:
    def test_fails_with_negative_chunk_size(self):
        with pytest.raises(ValueError, match="Chunk size must be non-negative"):
            io.StreamHasher(
                _io.BytesIO(b""), memory.Hash("sha256"), chunk_size=-2
            )

    @pytest.mark.parametrize("chunk_size", [0, 1, 2, 3, 8192])
    def test_hash_of_known_stream(self, chunk_size, expected_digest):
        stream = _io.BytesIO(_FULL_CONTENT.encode("utf-8"))
        hasher = io.StreamHasher(
            stream, memory.Hash("sha256"), chunk_size=chunk_size
        )
        digest = hasher.compute()
        assert digest.digest_hex == expected_digest

    def test_hash_starts_at_current_position(self, expected_content_digest):
        stream = _io.BytesIO(_FULL_CONTENT.encode("utf-8"))
        stream.seek(len(_HEADER))
        hasher = io.StreamHasher(stream, memory.Hash("sha256"), chunk_size=2)
        digest = hasher.compute()
        assert digest.digest_hex == expected_content_digest

    def test_stream_is_at_eof_after_compute(self):
        data = _FULL_CONTENT.encode("utf-8")
        stream = _io.BytesIO(data)
        io.StreamHasher(stream, memory.Hash("sha256")).compute()
        assert stream.tell() == len(data)

    def test_suffix_is_hashed_after_contents(self, expected_digest):
        stream = _io.BytesIO(_HEADER.encode("utf-8"))
        hasher = io.StreamHasher(
            stream,
            memory.Hash("sha256"),
            chunk_size=2,
            suffix=_CONTENT.encode("utf-8"),
        )
        digest = hasher.compute()
        assert digest.digest_hex == expected_digest

    def test_empty_stream(self):
        hasher = io.StreamHasher(_io.BytesIO(b""), memory.Hash("sha256"))
        digest = hasher.compute()
        expected = memory.Hash("sha256").compute().digest_value
        assert digest.digest_value == expected

    def test_inner_hasher_is_reset(self, expected_digest):
        content_hasher = memory.Hash("sha256", b"leftover data")
        stream = _io.BytesIO(_FULL_CONTENT.encode("utf-8"))
        digest = io.StreamHasher(stream, content_hasher).compute()
        assert digest.digest_hex == expected_digest

    def test_set_stream(self, expected_digest, expected_content_digest):
        hasher = io.StreamHasher(
            _io.BytesIO(_CONTENT.encode("utf-8")), memory.Hash("sha256")
        )
        assert hasher.compute().digest_hex == expected_content_digest
        hasher.set_stream(_io.BytesIO(_FULL_CONTENT.encode("utf-8")))
        assert hasher.compute().digest_hex == expected_digest

    def test_digest_name_and_size(self):
        hasher = io.StreamHasher(
            _io.BytesIO(b""), memory.HMAC("sha384", b"key")
        )
        assert hasher.digest_name == "hmac-sha384"
        assert hasher.digest_size == 48
        assert hasher.compute().algorithm == "hmac-sha384"


class TestFileHasher:
    def test_hash_of_known_file(self, sample_file, expected_digest):
        hasher = io.FileHasher(sample_file, memory.Hash("sha256"))
        digest = hasher.compute()
        assert digest.digest_hex == expected_digest

    def test_hash_of_known_file_small_chunk(self, sample_file, expected_digest):
        hasher = io.FileHasher(
            sample_file, memory.Hash("sha256"), chunk_size=2
        )
        digest = hasher.compute()
        assert digest.digest_hex == expected_digest

    def test_hash_file_twice_same_hasher(self, sample_file):
        hasher = io.FileHasher(sample_file, memory.Hash("sha256"))
        digest1 = hasher.compute()
        digest2 = hasher.compute()
        assert digest1.digest_value == digest2.digest_value

    def test_set_file(self, sample_file, sample_file_content_only):
        hasher = io.FileHasher(sample_file, memory.Hash("sha256"))
        digest1 = hasher.compute()
        hasher.set_file(sample_file_content_only)
        _ = hasher.compute()
        hasher.set_file(sample_file)
        digest2 = hasher.compute()
        assert digest1.digest_value == digest2.digest_value

    def test_missing_file(self, tmp_path):
        hasher = io.FileHasher(tmp_path / "missing", memory.Hash("sha256"))
        with pytest.raises(FileNotFoundError):
            hasher.compute()

    def test_fails_with_negative_chunk_size(self):
        with pytest.raises(ValueError, match="Chunk size must be non-negative"):
            io.FileHasher(_UNUSED_PATH, memory.Hash("sha256"), chunk_size=-1)
