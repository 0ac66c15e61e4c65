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


import pytest

from digest_signing._hashing import memory
from tests import test_support


class TestHash:
    @pytest.mark.parametrize(
        "algorithm", test_support.available_hash_algorithms
    )
    def test_hash_known_value(self, algorithm):
        hasher = memory.Hash(algorithm.value, test_support.UNKEYED_MESSAGE)
        digest = hasher.compute()
        assert digest.digest_hex == test_support.UNKEYED_VECTORS[algorithm]

    def test_hash_update_twice_is_the_same_as_update_with_concatenation(self):
        str1 = "Test "
        str2 = "string"

        hasher1 = memory.Hash("sha256")
        hasher1.update(str1.encode("utf-8"))
        hasher1.update(str2.encode("utf-8"))
        digest1 = hasher1.compute()

        str_all = str1 + str2
        hasher2 = memory.Hash("sha256")
        hasher2.update(str_all.encode("utf-8"))
        digest2 = hasher2.compute()

        assert digest1.digest_hex == digest2.digest_hex
        assert digest1.digest_value == digest2.digest_value

    def test_hash_update_empty(self):
        hasher1 = memory.Hash("sha256", b"Test string")
        hasher1.update(b"")
        digest1 = hasher1.compute()

        hasher2 = memory.Hash("sha256", b"Test string")
        digest2 = hasher2.compute()

        assert digest1.digest_value == digest2.digest_value

    def test_update_after_reset(self):
        hasher = memory.Hash("sha256", b"Test string")
        digest1 = hasher.compute()
        hasher.reset()
        hasher.update(b"Test string")
        digest2 = hasher.compute()

        assert digest1.digest_value == digest2.digest_value

    def test_reset_with_data(self):
        hasher = memory.Hash("sha256", b"Other string")
        hasher.reset(b"Test string")
        digest1 = hasher.compute()

        digest2 = memory.Hash("sha256", b"Test string").compute()

        assert digest1.digest_value == digest2.digest_value

    @pytest.mark.parametrize(
        "algorithm", test_support.available_hash_algorithms
    )
    def test_digest_size(self, algorithm):
        hasher = memory.Hash(algorithm.value, b"Test string")
        expected = test_support.DIGEST_SIZES[algorithm]
        assert hasher.digest_size == expected

        digest = hasher.compute()
        assert digest.digest_size == expected

    def test_digest_name(self):
        hasher = memory.Hash("sha384")
        assert hasher.digest_name == "sha384"
        assert hasher.compute().algorithm == "sha384"

    def test_unsupported_algorithm(self):
        with pytest.raises(ValueError):
            memory.Hash("not-a-hash")


class TestHMAC:
    @pytest.mark.parametrize(
        "algorithm", test_support.available_keyed_hash_algorithms
    )
    def test_hash_known_value(self, algorithm):
        hasher = memory.HMAC(
            algorithm.hash_algorithm.value,
            test_support.KEYED_KEY,
            test_support.KEYED_MESSAGE,
        )
        digest = hasher.compute()
        assert digest.digest_hex == test_support.KEYED_VECTORS[algorithm]

    def test_update_after_reset_keeps_key(self):
        hasher = memory.HMAC("sha256", b"key", b"Test string")
        digest1 = hasher.compute()
        hasher.reset()
        hasher.update(b"Test string")
        digest2 = hasher.compute()

        assert digest1.digest_value == digest2.digest_value

    def test_different_keys_give_different_digests(self):
        digest1 = memory.HMAC("sha256", b"key1", b"Test string").compute()
        digest2 = memory.HMAC("sha256", b"key2", b"Test string").compute()

        assert digest1.digest_value != digest2.digest_value

    def test_keyed_digest_differs_from_unkeyed(self):
        keyed = memory.HMAC("sha256", b"key", b"Test string").compute()
        unkeyed = memory.Hash("sha256", b"Test string").compute()

        assert keyed.digest_value != unkeyed.digest_value

    def test_empty_key_is_allowed(self):
        hasher = memory.HMAC("sha256", b"", b"Test string")
        assert hasher.compute().digest_size == 32

    def test_none_key_is_rejected(self):
        with pytest.raises(ValueError, match="require a key"):
            memory.HMAC("sha256", None)

    def test_digest_name(self):
        hasher = memory.HMAC("sha512", b"key")
        assert hasher.digest_name == "hmac-sha512"
        assert hasher.digest_size == 64
