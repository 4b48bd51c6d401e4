"""Test envelope encryption functions."""

import base64
import json
import unittest
import unittest.mock

from botocore.exceptions import ClientError, NoCredentialsError

import crossing.envelope
import crossing.exceptions

import tests.mockups


class TestGenerateDataKey(tests.mockups.CrossingTestBase):
    """Test generating data keys with KMS."""

    async def test_generate_data_key(self):
        """Test that the data key is generated under the requested KMS key."""
        ret = await crossing.envelope.generate_data_key(
            self.test_session, "test-kms-key"
        )

        self.mock_kms_client.generate_data_key.assert_awaited_once_with(
            KeyId="test-kms-key",
            KeySpec="AES_256",
            EncryptionContext={"kms_cmk_id": "test-kms-key"},
        )
        self.assertEqual(ret, self.test_data_key)

    async def test_generate_data_key_should_raise_on_rejected_key(self):
        """Test that a rejected KMS key fails the encryption setup."""
        self.mock_kms_client.generate_data_key.side_effect = ClientError(
            {"Error": {"Code": "NotFoundException", "Message": "Key not found"}},
            "GenerateDataKey",
        )

        with self.assertRaisesRegex(
            crossing.exceptions.EncryptionSetupFailed, "Key not found"
        ):
            await crossing.envelope.generate_data_key(self.test_session, "bad-key")

    async def test_generate_data_key_should_raise_without_credentials(self):
        """Test that missing credentials fail the encryption setup."""
        self.mock_kms_client.generate_data_key.side_effect = NoCredentialsError()

        with self.assertRaises(crossing.exceptions.EncryptionSetupFailed):
            await crossing.envelope.generate_data_key(
                self.test_session, "test-kms-key"
            )

    async def test_generate_data_key_should_raise_without_client(self):
        """Test that a session without a KMS client is rejected."""
        self.test_session["kms_client"] = None

        with self.assertRaises(crossing.exceptions.NoKMSClient):
            await crossing.envelope.generate_data_key(
                self.test_session, "test-kms-key"
            )


class TestEncryptContent(tests.mockups.CrossingTestBase):
    """Test encrypting object contents."""

    def test_pad(self):
        """Test PKCS7 padding to the 16 byte block size."""
        self.assertEqual(crossing.envelope.pad(b""), b"\x10" * 16)
        self.assertEqual(crossing.envelope.pad(b"a" * 15), b"a" * 15 + b"\x01")
        self.assertEqual(crossing.envelope.pad(b"a" * 16), b"a" * 16 + b"\x10" * 16)
        self.assertEqual(crossing.envelope.unpad(b"a" * 15 + b"\x01"), b"a" * 15)

    def test_encrypt_content_envelope(self):
        """Test that the envelope metadata describes the encryption."""
        mock_token_bytes = unittest.mock.Mock(return_value=b"i" * 16)
        patch_token_bytes = unittest.mock.patch(
            "crossing.envelope.secrets.token_bytes", mock_token_bytes
        )

        with patch_token_bytes:
            ret = crossing.envelope.encrypt_content(b"a" * 20, self.test_data_key)

        mock_token_bytes.assert_called_once_with(16)
        self.assertEqual(
            ret["metadata"],
            {
                "x-amz-key-v2": base64.b64encode(b"test-wrapped-key").decode(),
                "x-amz-iv": base64.b64encode(b"i" * 16).decode(),
                "x-amz-matdesc": '{"kms_cmk_id":"test-kms-key"}',
                "x-amz-wrap-alg": "kms",
                "x-amz-cek-alg": "AES/CBC/PKCS5Padding",
                "x-amz-unencrypted-content-length": "20",
            },
        )
        self.assertEqual(
            json.loads(ret["metadata"]["x-amz-matdesc"]),
            self.test_data_key["encryption_context"],
        )
        self.assertEqual(len(ret["body"]), 32)
        self.assertNotIn(b"a" * 16, ret["body"])

    def test_encrypt_content_uses_fresh_iv(self):
        """Test that encrypting the same data twice differs."""
        first = crossing.envelope.encrypt_content(b"same data", self.test_data_key)
        second = crossing.envelope.encrypt_content(b"same data", self.test_data_key)

        self.assertNotEqual(first["metadata"]["x-amz-iv"], second["metadata"]["x-amz-iv"])
        self.assertNotEqual(first["body"], second["body"])

    def test_decrypt_content(self):
        """Test that the body decrypts with the unwrapped data key."""
        body = b"%PDF-1.4 some document contents"
        encrypted = crossing.envelope.encrypt_content(body, self.test_data_key)

        ret = crossing.envelope.decrypt_content(
            encrypted["body"],
            encrypted["metadata"],
            self.test_data_key["plaintext"],
        )

        self.assertEqual(ret, body)
