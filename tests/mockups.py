"""Common mockups for tests."""

import unittest
import unittest.mock

import crossing.types


class CrossingMocks:
    """Mock AWS clients and common test values."""

    def setUp(self):
        """Set up relevant mocks."""

        self.test_opts: crossing.types.PutOptions = {
            "source": "report.pdf",
            "bucket": "test-bucket",
            "key": "archive/report.pdf",
            "kms_key_id": "test-kms-key",
            "verbose_output": False,
            "verbose": False,
            "debug": False,
            "profile": "",
            "region": "",
            "s3_endpoint_url": "",
            "kms_endpoint_url": "",
        }

        self.mock_s3_client = unittest.mock.AsyncMock()
        self.mock_s3_client.put_object.return_value = {
            "ETag": '"test-etag"',
            "VersionId": "v123",
        }

        self.mock_kms_client = unittest.mock.AsyncMock()
        self.mock_kms_client.generate_data_key.return_value = {
            "Plaintext": b"k" * 32,
            "CiphertextBlob": b"test-wrapped-key",
            "KeyId": "test-kms-key",
        }

        self.test_session: crossing.types.CrossingSession = {
            "s3_client": self.mock_s3_client,
            "kms_client": self.mock_kms_client,
            "profile": "",
            "region": "",
            "s3_endpoint_url": "",
            "kms_endpoint_url": "",
        }

        self.test_data_key: crossing.types.DataKey = {
            "plaintext": b"k" * 32,
            "ciphertext_blob": b"test-wrapped-key",
            "kms_key_id": "test-kms-key",
            "encryption_context": {"kms_cmk_id": "test-kms-key"},
        }

        self.test_content: crossing.types.FileContent = {
            "body": b"%PDF-1.4 test",
            "content_type": "application/pdf",
        }

        class MockHandler:
            def __init__(self, mock_response, raises=None):
                """."""
                self.mock_response = mock_response
                self.raises = raises

            async def __aenter__(self):
                """."""
                if self.raises:
                    raise self.raises
                return self.mock_response

            async def __aexit__(self, *_):
                """."""

        self.mock_handler = MockHandler

        self.mock_boto_session = unittest.mock.Mock()
        self.mock_boto_session.client = unittest.mock.Mock(
            side_effect=lambda service_name, **_: self.mock_handler(
                self.mock_s3_client if service_name == "s3" else self.mock_kms_client
            )
        )
        self.patch_boto_session = unittest.mock.patch(
            "crossing.put.crossing.client.aioboto3.Session",
            unittest.mock.Mock(return_value=self.mock_boto_session),
        )


class CrossingTestBase(CrossingMocks, unittest.IsolatedAsyncioTestCase):
    """Base unit test class for crossing tests."""


class CrossingCliTestBase(CrossingMocks, unittest.TestCase):
    """Base unit test class for running the CLI against mocked clients."""
