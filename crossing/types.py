"""Common types for the crossing upload tool."""

import typing

import types_aiobotocore_kms
import types_aiobotocore_s3

# Crossing constants

# Number of leading bytes inspected when sniffing the content type.
SNIFF_LENGTH: int = 512

# AES block size in bytes, used for the PKCS7 padding of the object body.
CIPHER_BLOCK_SIZE: int = 16


class CrossingSession(typing.TypedDict):
    """Type definition for session variables."""

    s3_client: types_aiobotocore_s3.Client | None
    kms_client: types_aiobotocore_kms.Client | None
    profile: str
    region: str
    s3_endpoint_url: str
    kms_endpoint_url: str


class PutOptions(typing.TypedDict):
    """Type definitions for put command options."""

    source: str
    bucket: str
    key: str
    kms_key_id: str
    verbose_output: bool
    verbose: bool
    debug: bool
    profile: str
    region: str
    s3_endpoint_url: str
    kms_endpoint_url: str


class StorageLocator(typing.TypedDict):
    """Type definitions for a parsed destination locator."""

    bucket: str
    key: str


class UploadRequest(typing.TypedDict):
    """Type definitions for a single encrypted upload."""

    # object_key is the resolved key, never the raw locator key.
    bucket: str
    object_key: str
    kms_key_id: str
    source_path: str


class FileContent(typing.TypedDict):
    """Type definitions for a buffered source file."""

    body: bytes
    content_type: str


class DataKey(typing.TypedDict):
    """Type definitions for a KMS generated data key."""

    plaintext: bytes
    ciphertext_blob: bytes
    kms_key_id: str
    encryption_context: dict[str, str]


class EncryptedContent(typing.TypedDict):
    """Type definitions for an encrypted body and its envelope."""

    body: bytes
    metadata: dict[str, str]


EncryptFunction = typing.Callable[[bytes, DataKey], EncryptedContent]
WrapKeyFunction = typing.Callable[
    [CrossingSession, str], typing.Awaitable[DataKey]
]
