"""Envelope encryption of object contents with KMS wrapped data keys.

The object body is encrypted with a one-time AES-256 data key in CBC mode
with PKCS7 padding. The data key is generated by KMS, which also returns it
wrapped under the requested KMS key. The wrapped key, the IV and the material
description are stored in the object metadata, using the same layout as the
AWS S3 encryption client (v1, ``kms`` key wrap with ``AES/CBC/PKCS5Padding``),
so the objects can be decrypted with any compatible SDK.
"""

import base64
import json
import secrets

import botocore.exceptions
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

import crossing.exceptions
import crossing.types

KMS_CONTEXT_KEY: str = "kms_cmk_id"
KEY_SPEC: str = "AES_256"
WRAP_ALGORITHM: str = "kms"
CONTENT_ALGORITHM: str = "AES/CBC/PKCS5Padding"

# Envelope metadata keys
META_KEY_V2: str = "x-amz-key-v2"
META_IV: str = "x-amz-iv"
META_MATDESC: str = "x-amz-matdesc"
META_WRAP_ALG: str = "x-amz-wrap-alg"
META_CEK_ALG: str = "x-amz-cek-alg"
META_UNENCRYPTED_LENGTH: str = "x-amz-unencrypted-content-length"


async def generate_data_key(
    session: crossing.types.CrossingSession,
    kms_key_id: str,
) -> crossing.types.DataKey:
    """Generate a fresh data key wrapped under the KMS key."""
    if session["kms_client"] is None:
        raise crossing.exceptions.NoKMSClient

    context = {KMS_CONTEXT_KEY: kms_key_id}
    try:
        resp = await session["kms_client"].generate_data_key(
            KeyId=kms_key_id,
            KeySpec=KEY_SPEC,
            EncryptionContext=context,
        )
    except (
        botocore.exceptions.ClientError,
        botocore.exceptions.BotoCoreError,
    ) as e:
        raise crossing.exceptions.EncryptionSetupFailed(
            f"err generating data key: {e}"
        ) from e

    return {
        "plaintext": resp["Plaintext"],
        "ciphertext_blob": resp["CiphertextBlob"],
        "kms_key_id": kms_key_id,
        "encryption_context": context,
    }


def pad(data: bytes) -> bytes:
    """Pad data to the cipher block size with PKCS7."""
    padder = padding.PKCS7(crossing.types.CIPHER_BLOCK_SIZE * 8).padder()
    return padder.update(data) + padder.finalize()


def unpad(data: bytes) -> bytes:
    """Remove PKCS7 padding from data."""
    unpadder = padding.PKCS7(crossing.types.CIPHER_BLOCK_SIZE * 8).unpadder()
    return unpadder.update(data) + unpadder.finalize()


def encrypt_content(
    data: bytes,
    data_key: crossing.types.DataKey,
) -> crossing.types.EncryptedContent:
    """Encrypt data with the data key and describe the envelope."""
    iv = secrets.token_bytes(crossing.types.CIPHER_BLOCK_SIZE)
    encryptor = Cipher(
        algorithms.AES(data_key["plaintext"]),
        modes.CBC(iv),
    ).encryptor()
    body = encryptor.update(pad(data)) + encryptor.finalize()

    return {
        "body": body,
        "metadata": {
            META_KEY_V2: base64.b64encode(data_key["ciphertext_blob"]).decode("ascii"),
            META_IV: base64.b64encode(iv).decode("ascii"),
            META_MATDESC: json.dumps(
                data_key["encryption_context"], separators=(",", ":")
            ),
            META_WRAP_ALG: WRAP_ALGORITHM,
            META_CEK_ALG: CONTENT_ALGORITHM,
            META_UNENCRYPTED_LENGTH: str(len(data)),
        },
    }


def decrypt_content(
    body: bytes,
    metadata: dict[str, str],
    plaintext_key: bytes,
) -> bytes:
    """Decrypt an object body with an already unwrapped data key.

    Not used when uploading, kept as a compatibility helper so tests can check
    the envelope decrypts the way S3 encryption clients expect.
    """
    iv = base64.b64decode(metadata[META_IV])
    decryptor = Cipher(
        algorithms.AES(plaintext_key),
        modes.CBC(iv),
    ).decryptor()
    return unpad(decryptor.update(body) + decryptor.finalize())
