"""Crossing exceptions."""


class InvalidLocator(Exception):
    """The destination locator did not contain a bucket name."""


class FileOpenFailed(Exception):
    """Could not open the source file."""


class FileReadFailed(Exception):
    """Could not read the contents of the source file."""


class EncryptionSetupFailed(Exception):
    """Could not generate or wrap a data key with the provided KMS key."""


class UploadFailed(Exception):
    """Object storage rejected the encrypted object."""


class NoS3Client(Exception):
    """For some reason the session didn't have a S3Client available."""


class NoKMSClient(Exception):
    """For some reason the session didn't have a KMSClient available."""
