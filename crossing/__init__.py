"""CLI utility for uploading files to S3 with client-side encryption.

Files are encrypted locally using envelope encryption, with the data key
generated and wrapped by AWS KMS, before being uploaded to the object storage.
The resulting objects are readable by S3 encryption clients that understand
the KMS wrapped AES/CBC envelope.
"""

__name__ = "crossing"
__version__ = "0.0.1"
__author__ = "Crossing Developers"
__license__ = "MIT License"
