"""blobvault: one async contract for blob storage across backends."""

__version__ = "0.1.0"
