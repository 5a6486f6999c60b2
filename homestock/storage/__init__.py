from homestock.storage.blob_storage import BlobStorage, LocalBlobStorage

__all__ = ["BlobStorage", "LocalBlobStorage"]
