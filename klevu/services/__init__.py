"""
Services calling the Klevu indexing APIs.
"""

from klevu.core.models import InvalidRecordMode

from .api_service import ApiService
from .attributes_service import AttributesService
from .batch_service import BatchService
from .delete_service import DeleteService

__all__ = [
    "ApiService",
    "AttributesService",
    "BatchService",
    "DeleteService",
    "InvalidRecordMode",
]
