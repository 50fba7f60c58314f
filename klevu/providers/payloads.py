"""
Request body builders for the batch indexing endpoints.

Each provider serialises a list of already validated models into the JSON
body expected by one endpoint. Items a provider cannot serialise are left
out rather than raising, as validation has already taken place.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Sequence

from klevu.core.models import Record, Update


def encode_json(payload: Any) -> str:
    return json.dumps(payload, separators=(",", ":"))


class RequestPayloadProvider(ABC):
    """Builds a request body string from a sequence of models."""

    @abstractmethod
    def get(self, items: Sequence[Any]) -> str:
        pass


class RecordPayloadProvider(RequestPayloadProvider):
    """
    PUT /v2/batch body: a JSON array of records.

    Example:
        [{"id": "PROD001", "type": "KLEVU_PRODUCT", "attributes": {...}}]
    """

    def get(self, items: Sequence[Any]) -> str:
        return encode_json([item.to_payload() for item in items if isinstance(item, Record)])


class UpdatePayloadProvider(RequestPayloadProvider):
    """
    PATCH /v2/batch body: operations grouped by record id.

    Operations keep their submission order within each record. Updates with
    no record id or an unrecognised operation are skipped.

    Example:
        {"PROD001": [{"op": "replace", "path": "/attributes/sku", "value": "A"}]}
    """

    def get(self, items: Sequence[Any]) -> str:
        request_body: dict[str, list[dict[str, Any]]] = {}
        for item in items:
            if not isinstance(item, Update):
                continue
            operation = item.get_operation()
            if not item.record_id or operation is None:
                continue

            operation_data: dict[str, Any] = {"op": operation.value}
            if operation.requires_path():
                operation_data["path"] = item.path
            if operation.requires_value():
                operation_data["value"] = item.value
            request_body.setdefault(item.record_id, []).append(operation_data)

        return encode_json(request_body)


class DeletePayloadProvider(RequestPayloadProvider):
    """PUT /v2/batch/delete body: {"ids": [...]} in record order."""

    def get(self, items: Sequence[Any]) -> str:
        return encode_json({"ids": [item.id for item in items if isinstance(item, Record)]})


class BatchPayloadProvider(RequestPayloadProvider):
    """
    Chooses the record or update body from the type of the first item.

    Args:
        record_provider: Used for Record batches
        update_provider: Used for Update batches
    """

    def __init__(
        self,
        record_provider: RequestPayloadProvider | None = None,
        update_provider: RequestPayloadProvider | None = None,
    ):
        self.record_provider = record_provider or RecordPayloadProvider()
        self.update_provider = update_provider or UpdatePayloadProvider()

    def get(self, items: Sequence[Any]) -> str:
        if items and isinstance(items[0], Update):
            return self.update_provider.get(items)
        return self.record_provider.get(items)
