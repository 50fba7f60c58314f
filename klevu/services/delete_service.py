"""
DeleteService - removes records from the index by id.
"""

from typing import Any, Iterable

from klevu.core.models import AccountCredentials, ApiResponse, Record, RecordFactory, Update
from klevu.core.validators import BaseValidator, IdValidator, RecordValidator
from klevu.providers import DeletePayloadProvider

from .batch_service import BatchService


class DeleteService(BatchService):
    """
    Sends PUT /v2/batch/delete requests.

    Only record ids are validated; the other fields of a Record are ignored.
    Accepts the same arguments as BatchService, plus a RecordFactory used by
    send_by_ids().
    """

    service_name = "delete"
    endpoint_path = "/batch/delete"
    log_action = "indexing records deletion"

    def __init__(self, *args, record_factory: RecordFactory | None = None, **kwargs):
        kwargs.setdefault("payload_provider", DeletePayloadProvider())
        super().__init__(*args, **kwargs)
        self.record_factory = record_factory or RecordFactory()

    def default_validators(self) -> dict[type, BaseValidator]:
        return {
            Record: RecordValidator({
                "id": IdValidator(),
                "type": None,
                "relations": None,
                "attributes": None,
                "groups": None,
                "channels": None,
                "display": None,
            }),
        }

    def send(
        self,
        account_credentials: AccountCredentials,
        records: Iterable[Any],
        method: str = "PUT",
    ) -> ApiResponse:
        if str(method).upper() == "PATCH":
            raise NotImplementedError("Updates cannot be sent to the delete endpoint")
        return super().send(account_credentials, records, method=method)

    def send_by_ids(
        self,
        account_credentials: AccountCredentials,
        record_ids: Iterable[Any],
        record_type: str = "",
    ) -> ApiResponse:
        """
        Delete records by id.

        Ids are trimmed and de-duplicated (case-sensitively, keeping the first
        occurrence) before the batch size ceiling is applied.

        Args:
            account_credentials: Keys of the account to delete from
            record_ids: Ids of the records to delete
            record_type: Type assigned to the generated records

        Returns:
            Parsed API response
        """
        return self.send(
            account_credentials,
            [
                self.record_factory.create({"id": record_id, "type": record_type})
                for record_id in self.unique_ids(record_ids)
            ],
            method="PUT",
        )

    @staticmethod
    def unique_ids(record_ids: Iterable[Any]) -> list[str]:
        unique: dict[str, None] = {}
        for record_id in record_ids:
            unique.setdefault("" if record_id is None else str(record_id).strip(), None)
        return list(unique)

    def patch(self, account_credentials: AccountCredentials, updates: Iterable[Update]) -> ApiResponse:
        raise NotImplementedError("Updates cannot be sent to the delete endpoint")
