"""
ApiResponse model built from a successful JSON response body.
"""

from pydantic import BaseModel

from klevu.utils.sorting import natural_sorted


class ApiResponse(BaseModel):
    """
    Parsed response from a Klevu API endpoint.

    Attributes:
        response_code: HTTP status code
        message: Message returned by the API (list messages are joined)
        status: Status string, e.g. "submitted"
        job_id: Identifier of the asynchronous indexing job
        errors: Errors returned alongside the response, None when absent
    """

    response_code: int
    message: str = ""
    status: str | None = None
    job_id: str | None = None
    errors: list[str] | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "response_code": 200,
                "message": "Batch accepted successfully",
                "status": "submitted",
                "job_id": "12345-1234-1234-1234-123456789012",
                "errors": None,
            }
        }

    def is_success(self) -> bool:
        return self.response_code == 200 and not self.errors

    def get_messages(self) -> list[str]:
        messages = [self.message, *(self.errors or [])]
        return natural_sorted(message for message in messages if message)
