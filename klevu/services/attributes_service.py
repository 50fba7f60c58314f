"""
AttributesService - manages the indexing attributes of an account.
"""

from klevu.core.models import AccountCredentials, ApiResponse, Attribute, AttributeFactory
from klevu.core.validators import AttributeNameValidator, AttributeValidator, BaseValidator
from klevu.exceptions import BadResponseException
from klevu.providers import IndexingVersions, create_endpoint
from klevu.providers.payloads import encode_json
from klevu.utils.masking import mask_http_headers

from .api_service import ApiService


class AttributesService(ApiService):
    """
    Lists, creates, updates and deletes attributes via /v2/attributes.

    Args:
        attribute_factory: Builds Attribute models from the attribute list
        attribute_validator: Validates attributes before they are sent
        attribute_name_validator: Validates names passed to delete_by_name()
        **kwargs: Passed to ApiService
    """

    service_name = "attributes"

    def __init__(
        self,
        *args,
        attribute_factory: AttributeFactory | None = None,
        attribute_validator: BaseValidator | None = None,
        attribute_name_validator: BaseValidator | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.attribute_factory = attribute_factory or AttributeFactory()
        self.attribute_name_validator = attribute_name_validator or AttributeNameValidator()
        self.attribute_validator = attribute_validator or AttributeValidator(
            attribute_name_validator=self.attribute_name_validator,
        )

    def get_endpoint(self, attribute_name: str | None = None) -> str:
        path = "/attributes"
        if attribute_name:
            path += f"/{attribute_name}"
        return create_endpoint(self.base_urls_provider.get_indexing_url(IndexingVersions.JSON), path)

    def get(self, account_credentials: AccountCredentials) -> list[Attribute]:
        """
        List every attribute registered against the account.

        Raises:
            ValidationException: If the credentials are invalid
            BadResponseException: If the attribute list cannot be parsed
        """
        self.validate_account_credentials(account_credentials)
        request = self.build_request(account_credentials, "GET", self.get_endpoint())
        self.log_request("get indexing attributes list", request, account_credentials)

        response = self.send_request(request, account_credentials, "indexing attributes list")
        self.check_response(response)

        decoded = self.decode_json(response)
        try:
            if not isinstance(decoded, list):
                raise ValueError(f"Expected a list of attributes, received {type(decoded).__name__}")
            return [self.attribute_factory.create(attribute_data) for attribute_data in decoded]
        except (TypeError, ValueError) as e:
            self.logger.error(
                "Attribute API response format is invalid",
                extra={
                    "js_api_key": account_credentials.js_api_key,
                    "status_code": response.status_code,
                    "headers": mask_http_headers(self.multi_headers(response.headers)),
                    "body": response.text,
                    "error": str(e),
                },
            )
            errors = decoded.get("errors") if isinstance(decoded, dict) else None
            raise BadResponseException(
                message="Attribute API response format is invalid",
                code=response.status_code,
                errors=errors if isinstance(errors, list) else None,
            ) from e

    def get_by_name(self, account_credentials: AccountCredentials, attribute_name: str) -> Attribute | None:
        """Return the attribute with an exact name match, or None."""
        for attribute in self.get(account_credentials):
            if attribute.attribute_name == attribute_name:
                return attribute
        return None

    def put(self, account_credentials: AccountCredentials, attribute: Attribute) -> ApiResponse:
        """
        Add or update an attribute.

        The immutable flag is never sent; it is controlled by Klevu.

        Raises:
            ValidationException: If the credentials or attribute are invalid
        """
        self.validate_account_credentials(account_credentials)
        self.attribute_validator.execute(attribute)

        attribute_data = attribute.to_payload()
        attribute_data.pop("immutable", None)
        endpoint = self.get_endpoint(attribute.attribute_name)

        request = self.build_request(
            account_credentials,
            "PUT",
            endpoint,
            content=encode_json(attribute_data),
        )
        self.log_request(
            "add or update indexing attribute",
            request,
            account_credentials,
            attribute_name=attribute.attribute_name,
            attribute_data=attribute_data,
            endpoint=endpoint,
        )
        response = self.send_request(request, account_credentials, "put indexing attribute request")
        self.check_response(response)

        return self.create_api_response(response)

    def delete(self, account_credentials: AccountCredentials, attribute: Attribute) -> ApiResponse:
        return self.delete_by_name(account_credentials, attribute.attribute_name)

    def delete_by_name(self, account_credentials: AccountCredentials, attribute_name: str) -> ApiResponse:
        """
        Delete an attribute.

        Raises:
            ValidationException: If the credentials or attribute name are invalid
        """
        self.validate_account_credentials(account_credentials)
        self.attribute_name_validator.execute(attribute_name)

        endpoint = self.get_endpoint(attribute_name)
        request = self.build_request(account_credentials, "DELETE", endpoint)
        self.log_request(
            "delete indexing attribute",
            request,
            account_credentials,
            attribute_name=attribute_name,
            endpoint=endpoint,
        )
        response = self.send_request(request, account_credentials, "delete indexing attribute request")
        self.check_response(response)

        api_response = self.create_api_response(response)
        return ApiResponse(
            response_code=api_response.response_code,
            message=api_response.message,
            job_id=api_response.job_id,
        )
