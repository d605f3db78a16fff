# app/utils/ifsc_api_service.py

import logging
from typing import Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.errors import ExternalServiceError, ValidationError
from app.schemas.bank import BankApiResponse, BankDetails

logger = logging.getLogger(__name__)


class IFSCVerificationAPI:
    """
    Client for the third-party IFSC verification API.
    Makes a single attempt per call: no retries, bounded by a request timeout.
    """

    def __init__(self, verify_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.verify_url = verify_url or settings.IFSC_VERIFY_URL

        # HTTP client with connection pooling, shared by every request
        self.client = client or httpx.AsyncClient(
            timeout=settings.IFSC_VERIFY_TIMEOUT,
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
            event_hooks={
                "request": [self._log_request_url]
            }
        )

    async def aclose(self):
        await self.client.aclose()

    async def _log_request_url(self, request: httpx.Request):
        logger.debug(f"IFSC request url: {request.url}")

    async def verify_ifsc(self, ifsc: str) -> BankDetails:
        """
        Confirm an IFSC code with the bank API and return its bank details.

        A response with a non-success status means the code was declined and is
        reported as a ValidationError. Network failures and unreadable bodies
        are reported as ExternalServiceError.
        """
        logger.info(f"Attempting to call external API for IFSC: {ifsc}")
        try:
            response = await self.client.post(
                self.verify_url,
                json={"ifsc": ifsc},
                headers={"Content-Type": "application/json"}
            )
        except httpx.RequestError as e:
            logger.error(f"IFSC API network error: {e!r}")
            raise ExternalServiceError(reason=str(e)) from e

        if not response.is_success:
            logger.error(
                f"External API returned a non-success status: {response.status_code}. Body: {response.text}"
            )
            raise ValidationError(
                "The provided IFSC code is not valid or could not be verified by the bank API."
            )

        try:
            bank_data = BankApiResponse.model_validate(response.json()).data
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Could not decode IFSC API response for {ifsc}: {e}")
            raise ExternalServiceError(reason="malformed response") from e

        logger.info(f"Successfully fetched bank details for {ifsc}: {bank_data.bank_name}")
        return bank_data


# Global instance for dependency injection
ifsc_api = IFSCVerificationAPI()


def get_ifsc_api() -> IFSCVerificationAPI:
    return ifsc_api
