"""
Verifactu API Client Module

Handles communication with the Verifactu API: exchanging credentials for a
bearer token and submitting invoice records.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any

import requests

from ..config.settings import ClientConfig
from ..core.exceptions import ApiError, AuthenticationError
from ..core.logging_config import get_logger
from ..core.results import Session, SubmissionResult
from ..validators.invoice_validator import InvoiceValidator

logger = get_logger(__name__)

LOGIN_ENDPOINT = '/loginEmisor'
SUBMIT_ENDPOINT = '/alta-registro-facturacion'
USER_AGENT = 'verifactu-python-client/1.0.0'


def parse_expiry(value: Any) -> datetime:
    """
    Convert the expires_at value of a login response to an aware datetime.

    Accepts ISO-8601 strings (with or without a trailing Z) and epoch milliseconds.
    Naive timestamps are interpreted as local time.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid expiry timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid expiry timestamp: {value!r}")

    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    expires_at = datetime.fromisoformat(text)
    if expires_at.tzinfo is None:
        expires_at = expires_at.astimezone()
    return expires_at


class VerifactuClient:
    """
    Client for interacting with the Verifactu API.

    Owns the HTTP session and the authentication state for one run.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
        validator: Optional[InvoiceValidator] = None
    ):
        """
        Initialize the client.

        Args:
            config: Base URL and timeout (defaults used if None)
            session: Optional requests session (creates one if None)
            validator: Optional invoice validator (creates default if None)
        """
        self.config = config or ClientConfig()
        self.base_url = self.config.base_url.rstrip('/')
        self.timeout = self.config.timeout_seconds
        self.validator = validator or InvoiceValidator()
        self.session: Optional[Session] = None

        self.http = session or requests.Session()
        self.http.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'User-Agent': USER_AGENT,
        })

        logger.debug(f"Verifactu client initialized for {self.base_url}")

    def __enter__(self) -> 'VerifactuClient':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.http.close()

    def _post(
        self,
        endpoint: str,
        payload: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None
    ) -> requests.Response:
        """
        POST a JSON payload and raise ApiError on HTTP failure statuses.

        Raises:
            ApiError: If the response status is 400 or above
            requests.RequestException: On transport failures
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"POST {url}")
        response = self.http.post(url, json=payload, headers=headers, timeout=self.timeout)
        if response.status_code >= 400:
            raise ApiError(response.status_code, self._json_body(response))
        return response

    @staticmethod
    def _json_body(response: requests.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {'message': 'Invalid JSON response'}
        return body if isinstance(body, dict) else {'message': 'Invalid JSON response', 'body': body}

    def validate(self, document: Any) -> bool:
        """
        Validate an invoice document before submission.

        Raises:
            ValidationError: If the document is structurally invalid
        """
        return self.validator.validate(document)

    def authenticate(self, username: str, api_key: str) -> Session:
        """
        Authenticate with the Verifactu API using username and API key.

        Args:
            username: Verifactu username
            api_key: Verifactu API key

        Returns:
            The new Session, also stored on the client

        Raises:
            AuthenticationError: For any failure during the login exchange
        """
        try:
            response = self._post(LOGIN_ENDPOINT, {
                'username': username,
                'api_key': api_key,
            })
            body = self._json_body(response)

            if not body.get('success'):
                raise AuthenticationError(f"Authentication failed: {body.get('message')}")

            try:
                expires_at = parse_expiry(body.get('expires_at'))
            except ValueError as e:
                raise AuthenticationError(f"Authentication failed: {str(e)}") from e

            self.session = Session(
                token=body.get('token'),
                expires_at=expires_at,
                user_name=body.get('user_name')
            )

            logger.info(f"Authenticated as user: {self.session.user_name}")
            logger.info(f"Token expires at: {expires_at.isoformat()}")
            return self.session

        except ApiError as e:
            raise AuthenticationError(f"Authentication failed: {e.message}") from e
        except requests.RequestException as e:
            raise AuthenticationError(f"Authentication failed: {str(e)}") from e

    def is_session_valid(self, session: Optional[Session] = None) -> bool:
        """Check whether the given (or stored) session holds an unexpired token."""
        session = session or self.session
        return session is not None and session.is_valid()

    def auth_headers(self, session: Optional[Session] = None) -> Dict[str, str]:
        """
        Build the bearer authorization header.

        Raises:
            AuthenticationError: If no valid token is available
        """
        session = session or self.session
        if not self.is_session_valid(session):
            raise AuthenticationError('No valid token available. Please authenticate first.')
        return {'Authorization': f"Bearer {session.token}"}

    def submit(self, document: Dict[str, Any], session: Optional[Session] = None) -> SubmissionResult:
        """
        Submit an invoice to the Verifactu API.

        Args:
            document: Validated invoice document
            session: Session to use (defaults to the one stored by authenticate)

        Returns:
            SubmissionResult extracted from the first response item

        Raises:
            AuthenticationError: If the session is missing or expired
            ApiError: If the API rejects the invoice or the request fails
        """
        session = session or self.session
        if not self.is_session_valid(session):
            raise AuthenticationError('Token expired or invalid. Please authenticate first.')

        try:
            response = self._post(SUBMIT_ENDPOINT, document, headers=self.auth_headers(session))
            body = self._json_body(response)

            if not body.get('success'):
                raise ApiError(response.status_code, body)

            data = body.get('data') or {}
            items = data.get('items') or []
            item = items[0] if items else {}

            return SubmissionResult(
                message=body.get('message'),
                invoice_id=item.get('id'),
                qr_url=item.get('url_qr'),
                huella=item.get('Huella'),
                estado_aeat=item.get('estado_aeat'),
                data=data
            )

        except ApiError:
            raise
        except Exception as e:
            logger.debug("Invoice submission failed before an API response", exc_info=True)
            raise ApiError(500, {'message': f"Invoice submission failed: {str(e)}"}) from e
