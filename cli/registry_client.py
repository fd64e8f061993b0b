"""HTTP client for communicating with the Registry service."""

import time
import uuid
from typing import Optional
from urllib.parse import quote

import httpx

from common.constants import AUTHORIZATION_SCHEME, REQUEST_ID_HEADER
from common.logging_config import get_logger
from cli.config import ClientConfig
from cli.utils import format_descriptor

logger = get_logger(__name__)


class RegistryClient:
    """HTTP client for the Registry API with retry logic and error handling."""

    ERROR_MESSAGES = {
        'INVALID_INPUT': 'Invalid request',
        'INVALID_IDENTITY': 'Not identified. Please run: identity <credential>',
        'DUPLICATE_ENTRY': 'You already registered a descriptor with exactly these fields.',
        'NOT_FOUND': 'No such descriptor.',
        'UNAUTHORIZED': 'You do not own this descriptor.',
        'UNSUPPORTED_OPERATION': 'The registry does not accept value transfers.',
        'INVARIANT_VIOLATION': 'The registry reported an internal consistency failure.',
    }

    STATUS_MESSAGES = {
        400: 'Bad request',
        401: 'Not identified',
        403: 'Access forbidden',
        404: 'Not found',
        405: 'Operation not supported',
        409: 'Already exists',
        500: 'Server error',
        503: 'Service unavailable',
    }

    def __init__(self, config: ClientConfig, base_url: Optional[str] = None):
        """
        Initialize registry client.

        Args:
            config: Client settings (base URL, timeout, retries, credential)
            base_url: Overrides config.base_url without saving it
        """
        self.config = config
        self.base_url = base_url or config.base_url
        self.session = httpx.Client(
            base_url=self.base_url,
            timeout=config.timeout
        )
        self.request_id = None
        logger.info(f"Initialized RegistryClient [base_url={self.base_url}]")

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        max_retries = max_retries if max_retries is not None else self.config.max_retries
        backoff = self.config.retry_backoff

        last_exception = None

        self.request_id = str(uuid.uuid4())
        kwargs.setdefault('headers', {})
        kwargs['headers'][REQUEST_ID_HEADER] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if 400 <= response.status_code < 500:
                    logger.warning(
                        f"Client error: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                    )
                    return response

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                    )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Server may be overloaded.")
        raise ConnectionError("Cannot connect to registry server. Is it running?")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.

        Args:
            response: HTTP response object

        Returns:
            User-friendly error message
        """
        try:
            error_data = response.json()
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'

        if code == 'INVALID_INPUT':
            return f"{self.ERROR_MESSAGES[code]}: {detail}"
        if code in self.ERROR_MESSAGES:
            return self.ERROR_MESSAGES[code]

        message = self.STATUS_MESSAGES.get(response.status_code, detail)
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def _get_auth_header(self) -> dict:
        """
        Get Authorization header with the configured credential.

        Raises:
            ValueError: If no credential is configured
        """
        credential = self.config.credential
        if not credential:
            raise ValueError("No identity set. Please run: identity <credential>")
        return {'Authorization': f'{AUTHORIZATION_SCHEME} {credential}'}

    def set_identity(self, credential: str) -> str:
        self.config.set_credential(credential)
        logger.info("Caller credential updated")
        return "Identity saved to config."

    def insert(self, name: str, file_type: str, size: int) -> str:
        """
        Register a descriptor owned by the configured identity.

        Returns:
            Success message with the new key, or an error message
        """
        try:
            headers = self._get_auth_header()
        except ValueError as e:
            return f"Error: {e}"

        logger.info(f"Inserting descriptor [name={name}] [file_type={file_type}] [size={size}]")
        try:
            response = self._request_with_retry(
                'POST',
                '/descriptors',
                json={'name': name, 'file_type': file_type, 'size': size},
                headers=headers
            )
        except ConnectionError as e:
            logger.error(f"Connection error during insert: {e}")
            return f"Error: {e}"

        if response.status_code == 201:
            data = response.json()
            return f"Registered {data['name']}\nKey: {data['key']}"

        return f"Insert failed: {self._format_error(response)}"

    def get(self, key: str) -> str:
        try:
            response = self._request_with_retry('GET', f'/descriptors/{quote(key, safe="")}')
        except ConnectionError as e:
            logger.error(f"Connection error during get: {e}")
            return f"Error: {e}"

        if response.status_code == 200:
            return format_descriptor(response.json())

        return f"Get failed: {self._format_error(response)}"

    def delete(self, key: str) -> str:
        try:
            headers = self._get_auth_header()
        except ValueError as e:
            return f"Error: {e}"

        try:
            response = self._request_with_retry(
                'DELETE',
                f'/descriptors/{quote(key, safe="")}',
                headers=headers
            )
        except ConnectionError as e:
            logger.error(f"Connection error during delete: {e}")
            return f"Error: {e}"

        if response.status_code == 200:
            return f"Deleted {response.json()['key']}"

        return f"Delete failed: {self._format_error(response)}"

    def list_all(self) -> str:
        try:
            response = self._request_with_retry('GET', '/descriptors')
        except ConnectionError as e:
            logger.error(f"Connection error during list: {e}")
            return f"Error: {e}"

        if response.status_code != 200:
            return f"List failed: {self._format_error(response)}"

        descriptors = response.json()['descriptors']
        if not descriptors:
            return "No descriptors registered."

        lines = [format_descriptor(descriptor) for descriptor in descriptors]
        lines.append(f"{len(descriptors)} descriptor(s)")
        return "\n".join(lines)

    def find(self, name: str) -> str:
        try:
            response = self._request_with_retry('GET', '/descriptors/lookup', params={'name': name})
        except ConnectionError as e:
            logger.error(f"Connection error during find: {e}")
            return f"Error: {e}"

        if response.status_code == 200:
            return response.json()['key']

        return f"Find failed: {self._format_error(response)}"
