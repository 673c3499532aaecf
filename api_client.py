# api_client.py - request dispatcher around requests, returning APIResponse
import json
import socket
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

import requests
from requests import exceptions as req_exceptions

import api_config
from api_response import APIResponse, ErrorKind
from utils.log import get_logger

logger = get_logger("api-client")

COMMON_EXCEPTION_MESSAGE = "Something went wrong. Please try again later."
CONNECTIVITY_EXCEPTION_MESSAGE = "Please check your internet connectivity and try again."

# a bare string is used as is, a callable is asked on every request
TokenSource = Union[str, Callable[[], Optional[str]], None]

_UNSET = object()


def masked_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Copy of headers safe to log: the bearer token is replaced by ***."""
    out = dict(headers)
    if "Authorization" in out:
        out["Authorization"] = "Bearer ***"
    return out


class RequestMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"


class APIClient:
    """
    Sends one JSON request per call and folds the outcome into an APIResponse.

    Nothing is shared between calls except the optional injected session, so
    one client can be used from several threads.
    """

    def __init__(self, base_url=None, timeout=None, token: TokenSource = None,
                 reachability_host=_UNSET, session: Optional[requests.Session] = None):
        base_url = api_config.API_BASE_URL if base_url is None else base_url
        self.base_url = base_url.rstrip('/')
        self.timeout = api_config.API_TIMEOUT if timeout is None else timeout
        self.token = token
        if reachability_host is _UNSET:
            reachability_host = api_config.API_REACHABILITY_HOST
        self.reachability_host = reachability_host or None
        self.session = session

    def _url(self, endpoint):
        if not self.base_url or endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    # ---------------- PUBLIC API ----------------
    def perform_request(self, method: RequestMethod, url: str, payload: Any = None,
                        include_token: bool = True) -> APIResponse:
        assert url, "URL must not be empty"
        if method in (RequestMethod.POST, RequestMethod.PUT):
            assert payload is not None, f"{method.value} request needs a payload"

        if not self.is_network_available():
            logger.warning("No internet connection, skipping %s %s", method.value, url)
            return self.connectivity_exception_response()

        url = self._url(url)
        headers = self.prepare_headers(include_token)

        logger.debug("Api URL-----%s", url)
        logger.debug("Api Headers-----%s", masked_headers(headers))

        body = None
        if method in (RequestMethod.POST, RequestMethod.PUT) and payload is not None:
            logger.debug("Api Params-----%s", payload)
            try:
                body = json.dumps(payload)
            except (TypeError, ValueError) as e:
                logger.error("Payload for %s is not JSON serializable: %s", url, e)
                return self.common_exception_response(ErrorKind.ENCODE)

        try:
            response = self._send(method, url, headers, body)
        except req_exceptions.Timeout as e:
            logger.error("Request timed out: %s %s (%s)", method.value, url, e)
            return self.common_exception_response(ErrorKind.TIMEOUT)
        except (req_exceptions.RequestException, OSError, ValueError) as e:
            # ValueError here comes from encoding the url (e.g. oversized host labels)
            logger.error("Request failed: %s %s (%s)", method.value, url, e)
            return self.common_exception_response(ErrorKind.NETWORK)

        try:
            return self.handle_http_response(response)
        except ValueError as e:
            # requests' JSONDecodeError is a ValueError too
            logger.error("Response from %s is not valid JSON: %s", url, e)
            return self.common_exception_response(ErrorKind.DECODE)

    def get(self, url, include_token=True):
        return self.perform_request(RequestMethod.GET, url, include_token=include_token)

    def post(self, url, payload, include_token=True):
        return self.perform_request(RequestMethod.POST, url, payload, include_token)

    def put(self, url, payload, include_token=True):
        return self.perform_request(RequestMethod.PUT, url, payload, include_token)

    # ---------------- TRANSPORT ----------------
    def _send(self, method: RequestMethod, url: str, headers: Dict[str, str],
              body: Optional[str]) -> requests.Response:
        kwargs = {"headers": headers, "timeout": self.timeout}
        # GET never carries a body
        if body is not None and method is not RequestMethod.GET:
            kwargs["data"] = body
        if self.session is not None:
            return self.session.request(method.value, url, **kwargs)
        return requests.request(method.value, url, **kwargs)

    def handle_http_response(self, response) -> APIResponse:
        logger.debug("Api Status Code-----%s", response.status_code)
        logger.debug("Api Response-----%s", response.text)

        data = response.json()
        if response.status_code in (200, 201):
            return APIResponse.success(data)

        error = None
        if isinstance(data, dict):
            error = data.get("message")
        if error is None:
            error = COMMON_EXCEPTION_MESSAGE
        return APIResponse.failed(str(error), data, ErrorKind.HTTP_STATUS)

    def common_exception_response(self, kind: Optional[ErrorKind] = None) -> APIResponse:
        return APIResponse.failed(COMMON_EXCEPTION_MESSAGE, kind=kind)

    def connectivity_exception_response(self) -> APIResponse:
        return APIResponse.failed(CONNECTIVITY_EXCEPTION_MESSAGE, kind=ErrorKind.CONNECTIVITY)

    # ---------------- HEADERS / PROBE ----------------
    def _resolve_token(self) -> str:
        source = self.token if self.token is not None else api_config.API_TOKEN
        if callable(source):
            source = source()
        return source or ""

    def prepare_headers(self, include_token: bool = True) -> Dict[str, str]:
        headers = {
            "Content-type": "application/json",
            "Accept": "application/json",
        }
        if include_token:
            token = self._resolve_token()
            if not token:
                logger.debug("Authorization requested but no token is configured")
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def is_network_available(self) -> bool:
        """DNS lookup of the reachability host. Always True when the probe is disabled."""
        if not self.reachability_host:
            return True
        try:
            result = socket.getaddrinfo(self.reachability_host, None)
        except (OSError, UnicodeError) as e:
            logger.debug("Reachability lookup for %s failed: %s", self.reachability_host, e)
            return False
        return bool(result) and bool(result[0][4][0])
