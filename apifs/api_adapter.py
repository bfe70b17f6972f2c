# api_adapter.py
import io
import logging
from typing import Any, List, Optional, Tuple

import requests
from pydantic import ValidationError

from .exceptions import (
    InvalidContentsError,
    RemoteOperationError,
    TransportError,
    UnsupportedOperationError,
)
from .storage.base import Contents, FilesystemAdapter, Resource
from .storage.dto import AdapterConfig, ResponseEnvelope


class ApiAdapter(FilesystemAdapter):
    """
    Filesystem adapter backed by a remote file-storage HTTP API,
    implementing the FilesystemAdapter interface.

    Every method performs exactly one request and decodes the
    `{"response": ..., "message": ...}` envelope the API answers with.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 30.0,
        verify: bool = True,
    ):
        self.base_url = base_url.rstrip("/")
        # A session passed in by the caller stays owned by the caller.
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.verify = verify
        logging.info(f"API storage adapter initialized for {self.base_url}.")

    def close(self):
        """Closes the HTTP session if this adapter created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # --- Transport ---

    def _request(self, method: str, endpoint: str, **kwargs) -> Tuple[ResponseEnvelope, int]:
        """
        Sends a single request and decodes the response envelope.

        Raises TransportError when the request fails or the body is not an envelope.
        """
        url = f"{self.base_url}/{endpoint}"
        send = self.session.get if method == "GET" else self.session.post
        try:
            result = send(url, timeout=self.timeout, verify=self.verify, **kwargs)
        except requests.RequestException as e:
            logging.error(f"{method} {url} failed: {e}")
            raise TransportError(f"Request to '{endpoint}' failed: {e}") from e

        status = result.status_code
        try:
            body = result.json()
            if not isinstance(body, dict) or "response" not in body:
                raise ValueError("missing 'response' key")
            envelope = ResponseEnvelope.model_validate(body)
        except (ValueError, ValidationError) as e:
            if status >= 400:
                logging.error(f"{method} {url} returned HTTP {status} without an envelope.")
                raise TransportError(f"Request to '{endpoint}' failed", status) from e
            logging.error(f"{method} {url} returned a malformed envelope: {e}")
            raise TransportError(f"Malformed response from '{endpoint}': {e}", status) from e

        return envelope, status

    def _unwrap(self, endpoint: str, envelope: ResponseEnvelope, status: int) -> Any:
        if not envelope.succeeded:
            message = envelope.message or f"Remote operation '{endpoint}' failed"
            logging.error(f"Remote operation '{endpoint}' failed: {message}")
            raise RemoteOperationError(message, status)
        if status >= 400:
            logging.error(f"Remote operation '{endpoint}' returned HTTP {status}.")
            raise TransportError(envelope.message or f"Request to '{endpoint}' failed", status)
        return envelope.response

    def _get(self, endpoint: str, params: dict) -> Any:
        envelope, status = self._request("GET", endpoint, params=params)
        return self._unwrap(endpoint, envelope, status)

    def _post(self, endpoint: str, payload: dict) -> Any:
        envelope, status = self._request("POST", endpoint, json=payload)
        return self._unwrap(endpoint, envelope, status)

    def _post_stream(self, endpoint: str, path: str, resource: Resource) -> Any:
        # The body is the raw stream, so the path travels in the query string.
        envelope, status = self._request(
            "POST", endpoint, params={"path": path}, data=resource
        )
        return self._unwrap(endpoint, envelope, status)

    @staticmethod
    def _config_payload(config: Optional[AdapterConfig]) -> dict:
        return config.model_dump() if config is not None else {}

    @staticmethod
    def _text(path: str, contents: Contents) -> str:
        if isinstance(contents, bytes):
            try:
                return contents.decode("utf-8")
            except UnicodeDecodeError as e:
                logging.error(f"Contents of {path} are not valid UTF-8: {e}")
                raise InvalidContentsError(
                    f"Contents of '{path}' are not valid UTF-8; use write_stream or update_stream for binary data"
                ) from e
        return contents

    # --- Write operations ---

    def write(self, path: str, contents: Contents, config: Optional[AdapterConfig] = None):
        logging.info(f"Writing {path}...")
        return self._post(
            "write",
            {
                "path": path,
                "contents": self._text(path, contents),
                "config": self._config_payload(config),
            },
        )

    def write_stream(self, path: str, resource: Resource, config: Optional[AdapterConfig] = None):
        logging.info(f"Writing {path} from stream...")
        return self._post_stream("write-stream", path, resource)

    def update(self, path: str, contents: Contents, config: Optional[AdapterConfig] = None):
        logging.info(f"Updating {path}...")
        return self._post("update", {"path": path, "contents": self._text(path, contents)})

    def update_stream(self, path: str, resource: Resource, config: Optional[AdapterConfig] = None):
        logging.info(f"Updating {path} from stream...")
        return self._post_stream("update", path, resource)

    def rename(self, path: str, newpath: str) -> bool:
        logging.info(f"Renaming {path} to {newpath}...")
        self._post("rename", {"path": path, "newpath": newpath})
        return True

    def copy(self, path: str, newpath: str) -> bool:
        logging.info(f"Copying {path} to {newpath}...")
        self._post("copy", {"path": path, "newpath": newpath})
        return True

    def delete(self, path: str) -> bool:
        logging.info(f"Deleting {path}...")
        self._post("delete", {"path": path})
        return True

    def delete_dir(self, dirname: str) -> bool:
        logging.info(f"Deleting directory {dirname}...")
        self._post("delete-dir", {"dirname": dirname})
        return True

    def create_dir(self, dirname: str, config: Optional[AdapterConfig] = None):
        logging.info(f"Creating directory {dirname}...")
        return self._post(
            "create-dir",
            {"dirname": dirname, "config": self._config_payload(config)},
        )

    def set_visibility(self, path: str, visibility: str):
        raise UnsupportedOperationError("Visibility is not supported by the remote storage API.")

    # --- Read operations ---

    def has(self, path: str) -> bool:
        envelope, status = self._request("GET", "has", params={"path": path})
        # For this endpoint a plain `false` is the answer, not a failure.
        if envelope.response is False and (status < 400 or status == 404):
            return False
        return bool(self._unwrap("has", envelope, status))

    def read(self, path: str):
        logging.info(f"Reading {path}...")
        return self._get("read", {"path": path})

    def read_stream(self, path: str) -> io.BytesIO:
        """
        Reads a file and returns its contents as a binary stream.
        The API answers with a JSON envelope, so the whole file is buffered.
        """
        logging.info(f"Reading {path} as stream...")
        contents = self._get("read", {"path": path})
        if not isinstance(contents, str):
            raise TransportError(
                f"Unexpected payload type {type(contents).__name__} for streamed read of '{path}'"
            )
        contents = contents.encode("utf-8")
        return io.BytesIO(contents)

    def list_contents(self, directory: str = "", recursive: bool = False) -> List[Any]:
        logging.info(f"Listing contents of '{directory}' (recursive={recursive})...")
        entries = self._get(
            "list-contents",
            {"directory": directory, "recursive": int(bool(recursive))},
        )
        # A sparse array may arrive as an object keyed by index.
        if isinstance(entries, dict):
            return list(entries.values())
        if not isinstance(entries, list):
            raise TransportError(
                f"Unexpected payload type {type(entries).__name__} for listing of '{directory}'"
            )
        return entries

    def get_metadata(self, path: str):
        return self._get("get-metadata", {"path": path})

    def get_size(self, path: str):
        return self._get("get-size", {"path": path})

    def get_mimetype(self, path: str):
        return self._get("get-mimetype", {"path": path})

    def get_timestamp(self, path: str):
        return self._get("get-timestamp", {"path": path})

    def get_visibility(self, path: str):
        raise UnsupportedOperationError("Visibility is not supported by the remote storage API.")
