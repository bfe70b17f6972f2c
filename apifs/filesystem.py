# filesystem.py
import logging
from typing import Any, List, Optional

from .storage.base import Contents, FilesystemAdapter, Resource
from .storage.dto import AdapterConfig


class Filesystem:
    """
    Consumer-side facade over any FilesystemAdapter.

    Holds a default config that is merged under the per-call config, and adds
    the composite operations (put, read_and_delete) built from adapter calls.
    """

    def __init__(self, adapter: FilesystemAdapter, config: Optional[dict] = None):
        self.adapter = adapter
        self.config = AdapterConfig(**(config or {}))

    def _prepare_config(self, config: Optional[dict]) -> AdapterConfig:
        return self.config.merged(config)

    def has(self, path: str) -> bool:
        return self.adapter.has(path)

    def write(self, path: str, contents: Contents, config: Optional[dict] = None) -> Any:
        return self.adapter.write(path, contents, self._prepare_config(config))

    def write_stream(self, path: str, resource: Resource, config: Optional[dict] = None) -> Any:
        return self.adapter.write_stream(path, resource, self._prepare_config(config))

    def update(self, path: str, contents: Contents, config: Optional[dict] = None) -> Any:
        return self.adapter.update(path, contents, self._prepare_config(config))

    def update_stream(self, path: str, resource: Resource, config: Optional[dict] = None) -> Any:
        return self.adapter.update_stream(path, resource, self._prepare_config(config))

    def put(self, path: str, contents: Contents, config: Optional[dict] = None) -> Any:
        """
        Creates the file or overwrites it if it already exists.
        """
        if self.adapter.has(path):
            logging.info(f"{path} already exists, updating it.")
            return self.update(path, contents, config)
        return self.write(path, contents, config)

    def put_stream(self, path: str, resource: Resource, config: Optional[dict] = None) -> Any:
        if self.adapter.has(path):
            logging.info(f"{path} already exists, updating it from stream.")
            return self.update_stream(path, resource, config)
        return self.write_stream(path, resource, config)

    def read(self, path: str) -> Any:
        return self.adapter.read(path)

    def read_stream(self, path: str):
        return self.adapter.read_stream(path)

    def read_and_delete(self, path: str) -> Any:
        """Reads a file and deletes it once its contents are in hand."""
        contents = self.adapter.read(path)
        self.adapter.delete(path)
        return contents

    def rename(self, path: str, newpath: str) -> bool:
        return self.adapter.rename(path, newpath)

    def copy(self, path: str, newpath: str) -> bool:
        return self.adapter.copy(path, newpath)

    def delete(self, path: str) -> bool:
        return self.adapter.delete(path)

    def create_dir(self, dirname: str, config: Optional[dict] = None) -> Any:
        return self.adapter.create_dir(dirname, self._prepare_config(config))

    def delete_dir(self, dirname: str) -> bool:
        return self.adapter.delete_dir(dirname)

    def list_contents(self, directory: str = "", recursive: bool = False) -> List[Any]:
        return self.adapter.list_contents(directory, recursive)

    def get_metadata(self, path: str) -> Any:
        return self.adapter.get_metadata(path)

    def get_size(self, path: str) -> Any:
        return self.adapter.get_size(path)

    def get_mimetype(self, path: str) -> Any:
        return self.adapter.get_mimetype(path)

    def get_timestamp(self, path: str) -> Any:
        return self.adapter.get_timestamp(path)

    def get_visibility(self, path: str) -> Any:
        return self.adapter.get_visibility(path)

    def set_visibility(self, path: str, visibility: str) -> Any:
        return self.adapter.set_visibility(path, visibility)
