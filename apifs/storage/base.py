# storage/base.py
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, List, Optional, Union

from .dto import AdapterConfig

Contents = Union[str, bytes]
Resource = Union[BinaryIO, bytes]


class FilesystemAdapter(ABC):
    """
    Abstract base class for a filesystem backend.
    Defines the common interface that every storage adapter must implement
    so that it can be used interchangeably by filesystem consumers.
    """

    @abstractmethod
    def write(self, path: str, contents: Contents, config: Optional[AdapterConfig] = None) -> Any:
        """
        Writes a new file.

        :param path: The path of the file to create.
        :param contents: The file contents.
        :param config: Optional per-call options.
        :return: True or the file metadata on success.
        """
        pass

    @abstractmethod
    def write_stream(self, path: str, resource: Resource, config: Optional[AdapterConfig] = None) -> Any:
        """
        Writes a new file from a binary stream.

        :param path: The path of the file to create.
        :param resource: A readable binary file-like object.
        :param config: Optional per-call options.
        """
        pass

    @abstractmethod
    def update(self, path: str, contents: Contents, config: Optional[AdapterConfig] = None) -> Any:
        """Updates an existing file."""
        pass

    @abstractmethod
    def update_stream(self, path: str, resource: Resource, config: Optional[AdapterConfig] = None) -> Any:
        """Updates an existing file from a binary stream."""
        pass

    @abstractmethod
    def rename(self, path: str, newpath: str) -> bool:
        pass

    @abstractmethod
    def copy(self, path: str, newpath: str) -> bool:
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        pass

    @abstractmethod
    def delete_dir(self, dirname: str) -> bool:
        pass

    @abstractmethod
    def create_dir(self, dirname: str, config: Optional[AdapterConfig] = None) -> Any:
        pass

    @abstractmethod
    def set_visibility(self, path: str, visibility: str) -> Any:
        pass

    @abstractmethod
    def has(self, path: str) -> bool:
        """
        Checks whether a file exists.

        :param path: The path of the file.
        :return: True if the file exists, False otherwise.
        """
        pass

    @abstractmethod
    def read(self, path: str) -> Any:
        pass

    @abstractmethod
    def read_stream(self, path: str) -> BinaryIO:
        pass

    @abstractmethod
    def list_contents(self, directory: str = "", recursive: bool = False) -> List[Any]:
        """
        Lists the contents of a directory.

        :param directory: The directory to list; empty string for the root.
        :param recursive: Whether to descend into subdirectories.
        :return: The entries in the order the backend returned them.
        """
        pass

    @abstractmethod
    def get_metadata(self, path: str) -> Any:
        pass

    @abstractmethod
    def get_size(self, path: str) -> Any:
        pass

    @abstractmethod
    def get_mimetype(self, path: str) -> Any:
        pass

    @abstractmethod
    def get_timestamp(self, path: str) -> Any:
        pass

    @abstractmethod
    def get_visibility(self, path: str) -> Any:
        pass
