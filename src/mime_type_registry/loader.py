"""Loading of registry data files into a container.

The :class:`Loader` searches a data root recursively and reads either the
structured registry files (JSON, or YAML) or, for older data sets, files in
the deprecated v1 text format.

Typical usage:

    from mime_type_registry.loader import Loader

    container = Loader("/usr/share/mime-types").load()
"""

import json
import warnings
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from .config_paths import resolve_data_path
from .container import Container, DuplicatePolicy
from .errors import InvalidDataFormatError, V1FormatError
from .logging import LogEvent, log_debug, log_info, log_warning
from .type_record import TypeRecord
from .v1_format import load_from_v1

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yml", ".yaml")


def _records_from(data: Any, filename: Union[str, Path]) -> List[TypeRecord]:
    if not isinstance(data, list):
        raise InvalidDataFormatError(
            f"Invalid registry data in {filename}: expected a list of types, got {type(data).__name__}",
            path=str(filename),
        )
    return [TypeRecord.from_dict(item) for item in data]


class Loader:
    """Loads registry data files found under a search root.

    The search root is, in order: the ``path`` argument, the
    ``MIME_TYPES_DATA`` environment variable, or the data bundled with this
    package.
    """

    def __init__(self, path: Optional[str] = None, container: Optional[Container] = None) -> None:
        """Initialize a loader.

        Args:
            path: Directory searched recursively for data files
            container: Container to load into; a new one is created if None
        """
        self.path, self.path_source = resolve_data_path(path)
        self.container = container if container is not None else Container()

    def _find(self, suffixes: tuple) -> List[Path]:
        root = Path(self.path)
        if not root.is_dir():
            log_warning(LogEvent.LOADER, "Data path is not a directory", path=self.path)
            return []
        return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in suffixes)

    def load_json(self) -> Container:
        """Load every ``*.json`` file under the search root.

        Files are read in sorted path order and their records are added
        without duplicate checks, so repeated definitions keep their load
        order.

        Returns:
            The loader's container
        """
        files = self._find(JSON_SUFFIXES)
        for filename in files:
            self.container.add(*self.load_from_json(filename), policy=DuplicatePolicy.SILENT)
        log_info(LogEvent.LOADER, "Loaded JSON registry data", path=self.path, files=len(files))
        return self.container

    load = load_json

    def load_yaml(self) -> Container:
        """Load every ``*.yml``/``*.yaml`` file under the search root.

        Returns:
            The loader's container
        """
        files = self._find(YAML_SUFFIXES)
        for filename in files:
            self.container.add(*self.load_from_yaml(filename), policy=DuplicatePolicy.SILENT)
        log_info(LogEvent.LOADER, "Loaded YAML registry data", path=self.path, files=len(files))
        return self.container

    def load_v1(self, skip_invalid: bool = False) -> Container:
        """Load every v1 format file under the search root.

        All regular files that are not JSON, YAML or hidden (dot) files are
        read as v1 files.
        Each file is parsed on its own and then merged into the container
        with duplicate warnings.

        This method is deprecated; use :meth:`load_json`.

        Args:
            skip_invalid: If True, a file that fails to parse is logged and
                skipped instead of aborting the load

        Returns:
            The loader's container

        Raises:
            V1FormatError: If a file fails to parse and skip_invalid is False
        """
        warnings.warn(
            "Loader.load_v1 is deprecated; convert the data to the JSON registry format",
            DeprecationWarning,
            stacklevel=2,
        )
        root = Path(self.path)
        if not root.is_dir():
            log_warning(LogEvent.LOADER, "Data path is not a directory", path=self.path)
            return self.container

        files = sorted(
            p
            for p in root.rglob("*")
            if p.is_file()
            and not p.name.startswith(".")
            and p.suffix.lower() not in JSON_SUFFIXES + YAML_SUFFIXES
        )
        for filename in files:
            try:
                types = load_from_v1(filename)
            except V1FormatError as e:
                if not skip_invalid:
                    raise
                log_warning(LogEvent.LOADER, f"Skipping invalid v1 file: {e}", path=str(filename))
                continue
            self.container.merge(types, policy=DuplicatePolicy.STRICT_WARN)

        log_info(LogEvent.LOADER, "Loaded v1 registry data", path=self.path, files=len(files))
        return self.container

    @classmethod
    def load_default(cls) -> Container:
        """Load the default registry from JSON data files."""
        return cls().load()

    @staticmethod
    def load_from_json(filename: Union[str, Path]) -> List[TypeRecord]:
        """Load the type records of a single JSON file.

        The file is expected to hold an array of type objects.

        Raises:
            InvalidDataFormatError: If the top-level value is not a list
        """
        with open(filename, "r", encoding="utf-8") as f:
            data = json.load(f)
        log_debug(LogEvent.LOADER, "Read JSON data file", path=str(filename))
        return _records_from(data, filename)

    @staticmethod
    def load_from_yaml(filename: Union[str, Path]) -> List[TypeRecord]:
        """Load the type records of a single YAML file.

        Raises:
            InvalidDataFormatError: If the top-level value is not a list
        """
        with open(filename, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        log_debug(LogEvent.LOADER, "Read YAML data file", path=str(filename))
        return _records_from(data, filename)
