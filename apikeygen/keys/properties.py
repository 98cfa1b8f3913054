"""Registration of API keys in the backend's application.properties file.

The file is treated as a list of opaque lines. Only the first line starting with
``api.security.keys=`` is interpreted: new keys are appended to its comma-separated
value. Every other line, comments included, is written back unchanged.
"""

import logging
import os
import tempfile
from pathlib import Path

from apikeygen.keys.errors import FileNotReadable, FileNotWritable, LineTooLong
from apikeygen.keys.generator import fingerprint

logger = logging.getLogger(__name__)

PROPERTIES_FILE = Path("../Java/backend-api/src/main/resources/application.properties")
KEYS_PROPERTY = "api.security.keys"
MAX_LINE_LENGTH = 1024

# Bytes that are not valid UTF-8 round-trip unchanged (ISO-8859-1 files)
ENCODING_ERRORS = "surrogateescape"


class PropertiesFile:
    """In-memory copy of a properties file.

    Use :meth:`load` to read the file, :meth:`register_key` to add a key and
    :meth:`save` to write the result back.
    """

    def __init__(
        self,
        path: Path | str,
        lines: list[str],
        property_name: str = KEYS_PROPERTY,
    ):
        self.path = Path(path)
        self.lines = lines
        self.property_name = property_name
        self.keys_index = self._find_keys_line()

    @property
    def prefix(self) -> str:
        """Prefix identifying the keys line."""
        return f"{self.property_name}="

    @classmethod
    def load(
        cls,
        path: Path | str,
        property_name: str = KEYS_PROPERTY,
        max_line_length: int = MAX_LINE_LENGTH,
    ) -> "PropertiesFile":
        """Read a properties file.

        Args:
            path: Path to the properties file
            property_name: Key of the line holding the API keys
            max_line_length: Longest line accepted, newline excluded

        Returns:
            PropertiesFile holding the file's lines

        Raises:
            FileNotReadable: If the file cannot be opened or read
            LineTooLong: If a line exceeds ``max_line_length``
        """
        path = Path(path)
        lines = []
        try:
            with open(path, encoding="utf-8", errors=ENCODING_ERRORS, newline="\n") as f:
                for number, line in enumerate(f, start=1):
                    if line.endswith("\n"):
                        line = line[:-1]
                        if line.endswith("\r"):
                            line = line[:-1]
                    if len(line) > max_line_length:
                        raise LineTooLong(path, number, max_line_length)
                    lines.append(line)
        except OSError as e:
            raise FileNotReadable(path, detail=str(e)) from e

        logger.debug(f"Read {len(lines)} lines from {path}")
        return cls(path, lines, property_name=property_name)

    def _find_keys_line(self) -> int:
        for index, line in enumerate(self.lines):
            if line.startswith(self.prefix):
                return index
        return -1

    @property
    def has_keys_line(self) -> bool:
        """Whether the file already has a keys line."""
        return self.keys_index != -1

    @property
    def keys(self) -> list[str]:
        """Values currently on the keys line (empty when the line is missing)."""
        if not self.has_keys_line:
            return []
        value = self.lines[self.keys_index][len(self.prefix) :]
        return value.split(",") if value else []

    def register_key(self, key: str) -> bool:
        """Append a key to the keys line, creating the line if needed.

        An empty value is not special-cased: ``api.security.keys=`` becomes
        ``api.security.keys=,<key>``.

        Args:
            key: API key to register

        Returns:
            True if the keys line was missing and has been created
        """
        if not self.has_keys_line:
            logger.info(f"{self.property_name} line not found in {self.path}, adding new line")
            self.lines.append(f"{self.prefix}{key}")
            self.keys_index = len(self.lines) - 1
            created = True
        else:
            self.lines[self.keys_index] = f"{self.lines[self.keys_index]},{key}"
            created = False

        logger.info(
            f"Registered key (hash: {fingerprint(key)}) on line {self.keys_index + 1}, "
            f"{len(self.keys)} keys now configured"
        )
        return created

    def render(self) -> str:
        """File content with every line terminated by a newline."""
        return "".join(f"{line}\n" for line in self.lines)

    def save(self, atomic: bool = True) -> None:
        """Write the lines back to disk.

        Symlinks are followed, so the file they point at is the one rewritten.

        Args:
            atomic: Write to a temporary file in the same directory and rename it
                over the original. When False, or when the directory does not
                accept new files, the file is truncated and rewritten in place.

        Raises:
            FileNotWritable: If the file cannot be written
        """
        if not os.access(self.path, os.W_OK):
            raise FileNotWritable(self.path, detail="Permission denied")

        target = self.path.resolve()
        content = self.render()
        if atomic:
            self._save_atomic(target, content)
        else:
            self._save_in_place(target, content)

        logger.debug(f"Wrote {len(self.lines)} lines to {target}")

    def _open_for_writing(self, file):
        return open(file, "w", encoding="utf-8", errors=ENCODING_ERRORS, newline="\n")

    def _save_in_place(self, target: Path, content: str) -> None:
        try:
            with self._open_for_writing(target) as f:
                f.write(content)
        except OSError as e:
            raise FileNotWritable(self.path, detail=str(e)) from e

    def _save_atomic(self, target: Path, content: str) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
        except PermissionError as e:
            logger.info(f"Cannot create temporary file next to {target} ({e}), rewriting in place")
            self._save_in_place(target, content)
            return
        except OSError as e:
            raise FileNotWritable(self.path, detail=str(e)) from e

        tmp_path = Path(tmp_name)
        try:
            with self._open_for_writing(fd) as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, target.stat().st_mode & 0o7777)
            os.replace(tmp_path, target)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise FileNotWritable(self.path, detail=str(e)) from e


def add_key_to_properties(
    path: Path | str,
    key: str,
    property_name: str = KEYS_PROPERTY,
    atomic: bool = True,
) -> bool:
    """Register a key in a properties file.

    Returns:
        True if the keys line had to be created
    """
    properties = PropertiesFile.load(path, property_name=property_name)
    created = properties.register_key(key)
    properties.save(atomic=atomic)
    return created
