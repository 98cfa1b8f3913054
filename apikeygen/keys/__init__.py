"""API key generation and registration."""

from apikeygen.keys.errors import (
    EntropyUnavailable,
    FileNotReadable,
    FileNotWritable,
    KeyGenError,
    LineTooLong,
    PropertiesFileError,
)
from apikeygen.keys.generator import ALPHABET, KEY_LENGTH, generate_api_key
from apikeygen.keys.properties import (
    KEYS_PROPERTY,
    MAX_LINE_LENGTH,
    PROPERTIES_FILE,
    PropertiesFile,
    add_key_to_properties,
)

__all__ = [
    "ALPHABET",
    "KEY_LENGTH",
    "KEYS_PROPERTY",
    "MAX_LINE_LENGTH",
    "PROPERTIES_FILE",
    "EntropyUnavailable",
    "FileNotReadable",
    "FileNotWritable",
    "KeyGenError",
    "LineTooLong",
    "PropertiesFile",
    "PropertiesFileError",
    "add_key_to_properties",
    "generate_api_key",
]
