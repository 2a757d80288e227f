"""
Release Tools

Build and release helpers for CI pipelines. The core is a compact scheme that
encodes a UTC build timestamp into the minor/revision components of a
four-part (or collapsed three-part) version number with 64-second precision,
and decodes such versions back into the moment they describe.

The package can be used as a library or from the command line via
``python -m release_tools``.
"""

from .models import ClockKind, DecodedInstant3, DecodedInstant4, VersionTuple3, VersionTuple4
from .exceptions import (
    ConfigurationError,
    HighPartOutOfRange,
    InstantBeyondYear,
    MinorOverflow,
    RangeError,
    ReleaseToolsError,
    RevisionOverflow,
    TemplateError,
    VersionFormatError,
    YearOutOfRange,
)
from .codec import TimeVersionCodec, decode3, decode4, encode3, encode4
from .api import (
    decode_version,
    decode_version_text,
    encode_datetime,
    encode_datetime3,
    parse_version,
)
from .template import expand_placeholders, render_template_file, version_placeholders
from .config import StampConfig, StampConfigLoader

__version__ = "1.0.0"
__author__ = "Max Qian"
__license__ = "GPL-3.0-or-later"


def get_tool_info() -> dict:
    """
    Get metadata information about the release_tools module.

    Returns:
        dict: Module metadata including name, version, description, author,
              license, platform support, available functions and classes.
    """
    return {
        "name": "release_tools",
        "version": __version__,
        "description": "Encode build timestamps into 64-second version numbers and stamp them into files",
        "author": __author__,
        "license": __license__,
        "supported": True,
        "platform": ["windows", "linux", "macos"],
        "functions": [
            "encode4",
            "decode4",
            "encode3",
            "decode3",
            "encode_datetime",
            "encode_datetime3",
            "parse_version",
            "decode_version",
            "decode_version_text",
            "expand_placeholders",
            "render_template_file",
            "version_placeholders",
            "get_tool_info",
        ],
        "requirements": ["loguru", "typer", "rich", "PyYAML"],
        "classes": {
            "TimeVersionCodec": "Pure encoder/decoder between UTC instants and version tuples",
            "VersionTuple4": "Build.Major.Minor.Revision version value",
            "VersionTuple3": "Build.Major.Minor version value",
            "StampConfig": "Settings for version stamping",
        },
    }


__all__ = [
    "ClockKind",
    "VersionTuple4",
    "VersionTuple3",
    "DecodedInstant4",
    "DecodedInstant3",
    "ReleaseToolsError",
    "RangeError",
    "YearOutOfRange",
    "HighPartOutOfRange",
    "MinorOverflow",
    "RevisionOverflow",
    "InstantBeyondYear",
    "VersionFormatError",
    "TemplateError",
    "ConfigurationError",
    "TimeVersionCodec",
    "encode4",
    "decode4",
    "encode3",
    "decode3",
    "encode_datetime",
    "encode_datetime3",
    "parse_version",
    "decode_version",
    "decode_version_text",
    "expand_placeholders",
    "render_template_file",
    "version_placeholders",
    "StampConfig",
    "StampConfigLoader",
    "get_tool_info",
]
