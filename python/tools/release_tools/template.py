"""
Placeholder substitution for text files.

Templates mark values with ``{{Name}}``; whitespace inside the braces is
allowed. Names start with a letter or underscore and may contain digits
and dots.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping, Optional, Union

from loguru import logger

from .codec import TimeVersionCodec
from .exceptions import TemplateError
from .models import VersionTuple3, VersionTuple4

PathLike = Union[str, Path]

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_.]*)\s*\}\}")


def find_placeholders(text: str) -> list[str]:
    """Return placeholder names in order of first appearance."""
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def expand_placeholders(
    text: str, values: Mapping[str, object], strict: bool = True
) -> str:
    """
    Replace every ``{{Name}}`` in *text* with ``str(values[Name])``.

    Args:
        text: Template text.
        values: Placeholder values.
        strict: Raise on unknown names instead of leaving them untouched.

    Raises:
        TemplateError: In strict mode, listing every unknown name.
    """
    missing = [name for name in find_placeholders(text) if name not in values]
    if missing and strict:
        raise TemplateError(
            f"No value for placeholder(s): {', '.join(missing)}", missing=missing
        )

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name in values:
            return str(values[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, text)


def render_template_file(
    template_path: PathLike,
    output_path: PathLike,
    values: Mapping[str, object],
    strict: bool = True,
) -> Path:
    """Expand a UTF-8 template file into *output_path*, creating parent directories."""
    source = Path(template_path)
    target = Path(output_path)

    try:
        content = source.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(
            f"Failed to read template {source}: {e}",
            template_path=source,
            original_error=e,
        ) from e

    try:
        rendered = expand_placeholders(content, values, strict=strict)
    except TemplateError as e:
        raise TemplateError(
            f"{e.args[0]} in {source}", template_path=source, missing=e.missing
        ) from e

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(rendered, encoding="utf-8")
    except OSError as e:
        raise TemplateError(
            f"Failed to write {target}: {e}", template_path=source, original_error=e
        ) from e

    logger.info(f"Rendered {source} -> {target}")
    return target


def version_placeholders(
    version: Union[VersionTuple4, VersionTuple3],
    extra: Optional[Mapping[str, object]] = None,
) -> dict[str, object]:
    """
    Standard placeholder values for a version.

    ``Timestamp`` is the decoded instant in ISO-8601 form. Entries in *extra*
    override the standard ones.
    """
    if isinstance(version, VersionTuple4):
        decoded = TimeVersionCodec.decode4(
            version.build, version.major, version.minor, version.revision
        )
        values: dict[str, object] = {
            "Version": version.text,
            "Build": version.build,
            "Major": version.major,
            "Minor": version.minor,
            "Revision": version.revision,
        }
    else:
        decoded = TimeVersionCodec.decode3(version.build, version.major, version.minor)
        values = {
            "Version": version.text,
            "Build": version.build,
            "Major": version.major,
            "Minor": version.minor,
            "Revision": "",
        }
    values["Timestamp"] = decoded.computed.isoformat()
    if extra:
        values.update(extra)
    return values
