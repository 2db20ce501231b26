# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Declaration size report serialization."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from irsize.resolver import ReportEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputFormat:
    """Describe the envelope of one report format.

    Attributes:
        name: Format identifier used in logs.
        prefix: Text written before the first entry.
        postfix: Text written after the last entry.
        separator: Text written between entries.
        indent: Indentation unit of the entry template.
    """

    name: str
    prefix: str
    postfix: str
    separator: str
    indent: str


JSON_FORMAT = OutputFormat(
    name="json", prefix="{\n", postfix="\n}", separator=",\n", indent="    "
)
JS_FORMAT = OutputFormat(
    name="js",
    prefix="const kotlinDeclarationsSize = {\n",
    postfix="\n};\n",
    separator=",\n",
    indent="    ",
)
PLAIN_FORMAT = OutputFormat(name="plain", prefix="", postfix="", separator="\n", indent="")

_FORMATS_BY_EXTENSION: dict[str, OutputFormat] = {
    "json": JSON_FORMAT,
    "js": JS_FORMAT,
}


def file_extension(path: Path) -> str:
    """Return the text after the last dot of the file name, or ``""``."""
    _, dot, extension = path.name.rpartition(".")
    return extension if dot else ""


def select_format(path: Path) -> OutputFormat:
    """Select the report format from the case-sensitive file extension."""
    return _FORMATS_BY_EXTENSION.get(file_extension(path), PLAIN_FORMAT)


def escape_key(key: str) -> str:
    """Make a qualified key embeddable in a double-quoted literal.

    Quote characters are dropped rather than escaped, so keys that differ only
    by quotes collapse into the same literal. Backslashes are doubled after
    the quotes are gone.
    """
    return key.replace('"', "").replace("'", "").replace("\\", "\\\\")


def format_entry(entry: ReportEntry, output_format: OutputFormat) -> str:
    indent = output_format.indent
    return (
        f'{indent}"{escape_key(entry.key)}": {{\n'
        f'{indent}{indent}"size": {entry.size},\n'
        f'{indent}{indent}"type": "{entry.type}"\n'
        f"{indent}}}"
    )


def format_report(entries: Iterable[ReportEntry], output_format: OutputFormat) -> str:
    """Render entries inside the envelope of ``output_format``.

    Args:
        entries: Report entries in output order.
        output_format: Target format.

    Returns:
        Complete report text. An empty entry list yields the bare envelope.
    """
    body = output_format.separator.join(
        format_entry(entry, output_format) for entry in entries
    )
    return f"{output_format.prefix}{body}{output_format.postfix}"


def write_report(path: Path, entries: list[ReportEntry]) -> None:
    """Serialize entries in the format chosen by ``path`` and overwrite it.

    Args:
        path: Target file; its extension selects the format.
        entries: Report entries in output order.

    Raises:
        OSError: If the file cannot be written.
    """
    output_format = select_format(path)
    content = format_report(entries, output_format)
    logger.info(
        f"Writing declaration size report (path={path} format={output_format.name} entries={len(entries)})"
    )
    path.write_text(content, encoding="utf-8", newline="")
