"""Render the Windows version-information resource script."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

_LANGUAGE_CODEPAGE = "080904E4"
_TRANSLATION = "0x809, 1252"
_ICON_FILE = "icon.ico"


def _string_values(version: str) -> list[tuple[str, str]]:
    return [
        ("CompanyName", "Tabajara Inc"),
        ("FileDescription", "Not another RSS reader"),
        ("FileVersion", version),
        ("InternalName", "narr"),
        ("LegalCopyright", "narr"),
        ("OriginalFilename", "narr.exe"),
        ("ProductName", "narr"),
        ("ProductVersion", version),
    ]


def _block(name: str, body: list[str]) -> list[str]:
    """Wrap ``body`` lines in a named BEGIN/END block, indented one level."""
    return [f'BLOCK "{name}"', "BEGIN", *("  " + line for line in body), "END"]


def render_versioninfo(version: str) -> str:
    """Fill the resource script with ``version``."""
    numeric = version.replace(".", ",")
    strings = [f'VALUE "{key}", "{value}"' for key, value in _string_values(version)]
    body = [
        *_block("StringFileInfo", _block(_LANGUAGE_CODEPAGE, strings)),
        *_block("VarFileInfo", [f'VALUE "Translation", {_TRANSLATION}']),
    ]
    lines = [
        "1 VERSIONINFO",
        f"FILEVERSION     {numeric},0",
        f"PRODUCTVERSION  {numeric},0",
        "BEGIN",
        *("  " + line for line in body),
        "END",
        "",
        f'1 ICON "{_ICON_FILE}"',
    ]
    return "\n".join(lines) + "\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Write a version-information resource script.")
    parser.add_argument("-version", "--version", dest="version", default="0.0.0")
    parser.add_argument("-outfile", "--outfile", dest="outfile", default="versioninfo.rc")
    args = parser.parse_args(argv)
    Path(args.outfile).write_bytes(render_versioninfo(args.version).encode("utf-8"))
    return 0