"""List the segmentation templates kept as CSV files in a directory."""

from __future__ import annotations

import argparse
import os
import sys

DEFAULT_DIRECTORY = "illumio-templates/"


def template_directory(directory: str) -> str:
    """Return the template directory, defaulting it and ending it with a separator."""
    if not directory:
        return DEFAULT_DIRECTORY
    if not directory.endswith(os.sep):
        return directory + os.sep
    return directory


def list_templates(directory: str) -> dict[str, list[str]]:
    """Return template names, sorted, each with the file types it provides."""
    templates: dict[str, list[str]] = {}
    for file_name in sorted(os.listdir(template_directory(directory))):
        parts = file_name.split(".")
        if len(parts) < 2:
            raise ValueError(f"{file_name} is not named <template>.<type>.csv")
        templates.setdefault(parts[0], []).append(parts[1])
    return dict(sorted(templates.items()))


def main(argv: list[str] | None = None) -> int:
    """Print each available template with its file types."""
    parser = argparse.ArgumentParser(
        prog="template-list", description="List available segmentation templates."
    )
    parser.add_argument(
        "--directory",
        default="",
        help="directory with template files. default is illumio-templates in the working directory",
    )
    args = parser.parse_args(argv)
    try:
        templates = list_templates(args.directory)
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    for name, types in templates.items():
        print(f"{name} ({', '.join(types)})")
    return 0