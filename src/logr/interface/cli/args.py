from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of 'logr-cli' and translates the parsed
namespace into FileTargetConfig overrides.
"""

import argparse
from typing import Any, Dict

from logr.levels import LogLevel, TimeSpan

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the logr CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="logr-cli",
        description="Write to, inspect and rotate logr file targets.",
    )

    # --- Target Location ---
    p.add_argument(
        "-d", "--dir",
        dest="base_dir",
        default=None,
        help="Directory holding the active log file (default: ~/.logr/logs).",
    )
    p.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="JSON file with file target settings.",
    )

    # --- Config Overrides ---
    p.add_argument("--name", dest="file_name", default=None, help="Base name of the log file.")
    p.add_argument("--ext", dest="file_extension", default=None, help="Log file extension.")
    p.add_argument(
        "--max-archives",
        dest="max_archived_files_count",
        type=int,
        default=None,
        help="Number of archived files to retain.",
    )
    p.add_argument(
        "--max-bytes",
        dest="max_file_size_in_bytes",
        type=int,
        default=None,
        help="Size above which the active file is due for archival.",
    )
    p.add_argument(
        "--frequency",
        dest="archive_frequency",
        choices=[span.name.lower() for span in TimeSpan],
        default=None,
        help="Age at which the active file is due for archival.",
    )
    p.add_argument(
        "--verbose-style",
        action="store_true",
        help="Prefix lines with call-site metadata.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Show logr's own diagnostics on stderr.",
    )

    sub = p.add_subparsers(dest="command", required=True)

    write = sub.add_parser("write", help="Append one message to the active file.")
    write.add_argument(
        "level",
        type=str.lower,
        choices=[lvl.name.lower() for lvl in LogLevel],
        help="Message severity.",
    )
    write.add_argument("text", nargs="+", help="Message body.")
    write.add_argument(
        "--rotate",
        action="store_true",
        help="Archive afterwards if the size/age policy says so.",
    )

    sub.add_parser("archive", help="Rotate the active file now.")

    status = sub.add_parser("status", help="Show the active file and its archives.")
    status.add_argument("--json", dest="json_output", action="store_true", help="Machine readable output.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into FileTargetConfig field overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Only the fields explicitly given on the command line.
    """
    overrides: Dict[str, Any] = {}

    for key in (
            "file_name",
            "file_extension",
            "max_archived_files_count",
            "max_file_size_in_bytes",
            "archive_frequency",
    ):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value

    if args.verbose_style:
        overrides["style"] = "verbose"

    return overrides
