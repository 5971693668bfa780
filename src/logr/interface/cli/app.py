from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Resolves the file target configuration (defaults, JSON file, command-line
overrides), opens the target and runs the requested command.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from logr.config import FileTargetConfig, config_from_mapping, load_file_target_config
from logr.errors import ConfigError
from logr.infra.diagnostics import configure_diagnostics
from logr.interface.cli import args as cli_args
from logr.levels import LogLevel
from logr.message import Message, MetaInfo
from logr.targets.file import FileTarget

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, 2 for configuration errors).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_diagnostics("DEBUG" if args.debug else "WARNING")

    try:
        config = _resolve_config(args)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    target = FileTarget(config, base_dir=args.base_dir)
    try:
        if args.command == "write":
            _write(target, args)
        elif args.command == "archive":
            target.archive()
        elif args.command == "status":
            target.flush()
            _print_status(target, as_json=args.json_output)
    finally:
        target.close()

    return 0

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _resolve_config(args: Any) -> FileTargetConfig:
    """Merge JSON settings (if any) with command-line overrides."""
    raw: Dict[str, Any] = {}
    if args.config_path:
        base, warnings = load_file_target_config(args.config_path)
        for w in warnings:
            print(f"WARNING: {w}", file=sys.stderr)
        raw = {
            "file_name": base.file_name,
            "file_extension": base.file_extension,
            "max_archived_files_count": base.max_archived_files_count,
            "max_file_size_in_bytes": base.max_file_size_in_bytes,
            "archive_frequency": base.archive_frequency.name.lower(),
            "levels": [lvl.name for lvl in base.levels],
            "style": base.style.value,
        }
    raw.update(cli_args.args_to_overrides(args))
    return config_from_mapping(raw, strict=True)


def _write(target: FileTarget, args: Any) -> None:
    message = Message(
        level=LogLevel.from_name(args.level),
        text=" ".join(args.text),
        meta=MetaInfo(file="<cli>", function="write", line=0),
    )
    target.send(message)
    if args.rotate:
        target.flush()
        target.archive_if_needed()


def _status(target: FileTarget) -> Dict[str, Any]:
    age = target.log_file_age
    return {
        "active_file": target.full_log_file_path,
        "size_in_bytes": target.log_file_size_in_bytes,
        "age": age.name.lower() if age is not None else None,
        "should_archive": target.should_archive,
        "archives": [os.path.basename(p) for p in target.archived_files()],
        "style": target.config.style.value,
    }


def _print_status(target: FileTarget, as_json: bool) -> None:
    status = _status(target)
    if as_json:
        print(json.dumps(status, ensure_ascii=False, indent=2))
        return

    print(f"Active file: {status['active_file']}")
    print(f"Size: {status['size_in_bytes']:,} bytes")
    print(f"Age: {status['age'] or 'new'}")
    print(f"Due for archival: {'yes' if status['should_archive'] else 'no'}")
    archives = status["archives"]
    print(f"Archives ({len(archives)}):")
    for name in archives:
        print(f"  {name}")
