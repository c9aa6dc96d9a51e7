"""CLI entrypoint — unitext.

Subcommands:
  size       Length of the input in codepoints.
  upcase     Uppercase the input (full case mapping, ß -> SS).
  downcase   Lowercase the input.
  reverse    Reverse the input codepoint by codepoint.
  normalize  Normalize the input to NFC, NFD, NFKC or NFKD (--form c|d|kc|kd).
  titleize   Titlecase the first letter of every word.

Input comes from --text or --path (plain text or .docx). Plain text files are
passed to the core as raw bytes and must be valid UTF-8, unless
--detect-encoding is given.

Each command outputs a single JSON object to stdout. With --log-dir, each
run also writes runs/<run_id>/run.log and run.json under that directory.
Non-zero exit code on error, with {"status": "error", "error": "..."} JSON on
stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, Optional

from . import text as text_ops
from .errors import InvalidEncoding, InvalidForm, UnitextError
from .normalization import NormalizationForm, parse_form
from .runs import (
    close_run_logger,
    new_run_id,
    setup_run_logger,
    utcnow_iso,
    write_run_record,
)
from .sources import load_source


def _ok(data: dict) -> None:
    payload = dict(data)
    payload.setdefault("status", "ok")
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _err(data: dict, code: int = 1) -> None:
    payload = dict(data)
    payload["status"] = "error"
    payload.setdefault("error", "Unknown error")
    payload.setdefault("created_at", utcnow_iso())
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    sys.exit(code)


class _JsonArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that preserves CLI JSON contract on parse failures."""

    def error(self, message: str) -> None:  # type: ignore[override]
        _err({"error": f"Invalid arguments: {message}"}, code=1)


def _open_run_logger(args: argparse.Namespace, run_id: str) -> tuple[logging.Logger, Optional[str]]:
    if args.log_dir:
        log, log_path = setup_run_logger(args.log_dir, run_id)
        return log, str(log_path)
    # No log directory: keep stdout/stderr clean for the JSON contract.
    log = logging.getLogger(f"unitext.run.{run_id}")
    log.addHandler(logging.NullHandler())
    log.propagate = False
    return log, None


def _load_input(args: argparse.Namespace, log: logging.Logger) -> tuple[bytes, dict]:
    if args.text is not None:
        # surrogateescape gives back the exact argv bytes, valid UTF-8 or not
        data = args.text.encode("utf-8", "surrogateescape")
        return data, {"source": "text", "bytes": len(data)}
    source = load_source(args.path, detect=args.detect_encoding, run_logger=log)
    info = source.to_dict()
    info["source"] = "path"
    return source.data, info


def _error_details(exc: UnitextError) -> dict:
    details: dict[str, Any] = {"error": str(exc), "error_kind": type(exc).__name__}
    if isinstance(exc, InvalidEncoding):
        details["offset"] = exc.offset
        details["reason"] = exc.reason
    elif isinstance(exc, InvalidForm):
        details["form"] = str(exc.value)
    return details


def _execute(
    args: argparse.Namespace,
    prepare: Callable[[], Callable[[bytes], Any]],
    params: Optional[dict] = None,
) -> None:
    """Run one operation over the input and print the JSON envelope.

    *prepare* validates the command options and returns the operation; it
    runs before the input is read.
    """
    run_id = new_run_id()
    log, log_path = _open_run_logger(args, run_id)
    params = dict(params or {})
    params.update({"text": args.text, "path": args.path, "detect_encoding": args.detect_encoding})
    base = {"run_id": run_id, "command": args.command}
    if log_path:
        base["log"] = log_path

    try:
        log.info("%s started (run_id=%s)", args.command, run_id)
        operation = prepare()
        data, source = _load_input(args, log)
        result = operation(data)

        if isinstance(result, bytes):
            output = result.decode("utf-8")
            stats = {"input_bytes": len(data), "output_bytes": len(result),
                     "codepoints": text_ops.codepoint_count(result)}
        else:
            output = result
            stats = {"input_bytes": len(data), "codepoints": result}

        log.info("%s completed: %s", args.command, stats)
        if args.log_dir:
            write_run_record(args.log_dir, run_id, args.command, params, stats)

        payload = dict(base)
        payload.update({
            "result": output,
            "codepoints": stats["codepoints"],
            "input": source,
            "created_at": utcnow_iso(),
        })
        _ok(payload)

    except UnitextError as exc:
        log.error("%s failed: %s", args.command, exc)
        if args.log_dir:
            write_run_record(args.log_dir, run_id, args.command, params, {"error": str(exc)})
        payload = dict(base)
        payload.update(_error_details(exc))
        _err(payload)
    except FileNotFoundError as exc:
        log.error("%s failed: %s", args.command, exc)
        payload = dict(base)
        payload.update({"error": str(exc), "error_kind": "FileNotFoundError"})
        _err(payload)
    finally:
        close_run_logger(log)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_size(args: argparse.Namespace) -> None:
    _execute(args, lambda: text_ops.codepoint_count)


def cmd_upcase(args: argparse.Namespace) -> None:
    _execute(args, lambda: text_ops.upcase)


def cmd_downcase(args: argparse.Namespace) -> None:
    _execute(args, lambda: text_ops.downcase)


def cmd_reverse(args: argparse.Namespace) -> None:
    _execute(args, lambda: text_ops.reverse)


def cmd_titleize(args: argparse.Namespace) -> None:
    _execute(args, lambda: text_ops.titleize)


def cmd_normalize(args: argparse.Namespace) -> None:
    def prepare() -> Callable[[bytes], bytes]:
        form: NormalizationForm = parse_form(args.form)
        return lambda data: text_ops.normalize(data, form)

    _execute(args, prepare, params={"form": args.form})


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _add_input_args(p: argparse.ArgumentParser) -> None:
    source = p.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", default=None, help="Text to transform")
    source.add_argument("--path", default=None, help="Path to a text or .docx file")
    p.add_argument(
        "--detect-encoding",
        dest="detect_encoding",
        action="store_true",
        default=False,
        help="Transcode non-UTF-8 text files to UTF-8 (BOM / charset-normalizer detection)",
    )
    p.add_argument(
        "--log-dir",
        dest="log_dir",
        default=None,
        help="Directory where runs/<run_id>/run.log and run.json are written",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = _JsonArgumentParser(
        prog="unitext",
        description="unitext_engine — Unicode-aware string primitives over UTF-8 text",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_size = sub.add_parser("size", help="Length of the input in codepoints")
    _add_input_args(p_size)
    p_size.set_defaults(func=cmd_size)

    p_up = sub.add_parser("upcase", help="Uppercase the input")
    _add_input_args(p_up)
    p_up.set_defaults(func=cmd_upcase)

    p_down = sub.add_parser("downcase", help="Lowercase the input")
    _add_input_args(p_down)
    p_down.set_defaults(func=cmd_downcase)

    p_rev = sub.add_parser("reverse", help="Reverse the input codepoint by codepoint")
    _add_input_args(p_rev)
    p_rev.set_defaults(func=cmd_reverse)

    p_norm = sub.add_parser("normalize", help="Normalize the input (NFC, NFD, NFKC, NFKD)")
    _add_input_args(p_norm)
    p_norm.add_argument(
        "--form",
        required=True,
        help="Normalization form: c, d, kc or kd",
    )
    p_norm.set_defaults(func=cmd_normalize)

    p_title = sub.add_parser("titleize", help="Titlecase the first letter of every word")
    _add_input_args(p_title)
    p_title.set_defaults(func=cmd_titleize)

    return parser


def main() -> None:
    parser = build_parser()
    try:
        args = parser.parse_args()
        args.func(args)
    except SystemExit:
        raise
    except Exception as exc:
        _err({"error": str(exc)}, code=1)


if __name__ == "__main__":
    main()
