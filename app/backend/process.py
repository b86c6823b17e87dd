"""
Backend Process Module
======================

Batch wrapper around the emlkit pipelines: read message files, run one
independent extraction / rewrite / separation per file, and write the
outputs plus a JSON report. A failing file is recorded in its own result
entry and never stops the batch.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set

from emlkit.config import get_settings
from emlkit.ir import ExtractedParts, ExtractMode, RewritePlan
from emlkit.logger import get_logger
from emlkit.pipeline import (
    parse_and_select,
    reconstruct_email,
    rewrite_with_report,
    separate_source,
)
from emlkit.placeholders import substitute_placeholders

logger = get_logger(__name__)

OUTPUT_SUFFIX = {
    ExtractMode.PLAIN_TEXT: ".txt",
    ExtractMode.HTML: ".html",
    ExtractMode.HEADERS: ".headers.txt",
    ExtractMode.SOURCE: ".txt",
    ExtractMode.PARTS: ".json",
}


class MessageTooLargeError(ValueError):
    """Input exceeds ``EMLKIT_MAX_MESSAGE_BYTES``."""


def collect_source_paths(inputs: List[str], extensions: Optional[List[str]] = None) -> List[str]:
    """
    Expand files and directories into a sorted, de-duplicated file list.

    Directories are scanned recursively and filtered by *extensions*
    (default: ``EMLKIT_INPUT_EXTENSIONS``); explicitly named files are
    always kept.
    """
    exts = extensions if extensions is not None else get_settings().input_extensions()
    collected: List[str] = []
    for raw in inputs:
        path = Path(raw).expanduser()
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if child.is_file() and child.suffix.lower() in exts:
                    collected.append(str(child))
        elif path.is_file():
            collected.append(str(path))
        else:
            logger.warning("Input not found: %s", raw)
    return list(dict.fromkeys(collected))


def check_message_size(content: str) -> None:
    """Raise :class:`MessageTooLargeError` above the configured limit."""
    limit = get_settings().MAX_MESSAGE_BYTES
    size = len(content.encode("utf-8"))
    if size > limit:
        raise MessageTooLargeError(f"message is {size} bytes, limit is {limit}")


def read_message(file_path: str) -> str:
    """Read a message file as text; undecodable bytes are replaced."""
    settings = get_settings()
    path = Path(file_path)
    size = path.stat().st_size
    if size > settings.MAX_MESSAGE_BYTES:
        raise MessageTooLargeError(
            f"{path.name} is {size} bytes, limit is {settings.MAX_MESSAGE_BYTES}"
        )
    return path.read_bytes().decode(settings.FILE_ENCODING, errors="replace")


def _run_batch(file_paths: List[str], handler: Callable[[str], Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Apply *handler* to each file's text, capturing per-file failures."""
    limit = get_settings().MAX_FILES
    if len(file_paths) > limit:
        logger.warning("Batch of %d files exceeds limit %d, extra files skipped", len(file_paths), limit)

    results: List[Dict[str, Any]] = []
    for file_path in file_paths[:limit]:
        entry: Dict[str, Any] = {
            "filename": Path(file_path).name,
            "file_path": file_path,
            "status": "completed",
            "error": None,
        }
        try:
            content = read_message(file_path)
            entry.update(handler(content))
        except (OSError, MessageTooLargeError) as e:
            logger.error("Processing failed for %s: %s", file_path, e)
            entry.update(status="error", error=str(e), error_type=type(e).__name__)
        results.append(entry)

    failed = sum(1 for r in results if r["status"] == "error")
    logger.info("Batch done: %d file(s), %d failed", len(results), failed)
    return results


def process_extract(file_paths: List[str], mode: ExtractMode) -> List[Dict[str, Any]]:
    """Run ``parse_and_select`` over every file."""
    mode = ExtractMode(mode)

    def handler(content: str) -> Dict[str, Any]:
        result = parse_and_select(content, mode)
        if isinstance(result, ExtractedParts):
            return {"output": result.model_dump(), "empty": not (result.plain_text or result.html)}
        return {"output": result, "empty": not result.strip()}

    return _run_batch(file_paths, handler)


def process_rewrite(
    file_paths: List[str],
    plan: RewritePlan,
    values: Optional[Dict[str, str]] = None,
) -> List[Dict[str, Any]]:
    """
    Rewrite every file under *plan*; when *values* are given, placeholder
    tokens are resolved afterwards.
    """

    def handler(content: str) -> Dict[str, Any]:
        rewritten, summary, warnings = rewrite_with_report(content, plan)
        if values:
            rewritten = substitute_placeholders(rewritten, values)
        return {"output": rewritten, "summary": summary.to_dict(), "warnings": warnings}

    return _run_batch(file_paths, handler)


def process_separate(
    file_paths: List[str],
    keep_header: bool = True,
    keep_plain_text: bool = True,
    keep_html: bool = True,
) -> List[Dict[str, Any]]:
    """Separate every file and rebuild it from the kept sections."""

    def handler(content: str) -> Dict[str, Any]:
        parts = separate_source(content)
        output = reconstruct_email(parts, keep_header, keep_plain_text, keep_html)
        return {"output": output, "parts": parts.model_dump(), "empty": not output.strip()}

    return _run_batch(file_paths, handler)


def ensure_output_dir(output_dir: str) -> Path:
    """Create *output_dir* if needed and return it resolved."""
    output_path = Path(output_dir).resolve()
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path


def _unique_target(output_path: Path, stem: str, suffix: str, taken: Set[Path]) -> Path:
    """``stem + suffix`` in *output_path*, or ``stem_1``, ``stem_2``... when taken."""
    target = (output_path / f"{stem}{suffix}").resolve()
    counter = 1
    while target in taken:
        target = (output_path / f"{stem}_{counter}{suffix}").resolve()
        counter += 1
    return target


def write_outputs(results: List[Dict[str, Any]], output_dir: str, suffix: str = ".txt") -> List[str]:
    """
    Write each completed result's output next to the others in *output_dir*.

    The output name is the input stem plus *suffix*; dict outputs are written
    as JSON. Same-named inputs from different directories get a numeric
    suffix, and no batch input file is ever overwritten. Returns the written
    paths and records them in each entry.
    """
    output_path = ensure_output_dir(output_dir)
    # input files are never targets, whatever their status
    taken: Set[Path] = {
        Path(entry["file_path"]).resolve() for entry in results if entry.get("file_path")
    }
    written: List[str] = []
    for entry in results:
        if entry.get("status") != "completed":
            continue
        target = _unique_target(output_path, Path(entry["filename"]).stem, suffix, taken)
        taken.add(target)
        output = entry.get("output")
        if isinstance(output, dict):
            target.write_text(json.dumps(output, ensure_ascii=False, indent=2), encoding="utf-8")
        else:
            target.write_text(output or "", encoding="utf-8")
        entry["output_path"] = str(target)
        written.append(str(target))
    return written


def write_json_output(
    results: List[Dict[str, Any]],
    output_dir: str,
    output_filename: Optional[str] = None,
) -> str:
    """Write the batch report (results without bulky outputs) as JSON."""
    output_path = ensure_output_dir(output_dir)
    name = output_filename or f"report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
    report = {
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "total": len(results),
        "failed": sum(1 for r in results if r.get("status") == "error"),
        "files": [{k: v for k, v in r.items() if k not in ("output", "parts")} for r in results],
    }
    json_path = output_path / name
    json_path.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")
    return str(json_path)
