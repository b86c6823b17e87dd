"""
API Module
==========

FastAPI backend exposing the two emlkit pipelines:
/extract, /separate and /rewrite take raw message text in a JSON body.
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from app.backend.process import MessageTooLargeError, check_message_size
from emlkit import __version__
from emlkit.ir import ExtractedParts, ExtractMode
from emlkit.logger import get_logger
from emlkit.pipeline import (
    parse_and_select,
    reconstruct_email,
    rewrite_with_report,
    separate_source,
)
from emlkit.placeholders import substitute_placeholders
from emlkit.profile_loader import plan_from_dict

logger = get_logger(__name__)

app = FastAPI(title="emlkit", version=__version__)


class ExtractRequest(BaseModel):
    email_content: str
    mode: ExtractMode = ExtractMode.PLAIN_TEXT


class SeparateRequest(BaseModel):
    email_content: str
    keep_header: bool = True
    keep_plain_text: bool = True
    keep_html: bool = True


class RewriteRequest(BaseModel):
    email_content: str
    plan: Optional[Dict[str, Any]] = None
    values: Optional[Dict[str, str]] = None


def _checked_content(content: str) -> str:
    """Reject empty and oversized payloads."""
    if not content or not content.strip():
        raise HTTPException(status_code=400, detail="Invalid email content")
    try:
        check_message_size(content)
    except MessageTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    return content


@app.get("/health")
def health():
    return {"status": "ok", "version": __version__}


@app.post("/extract")
def extract_endpoint(request: ExtractRequest):
    """Extract text, HTML, headers, source or parts from a message."""
    content = _checked_content(request.email_content)
    result = parse_and_select(content, request.mode)
    if isinstance(result, ExtractedParts):
        return {"mode": request.mode.value, "parts": result.model_dump()}
    return {"mode": request.mode.value, "content": result}


@app.post("/separate")
def separate_endpoint(request: SeparateRequest):
    """Separate a message and rebuild it from the kept sections."""
    content = _checked_content(request.email_content)
    parts = separate_source(content)
    result = reconstruct_email(
        parts,
        keep_header=request.keep_header,
        keep_plain_text=request.keep_plain_text,
        keep_html=request.keep_html,
    )
    return {"parts": parts.model_dump(), "result": result}


@app.post("/rewrite")
def rewrite_endpoint(request: RewriteRequest):
    """
    Rewrite headers with a profile-shaped ``plan`` (default plan when
    omitted); ``values`` optionally resolves placeholder tokens afterwards.
    """
    content = _checked_content(request.email_content)
    plan = plan_from_dict(request.plan)
    result, summary, warnings = rewrite_with_report(content, plan)
    if request.values:
        result = substitute_placeholders(result, request.values)
    logger.info(
        "rewrite: %d header(s) removed, %d added",
        summary.headers_removed, summary.headers_added,
    )
    return {"result": result, "summary": summary.to_dict(), "warnings": warnings}
