"""
Rewrite Profile Loader
======================

Builds a :class:`RewritePlan` from a YAML profile file (or a plain dict with
the same shape, as posted to the API). Unknown keys are ignored and
malformed sections fall back to defaults.

Profile shape::

    name: Newsletter
    description: Strip tracking, keep layout
    parameters:
      - {name: Email ID, placeholder: "[EID]", description: Unique id}
    custom_headers:
      - "X-Campaign: [EID]"
    processing_config:
      remove_x_headers: true
      add_list_unsubscribe: true
      replace_date_header: false
    placeholders:
      to: "[*to]"
      rpath: "[P_RPATH]"
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from emlkit.ir import HeaderParameter, PlaceholderBindings, RewritePlan
from emlkit.logger import get_logger

logger = get_logger(__name__)

# Repository root: emlkit/profile_loader.py → parents[1]
REPO_ROOT = Path(__file__).resolve().parents[1]

# Parameters used when a profile declares none
DEFAULT_HEADER_PARAMETERS: List[Dict[str, str]] = [
    {"name": "To Address", "placeholder": "[*to]", "description": "Recipient email address placeholder"},
    {"name": "Return Path Domain", "placeholder": "[P_RPATH]", "description": "Return path domain placeholder"},
    {"name": "Email ID", "placeholder": "[EID]", "description": "Unique email identifier placeholder"},
    {"name": "Random String", "placeholder": "[RNDS]", "description": "Random string placeholder for Message-ID domain"},
]

_PROCESSING_FLAGS = ("remove_x_headers", "add_list_unsubscribe", "replace_date_header")
_PLACEHOLDER_KEYS = ("to", "rpath", "eid", "rnds", "date")


class ProfileError(ValueError):
    """Raised when a profile file exists but cannot be read as YAML."""


def _ensure_dict(value: Any) -> Dict[str, Any]:
    """Return *value* if it is a dict, else an empty dict."""
    if isinstance(value, dict):
        return value
    return {}


def _ensure_list(value: Any) -> List[Any]:
    """Return *value* if it is a list, else an empty list."""
    if isinstance(value, list):
        return value
    return []


def _ensure_str_list(value: Any) -> List[str]:
    """Non-blank strings of *value*, stripped."""
    if not isinstance(value, list):
        return []
    out: List[str] = []
    for item in value:
        if isinstance(item, str) and item.strip():
            out.append(item.strip())
    return out


def _parse_parameters(raw: Any) -> List[HeaderParameter]:
    parameters: List[HeaderParameter] = []
    for idx, item in enumerate(_ensure_list(raw)):
        if not isinstance(item, dict):
            continue
        placeholder = item.get("placeholder")
        if not isinstance(placeholder, str) or not placeholder.strip():
            logger.warning("Profile parameter #%d has no placeholder, skipped", idx + 1)
            continue
        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            name = placeholder.strip()
        description = item.get("description")
        parameters.append(
            HeaderParameter(
                name=name.strip(),
                placeholder=placeholder.strip(),
                description=description if isinstance(description, str) else None,
            )
        )
    return parameters


def default_parameters() -> List[HeaderParameter]:
    """Fresh copies of the built-in placeholder parameters."""
    return [HeaderParameter(**p) for p in DEFAULT_HEADER_PARAMETERS]


def plan_from_dict(data: Optional[Dict[str, Any]]) -> RewritePlan:
    """Build a :class:`RewritePlan` from profile-shaped *data*.

    ``processing_config`` flags may also be given at the top level.
    """
    data = _ensure_dict(data)

    parameters = _parse_parameters(data.get("parameters"))
    if not parameters:
        parameters = default_parameters()

    processing = dict(_ensure_dict(data.get("processing_config")))
    for flag in _PROCESSING_FLAGS:
        if flag in data and flag not in processing:
            processing[flag] = data[flag]
    flags = {
        flag: processing[flag]
        for flag in _PROCESSING_FLAGS
        if isinstance(processing.get(flag), bool)
    }

    placeholders_raw = _ensure_dict(data.get("placeholders"))
    placeholders = PlaceholderBindings(**{
        key: placeholders_raw[key].strip()
        for key in _PLACEHOLDER_KEYS
        if isinstance(placeholders_raw.get(key), str) and placeholders_raw[key].strip()
    })

    return RewritePlan(
        parameters=parameters,
        custom_headers=_ensure_str_list(data.get("custom_headers")),
        placeholders=placeholders,
        **flags,
    )


def default_rewrite_plan() -> RewritePlan:
    """Plan used when no profile is given: default parameters and flags."""
    return plan_from_dict({})


def load_rewrite_plan(profile_path: Optional[str]) -> RewritePlan:
    """
    Load a rewrite plan from a YAML profile.

    Args:
        profile_path: profile file; relative paths resolve against the repo root

    Returns:
        the parsed plan, or the default plan when *profile_path* is empty

    Raises:
        FileNotFoundError: the profile file does not exist
        ProfileError: the file is not valid YAML
    """
    if not profile_path:
        return default_rewrite_plan()

    path = Path(profile_path).expanduser()
    if not path.is_absolute() and not path.exists():
        path = (REPO_ROOT / path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"profile not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ProfileError(f"invalid profile {path}: {e}") from e

    if not isinstance(raw, dict):
        logger.warning("Profile %s is not a mapping, using defaults", path)
    plan = plan_from_dict(_ensure_dict(raw))
    logger.info(
        "Loaded rewrite profile %s (%d parameters, %d custom headers)",
        path, len(plan.parameters), len(plan.custom_headers),
    )
    return plan
