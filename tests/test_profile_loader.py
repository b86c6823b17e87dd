from pathlib import Path

import pytest

from emlkit.profile_loader import (
    DEFAULT_HEADER_PARAMETERS,
    ProfileError,
    load_rewrite_plan,
    plan_from_dict,
)


def test_empty_path_gives_default_plan():
    plan = load_rewrite_plan(None)
    assert [p.placeholder for p in plan.parameters] == [p["placeholder"] for p in DEFAULT_HEADER_PARAMETERS]
    assert plan.add_list_unsubscribe is True
    assert plan.remove_x_headers is False
    assert plan.custom_headers == []


def test_profile_file_round_trip(tmp_path: Path):
    profile_file = tmp_path / "profile.yaml"
    profile_file.write_text(
        """
name: "Test"
parameters:
  - {name: "Email ID", placeholder: "[EID]"}
  - {name: "Broken"}
custom_headers:
  - "X-Campaign: [EID]"
  - ""
  - 42
processing_config:
  remove_x_headers: true
  add_list_unsubscribe: false
  replace_date_header: "yes"
placeholders:
  date: "[SEND_DATE]"
""".strip(),
        encoding="utf-8",
    )
    plan = load_rewrite_plan(str(profile_file))
    assert plan.declared_tokens() == ["[EID]"]
    assert plan.custom_headers == ["X-Campaign: [EID]"]
    assert plan.remove_x_headers is True
    assert plan.add_list_unsubscribe is False
    # non-bool flag values are ignored
    assert plan.replace_date_header is False
    assert plan.placeholders.date == "[SEND_DATE]"
    assert plan.placeholders.eid == "[EID]"


def test_top_level_flags_accepted():
    plan = plan_from_dict({"remove_x_headers": True, "processing_config": {"add_list_unsubscribe": False}})
    assert plan.remove_x_headers is True
    assert plan.add_list_unsubscribe is False


def test_malformed_sections_fall_back():
    plan = plan_from_dict({"parameters": "nope", "custom_headers": {"a": 1}, "processing_config": []})
    assert len(plan.parameters) == len(DEFAULT_HEADER_PARAMETERS)
    assert plan.custom_headers == []


def test_bundled_newsletter_profile():
    plan = load_rewrite_plan("profiles/newsletter.yaml")
    assert plan.remove_x_headers is True
    assert "X-Campaign-Id: [EID]" in plan.custom_headers


def test_missing_profile_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_rewrite_plan(str(tmp_path / "missing.yaml"))


def test_invalid_yaml_raises(tmp_path: Path):
    profile_file = tmp_path / "bad.yaml"
    profile_file.write_text("custom_headers: [unclosed", encoding="utf-8")
    with pytest.raises(ProfileError):
        load_rewrite_plan(str(profile_file))
