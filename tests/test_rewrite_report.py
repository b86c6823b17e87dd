"""
Unit tests for rewrite summaries and required-header validation.
"""
from emlkit.rewrite.report import summarize_changes, validate_headers


class TestSummarizeChanges:
    def test_removed_added_modified(self):
        original = "From: a@b\nDKIM-Signature: x\nSubject: s\n\nbody"
        rewritten = "From: <a@[P_RPATH]>\nList-Unsubscribe: <x>\nSubject: s\n\nbody"
        summary = summarize_changes(original, rewritten)
        assert summary.removed_headers == ["DKIM-Signature"]
        assert summary.added_headers == ["List-Unsubscribe"]
        assert summary.modified_headers == ["From"]
        assert summary.headers_removed == 1

    def test_casing_change_is_remove_plus_add(self):
        summary = summarize_changes("Message-Id: <a@b>\n\n", "Message-ID: <a@b>\n\n")
        assert summary.removed_headers == ["Message-Id"]
        assert summary.added_headers == ["Message-ID"]

    def test_body_lines_ignored(self):
        summary = summarize_changes("Subject: s\n\nX-Body: 1", "Subject: s\n\nX-Body: 2")
        assert summary.to_dict()["headers_modified"] == 0

    def test_sizes_are_utf8_bytes(self):
        summary = summarize_changes("Subject: é\n\n", "Subject: e\n\n")
        assert summary.original_size == 13
        assert summary.rewritten_size == 12


class TestValidateHeaders:
    def test_all_present(self):
        text = "from: a\nTo: b\nSubject: c\nDate: d\n\nbody"
        assert validate_headers(text) == []

    def test_missing_reported_in_order(self):
        assert validate_headers("Subject: c\n\nbody") == [
            "Missing From header",
            "Missing To header",
            "Missing Date header",
        ]
