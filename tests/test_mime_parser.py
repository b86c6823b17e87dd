"""
Unit tests for MimeTreeParser: boundary extraction, multipart splitting and
the structural fallbacks.
"""
import pytest

from emlkit.mime.parser import MimeTreeParser


class TestExtractBoundary:
    @pytest.mark.parametrize(
        "content_type,expected",
        [
            ('multipart/mixed; boundary="AbC-123"', "AbC-123"),
            ("multipart/mixed; boundary=xyz; charset=utf-8", "xyz"),
            ("multipart/alternative; BOUNDARY=abc,", "abc"),
            ('multipart/related; type="text/html"; boundary = "q r"', "q r"),
            ("multipart/mixed", ""),
            ("", ""),
            (None, ""),
        ],
    )
    def test_forms(self, content_type, expected):
        assert MimeTreeParser.extract_boundary(content_type) == expected


class TestSplitMultipart:
    def test_preamble_and_epilogue_discarded(self):
        body = "preamble\n--b\nfirst\n--b\nsecond\n--b--\nepilogue\n"
        assert MimeTreeParser.split_multipart(body, "b") == ["first", "second"]

    def test_count_matches_segments_between_markers(self):
        body = "\n".join(["--b", "one", "--b", "two", "--b", "three", "--b--"])
        assert len(MimeTreeParser.split_multipart(body, "b")) == 3

    def test_whitespace_only_segments_skipped(self):
        body = "--b\n\n   \n--b\nreal\n--b--"
        assert MimeTreeParser.split_multipart(body, "b") == ["real"]

    def test_missing_terminal_runs_to_end(self):
        body = "--b\nfirst\n--b\nsecond\n"
        assert MimeTreeParser.split_multipart(body, "b") == ["first", "second\n"]

    def test_boundary_with_regex_characters(self):
        body = "--a.b+c\nx\n--a.b+c--"
        assert MimeTreeParser.split_multipart(body, "a.b+c") == ["x"]

    def test_no_markers(self):
        assert MimeTreeParser.split_multipart("no delimiters here", "b") == []
        assert MimeTreeParser.split_multipart("", "b") == []


class TestParse:
    def test_nested_tree_shape(self, nested_multipart_eml):
        root = MimeTreeParser.parse(nested_multipart_eml)
        assert root.is_multipart
        assert root.content_type.startswith("multipart/mixed")
        assert len(root.children) == 2

        alternative, attachment = root.children
        assert alternative.content_type.startswith("multipart/alternative")
        assert [c.content_type.split(";")[0] for c in alternative.children] == ["text/plain", "text/html"]
        assert alternative.children[0].transfer_encoding == "quoted-printable"
        assert attachment.is_attachment
        assert attachment.body == "ATTACHMENT TERMS TEXT"

    def test_walk_is_preorder(self, nested_multipart_eml):
        root = MimeTreeParser.parse(nested_multipart_eml)
        types = [n.content_type.split(";")[0] for n in root.walk()]
        assert types == [
            "multipart/mixed",
            "multipart/alternative",
            "text/plain",
            "text/html",
            "text/plain",
        ]

    def test_crlf_input_gives_same_tree(self, nested_multipart_eml):
        crlf = nested_multipart_eml.replace("\n", "\r\n")
        assert MimeTreeParser.parse(crlf) == MimeTreeParser.parse(nested_multipart_eml)

    def test_no_blank_line_is_headerless_leaf(self):
        root = MimeTreeParser.parse("Subject: not really\nstill no blank line")
        assert not root.is_multipart
        assert len(root.headers) == 0
        assert root.body == "Subject: not really\nstill no blank line"

    def test_multipart_without_boundary_is_leaf(self):
        root = MimeTreeParser.parse("Content-Type: multipart/mixed\n\nbody text")
        assert not root.is_multipart
        assert root.body == "body text"

    def test_unmatched_boundary_is_leaf(self):
        root = MimeTreeParser.parse('Content-Type: multipart/mixed; boundary="zz"\n\nno parts at all')
        assert not root.is_multipart
        assert root.body == "no parts at all"

    def test_nested_boundary_is_independent_of_parent(self):
        text = (
            'Content-Type: multipart/mixed; boundary="p"\n\n'
            "--p\n"
            'Content-Type: multipart/alternative; boundary="c"\n\n'
            "--c\nContent-Type: text/plain\n\ninner\n--c--\n"
            "--p--\n"
        )
        root = MimeTreeParser.parse(text)
        inner = root.children[0]
        assert inner.is_multipart
        assert inner.children[0].body == "inner"

    def test_depth_limit_keeps_leaf(self, monkeypatch, nested_multipart_eml):
        monkeypatch.setattr("emlkit.mime.parser.MAX_MIME_DEPTH", 1)
        root = MimeTreeParser.parse(nested_multipart_eml)
        alternative = root.children[0]
        assert not alternative.is_multipart
        assert "--inner-boundary" in alternative.body

    def test_empty_input(self):
        root = MimeTreeParser.parse("")
        assert not root.is_multipart
        assert root.body == ""
