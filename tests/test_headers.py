# =============================================================================
# Header Reader Tests
# =============================================================================

from maildir_engine.storage import read_headers


def test_reads_headers_and_stops_at_body(temp_dir, sample_message):
    path = temp_dir / "msg"
    path.write_text(sample_message)

    headers = read_headers(path)

    assert headers["from"] == "Alice Example <alice@example.com>"
    assert headers["to"] == "bob@example.com"
    assert headers["message-id"] == "<report-1@example.com>"
    assert "header-looking" not in headers


def test_folded_header_is_joined_with_single_space(temp_dir, sample_message):
    path = temp_dir / "msg"
    path.write_text(sample_message)

    assert read_headers(path)["subject"] == "Quarterly report and planning notes"


def test_names_are_lower_cased(temp_dir):
    path = temp_dir / "msg"
    path.write_text("X-Custom-HEADER: Value\n\n")
    assert read_headers(path) == {"x-custom-header": "Value"}


def test_crlf_line_endings(temp_dir):
    path = temp_dir / "msg"
    path.write_bytes(b"Subject: hi\r\nTo: a@b.c\r\n\r\nbody\r\n")
    assert read_headers(path) == {"subject": "hi", "to": "a@b.c"}


def test_headers_without_body(temp_dir):
    path = temp_dir / "msg"
    path.write_text("Subject: only headers\nX-Mailer: test")
    assert read_headers(path) == {"subject": "only headers", "x-mailer": "test"}


def test_malformed_line_ends_header_block(temp_dir):
    path = temp_dir / "msg"
    path.write_text("Subject: ok\nthis is not a header\nTo: ignored@example.com\n\n")
    assert read_headers(path) == {"subject": "ok"}


def test_repeated_header_last_wins(temp_dir):
    path = temp_dir / "msg"
    path.write_text("Received: first\nReceived: second\n\n")
    assert read_headers(path) == {"received": "second"}


def test_empty_file(temp_dir):
    path = temp_dir / "msg"
    path.write_text("")
    assert read_headers(path) == {}


def test_missing_file_reports_failure(temp_dir):
    assert read_headers(temp_dir / "nope") is None


def test_undecodable_bytes_do_not_fail(temp_dir):
    path = temp_dir / "msg"
    path.write_bytes(b"Subject: caf\xe9\n\n")
    headers = read_headers(path)
    assert headers["subject"].startswith("caf")
