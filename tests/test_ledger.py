"""Unit tests for pdf_harvester.crawler.ledger."""

from pdf_harvester.crawler.ledger import Ledger


LINK = "https://www.duragloss.com/a/one.pdf"


def test_missing_ledger_is_empty(tmp_path):
    ledger = Ledger(str(tmp_path / "missing.txt"))

    assert not ledger.contains(LINK)
    assert len(ledger) == 0


def test_record_creates_file_and_appends_lines(tmp_path):
    path = tmp_path / "ledger.txt"
    ledger = Ledger(str(path))

    assert ledger.record(LINK)
    assert ledger.record("https://www.duragloss.com/a/two.pdf")

    assert path.read_text(encoding="utf-8") == (
        LINK + "\n" + "https://www.duragloss.com/a/two.pdf\n"
    )
    assert ledger.contains(LINK)


def test_existing_entries_are_kept(tmp_path):
    path = tmp_path / "ledger.txt"
    path.write_text("https://x.test/old.pdf\n", encoding="utf-8")

    Ledger(str(path)).record(LINK)

    assert path.read_text(encoding="utf-8").splitlines() == ["https://x.test/old.pdf", LINK]


def test_membership_is_exact_line_match(tmp_path):
    path = tmp_path / "ledger.txt"
    path.write_text("https://x.test/docs/report-2.pdf\n", encoding="utf-8")
    ledger = Ledger(str(path))

    assert ledger.contains("https://x.test/docs/report-2.pdf")
    assert not ledger.contains("https://x.test/docs/report")
    assert not ledger.contains("x.test/docs/report-2.pdf")


def test_windows_line_endings(tmp_path):
    path = tmp_path / "ledger.txt"
    path.write_bytes(b"https://x.test/a.pdf\r\nhttps://x.test/b.pdf\r\n")

    assert "https://x.test/b.pdf" in Ledger(str(path))


def test_invalid_link_is_not_recorded(tmp_path):
    path = tmp_path / "ledger.txt"
    ledger = Ledger(str(path))

    assert not ledger.record("/relative/only.pdf")
    assert not path.exists()


def test_unreadable_ledger_behaves_as_empty(tmp_path):
    # A directory in place of the file cannot be opened for reading
    ledger = Ledger(str(tmp_path))

    assert not ledger.contains(LINK)


def test_write_failure_is_logged_not_raised(tmp_path):
    ledger = Ledger(str(tmp_path))

    assert not ledger.record(LINK)
    assert not ledger.contains(LINK)


def test_load_rereads_file(tmp_path):
    path = tmp_path / "ledger.txt"
    ledger = Ledger(str(path))
    assert not ledger.contains(LINK)

    path.write_text(LINK + "\n", encoding="utf-8")
    ledger.load()

    assert ledger.contains(LINK)


def test_link_with_line_break_is_not_recorded(tmp_path):
    path = tmp_path / "ledger.txt"
    ledger = Ledger(str(path))

    assert not ledger.record("https://x.test/a\n.pdf")
    assert not ledger.record("https://x.test/b\r.pdf")
    assert not path.exists()
