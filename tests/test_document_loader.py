import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from document_loader import (
    DocumentLoader,
    extract_pdf_text,
    load_csv_records,
    load_json_records,
    load_pdf_document,
)


class DummyLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def info(self, msg: str, *args: object) -> None:
        self.records.append(("info", msg % args if args else msg))

    def warning(self, msg: str, *args: object) -> None:
        self.records.append(("warning", msg % args if args else msg))


def _fake_reader(*pages: str):
    class FakeReader:
        def __init__(self, _path: str) -> None:
            self.pages = [SimpleNamespace(extract_text=lambda text=text: text) for text in pages]

    return FakeReader


def test_extract_pdf_text_success(monkeypatch) -> None:
    monkeypatch.setattr("document_loader.PdfReader", _fake_reader("Hello", "World"))
    logger = DummyLogger()

    text = extract_pdf_text(Path("file.pdf"), logger)

    assert text == "Hello\nWorld"
    assert logger.records == []


def test_extract_pdf_text_failure_returns_none_and_logs(monkeypatch) -> None:
    class BrokenReader:
        def __init__(self, _path: str) -> None:
            raise RuntimeError("bad pdf")

    monkeypatch.setattr("document_loader.PdfReader", BrokenReader)
    logger = DummyLogger()

    assert extract_pdf_text(Path("broken.pdf"), logger) is None
    assert [level for level, _ in logger.records] == ["warning"]


def test_load_pdf_document_builds_record(monkeypatch) -> None:
    monkeypatch.setattr("document_loader.PdfReader", _fake_reader("Green smoothie"))

    document = load_pdf_document(Path("/srv/private/recipes.pdf"), DummyLogger())

    assert document == {"file": "recipes.pdf", "path": "recipes.pdf", "text": "Green smoothie"}


def test_load_pdf_document_skips_empty(monkeypatch) -> None:
    monkeypatch.setattr("document_loader.PdfReader", _fake_reader(""))

    assert load_pdf_document(Path("empty.pdf"), DummyLogger()) is None


def test_load_csv_records_coerces_numbers(tmp_path: Path) -> None:
    file = tmp_path / "books.csv"
    file.write_text(
        "Name,Author,User Rating,Reviews,Year\nGreen Smoothie,Jane,4.6,1200,2016\n",
        encoding="utf-8",
    )

    records = load_csv_records(file)

    assert records == [
        {"Name": "Green Smoothie", "Author": "Jane", "User Rating": 4.6, "Reviews": 1200, "Year": 2016}
    ]


def test_load_json_records_accepts_object_and_array(tmp_path: Path) -> None:
    single = tmp_path / "single.json"
    single.write_text(json.dumps({"title": "a"}), encoding="utf-8")
    many = tmp_path / "many.json"
    many.write_text(json.dumps([{"title": "a"}, {"title": "b"}]), encoding="utf-8")

    assert load_json_records(single) == [{"title": "a"}]
    assert load_json_records(many) == [{"title": "a"}, {"title": "b"}]


def test_load_json_records_rejects_scalars(tmp_path: Path) -> None:
    file = tmp_path / "bad.json"
    file.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_json_records(file)


def test_loader_walks_directories_in_sorted_order(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr("document_loader.PdfReader", _fake_reader("pdf text"))
    data = tmp_path / "data"
    (data / "nested").mkdir(parents=True)
    (data / "b.csv").write_text("title\nfrom csv\n", encoding="utf-8")
    (data / "a.json").write_text(json.dumps({"title": "from json"}), encoding="utf-8")
    (data / "nested" / "c.pdf").write_bytes(b"%PDF-fake")
    (data / "notes.txt").write_text("ignored", encoding="utf-8")

    records = DocumentLoader([data], DummyLogger()).load()

    assert [record.get("title") or record.get("text") for record in records] == [
        "from json",
        "from csv",
        "pdf text",
    ]


def test_loader_warns_about_missing_and_broken_sources(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    logger = DummyLogger()

    records = DocumentLoader([tmp_path / "missing", broken], logger).load()

    assert records == []
    warnings = [message for level, message in logger.records if level == "warning"]
    assert len(warnings) == 2


def test_pdf_path_is_relative_to_its_source_directory(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr("document_loader.PdfReader", _fake_reader("pdf text"))
    data = tmp_path / "data"
    (data / "nested").mkdir(parents=True)
    (data / "nested" / "c.pdf").write_bytes(b"%PDF-fake")

    records = DocumentLoader([data], DummyLogger()).load()

    assert records == [{"file": "c.pdf", "path": "nested/c.pdf", "text": "pdf text"}]
    assert tmp_path.name not in records[0]["path"]
