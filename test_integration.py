"""Integration tests for Roster Continuity.

Builds small roster PDFs with PyMuPDF and runs them through extraction,
parsing, comparison and the CLI.
"""

import json
import os

import fitz  # PyMuPDF
import pytest

from api.cli import main as cli_main
from api.use_cases import CompareRostersUseCase
from ingestion import PdfExtractor, RosterParser
from shared.config import RosterConfig, load_config
from shared.exceptions import EmptyRosterError, ExtractionError

HEADER = [
    "CENTRO VENEZOLANO AMERICANO",
    "LISTA DE ALUMNOS",
    "Periodo: 2024-3",
]

# (x, text) cells on one row; rows are laid out top to bottom
OLD_PAGES = [
    [
        [(50, "Categoría: ADULTOS")],
        [(50, "Nivel: Level 5")],
        [(50, "Horario: A / 8:30 A 10:00 AM")],
        [(50, "Salón: C5 Curso ID: 64161")],
        [(50, "#"), (70, "Cédula"), (150, "Apellidos y Nombres"), (330, "Email"), (460, "Teléfono")],
        [(50, "1"), (70, "12345678"), (150, "Perez Maria"), (330, "maria@x.com"), (460, "+58 414-123-4567")],
        [(50, "2"), (70, "23456789"), (150, "Gomez Luis"), (330, "luis@x.com")],
        [(50, "3"), (70, "34567890"), (150, "Rivas Ana"), (330, "ana@x.com"), (460, "0414 555 1234")],
    ],
    [
        [(50, "Nivel: 19")],
        [(50, "Horario: B / 10:30 A 12:00 PM")],
        [(50, "1"), (70, "45678901"), (150, "Diaz Pedro"), (330, "pedro@x.com")],
        [(50, "2"), (70, "12345678"), (150, "Perez Maria Dup"), (330, "maria@x.com")],
    ],
]

NEW_PAGES = [
    [
        [(50, "Categoría: ADULTOS")],
        [(50, "Nivel: 6")],
        [(50, "Horario: 8:30 A 10:00 AM")],
        [(50, "1"), (70, "12345678"), (150, "Perez Maria"), (330, "maria@x.com")],
        [(50, "2"), (70, "99999999"), (150, "Nuevo Alumno"), (330, "nuevo@x.com")],
    ],
]


def write_pdf(path, pages, header=HEADER):
    doc = fitz.open()
    for rows in pages:
        page = doc.new_page()
        y = 60
        for line in header:
            page.insert_text((50, y), line, fontsize=10)
            y += 14
        for cells in rows:
            for x, text in cells:
                page.insert_text((x, y), text, fontsize=9)
            y += 14
    doc.save(str(path))
    doc.close()
    return str(path)


def write_blank_pdf(path):
    doc = fitz.open()
    page = doc.new_page()
    page.draw_rect(fitz.Rect(50, 50, 200, 200))
    doc.save(str(path))
    doc.close()
    return str(path)


def make_config(**overrides):
    values = dict(pdf_backend="pymupdf", line_gap_threshold=2.0, terminal_level="L19", verbose=False, max_workers=2)
    values.update(overrides)
    return RosterConfig(**values)


@pytest.fixture
def rosters(tmp_path):
    old = write_pdf(tmp_path / "adultos_2024-3.pdf", OLD_PAGES)
    new = write_pdf(tmp_path / "adultos_2025-1.pdf", NEW_PAGES)
    return old, new


def test_extract_lines_reading_order(rosters):
    print("\n[test] Testing line extraction...")
    old, _ = rosters
    lines = PdfExtractor().extract_lines(old)

    assert lines[0] == "CENTRO VENEZOLANO AMERICANO"
    assert "1 12345678 Perez Maria maria@x.com +58 414-123-4567" in lines
    # page separator after each page
    assert lines.count("") == 2
    assert lines[-1] == ""
    first_page = lines[: lines.index("")]
    assert first_page.index("Nivel: Level 5") < first_page.index("2 23456789 Gomez Luis luis@x.com")
    print(f"  [OK] {len(lines)} lines")


def test_parse_document(rosters):
    print("\n[test] Testing single document parsing...")
    old, _ = rosters
    students = CompareRostersUseCase(make_config()).parse_document(old)

    assert [s.id for s in students] == ["12345678", "23456789", "34567890", "45678901", "12345678"]
    maria = students[0]
    assert maria.name == "Perez Maria"
    assert maria.phone == "+584141234567"
    assert maria.category == "Adultos"
    assert maria.level_norm == "L05"
    assert maria.schedule_block == "8:30 AM - 10:00 AM"
    assert maria.course_id == "64161"
    assert students[2].phone == "04145551234"
    assert students[3].level_norm == "L19"
    assert students[3].schedule_block == "10:30 AM - 12:00 PM"
    print(f"  [OK] {len(students)} students")


def test_compare_pipeline(rosters):
    print("\n[test] Testing comparison pipeline...")
    old, new = rosters
    result = CompareRostersUseCase(make_config()).execute(old, new)

    assert result.total_old == 4
    assert result.total_new == 2
    assert result.graduated_old == 1
    assert result.eligible_old == 3
    assert result.reenrolled_count == 1
    assert result.lost_count == 2
    assert [s.id for s in result.lost] == ["23456789", "34567890"]
    assert result.reenrolled_pct == 33
    assert result.lost_pct == 67
    print(f"  [OK] lost={result.lost_count}")


def test_pipeline_is_deterministic(rosters):
    old, new = rosters
    use_case = CompareRostersUseCase(make_config())
    assert use_case.execute(old, new).to_dict() == use_case.execute(old, new).to_dict()


def test_bytes_input_matches_path_input(rosters):
    old, _ = rosters
    with open(old, "rb") as handle:
        data = handle.read()
    extractor = PdfExtractor()
    assert extractor.extract_lines(data) == extractor.extract_lines(old)


def test_pdfminer_backend(tmp_path):
    print("\n[test] Testing pdfminer backend...")
    rows = [
        [(50, "Categoria: Kids")],
        [(50, "Nivel: 3")],
        [(50, "1 12345678 Perez Maria maria@x.com 04141234567")],
        [(50, "2 23456789 Gomez Luis luis@x.com")],
    ]
    path = write_pdf(tmp_path / "roster.pdf", [rows])
    lines = PdfExtractor(backend="pdfminer").extract_lines(path)
    students = RosterParser().parse_lines(lines, "roster.pdf")

    assert [s.id for s in students] == ["12345678", "23456789"]
    assert students[0].email == "maria@x.com"
    assert students[0].phone == "04141234567"
    assert students[0].category == "Niños"
    assert students[1].level_norm == "L03"
    print("  [OK] pdfminer")


def test_scanned_pdf_yields_no_students(tmp_path):
    path = write_blank_pdf(tmp_path / "scan.pdf")
    extractor = PdfExtractor()
    lines = extractor.extract_lines(path)
    assert lines == [""]
    assert PdfExtractor.is_low_text_density(lines)
    assert CompareRostersUseCase(make_config()).parse_document(path) == []


def test_empty_roster_raises(tmp_path, rosters):
    old, _ = rosters
    blank = write_blank_pdf(tmp_path / "scan.pdf")
    with pytest.raises(EmptyRosterError) as info:
        CompareRostersUseCase(make_config()).execute(old, blank)
    assert info.value.old_count == 5
    assert info.value.new_count == 0


@pytest.mark.parametrize("backend", ["pymupdf", "pdfminer"])
def test_corrupt_pdf_raises_extraction_error(tmp_path, backend):
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"this is not a pdf document")
    with pytest.raises(ExtractionError):
        PdfExtractor(backend=backend).extract_lines(str(bad))
    with pytest.raises(ExtractionError):
        PdfExtractor(backend=backend).extract_lines(str(tmp_path / "missing.pdf"))


def test_unknown_backend_rejected():
    with pytest.raises(ValueError):
        PdfExtractor(backend="tesseract")


def test_load_config_from_env(monkeypatch):
    monkeypatch.setenv("PDF_BACKEND", "PDFMiner")
    monkeypatch.setenv("LINE_GAP_THRESHOLD", "not-a-number")
    monkeypatch.setenv("TERMINAL_LEVEL", "l12")
    monkeypatch.setenv("ROSTER_VERBOSE", "yes")
    monkeypatch.setenv("MAX_WORKERS", "0")
    config = load_config()
    assert config.pdf_backend == "pdfminer"
    assert config.line_gap_threshold == 2.0
    assert config.terminal_level == "L12"
    assert config.verbose is True
    assert config.max_workers == 1


def test_cli_compare_json(rosters, capsys, monkeypatch):
    monkeypatch.delenv("PDF_BACKEND", raising=False)
    monkeypatch.delenv("TERMINAL_LEVEL", raising=False)
    old, new = rosters
    code = cli_main(["compare", old, new, "--json", "--courses"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["stats"]["lost"] == 2
    assert [s["id"] for s in payload["lost"]] == ["23456789", "34567890"]
    assert payload["lost"][0]["levelNorm"] == "L05"
    assert payload["courses"] == []


def test_cli_compare_filters_and_text(rosters, capsys, monkeypatch):
    monkeypatch.delenv("PDF_BACKEND", raising=False)
    monkeypatch.delenv("TERMINAL_LEVEL", raising=False)
    old, new = rosters
    code = cli_main(["compare", old, new, "--search", "rivas"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Lost:             2 (67%)" in out
    assert "Students (1 shown):" in out
    assert "34567890" in out


def test_cli_parse(rosters, capsys):
    old, _ = rosters
    assert cli_main(["parse", old, "--json"]) == 0
    students = json.loads(capsys.readouterr().out)
    assert len(students) == 5
    assert students[0]["scheduleBlock"] == "8:30 AM - 10:00 AM"


def test_cli_errors(tmp_path, rosters, capsys):
    old, _ = rosters
    assert cli_main(["compare", old, str(tmp_path / "missing.pdf")]) == 2
    assert cli_main(["compare", old, old, "--terminal-level", "nineteen"]) == 2
    blank = write_blank_pdf(tmp_path / "scan.pdf")
    assert cli_main(["compare", old, blank]) == 2
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"garbage")
    assert cli_main(["compare", old, str(bad)]) == 1
    out = capsys.readouterr().out
    assert "[ERR]" in out


def main():
    """Run the integration tests through pytest."""
    return pytest.main([os.path.abspath(__file__), "-v"])


if __name__ == "__main__":
    exit(main())
