import json
import shutil
from pathlib import Path

import pytest

from degree_planner.cli import main
from degree_planner.data import DataLoader

SAMPLE_DATA = Path(__file__).resolve().parent.parent / "data"


@pytest.fixture
def data_dir(tmp_path):
    target = tmp_path / "data"
    shutil.copytree(SAMPLE_DATA, target)
    return target


def test_progress_command(data_dir, capsys):
    code = main(["--data-dir", str(data_dir), "progress", "--student", "student-1", "--program", "bs-business"])

    out = capsys.readouterr().out
    assert code == 0
    assert "DEGREE PROGRESS" in out
    assert "BUS-UL" in out


def test_plan_preview_does_not_write(data_dir, capsys):
    before = (data_dir / "enrollments" / "student-1.json").read_text()

    code = main(["--data-dir", str(data_dir), "plan", "--student", "student-1"])

    out = capsys.readouterr().out
    assert code == 0
    assert "TEMPLATE PREVIEW" in out
    assert "already enrolled" in out
    assert (data_dir / "enrollments" / "student-1.json").read_text() == before


def test_plan_commit_then_replan(data_dir, capsys):
    args = ["--data-dir", str(data_dir), "plan", "--student", "student-1",
            "--template", "business-core", "--commit"]

    assert main(args) == 0
    ledger = DataLoader(data_dir).load_enrollments("student-1")
    # BUS 101 was already on the ledger; the other three courses are added
    assert len(ledger) == 8
    assert [e.course_code for e in ledger[5:]] == ["ACC 101", "ECON 201", "BUS 301"]

    capsys.readouterr()
    assert main(args) == 0
    assert "Assigned:\x1b[0m 0" in capsys.readouterr().out
    assert len(DataLoader(data_dir).load_enrollments("student-1")) == 8


def test_templates_command(data_dir, capsys):
    assert main(["--data-dir", str(data_dir), "templates"]) == 0
    out = capsys.readouterr().out
    assert "business-core" in out
    assert "(default)" in out


def test_normalize_command(data_dir):
    assert main(["--data-dir", str(data_dir), "normalize"]) == 0

    cleaned = json.loads((data_dir / "catalog_clean.json").read_text())
    assert len(cleaned) == 4
    assert cleaned[1]["title"] == "Math 201: Linear Algebra"


def test_unknown_program_exits_nonzero(data_dir, capsys):
    code = main(["--data-dir", str(data_dir), "progress", "--student", "student-1", "--program", "nope"])

    assert code == 1
    assert "Unknown program" in capsys.readouterr().out


def test_unknown_template_exits_nonzero(data_dir):
    assert main(["--data-dir", str(data_dir), "plan", "--student", "student-1", "--template", "nope"]) == 1


def test_programs_command(data_dir, capsys):
    assert main(["--data-dir", str(data_dir), "programs"]) == 0
    out = capsys.readouterr().out
    assert "bs-business" in out
    assert "BS Business Administration" in out


def test_add_command_appends_to_ledger(data_dir, capsys):
    code = main(["--data-dir", str(data_dir), "add", "--student", "student-1",
                 "--provider", "sophia", "--code", "BUS 410", "--title", "Strategy",
                 "--credits", "3", "--area", "Business", "--status", "completed"])

    assert code == 0
    assert "ENROLLMENT ADDED" in capsys.readouterr().out
    ledger = DataLoader(data_dir).load_enrollments("student-1")
    assert len(ledger) == 6
    added = ledger[-1]
    assert added.course_code == "BUS 410"
    assert added.student_id == "student-1"
    assert added.status.value == "completed"
    # Level comes from the course number when not given
    assert added.is_upper_level is True


def test_add_command_rejects_out_of_range_credits(data_dir, capsys):
    before = (data_dir / "enrollments" / "student-1.json").read_text()

    code = main(["--data-dir", str(data_dir), "add", "--student", "student-1",
                 "--provider", "sophia", "--code", "BUS 410", "--credits", "9"])

    assert code == 1
    assert "credits must be between" in capsys.readouterr().out
    assert (data_dir / "enrollments" / "student-1.json").read_text() == before


def test_malformed_data_file_exits_nonzero(data_dir, capsys):
    (data_dir / "programs.json").write_text("{not json")

    code = main(["--data-dir", str(data_dir), "progress", "--student", "student-1", "--program", "bs-business"])

    assert code == 1
    assert "Error:" in capsys.readouterr().out


def test_non_object_catalog_row_exits_nonzero(data_dir):
    (data_dir / "catalog_raw.json").write_text(json.dumps([{"title": "Math 101: Algebra"}, "oops"]))

    assert main(["--data-dir", str(data_dir), "normalize"]) == 1
    assert not (data_dir / "catalog_clean.json").exists()
