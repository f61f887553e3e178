"""Tests for Kahoot spreadsheet export."""

import io

import pytest
from openpyxl import load_workbook

from src.errors import ExportError
from src.export.kahoot_template import (
    HEADERS,
    build_export_rows,
    export_filename,
    export_to_template,
    load_template,
    save_export,
)
from src.models.quiz import Answer, Question


def open_sheet(content: bytes):
    return load_workbook(io.BytesIO(content)).worksheets[0]


class TestBuildExportRows:
    """Test question to row mapping."""

    def test_maps_columns(self, sample_question):
        """Test every column of a four answer question."""
        rows = build_export_rows([sample_question], 20)

        assert rows == [
            {
                "B": "What is the capital of France?",
                "C": "Paris",
                "D": "London",
                "E": "Berlin",
                "F": "Madrid",
                "G": 20,
                "H": "1",
            }
        ]

    def test_missing_answers_are_empty(self):
        """Test two answer questions leave E and F blank."""
        question = Question(
            question_text="True or false?",
            answers=[Answer(text="True", is_correct=False), Answer(text="False", is_correct=True)],
        )

        row = build_export_rows([question], 10)[0]

        assert row["E"] == ""
        assert row["F"] == ""
        assert row["H"] == "2"

    def test_several_correct_answers(self):
        """Test correct positions are comma separated."""
        question = Question(
            question_text="Which are primes?",
            answers=[
                Answer(text="2", is_correct=True),
                Answer(text="4", is_correct=False),
                Answer(text="3", is_correct=True),
                Answer(text="6", is_correct=False),
            ],
        )

        assert build_export_rows([question], 20)[0]["H"] == "1,3"


class TestExportToTemplate:
    """Test writing into the template workbook."""

    def test_writes_from_b9(self, sample_questions, template_bytes):
        """Test rows start at B9 in question order."""
        sheet = open_sheet(export_to_template(sample_questions[:3], 30, template_bytes))

        assert sheet["B9"].value == "Question number 0?"
        assert sheet["B10"].value == "Question number 1?"
        assert sheet["B11"].value == "Question number 2?"
        assert sheet["C9"].value == "Right"
        assert sheet["F11"].value == "Wrong 3"
        assert sheet["G10"].value == 30
        assert sheet["H11"].value == "1"
        assert sheet["B12"].value is None

    def test_template_rows_untouched(self, sample_questions, template_bytes):
        """Test the header row and row numbers are preserved."""
        sheet = open_sheet(export_to_template(sample_questions, 20, template_bytes))

        for column, text in HEADERS.items():
            assert sheet[f"{column}8"].value == text
        assert sheet["A9"].value == 1

    def test_missing_answers_written_blank(self, template_bytes):
        """Test blank answer cells for two answer questions."""
        question = Question(
            question_text="True or false?",
            answers=[Answer(text="True", is_correct=True), Answer(text="False", is_correct=False)],
        )

        sheet = open_sheet(export_to_template([question], 20, template_bytes))

        assert sheet["E9"].value in (None, "")
        assert sheet["F9"].value in (None, "")

    def test_long_text_is_not_truncated(self, question_factory, template_bytes):
        """Test over-limit text is written as is."""
        long_text = "x" * 200
        sheet = open_sheet(export_to_template([question_factory(long_text)], 20, template_bytes))

        assert sheet["B9"].value == long_text

    def test_empty_question_list(self, template_bytes):
        """Test nothing is written below the header."""
        sheet = open_sheet(export_to_template([], 20, template_bytes))
        assert sheet["B9"].value is None

    def test_bad_template_raises(self, sample_questions):
        """Test unreadable templates raise ExportError."""
        with pytest.raises(ExportError):
            export_to_template(sample_questions, 20, b"not a spreadsheet")


class TestFilesOnDisk:
    """Test filenames and saving."""

    def test_filename(self):
        """Test the name and count are in the filename."""
        assert export_filename("World History", 10) == "World History_10-questions.xlsx"

    def test_filename_truncates_name(self):
        """Test only the first 30 characters of the name are used."""
        assert export_filename("a" * 40, 3) == "a" * 30 + "_3-questions.xlsx"

    def test_save_export(self, sample_questions, tmp_path):
        """Test the file is written with the built-in layout."""
        path = save_export(sample_questions, 20, "Space", output_dir=str(tmp_path / "out"))

        assert path == tmp_path / "out" / "Space_5-questions.xlsx"
        assert open_sheet(path.read_bytes())["B13"].value == "Question number 4?"

    def test_save_export_sanitises_separators(self, sample_questions, tmp_path):
        """Test a topic with slashes stays inside the output directory."""
        path = save_export(sample_questions, 20, "AC/DC", output_dir=str(tmp_path))

        assert path.parent == tmp_path
        assert path.name == "AC-DC_5-questions.xlsx"

    def test_save_export_bad_template_writes_nothing(self, sample_questions, tmp_path):
        """Test a template error leaves no file behind."""
        with pytest.raises(ExportError):
            save_export(sample_questions, 20, "Space", b"junk", output_dir=str(tmp_path))

        assert list(tmp_path.iterdir()) == []

    def test_load_template_missing_file(self, tmp_path):
        """Test a missing template raises ExportError."""
        with pytest.raises(ExportError):
            load_template(tmp_path / "missing.xlsx")
