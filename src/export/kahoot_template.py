"""Kahoot spreadsheet export.

Questions are written into the first sheet of the Kahoot import template,
one row per question starting at B9:

    B  question text
    C  answer 1
    D  answer 2
    E  answer 3 ("" if missing)
    F  answer 4 ("" if missing)
    G  time limit in seconds
    H  1-based positions of the correct answers, comma separated

Rows above 9 belong to the template and are left alone.
"""

import io
import logging
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils.exceptions import InvalidFileException

from src.errors import ExportError
from src.models.quiz import ANSWER_CHAR_LIMIT, QUESTION_CHAR_LIMIT, TIME_LIMITS, Question

logger = logging.getLogger(__name__)

ORIGIN_COLUMN = "B"
ORIGIN_ROW = 9
HEADER_ROW = 8
COLUMNS = ("B", "C", "D", "E", "F", "G", "H")
MAX_NAME_LENGTH = 30

HEADERS = {
    "B": f"Question - max {QUESTION_CHAR_LIMIT} characters",
    "C": f"Answer 1 - max {ANSWER_CHAR_LIMIT} characters",
    "D": f"Answer 2 - max {ANSWER_CHAR_LIMIT} characters",
    "E": f"Answer 3 - max {ANSWER_CHAR_LIMIT} characters",
    "F": f"Answer 4 - max {ANSWER_CHAR_LIMIT} characters",
    "G": "Time limit (sec) - " + ", ".join(map(str, TIME_LIMITS[:-1])) + f", or {TIME_LIMITS[-1]} secs",
    "H": "Correct answer(s) - choose at least one",
}


def build_export_rows(questions: list[Question], time_limit: int) -> list[dict[str, str | int]]:
    """
    Map questions to template rows keyed by column letter.

    Args:
        questions: Questions in quiz order (not modified)
        time_limit: Seconds per question

    Returns:
        One dict per question with keys B to H
    """
    rows = []
    for question in questions:
        answer_texts = [answer.text for answer in question.answers]
        answer_texts += [""] * (4 - len(answer_texts))

        rows.append(
            {
                "B": question.question_text,
                "C": answer_texts[0],
                "D": answer_texts[1],
                "E": answer_texts[2],
                "F": answer_texts[3],
                "G": time_limit,
                "H": ",".join(str(p) for p in question.correct_positions),
            }
        )
    return rows


def export_to_template(questions: list[Question], time_limit: int, template_bytes: bytes) -> bytes:
    """
    Fill the Kahoot template with questions.

    Character limits are not enforced here; over-long text is written as is.

    Args:
        questions: Questions in quiz order
        time_limit: Seconds per question
        template_bytes: Contents of the .xlsx template

    Returns:
        Contents of the filled workbook

    Raises:
        ExportError: If the template cannot be read
    """
    try:
        workbook = load_workbook(io.BytesIO(template_bytes))
    except (InvalidFileException, BadZipFile, KeyError, OSError, ValueError) as e:
        raise ExportError(f"Could not load spreadsheet template: {e}") from e

    if not workbook.worksheets:
        raise ExportError("Spreadsheet template has no sheets")
    sheet = workbook.worksheets[0]

    for offset, row in enumerate(build_export_rows(questions, time_limit)):
        row_number = ORIGIN_ROW + offset
        for column in COLUMNS:
            sheet[f"{column}{row_number}"] = row[column]

    output = io.BytesIO()
    workbook.save(output)
    logger.debug("Wrote %d questions to template sheet %r", len(questions), sheet.title)
    return output.getvalue()


def export_filename(name: str, question_count: int) -> str:
    """
    Name for the exported spreadsheet.

    Args:
        name: Quiz name or topic (first 30 characters are used)
        question_count: Number of questions exported

    Returns:
        Filename such as "World History_10-questions.xlsx"
    """
    return f"{name[:MAX_NAME_LENGTH]}_{question_count}-questions.xlsx"


def load_template(path: str | Path) -> bytes:
    """
    Read template bytes from disk.

    Raises:
        ExportError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ExportError(f"Could not read spreadsheet template {path}: {e}") from e


def create_blank_template() -> bytes:
    """
    Build a workbook with the Kahoot import layout.

    Used when no template file is configured. Row 8 holds the column headers
    and question rows start at row 9.

    Returns:
        Contents of the .xlsx workbook
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Sheet1"

    sheet["B2"] = "Quiz template"
    sheet["B2"].font = Font(bold=True, size=16)
    sheet["B4"] = "Add questions, at least two answer alternatives, time limit and choose correct answers (at least one)."
    sheet["B5"] = "Have fun creating your awesome quiz!"
    sheet["B6"] = "Remember: questions have a limit of 120 characters and answers can have 75 characters max."

    header_fill = PatternFill(start_color="46178F", end_color="46178F", fill_type="solid")
    for column, text in HEADERS.items():
        cell = sheet[f"{column}{HEADER_ROW}"]
        cell.value = text
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = header_fill
        cell.alignment = Alignment(wrap_text=True, vertical="center")

    for number in range(1, 101):
        sheet[f"A{HEADER_ROW + number}"] = number

    sheet.column_dimensions["A"].width = 6
    sheet.column_dimensions["B"].width = 50
    for column in "CDEF":
        sheet.column_dimensions[column].width = 25
    sheet.column_dimensions["G"].width = 16
    sheet.column_dimensions["H"].width = 16

    output = io.BytesIO()
    workbook.save(output)
    return output.getvalue()


def ensure_output_directory(output_dir: str = "output") -> Path:
    """
    Ensure the output directory exists.

    Args:
        output_dir: Directory path to create

    Returns:
        Path object for the output directory
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path


def save_export(
    questions: list[Question],
    time_limit: int,
    name: str,
    template_bytes: bytes | None = None,
    output_dir: str = "output",
) -> Path:
    """
    Export questions and write the spreadsheet into output_dir.

    The workbook is built completely in memory before anything is written,
    so a template error leaves no file behind.

    Args:
        questions: Questions in quiz order
        time_limit: Seconds per question
        name: Quiz name or topic used for the filename
        template_bytes: Template contents (built-in layout if omitted)
        output_dir: Directory to save the file in

    Returns:
        Path of the written file
    """
    if template_bytes is None:
        template_bytes = create_blank_template()

    content = export_to_template(questions, time_limit, template_bytes)

    # keep path separators in a topic from escaping output_dir
    safe_name = name.replace("/", "-").replace("\\", "-")
    output_path = ensure_output_directory(output_dir) / export_filename(safe_name, len(questions))
    output_path.write_bytes(content)
    return output_path
