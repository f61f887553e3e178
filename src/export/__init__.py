"""Export functionality for quiz spreadsheets."""

from .kahoot_template import (
    create_blank_template,
    export_filename,
    export_to_template,
    save_export,
)

__all__ = ["export_to_template", "export_filename", "save_export", "create_blank_template"]
