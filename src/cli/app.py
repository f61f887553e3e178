"""Typer CLI application for quiz generation."""

from pathlib import Path
from typing import Optional

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from src.agents.titler import generate_title
from src.config.logging import configure_logging
from src.config.settings import Settings, get_settings
from src.errors import QuizAideError
from src.export.kahoot_template import load_template, save_export
from src.graph.workflow import run_generation
from src.models.quiz import (
    ANSWER_CHAR_LIMIT,
    DEFAULT_TIME_LIMIT,
    MODELS,
    QUESTION_CHAR_LIMIT,
    TIME_LIMITS,
    DifficultyLevel,
    GenerationConfig,
    Question,
    exceeds_limit,
)

app = typer.Typer(
    name="quiz-aide",
    help="AI quiz generator with Kahoot spreadsheet export",
    add_completion=False,
)

console = Console()

QUESTION_LIST = TypeAdapter(list[Question])

REQUIRED_CREDENTIALS = {
    "azure": ("azure_openai_api_key", "AZURE_OPENAI_API_KEY"),
    "openai": ("openai_api_key", "OPENAI_API_KEY"),
    "anthropic": ("anthropic_api_key", "ANTHROPIC_API_KEY"),
}


def missing_credential(settings: Settings) -> str | None:
    """Name of the environment variable the configured provider still needs, if any."""
    required = REQUIRED_CREDENTIALS.get(settings.llm_provider)
    if required is None:
        # Bedrock uses the standard AWS credential chain
        return None
    field, env_name = required
    if not getattr(settings, field):
        return env_name
    if settings.llm_provider == "azure" and not settings.azure_openai_endpoint:
        return "AZURE_OPENAI_ENDPOINT"
    return None


@app.command()
def generate(
    topic: str = typer.Option(
        ...,
        "--topic",
        "-t",
        help="Quiz topic",
    ),
    questions: int = typer.Option(
        10,
        "--questions",
        "-q",
        help="Number of questions to generate",
        min=1,
        max=50,
        clamp=True,
    ),
    difficulty: DifficultyLevel = typer.Option(
        DifficultyLevel.COLLEGE,
        "--difficulty",
        "-d",
        help="Audience level",
        case_sensitive=False,
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help=f"Model id ({', '.join(MODELS.values())})",
    ),
    time_limit: int = typer.Option(
        DEFAULT_TIME_LIMIT,
        "--time-limit",
        help=f"Seconds per question ({', '.join(map(str, TIME_LIMITS))})",
    ),
    signed_in: bool = typer.Option(
        True,
        "--signed-in/--anonymous",
        help="Anonymous sessions always use the economy model",
    ),
    title: Optional[str] = typer.Option(
        None,
        "--title",
        help="Quiz name used for the exported file",
    ),
    suggest_title: bool = typer.Option(
        False,
        "--suggest-title",
        help="Ask the model for a title when --title is not given",
    ),
    template: Optional[Path] = typer.Option(
        None,
        "--template",
        help="Kahoot template .xlsx (built-in layout if omitted)",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the exported spreadsheet",
    ),
    save_json: Optional[Path] = typer.Option(
        None,
        "--save-json",
        help="Also write the generated questions to this JSON file",
    ),
) -> None:
    """
    Generate a quiz and export it as a Kahoot spreadsheet.

    Example:
        quiz-aide generate -t "World History" -q 15 -d college --time-limit 30
    """
    settings = get_settings()

    missing = missing_credential(settings)
    if missing:
        console.print(
            f"[red]Error:[/red] {missing} environment variable not set.",
            style="bold",
        )
        console.print(f"\nPlease set it:\n  export {missing}='your-value-here'")
        raise typer.Exit(code=1)

    try:
        config = GenerationConfig.for_caller(
            topic,
            authenticated=signed_in,
            requested_model=model,
            difficulty=difficulty,
            number_of_questions=questions,
            time_limit=time_limit,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid options:[/red] {e}", style="bold")
        raise typer.Exit(code=1)

    display_config(config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("[cyan]Generating questions...", total=100)

        def on_progress(percent: float, state) -> None:
            progress.update(task, completed=percent)

        final_state = run_generation(config, on_progress=on_progress)
        progress.update(task, description="[green]Generation complete!")

    generated = final_state["questions"]
    for error in final_state["errors"]:
        console.print(f"[yellow]Skipped:[/yellow] {error}")

    if not generated:
        console.print(
            "[red]Error:[/red] Quiz generation failed - no questions produced.",
            style="bold",
        )
        raise typer.Exit(code=1)

    display_questions(generated)

    if save_json is not None:
        save_json.write_bytes(QUESTION_LIST.dump_json(generated, indent=2))
        console.print(f"[green]✓[/green] Questions saved to: {save_json}")

    name = title
    if name is None and suggest_title:
        name = generate_title(config.topic, [q.question_text for q in generated])
    name = name or config.topic

    export_questions(generated, config.time_limit, name, template, output_dir, settings)


@app.command()
def export(
    questions_file: Path = typer.Argument(
        ...,
        help="JSON file with a list of questions (as written by --save-json)",
    ),
    name: str = typer.Option(
        ...,
        "--name",
        "-n",
        help="Quiz name used for the exported file",
    ),
    time_limit: int = typer.Option(
        DEFAULT_TIME_LIMIT,
        "--time-limit",
        help=f"Seconds per question ({', '.join(map(str, TIME_LIMITS))})",
    ),
    template: Optional[Path] = typer.Option(
        None,
        "--template",
        help="Kahoot template .xlsx (built-in layout if omitted)",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the exported spreadsheet",
    ),
) -> None:
    """Export previously saved questions as a Kahoot spreadsheet."""
    if time_limit not in TIME_LIMITS:
        console.print(
            f"[red]Error:[/red] time limit must be one of {', '.join(map(str, TIME_LIMITS))}",
            style="bold",
        )
        raise typer.Exit(code=1)

    try:
        questions = QUESTION_LIST.validate_json(questions_file.read_bytes())
    except (OSError, ValidationError) as e:
        console.print(f"[red]Could not read questions:[/red] {e}", style="bold")
        raise typer.Exit(code=1)

    display_questions(questions)
    export_questions(questions, time_limit, name, template, output_dir, get_settings())


@app.command()
def info() -> None:
    """Display information about the quiz generator."""
    settings = get_settings()
    info_text = f"""
[bold cyan]Quiz Aide[/bold cyan]
Version: 0.1.0

[bold]Pipeline:[/bold]
  • Generator - One question per model call, avoiding earlier questions
  • Editor - Change, delete, move or regenerate single questions
  • Exporter - Fills the Kahoot spreadsheet template from row 9

[bold]Difficulty levels:[/bold] {", ".join(level.label for level in DifficultyLevel)}
[bold]Time limits:[/bold] {", ".join(map(str, TIME_LIMITS))} seconds
[bold]Models:[/bold] {", ".join(MODELS.values())}
[bold]Provider:[/bold] {settings.llm_provider}
    """
    console.print(Panel(info_text, title="Quiz Aide Info", border_style="cyan"))


def export_questions(
    questions: list[Question],
    time_limit: int,
    name: str,
    template: Optional[Path],
    output_dir: Optional[str],
    settings: Settings,
) -> Path:
    """Write the spreadsheet and report where it went."""
    console.print("\n[cyan]Exporting to Kahoot spreadsheet...[/cyan]")

    template_path = template or settings.kahoot_template_path
    try:
        template_bytes = load_template(template_path) if template_path else None
        output_file = save_export(
            questions,
            time_limit,
            name,
            template_bytes=template_bytes,
            output_dir=output_dir or settings.default_output_dir,
        )
    except QuizAideError as e:
        console.print(f"\n[red]Error during export:[/red] {e}", style="bold")
        raise typer.Exit(code=1)

    console.print(f"\n[green]✓[/green] Quiz exported to: {output_file}")
    return output_file


def display_config(config: GenerationConfig) -> None:
    """Display the configuration before generation."""
    table = Table(title="Quiz Configuration", show_header=False, border_style="cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Topic", config.topic)
    table.add_row("Questions", str(config.number_of_questions))
    table.add_row("Difficulty", config.difficulty.label)
    table.add_row("Model", config.model)
    table.add_row("Time limit", f"{config.time_limit}s")

    console.print()
    console.print(table)


def display_questions(questions: list[Question]) -> None:
    """Display the questions and flag any that are over Kahoot's limits."""
    table = Table(title="Questions", border_style="green")
    table.add_column("#", style="cyan")
    table.add_column("Question", style="white")
    table.add_column("Correct", style="green")

    for i, question in enumerate(questions, 1):
        text = question.question_text
        if exceeds_limit(question):
            text = f"[yellow]{text}[/yellow]"
        correct = ", ".join(a.text for a in question.answers if a.is_correct)
        table.add_row(str(i), text, correct)

    console.print()
    console.print(table)

    over_limit = [i for i, q in enumerate(questions, 1) if exceeds_limit(q)]
    if over_limit:
        console.print(
            f"[yellow]Warning:[/yellow] questions {', '.join(map(str, over_limit))} are over "
            f"{QUESTION_CHAR_LIMIT} characters or have answers over {ANSWER_CHAR_LIMIT}; "
            "Kahoot will cut them short."
        )


@app.callback()
def callback() -> None:
    """
    Quiz Aide - Generate quizzes with AI and export them to Kahoot.
    """
    configure_logging(get_settings().log_level)


if __name__ == "__main__":
    app()
