from pathlib import Path

from docpipe.inference.exceptions import InferenceError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt(name: str, prompt_dir: Path | None = None) -> str:
    """Load a prompt template by file name.

    Args:
        name: File name inside the prompt directory, e.g. "pdf_summary_user.txt".
        prompt_dir: Directory to read from. Defaults to the bundled prompts.

    Returns:
        The template text with trailing whitespace removed.

    Raises:
        InferenceError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / name
    try:
        return path.read_text(encoding="utf-8").rstrip()
    except OSError as exc:
        raise InferenceError(f"Failed to load prompt template: {exc}") from exc
