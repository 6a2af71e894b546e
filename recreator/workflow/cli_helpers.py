"""CLI helper functions for user interaction in the workflow.

This module provides utilities for displaying results and collecting the
user's edit of the analysis when the workflow pauses.
"""

import os
import shlex
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Optional

RULE = "=" * 70
THIN_RULE = "-" * 70


def _default_editor() -> str:
    return "notepad" if sys.platform.startswith("win") else "vi"


def edit_in_editor(text: str, editor: Optional[str] = None) -> str:
    """Open text in the user's editor and return the saved result.

    Uses $VISUAL, then $EDITOR, then a platform default.

    Args:
        text: Initial file content
        editor: Editor command override (may include arguments)

    Returns:
        File content after the editor exits

    Raises:
        RuntimeError: If the editor exits with a non-zero status
    """
    command = editor or os.environ.get("VISUAL") or os.environ.get("EDITOR") or _default_editor()

    with tempfile.NamedTemporaryFile(
        "w", suffix=".md", prefix="analysis-", encoding="utf-8", delete=False
    ) as handle:
        handle.write(text)
        path = Path(handle.name)

    try:
        completed = subprocess.run([*shlex.split(command), str(path)], check=False)
        if completed.returncode != 0:
            raise RuntimeError(f"Editor '{command}' exited with status {completed.returncode}")
        return path.read_text(encoding="utf-8")
    finally:
        path.unlink(missing_ok=True)


def display_analysis_for_editing(analysis_text: str) -> None:
    """Display the analysis before asking the user what to do with it."""
    print("\n" + RULE)
    print("🧩 ANALYSIS (editable)")
    print(RULE)
    print(f"\n{analysis_text}\n")
    print(RULE)


def prompt_analysis_edit(analysis_text: str) -> Optional[str]:
    """Ask the user to keep, edit or replace the analysis.

    Returns:
        None to keep the analysis unchanged, otherwise the new analysis text

    Raises:
        KeyboardInterrupt: If user cancels
    """
    print("\nOptions:")
    print("  1. Keep - Generate from this analysis")
    print("  2. Edit - Open the analysis in your editor")
    print("  3. Load - Replace the analysis with the contents of a file")
    print(RULE)

    while True:
        try:
            choice = input("\n👉 Enter your choice (1, 2 or 3): ").strip()

            if choice == "1":
                return None

            if choice == "2":
                edited = edit_in_editor(analysis_text)
                if not edited.strip():
                    print("❌ The analysis cannot be empty")
                    continue
                return edited

            if choice == "3":
                path = input("\n👉 Path to analysis file: ").strip()
                if not path:
                    print("❌ Please enter a path")
                    continue
                try:
                    loaded = Path(path).expanduser().read_text(encoding="utf-8")
                except OSError as e:
                    print(f"❌ Could not read file: {e}")
                    continue
                if not loaded.strip():
                    print("❌ The analysis cannot be empty")
                    continue
                return loaded

            print("❌ Please enter 1, 2 or 3")

        except KeyboardInterrupt:
            print("\n\n⚠️  Edit cancelled")
            raise


def display_generated_article(generated_article: dict) -> None:
    """Display the generated article and its title candidates.

    Args:
        generated_article: GeneratedArticle as a dict
    """
    print("\n" + RULE)
    print("📄 NEW ARTICLE")
    print(RULE)
    print(f"\n{generated_article.get('article', '')}\n")
    print(THIN_RULE)
    print(f"📊 Characters: {generated_article.get('char_count', 0)}")
    print(f"🧾 Output format: {generated_article.get('output_format', 'unknown')}")

    print("\n" + RULE)
    print("🏷️  TITLE CANDIDATES")
    print(RULE)
    titles = generated_article.get("titles") or []
    if titles:
        for idx, title in enumerate(titles, start=1):
            print(f"{idx}. {title}")
    else:
        print(generated_article.get("titles_text", ""))
    print(RULE)


def display_error(message: str) -> None:
    """Display error message on stderr."""
    print("\n" + RULE, file=sys.stderr)
    print("❌ ERROR", file=sys.stderr)
    print(RULE, file=sys.stderr)
    print(f"\n{message}", file=sys.stderr)
    print("\n" + RULE, file=sys.stderr)


def display_success(message: str) -> None:
    """Display success message in formatted style."""
    print("\n" + RULE)
    print("✅ SUCCESS")
    print(RULE)
    print(f"\n{message}")
    print("\n" + RULE)
