"""
RedNote Re-Creator - two-stage article re-creation from the command line.

Commands:
    analyze   Stage 1: structured analysis of a source article
    generate  Stage 2: article + title candidates from an analysis
    run       Both stages, pausing so the analysis can be edited
    prompts   List or print the registered prompt templates
"""

import argparse
import asyncio
import inspect
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from recreator.agents.analyzer import analyze_source
from recreator.agents.writer import generate_article
from recreator.integrations.prompts import (
    GENERATION_PROMPTS,
    LATEST_GENERATION_PROMPT_VERSION,
    PROMPT_REGISTRY,
)
from recreator.utils.logging_config import setup_logging
from recreator.workflow.cli_helpers import (
    display_analysis_for_editing,
    display_error,
    display_generated_article,
    display_success,
    prompt_analysis_edit,
)
from recreator.workflow.runner import run_workflow

ARTICLE_FILENAME = "article.md"
TITLES_FILENAME = "titles.txt"
ANALYSIS_FILENAME = "analysis.md"

logger = logging.getLogger(__name__)


def read_text_input(path: str) -> str:
    """Read UTF-8 text from a file path, or from stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()

    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return file_path.read_text(encoding="utf-8")


def write_outputs(out_dir: str, generated_article: dict, analysis_text: str | None = None) -> Path:
    """Write article, titles and (optionally) the analysis used to out_dir."""
    output_path = Path(out_dir).expanduser()
    output_path.mkdir(parents=True, exist_ok=True)

    (output_path / ARTICLE_FILENAME).write_text(
        generated_article["article"] + "\n", encoding="utf-8"
    )
    (output_path / TITLES_FILENAME).write_text(
        generated_article["titles_text"] + "\n", encoding="utf-8"
    )
    if analysis_text is not None:
        (output_path / ANALYSIS_FILENAME).write_text(analysis_text + "\n", encoding="utf-8")

    return output_path


def interactive_edit(analysis_text: str) -> str | None:
    """Edit callback for the workflow runner."""
    display_analysis_for_editing(analysis_text)
    return prompt_analysis_edit(analysis_text)


async def handle_analyze(args: argparse.Namespace) -> int:
    """Handle analysis-only command"""
    source_text = read_text_input(args.source)
    result = await analyze_source(source_text, model=args.model)

    if args.out:
        Path(args.out).expanduser().write_text(result.content + "\n", encoding="utf-8")
        display_success(f"Analysis saved to {args.out} ({result.char_count} chars)")
    else:
        print(result.content)

    return 1 if result.is_placeholder else 0


async def handle_generate(args: argparse.Namespace) -> int:
    """Handle generation-only command"""
    analysis_text = read_text_input(args.analysis)
    generated = await generate_article(
        analysis_text,
        prompt_version=args.prompt_version,
        model=args.model,
    )
    article = asdict(generated)

    display_generated_article(article)
    if args.out_dir:
        output_path = write_outputs(args.out_dir, article)
        display_success(f"Results saved to {output_path}")

    return 0


async def handle_run(args: argparse.Namespace) -> int:
    """Handle full two-stage workflow command"""
    if args.source == "-" and not args.no_edit:
        # stdin is consumed by the source text; nothing left to answer prompts
        raise ValueError("Reading the source from stdin requires --no-edit")
    source_text = read_text_input(args.source)

    final_state = await run_workflow(
        source_text,
        edit_callback=None if args.no_edit else interactive_edit,
        prompt_version=args.prompt_version,
    )

    if final_state.get("current_step") != "completed":
        errors = final_state.get("errors") or ["Workflow did not complete"]
        display_error("\n".join(errors))
        return 1

    generated_article = final_state["generated_article"]
    display_generated_article(generated_article)

    if args.out_dir:
        output_path = write_outputs(
            args.out_dir, generated_article, final_state.get("analysis_text")
        )
        display_success(f"Results saved to {output_path}")

    return 0


def handle_prompts(args: argparse.Namespace) -> int:
    """Handle prompt listing command"""
    if args.show:
        if args.show not in PROMPT_REGISTRY:
            raise ValueError(
                f"Unknown prompt: {args.show}. Available: {', '.join(sorted(PROMPT_REGISTRY))}"
            )
        print(PROMPT_REGISTRY[args.show].strip())
        return 0

    for name in sorted(PROMPT_REGISTRY):
        print(f"{name} ({len(PROMPT_REGISTRY[name])} chars)")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser"""
    parser = argparse.ArgumentParser(
        prog="recreator",
        description="Two-stage article re-creation: analyze, edit, generate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit logs as JSON lines"
    )
    subparsers = parser.add_subparsers(
        dest="command", required=True, help="Available commands"
    )

    # Common arguments for commands that call the model
    llm_parent = argparse.ArgumentParser(add_help=False)
    llm_parent.add_argument(
        "--model", type=str, default=None, help="Override the configured model ID"
    )

    generation_parent = argparse.ArgumentParser(add_help=False)
    generation_parent.add_argument(
        "--prompt-version",
        type=int,
        default=LATEST_GENERATION_PROMPT_VERSION,
        choices=sorted(GENERATION_PROMPTS),
        help="Generation prompt version (1: ===TITLES=== separator, 2: tags)",
    )
    generation_parent.add_argument(
        "--out-dir", type=str, default=None, help="Directory for article.md and titles.txt"
    )

    parser_analyze = subparsers.add_parser(
        "analyze", parents=[llm_parent], help="Run the analysis stage only"
    )
    parser_analyze.add_argument(
        "--source", type=str, required=True, help="Source article file ('-' for stdin)"
    )
    parser_analyze.add_argument(
        "--out", type=str, default=None, help="Write the analysis to this file"
    )
    parser_analyze.set_defaults(func=handle_analyze)

    parser_generate = subparsers.add_parser(
        "generate",
        parents=[llm_parent, generation_parent],
        help="Run the generation stage from an analysis file",
    )
    parser_generate.add_argument(
        "--analysis", type=str, required=True, help="Analysis file ('-' for stdin)"
    )
    parser_generate.set_defaults(func=handle_generate)

    parser_run = subparsers.add_parser(
        "run",
        parents=[generation_parent],
        help="Run both stages with an edit pause in between",
    )
    parser_run.add_argument(
        "--source", type=str, required=True, help="Source article file ('-' for stdin)"
    )
    parser_run.add_argument(
        "--no-edit", action="store_true", help="Generate without pausing to edit the analysis"
    )
    parser_run.set_defaults(func=handle_run)

    parser_prompts = subparsers.add_parser("prompts", help="List or print prompt templates")
    parser_prompts.add_argument(
        "--show", type=str, default=None, help="Print the named prompt template"
    )
    parser_prompts.set_defaults(func=handle_prompts)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        if args.command != "prompts":
            setup_logging(use_json=args.json_logs)

        if inspect.iscoroutinefunction(args.func):
            return asyncio.run(args.func(args))
        return args.func(args)
    except KeyboardInterrupt:
        display_error("Cancelled")
        return 130
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        display_error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
