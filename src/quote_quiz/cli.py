"""
Console runner for the quote quiz.

Plays one session on stdin/stdout. Options are numbered; the player types
the number of the author they pick. Feedback is printed straight away and
the session advances without a pause.

Usage:
    quote-quiz --file phrases.json
    QUOTE_QUIZ_PHRASES='[{"phrase": "...", "author": "..."}]' quote-quiz
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, TextIO

from quote_quiz import __version__
from quote_quiz.loading import DEFAULT_ENV_VAR, ConfigProvider, EnvConfigProvider, FileConfigProvider
from quote_quiz.session import ImmediateScheduler, QuizSession, ScoreBand, SessionConfig

logger = logging.getLogger("quote_quiz")


BAND_MESSAGES = {
    ScoreBand.EXPERT: "Amazing! You're an expert!",
    ScoreBand.GOOD: "Well done! Keep it up!",
    ScoreBand.FAIR: "Good job! Practice some more!",
    ScoreBand.KEEP_STUDYING: "Keep studying!",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quote-quiz", description="Guess who said each quote.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--file", type=Path, help="Read phrases JSON from a file")
    source.add_argument(
        "--env-var", default=DEFAULT_ENV_VAR,
        help=f"Environment variable holding the phrases JSON (default: {DEFAULT_ENV_VAR})",
    )
    parser.add_argument("--options", type=int, help="Options per question (default: 4)")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible session")
    parser.add_argument("--dedupe", action="store_true", help="Never offer the same distractor twice")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _build_config(args: argparse.Namespace) -> SessionConfig:
    config = SessionConfig.from_env()
    overrides = {}
    if args.options is not None:
        overrides["options_count"] = args.options
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.dedupe:
        overrides["dedupe_distractors"] = True
    return replace(config, **overrides)


def _ask(options: List[str], stdin: TextIO, stdout: TextIO) -> Optional[str]:
    """Prompt until a valid option number is read; None on end of input."""
    while True:
        stdout.write(f"Your answer [1-{len(options)}]: ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            return None
        choice = line.strip()
        if choice.isdecimal() and 1 <= int(choice) <= len(options):
            return options[int(choice) - 1]
        stdout.write("Please enter one of the option numbers.\n")


def play(session: QuizSession, stdin: TextIO, stdout: TextIO) -> None:
    """Run a started session to the end (or until input runs out)."""
    while not session.is_finished:
        record = session.current_record
        options = session.current_options
        stdout.write(f"\nQuestion {session.current_position + 1}/{session.total}\n")
        stdout.write(f'"{record.text}"\n\nWho said it?\n')
        for i, option in enumerate(options, start=1):
            stdout.write(f"  {i}. {option}\n")

        answer = _ask(options, stdin, stdout)
        if answer is None:
            stdout.write("\nNo more input, stopping.\n")
            return

        result = session.submit_answer(answer)
        if result.correct:
            stdout.write("Correct!\n")
        else:
            stdout.write(f"Wrong, it was {result.correct_author}.\n")


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    try:
        config = _build_config(args)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    provider: ConfigProvider
    if args.file is not None:
        provider = FileConfigProvider(args.file)
    else:
        provider = EnvConfigProvider(args.env_var)

    session = QuizSession(provider, config=config, scheduler=ImmediateScheduler())
    session.start()
    if session.total == 0:
        stdout.write(f"No quotes could be loaded from {provider.describe()}.\n")
        return 1

    stdout.write(f"Quote quiz: {session.total} questions await!\n")
    play(session, stdin, stdout)

    summary = session.summary()
    stdout.write(f"\nFinal score: {summary.score}/{summary.total} ({summary.percentage}%)\n")
    stdout.write(BAND_MESSAGES[summary.band] + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
