"""
dictagger — command-line tagger.

Usage:
    dictagger -d dicts/*.tsv -i notes.txt                  # IOB, colored
    dictagger -d genes.tsv -i "corpus/*.txt" -f bioes      # BIOES
    dictagger -d genes.tsv -i a.txt,b.txt --plain -s       # CoNLL-style, no logs
    dictagger -d genes.tsv -i a.txt -m standard -c true    # tagger options
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Optional

from dictagger import __version__
from dictagger.dictionary import MIN_TERM_LENGTH, Dictionary, expand_globs
from dictagger.errors import DictaggerError
from dictagger.logging import disable_logging, get_logger, setup_logging
from dictagger.matcher import MatchKind
from dictagger.render import Renderer
from dictagger.tagger import Tagger, iter_lines

logger = get_logger("cli")

FORMATS = ["iob", "IOB", "bioes", "BIOES"]


def _bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered not in ("true", "false"):
        raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")
    return lowered == "true"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dictagger",
        description="A BIOES / IOB dictionary tagger",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-d", "--dictionary", "--dictionaries",
        dest="dictionary",
        nargs="+",
        action="extend",
        required=True,
        metavar="FILE",
        help="Dictionaries (TSV: term<TAB>class). Glob patterns are expanded.",
    )
    parser.add_argument(
        "-i", "--input",
        nargs="+",
        action="extend",
        required=True,
        metavar="FILE",
        help="Input files, comma separated or repeated. Glob patterns are expanded.",
    )
    parser.add_argument(
        "-f", "--format",
        default="iob",
        choices=FORMATS,
        help="Output format (default: iob)",
    )
    parser.add_argument(
        "-v",
        dest="verbose",
        action="count",
        default=0,
        help="Sets the level of verbosity",
    )
    parser.add_argument(
        "-s", "--silent",
        action="store_true",
        help="Hides log information",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Disable colors (one '<token> <tag>' pair per line)",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        default="text",
        help="Log line format (default: text)",
    )

    tagger = parser.add_argument_group("tagger", "controls tagger features")
    tagger.add_argument(
        "-c", "--case_sensitive", "--case-sensitive",
        dest="case_sensitive",
        type=_bool,
        default=False,
        metavar="BOOL",
        help="Enables/Disables the case sensitivity of the tagger (default: false)",
    )
    tagger.add_argument(
        "-w", "--word_matching", "--word-matching",
        dest="word_matching",
        type=_bool,
        default=True,
        metavar="BOOL",
        help="Enables/Disables word matching (default: true)",
    )
    tagger.add_argument(
        "-m", "--match_kind", "--match-kind",
        dest="match_kind",
        default=MatchKind.LEFTMOST_LONGEST.value,
        choices=[k.value for k in MatchKind],
        help="Sets tagging match kind (default: leftmostlongest)",
    )
    tagger.add_argument(
        "--min-term-length",
        type=int,
        default=MIN_TERM_LENGTH,
        metavar="N",
        help=f"Skip dictionary terms shorter than N characters (default: {MIN_TERM_LENGTH})",
    )
    return parser


def split_inputs(values: list[str]) -> list[str]:
    """Flatten repeated and comma-delimited input arguments."""
    return [part for value in values for part in value.split(",") if part]


def tag_file(path: Path, tagger: Tagger, renderer: Renderer) -> int:
    """Tag every line of one file. Returns the number of lines tagged."""
    content = path.read_text(encoding="utf-8")
    count = 0
    for line in iter_lines(content):
        renderer.write(tagger.annotate(line, renderer.scheme))
        count += 1
    renderer.blank()
    return count


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.silent:
        disable_logging()
    else:
        setup_logging(level="DEBUG" if args.verbose else "INFO", fmt=args.log_format)

    dictionaries = expand_globs(args.dictionary)
    if not dictionaries:
        print("Error: no dictionary matched " + ", ".join(args.dictionary), file=sys.stderr)
        return 1

    try:
        dictionary = Dictionary.from_files(dictionaries, args.min_term_length)
        tagger = Tagger(
            dictionary,
            case_sensitive=args.case_sensitive,
            word_matching=args.word_matching,
            match_kind=args.match_kind,
        )
    except DictaggerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    renderer = Renderer(scheme=args.format, color=not args.plain)

    start = time.time()
    files = 0
    for pattern in split_inputs(args.input):
        paths = expand_globs([pattern])
        if not paths:
            logger.warning(f"No input matched {pattern}", extra={"path": pattern})
        for path in paths:
            logger.info(f"Tagging {path}", extra={"path": str(path)})
            try:
                lines = tag_file(path, tagger, renderer)
            except (OSError, UnicodeDecodeError) as e:
                logger.error(
                    f"Cannot read {path}",
                    extra={"path": str(path), "error": str(e), "error_type": type(e).__name__},
                )
                print(f"Error: cannot read {path}: {e}", file=sys.stderr)
                continue
            files += 1
            logger.debug("File tagged", extra={"path": str(path), "lines": lines})

    logger.info(
        "Done",
        extra={"files": files, "duration_ms": round((time.time() - start) * 1000, 1)},
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
