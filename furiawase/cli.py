"""
Command line interface for furiawase.

Usage:
    python -m furiawase.cli 時間 じかん -r readings.json
    python -m furiawase.cli 時間 じかん --format html      # uses the database
    python -m furiawase.cli 時間 じかん --json
    python -m furiawase.cli init-db --kanjidic kanjidic2.xml.gz
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

from furiawase import __version__, parse_furigana
from furiawase.align import CANDIDATE_ORDERS
from furiawase.errors import SearchBudgetExceeded, UnresolvableError
from furiawase.models import FuriganaResult, ResolutionFailure
from furiawase.readings import candidate_readings, check_reading_map
from furiawase import settings

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure root logging for command line use."""
    if debug or settings.DEBUG:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')


def load_readings_file(path: str, voicing: bool, gemination: bool) -> Dict[str, List[str]]:
    """Read a JSON {character: [readings]} file and normalize the readings."""
    with open(path, encoding='utf-8') as f:
        raw = json.load(f)

    check_reading_map(raw, path)

    return {
        char: candidate_readings(readings, voicing=voicing, gemination=gemination)
        for char, readings in raw.items()
    }


def load_readings_db(word: str, db_path: Path, voicing: bool,
                     gemination: bool) -> Dict[str, List[str]]:
    """Look up the readings of every kanji in ``word`` in the database."""
    from furiawase.conn import close, connect
    from furiawase.kanji import clear_kanji_cache, kanji_readings

    connect(db_path)
    clear_kanji_cache()
    try:
        return kanji_readings(word, voicing=voicing, gemination=gemination)
    finally:
        close()


def init_db_command(args) -> int:
    """Build the reading database from KANJIDIC and/or a JSON file."""
    from furiawase.conn import close, connect
    from furiawase.kanjidic import load_kanjidic, load_readings_json

    if not args.kanjidic and not args.readings_json:
        kanjidic_path = settings.KANJIDIC_PATH
        if not kanjidic_path.exists() and not Path(str(kanjidic_path) + '.gz').exists():
            print("Error: KANJIDIC file not found.", file=sys.stderr)
            print(f"Download from: {settings.KANJIDIC_URL}", file=sys.stderr)
            print("Or specify path with --kanjidic", file=sys.stderr)
            return 1
        args.kanjidic = str(kanjidic_path)

    db_path = Path(args.output) if args.output else settings.DB_PATH

    if db_path.exists():
        if not args.force:
            print(f"Database already exists: {db_path}", file=sys.stderr)
            print("Use --force to rebuild.", file=sys.stderr)
            return 1
        db_path.unlink()

    print(f"Initializing database at {db_path}...")
    t0 = time.perf_counter()

    def progress(loaded, total):
        if total is None:
            print(f"  {loaded:,} kanji loaded...")

    try:
        connect(db_path)
        count = 0
        if args.kanjidic:
            count += load_kanjidic(args.kanjidic, progress)
        if args.readings_json:
            count += load_readings_json(args.readings_json)
    except (OSError, ValueError) as e:
        print(f"Error initializing database: {e}", file=sys.stderr)
        return 1
    finally:
        close()

    elapsed = time.perf_counter() - t0
    print(f"Database initialized: {count:,} kanji in {elapsed:.1f}s")
    print("Set FURIAWASE_DB_PATH to use it from elsewhere:")
    print(f'  export FURIAWASE_DB_PATH="{db_path.absolute()}"')
    return 0


def main_init_db(args: list) -> int:
    """CLI entry point for the init-db subcommand."""
    parser = argparse.ArgumentParser(
        description='Build the furiawase reading database',
        prog='furiawase init-db',
    )
    parser.add_argument(
        '--kanjidic', '-k',
        type=str,
        metavar='PATH',
        help='Path to KANJIDIC2 XML file, plain or gzipped',
    )
    parser.add_argument(
        '--readings-json', '-r',
        type=str,
        metavar='PATH',
        help='JSON file of {character: [readings]} to add',
    )
    parser.add_argument(
        '--output', '-o',
        type=str,
        metavar='PATH',
        help=f'Output database path (default: {settings.DB_PATH})',
    )
    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite an existing database',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log progress')

    parsed = parser.parse_args(args)
    setup_logging(parsed.verbose)
    return init_db_command(parsed)


def format_output(furigana, fmt: str) -> str:
    if fmt == 'bracket':
        return furigana.to_bracket()
    if fmt == 'html':
        return furigana.to_html()
    return '\n'.join(f"{f.to_writing()}\t{f.to_reading()}" for f in furigana)


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'init-db':
        return main_init_db(args_list[1:])

    parser = argparse.ArgumentParser(
        description='Align the reading of a Japanese word with its kanji (furigana)',
        prog='furiawase',
        epilog='Subcommands:\n  furiawase init-db    Build the reading database from KANJIDIC',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('word', nargs='?', help='Written word, e.g. 時間')
    parser.add_argument('reading', nargs='?', help='Full reading, e.g. じかん')
    parser.add_argument(
        '-r', '--readings',
        type=str,
        metavar='FILE',
        help='JSON file of {character: [readings]} to use instead of the database',
    )
    parser.add_argument(
        '-d', '--database',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to SQLite reading database',
    )
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON')
    parser.add_argument(
        '--format',
        choices=['plain', 'bracket', 'html'],
        default='plain',
        help='Text output format (default: plain, one character per line)',
    )
    parser.add_argument(
        '--order',
        choices=sorted(CANDIDATE_ORDERS),
        default='longest',
        help='Order in which candidate readings are tried (default: longest)',
    )
    parser.add_argument(
        '--max-attempts',
        type=int,
        default=settings.MAX_ATTEMPTS,
        metavar='N',
        help='Give up after N candidate attempts',
    )
    parser.add_argument('--voicing', action='store_true', default=settings.VOICING,
                        help='Also try voiced readings (rendaku)')
    parser.add_argument('--gemination', action='store_true', default=settings.GEMINATION,
                        help='Also try readings ending in っ')
    parser.add_argument('--no-iteration-marks', action='store_true',
                        help='Treat 々 as a literal character')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')
    parser.add_argument('--debug', action='store_true', help='Debug logging')
    parser.add_argument('--version', action='store_true', help='Show version information')

    parsed = parser.parse_args(args)

    if parsed.version:
        print(f'furiawase {__version__}')
        return 0

    if not parsed.word or not parsed.reading:
        parser.print_help()
        return 1

    setup_logging(parsed.verbose, parsed.debug)

    try:
        if parsed.readings:
            readings = load_readings_file(parsed.readings, parsed.voicing, parsed.gemination)
        else:
            db_path = Path(parsed.database) if parsed.database else settings.DB_PATH
            if not db_path.exists():
                print(f"Error: reading database not found: {db_path}", file=sys.stderr)
                print("Run 'furiawase init-db' or pass --readings FILE.", file=sys.stderr)
                return 1
            readings = load_readings_db(parsed.word, db_path, parsed.voicing, parsed.gemination)
    except (OSError, ValueError) as e:
        print(f"Error loading readings: {e}", file=sys.stderr)
        return 1

    logger.debug("readings: %s", readings)

    try:
        furigana = parse_furigana(
            parsed.word, parsed.reading, readings,
            order=CANDIDATE_ORDERS[parsed.order],
            max_attempts=parsed.max_attempts,
            expand_iteration_marks=not parsed.no_iteration_marks,
        )
    except UnresolvableError as e:
        if parsed.json:
            failure = ResolutionFailure.from_failure(parsed.word, parsed.reading, e.failure)
            print(json.dumps(failure.model_dump(), ensure_ascii=False))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1
    except SearchBudgetExceeded as e:
        if parsed.json:
            failure = ResolutionFailure.from_budget(parsed.word, parsed.reading, e)
            print(json.dumps(failure.model_dump(), ensure_ascii=False))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.json:
        result = FuriganaResult.from_furigana(parsed.word, parsed.reading, furigana)
        print(json.dumps(result.model_dump(), ensure_ascii=False))
    else:
        print(format_output(furigana, parsed.format))

    return 0


if __name__ == '__main__':
    sys.exit(main())
