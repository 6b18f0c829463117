# scripts/export_version.py
import argparse
import sys
from pathlib import Path

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
sys.path.insert(0, str(current_dir.parent))

from config import Config
from services.import_accumulator import ImportAccumulator
from services.storage import JsonFileStore
from services.version_exporter import build_version_export, write_version_export
from utils.errors import BibleAppError


def main(argv=None):
    parser = argparse.ArgumentParser(description='Export a completed custom Bible version')
    parser.add_argument('name')
    parser.add_argument('abbreviation')
    parser.add_argument('--copyright', default='')
    parser.add_argument('--info', default='')
    parser.add_argument('--progress', default=Config.IMPORT_PROGRESS_PATH, help='progress file path')
    parser.add_argument('--output-dir', default=Config.EXPORT_DIR)
    args = parser.parse_args(argv)

    store = JsonFileStore(args.progress)
    accumulator = ImportAccumulator.from_snapshot(
        store.load(), name=args.name, abbreviation=args.abbreviation
    )
    try:
        version = accumulator.export()
    except BibleAppError as e:
        print(f"Export error: {e.message}", file=sys.stderr)
        return 1

    export = build_version_export(version, args.name, args.abbreviation, args.copyright, args.info)
    export_path = write_version_export(export, args.output_dir)
    print(f"Version exported successfully to {export_path}")
    print(f"Total chapters: {len(export['contents'])}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
