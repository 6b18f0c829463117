# scripts/process_chapter.py
"""
Import one chapter from a text file into the progress file.

    python scripts/process_chapter.py gen 1 genesis-1.txt
    python scripts/process_chapter.py gen 1 --delete
"""
import argparse
import sys
from pathlib import Path

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
sys.path.insert(0, str(current_dir.parent))

from config import Config
from services.import_accumulator import ImportAccumulator
from services.storage import JsonFileStore
from utils.errors import BibleAppError


def process_chapter(store, book, chapter, text, **details):
    """
    Add a chapter and save progress after it; returns the progress.

    ``details`` (name, abbreviation, language) set the version identity.
    """
    accumulator = ImportAccumulator.from_snapshot(store.load(), **details)
    accumulator.add_chapter(book, chapter, text)
    store.save(accumulator.to_snapshot())
    return accumulator.get_progress()


def delete_chapter(store, book, chapter):
    accumulator = ImportAccumulator.from_snapshot(store.load())
    if accumulator.delete_chapter(book, chapter):
        store.save(accumulator.to_snapshot())
    return accumulator.get_progress()


def main(argv=None):
    parser = argparse.ArgumentParser(description='Import a chapter of a custom Bible version')
    parser.add_argument('book', help="book abbreviation, e.g. 'gen' or '1co'")
    parser.add_argument('chapter', type=int)
    parser.add_argument('text_file', nargs='?', help='file with the pasted chapter text (stdin if omitted)')
    parser.add_argument('--delete', action='store_true', help='remove the chapter instead of importing it')
    parser.add_argument('--name', help='version name to record')
    parser.add_argument('--abbreviation', help='version abbreviation to record')
    parser.add_argument('--language', help="version language code, e.g. 'en'")
    parser.add_argument('--progress', default=Config.IMPORT_PROGRESS_PATH, help='progress file path')
    args = parser.parse_args(argv)

    store = JsonFileStore(args.progress)
    try:
        if args.delete:
            progress = delete_chapter(store, args.book, args.chapter)
            print(f"Deleted {args.book} {args.chapter}")
        else:
            if args.text_file:
                text = Path(args.text_file).read_text(encoding='utf-8')
            else:
                text = sys.stdin.read()
            progress = process_chapter(
                store, args.book, args.chapter, text,
                name=args.name, abbreviation=args.abbreviation, language=args.language,
            )
            print(f"Successfully processed {args.book} {args.chapter}")
    except BibleAppError as e:
        print(f"Error processing {args.book} {args.chapter}: {e.message}", file=sys.stderr)
        return 1

    print(f"Progress: {progress.completed_chapters}/{progress.total_chapters} chapters")
    return 0


if __name__ == '__main__':
    sys.exit(main())
