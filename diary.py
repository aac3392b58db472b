import argparse
import logging
import sys
from typing import Callable

from parsers.diary import parse_diary
from presenter import SortOrder, sort_entries, write_report
from stats import collect_stats

DIARY_CSV = 'diary.csv'
RULE = '=' * 40

SORT_CHOICES = {
    '1': SortOrder.RECENT,
    '2': SortOrder.OLDEST,
    '3': SortOrder.TITLE,
    '4': SortOrder.RATING,
}

logger = logging.getLogger(__name__)


def print_banner():
    print(RULE)
    print('  Letterboxd CSV Export Reader')
    print(RULE)
    print()
    print('Instructions:')
    print('1. Log into Letterboxd.com')
    print('2. Go to Settings > Import & Export')
    print("3. Click 'Export Your Data'")
    print('4. Extract the ZIP file')
    print("5. Use the 'diary.csv' file below")
    print()
    print(RULE)
    print()


def strip_path_quotes(path: str) -> str:
    '''Remove the quotes a terminal adds around drag-and-dropped paths.'''
    path = path.strip()
    if len(path) >= 2 and path[0] == path[-1] and path[0] in '"\'':
        path = path[1:-1]
    return path


def prompt_for_path(input_fn: Callable[[str], str] = input) -> str | None:
    print()
    print(f'Enter the full path to {DIARY_CSV}')
    print('(Tip: You can drag and drop the file into this window)')
    path = strip_path_quotes(input_fn('Path: '))
    return path or None


def browse_for_file() -> str | None:
    '''Ask for the diary file with a Tk file dialog, if one can be shown.'''
    try:
        import tkinter
        from tkinter import filedialog
    except ImportError:
        print('File browser is not available on this system.')
        return None

    try:
        root = tkinter.Tk()
    except tkinter.TclError as e:
        print(f'File browser is not available: {e}')
        return None

    root.withdraw()
    try:
        path = filedialog.askopenfilename(
            title=f'Select Letterboxd {DIARY_CSV} file',
            defaultextension='.csv',
            filetypes=[('CSV Files', '*.csv'), ('All Files', '*.*')],
        )
    finally:
        root.destroy()

    return path or None


def acquire_path(
    choice: str,
    prompt: Callable[[], str | None] = prompt_for_path,
    browse: Callable[[], str | None] = browse_for_file,
) -> str | None:
    '''Resolve a menu choice into a diary path, or None if there is none.'''
    choice = choice.strip()
    if choice == '1':
        print()
        print('Opening file browser...')
        path = browse()
        if not path:
            print('No file selected.')
        return path
    if choice == '2':
        return prompt()
    print('Invalid choice.')
    return None


def choose_path(input_fn: Callable[[str], str] = input) -> str | None:
    print('Choose an option:')
    print(f'1. Browse for {DIARY_CSV} file')
    print('2. Enter file path manually')
    print()
    choice = input_fn('Enter choice (1 or 2): ')
    return acquire_path(choice, prompt=lambda: prompt_for_path(input_fn))


def choose_sort_order(input_fn: Callable[[str], str] = input) -> SortOrder:
    print('How would you like to view your movies?')
    for key, order in SORT_CHOICES.items():
        print(f'{key}. {order.label}')
    print()
    choice = input_fn('Enter choice (1-4) or press Enter for default: ')
    return SORT_CHOICES.get(choice.strip(), SortOrder.RECENT)


def print_troubleshooting():
    print(RULE)
    print('No movies found or error reading file.')
    print(RULE)
    print()
    print('Troubleshooting tips:')
    print(
        f"- Make sure you selected '{DIARY_CSV}' "
        "(not 'watched.csv' or other files)"
    )
    print("- Check that the file isn't empty")
    print('- Try extracting the ZIP file again')


def run(
    path: str | None = None,
    order: SortOrder | None = None,
    input_fn: Callable[[str], str] = input,
) -> int:
    if path is None:
        path = choose_path(input_fn)
        if not path:
            return 0

    print()
    print(f'Reading file: {path}', flush=True)
    print()

    load = parse_diary(path)
    if load.error:
        print(f'Error: {load.error}')
        print('Please check that the file path is correct, the file exists, '
              'and you have permission to read it.')

    if not load.entries:
        print_troubleshooting()
        return 0

    if load.warnings:
        print(f'Skipped {len(load.warnings)} unreadable line(s)')

    entries = load.entries
    print(RULE)
    print(f'Found {len(entries)} watched movies!')
    print(RULE)
    print()

    if order is None:
        order = choose_sort_order(input_fn)

    print()
    print(RULE)
    print()

    write_report(sort_entries(entries, order), collect_stats(entries))
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Read and summarize a Letterboxd diary.csv export.'
    )
    parser.add_argument(
        'path', nargs='?', help=f'path to {DIARY_CSV} (prompted if omitted)'
    )
    parser.add_argument(
        '--sort',
        choices=[o.value for o in SortOrder],
        help='sort order (prompted if omitted)',
    )
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    if args.path is None:
        print_banner()

    try:
        return run(
            path=args.path and strip_path_quotes(args.path),
            order=SortOrder(args.sort) if args.sort else None,
        )
    except (KeyboardInterrupt, EOFError):
        print()
        return 1
    except Exception as e:
        logger.debug('Unhandled error', exc_info=True)
        print(f'\nERROR: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
