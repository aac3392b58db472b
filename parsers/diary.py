import logging
from dataclasses import dataclass, field
from typing import Iterable

from models import FIELD_NAMES, DiaryEntry
from parsers.fields import split_fields

logger = logging.getLogger(__name__)

MIN_FIELDS = 2  # date and name


class MalformedLineError(ValueError):
    pass


@dataclass
class DiaryLoad:
    entries: list[DiaryEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    header: str | None = None
    error: str | None = None  # set when the file could not be opened


def build_entry(fields: list[str]) -> DiaryEntry:
    '''Assign fields to DiaryEntry attributes by position.'''
    if len(fields) < MIN_FIELDS:
        raise MalformedLineError(
            f'expected at least {MIN_FIELDS} fields, found {len(fields)}'
        )
    values = list(fields[:len(FIELD_NAMES)])
    values += [''] * (len(FIELD_NAMES) - len(values))
    return DiaryEntry(*values)


def parse_diary_line(line: str) -> DiaryEntry:
    return build_entry(split_fields(line))


def parse_diary_lines(lines: Iterable[str]) -> DiaryLoad:
    '''
    Parse diary.csv lines into entries, in file order.

    The first non-empty line is the header and is never parsed. Lines that
    fail to parse are skipped with a warning naming their 1-based position.
    '''
    result = DiaryLoad()

    for num, ln in enumerate(lines, start=1):
        ln = ln.rstrip('\n')
        if ln.endswith('\r'):
            ln = ln[:-1]

        if not ln:
            continue

        if result.header is None:
            result.header = ln
            logger.debug('CSV header: %s', ln)
            continue

        try:
            fields = split_fields(ln)
            if not result.entries and not result.warnings:
                logger.debug('First data line has %d fields', len(fields))
            result.entries.append(build_entry(fields))
        except Exception as e:
            msg = f'Error parsing line {num}: {e}'
            logger.warning(msg)
            result.warnings.append(msg)

    return result


def parse_diary(path) -> DiaryLoad:
    '''Read a diary.csv export. An unreadable file yields an empty result.'''
    if not path:
        logger.error('No file selected')
        return DiaryLoad(error='No file selected')

    try:
        with open(path, encoding='utf-8-sig', errors='replace', newline='\n') as f:
            result = parse_diary_lines(f)
    except OSError as e:
        msg = f"Could not open file '{path}': {e.strerror or e}"
        logger.error(msg)
        return DiaryLoad(error=msg)

    logger.info('Read %d entries from %s', len(result.entries), path)
    return result
