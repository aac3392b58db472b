import math

FIELD_SEPARATOR = ','
QUOTE_CHAR = '"'
TRIM_CHARS = ' \t\r\n"'


def trim_field(field: str) -> str:
    '''Strip surrounding whitespace and stray quote characters.'''
    return field.strip(TRIM_CHARS)


def split_fields(line: str) -> list[str]:
    '''
    Split a diary line on commas, keeping commas inside quoted spans.

    Quotes only toggle the quoted state and are dropped from the output; a
    doubled quote ("") is not treated as an escaped quote. An unterminated
    quote swallows the rest of the line into the last field.
    '''
    fields = []
    current = []
    in_quotes = False

    for c in line:
        if c == QUOTE_CHAR:
            in_quotes = not in_quotes
        elif c == FIELD_SEPARATOR and not in_quotes:
            fields.append(trim_field(''.join(current)))
            current = []
        else:
            current.append(c)

    fields.append(trim_field(''.join(current)))
    return fields


def safe_float(text: str) -> float:
    '''Parse a whole string as a decimal number, returning 0.0 on failure.'''
    if not text or not text.isascii() or '_' in text or text[-1].isspace():
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value
