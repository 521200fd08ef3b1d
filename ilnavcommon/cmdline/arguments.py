"""
Convert between argument lists and Windows style command lines.

The viewer receives its arguments as a single command line string which the process splits again with the
conventional argv tokenizer (CommandLineToArgvW rules). encode_arguments() produces such a string and
split_command_line() is the tokenizer, so split_command_line(encode_arguments(args)) == args.
"""

from typing import Iterable

CHARS_NEEDING_QUOTES = frozenset(' \t\n\v"')
TOKEN_SEPARATORS = " \t"


def _needs_quotes(arg: str) -> bool:
    return not arg or any(c in CHARS_NEEDING_QUOTES for c in arg)


def encode_argument(arg: str) -> str:
    """
    Encode a single argument.

    Arguments without whitespace or quotes are returned unchanged. Otherwise the argument is quoted; backslashes
    are doubled where they precede a quote (escaped or closing) and quotes are escaped with a backslash.
    """
    if not _needs_quotes(arg):
        return arg

    parts = ['"']
    backslashes = 0
    for c in arg:
        if c == "\\":
            backslashes += 1
            continue
        if c == '"':
            parts.append("\\" * (backslashes * 2 + 1))
            parts.append('"')
        else:
            parts.append("\\" * backslashes)
            parts.append(c)
        backslashes = 0
    # the closing quote must not be escaped
    parts.append("\\" * (backslashes * 2))
    parts.append('"')
    return "".join(parts)


def encode_arguments(args: Iterable[str]) -> str:
    "Encode all arguments and join them with single spaces."
    return " ".join(encode_argument(arg) for arg in args)


def split_command_line(command_line: str) -> list[str]:
    """
    Split a command line into arguments like CommandLineToArgvW does.

    - Arguments are separated by spaces and tabs outside of quotes.
    - A double quote toggles quoting and is not part of the argument.
    - 2n backslashes followed by a quote become n backslashes, the quote toggles quoting.
    - 2n+1 backslashes followed by a quote become n backslashes and a literal quote.
    - Backslashes not followed by a quote are literal.
    """
    args: list[str] = []
    current: list[str] = []
    in_quotes = False
    # distinguishes an empty quoted argument ("") from no argument at all
    in_argument = False
    i = 0
    length = len(command_line)

    while i < length:
        c = command_line[i]

        if c in TOKEN_SEPARATORS and not in_quotes:
            if in_argument:
                args.append("".join(current))
                current = []
                in_argument = False
            i += 1
            continue

        in_argument = True

        if c == "\\":
            start = i
            while i < length and command_line[i] == "\\":
                i += 1
            backslashes = i - start
            if i < length and command_line[i] == '"':
                current.append("\\" * (backslashes // 2))
                if backslashes % 2:
                    current.append('"')
                    i += 1
                # an even count leaves the quote to be handled as a toggle
            else:
                current.append("\\" * backslashes)
            continue

        if c == '"':
            in_quotes = not in_quotes
        else:
            current.append(c)
        i += 1

    if in_argument:
        args.append("".join(current))

    return args
