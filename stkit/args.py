"""Short-option command-line parsing in the traditional Unix style."""

from __future__ import annotations

from dataclasses import dataclass, field


class UsageError(Exception):
    """Raised when an option that needs a value has none."""


@dataclass
class ParsedArgs:
    """Program name, options in order of appearance and remaining operands."""

    program: str
    options: list[tuple[str, str | None]] = field(default_factory=list)
    operands: list[str] = field(default_factory=list)


def parse_args(argv, takes_value) -> ParsedArgs:
    """Parse argv, whose first element is the program name.

    Options are single characters after '-', and may be clustered. An option
    listed in takes_value takes the rest of its word or the next word as its
    value. Parsing stops at '--' (which is dropped), at '-' alone, or at the
    first word not starting with '-'.
    """
    words = list(argv)
    result = ParsedArgs(program=words[0] if words else "")
    rest = words[1:]
    pos = 0
    while pos < len(rest) and rest[pos].startswith("-") and len(rest[pos]) > 1:
        word = rest[pos]
        if word == "--":
            pos += 1
            break
        for i, flag in enumerate(word[1:], start=1):
            if flag not in takes_value:
                result.options.append((flag, None))
                continue
            tail = word[i + 1:]
            if tail:
                result.options.append((flag, tail))
            elif pos + 1 < len(rest):
                pos += 1
                result.options.append((flag, rest[pos]))
            else:
                raise UsageError(f"option requires an argument -- '{flag}'")
            break
        pos += 1
    result.operands = rest[pos:]
    return result