"""Terminal actions that run other programs: pipes, plumbing and openers."""

from __future__ import annotations

import os
import re
import subprocess
import sys

ISO14755_CMD = 'dmenu -w "$WINDOWID" -p codepoint: </dev/null'

_ULONG_MAX = 2**64 - 1
_HEX_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


def parse_codepoint(text: str) -> int:
    """Parse a hexadecimal codepoint as read from the first line of text.

    At most eight characters of the first line are considered; the number may
    be followed only by a newline. Raises ValueError otherwise.
    """
    line = text.split("\0", 1)[0][:8]
    if "\n" in line:
        line = line[:line.index("\n") + 1]
    if not line or line[0] == "-" or len(line) > 7:
        raise ValueError(f"not a codepoint: {text!r}")
    match = _HEX_RE.match(line)
    digits = match.group(2)
    rest = line[match.end():] if digits else line
    if rest not in ("", "\n"):
        raise ValueError(f"not a codepoint: {text!r}")
    value = int(digits, 16) if digits else 0
    if match.group(1) == "-" and value:
        raise ValueError(f"negative codepoint: {text!r}")
    if value >= _ULONG_MAX:
        raise ValueError(f"codepoint out of range: {text!r}")
    return value


def _utf8(codepoint: int) -> bytes:
    if codepoint > 0x10FFFF or 0xD800 <= codepoint <= 0xDFFF:
        codepoint = 0xFFFD
    return chr(codepoint).encode("utf-8")


def iso14755(command: str = ISO14755_CMD) -> bytes | None:
    """Ask a shell command for a hex codepoint; return its UTF-8 bytes or None."""
    try:
        result = subprocess.run(command, shell=True, stdout=subprocess.PIPE, check=False)
    except OSError:
        return None
    try:
        codepoint = parse_codepoint(result.stdout.decode("utf-8", "replace"))
    except ValueError:
        return None
    return _utf8(codepoint)


def open_copied(opener: str, clip: str | None):
    """Open the clipboard text with opener in the background.

    Returns the started process, or None with a warning when nothing is copied.
    """
    if clip is None:
        print("Warning: nothing copied to clipboard", file=sys.stderr)
        return None
    return subprocess.Popen([opener, clip])


def _row(item) -> tuple[str, bool]:
    if isinstance(item, str):
        return item, False
    text, wrapped = item
    return text, bool(wrapped)


def screen_text(lines) -> str:
    """Render screen rows as the text handed to an external program.

    Each row is a string whose length is the screen width, or a
    (string, wrapped) pair. Trailing blanks of unwrapped rows are cut down to
    one; wrapped rows run on into the next without a newline. An empty row
    ends the text.
    """
    out: list[str] = []
    newline = False
    for item in lines:
        text, wrapped = _row(item)
        width = len(text)
        length = width if wrapped else len(text.rstrip(" "))
        lastpos = min(length + 1, width) - 1
        if lastpos < 0:
            break
        out.append(text[:lastpos + 1])
        if wrapped:
            newline = True
            continue
        out.append("\n")
        newline = False
    if newline:
        out.append("\n")
    return "".join(out)


def external_pipe(argv, lines):
    """Start argv and feed the screen text to its standard input.

    Returns the started process, or None if it could not be started.
    """
    argv = list(argv)
    try:
        proc = subprocess.Popen(argv, stdin=subprocess.PIPE)
    except OSError as exc:
        print(f"execvp {argv[0] if argv else ''} failed: {exc}", file=sys.stderr)
        return None
    try:
        proc.stdin.write(screen_text(lines).encode("utf-8", "replace"))
    except BrokenPipeError:
        pass
    finally:
        try:
            proc.stdin.close()
        except BrokenPipeError:
            pass
    return proc


def process_cwd(pid: int) -> str:
    """Return the working directory of a process; raises OSError if unknown."""
    return os.path.realpath(f"/proc/{int(pid)}/cwd", strict=True)


def plumb(command: str, selection: str | None, cwd) -> int | None:
    """Run command with the selection as its argument in cwd and wait.

    Returns the exit status, 1 if it could not be run, None without selection.
    """
    if selection is None:
        return None
    try:
        return subprocess.run([command, selection], cwd=cwd, check=False).returncode
    except OSError:
        return 1