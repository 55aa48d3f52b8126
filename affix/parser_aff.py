# affix/parser_aff.py - low level parser for Hunspell .aff files
# -----------------------------------------------------------------
# Each line has the form COMMAND [PARAMETER_LINE]. A command can appear
# many times, so every distinct command maps to the list of its parameter
# lines in file order. Commands are stored uppercased, parameters verbatim.
#
#   SFX A Y 2
#   SFX A abc qwe .
#   sfx A zxc abc .
#
# is stored as "SFX" -> ["A Y 2", "A abc qwe .", "A zxc abc ."]
# -----------------------------------------------------------------

import io
import logging
import re
import string
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# C locale isspace()
WHITESPACE = " \t\n\v\f\r"

_LINE = re.compile(r"([^ \t\n\v\f\r]+)[ \t\n\v\f\r]*(.*)", re.DOTALL)
_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def fold_command(token: str) -> str:
    """Uppercase a command token one character at a time (ASCII only)."""
    return token.translate(_UPPER)


def _strip_eol(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def split_line(line: str) -> Optional[Tuple[str, str]]:
    """Split one source line into (command, remainder).

    Returns None for blank lines and whole-line comments. The remainder is
    an empty string when nothing follows the command.
    """
    text = _strip_eol(line).lstrip(WHITESPACE)
    if not text or text.startswith("#"):
        return None
    m = _LINE.match(text)
    return fold_command(m.group(1)), m.group(2)


class AffParser:
    """Keyword table built from the lines of an .aff file."""

    def __init__(self):
        self._table: Dict[str, List[str]] = {}
        self.error: Optional[str] = None

    def reset(self) -> None:
        """Drop every command and parameter line and any recorded read error."""
        self._table.clear()
        self.error = None

    def parse(self, source: Iterable[str]) -> bool:
        """Read lines from ``source`` into the table.

        Returns True once the source is exhausted. If reading fails the
        whole table is cleared (including lines read earlier in this call),
        ``self.error`` holds the reason and False is returned.
        """
        self.error = None
        count = 0
        try:
            for line in source:
                count += 1
                self._add_line(line)
        except (OSError, ValueError) as e:
            logger.warning("Read failed after %d line(s): %s", count, e)
            self.reset()
            self.error = str(e) or e.__class__.__name__
            return False
        logger.debug("Parsed %d line(s), %d command(s)", count, len(self._table))
        return True

    def parse_text(self, text: str) -> bool:
        """Parse an in-memory string, line by line."""
        return self.parse(io.StringIO(text))

    def _add_line(self, line: str) -> None:
        parts = split_line(line)
        if parts is None:
            return
        command, remainder = parts
        params = self._table.setdefault(command, [])
        if remainder:
            params.append(remainder)

    def is_command_present(self, command: str) -> bool:
        """``command`` must already be uppercase."""
        return command in self._table

    def get_command_parameters(self, command: str) -> Tuple[str, ...]:
        """Parameter lines of ``command`` (uppercase), empty if there are none.

        An absent command and a command without parameters both give an
        empty tuple; use is_command_present() to tell them apart.
        """
        return tuple(self._table.get(command, ()))

    def data(self) -> Mapping[str, Tuple[str, ...]]:
        """Read-only snapshot of the whole table, stale after the next parse/reset."""
        return MappingProxyType({cmd: tuple(params) for cmd, params in self._table.items()})
