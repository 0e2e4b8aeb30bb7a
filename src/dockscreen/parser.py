"""
Line-oriented parser for the screen description format.

A screen file is a sequence of blocks:

    // comment
    --global_settings--
    font_name: FiraSans-Bold.ttf
    font_size: 24
    color: white
    --end--

    --label--
    name: title
    size: 400;50
    dock_with: screen.top_middle <-> this.top_middle
    text_string: Main Menu   // trailing comments are stripped
    --end--

Block headers are matched case-insensitively. Inside a control block every
field is accepted and stored as a raw string; interpretation is deferred to
the consumer (see dockscreen.controls.Control accessors).
"""

from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import BaseModel

from dockscreen.controls import (
    KIND_DEFAULTS,
    TEXT_KINDS,
    UNIVERSAL_DEFAULTS,
    Control,
    ControlKind,
    ControlSet,
    FieldTable,
    ScreenError,
)
from dockscreen.logging_config import get_logger

logger = get_logger(__name__)

COMMENT_PREFIX = "//"

HEADER_GLOBAL_SETTINGS = "--global_settings--"
HEADER_END = "--end--"
CONTROL_HEADERS: dict[str, ControlKind] = {
    "--picture_box--": ControlKind.PICTURE_BOX,
    "--label--": ControlKind.LABEL,
    "--button--": ControlKind.BUTTON,
}

GLOBAL_SETTINGS_FIELDS = ("font_name", "font_size", "color")


class ScreenLoadError(ScreenError):
    """Raised when a screen file cannot be read."""

    pass


class FormatError(ScreenError):
    """Malformed screen description, reported with its 1-based line number."""

    def __init__(self, message: str, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"{message}. Line #{line_number}: {line}")


class ParseMode(str, Enum):
    """What the parser is currently reading."""

    NONE = "none"
    GLOBAL_SETTINGS = "global_settings"
    CONTROL = "control"


class GlobalSettings(BaseModel):
    """
    Font defaults active between a --global_settings-- block and later controls.

    Values are copied into each Label/Button field table when its header is
    read; the record itself is discarded once parsing ends.
    """

    font_name: str = ""
    font_size: str = "0.0"
    color: str = "white"

    def as_fields(self) -> FieldTable:
        return {field: getattr(self, field) for field in GLOBAL_SETTINGS_FIELDS}


def open_control(kind: ControlKind, global_settings: GlobalSettings) -> FieldTable:
    """
    Seed the field table of a control whose block header was just read.

    Args:
        kind: Kind named by the header
        global_settings: Settings currently in effect

    Returns:
        Fresh field table with universal, kind and (for text kinds) font defaults
    """
    fields: FieldTable = dict(UNIVERSAL_DEFAULTS)
    fields.update(KIND_DEFAULTS[kind])
    if kind in TEXT_KINDS:
        fields.update(global_settings.as_fields())
    return fields


def is_header_like(stripped: str) -> bool:
    """True for "--something--" lines, which are reserved for block headers."""
    return len(stripped) > 4 and stripped.startswith("--") and stripped.endswith("--") and ":" not in stripped


def split_field_line(line: str) -> Optional[tuple[str, str]]:
    """
    Split "name: value // comment" into a lower-cased name and trimmed value.

    Returns:
        (name, value), or None when the line has no ':' separator
    """
    if ":" not in line:
        return None
    name, rest = line.split(":", 1)
    value = rest.split(COMMENT_PREFIX, 1)[0]
    return name.strip().lower(), value.strip()


class ScreenParser:
    """
    Stateful single-pass parser turning description lines into a ControlSet.

    One instance parses one document; use parse_lines() for the common case.
    """

    def __init__(self, allow_unnamed_controls: bool = False):
        """
        Initialize parser state.

        Args:
            allow_unnamed_controls: Store controls without a name under the empty
                key instead of rejecting them at --end--
        """
        self._allow_unnamed = allow_unnamed_controls
        self._mode = ParseMode.NONE
        self._global_settings = GlobalSettings()
        self._kind: Optional[ControlKind] = None
        self._fields: FieldTable = dict(UNIVERSAL_DEFAULTS)
        self._block_start: Optional[tuple[int, str]] = None
        self._controls: dict[str, Control] = {}

    def parse(self, lines: Iterable[str]) -> ControlSet:
        """
        Parse every line and return the finished control set.

        Raises:
            FormatError: On the first malformed line, or an unterminated block
        """
        line_number = 0
        for raw_line in lines:
            line_number += 1
            self.feed(raw_line, line_number)

        if self._mode != ParseMode.NONE and self._block_start is not None:
            start_number, start_line = self._block_start
            raise FormatError("Block is never closed with --end--", start_number, start_line)

        logger.debug(f"Parsed {len(self._controls)} controls from {line_number} lines")
        return ControlSet(self._controls)

    def feed(self, raw_line: str, line_number: int) -> None:
        """Consume a single line."""
        line = raw_line.rstrip("\r\n")
        stripped = line.strip()

        if not stripped or stripped.startswith(COMMENT_PREFIX):
            return

        header = stripped.lower()
        if header == HEADER_GLOBAL_SETTINGS:
            self._discard_open_control(line_number)
            self._mode = ParseMode.GLOBAL_SETTINGS
            self._global_settings = GlobalSettings()
            self._block_start = (line_number, line)
            logger.debug(f"Line {line_number}: global settings block")
        elif header in CONTROL_HEADERS:
            self._discard_open_control(line_number)
            kind = CONTROL_HEADERS[header]
            self._mode = ParseMode.CONTROL
            self._kind = kind
            self._fields = open_control(kind, self._global_settings)
            self._block_start = (line_number, line)
            logger.debug(f"Line {line_number}: {kind.value} block")
        elif header == HEADER_END:
            self._end_block(line_number, line)
        elif is_header_like(header):
            raise FormatError("Unknown block header", line_number, line)
        else:
            self._read_field(line_number, line)

    def _read_field(self, line_number: int, line: str) -> None:
        if self._mode == ParseMode.NONE:
            raise FormatError("Not in a valid state", line_number, line)

        split = split_field_line(line)
        if split is None:
            raise FormatError("Field line is missing ':' separator", line_number, line)
        name, value = split
        if not name:
            raise FormatError("Unknown field", line_number, line)

        if self._mode == ParseMode.GLOBAL_SETTINGS:
            if name not in GLOBAL_SETTINGS_FIELDS:
                raise FormatError("Unknown field", line_number, line)
            self._global_settings = self._global_settings.model_copy(update={name: value})
        else:
            self._fields[name] = value

    def _end_block(self, line_number: int, line: str) -> None:
        if self._mode == ParseMode.NONE:
            raise FormatError("End found while not in a valid state", line_number, line)

        if self._mode == ParseMode.CONTROL and self._kind is not None:
            name = self._fields.get("name", "")
            if not name:
                if not self._allow_unnamed:
                    raise FormatError("Control has no name", line_number, line)
                logger.warning(f"Line {line_number}: storing unnamed {self._kind.value} under the empty key")
            if name in self._controls:
                logger.warning(f"Line {line_number}: control [{name}] redefined, last definition wins")
            self._controls[name] = Control(kind=self._kind, name=name, fields=self._fields)

        self._reset()

    def _discard_open_control(self, line_number: int) -> None:
        if self._mode == ParseMode.CONTROL:
            name = self._fields.get("name", "")
            logger.warning(f"Line {line_number}: new block opened before --end--, discarding control [{name}]")

    def _reset(self) -> None:
        self._mode = ParseMode.NONE
        self._kind = None
        self._fields = dict(UNIVERSAL_DEFAULTS)
        self._block_start = None


def parse_lines(lines: Iterable[str], allow_unnamed_controls: bool = False) -> ControlSet:
    """
    Parse screen description lines into a ControlSet.

    Args:
        lines: Text lines (with or without trailing newlines)
        allow_unnamed_controls: Keep legacy behaviour for controls without a name

    Returns:
        Immutable control set

    Raises:
        FormatError: If the description is malformed, including input that
            ends inside a block without its --end-- line (reported at the
            block header)
    """
    return ScreenParser(allow_unnamed_controls=allow_unnamed_controls).parse(lines)


def parse_text(text: str, allow_unnamed_controls: bool = False) -> ControlSet:
    """Parse a whole description held in one string."""
    return parse_lines(text.splitlines(), allow_unnamed_controls=allow_unnamed_controls)


def read_ui_file(ui_filename: Union[str, Path], assets_dir: Union[str, Path] = "assets") -> list[str]:
    """
    Read a screen file relative to the assets directory.

    Args:
        ui_filename: File name (or path) relative to assets_dir
        assets_dir: Directory holding screen files

    Returns:
        The file's lines without line terminators

    Raises:
        ScreenLoadError: If the file cannot be read
    """
    path = Path(assets_dir) / ui_filename
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise ScreenLoadError(f"Unable to open file [{path}].") from e

    logger.debug(f"Read {len(lines)} lines from {path}")
    return lines


def load_controls(
    ui_filename: Union[str, Path],
    assets_dir: Union[str, Path] = "assets",
    allow_unnamed_controls: bool = False,
) -> ControlSet:
    """Read and parse a screen file in one step."""
    lines = read_ui_file(ui_filename, assets_dir)
    return parse_lines(lines, allow_unnamed_controls=allow_unnamed_controls)
