"""Header section parser."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import re
from types import MappingProxyType

from gabcpy.diagnostics import Diagnostic
from gabcpy.diagnostics.codes import HEADER_MISSING_SEMICOLON, HEADER_UNRECOGNIZED_LINE
from gabcpy.model import HeaderEntry
from gabcpy.scanner import Fragment, FragmentKind
from gabcpy.text import LineIndex

_HEADER_START = re.compile(r"([A-Za-z0-9-]+):(.*)", re.DOTALL)


@dataclass(frozen=True, slots=True)
class HeaderSection:
    entries: tuple[HeaderEntry, ...]
    headers: Mapping[str, str]
    diagnostics: tuple[Diagnostic, ...]


def parse_headers(fragments: Sequence[Fragment], line_index: LineIndex) -> HeaderSection:
    """Parse header-line fragments into ordered entries.

    Names are case-insensitive and stored lowercase; the last declaration of a
    name provides its value.
    """
    lines = [fragment for fragment in fragments if fragment.kind is FragmentKind.HEADER_LINE]
    entries: list[HeaderEntry] = []
    diagnostics: list[Diagnostic] = []

    index = 0
    while index < len(lines):
        line = lines[index]
        match = _HEADER_START.fullmatch(line.text)
        if match is None:
            diagnostics.append(
                Diagnostic.from_spec(
                    HEADER_UNRECOGNIZED_LINE,
                    line_index.range(line.range),
                    message=f"{HEADER_UNRECOGNIZED_LINE.message} Found `{line.text}`.",
                )
            )
            index += 1
            continue

        name = match.group(1)
        name_start = line.range.start
        name_end = name_start + len(name)
        # (line offset, text) pieces making up the value
        pieces: list[tuple[int, str]] = []
        terminated = False
        end_offset = line.range.end

        value_offset = line.range.start + match.start(2)
        raw = match.group(2)
        semicolon = raw.find(";")
        if semicolon != -1:
            pieces.append((value_offset, raw[:semicolon]))
            end_offset = value_offset + semicolon + 1
            terminated = True
            index += 1
        else:
            pieces.append((value_offset, raw))
            index += 1
            while index < len(lines) and _HEADER_START.fullmatch(lines[index].text) is None:
                continuation = lines[index]
                index += 1
                semicolon = continuation.text.find(";")
                if semicolon != -1:
                    pieces.append((continuation.range.start, continuation.text[:semicolon]))
                    end_offset = continuation.range.start + semicolon + 1
                    terminated = True
                    break
                pieces.append((continuation.range.start, continuation.text))
                end_offset = continuation.range.end

        value, value_start, value_end = _join_value(pieces)
        if not terminated and index < len(lines):
            diagnostics.append(
                Diagnostic.from_spec(
                    HEADER_MISSING_SEMICOLON,
                    line_index.range_of(name_start, end_offset),
                    message=f"{HEADER_MISSING_SEMICOLON.message} Header `{name}` runs into the next declaration.",
                )
            )

        entries.append(
            HeaderEntry(
                name=name.lower(),
                value=value,
                range=line_index.range_of(name_start, end_offset),
                name_range=line_index.range_of(name_start, name_end),
                value_range=line_index.range_of(value_start, value_end),
            )
        )

    headers: dict[str, str] = {}
    for entry in entries:
        headers[entry.name] = entry.value

    return HeaderSection(
        entries=tuple(entries),
        headers=MappingProxyType(headers),
        diagnostics=tuple(diagnostics),
    )


def _join_value(pieces: list[tuple[int, str]]) -> tuple[str, int, int]:
    stripped: list[str] = []
    value_start: int | None = None
    value_end = pieces[0][0]
    for offset, text in pieces:
        content = text.strip()
        if not content:
            continue
        lead = len(text) - len(text.lstrip())
        if value_start is None:
            value_start = offset + lead
        value_end = offset + lead + len(content)
        stripped.append(content)
    if value_start is None:
        return "", pieces[0][0], pieces[0][0]
    return "\n".join(stripped), value_start, value_end
