#!/usr/bin/env python
"""Print the parsed model and the findings of a `.gabc` file."""

from __future__ import annotations

import argparse
from pathlib import Path

from gabcpy.diagnostics import Diagnostic
from gabcpy.model import Document, Note, NoteGroup, Syllable
from gabcpy.pipeline import run_check


def format_note(note: Note) -> str:
    modifiers = ",".join(
        modifier.type.value if modifier.value is None else f"{modifier.type.value}={modifier.value}"
        for modifier in note.modifiers
    )
    parts = [f"{note.pitch}:{note.shape.value}"]
    if modifiers:
        parts.append(f"[{modifiers}]")
    if note.alteration is not None:
        parts.append(f"alteration={note.alteration.kind.value}/{note.alteration.length}")
    return " ".join(parts)


def format_group(group: NoteGroup) -> str:
    lines = [f"    group {group.gabc!r} {group.range}"]
    lines.extend(f"      {format_note(note)}" for note in group.notes)
    for segment in group.nabc_segments:
        chains = [" ! ".join(descriptor.text for descriptor in chain) for chain in segment.chains()]
        lines.append(f"      nabc {segment.text!r} -> {chains}")
    if group.custos is not None:
        lines.append(f"      custos {group.custos.kind.value} {group.custos.pitch or ''}")
    return "\n".join(lines)


def format_syllable(index: int, syllable: Syllable) -> str:
    head = f"[{index}] {syllable.text!r} {syllable.range}"
    if syllable.clef is not None:
        head += f" clef={syllable.clef.text} ({syllable.clef.role.value})"
    if syllable.bar is not None:
        head += f" bar={syllable.bar.kind.value}"
    if syllable.line_break is not None:
        head += f" line-break={syllable.line_break.kind.value}"
    return "\n".join([head, *(format_group(group) for group in syllable.note_groups)])


def format_diagnostic(diagnostic: Diagnostic) -> str:
    start = diagnostic.range.start
    return f"{start.line + 1}:{start.character + 1} {diagnostic.severity} [{diagnostic.code}] {diagnostic.message}"


def dump(document: Document, diagnostics: list[Diagnostic]) -> str:
    lines = ["headers:"]
    lines.extend(f"  {name}: {value!r}" for name, value in document.headers.items())
    lines.append("syllables:")
    lines.extend(format_syllable(index, syllable) for index, syllable in enumerate(document.syllables))
    lines.append("diagnostics:")
    lines.extend(f"  {format_diagnostic(diagnostic)}" for diagnostic in diagnostics)
    return "\n".join(lines)


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump the parsed model of a GABC file")
    parser.add_argument("path", type=Path)
    parser.add_argument("--output", type=Path, default=None, help="Write to a file instead of stdout")
    args = parser.parse_args()

    text = args.path.read_text(encoding="utf-8-sig")
    result = run_check(text)
    rendered = dump(result.document, result.diagnostics)

    if args.output is None:
        print(rendered)
        return
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(rendered + "\n", encoding="utf-8")
    print(f"Wrote {len(result.document.syllables)} syllables to {args.output}")


if __name__ == "__main__":
    main()
