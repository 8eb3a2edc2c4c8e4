#!/usr/bin/env python3
"""
List or extract members of a LAB archive.

Prints one line per member (data offset, size, name) so we can find the
``*.setb`` files to feed into setb2set.py.  ``--extract`` copies selected
members (case-insensitive names) into ``--out-dir``.
"""

from __future__ import annotations

import argparse
import fnmatch
import itertools
import sys
from pathlib import Path
from typing import Sequence

from emiset import LabArchive, LabEntry, SetbError


def describe_entry(entry: LabEntry) -> str:
    return f"off=0x{entry.start:08X} | size={entry.size:<9d} | {entry.name}"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List or extract members of a LAB archive.")
    parser.add_argument("archive", type=Path, help="Path to the .lab / .m4b archive")
    parser.add_argument("--pattern", default="*", help="Only show members matching this glob (default: *)")
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of members to print (default: no limit)")
    parser.add_argument("--extract", nargs="+", metavar="NAME", help="Member names to extract")
    parser.add_argument("--out-dir", type=Path, default=Path("."), help="Destination directory for --extract (default: .)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        lab = LabArchive.open(args.archive)
    except (OSError, SetbError) as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1

    layout = "EMI" if lab.emi else "Grim"
    print(f"[+] {args.archive}: {len(lab)} member(s), {layout} layout", file=sys.stderr)

    if args.extract:
        missing = 0
        for name in args.extract:
            entry = lab.find(name)
            if entry is None:
                print(f"[!] {name} not found in archive", file=sys.stderr)
                missing += 1
                continue
            destination = args.out_dir / Path(entry.name.replace("\\", "/")).name
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(lab.read(entry.name))
            print(f"[+] Extracted {entry.name} -> {destination}", file=sys.stderr)
        return 1 if missing else 0

    entries = (entry for entry in lab if fnmatch.fnmatch(entry.name.lower(), args.pattern.lower()))
    if args.limit is not None:
        entries = itertools.islice(entries, args.limit)
    count = 0
    for entry in entries:
        print(describe_entry(entry))
        count += 1
    if count == 0:
        print("No members matched the requested pattern.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
