#!/usr/bin/env python3
"""
Convert a binary EMI set (``*.setb``) into the tab-delimited text report.

Usage:
    python setb2set.py FILE.setb
    python setb2set.py ARCHIVE.lab FILE.setb [--output FILE.set] [--json summary.json]

With two positionals the first one is a LAB archive; the member is looked up
there first and then on disk.  The report goes to stdout unless --output is
given; progress lines always go to stderr.

Exit codes:
    0 -> success
    1 -> source unavailable / decoding error
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from emiset import DiagnosticLog, LabArchive, SetbError, decode_scene, load_source, render_scene


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert a binary EMI set file into the text set report.")
    parser.add_argument("source", help="Set file, or a LAB archive when MEMBER is given")
    parser.add_argument("member", nargs="?", help="Set file name to resolve inside the archive (falls back to disk)")
    parser.add_argument("--output", type=Path, help="Write the report here instead of stdout")
    parser.add_argument("--json", type=Path, help="Optional destination for a JSON summary of the decoded scene")
    parser.add_argument("--diagnostics", type=Path, help="Write decoder diagnostics (unknown tags, degenerate sectors) to this path")
    parser.add_argument("--strict", action="store_true", help="Fail on sector type tags that are not recognized")
    parser.add_argument(
        "--corrected-counts",
        action="store_true",
        help="Print the real light count instead of the historical 'numlights 0' line",
    )
    parser.add_argument(
        "--legacy-normal",
        action="store_true",
        help="Use the negated Y normal component found in older setb2set reports",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.member:
        lab_path, filename = Path(args.source), args.member
    else:
        lab_path, filename = None, args.source

    diagnostics = DiagnosticLog(args.diagnostics)
    try:
        lab = LabArchive.open(lab_path) if lab_path is not None else None
        if lab is not None:
            print(f"[+] Loaded archive {lab_path} ({len(lab)} entries)", file=sys.stderr)
        data = load_source(filename, lab)
        print(f"[+] Loaded {filename} ({len(data)} bytes)", file=sys.stderr)
        scene = decode_scene(
            data,
            strict=args.strict,
            legacy_normal=args.legacy_normal,
            diagnostics=diagnostics,
        )
    except OSError as exc:
        print(f"[error] Could not open file {exc.filename or lab_path}: {exc.strerror}", file=sys.stderr)
        return 1
    except SetbError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    finally:
        diagnostics.flush()

    print(
        f"[+] Decoded {len(scene.setups)} setup(s), {len(scene.lights)} light(s) "
        f"and {len(scene.sectors)} sector(s)",
        file=sys.stderr,
    )
    if diagnostics.entries:
        print(f"[!] Diagnostics: {diagnostics.summary()}", file=sys.stderr)

    report = render_scene(scene, corrected_counts=args.corrected_counts)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(report, encoding="latin-1", newline="\n")
        print(f"[+] Report written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.flush()
        sys.stdout.buffer.write(report.encode("latin-1"))
        sys.stdout.buffer.flush()

    if args.json:
        bundle = {"source": filename, "archive": str(lab_path) if lab_path else None, "scene": scene.to_dict()}
        args.json.write_text(json.dumps(bundle, indent=2), encoding="utf-8")
        print(f"[+] JSON summary written to {args.json}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
