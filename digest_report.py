"""Hash a batch of texts and write the digests as a YAML report.

For each input text, this script:
1. Encodes it as UTF-8 and runs SHA-256 block by block
2. Records the digest in the requested format (and, with --trace, the
   chaining value after every block)
3. Dumps the collected results as YAML to stdout or to --output

Usage:
    python digest_report.py "first text" "second text"
    python digest_report.py --examples --format base64
    python digest_report.py --input texts.txt --trace --output report.yaml
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, Iterable, List, Optional, TextIO, Tuple

import yaml

from digest import OUTPUT_FORMATS, encode_digest, finalize_digest, validate_format
from errors import DigestError
from padding import encode_text
from sha256_cli import iter_hash_states


# Preset texts offered by the SHA-256 generator page.
EXAMPLE_TEXTS: Tuple[Tuple[str, str], ...] = (
    ("text", "Hello, World!"),
    ("password", "MySecurePassword123"),
    ("email", "user@example.com"),
    ("url", "https://www.example.com/page"),
)


def read_input_file(stream: TextIO) -> List[Tuple[str, str]]:
    """Read one text per line; labels are ``line N``."""
    return [
        (f"line {lineno}", line.rstrip("\r\n"))
        for lineno, line in enumerate(stream, start=1)
    ]


def _report_entry(label: str, text: str, fmt: str, trace: bool) -> Dict:
    data = encode_text(text)
    states = list(iter_hash_states(data))

    entry: Dict = {
        "label": label,
        "text": text,
        "utf8_bytes": len(data),
        "blocks": len(states),
        "digest": encode_digest(finalize_digest(states[-1]), fmt),
    }
    if trace:
        entry["chaining_values"] = [
            [f"{word:08x}" for word in state] for state in states
        ]
    return entry


def build_report(
    entries: Iterable[Tuple[str, str]], fmt: str = "hex", trace: bool = False
) -> Dict:
    """Hash each ``(label, text)`` pair and collect the results."""
    tag = validate_format(fmt)
    inputs = [_report_entry(label, text, tag, trace) for label, text in entries]
    return {
        "format": tag,
        "total_inputs": len(inputs),
        "inputs": inputs,
    }


def write_report(report: Dict, stream: TextIO) -> None:
    yaml.dump(report, stream, default_flow_style=False, sort_keys=False, allow_unicode=True)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Hash a batch of texts with SHA-256 and write a YAML report"
    )
    parser.add_argument(
        "texts",
        nargs="*",
        help="Texts to hash",
    )
    parser.add_argument(
        "--examples",
        action="store_true",
        help="Include the preset example texts",
    )
    parser.add_argument(
        "--input",
        type=str,
        help="UTF-8 file with one text per line",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=OUTPUT_FORMATS,
        default="hex",
        help="Digest encoding: hex or base64 (default: hex)",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Record the hash state after every block",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Write the YAML report to this path (default: stdout)",
    )
    args = parser.parse_args(argv)

    entries: List[Tuple[str, str]] = [
        (f"arg {i}", text) for i, text in enumerate(args.texts, start=1)
    ]
    if args.examples:
        entries.extend(EXAMPLE_TEXTS)
    if args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                entries.extend(read_input_file(f))
        except (OSError, UnicodeDecodeError) as e:
            sys.stderr.write(f"error: cannot read '{args.input}': {e}\n")
            return 1

    if not entries:
        sys.stderr.write("error: no input texts (pass TEXT, --examples or --input)\n")
        return 1

    try:
        report = build_report(entries, args.format, args.trace)
    except DigestError as e:
        sys.stderr.write(f"error: {e}\n")
        return 1

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                write_report(report, f)
        except OSError as e:
            sys.stderr.write(f"error: cannot write '{args.output}': {e}\n")
            return 1
        sys.stderr.write(f"Saved {report['total_inputs']} digests to {args.output}\n")
    else:
        write_report(report, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
