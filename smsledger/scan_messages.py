"""
scan_messages.py
----------------
Run the SMS parser over a file of messages and print what each one
parsed to, followed by a success-rate summary.

Input is either a JSON export of the device inbox (``--json``) or a plain
text file with one message per blank-line-separated block.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .config import settings
from .message_source import JsonExportSource, MessageFilter, read_template_messages
from .sms_parser import extract


def load_bodies(path: Path, as_json: bool, max_count: int, days_back: int) -> List[str]:
    if as_json:
        source = JsonExportSource(path)
        messages = source.list_messages(MessageFilter(max_count=max_count, days_back=days_back))
        return [message.body for message in messages]
    return read_template_messages(path)


def report(bodies: Sequence[str]) -> int:
    """Print one block per message and a summary. Returns the parsed count."""

    print("=" * 60)
    print("SMS Parser Results")
    print("=" * 60)
    print(f"Total SMS messages: {len(bodies)}\n")

    parsed_count = 0
    for i, body in enumerate(bodies, 1):
        preview = body[:80].replace("\n", " ")
        print(f"\n--- Message {i} ---")
        print(f"SMS: {preview}...")

        transaction = extract(body)
        if transaction is None:
            print("[FAIL] no dialect matched")
            continue

        parsed_count += 1
        print(f"[OK] {transaction.dialect}")
        print(f"  Amount:       Rs {transaction.amount}")
        print(f"  Counterparty: {transaction.counterparty}")
        print(f"  Category:     {transaction.category}")
        print(f"  Date:         {transaction.occurred_at.isoformat()}")
        print(f"  Type:         {transaction.direction}")
        if transaction.account_hint is not None:
            hint = transaction.account_hint
            print(f"  Account:      {hint.issuer_name} {hint.kind} ending {hint.last_four_digits}")

    total = len(bodies)
    rate = (parsed_count / total * 100) if total else 0.0
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(f"Successfully parsed: {parsed_count}/{total}")
    print(f"Failed to parse: {total - parsed_count}/{total}")
    print(f"Success rate: {rate:.1f}%")
    print("=" * 60)
    return parsed_count


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Parse bank SMS messages from a file")
    parser.add_argument("path", type=Path, help="Text file of messages, or a JSON inbox export with --json")
    parser.add_argument("--json", action="store_true", help="Read a JSON inbox export")
    parser.add_argument("--max-count", type=int, default=settings.max_count)
    parser.add_argument("--days-back", type=int, default=settings.days_back)
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level)

    if not args.path.exists():
        parser.error(f"{args.path} does not exist")

    bodies = load_bodies(args.path, args.json, args.max_count, args.days_back)
    report(bodies)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
