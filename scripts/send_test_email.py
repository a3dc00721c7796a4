#!/usr/bin/env python3
"""
Dev helper: send a test email request to the local Mail Relay backend.

Builds a valid POST /email body and sends it with the bearer secret from the
environment (or a .env file in the project root or backend/).

Usage
-----
# Basic: plain-text message to the given address, targeting localhost:8000
python scripts/send_test_email.py --to someone@example.com

# Add an HTML part alongside the plain-text one
python scripts/send_test_email.py --to someone@example.com --html "<p>Hello</p>"

# Target a different backend URL
python scripts/send_test_email.py --to someone@example.com --url http://staging.example.com

# Print the body without sending
python scripts/send_test_email.py --to someone@example.com --dry-run

Environment / .env
------------------
AUTH_SECRET   Bearer secret expected by the backend (required unless --secret).
"""

import argparse
import json
import os
import sys
import textwrap
from pathlib import Path

import httpx
from dotenv import load_dotenv


def _build_payload(
    from_email: str,
    from_name: str,
    to_email: str,
    subject: str,
    text: str,
    html: str | None,
) -> dict:
    content = [{"type": "text/plain", "value": text}]
    if html:
        content.append({"type": "text/html", "value": html})
    return {
        "from": {"email": from_email, "name": from_name},
        "to": {"email": to_email},
        "subject": subject,
        "content": content,
    }


def _print_response(response: httpx.Response) -> None:
    status = response.status_code
    symbol = "OK" if status == 200 else "FAIL"
    print(f"\n[{symbol}] HTTP {status}")
    if response.headers.get("content-type", "").startswith("application/json"):
        print(json.dumps(response.json(), indent=2))
    else:
        print(response.text)


def main() -> int:
    # scripts/ lives one level below the project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    load_dotenv(project_root / "backend" / ".env")

    parser = argparse.ArgumentParser(
        prog="send_test_email.py",
        description=textwrap.dedent("""\
            Send a test email request to the Mail Relay backend.

            Reads AUTH_SECRET from the environment or a .env file.
        """),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--to", dest="to_email", required=True, help="Recipient address")
    parser.add_argument(
        "--url",
        default="http://localhost:8000",
        help="Backend base URL (default: http://localhost:8000)",
    )
    parser.add_argument(
        "--from",
        dest="from_email",
        default="noreply@example.com",
        help="Sender address (default: noreply@example.com)",
    )
    parser.add_argument("--from-name", default="Mail Relay", help='Sender name (default: "Mail Relay")')
    parser.add_argument("--subject", default="Test email", help='Subject (default: "Test email")')
    parser.add_argument("--text", default="This is a test email.", help="Plain-text body")
    parser.add_argument("--html", default=None, help="Optional HTML body")
    parser.add_argument("--secret", default=None, help="Override AUTH_SECRET")
    parser.add_argument("--dry-run", action="store_true", help="Print the body without sending it.")

    args = parser.parse_args()

    secret = args.secret or os.getenv("AUTH_SECRET", "")
    if not secret and not args.dry_run:
        print(
            "ERROR: No auth secret found.\n"
            "Set AUTH_SECRET in your environment or .env file, or pass --secret.",
            file=sys.stderr,
        )
        return 1

    payload = _build_payload(
        from_email=args.from_email,
        from_name=args.from_name,
        to_email=args.to_email,
        subject=args.subject,
        text=args.text,
        html=args.html,
    )
    endpoint = f"{args.url.rstrip('/')}/email"

    print(f"Endpoint : {endpoint}")
    print(f"From     : {args.from_name} <{args.from_email}>")
    print(f"To       : {args.to_email}")
    print(f"Subject  : {args.subject}")

    if args.dry_run:
        print("\n[DRY RUN] Payload:")
        print(json.dumps(payload, indent=2))
        return 0

    try:
        response = httpx.post(
            endpoint,
            json=payload,
            headers={"Authorization": f"Bearer {secret}"},
            timeout=30,
        )
    except httpx.HTTPError as exc:
        print(f"\nERROR: Request failed: {exc}", file=sys.stderr)
        return 1

    _print_response(response)
    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
