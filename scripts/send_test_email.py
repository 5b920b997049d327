#!/usr/bin/env python3
"""
Dev helper: send a test email request to the local notification service.

Builds a send request, attaches the shared secret header and POST-s it to
/email/send (or /notification/send).

Usage
-----
# Basic: targets localhost:3000, sender local-part "test"
python scripts/send_test_email.py --to you@example.org

# Custom sender local-part and subject
python scripts/send_test_email.py --to you@example.org --from alerts --subject "Ping"

# Use the notification route
python scripts/send_test_email.py --to you@example.org --route notification

# Target a different service URL
python scripts/send_test_email.py --to you@example.org --url http://staging.example.com

Environment / .env
------------------
AUTH_HEADER_KEY   Shared secret sent in the auth-secret-key header (required).
PORT              Used to build the default URL (default: 3000).
"""

import argparse
import json
import os
import sys
import textwrap

import httpx
from dotenv import load_dotenv

AUTH_HEADER = "auth-secret-key"


def _build_payload(sender: str, to: str, subject: str) -> dict:
    html = textwrap.dedent(
        f"""\
        <h1>{subject}</h1>
        <p>This is a test message from the notification service dev helper.</p>
        """
    )
    return {"from": sender, "to": to, "subject": subject, "html": html}


def _print_response(response: httpx.Response) -> None:
    label = "OK" if response.status_code == 200 else "FAIL"
    print(f"\n[{label}] HTTP {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Send a test email through the local service.")
    parser.add_argument("--to", required=True, help="Recipient address")
    parser.add_argument("--from", dest="sender", default="test", help="Sender local-part (default: test)")
    parser.add_argument("--subject", default="Notification service test", help="Subject line")
    parser.add_argument(
        "--route",
        choices=["email", "notification"],
        default="email",
        help="Which send route to call (default: email)",
    )
    parser.add_argument(
        "--url",
        default=f"http://localhost:{os.getenv('PORT', '3000')}",
        help="Base URL of the service",
    )
    args = parser.parse_args(argv)

    secret = os.getenv("AUTH_HEADER_KEY", "")
    if not secret:
        print("ERROR: AUTH_HEADER_KEY is not set (environment or .env)", file=sys.stderr)
        return 1

    endpoint = f"{args.url.rstrip('/')}/{args.route}/send"
    payload = _build_payload(args.sender, args.to, args.subject)

    print(f"POST {endpoint}")
    print(f"  to:      {args.to}")
    print(f"  from:    {args.sender}@<EMAIL_DOMAIN>")
    print(f"  subject: {args.subject}")

    try:
        response = httpx.post(
            endpoint,
            json=payload,
            headers={AUTH_HEADER: secret},
            timeout=30,
        )
    except httpx.ConnectError:
        print(
            f"\nERROR: Could not connect to {endpoint}\n"
            "Is the service running? Start it with:\n"
            "  pip install -e . && notifier",
            file=sys.stderr,
        )
        return 1
    except httpx.HTTPError as exc:
        print(f"\nERROR: {exc}", file=sys.stderr)
        return 1

    _print_response(response)
    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
