from __future__ import annotations

import argparse
import json
import sys
from typing import Any

import httpx


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat proxy client")
    parser.add_argument("--url", default="http://localhost:8000/api/chat")
    parser.add_argument(
        "--message",
        default="What is your experience?",
        help="User message to send.",
    )
    parser.add_argument(
        "--origin",
        default=None,
        help="Origin header to send, to check the proxy's CORS answer.",
    )
    parser.add_argument(
        "--preflight",
        action="store_true",
        help="Send an OPTIONS preflight before the message.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print the request payload and response headers.",
    )
    return parser.parse_args()


def _print_cors(resp: httpx.Response) -> None:
    for name in (
        "access-control-allow-origin",
        "access-control-allow-headers",
        "access-control-allow-methods",
    ):
        print(f"[debug] {name}: {resp.headers.get(name)}")


def _show(data: dict[str, Any]) -> None:
    if "reply" in data:
        reply = data["reply"]
        print(reply if reply else "[empty reply]")
    elif "error" in data:
        print(f"[error] {data['error']}")
    else:
        print(json.dumps(data))


def main() -> None:
    args = _parse_args()
    headers = {"Origin": args.origin} if args.origin else {}
    payload = {"message": args.message}

    with httpx.Client(timeout=30.0, headers=headers) as client:
        if args.preflight:
            resp = client.options(args.url)
            print(f"[info] preflight status={resp.status_code}")
            if args.debug:
                _print_cors(resp)

        if args.debug:
            print(f"[debug] url={args.url}")
            print(f"[debug] payload={json.dumps(payload, ensure_ascii=False)}")

        resp = client.post(args.url, json=payload)
        if args.debug:
            print(f"[debug] status={resp.status_code}")
            _print_cors(resp)

    try:
        data = resp.json()
    except json.JSONDecodeError:
        print(resp.text)
        raise SystemExit(1)

    _show(data)
    if resp.status_code >= 400:
        sys.exit(1)


if __name__ == "__main__":
    main()
