from __future__ import annotations

import argparse
import json
import sys

import requests


def _print(obj) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def _body(r: requests.Response):
    try:
        return r.json()
    except ValueError:
        return {"status_code": r.status_code, "detail": r.text}


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="SwitchBoard CLI")
    p.add_argument("--api", default="http://localhost:8080", help="Dashboard base URL")
    p.add_argument("--timeout", type=float, default=10, help="Request timeout in seconds")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("services", help="List configured services and the poll interval")
    sub.add_parser("status", help="Show the current status of every service")

    s_tog = sub.add_parser("toggle", help="Start or stop a service")
    mode = s_tog.add_mutually_exclusive_group(required=True)
    mode.add_argument("--up", metavar="SERVICE", help="Start SERVICE")
    mode.add_argument("--down", metavar="SERVICE", help="Stop SERVICE")

    args = p.parse_args(argv)

    base = args.api.rstrip("/")

    if args.cmd == "services":
        r = requests.get(f"{base}/api/config", timeout=args.timeout)
        _print(_body(r))
        return 0 if r.ok else 1

    if args.cmd == "status":
        r = requests.get(f"{base}/api/status", timeout=args.timeout)
        _print(_body(r))
        return 0 if r.ok else 1

    if args.cmd == "toggle":
        payload = {"up": args.up} if args.up else {"down": args.down}
        r = requests.post(f"{base}/api/toggle", json=payload, timeout=args.timeout)
        _print(_body(r))
        return 0 if r.ok else 1

    return 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
