#!/usr/bin/env python3
"""
AuthGate -- Shared-session authentication for apps on sibling subdomains.

Usage:
  python main.py serve
  python main.py serve --port 9000 --reload
  python main.py check <token>

Environment variables (see core/config.py):
  JWT_SECRET        Signing secret, at least 32 characters. Required unless DEBUG=true.
  MASTER_PASSWORD   The single password that unlocks a session. Required.
  COOKIE_DOMAIN     Cookie scope shared by the apps, e.g. ".fly.dev".
  HOST / PORT       Listen address for `serve` (default 0.0.0.0:8080).
"""

import argparse
import json
import sys
from datetime import datetime, timezone
from typing import Optional

from core.config import get_settings


def _serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "asgi:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


def _check(token: str) -> int:
    """Decode a token with the configured secret and print its claims.

    Returns the process exit code: 0 when valid, 1 otherwise.
    """
    from auth.tokens import decode_token

    claims = decode_token(token.strip())
    if claims is None:
        print("  [!] Token is not valid (bad signature, malformed, or expired).")
        return 1
    expires = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
    print(json.dumps(claims, indent=2))
    print(f"\n  Valid until {expires.isoformat()}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="authgate",
        description="Shared-session authentication gateway.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py serve
  PORT=9000 python main.py serve
  python main.py check eyJhbGciOiJIUzI1NiIs...
        """,
    )
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=None, help="Listen address (default: HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, default=None, help="Listen port (default: PORT or 8080)")
    serve.add_argument("--reload", action="store_true", help="Restart on code changes (development)")

    check = sub.add_parser("check", help="Verify a token offline with the configured JWT_SECRET")
    check.add_argument("token", help="Encoded token to verify")

    args = parser.parse_args(argv)

    if args.command == "serve":
        _serve(args.host, args.port, args.reload)
        return 0
    if args.command == "check":
        return _check(args.token)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
