#!/usr/bin/env python3
"""
Issue a bearer token for a caller principal.

The token is signed with ``SECRET_KEY`` from the environment, so run
this with the same configuration as the server.

Usage:
    python create_token.py --principal alice --days 30
"""

import argparse

from blog_service.app.core.config import settings
from blog_service.app.core.security import create_access_token


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue a Blog Service access token.")
    ap.add_argument("--principal", required=True, help="Caller identity to embed as the token subject")
    ap.add_argument("--days", type=int, default=365, help="Token lifetime in days (default: 365)")
    args = ap.parse_args()

    token = create_access_token(args.principal, settings.secret_key, args.days * 24 * 60 * 60)
    print(token)


if __name__ == "__main__":
    main()
