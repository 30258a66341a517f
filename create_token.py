#!/usr/bin/env python3
"""
Issue a session token for manual testing of the session endpoints.

The token is signed with ``SECRET_KEY`` (or ``AUTH_SECRET``) exactly as
the web front end signs its session tokens.

Usage:
    python create_token.py --email admin@example.com --name "Admin" --days 365
"""

import argparse

from user_post_api.app.core.security import create_access_token


def main():
    ap = argparse.ArgumentParser(description="Create a session token.")
    ap.add_argument("--email", required=True, help="Email of the signed-in user")
    ap.add_argument("--name", help="Display name")
    ap.add_argument("--picture", help="Avatar URL")
    ap.add_argument("--days", type=int, default=30, help="Lifetime in days")
    args = ap.parse_args()

    claims = {"sub": args.email, "email": args.email}
    if args.name:
        claims["name"] = args.name
    if args.picture:
        claims["picture"] = args.picture
    print(create_access_token(claims, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
