"""Print a long-lived access token for an existing login.

Usage:
    python create_token.py admin --days 365
"""
import argparse

from todo_api.app.core.security import create_access_token


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue a Todo API bearer token.")
    ap.add_argument("login", help="Account login stored in the token subject")
    ap.add_argument("--days", type=int, default=365, help="Token lifetime in days")
    args = ap.parse_args()
    print(create_access_token(args.login, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
