#!/usr/bin/env python3
"""
Create an administrator account in the Todo API SQLite database, or
reset the password of an existing one.

The script never reads or reveals existing passwords.  It stores a new
PBKDF2-HMAC-SHA256 hash ("salthex$hashhex") and sets the role to ADMIN.
Migrations are applied first, so it also works on an empty database.

Usage:
    python create_admin.py --db ./todo_api.db --login admin --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sys

from todo_api.app.core.config import settings


def main() -> None:
    ap = argparse.ArgumentParser(description="Create or reset a Todo API administrator (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file. Defaults to DATABASE_URL.")
    ap.add_argument("--login", required=True, help="Administrator login")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    if args.db:
        settings.database_url = os.path.abspath(args.db)

    # Imported after the database path is final.
    from todo_api.app.core.db import init_db
    from todo_api.app.core.security import hash_password
    from todo_api.app.repositories.account_repository import AccountRecord, AccountRepository
    from todo_api.app.schemas.identity import Role

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    init_db()
    accounts = AccountRepository()
    password_hash = hash_password(new_password)
    if accounts.exists(args.login):
        accounts.update_password(args.login, password_hash)
        accounts.update_role(args.login, Role.ADMIN)
        print(f"[+] Password reset and ADMIN role set for: {args.login}")
    else:
        accounts.insert(AccountRecord(login=args.login, password_hash=password_hash, role=Role.ADMIN))
        print(f"[+] Administrator created: {args.login}")


if __name__ == "__main__":
    main()
