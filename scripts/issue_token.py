"""Print a development bearer token for calling the API locally."""

from __future__ import annotations

import argparse
from datetime import timedelta

from notification_center.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue a signed bearer token.")
    parser.add_argument("user_id", help="Value of the ``sub`` claim")
    parser.add_argument("--role", default="member", help="Role claim (use 'admin' for admin routes)")
    parser.add_argument("--minutes", type=int, default=60, help="Token lifetime in minutes")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    print(create_access_token(args.user_id, role=args.role, expires_delta=timedelta(minutes=args.minutes)))


if __name__ == "__main__":
    main()
