# seed_users.py
"""
Register demo users through UsersService against the configured store.

Usage:
  THINGFUL_STORAGE_BACKEND=postgres THINGFUL_DB_DSN=postgresql://... \
      python seed_users.py --count 20 --password 'Secret1!' --out seeded_users.jsonl
"""
import argparse
import json
import time
from datetime import datetime, timezone

from thingful.config import settings
from thingful.storage.storage_factory import get_user_store
from thingful.users.users_service import RegistrationError, UsersService


def now_iso():
    return datetime.now(timezone.utc).isoformat()


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--backend", default=None, help="memory or postgres (default: env)")
    ap.add_argument("--dsn", default=None, help="postgres DSN (default: env)")
    ap.add_argument("--count", type=int, default=10, help="users to register")
    ap.add_argument("--prefix", default="demo", help="user name prefix")
    ap.add_argument("--password", default="Secret1!", help="password for every seeded user")
    ap.add_argument("--rounds", type=int, default=settings.BCRYPT_ROUNDS, help="bcrypt cost")
    ap.add_argument("--init-schema", action="store_true", help="create thingful_users first (postgres)")
    ap.add_argument("--out", default=None, help="write created users as JSON lines")
    args = ap.parse_args(argv)

    kwargs = {"dsn": args.dsn} if args.dsn else {}
    store = get_user_store(args.backend, **kwargs)
    if args.init_schema and hasattr(store, "ensure_schema"):
        store.ensure_schema()
    service = UsersService(store=store, rounds=args.rounds)

    start_iso = now_iso()
    t0 = time.perf_counter()
    created, skipped = [], 0
    for i in range(args.count):
        payload = {
            "user_name": f"{args.prefix}{i}",
            "full_name": f"Demo User {i}",
            "nickname": f"{args.prefix.upper()}{i}",
            "password": args.password,
        }
        try:
            created.append(service.register(payload))
        except RegistrationError as err:
            skipped += 1
            print(f"skip {payload['user_name']}: {err.message}")

    if args.out:
        with open(args.out, "w", encoding="utf-8") as outf:
            for user in created:
                outf.write(json.dumps(user, default=str) + "\n")

    dt = time.perf_counter() - t0
    print(f"START: {start_iso}")
    print(f"END:   {now_iso()}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"CREATED: {len(created)}/{args.count} users ({skipped} skipped)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
