import argparse
import sys

from userbase.config import settings, setup_logging
from userbase.database import create_store_engine
from userbase.errors import StoreUnavailable
from userbase.migrations import apply_schema, revert_schema
from userbase.seeds import seed_users


def _migrate(args: argparse.Namespace) -> int:
    applied = apply_schema(create_store_engine(settings.database_url))
    if not applied:
        print("Already up to date")
    for name in applied:
        print(f"Applied {name}")
    return 0


def _rollback(args: argparse.Namespace) -> int:
    reverted = revert_schema(create_store_engine(settings.database_url))
    if not reverted:
        print("Nothing to revert")
    for name in reverted:
        print(f"Reverted {name}")
    return 0


def _seed(args: argparse.Namespace) -> int:
    count = seed_users(create_store_engine(settings.database_url))
    print(f"Seeded {count} users")
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "userbase.main:app",
        host=settings.host if args.host is None else args.host,
        port=settings.port if args.port is None else args.port,
        log_level=settings.log_level.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="userbase")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("migrate", help="apply pending migrations").set_defaults(func=_migrate)
    commands.add_parser("rollback", help="revert applied migrations").set_defaults(func=_rollback)
    commands.add_parser("seed", help="replace users with fixture rows").set_defaults(func=_seed)
    serve = commands.add_parser("serve", help="run the HTTP service")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.set_defaults(func=_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings.log_level)
    try:
        return args.func(args)
    except StoreUnavailable as exc:
        print(f"error: {exc}: {exc.__cause__}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
