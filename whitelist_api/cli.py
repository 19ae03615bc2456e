"""CLI for the technician whitelist: run the server, create the table, check a number."""

from __future__ import annotations

import argparse
import asyncio
import sys


def cmd_serve(args):
    import uvicorn

    uvicorn.run(
        "whitelist_api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


async def cmd_init_db(args):
    """Create the tecnicos table on the configured database."""
    from whitelist_api.config import get_settings
    from whitelist_api.db.engine import build_engine, create_tables

    settings = get_settings()
    engine = build_engine(settings)
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()
    print(f"Table 'tecnicos' ready on {engine.url.render_as_string(hide_password=True)}")


async def cmd_check(args):
    """Run the chatbot authorization check for one phone number."""
    from whitelist_api.config import get_settings
    from whitelist_api.db.engine import build_engine, build_session_factory
    from whitelist_api.services.verification import check_technician

    settings = get_settings()
    engine = build_engine(settings)
    try:
        async with build_session_factory(engine)() as db:
            result = await check_technician(db, args.telefone)
    finally:
        await engine.dispose()

    print(result.message)
    return result.authorized


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(prog="whitelist-api", description="Technician whitelist API")
    sub = parser.add_subparsers(dest="command")

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=3000)
    p_serve.add_argument("--reload", action="store_true")

    sub.add_parser("init-db", help="Create the tecnicos table")

    p_check = sub.add_parser("check", help="Check whether a phone number is authorized")
    p_check.add_argument("telefone")

    args = parser.parse_args(argv)

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "check":
        if not asyncio.run(cmd_check(args)):
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
