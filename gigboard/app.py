import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from . import __version__
from .env import Settings, load_env
from .errors import GigError
from .logger import get_logger
from .models import Gig, GigPayload
from .schema import validate_payload
from .service import GigService, open_service


def _open(args: argparse.Namespace) -> GigService:
    return open_service(Path(args.db))


def _require_caller(args: argparse.Namespace) -> str:
    if not args.caller:
        raise SystemExit("No caller identity. Pass --caller or set GIGBOARD_CALLER.")
    return args.caller


def _print_gig(gig: Gig) -> None:
    print(json.dumps(gig.to_dict(), indent=2, ensure_ascii=False))


def _load_payload(args: argparse.Namespace) -> GigPayload:
    if args.input:
        input_path = Path(args.input)
        if not input_path.exists():
            raise SystemExit(f"Input file not found: {input_path}")
        with input_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        data = {"title": args.title, "description": args.description or "", "deadline": args.deadline}
        data = {k: v for k, v in data.items() if v is not None}

    errors = validate_payload(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    return GigPayload.from_dict(data)


def cmd_post(args: argparse.Namespace) -> None:
    caller = _require_caller(args)
    payload = _load_payload(args)
    _print_gig(_open(args).post(caller, payload))


def cmd_assign(args: argparse.Namespace) -> None:
    caller = _require_caller(args)
    _print_gig(_open(args).assign(caller, args.id, args.worker))


def cmd_approve(args: argparse.Namespace) -> None:
    caller = _require_caller(args)
    _print_gig(_open(args).approve(caller, args.id))


def cmd_update(args: argparse.Namespace) -> None:
    caller = _require_caller(args)
    payload = _load_payload(args)
    _print_gig(_open(args).update(caller, args.id, payload))


def cmd_delete(args: argparse.Namespace) -> None:
    caller = _require_caller(args)
    print(_open(args).delete(caller, args.id))


def cmd_get(args: argparse.Namespace) -> None:
    gig = _open(args).get(args.id)
    if gig is None:
        print(f"Gig {args.id} not found.")
        return
    _print_gig(gig)


def cmd_list(args: argparse.Namespace) -> None:
    gigs = _open(args).list()
    if not gigs:
        print("No gigs in store.")
        return
    print(json.dumps([g.to_dict() for g in gigs], indent=2, ensure_ascii=False))


def cmd_validate(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    errors = validate_payload(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_stats(args: argparse.Namespace) -> None:
    service = _open(args)
    print(f"Gigs stored: {service.store.count()}")
    print(f"Last issued id: {service.allocator.current()}")


def _add_payload_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--title", help="Gig title")
    p.add_argument("--description", help="Gig description")
    p.add_argument("--deadline", type=int, help="Deadline timestamp")
    p.add_argument("--input", help="Path to payload JSON (overrides the flags above)")


def main(argv: Optional[List[str]] = None):
    load_env()
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(prog="gigboard", description="Post, assign and approve gigs")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", default=str(settings.db_path), help=f"Path to SQLite database (default: {settings.db_path})")
    parser.add_argument("--caller", default=settings.caller, help="Identity performing the operation (or set GIGBOARD_CALLER)")

    subparsers = parser.add_subparsers(dest="command")

    pst = subparsers.add_parser("post", help="Post a new gig owned by the caller")
    _add_payload_args(pst)
    pst.set_defaults(func=cmd_post)

    asg = subparsers.add_parser("assign", help="Assign an open gig to a worker")
    asg.add_argument("--id", type=int, required=True, help="Gig id")
    asg.add_argument("--worker", required=True, help="Worker identity")
    asg.set_defaults(func=cmd_assign)

    apr = subparsers.add_parser("approve", help="Approve a gig")
    apr.add_argument("--id", type=int, required=True, help="Gig id")
    apr.set_defaults(func=cmd_approve)

    upd = subparsers.add_parser("update", help="Replace a gig's title, description and deadline")
    upd.add_argument("--id", type=int, required=True, help="Gig id")
    _add_payload_args(upd)
    upd.set_defaults(func=cmd_update)

    dlt = subparsers.add_parser("delete", help="Delete a gig")
    dlt.add_argument("--id", type=int, required=True, help="Gig id")
    dlt.set_defaults(func=cmd_delete)

    gt = subparsers.add_parser("get", help="Show one gig")
    gt.add_argument("--id", type=int, required=True, help="Gig id")
    gt.set_defaults(func=cmd_get)

    lst = subparsers.add_parser("list", help="List all gigs by id")
    lst.set_defaults(func=cmd_list)

    val = subparsers.add_parser("validate", help="Validate a payload JSON file")
    val.add_argument("--input", required=True, help="Path to payload JSON input")
    val.set_defaults(func=cmd_validate)

    sts = subparsers.add_parser("stats", help="Show store size and last issued id")
    sts.set_defaults(func=cmd_stats)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)
    try:
        args.func(args)
    except GigError as e:
        raise SystemExit(f"Error: {e}")
    finally:
        logger.log_metrics_summary(level=logging.DEBUG)


if __name__ == "__main__":
    main()
