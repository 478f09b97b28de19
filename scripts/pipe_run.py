"""Start or stop a pipe run from the command line.

Usage:
    python scripts/pipe_run.py create --user u1 --pipe p1 --workflow workflow.json
    python scripts/pipe_run.py stop --user u1 --pipe p1 --run r1 --in-cluster --kill

Endpoints and the token are read from PIPEKIT_* environment variables.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from pipekit.client import PipekitAPI, create_api
from pipekit.core.config import PipekitSettings
from pipekit.core.context import RequestContext
from pipekit.core.exceptions import PipekitError
from pipekit.core.log import configure_logging
from pipekit.models.meta import CreateOptions, DeleteOptions, PipekitMeta
from pipekit.models.pipe import Pipe


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Start or stop Pipekit pipe runs")
    parser.add_argument("--token", default=None, help="Bearer token (default: PIPEKIT_AUTH_TOKEN)")
    parser.add_argument("--timeout", type=float, default=None, help="Call deadline in seconds")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Submit a pipe for execution")
    create.add_argument("--user", required=True, help="User id")
    create.add_argument("--pipe", required=True, help="Pipe id")
    create.add_argument("--workflow", required=True, type=Path, help="Workflow definition (JSON)")
    create.add_argument("--pipe-name", default="", help="Human-readable pipe name")
    create.add_argument("--cluster", default="", help="Target cluster")
    create.add_argument("--namespace", default="", help="Target namespace")
    create.add_argument("--secrets-environment", default="", help="Secrets environment tag")
    create.add_argument("--tag", action="append", dest="tags", default=None, help="Tag (repeatable)")
    create.add_argument("--in-cluster", action="store_true", help="Run directly on the cluster")

    stop = sub.add_parser("stop", help="Stop a running pipe")
    stop.add_argument("--user", required=True, help="User id")
    stop.add_argument("--pipe", required=True, help="Pipe id")
    stop.add_argument("--run", required=True, help="Run id")
    stop.add_argument("--in-cluster", action="store_true", help="Stop directly on the cluster")
    stop.add_argument("--kill", action="store_true", help="Terminate forcibly instead of a graceful stop")
    return parser


def load_pipe(args: argparse.Namespace) -> Pipe:
    workflow: dict[str, Any] = json.loads(args.workflow.read_text())
    return Pipe(
        pipekit=PipekitMeta(
            pipe_name=args.pipe_name,
            user_id=args.user,
            pipe_id=args.pipe,
            cluster=args.cluster,
            namespace=args.namespace,
            secrets_environment=args.secrets_environment,
            tags=args.tags,
        ),
        argo=workflow,
    )


async def run(api: PipekitAPI, args: argparse.Namespace) -> str:
    """Execute the parsed command; returns the text to print."""
    ctx = RequestContext(token=args.token, timeout=args.timeout)
    async with api:
        if args.command == "create":
            pipe = await api.pipes.create(ctx, load_pipe(args), CreateOptions(is_in_cluster=args.in_cluster))
            return pipe.model_dump_json(by_alias=True, indent=2)
        await api.pipes.stop(
            ctx, args.user, args.pipe, args.run,
            DeleteOptions(is_in_cluster=args.in_cluster, should_kill=args.kill),
        )
        return f"Stopped run {args.run}"


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = PipekitSettings()
    configure_logging(settings.log_level)

    try:
        output = asyncio.run(run(create_api(settings), args))
    except PipekitError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
