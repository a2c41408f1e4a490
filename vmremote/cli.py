"""CLI entry points for the VM remote keyword server."""

from __future__ import annotations

import argparse
from datetime import datetime
from typing import List, Optional

from vmremote.config import parse_env
from vmremote.constants import DEFAULT_HOST, DEFAULT_PORT, STOP_KEYWORD
from vmremote.exceptions import RemoteServerError
from vmremote.models import ServerConfig
from vmremote.server import create_server
from vmremote.utils import log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vmremote",
        description="Robot Framework remote library server for virtual machine management",
        epilog="Example: vmremote --host 192.168.0.10 --port 8080",
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        metavar="ADDRESS",
        help=f"IP address or host name to bind the server to (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--port",
        default=str(DEFAULT_PORT),
        metavar="PORT",
        help=f"Port to bind the server to (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--nostopsvr",
        action="store_true",
        help=f"Ignore remote '{STOP_KEYWORD}' requests (remote shutdown is allowed by default)",
    )
    return parser


def print_startup_banner(config: ServerConfig, port: int) -> None:
    lines: List[str] = []
    lines.append(
        f"  Remote library {config.library_class} started at {config.host} on port {port}, "
        f"on {datetime.now():%Y-%m-%d %H:%M:%S}"
    )
    lines.append("")
    if config.allow_stop:
        lines.append("  To stop the server, send XML-RPC method request 'run_keyword' with")
        lines.append(f"  single argument of '{STOP_KEYWORD}', or hit Ctrl+C.")
    else:
        lines.append("  Remote shutdown is disabled (--nostopsvr); hit Ctrl+C to stop the server.")

    max_len = max(len(line) for line in lines)
    border_len = max_len + 2
    banner_colour = "\033[0;36m"
    reset = "\033[0m"
    print(f"{banner_colour}{'=' * border_len}{reset}", flush=True)
    for line in lines:
        print(f"{banner_colour}{line}{reset}", flush=True)
    print(f"{banner_colour}{'=' * border_len}{reset}", flush=True)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = parse_env(args)
        server = create_server(config)
    except RemoteServerError as exc:
        log("ERROR", str(exc))
        return 1
    except OSError as exc:
        log("ERROR", f"Cannot listen on {args.host}:{args.port}: {exc}")
        return 1

    if config.doc_file is None:
        log("INFO", "Keyword documentation: none")
    elif server.service.resolver.source is None:
        log("WARN", f"Keyword documentation: unavailable ({config.doc_file})")
    else:
        log("INFO", f"Keyword documentation: {config.doc_file}")
    log("INFO", f"Keywords: {', '.join(server.service.get_keyword_names())}")
    print_startup_banner(config, server.port)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        log("INFO", "Interrupted; stopping remote server")
    finally:
        server.server_close()
    return 0
