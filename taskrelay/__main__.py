#!/usr/bin/env python3
"""
Run one handler and print its result envelope as JSON on stdout.

    python -m taskrelay query '{"prompt": "2+2?"}'
    python -m taskrelay agent '{"task": "what time is it?"}'
    python -m taskrelay agent '[{"app": "math", "func": "calculate", "args": ["2*21"], "task": "x"}]'

Params may also be piped on stdin when the positional argument is omitted.
"""

import argparse
import asyncio
import json
import logging
import sys

from taskrelay.agent.tools import default_registry
from taskrelay.core.config import Settings
from taskrelay.schemas.envelope import ResultEnvelope
from taskrelay.services.query_service import QueryHandler
from taskrelay.services.task_service import TaskHandler


def run(command: str, params: object, settings: Settings) -> ResultEnvelope:
    if command == "agent":
        handler = TaskHandler(settings, default_registry)
    else:
        handler = QueryHandler(settings)
    return asyncio.run(handler.run(params))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="taskrelay", description="Run the agent or query handler once.")
    parser.add_argument("command", choices=["agent", "query"])
    parser.add_argument("params", nargs="?", help="JSON params (object or one-element list). Reads stdin if omitted.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr at INFO level.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, stream=sys.stderr)

    raw = args.params if args.params is not None else sys.stdin.read()
    try:
        params = json.loads(raw) if raw.strip() else {}
    except json.JSONDecodeError as e:
        result = ResultEnvelope.fail(f"Invalid JSON params: {e}")
    else:
        result = run(args.command, params, Settings.from_env())

    print(result.model_dump_json())
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
