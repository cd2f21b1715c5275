"""CLI parser construction for polychat.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

from ...base.constants import TIMEOUT_MODEL_DEFAULT
from ...config.defaults import (
    DEFAULT_MAX_RETRY,
    PROVIDER_CLI_DEFAULT_MODEL,
    PROVIDER_CLI_DEFAULT_SLEEP_MS,
    PROVIDER_CLI_STDOUT,
)


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with ``run`` (default) and ``models`` subcommands.

    Design
    ------
    This function performs no side effects and wires only argument shapes.
    """
    p = argparse.ArgumentParser(prog="polychat", description="Send one chat turn to an LLM provider")
    sub = p.add_subparsers(dest="cmd")

    # run
    p_run = sub.add_parser("run", help="Send a message file to a model (default)")
    p_run.add_argument("-i", "--input", required=True, help="YAML/JSON file holding the message list")
    p_run.add_argument("-o", "--output", default=PROVIDER_CLI_STDOUT, help="File that receives the conversation plus the reply (STDOUT prints only the reply)")
    p_run.add_argument("-m", "--model", default=PROVIDER_CLI_DEFAULT_MODEL)
    p_run.add_argument("--api-key", default=None)
    p_run.add_argument("--temperature", type=float, default=None)
    p_run.add_argument("--max-tokens", type=int, default=None)
    p_run.add_argument("--frequency-penalty", type=float, default=None)
    p_run.add_argument("--max-retry", type=int, default=DEFAULT_MAX_RETRY)
    p_run.add_argument(
        "--sleep-between-retries",
        type=int,
        default=PROVIDER_CLI_DEFAULT_SLEEP_MS,
        help="milliseconds",
    )
    p_run.add_argument(
        "--timeout",
        default=TIMEOUT_MODEL_DEFAULT,
        help="'d' = model default, 'n' = none, otherwise milliseconds",
    )
    p_run.add_argument("--json", action="store_true", help="Require the reply to be a JSON value")
    p_run.add_argument("--dump-pdl-at", default=None)
    p_run.add_argument("--dump-json-at", default=None)
    p_run.add_argument("--record-api-usage-at", default=None)
    p_run.add_argument("--models-file", default=None, help="Catalog file (overrides POLYCHAT_MODELS_FILE)")
    p_run.add_argument("--dry-run", action="store_true", help="Print the resolved plan without sending")

    # models
    p_models = sub.add_parser("models", help="List the model catalog")
    p_models.add_argument("--models-file", default=None)
    p_models.add_argument("--json", action="store_true")

    return p


__all__ = ["build_parser"]
