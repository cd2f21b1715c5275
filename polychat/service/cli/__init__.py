"""polychat CLI (package entrypoint).

Argument parsing lives in ``cli_parser`` and the subcommand bodies in
``cli_actions``; this module only picks the handler. ``run`` is implied when
the first argument is not a known subcommand, so ``polychat -i msgs.yaml``
is a complete invocation.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import handle_models, handle_run
from .cli_parser import build_parser

_HANDLERS = {"run": handle_run, "models": handle_models}


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    parser = build_parser()
    argv_list = list(sys.argv[1:] if argv is None else argv)
    if not argv_list or argv_list[0] not in {*_HANDLERS, "-h", "--help"}:
        argv_list = ["run"] + argv_list
    args = parser.parse_args(argv_list)
    handler = _HANDLERS.get(args.cmd, handle_run)
    return handler(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
