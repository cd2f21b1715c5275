"""CLI action handlers.

Purpose
-------
Subcommand handlers for the polychat CLI, keeping the entrypoint minimal
(thin presentation layer). This module has no top-level side effects and is
safe to import in tests.

Input format
------------
``--input`` names a YAML or JSON file with the already-resolved conversation:
either a list of ``{role, content}`` mappings or a mapping with a
``messages`` list. Content is a string or a list of parts
(``{type: text, text}`` / ``{type: image, media_type, data}``).

Fallback & Error Semantics
--------------------------
- ``--dry-run`` resolves the model and credential presence without network I/O.
- ``--output FILE`` receives the conversation plus the reply as ``<|role|>``
  blocks; the default ``STDOUT`` prints only the reply.
- A response without any text choice is a provider error (exit code 1).
- Provider errors are reported on stderr as JSON and return exit code 1;
  unreadable or malformed input files return exit code 2.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

import yaml

from ...base.errors import MalformedResponseError, ProviderError
from ...base.logging import get_logger, log_event
from ...base.models_parts.chat_request import ChatRequest
from ...base.models_parts.message import Message, message_from_dict
from ...base.models_parts.model import Model
from ...base.models_parts.raw_model_config import RawModelConfig
from ...base.timeouts import TimeoutOption
from ...catalog import resolve
from ...config import KeyLookup, env_lookup, resolve_api_key
from ...config.defaults import DEFAULT_SCHEMA_MAX_TRY, PROVIDER_CLI_STDOUT
from ..model_catalog_loader import load_models
from ..orchestrator import ChatOrchestrator
from ..side_channels import render_prompt

_logger = get_logger("polychat.cli")


def load_messages(path: str) -> List[Message]:
    """Read the conversation file named by ``--input``.

    Raises
    ------
    ValueError
        If the document is not a message list or a message is malformed.
    OSError
        If the file cannot be read.
    """
    text = Path(path).read_text(encoding="utf-8")
    doc: Any = json.loads(text) if path.lower().endswith(".json") else yaml.safe_load(text)
    if isinstance(doc, dict):
        doc = doc.get("messages")
    if not isinstance(doc, list) or not doc:
        raise ValueError(f"{path}: expected a non-empty list of messages")
    out: List[Message] = []
    for idx, item in enumerate(doc):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: message #{idx} must be a mapping")
        try:
            out.append(message_from_dict(item))
        except ValueError as exc:
            raise ValueError(f"{path}: message #{idx}: {exc}") from exc
    return out


def plan_run(model: Model, messages: List[Message], timeout: TimeoutOption, lookup: KeyLookup) -> Dict[str, Any]:
    """Return a JSON-serializable description of what ``run`` would send."""
    try:
        resolve_api_key(model, lookup)
        key_present = True
    except ProviderError:
        key_present = False
    return {
        "model": model.name,
        "api_name": model.api_name,
        "provider": model.provider_name,
        "endpoint": model.endpoint,
        "api_key_present": key_present or model.is_test(),
        "messages": len(messages),
        "timeout_s": timeout.resolve(model),
    }


def _emit_error(exc: Exception, stderr: TextIO) -> None:
    payload: Dict[str, Any] = {"error": type(exc).__name__, "message": str(exc)}
    code = getattr(exc, "code", None)
    if code is not None:
        payload["code"] = code.value
    candidates = getattr(exc, "candidates", None)
    if candidates:
        payload["candidates"] = list(candidates)
    stderr.write(json.dumps(payload) + "\n")


def _write_output(target: str, messages: List[Message], text: str, stdout: TextIO) -> None:
    """Print the bare reply, or write the conversation plus reply to ``target``."""
    if target == PROVIDER_CLI_STDOUT:
        stdout.write(text)
        if not text.endswith("\n"):
            stdout.write("\n")
        return
    Path(target).write_text(render_prompt(messages, text), encoding="utf-8")


def handle_run(
    args: argparse.Namespace,
    *,
    orchestrator: Optional[ChatOrchestrator] = None,
    lookup: Optional[KeyLookup] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Execute the ``run`` subcommand.

    Returns
    -------
    int
        0 on success, 1 on provider errors, 2 on invalid input.
    """
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    key_lookup = lookup or env_lookup
    try:
        messages = load_messages(args.input)
        timeout = TimeoutOption.parse(args.timeout)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        _emit_error(exc, err)
        return 2

    try:
        model = resolve(load_models(args.models_file, key_lookup), args.model)
        if args.dry_run:
            out.write(json.dumps(plan_run(model, messages, timeout, key_lookup)) + "\n")
            return 0
        request = ChatRequest.create(
            messages,
            model,
            timeout=timeout,
            temperature=args.temperature,
            max_tokens=args.max_tokens,
            frequency_penalty=args.frequency_penalty,
            api_key=args.api_key,
            max_retry=args.max_retry,
            sleep_between_retries=args.sleep_between_retries / 1000,
            dump_pdl_at=args.dump_pdl_at,
            dump_json_at=args.dump_json_at,
            record_api_usage_at=args.record_api_usage_at,
            schema_max_try=DEFAULT_SCHEMA_MAX_TRY,
        )
        orch = orchestrator or ChatOrchestrator(key_lookup=key_lookup)
        if args.json:
            value = asyncio.run(orch.send_and_validate(request))
            text = json.dumps(value, ensure_ascii=False)
        else:
            response = asyncio.run(orch.send(request))
            if not response.messages:
                raise MalformedResponseError("response carried no text choice", provider=model.provider_name)
            text = response.get_message(0)
        _write_output(args.output, messages, text, out)
    except ProviderError as exc:
        log_event(_logger, "cli.run.failed", code=exc.code.value, error=exc.message)
        _emit_error(exc, err)
        return 1
    except (OSError, ValueError) as exc:
        _emit_error(exc, err)
        return 2
    return 0


def handle_models(
    args: argparse.Namespace,
    *,
    lookup: Optional[KeyLookup] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Execute the ``models`` subcommand: list the active catalog."""
    out = stdout or sys.stdout
    try:
        models = load_models(args.models_file, lookup or env_lookup)
    except (OSError, ValueError, ProviderError) as exc:
        _emit_error(exc, stderr or sys.stderr)
        return 2
    if args.json:
        out.write(json.dumps([RawModelConfig.from_model(m).model_dump() for m in models], indent=2) + "\n")
        return 0
    for m in models:
        images = "images" if m.can_read_images else "-"
        out.write(f"{m.name}\t{m.provider_name}\t{m.api_name}\t{images}\n")
    return 0


__all__ = ["load_messages", "plan_run", "handle_run", "handle_models"]
