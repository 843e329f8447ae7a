#!/usr/bin/env python3
"""CLI entrypoint that runs one disclosure check through the request handler."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
import os
from typing import Optional

# Ensure project root is on PYTHONPATH
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from config.settings import APIConfig
from core.request_handler import build_pipeline, handle_disclosure_request


logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)


def _read_text(text: Optional[str], path: Optional[str]) -> str:
    if text is not None:
        return text
    if path:
        text_path = Path(path)
        if not text_path.exists():
            raise FileNotFoundError(text_path)
        return text_path.read_text(encoding="utf-8")
    return sys.stdin.read()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Check a post for disclosure request risk")
    parser.add_argument("text", nargs="?", help="Post text (reads stdin when omitted)")
    parser.add_argument("--file", help="Read the post text from a UTF-8 file")
    parser.add_argument("--model", help="Override LLM model (e.g. gemini-2.5-flash, gpt-4o, claude-3-5-sonnet-20241022)")
    parser.add_argument("--debug", action="store_true", help="Log fired heuristic rules and token usage")

    args = parser.parse_args(argv)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    text = _read_text(args.text, args.file)
    pipeline = build_pipeline(APIConfig.from_env(), model=args.model)
    status, payload = handle_disclosure_request("POST", {"tweetText": text}, pipeline=pipeline)

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0 if status == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
