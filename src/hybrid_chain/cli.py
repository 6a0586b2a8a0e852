"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

import anyio

from hybrid_chain.display import render_result
from hybrid_chain.input_adaptors import FileInput, InputAdaptor, TextInput
from hybrid_chain.models.chain_result import ChainResult
from hybrid_chain.orchestrator import ChainRunner


async def run_chain(runner: ChainRunner, chain_id: str, input_adaptor: InputAdaptor) -> ChainResult:
    return await runner.run_async(chain_id, input_adaptor)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hybrid-chain")
    parser.add_argument("--chains-dir", type=str, default="chains")
    parser.add_argument("--chain", type=str)
    parser.add_argument("--list", action="store_true", help="List available chains and exit")
    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument("--input", type=str, help="Path to an input file")
    input_group.add_argument("--input-text", type=str, help="Raw input text")
    parser.add_argument("--show-invisible", action="store_true", help="Print the result even when suppressed")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    package_root = Path(__file__).resolve().parent
    chain_roots = [Path(args.chains_dir), package_root / "chains"]
    runner = ChainRunner(chain_roots)

    if args.list:
        for chain_id, description in runner.registry.describe().items():
            print(f"{chain_id}\t{description}" if description else chain_id)
        return
    if args.chain is None:
        parser.error("--chain is required unless --list is given")
    if args.input is None and args.input_text is None:
        parser.error("one of --input or --input-text is required")

    input_adaptor: InputAdaptor
    if args.input_text is not None:
        input_adaptor = TextInput(args.input_text)
    else:
        input_adaptor = FileInput(Path(args.input))

    result: Any = anyio.run(run_chain, runner, args.chain, input_adaptor)
    out = render_result(result, show_invisible=args.show_invisible)
    if out is not None:
        print(out)
