#!/usr/bin/env python3
"""
CLI for the single-file vector store.

Usage:
    python -m src.cli init --store ~/vectors.json --embedding-size 3
    python -m src.cli add --store ~/vectors.json --content "hello" --embedding "[1, 0, 0]"
    python -m src.cli search --store ~/vectors.json --embedding "[1, 0, 0]" --top-k 3
    python -m src.cli stats --store ~/vectors.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from src.vecstore import (
    PathPolicy,
    StoreConfig,
    VectorStore,
    VectorStoreError,
    install_shutdown_handlers,
)


logger = logging.getLogger("cli")


def _load_env() -> None:
    """Load .env from project root, falling back to the working directory."""
    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        load_dotenv()


def _parse_embedding(raw: str) -> List[float]:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"embedding must be a JSON array: {e}")
    if not isinstance(value, list):
        raise argparse.ArgumentTypeError("embedding must be a JSON array")
    return value


def _open_store(args) -> VectorStore:
    policy = PathPolicy(allowed_root=Path(args.allowed_root)) if args.allowed_root else PathPolicy()
    return VectorStore(StoreConfig.from_env(), path_policy=policy)


def cmd_init(args):
    """Create a store or check an existing one."""
    with _open_store(args) as store:
        store.configure(Path(args.store).expanduser(), args.embedding_size)
        stats = store.get_stats()
    print(f"Store ready: {stats['path']} (embedding size {stats['embedding_size']}, "
          f"{stats['document_count']} documents)")


def cmd_add(args):
    """Add one document."""
    with _open_store(args) as store:
        store.configure(Path(args.store).expanduser())
        store.add_document(args.content, args.embedding)
    print("Document added.")


def cmd_search(args):
    """Search for similar documents."""
    with _open_store(args) as store:
        store.configure(Path(args.store).expanduser())
        results = store.search(args.embedding, k=args.top_k)

    if not results:
        print("No results found.")
        return

    print(f"\nFound {len(results)} result(s):\n")

    for i, result in enumerate(results, 1):
        print(f"─── Result {i} (score: {result.score:.3f}) ───")
        print(f"Timestamp: {result.timestamp}")
        print(f"Content:\n{result.content[:500]}")
        print()


def cmd_stats(args):
    """Show store statistics."""
    with _open_store(args) as store:
        store.configure(Path(args.store).expanduser())
        stats = store.get_stats()

    print("\n=== Store Statistics ===")
    print(f"Store: {stats['path']}")
    print(f"Embedding size: {stats['embedding_size']}")
    print(f"Documents: {stats['document_count']} / {stats['max_store_size']}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Single-file document store with embedding search",
    )
    parser.add_argument(
        "--allowed-root",
        default=None,
        help="Directory store files must live in (default: home directory)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create or check a store")
    init_parser.add_argument("--store", required=True, help="Store file path (.json)")
    init_parser.add_argument("--embedding-size", type=int, default=None,
                             help="Embedding size (required for a new store)")
    init_parser.set_defaults(func=cmd_init)

    add_parser = subparsers.add_parser("add", help="Add a document")
    add_parser.add_argument("--store", required=True, help="Store file path (.json)")
    add_parser.add_argument("--content", required=True, help="Document text")
    add_parser.add_argument("--embedding", required=True, type=_parse_embedding,
                            help="Embedding as a JSON array")
    add_parser.set_defaults(func=cmd_add)

    search_parser = subparsers.add_parser("search", help="Search similar documents")
    search_parser.add_argument("--store", required=True, help="Store file path (.json)")
    search_parser.add_argument("--embedding", required=True, type=_parse_embedding,
                               help="Query embedding as a JSON array")
    search_parser.add_argument("--top-k", type=int, default=5, help="Number of results")
    search_parser.set_defaults(func=cmd_search)

    stats_parser = subparsers.add_parser("stats", help="Show store statistics")
    stats_parser.add_argument("--store", required=True, help="Store file path (.json)")
    stats_parser.set_defaults(func=cmd_stats)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    _load_env()

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    install_shutdown_handlers()

    try:
        args.func(args)
    except VectorStoreError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
