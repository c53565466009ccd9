"""CLI: run a single tool call against a fresh browser session. For the servers, use: python run_server.py."""
import argparse
import base64
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from bridge_app.core.config import get_settings
from bridge_app.main import build_dispatcher
from browser_tools import EmbeddedResource, ImageContent


def _print_tools(dispatcher) -> None:
    for d in dispatcher.catalog.list():
        params = ", ".join(p.name + ("" if p.required else "?") for p in d.params)
        print(f"{d.name}({params}) - {d.description}")


def _write_blob(out_dir: Path, stem: str, data: str, suffix: str) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{stem}{suffix}"
    path.write_bytes(base64.b64decode(data))
    return path


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run one browser tool call.")
    parser.add_argument("tool", nargs="?", help="Tool name (see --list)")
    parser.add_argument("--args", default="{}", help='Tool arguments as JSON, e.g. \'{"url": "https://example.com"}\'')
    parser.add_argument("--list", action="store_true", help="List available tools and exit")
    parser.add_argument("--out", type=Path, help="Directory to write image/PDF blocks to")
    opts = parser.parse_args(argv)

    dispatcher = build_dispatcher(get_settings())
    if opts.list or not opts.tool:
        _print_tools(dispatcher)
        return 0

    try:
        arguments = json.loads(opts.args)
    except json.JSONDecodeError as e:
        parser.error(f"--args is not valid JSON: {e}")

    try:
        result = dispatcher.execute(opts.tool, arguments)
    finally:
        dispatcher.session.close()

    for i, block in enumerate(result.content):
        if isinstance(block, ImageContent):
            size = len(base64.b64decode(block.data))
            print(f"[image {block.mime_type}, {size} bytes]")
            if opts.out:
                print(f"  saved to {_write_blob(opts.out, f'{opts.tool}-{i}', block.data, '.png')}")
        elif isinstance(block, EmbeddedResource):
            size = len(base64.b64decode(block.resource.blob))
            print(f"[resource {block.resource.mime_type}, {size} bytes]")
            if opts.out:
                print(f"  saved to {_write_blob(opts.out, f'{opts.tool}-{i}', block.resource.blob, '.pdf')}")
        else:
            print(block.text)
    return 1 if result.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
