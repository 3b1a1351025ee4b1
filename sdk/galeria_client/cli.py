"""CLI: galeria upload | list | show."""
import argparse
import json
import sys
from pathlib import Path

import httpx

from .client import GaleriaClient, error_message


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="galeria", description="Upload and list files on a Galeria server")
    parser.add_argument("--base-url", default="http://localhost:3001", help="API base URL")
    sub = parser.add_subparsers(dest="command", required=True)

    # upload
    p_upload = sub.add_parser("upload", help="Upload an image or PDF")
    p_upload.add_argument("file", help="Local file path")
    p_upload.add_argument("--name", default=None, help="Custom display name (sanitized by the server)")
    p_upload.set_defaults(func=cmd_upload)

    # list
    p_list = sub.add_parser("list", help="List stored files")
    p_list.set_defaults(func=cmd_list)

    # show
    p_show = sub.add_parser("show", help="Show metadata for one stored file")
    p_show.add_argument("nombre", help="Stored filename")
    p_show.set_defaults(func=cmd_show)

    args = parser.parse_args(argv)
    client = GaleriaClient(base_url=args.base_url)
    try:
        return args.func(client, args)
    except httpx.HTTPStatusError as e:
        print(f"Error: {error_message(e)}", file=sys.stderr)
        return 1
    except (httpx.HTTPError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        client.close()


def cmd_upload(client: GaleriaClient, args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not path.is_file():
        print(f"Missing file: {path}", file=sys.stderr)
        return 1
    out = client.upload(path, fullname=args.name)
    print(json.dumps(out, indent=2, ensure_ascii=False))
    print(f"Stored as: {out['archivo']}", file=sys.stderr)
    return 0


def cmd_list(client: GaleriaClient, args: argparse.Namespace) -> int:
    out = client.list_images()
    print(json.dumps(out, indent=2, ensure_ascii=False))
    print(f"{len(out)} files", file=sys.stderr)
    return 0


def cmd_show(client: GaleriaClient, args: argparse.Namespace) -> int:
    print(json.dumps(client.get_image(args.nombre), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
