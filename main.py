# main.py
import argparse
import asyncio
import getpass
import sys

if sys.platform.startswith("win"):
    from asyncio import WindowsSelectorEventLoopPolicy
    asyncio.set_event_loop_policy(WindowsSelectorEventLoopPolicy())

from newsdesk.data_manager.models import MediaFile, NewsDraft
from newsdesk.di import build_services
from newsdesk.services.auth_service import hash_secret


def _confirm(question: str) -> bool:
    return input(f"{question} [y/N] ").strip().lower() in ("y", "yes")


def _read_media(path, kind: str):
    """Unreadable media is skipped with a notice; the item is still published."""
    if not path:
        return None
    try:
        return MediaFile.from_path(path)
    except OSError as e:
        print(f"Could not read {kind} file {path}: {e.strerror or e}. Publishing without it.")
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="newsdesk", description="Publish and manage site news.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="show published news, newest first")

    pub = sub.add_parser("publish", help="publish a news item (asks for the PIN)")
    pub.add_argument("--title", required=True)
    pub.add_argument("--content", required=True)
    pub.add_argument("--link", default="")
    pub.add_argument("--image", help="path to an image file")
    pub.add_argument("--video", help="path to a video file")

    rm = sub.add_parser("delete", help="delete one news item by id")
    rm.add_argument("id")
    rm.add_argument("--yes", action="store_true", help="skip confirmation")

    clr = sub.add_parser("clear", help="delete ALL news items (admin PIN required)")
    clr.add_argument("--yes", action="store_true", help="skip confirmation")

    conf = sub.add_parser("configure", help="store remote endpoint and key in local settings")
    conf.add_argument("url")
    conf.add_argument("key")

    sub.add_parser("hash-pin", help="print the digest to put in config.yml for a PIN")
    return parser


async def run(args) -> int:
    if args.command == "hash-pin":
        print(hash_secret(getpass.getpass("PIN: ")))
        return 0

    svc = build_services()
    pipeline = svc.pipeline
    try:
        if args.command == "list":
            items = await pipeline.list_news()
            if not items:
                print("No news updates available at the moment.")
            for it in items:
                stamp = it.date.isoformat(timespec="minutes") if it.date else "-"
                print(f"[{it.id}] {stamp} | {it.author or 'Admin'} | {it.title}")
            return 0

        if args.command == "configure":
            svc.resolver.store_sync_settings(args.url, args.key)
            print("Remote store settings saved.")
            return 0

        if args.command == "publish":
            draft = NewsDraft(title=args.title, content=args.content, link_url=args.link)
            image = _read_media(args.image, "image")
            video = _read_media(args.video, "video")
            result = await pipeline.publish(draft, getpass.getpass("Publish PIN: "), image, video)
        elif args.command == "delete":
            result = await pipeline.delete_one(args.id, confirm=None if args.yes else _confirm)
        else:  # clear
            confirm = None if args.yes else _confirm
            if confirm is not None and not confirm("WARNING: This will delete ALL news items. Are you sure?"):
                print("Clear cancelled.")
                return 1
            result = await pipeline.clear_all(getpass.getpass("Admin PIN: "))

        print(result.message)
        return 0 if result.ok else 1
    finally:
        svc.db_client.close()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
