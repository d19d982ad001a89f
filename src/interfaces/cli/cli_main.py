import argparse
import json
import sys

from ...core.app import CoreApp, configure_logging
from ...core.errors import BookmarkError
from ...core.identity import id_for_book
from ...core.models import normalize_authors


def _print_json(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _cmd_list(app, args):
    entries = app.bookmarks.get_all()
    if args.by_added:
        df = app.data_processor.sort_by_added(app.data_processor.to_frame(entries))
        order = {bookmark_id: n for n, bookmark_id in enumerate(df['id'])}
        entries = sorted(entries, key=lambda e: order[e.id])
    if args.json:
        _print_json([e.to_dict() for e in entries])
        return 0
    if not entries:
        print("No bookmarks yet.")
        return 0
    for e in entries:
        line = f"{e.id}  {e.title or 'Unknown Title'} - {e.author or 'Unknown Author'}"
        if e.review:
            line += f"  [{e.review}]"
        print(line)
    return 0


def _cmd_add(app, args):
    if not (args.key or args.title):
        print("Error: give at least --key or --title", file=sys.stderr)
        return 1
    book = {}
    if args.key:
        book["key"] = args.key
    if args.title:
        book["title"] = args.title
    if args.author:
        book["author_name"] = args.author
    if args.cover:
        book["cover_i"] = args.cover
    if args.review:
        book["review"] = args.review
    app.bookmarks.add(book)
    print(f"Bookmarked {id_for_book(book)}")
    return 0


def _cmd_remove(app, args):
    before = app.bookmarks.is_bookmarked(args.id)
    app.bookmarks.remove(args.id)
    print(f"Removed {args.id}" if before else f"Not bookmarked: {args.id}")
    return 0


def _cmd_review(app, args):
    app.bookmarks.update(args.id, {"review": args.text})
    print(f"Saved review for {args.id}")
    return 0


def _cmd_check(app, args):
    bookmarked = app.bookmarks.is_bookmarked(args.id)
    print("yes" if bookmarked else "no")
    return 0 if bookmarked else 2


def _cmd_search(app, args):
    results = app.search_catalog(args.query)
    if not results:
        print("No results found.")
        return 0

    bookmarked = {e.id for e in app.bookmarks.get_all()}
    for number, doc in enumerate(results, start=1):
        mark = "*" if id_for_book(doc) in bookmarked else " "
        authors = ", ".join(normalize_authors(doc.get("author_name"))) or "Unknown Author"
        print(f"{number:>3} {mark} {doc.get('title', 'Unknown Title')} - {authors}")

    if args.bookmark is not None:
        if not 1 <= args.bookmark <= len(results):
            print(f"No result number {args.bookmark}", file=sys.stderr)
            return 1
        doc = results[args.bookmark - 1]
        app.bookmarks.add(doc)
        print(f"\nBookmarked {id_for_book(doc)}")
    return 0


def _cmd_export(app, args):
    path = app.export_bookmarks(args.path)
    print(f"Exported bookmarks to {path}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Book Finder bookmarks")
    parser.add_argument("--config", default="config/settings.json", help="Settings file")
    parser.add_argument("--bookmarks", help="Bookmark file (overrides settings)")
    parser.add_argument("--log-level", help="Logging level (overrides settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="Show bookmarks, most recent first")
    p.add_argument("--json", action="store_true", help="Print the raw entries as JSON")
    p.add_argument("--by-added", action="store_true", help="Order by date bookmarked instead of last activity")
    p.set_defaults(func=_cmd_list)

    p = sub.add_parser("add", help="Bookmark a book")
    p.add_argument("--key", help="Catalog key, e.g. /works/OL1W")
    p.add_argument("--title")
    p.add_argument("--author", action="append", help="Author name (repeatable)")
    p.add_argument("--cover", type=int, help="Cover image id")
    p.add_argument("--review")
    p.set_defaults(func=_cmd_add)

    p = sub.add_parser("remove", help="Remove a bookmark by id")
    p.add_argument("id")
    p.set_defaults(func=_cmd_remove)

    p = sub.add_parser("review", help="Set the review text of a bookmark")
    p.add_argument("id")
    p.add_argument("text")
    p.set_defaults(func=_cmd_review)

    p = sub.add_parser("check", help="Exit 0 if the id is bookmarked, 2 if not")
    p.add_argument("id")
    p.set_defaults(func=_cmd_check)

    p = sub.add_parser("search", help="Search the catalog")
    p.add_argument("query")
    p.add_argument("--bookmark", type=int, metavar="N", help="Bookmark result number N")
    p.set_defaults(func=_cmd_search)

    p = sub.add_parser("export", help="Export bookmarks to JSON or CSV")
    p.add_argument("path")
    p.set_defaults(func=_cmd_export)
    return parser


def run(argv=None):
    args = build_parser().parse_args(argv)

    # 1. Initialize App
    try:
        app = CoreApp(args.config, bookmarks_path=args.bookmarks)
    except Exception as e:
        print(f"Initialization Error: {e}", file=sys.stderr)
        return 1
    configure_logging(args.log_level or app.settings.log_level)

    # 2. Dispatch
    try:
        return args.func(app, args)
    except BookmarkError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        app.close()


if __name__ == "__main__":
    sys.exit(run())
