import argparse
import logging
import sys

from eventfinder import __version__
from eventfinder.client.api import GatewayClient, GatewayError
from eventfinder.client.state import FavoritesStore, SearchSession
from eventfinder.client.toast import ToastBus
from eventfinder.client.views import SearchView
from eventfinder.exceptions import ConfigurationException

logger = logging.getLogger("main")


def _serve(args):
    from eventfinder.app import configure_logging, run
    from eventfinder.settings import load_settings

    try:
        settings = load_settings(config_file=args.config)
        configure_logging(settings)
        run(host=args.host, port=args.port, settings=settings)
    except ConfigurationException as e:
        logger.critical(f"Cannot start EventFinder: {e.message}")
        return 1
    return 0


def _print_event(event):
    when = ", ".join(p for p in (event.date, event.time) if p)
    where = ", ".join(p for p in (event.venue, event.city) if p)
    print(f"{event.id}  {event.name}")
    print(f"    {when or 'date TBA'} | {event.category or '-'} | {where or '-'}")


def _search(args):
    api = GatewayClient(args.api)
    view = SearchView(api, SearchSession(), FavoritesStore(api), ToastBus())
    view.keywords = args.keyword or ""
    view.category = args.category
    view.distance = args.radius
    if args.lat is not None and args.lon is not None:
        view.auto_detect_location = True
        view.lat, view.lon = args.lat, args.lon
    elif args.auto:
        view.set_auto_detect(True)
        if view.loc_error:
            print(view.loc_error, file=sys.stderr)
    if not view.auto_detect_location:
        view.location = args.city or ""

    events = view.search()
    if events is None:
        print(view.loc_error, file=sys.stderr)
        return 1
    if view.no_results:
        print("No results available.")
        return 0
    for event in events:
        _print_event(event)
    return 0


def _suggest(args):
    api = GatewayClient(args.api)
    try:
        for name in api.suggest(args.keyword):
            print(name)
    except GatewayError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


def _favorites(args):
    api = GatewayClient(args.api)
    try:
        if args.action == "remove":
            if not args.event_id:
                print("Error: an event id is required.", file=sys.stderr)
                return 1
            api.remove_favorite(args.event_id)
            print(f"Removed {args.event_id} from favorites.")
            return 0

        favorites = api.list_favorites()
    except GatewayError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if not favorites:
        print("No favorite events to show.")
    for event in favorites:
        _print_event(event)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="eventfinder",
        description="Live event search with artist enrichment and favorites",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--api", default="http://localhost:8080", metavar="URL",
        help="Base URL of a running gateway (client commands)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    sp_serve = subparsers.add_parser("serve", help="Run the HTTP gateway")
    sp_serve.add_argument("--host", default=None)
    sp_serve.add_argument("--port", type=int, default=None)
    sp_serve.add_argument("--config", default=None, metavar="PATH", help="Path to settings.yaml")
    sp_serve.set_defaults(func=_serve)

    # search
    sp_search = subparsers.add_parser("search", help="Search events through the gateway")
    sp_search.add_argument("keyword", nargs="?", default="")
    sp_search.add_argument("--category", default="all",
                           help="all, music, sports, 'arts & theatre', film or miscellaneous")
    sp_search.add_argument("--city", default=None)
    sp_search.add_argument("--lat", type=float, default=None)
    sp_search.add_argument("--lon", type=float, default=None)
    sp_search.add_argument("--auto", action="store_true", help="Locate by the gateway's IP")
    sp_search.add_argument("--radius", type=int, default=10)
    sp_search.set_defaults(func=_search)

    # suggest
    sp_suggest = subparsers.add_parser("suggest", help="Keyword autocomplete")
    sp_suggest.add_argument("keyword")
    sp_suggest.set_defaults(func=_suggest)

    # favorites
    sp_fav = subparsers.add_parser("favorites", help="List or remove favorites")
    sp_fav.add_argument("action", nargs="?", choices=["list", "remove"], default="list")
    sp_fav.add_argument("event_id", nargs="?")
    sp_fav.set_defaults(func=_favorites)

    args = parser.parse_args(argv)
    if args.command != "serve":
        logging.basicConfig(level=logging.WARNING)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
