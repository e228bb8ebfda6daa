import argparse, os, sys, time

from . import __version__
from .errors import SiteError
from .log import log
from .site import Site


def cmd_build(args):
    site = Site().load(os.getcwd())
    if args.skip_pages:
        log("Skipping building pages as told.")
    else:
        site.build_pages()
    if args.skip_assets:
        log("Skipping building assets as told.")
    else:
        site.build_assets()


def cmd_release(args):
    Site().load(os.getcwd()).release()


def cmd_server(args):
    from .server import DevServer

    site = Site().load(os.getcwd())
    if not args.skip_build:
        site.build()
    port = args.port if args.port is not None else (site.config.local_port or 0)
    server = DevServer(site, port, auto_build=not args.skip_auto_build, debug=args.debug)
    server.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        server.stop()


def cmd_init(args):
    site = Site().create(args.site_path, force=args.force)
    log(f"Created site {site.site_name} at {site.site_path}")


def cmd_version(args):
    print(f"sitesmith {__version__}")


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sitesmith", description="Static site builder with templates and partials.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("build", help="Build the full site, pages and assets")
    p.add_argument("--skip-assets", action="store_true", help="Skip copying assets")
    p.add_argument("--skip-pages", action="store_true", help="Skip building pages")
    p.set_defaults(func=cmd_build)

    p = sub.add_parser("release", help="Build the site into the release folder")
    p.set_defaults(func=cmd_release)

    p = sub.add_parser("server", help="Serve the site output locally, rebuilding on changes")
    p.add_argument("--port", type=int, default=None, help="Port, otherwise the config local_port")
    p.add_argument("--skip-build", action="store_true", help="Don't build before serving")
    p.add_argument("--skip-auto-build", action="store_true", help="Don't rebuild when files change")
    p.add_argument("--debug", action="store_true", help="Show full output during rebuilds")
    p.set_defaults(func=cmd_server)

    p = sub.add_parser("init", help="Create a new site from the starter scaffold")
    p.add_argument("site_path")
    p.add_argument("--force", action="store_true", help="Use the folder even if it exists")
    p.set_defaults(func=cmd_init)

    p = sub.add_parser("version", help="Print the version")
    p.set_defaults(func=cmd_version)
    return parser


def main(argv=None) -> int:
    args = make_parser().parse_args(argv)
    try:
        args.func(args)
    except SiteError as e:
        print(f"Build failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
