import argparse
import logging
import sys
from pathlib import Path

from placelog.app.controller import AppController, FormInput
from placelog.app.persistence import PersistenceAdapter
from placelog.core.entities import VisitType
from placelog.core.errors import GeolocationError
from placelog.core.ports import UIPorts
from placelog.infrastructure.map.headless import HeadlessMapWidget
from placelog.infrastructure.persistence.sqlite.kv_store import SQLiteKeyValueStore
from placelog.infrastructure.providers.geolocation.client import IpGeolocationClient
from placelog.infrastructure.providers.geolocation.static import StaticGeolocator, parse_latlng
from placelog.infrastructure.ui.html_panel import HtmlListPanel
from placelog.utils.config import load_env, load_settings
from placelog.utils.logging import setup_logging


class ConsoleNotifier:
    def notify(self, message: str) -> None:
        print(f"[!] {message}", file=sys.stderr)


class ConsoleForm:
    logger = logging.getLogger(__name__)

    def show(self) -> None:
        self.logger.debug("form shown")

    def hide(self) -> None:
        self.logger.debug("form hidden")

    def clear(self) -> None:
        self.logger.debug("form cleared")

    def show_optional_field(self, visit_type: VisitType) -> None:
        field = "rating" if visit_type is VisitType.VISITED else "planned date"
        self.logger.debug(f"form shows {field}")


def build_container(dbpath: str | None, center: str | None, fallback_center: str | None = None):
    load_env()
    settings = load_settings()
    # an explicit map click position stands in for the IP lookup
    center = center or settings.center or fallback_center
    if center:
        geolocator = StaticGeolocator(parse_latlng(center))
    else:
        geolocator = IpGeolocationClient(settings.geolocation_url)
    kv = SQLiteKeyValueStore(dbpath or settings.db_path)
    ports = UIPorts(
        list_panel=HtmlListPanel(),
        map_widget=HeadlessMapWidget(),
        geolocator=geolocator,
        form=ConsoleForm(),
        notifier=ConsoleNotifier(),
    )
    controller = AppController(
        ports, PersistenceAdapter(kv, settings.storage_key), settings=settings
    )
    return controller, kv


def build_parser():
    ap = argparse.ArgumentParser(description="Log places you visited or plan to visit")
    ap.add_argument("--dbpath", default=None, help="SQLite file (default: PLACELOG_DB or places.db)")
    ap.add_argument("--center", default=None, help='Fixed position "lat,lng" instead of IP lookup')
    sub = ap.add_subparsers(dest="cmd", required=True)

    p1 = sub.add_parser("add")
    p1.add_argument("--type", choices=[t.value for t in VisitType], default=VisitType.VISITED.value)
    p1.add_argument("--at", default=None, help='Map click "lat,lng" (default: map center)')
    p1.add_argument("--location", required=True)
    p1.add_argument("--companion", default="")
    p1.add_argument("--rating", default=None)
    p1.add_argument("--date", default="")

    sub.add_parser("list")

    p3 = sub.add_parser("delete")
    p3.add_argument("--id", required=True)

    p4 = sub.add_parser("focus")
    p4.add_argument("--id", required=True)

    sub.add_parser("reset")

    p6 = sub.add_parser("export-html")
    p6.add_argument("--out", required=True)
    return ap


def main(argv=None):
    setup_logging()
    args = build_parser().parse_args(argv)

    try:
        controller, kv = build_container(args.dbpath, args.center, getattr(args, "at", None))
    except GeolocationError as exc:
        print(f"Invalid position: {exc}", file=sys.stderr)
        return 2

    panel = controller.ports.list_panel
    try:
        if args.cmd == "add":
            controller.start()
            map_ = controller.view.map
            if map_ is None:
                print("No map available, cannot pick a position.", file=sys.stderr)
                return 1
            at = parse_latlng(args.at) if args.at else map_.center
            controller.ports.map_widget.click(map_, at)
            controller.on_type_changed(args.type)
            place = controller.submit(
                FormInput(
                    visit_type=args.type,
                    location=args.location,
                    companion=args.companion,
                    rating=args.rating,
                    planned_date=args.date,
                )
            )
            if place is None:
                return 1
            print(f"[ADDED] {place.id} | {place.description}")

        elif args.cmd == "list":
            controller.start(locate=False)
            for identity, title in panel.titles():
                print(f"{identity} | {title}")

        elif args.cmd == "delete":
            controller.start(locate=False)
            if not controller.delete(args.id):
                print(f"No place with id {args.id}", file=sys.stderr)
                return 1
            print(f"[DELETED] {args.id}")

        elif args.cmd == "focus":
            controller.start()
            if not controller.navigate(args.id):
                print(f"Cannot focus {args.id}", file=sys.stderr)
                return 1
            center = controller.view.map.center
            print(f"[FOCUS] {args.id} -> {center.lat},{center.lng}")

        elif args.cmd == "reset":
            controller.start(locate=False)
            controller.reset()
            print("All places removed.")

        elif args.cmd == "export-html":
            controller.start(locate=False)
            Path(args.out).write_text(panel.render(), encoding="utf-8")
            print(f"List written to {args.out}")

    except GeolocationError as exc:
        print(f"Invalid position: {exc}", file=sys.stderr)
        return 2
    finally:
        kv.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
