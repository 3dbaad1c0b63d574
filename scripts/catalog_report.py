from __future__ import annotations

import argparse
import logging

from config import Config
from services.validation import catalog_report, report_hints
from utils.course_catalog import load_catalog


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Report prerequisite parsing problems in a catalog folder.")
    parser.add_argument("catalog_dir", nargs="?", default=Config.CATALOG_DIR)
    parser.add_argument("--top", type=int, default=20, help="How many unresolved references to list")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    catalog = load_catalog(args.catalog_dir)
    report = catalog_report(catalog, top=args.top)

    print("CATALOG_DIR:", args.catalog_dir)
    print("Courses:", report["courses"])
    print("Courses with prereq text:", report["with_prereq_text"])
    print("Unparseable prereq texts:", len(report["unparseable"]))
    print("Unresolved references:", report["unresolved_total"])

    if report["unresolved"]:
        print("\nTop unresolved references:")
        for item in report["unresolved"]:
            print(f"{item['count']:>3} x {item['code']}   (e.g. {item['example']})")

    for subject, gids in report["cycles"].items():
        print(f"\nCycle in {subject}: {', '.join(gids)}")

    hints = report_hints(report)
    if hints:
        print("\nHints:")
        for h in hints:
            print(" -", h)


if __name__ == "__main__":
    main()
