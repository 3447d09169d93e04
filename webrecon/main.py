import argparse
import sys
from typing import List, Optional

from webrecon.core.checklists import ScanConfig
from webrecon.core.engine import Engine
from webrecon.core.errors import InvalidTarget
from webrecon.core.models import CATEGORY_ORDER, Category, ScanReport, Severity
from webrecon.core.target import normalize_target
from webrecon.reporters.console import ConsoleReporter, Log
from webrecon.reporters.export import FORMATS, export_report, guess_format

EXIT_OK = 0
EXIT_CRITICAL = 1
EXIT_USAGE = 2

_MENU = [
    ("1", "Run Full Security Scan", None),
    ("2", "Check HTTP Methods", Category.METHODS),
    ("3", "Analyze Security Headers", Category.HEADERS),
    ("4", "Examine Cookies", Category.COOKIES),
    ("5", "Probe Common Resources", Category.RESOURCES),
    ("6", "Scan TLS/SSL Configuration", Category.TLS),
    ("7", "Change Target URL", "target"),
    ("8", "Export Report", "export"),
    ("9", "Exit", "exit"),
]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="webrecon", description="Web endpoint security reconnaissance")
    p.add_argument("target", nargs="?", help="Target URL or host (prompted if omitted)")
    p.add_argument("-c", "--check", action="append",
                   choices=[c.value for c in CATEGORY_ORDER] + ["all"],
                   help="Category to run (repeatable, default: all)")
    p.add_argument("-i", "--interactive", action="store_true",
                   help="Interactive menu")
    p.add_argument("-o", "--output", help="Write the report to this file")
    p.add_argument("-f", "--format", choices=FORMATS,
                   help="Report format (default: from --output suffix, else txt)")
    p.add_argument("--proxy", help="Proxy (e.g. http://127.0.0.1:8080)")
    p.add_argument("--timeout", type=float, default=10.0,
                   help="Timeout for general requests (s)")
    p.add_argument("--probe-timeout", type=float, default=5.0,
                   help="Timeout for resource probes (s)")
    p.add_argument("--verify-tls", action="store_true",
                   help="Verify certificates on HTTP probes")
    p.add_argument("--critical-header", action="append",
                   help="Override the critical header set (repeatable)")
    p.add_argument("--sensitive-path", action="append",
                   help="Override the sensitive path set (repeatable)")
    p.add_argument("--dangerous-method", action="append",
                   help="Override the dangerous method set (repeatable)")
    p.add_argument("--extended-headers", action="store_true",
                   help="Also check Feature-Policy and Expires")
    p.add_argument("-v", "--verbose", action="count", default=1,
                   help="-v, -vv")
    p.add_argument("-q", "--quiet", action="store_true")
    return p


def selected_categories(checks: Optional[List[str]]) -> List[Category]:
    if not checks or "all" in checks:
        return list(CATEGORY_ORDER)
    return [c for c in CATEGORY_ORDER if c.value in checks]


def write_report(report: ScanReport, output: Optional[str], fmt: Optional[str],
                 log: Log, display_limit: int) -> str:
    if fmt is None:
        fmt = guess_format(output) if output else "txt"
    path = export_report(report, fmt, output, display_limit=display_limit)
    log.ok(f"Report saved to: {path}")
    return path


def exit_code(report: ScanReport) -> int:
    return EXIT_CRITICAL if report.worst_severity() is Severity.CRITICAL else EXIT_OK


def interactive(engine: Engine, target: str, log: Log) -> int:
    presenter = ConsoleReporter(log, engine.config.display_limit)
    last: Optional[ScanReport] = None

    while True:
        print(f"\n{log.c('title')}=== WEB SECURITY ANALYZER ==={log.c('reset')}")
        print(f"Target: {target}")
        for key, label, _ in _MENU:
            print(f"  {key}. {label}")
        choice = input("Select an option (1-9): ").strip()
        action = next((a for k, _, a in _MENU if k == choice), "invalid")

        if action == "exit":
            return exit_code(last) if last else EXIT_OK
        if action == "invalid":
            log.fail("Invalid option. Please try again.")
            continue
        if action == "target":
            try:
                target = normalize_target(input("Enter new target URL: "))
            except InvalidTarget as exc:
                log.fail(str(exc))
            continue
        if action == "export":
            if last is None:
                log.warn("Nothing to export yet, run a scan first.")
                continue
            fmt = input(f"Format {FORMATS} [txt]: ").strip().lower() or "txt"
            if fmt not in FORMATS:
                log.fail("Invalid export format")
                continue
            write_report(last, None, fmt, log, engine.config.display_limit)
            continue

        categories = None if action is None else [action]
        last = engine.scan(target, categories)
        presenter.print(last)


def main(argv: Optional[List[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    log = Log(verbose=0 if args.quiet else args.verbose)
    config = ScanConfig.from_args(args)

    raw = args.target
    if not raw:
        raw = input("Enter target URL: ")
    try:
        target = normalize_target(raw)
    except InvalidTarget as exc:
        log.fail(str(exc))
        return EXIT_USAGE

    with Engine(config=config, logger=log) as engine:
        if args.interactive:
            return interactive(engine, target, log)

        report = engine.scan(target, selected_categories(args.check))
        if not args.quiet:
            ConsoleReporter(log, config.display_limit).print(report)
        if args.output or args.format:
            write_report(report, args.output, args.format, log, config.display_limit)
        return exit_code(report)


if __name__ == "__main__":
    sys.exit(main())
