#!/usr/bin/env python3
"""
aff-scanner - command line front end for the affix keyword table
Features:
 - Single file or recursive directory parsing (--ext to pick extensions)
 - Source encoding taken from the SET command, or forced with --encoding
 - Parallel parsing, one AffParser per file (--threads)
 - Per-command lookup (--command SFX)
 - Exports: JSON, CSV, YAML, HTML
 - Built-in sample (--demo)
"""

import argparse
import logging
import os
import sys
import webbrowser
from concurrent.futures import ThreadPoolExecutor, as_completed

from colorama import Fore, Style, init as colorama_init
from tqdm import tqdm

from affix import AffParser, report_generator, summary, utils
from affix.parser_aff import fold_command

colorama_init(autoreset=True)

# logging
logger = logging.getLogger("aff-scanner")
logger.setLevel(logging.INFO)
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(h)
    _pkg_logger = logging.getLogger("affix")
    _pkg_logger.setLevel(logging.INFO)
    _pkg_logger.addHandler(h)

DEFAULT_ENCODING = "utf-8"

SAMPLE_AFF = (
    "SET UTF-8\n"
    "\n"
    "TRY abcdef \n"
    "\n"
    "SFX A Y 2\n"
    "#comment1\n"
    "SFX A abc qwe .\n"
    "  #comment2\n"
    "  sfx A zxc abc .\n"
    "  COMPLEXPREFIXES  \n"
    "lang hu_HU #this is not comment. It's part of the parameter"
)


def scan_file(path, encoding=None):
    enc = encoding
    try:
        if enc is None:
            enc = utils.sniff_encoding(path, default=DEFAULT_ENCODING)
        parser = AffParser()
        with open(path, "r", encoding=enc) as fh:
            ok = parser.parse(fh)
    except (OSError, LookupError) as e:
        logger.warning("Could not open %s: %s", path, e)
        return {"file": path, "encoding": enc, "ok": False, "error": str(e), "commands": {}}
    if not ok:
        return {"file": path, "encoding": enc, "ok": False, "error": parser.error, "commands": {}}
    commands = {cmd: list(params) for cmd, params in parser.data().items()}
    logger.debug("%s: %d command(s)", path, len(commands))
    return {"file": path, "encoding": enc, "ok": True, "error": None, "commands": commands}


def format_table(table):
    lines = []
    for cmd, params in table.items():
        lines.append(cmd + ":" + "".join(p + ", " for p in params))
    return lines


def run_demo():
    parser = AffParser()
    parser.parse_text(SAMPLE_AFF)
    for line in format_table(parser.data()):
        print(line)


def print_command(results, command):
    key = fold_command(command)
    for r in results:
        if not r["ok"]:
            continue
        if key not in r["commands"]:
            print(f"{Fore.WHITE}{r['file']}: {key} not present{Style.RESET_ALL}")
            continue
        print(f"{Fore.CYAN}{r['file']}{Style.RESET_ALL}: {key}")
        params = r["commands"][key]
        if not params:
            print("    (no parameters)")
        for p in params:
            print(f"    {p}")


def print_summary(results):
    ok = [r for r in results if r["ok"]]
    failed = [r for r in results if not r["ok"]]
    totals = summary.merge_counts(results)
    print("\n=== Parse Summary ===")
    print(f"Files parsed: {len(ok)}")
    if failed:
        print(f"{Fore.RED}Files failed: {len(failed)}{Style.RESET_ALL}")
        for r in failed:
            print(f"  {Fore.LIGHTRED_EX}{r['file']}: {r['error']}{Style.RESET_ALL}")
    print(f"Distinct commands: {len(totals)}")
    print(f"Parameter lines: {sum(totals.values())}")
    print("\nTop commands:")
    for cmd, n in totals.most_common(10):
        colour = Fore.YELLOW if n else Fore.WHITE
        print(f"  {colour}{cmd}: {n}{Style.RESET_ALL}")
    for r in ok:
        bare = summary.summarize(r["commands"])["bare_commands"]
        if bare:
            print(f"\n{r['file']} flags without parameters: {', '.join(bare)}")
    print("=====================\n")


def build_arg_parser():
    p = argparse.ArgumentParser(description="aff-scanner - index Hunspell .aff commands and their parameter lines")
    p.add_argument("--path", "-p", default="./dictionaries", help="Path or file to parse")
    p.add_argument("--out", "-o", default="./reports", help="Output folder for reports")
    p.add_argument("--ext", action="append", help="File extension collected from directories (repeatable, default .aff)")
    p.add_argument("--encoding", help="Force the source encoding instead of reading SET")
    p.add_argument("--command", "-c", help="Print the parameter lines of one command")
    p.add_argument("--summary", action="store_true", help="Only print summary + exit")
    p.add_argument("--json-only", action="store_true", help="Only produce JSON output (no HTML, no summary)")
    p.add_argument("--no-html", action="store_true", help="Do not generate HTML report")
    p.add_argument("--export-csv", action="store_true", help="Also export CSV")
    p.add_argument("--export-yaml", action="store_true", help="Also export YAML")
    p.add_argument("--open", action="store_true", help="Open the HTML report in a browser")
    p.add_argument("--threads", type=int, default=4, help="Parallel worker threads")
    p.add_argument("--fail-on-error", action="store_true", help="Exit code 1 if any file could not be read")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    p.add_argument("--demo", action="store_true", help="Parse the built-in sample and print the table")
    return p


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    if args.verbose:
        logger.setLevel(logging.DEBUG)
        logging.getLogger("affix").setLevel(logging.DEBUG)

    if args.demo:
        run_demo()
        sys.exit(0)

    files = utils.collect_files(args.path, exts=tuple(args.ext or utils.DEFAULT_EXTS))
    if not files:
        logger.warning("No affix files found under %s", args.path)

    results = []
    with ThreadPoolExecutor(max_workers=max(1, args.threads)) as ex:
        future_to_file = {ex.submit(scan_file, f, args.encoding): f for f in files}
        with tqdm(total=len(files), desc="Parsing files", disable=len(files) < 2) as bar:
            for fut in as_completed(future_to_file):
                fpath = future_to_file[fut]
                try:
                    results.append(fut.result())
                except Exception as e:
                    logger.exception("Exception parsing file %s", fpath)
                    results.append({"file": fpath, "encoding": args.encoding, "ok": False, "error": str(e), "commands": {}})
                bar.update(1)
    results.sort(key=lambda r: r["file"])

    if args.summary:
        print_summary(results)
        sys.exit(0)

    os.makedirs(args.out, exist_ok=True)
    report_generator.save_json(results, os.path.join(args.out, "report.json"))
    if args.export_csv:
        report_generator.save_csv(results, os.path.join(args.out, "report.csv"))
    if args.export_yaml:
        report_generator.save_yaml(results, os.path.join(args.out, "report.yaml"))

    html_path = os.path.join(args.out, "report.html")
    if not args.no_html and not args.json_only:
        try:
            report_generator.generate_full_html(results, html_path)
            if args.open:
                webbrowser.open(f"file://{os.path.abspath(html_path)}")
        except Exception:
            logger.exception("HTML generation failed")

    if not args.json_only:
        if args.command:
            print_command(results, args.command)
        print_summary(results)

    if args.fail_on_error and any(not r["ok"] for r in results):
        print("Failing on unreadable files (exit code 1).")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
