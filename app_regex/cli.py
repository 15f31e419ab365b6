#!/usr/bin/env python3
"""
App-Regex Analyzer - package patterns for Java/Android archives

Computes the minimal set of package patterns (``com.foo.*``) and exact class
names covering every class in the given JAR, ZIP, APK, AAR or .class inputs,
and prints the combined app-regex string.

Usage:
    app-regex <input> [<input> ...] [--output report.json] [--csv report.csv] [--verbose]
"""

import argparse
import csv
import json
import os
import sys
from datetime import datetime

from . import __version__
from .config import load_config
from .log import log, safe_print, set_verbose
from .package_util import combine_packages, get_packages, parse_pattern


class AppRegexAnalyzer:
    """Runs get_packages over a list of inputs and collects the results"""

    def __init__(self, config):
        self.config = config
        self.processed = []
        self.failed = []

    def analyze(self, archive_path):
        """Analyze a single input, recording it as processed or failed"""
        name = os.path.basename(archive_path)
        try:
            packages = get_packages(archive_path, self.config)
        except OSError as e:
            log(f"Error analyzing {archive_path}: {e}", "ERROR")
            self.failed.append({
                'name': name,
                'path': archive_path,
                'error': str(e)
            })
            return False

        self.processed.append({
            'name': name,
            'path': archive_path,
            'patterns_found': len(packages),
            'patterns': sorted(packages)
        })
        return True

    def app_regex(self):
        """Combined app-regex over every processed input"""
        return combine_packages((info['patterns'] for info in self.processed), self.config)

    def generate_report(self):
        """Generate the JSON-serializable analysis report"""
        return {
            'analysis_summary': {
                'timestamp': datetime.now().isoformat(),
                'version': __version__,
                'inputs_processed': len(self.processed),
                'inputs_failed': len(self.failed),
                'boundary_aware': self.config.boundary_aware,
                'app_regex': self.app_regex()
            },
            'inputs': self.processed,
            'failed_inputs': self.failed
        }

    def print_human_readable_report(self, report):
        """Print a human-readable version of the report"""
        safe_print("\n" + "=" * 80)
        safe_print(" APP-REGEX PACKAGE REPORT")
        safe_print("=" * 80)

        for info in report['inputs']:
            safe_print(f"\n📦 {info['name']} ({info['patterns_found']} patterns)")
            for pattern in info['patterns']:
                safe_print(f"   {pattern}")

        if report['failed_inputs']:
            safe_print(f"\n❌ FAILED INPUTS")
            safe_print("   " + "-" * 50)
            for failed in report['failed_inputs']:
                safe_print(f"   {failed['name']}: {failed['error']}")

        safe_print(f"\n🎯 APP REGEX")
        safe_print(f"   {report['analysis_summary']['app_regex']}")
        safe_print("\n" + "=" * 80)


def export_report_to_csv(report, output_csv_path):
    """Write one row per (input, pattern) to a CSV file"""
    csv_headers = ['input', 'pattern', 'kind']
    csv_rows = []
    for info in report['inputs']:
        for pattern in info['patterns']:
            csv_rows.append({
                'input': info['name'],
                'pattern': pattern,
                'kind': 'prefix' if parse_pattern(pattern).is_prefix else 'exact'
            })

    with open(output_csv_path, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=csv_headers)
        writer.writeheader()
        writer.writerows(csv_rows)
    return len(csv_rows)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='app-regex',
        description='Compute the package patterns of the application code in Java/Android archives',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    app-regex app.apk
    app-regex lib.aar extra.jar --output report.json --csv report.csv
    app-regex classes.jar --boundary-aware --verbose
        """
    )

    parser.add_argument('inputs', nargs='+',
                        help='JAR, ZIP, APK, AAR or .class files to analyze')
    parser.add_argument('--config', '-c',
                        help='JSON configuration file (optional)')
    parser.add_argument('--output', '-o',
                        help='Output JSON report file (optional)')
    parser.add_argument('--csv',
                        help='Output CSV file with one row per pattern (optional)')
    parser.add_argument('--boundary-aware', action='store_true', default=None,
                        help='Only let a package cover its own subpackages (com.foo does not cover com.foobar)')
    parser.add_argument('--no-recursive', dest='recursive_aar', action='store_false', default=None,
                        help='Only read classes.jar from AAR files, not libs/*.jar')
    parser.add_argument('--separator',
                        help='Separator for the combined app-regex (default: ":")')
    parser.add_argument('--verbose', '-v', action='store_true', default=None,
                        help='Enable verbose logging')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = load_config(args.config).with_overrides(
        verbose=args.verbose,
        boundary_aware=args.boundary_aware,
        recursive_aar=args.recursive_aar,
        separator=args.separator or None,
    )
    set_verbose(config.verbose)

    analyzer = AppRegexAnalyzer(config)
    for i, archive_path in enumerate(args.inputs, 1):
        log(f"Progress: {i}/{len(args.inputs)} - {os.path.basename(archive_path)}")
        analyzer.analyze(archive_path)

    report = analyzer.generate_report()

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, ensure_ascii=False)
        safe_print(f"✅ JSON report saved to: {args.output}")

    if args.csv:
        rows = export_report_to_csv(report, args.csv)
        safe_print(f"✅ CSV with {rows} rows saved to: {args.csv}")

    analyzer.print_human_readable_report(report)

    return 1 if analyzer.failed else 0


if __name__ == "__main__":
    sys.exit(main())
