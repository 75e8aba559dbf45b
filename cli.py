import argparse
import sys
from pathlib import Path

from config import LOG_LEVELS, configure_logging
from document import PdfAssemblyError
from merger import join_pdfs
from splitter import split_pdf


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Join PDFs or split a range of pages from a PDF.')
    parser.add_argument('--log-level', default=None, type=str.upper, choices=LOG_LEVELS, help='Logging level')
    commands = parser.add_subparsers(dest='command', required=True)

    split = commands.add_parser('split', help='Copy a page range into a new PDF')
    split.add_argument('input', help='Path to the input PDF file')
    split.add_argument('output', help='Path to the output PDF file')
    split.add_argument('start', type=int, help='Start page number (1-based)')
    split.add_argument('end', type=int, help='End page number (inclusive, 1-based)')

    merge = commands.add_parser('merge', help='Concatenate PDFs in the given order')
    merge.add_argument('inputs', nargs='+', help='Paths to the input PDF files')
    merge.add_argument('-o', '--output', default='merged.pdf', help='Path to the output PDF file')

    return parser


def print_header():
    print("==============================")
    print("  PDF Join / Split Utility    ")
    print("==============================")
    print()


def run_split(args) -> Path:
    data = Path(args.input).read_bytes()
    output = Path(args.output)
    output.write_bytes(split_pdf(data, args.start, args.end))
    return output


def run_merge(args) -> Path:
    print("Merging user-provided PDF files:")
    for name in args.inputs:
        print(f"- {name}")
    documents = [Path(name).read_bytes() for name in args.inputs]
    output = Path(args.output)
    output.write_bytes(join_pdfs(documents))
    return output


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as e:
        parser.error(str(e))

    print_header()
    try:
        if args.command == 'split':
            output = run_split(args)
        else:
            output = run_merge(args)
    except (PdfAssemblyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"PDF saved at: {output.resolve()}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
