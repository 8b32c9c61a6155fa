'''
Command line entry point.

Run it from the root of the blog, without arguments:

    $ postgen
    $ make all

It reads content/*.md and writes the Makefile and index.html.
'''
import argparse, os, sys

from postgen import __version__
from postgen.config import load_config
from postgen.errors import PostgenError
from postgen.generate import generate


def build_parser():
    parser = argparse.ArgumentParser(
            prog='postgen',
            description='Generate the Makefile and the index page of a pandoc blog.')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--directory', '-C', metavar='DIR',
                        help='Run as if started in DIR [default: current directory]')
    parser.add_argument('--config', '-c', metavar='FILE',
                        help='Site configuration [default: site.yml if it exists]')
    parser.add_argument('--format', choices=('html', 'markdown'), dest='index_format',
                        help='Write the index as a standalone HTML page or as a '
                             'Markdown document converted by the Makefile')
    parser.add_argument('--group-by-year', action='store_true', default=None,
                        help='Add a heading for each year in the index')
    parser.add_argument('--unsorted', action='store_false', dest='sort', default=None,
                        help='Keep the order in which the content directory is listed '
                             'for posts published the same day')
    parser.add_argument('--run-pandoc', action='store_true',
                        help='Also convert every post with pandoc')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Print errors only')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        if args.directory:
            os.chdir(args.directory)

        site = load_config(args.config, overrides=dict(
                    index_format=args.index_format,
                    group_by_year=args.group_by_year,
                    sort=args.sort,
                    ))
        generate(site, run=args.run_pandoc, quiet=args.quiet)
    except (PostgenError, OSError) as err:
        print(f"postgen: error: {err}", file=sys.stderr)
        sys.exit(1)
