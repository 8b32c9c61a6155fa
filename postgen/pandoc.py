'''
Run pandoc right away instead of leaving it to make.

This converts every post (and the Markdown index, if any) with the
same command line that the Makefile would use.
'''
import os, subprocess, sys
from subprocess import CalledProcessError, STDOUT

from tqdm import tqdm

from postgen.errors import PandocError


def pandoc_command(site, source, output, args=None):
    ''' Return the argv to convert <source> into <output>. '''
    if args is None:
        args = site['pandoc']['args']

    return [site['pandoc']['command'], source, '--output', output] + list(args)


def run_pandoc(rules, quiet=False):
    ''' Run the command of each rule (see makefile.build_rules).

        The first failure stops everything: pandoc's output is
        shown and PandocError is raised.
    '''
    for rule in tqdm(rules, desc='pandoc', unit='post', disable=quiet, file=sys.stderr):
        out_dir = os.path.dirname(rule['output'])
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)

        try:
            out = subprocess.check_output(rule['command'], stderr=STDOUT)
        except FileNotFoundError as err:
            raise PandocError(f"Cannot run '{rule['command'][0]}': {err.strerror}") from err
        except CalledProcessError as err:
            print(err.output.decode('utf8', errors='replace'), file=sys.stderr)
            raise PandocError(
                    f"pandoc failed converting '{rule['source']}' (exit status {err.returncode})"
                    ) from err

        if out and not quiet:
            tqdm.write(out.decode('utf8', errors='replace'), file=sys.stderr)
