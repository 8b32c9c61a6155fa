'''
One generation run.

Everything is computed in memory first: the post names, their metadata,
the Makefile, the index and the feeds. Only then the files are written.
Any error before that point leaves the previous outputs untouched.
'''
import os, sys

from postgen.config import index_output
from postgen.discovery import collect_post_ids
from postgen.feed import render_feeds
from postgen.index import listed, render_index, year_bounds
from postgen.makefile import build_rules, render_makefile
from postgen.metadata import collect_metadata
from postgen.pandoc import run_pandoc


def info(msg, quiet=False):
    if not quiet:
        print(msg, file=sys.stderr)


def write_file(filename, content):
    ''' Write <content> into a temporary file next to <filename>
        and then move it into place, so a reader never sees
        a half-written file.
    '''
    folder = os.path.dirname(filename)
    if folder:
        os.makedirs(folder, exist_ok=True)

    tmp = os.path.join(folder, '.' + os.path.basename(filename) + '.tmp')
    try:
        with open(tmp, 'wt') as f:
            f.write(content)
        os.replace(tmp, filename)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise


def render_outputs(site, post_ids, posts):
    ''' Return {filename: content} of every file to be written. '''
    outputs = {}
    outputs[site['makefile']] = render_makefile(site, post_ids)
    outputs[index_output(site)] = render_index(posts, site)

    if site['feed']:
        outputs.update(render_feeds(posts, site))

    return outputs


def generate(site, run=False, quiet=False):
    ''' Generate the Makefile, the index and the feeds of <site>.

        With <run>, pandoc is also invoked for each post once every
        file was written.

        Return the filenames written.
    '''
    exclude = ()
    if site['index_format'] == 'markdown':
        exclude = (os.path.basename(index_output(site)),)

    post_ids = collect_post_ids(
            site['content_dir'],
            exclude=exclude,
            max_posts=site['max_posts'],
            sort=site['sort'],
            )
    info(f"Found {len(post_ids)} posts in {site['content_dir']}", quiet)

    posts = collect_metadata(site['content_dir'], post_ids)

    bounds = year_bounds(posts)
    if bounds:
        info(f"Listing {len(listed(posts))} posts from {bounds[0]} to {bounds[1]}", quiet)
    else:
        info("No posts to list", quiet)

    outputs = render_outputs(site, post_ids, posts)
    for filename, content in outputs.items():
        write_file(filename, content)
        info(f"Wrote {filename}", quiet)

    if run:
        run_pandoc(build_rules(site, post_ids), quiet=quiet)

    return list(outputs)
