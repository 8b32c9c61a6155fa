'''
Write the Makefile that converts each post with pandoc.

For the post 'hello-world' the rule looks like:

    hello-world: content/hello-world.md
    	pandoc content/hello-world.md --output posts/hello-world.html --standalone ...

plus the phony targets 'all' (every post, and the index if it is
a Markdown document) and 'clean'.
'''
import os

from postgen import j2helpers
from postgen.config import index_output
from postgen.metadata import post_source
from postgen.pandoc import pandoc_command


def post_output(site, post_id):
    return os.path.join(site['output_dir'], post_id + '.html')


def post_rule(site, post_id):
    source = post_source(site['content_dir'], post_id)
    output = post_output(site, post_id)
    return dict(
            target=post_id,
            source=source,
            output=output,
            command=pandoc_command(site, source, output),
            )


def index_rule(site):
    ''' The rule that converts the Markdown index into index.html. '''
    source = index_output(site)
    output = os.path.splitext(os.path.basename(source))[0] + '.html'
    return dict(
            target='index',
            source=source,
            output=output,
            command=pandoc_command(site, source, output, site['pandoc']['index_args']),
            )


def build_rules(site, post_ids):
    ''' Return one rule per post, in the order of <post_ids>, and the
        index rule last when the index is a Markdown document.
    '''
    rules = [post_rule(site, post_id) for post_id in post_ids]
    if site['index_format'] == 'markdown':
        rules.append(index_rule(site))

    return rules


def clean_targets(site):
    ''' What 'make clean' removes: the converted posts and, if the
        index is converted by the Makefile too, its HTML.
    '''
    targets = [os.path.join(site['output_dir'], '*.html')]
    if site['index_format'] == 'markdown':
        targets.append(index_rule(site)['output'])

    return targets


def render_makefile(site, post_ids):
    rules = build_rules(site, post_ids)
    return j2helpers.render(
            'Makefile.j2',
            rules=rules,
            targets=[r['target'] for r in rules],
            clean=clean_targets(site),
            )
