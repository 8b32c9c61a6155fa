'''
Jinja2 environment used to render the Makefile and the index.

The templates live in postgen/templates. Besides the standard Jinja2
machinery they can use:

    {{ fragment(site.fragments.badges) }}   -> the content of badges.html, verbatim
    {{ post.date | date }}                   -> Jan 5, 2020
    {{ post | post_url(site) }}              -> posts/hello-world.html
    {{ args | shell_join }}                  -> --css ../style.css ...
'''
import jinja2, shlex

from postgen.errors import FragmentError


def fragment(fname):
    ''' Return the content of the file <fname> as is.

        The fragments (header, badges, bio) are pieces of HTML
        written by hand. They must exist and must not be empty.
    '''
    try:
        with open(fname, 'rt') as f:
            content = f.read()
    except OSError as err:
        raise FragmentError(f"Cannot read the fragment '{fname}': {err.strerror}") from err

    if not content:
        raise FragmentError(f"The fragment '{fname}' is empty")

    return content


def date(val, outfmt=None):
    ''' Format a PostDate. Without <outfmt> the date is written
        the same way it is written in the posts:

            -> {{ post.date | date }}

            -> Sept 4, 2022

        Otherwise <outfmt> is a format string over the fields of
        the date:

            -> {{ post.date | date("{year}") }}

            -> 2022
    '''
    if outfmt is None:
        return val.format()

    return outfmt.format(year=val.year, month=val.month.name, day=val.day)


def post_url(post, site):
    post_id = getattr(post, 'post_id', post)
    return '/'.join((site['output_dir'], post_id + '.html'))


def shell_join(args):
    return ' '.join(shlex.quote(a) for a in args)


def make_environment():
    ''' Return the Jinja2 Environment with the templates and the
        helpers registered.

        There is no autoescape: titles and fragments are HTML
        written by the author and they are copied as they are.
    '''
    env = jinja2.Environment(
            loader=jinja2.PackageLoader('postgen', 'templates'),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
            )

    env.globals['fragment'] = fragment
    env.filters.update(extra_filters())
    return env


def extra_filters():
    return dict(
            date=date,
            post_url=post_url,
            shell_join=shell_join,
            )


_env = None
def render(template_name, **context):
    global _env
    if _env is None:
        _env = make_environment()

    return _env.get_template(template_name).render(**context)

