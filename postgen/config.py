'''
Site configuration.

The configuration lives in an optional YAML file (site.yml by default).
Any key missing from the file takes its value from DEFAULTS, so running
without a file reproduces the classic layout:

    content/<post>.md  --pandoc-->  posts/<post>.html
    index.html listing every post, newest first
'''
import copy, os, yaml

from postgen.errors import ConfigError

DEFAULT_CONFIG_FILE = 'site.yml'

DEFAULT_PANDOC_ARGS = [
        '--standalone',
        '-H', 'header.html',
        '--table-of-contents',
        '--citeproc',
        '--css', '../style.css',
        '--include-after-body', 'utterances.html',
        '--include-in-header', 'post_header_aux.html',
        ]

DEFAULTS = {
    'title': 'hirrolot',
    'content_dir': 'content',
    'output_dir': 'posts',

    # 'html' writes a standalone page; 'markdown' writes <content_dir>/index.md
    # that is converted by its own Makefile rule
    'index_format': 'html',
    'index_output': None,
    'group_by_year': False,

    # Sort the post names so the builds do not depend on the order in
    # which the filesystem lists the content directory
    'sort': True,
    'max_posts': 512,

    'fragments': {
        'header': 'header.html',
        'badges': 'badges.html',
        'bio': None,
        },

    'stylesheet': 'style.css',
    'icon': 'myself.png',
    'script': 'script.js',

    'pandoc': {
        'command': 'pandoc',
        'args': DEFAULT_PANDOC_ARGS,
        # Arguments for the Markdown index; None means the same as 'args'
        'index_args': None,
        },

    'makefile': 'Makefile',

    # Set it to a mapping with at least 'url' and 'atom' to get a feed
    'feed': None,
}

INDEX_FORMATS = ('html', 'markdown')


def merge(defaults, overrides, where=''):
    ''' Return a copy of <defaults> updated with <overrides>.

        Nested mappings are merged key by key. A key that is not
        in <defaults> is an error: it is likely a typo in site.yml.
    '''
    merged = copy.deepcopy(defaults)
    for k, v in overrides.items():
        if k not in defaults:
            raise ConfigError(f"Unknown configuration key '{where}{k}'")

        if isinstance(defaults[k], dict) and isinstance(v, dict):
            merged[k] = merge(defaults[k], v, where=f'{where}{k}.')
        else:
            merged[k] = v

    return merged


def load_config(filename=None, overrides=None):
    ''' Load the site configuration from <filename>.

        If no filename is given, site.yml is used if it exists.
        The <overrides> (typically from the command line) win over
        the values in the file; None values are ignored.
    '''
    site = {}
    if filename is None and os.path.exists(DEFAULT_CONFIG_FILE):
        filename = DEFAULT_CONFIG_FILE

    if filename is not None:
        try:
            with open(filename, 'rt') as f:
                site = yaml.safe_load(f.read())
        except OSError as err:
            raise ConfigError(f"Cannot read '{filename}': {err.strerror}") from err
        except yaml.YAMLError as err:
            raise ConfigError(f"Invalid YAML in '{filename}': {err}") from err

        # An empty file is a valid (empty) configuration
        if site is None:
            site = {}

        if not isinstance(site, dict):
            raise ConfigError(f"'{filename}' must contain a mapping")

    config = merge(DEFAULTS, site)

    for k, v in (overrides or {}).items():
        if v is not None:
            config = merge(config, {k: v})

    validate(config)
    return config


def validate(config):
    if config['index_format'] not in INDEX_FORMATS:
        raise ConfigError(
                f"index_format must be one of {', '.join(INDEX_FORMATS)}, "
                f"not '{config['index_format']}'")

    if not isinstance(config['max_posts'], int) or config['max_posts'] < 1:
        raise ConfigError("max_posts must be a positive integer")

    args = config['pandoc']['args']
    if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
        raise ConfigError("pandoc.args must be a list of strings")

    index_args = config['pandoc']['index_args']
    if index_args is not None and (
            not isinstance(index_args, list) or not all(isinstance(a, str) for a in index_args)):
        raise ConfigError("pandoc.index_args must be a list of strings")

    feed = config['feed']
    if feed is not None:
        if not isinstance(feed, dict):
            raise ConfigError("feed must be a mapping")
        for k in ('url', 'atom'):
            if not feed.get(k):
                raise ConfigError(f"feed.{k} is required when a feed is configured")


def index_output(config):
    ''' Where the index is written.

        The HTML index goes to the site root. The Markdown index is
        a source document: it goes into the content directory so the
        Makefile can convert it like any other post.
    '''
    if config['index_output']:
        return config['index_output']

    if config['index_format'] == 'markdown':
        return os.path.join(config['content_dir'], 'index.md')

    return 'index.html'
