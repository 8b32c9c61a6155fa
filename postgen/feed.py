'''
Atom (and optionally RSS) feed of the listed posts.

Enabled with a 'feed' section in site.yml:

    feed:
      url: https://example.org/blog
      atom: atom.xml
      rss: rss.xml
      author: hirrolot
      description: Posts about programming
'''
import datetime

from feedgen.feed import FeedGenerator

from postgen.index import chronological
from postgen.j2helpers import post_url


def post_datetime(post_date):
    ''' The posts have no time of the day: use midnight UTC.

        The day is added as an offset so a date like Feb 31 rolls
        over into March instead of failing.
    '''
    return datetime.datetime(post_date.year, int(post_date.month), 1,
                             tzinfo=datetime.timezone.utc) + datetime.timedelta(days=post_date.day - 1)


def build_feed(posts, site):
    feed = site['feed']
    url = feed['url'].rstrip('/')

    fg = FeedGenerator()
    fg.id(url)
    fg.title(feed.get('title') or site['title'])
    fg.author(name=feed.get('author') or site['title'])
    fg.link(href=url, rel='alternate')
    fg.description(feed.get('description') or site['title'])
    fg.language('en')

    posts = chronological(posts)
    if posts:
        fg.updated(post_datetime(posts[0].date))

    for post in posts:
        href = url + '/' + post_url(post, site)

        fe = fg.add_entry(order='append')
        fe.title(post.title)
        fe.link(href=href, title=post.title, rel='alternate', type="text/html")
        fe.id(href)

        date = post_datetime(post.date)
        fe.published(date)
        fe.updated(date)
        fe.author(name=feed.get('author') or site['title'])

    return fg


def render_feeds(posts, site):
    ''' Return {filename: content} of the configured feeds. '''
    feed = site['feed']
    fg = build_feed(posts, site)
    url = feed['url'].rstrip('/')

    out = {}
    fg.link(href=url + '/' + feed['atom'], rel='self')
    out[feed['atom']] = fg.atom_str(pretty=True, extensions=False).decode('utf8')

    if feed.get('rss'):
        fg.link(href=url + '/' + feed['rss'], rel='self')
        out[feed['rss']] = fg.rss_str(pretty=True, extensions=False).decode('utf8')

    return out
