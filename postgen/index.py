'''
Render the index page: every post, newest first.

The posts are ordered by date, descending, looking at the year first,
then the month and then the day. Posts published on the same day keep
the order in which they were discovered (sorted() is stable, even
with reverse=True).

A post titled "index" is the index page itself: it is neither listed
nor taken into account for the range of years.
'''
import itertools

import frontmatter

from postgen import j2helpers


def listed(posts):
    return [p for p in posts if not p.is_index]


def year_bounds(posts):
    ''' Return (min_year, max_year) of the listed posts or None
        if there is nothing to list.
    '''
    years = [p.date.year for p in listed(posts)]
    if not years:
        return None

    return min(years), max(years)


def chronological(posts):
    return sorted(listed(posts), key=lambda p: p.date, reverse=True)


def group_by_year(posts):
    ''' Return the listed posts in chronological order, bucketed by
        year: [(2022, [...]), (2021, [...]), ...]
    '''
    return [(year, list(group)) for year, group in
                itertools.groupby(chronological(posts), key=lambda p: p.date.year)]


def render_index(posts, site):
    ''' Render the index page in the format set by site['index_format'].

        The HTML index is a standalone page. The Markdown index has a
        front matter with the title of the blog and it is meant to be
        converted by pandoc like any other post.
    '''
    if site['group_by_year']:
        groups = group_by_year(posts)
    else:
        groups = [(None, chronological(posts))]

    if site['index_format'] == 'markdown':
        body = j2helpers.render('index.md.j2', site=site, groups=groups)
        page = frontmatter.Post(body, title=site['title'])
        return frontmatter.dumps(page) + '\n'

    return j2helpers.render('index.html.j2', site=site, groups=groups)
