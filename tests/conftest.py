"""
Pytest configuration and shared fixtures
"""

import os

import pytest

from postgen.config import load_config
from postgen.metadata import METADATA_PREFIX_SIZE


def post_text(title, date, body='Lorem ipsum dolor sit amet.\n'):
    """A post with its header, padded beyond the metadata prefix"""
    text = f'---\ntitle: "{title}"\nauthor: hirrolot\ndate: {date}\n---\n\n{body}'
    padding = max(0, METADATA_PREFIX_SIZE - len(text.encode('utf8')))
    return text + '\n' * padding + 'The end.\n'


@pytest.fixture
def blog(tmp_path, monkeypatch):
    """An empty blog: content/ plus the HTML fragments, as the working directory"""
    (tmp_path / 'content').mkdir()
    (tmp_path / 'header.html').write_text('<meta charset="utf-8">\n')
    (tmp_path / 'badges.html').write_text('<div class="badges">badges</div>\n')
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def add_post(blog):
    """Write content/<name> with the given title and date"""
    def _add_post(name, title, date, **kw):
        path = blog / 'content' / name
        path.write_text(post_text(title, date, **kw))
        return path
    return _add_post


@pytest.fixture
def site(blog):
    return load_config()
