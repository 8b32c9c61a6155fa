"""Tests for pandoc.py: running pandoc directly."""

import subprocess

import pytest

from postgen.errors import PandocError
from postgen.makefile import build_rules
from postgen.pandoc import pandoc_command, run_pandoc


def test_pandoc_command(site):
    assert pandoc_command(site, 'content/a.md', 'posts/a.html', ['--standalone']) == \
        ['pandoc', 'content/a.md', '--output', 'posts/a.html', '--standalone']


class TestRunPandoc:

    def test_runs_each_rule(self, blog, site, monkeypatch):
        calls = []

        def check_output(cmd, stderr=None):
            calls.append(cmd)
            return b''

        monkeypatch.setattr(subprocess, 'check_output', check_output)
        run_pandoc(build_rules(site, ['a', 'b']), quiet=True)

        assert [c[1] for c in calls] == ['content/a.md', 'content/b.md']
        assert (blog / 'posts').is_dir()

    def test_failure(self, blog, site, monkeypatch, capsys):
        def check_output(cmd, stderr=None):
            raise subprocess.CalledProcessError(64, cmd, output=b'pandoc: content/a.md: openFile: does not exist')

        monkeypatch.setattr(subprocess, 'check_output', check_output)
        with pytest.raises(PandocError, match='content/a.md'):
            run_pandoc(build_rules(site, ['a']), quiet=True)
        assert 'openFile' in capsys.readouterr().err

    def test_pandoc_not_installed(self, blog, site):
        site['pandoc']['command'] = 'surely-not-a-pandoc-binary'
        with pytest.raises(PandocError, match='surely-not-a-pandoc-binary'):
            run_pandoc(build_rules(site, ['a']), quiet=True)
