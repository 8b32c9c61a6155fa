"""Tests for metadata.py: field extraction and dates."""

import pytest

from postgen.errors import CapacityError, DateError, MetadataError
from postgen.metadata import (
    METADATA_PREFIX_SIZE, Month, PostDate, collect_metadata, find_field,
    find_quoted_field, parse_metadata, read_metadata_prefix,
)

from conftest import post_text

LITERALS = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
            'Jul', 'Aug', 'Sept', 'Oct', 'Nov', 'Dec']


class TestMonth:

    def test_literals_in_order(self):
        assert [Month.parse(s) for s in LITERALS] == list(Month)
        assert [int(Month.parse(s)) for s in LITERALS] == list(range(1, 13))

    @pytest.mark.parametrize('literal', LITERALS)
    def test_round_trip(self, literal):
        assert str(Month.parse(literal)) == literal

    @pytest.mark.parametrize('literal', ['Sep', 'jan', 'JAN', 'January', 'Smarch', ''])
    def test_unknown(self, literal):
        with pytest.raises(DateError):
            Month.parse(literal)


class TestPostDate:

    def test_parse(self):
        assert PostDate.parse('Jan 5, 2020') == PostDate(year=2020, month=Month.Jan, day=5)

    @pytest.mark.parametrize('literal', LITERALS)
    def test_format_round_trip(self, literal):
        s = f'{literal} 17, 2021'
        date = PostDate.parse(s)
        assert date.format() == s
        assert PostDate.parse(date.format()) == date

    def test_str_is_format(self):
        assert str(PostDate.parse('Sept 4, 2022')) == 'Sept 4, 2022'

    def test_no_calendar_validation(self):
        date = PostDate.parse('Feb 31, 2020')
        assert (date.month, date.day) == (Month.Feb, 31)

    def test_trailing_text_is_ignored(self):
        assert PostDate.parse('Mar 3, 2019\r') == PostDate(2019, Month.Mar, 3)

    def test_unknown_month(self):
        with pytest.raises(DateError, match='Smarch'):
            PostDate.parse('Smarch 1, 2020')

    @pytest.mark.parametrize('s', ['', 'Jan', 'Jan 5', 'Jan 5 2020', '5 Jan, 2020', 'Jan five, 2020'])
    def test_not_three_tokens(self, s):
        with pytest.raises(DateError):
            PostDate.parse(s)

    @pytest.mark.parametrize('s', ['Jan 0, 2020', 'Jan 32, 2020'])
    def test_day_out_of_range(self, s):
        with pytest.raises(DateError):
            PostDate.parse(s)

    def test_ordering_is_year_month_day(self):
        dates = [PostDate.parse(s) for s in
                 ('Dec 31, 2019', 'Jan 1, 2020', 'Jan 2, 2020', 'Feb 1, 2020')]
        assert sorted(reversed(dates)) == dates


class TestFindField:

    TEXT = 'title: "Alpha: the beginning"\ndate: Jan 5, 2020\n'

    def test_plain(self):
        assert find_field(self.TEXT, 'date') == 'Jan 5, 2020'

    def test_quoted(self):
        assert find_quoted_field(self.TEXT, 'title') == 'Alpha: the beginning'

    def test_first_occurrence_wins(self):
        text = 'date: Jan 5, 2020\ndate: Feb 6, 2021\n'
        assert find_field(text, 'date') == 'Jan 5, 2020'

    def test_not_found(self):
        with pytest.raises(MetadataError, match='not found'):
            find_field(self.TEXT, 'author')

    def test_missing_colon(self):
        with pytest.raises(MetadataError):
            find_field('date Jan 5, 2020\n', 'date')

    def test_missing_space(self):
        with pytest.raises(MetadataError):
            find_field('date:Jan 5, 2020\n', 'date')

    def test_missing_newline(self):
        with pytest.raises(MetadataError, match='newline'):
            find_field('date: Jan 5, 2020', 'date')

    def test_missing_opening_quote(self):
        with pytest.raises(MetadataError):
            find_quoted_field('title: Alpha"\n', 'title')

    def test_missing_closing_quote(self):
        with pytest.raises(MetadataError):
            find_quoted_field('title: "Alpha\n', 'title')

    def test_quote_is_not_searched_past_the_line(self):
        with pytest.raises(MetadataError):
            find_quoted_field('title: "Alpha\nsubtitle: "x"\n', 'title')


class TestParseMetadata:

    def test_parse(self):
        meta = parse_metadata(post_text('Alpha', 'Jan 5, 2020'), 'a')
        assert meta.post_id == 'a'
        assert meta.title == 'Alpha'
        assert meta.date == PostDate(2020, Month.Jan, 5)
        assert not meta.is_index

    def test_index_title(self):
        assert parse_metadata(post_text('index', 'Jan 5, 2020'), 'index').is_index


class TestReadPrefix:

    def test_reads_the_prefix_only(self, tmp_path):
        path = tmp_path / 'p.md'
        path.write_text('x' * (METADATA_PREFIX_SIZE * 3))
        assert len(read_metadata_prefix(str(path))) == METADATA_PREFIX_SIZE

    def test_short_file(self, tmp_path):
        path = tmp_path / 'p.md'
        path.write_text('title: "Alpha"\ndate: Jan 5, 2020\n')
        with pytest.raises(CapacityError):
            read_metadata_prefix(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(MetadataError):
            read_metadata_prefix(str(tmp_path / 'nope.md'))

    def test_multibyte_character_cut(self, tmp_path):
        path = tmp_path / 'p.md'
        path.write_bytes(b'x' * (METADATA_PREFIX_SIZE - 1) + 'é'.encode('utf8'))
        assert read_metadata_prefix(str(path)).endswith('�')

    def test_fields_past_the_prefix_are_not_seen(self, tmp_path):
        path = tmp_path / 'p.md'
        path.write_text('\n' * METADATA_PREFIX_SIZE + 'title: "Alpha"\ndate: Jan 5, 2020\n')
        with pytest.raises(MetadataError):
            parse_metadata(read_metadata_prefix(str(path)), 'p')


class TestCollectMetadata:

    def test_keeps_the_given_order(self, add_post, blog):
        add_post('a.md', 'Alpha', 'Jan 5, 2020')
        add_post('b.md', 'Beta', 'Dec 1, 2021')
        posts = collect_metadata('content', ['b', 'a'])
        assert [p.title for p in posts] == ['Beta', 'Alpha']

    def test_error_names_the_file(self, add_post, blog):
        add_post('c.md', 'Gamma', 'Smarch 1, 2020')
        with pytest.raises(DateError, match='c.md'):
            collect_metadata('content', ['c'])
