'''
Extract the title and the date of a post.

A post starts with a header like this one:

    ---
    title: "Compiler Development: Rust or OCaml?"
    author: hirrolot
    date: Sept 4, 2022
    ---

We don't parse it as YAML: the fields are located by a plain
substring search within the first METADATA_PREFIX_SIZE bytes of the
file, so every post must have its header fully contained there (and
must be at least that long).
'''
import enum, os, re
from dataclasses import dataclass

from postgen.errors import MetadataError, DateError, CapacityError

METADATA_PREFIX_SIZE = 512


class Month(enum.IntEnum):
    Jan = 1
    Feb = 2
    Mar = 3
    Apr = 4
    May = 5
    Jun = 6
    Jul = 7
    Aug = 8
    Sept = 9
    Oct = 10
    Nov = 11
    Dec = 12

    @classmethod
    def parse(cls, s):
        ''' Map one of the literals Jan, Feb, ..., Sept, ..., Dec
            to its month. The match is exact (case-sensitive and
            no other abbreviation is accepted).
        '''
        try:
            return cls.__members__[s]
        except KeyError:
            raise DateError(f"Unknown month '{s}'") from None

    def __str__(self):
        return self.name


# Three tokens: the month, the day (followed right away by a comma) and
# the year. Leading blanks are skipped and anything after the year is ignored
_DATE_RE = re.compile(r'\s*(?P<month>\S+)(?:\s+(?P<day>\d+)(?:,\s*(?P<year>\d+))?)?')


@dataclass(frozen=True, order=True)
class PostDate:
    ''' The publication date of a post.

        Dates compare by (year, month, day). There is no calendar
        check: Feb 31 is a perfectly fine date here.
    '''
    year: int
    month: Month
    day: int

    @classmethod
    def parse(cls, s):
        ''' Parse a date written like "Jan 5, 2020". '''
        m = _DATE_RE.match(s)
        if not m or m.group('month') is None or m.group('year') is None:
            raise DateError(f"Expected a date like 'Jan 5, 2020', got '{s}'")

        month = Month.parse(m.group('month'))
        day = int(m.group('day'))
        if not 1 <= day <= 31:
            raise DateError(f"Day out of range in date '{s}'")

        return cls(year=int(m.group('year')), month=month, day=day)

    def format(self):
        return f'{self.month.name} {self.day}, {self.year}'

    __str__ = format


@dataclass
class PostMetadata:
    post_id: str
    title: str
    date: PostDate

    @property
    def is_index(self):
        ''' The index page may show up among the posts. It is
            recognized by its title and it is never listed. '''
        return self.title == 'index'


def find_field(text, name):
    ''' Return the value of the field <name> in <text>.

        The field is the first occurrence of <name>, it must be
        followed by ': ' and its value goes up to the end of the line.

            >>> find_field('title: "Foo"\\ndate: Jan 5, 2020\\n', 'date')
            'Jan 5, 2020'
    '''
    start = text.find(name)
    if start < 0:
        raise MetadataError(f"Field '{name}' not found")

    start += len(name)
    if text[start:start+1] != ':':
        raise MetadataError(f"Expected ':' after the field '{name}'")

    start += len(':')
    if text[start:start+1] != ' ':
        raise MetadataError(f"Expected a space after '{name}:'")

    start += len(' ')
    end = text.find('\n', start)
    if end < 0:
        raise MetadataError(f"The value of the field '{name}' is not terminated by a newline")

    return text[start:end]


def find_quoted_field(text, name):
    ''' Like find_field() but the value must be double-quoted.
        The quotes are not returned.
    '''
    value = find_field(text, name)
    if not value.startswith('"'):
        raise MetadataError(f"The value of the field '{name}' must start with a double quote")

    end = value.find('"', 1)
    if end < 0:
        raise MetadataError(f"The value of the field '{name}' is missing its closing quote")

    return value[1:end]


def parse_metadata(text, post_id):
    return PostMetadata(
            post_id=post_id,
            title=find_quoted_field(text, 'title'),
            date=PostDate.parse(find_field(text, 'date')),
            )


def read_metadata_prefix(filename):
    ''' Read the first METADATA_PREFIX_SIZE bytes of the post. '''
    try:
        with open(filename, 'rb') as f:
            prefix = f.read(METADATA_PREFIX_SIZE)
    except OSError as err:
        raise MetadataError(f"Cannot read '{filename}': {err.strerror}") from err

    if len(prefix) < METADATA_PREFIX_SIZE:
        raise CapacityError(
                f"'{filename}' is {len(prefix)} bytes long; posts must have "
                f"at least {METADATA_PREFIX_SIZE} bytes")

    # The cut may fall in the middle of a multibyte character
    return prefix.decode('utf8', errors='replace')


def post_source(content_dir, post_id):
    return os.path.join(content_dir, post_id + '.md')


def collect_metadata(content_dir, post_ids):
    ''' Return the metadata of each post, in the order of <post_ids>. '''
    posts = []
    for post_id in post_ids:
        filename = post_source(content_dir, post_id)
        text = read_metadata_prefix(filename)
        try:
            posts.append(parse_metadata(text, post_id))
        except MetadataError as err:
            raise type(err)(f"{filename}: {err}") from err

    return posts
