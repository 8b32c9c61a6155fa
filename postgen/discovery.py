'''
Find the posts: one post per entry of the content directory.

Given

    content/
        hello-world.md
        monads.draft.md

the post ids are 'hello-world' and 'monads': everything before the
first dot of the file name.
'''
import os

from postgen.errors import DiscoveryError, CapacityError

MAX_POSTS = 512


def post_id_of(filename):
    return filename.split('.', 1)[0]


def collect_post_ids(content_dir, exclude=(), max_posts=MAX_POSTS, sort=True):
    ''' Return the list of post ids found in <content_dir>.

        The entries named in <exclude> are skipped (the Markdown index
        lives in the content directory but it is not a post).

        The order of the list is the tie-break for posts published the
        same day. With <sort>, the ids are sorted so the order does not
        depend on the filesystem; otherwise they are returned in the
        order in which the directory was listed.

        Two entries that give the same id (a.md and a.md~) are an error.
    '''
    try:
        entries = os.listdir(content_dir)
    except OSError as err:
        raise DiscoveryError(
                f"Cannot list the content directory '{content_dir}': {err.strerror}"
                ) from err

    post_ids = []
    seen = {}
    for entry in entries:
        if entry in exclude:
            continue

        post_id = post_id_of(entry)
        if post_id in seen:
            raise DiscoveryError(
                    f"'{seen[post_id]}' and '{entry}' in '{content_dir}' "
                    f"both give the post id '{post_id}'")

        seen[post_id] = entry
        post_ids.append(post_id)

    if len(post_ids) > max_posts:
        raise CapacityError(
                f"Found {len(post_ids)} posts in '{content_dir}' "
                f"but at most {max_posts} are supported")

    if sort:
        post_ids.sort()

    return post_ids
