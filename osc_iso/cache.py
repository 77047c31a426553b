"""
Write-once cache for expensive build service responses.

An entry is a plain file named after its key. It is created on the first miss
and never refreshed; removing the file is the only way to invalidate it.
There is no locking, concurrent runs sharing a cache directory race each other.
"""

import os

from .output import print_msg


def cached_file_path(cache_dir, name):
    return os.path.join(cache_dir, name)


def cached_file(cache_dir, name, fetch):
    """
    Return the content of the cache entry ``name``.
    On a miss, ``fetch()`` is called and its result is stored before it's returned.
    """
    os.makedirs(cache_dir, exist_ok=True)
    path = cached_file_path(cache_dir, name)

    try:
        with open(path, encoding="utf-8") as f:
            print_msg(f"Using cached {path}", print_to="debug")
            return f.read()
    except FileNotFoundError:
        pass

    contents = fetch()
    with open(path, "w", encoding="utf-8") as f:
        f.write(contents)
    print_msg(f"Stored {path}", print_to="debug")
    return contents
