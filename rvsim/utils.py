"""Common utility functions for `rvsim`. Used by more than 2 modules"""
import rvsim
import os
from contextlib import contextmanager


@contextmanager
def cd(newdir):
    prevdir = os.getcwd()
    os.chdir(os.path.expanduser(newdir))
    try:
        yield
    finally:
        os.chdir(prevdir)


def get_cache_dir() -> str:
    """Get the cache directory for rvsim-kit

    Returns
    -------
    str
        path to the cache directory, created if it does not exist
    """
    cache_dir = os.path.join(os.path.dirname(rvsim.__file__), "../.rvsim_cache")
    os.makedirs(cache_dir, exist_ok=True)
    return cache_dir
