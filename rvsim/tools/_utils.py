from os.path import join
from ..utils import get_cache_dir
import shutil
import os


def get_dependency(name: str) -> str:
    """Get path to an dependency
    Find the binary in the following locations:
    - $PATH
    - package installment directory rvsim-kit/.rvsim_cache/bin/<name>

    Parameters
    ----------
    name : str
        name of the executable, e.g. "Rscript"

    Returns
    -------
    Path to binary executable
    """
    # find in path
    if shutil.which(name):
        return shutil.which(name)

    # find in cache
    cache_dir = join(get_cache_dir(), "bin")
    os.makedirs(cache_dir, exist_ok=True)
    cache_bin_path = join(cache_dir, name)
    if os.path.exists(cache_bin_path):
        return cache_bin_path
    else:
        raise ValueError(
            f"{name} not found in $PATH or {cache_dir}, please install it first"
        )
