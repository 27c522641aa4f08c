import numpy as np
import pandas as pd
from typing import Union


def write_hap(path: str, hap: Union[pd.DataFrame, np.ndarray]) -> None:
    """
    Write a haplotype matrix, space-delimited without header.

    Parameters
    ----------
    path : str
        The path to the file to write, compressed if it ends with .gz
    hap : array_like, shape (n_snp, n_hap)
        The haplotype matrix.
    """
    pd.DataFrame(hap).to_csv(path, sep=" ", header=False, index=False)
