import numpy as np
import pandas as pd

BIN_COLS = ["Lower", "Upper", "Expected_var"]


def read_hap(path: str) -> pd.DataFrame:
    """Read a haplotype file

    The file has one line per variant and one whitespace-separated column of 0/1
    per haplotype, no header. Compressed files (e.g. .gz) are supported.

    Parameters
    ----------
    path : str
        path to the haplotype file

    Returns
    -------
    pd.DataFrame
        (n_snp, n_hap) haplotype matrix
    """
    return pd.read_csv(path, sep=r"\s+", header=None, dtype=np.int8)


def read_legend(path: str) -> pd.DataFrame:
    """Read a legend file, whitespace-delimited with a header line
    (e.g. id position a0 a1 gene fun MAC)

    A `row` column with the 0-based position of each variant is added when the
    file does not have one.
    """
    leg = pd.read_csv(path, sep=r"\s+")
    if "row" not in leg.columns:
        leg["row"] = np.arange(len(leg))
    return leg


def read_mac_bins(path: str) -> pd.DataFrame:
    """Read the expected number of variants in each MAC bin

    Parameters
    ----------
    path : str
        whitespace-delimited file with columns Lower, Upper and Expected_var

    Returns
    -------
    pd.DataFrame
        MAC bins
    """
    bins = pd.read_csv(path, sep=r"\s+")
    missing = [col for col in BIN_COLS if col not in bins.columns]
    if len(missing) > 0:
        raise ValueError(f"MAC bin file {path} is missing columns: {missing}")
    assert np.all(bins["Lower"] <= bins["Upper"]), "Lower must be <= Upper"
    return bins[BIN_COLS]
