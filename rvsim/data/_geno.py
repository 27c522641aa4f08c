import numpy as np
import pandas as pd
from typing import List, Sequence, Union


def make_geno(hap: Union[pd.DataFrame, np.ndarray]) -> pd.DataFrame:
    """Convert a haplotype matrix into a genotype matrix

    Every 2 adjacent haplotype columns (2j, 2j + 1) belong to individual j, the
    genotype is the number of alternate alleles carried by the individual.

    Parameters
    ----------
    hap : pd.DataFrame or np.ndarray
        (n_snp, 2 * n_indiv) matrix of 0 and 1

    Returns
    -------
    pd.DataFrame
        (n_snp, n_indiv) genotype matrix with values 0, 1 or 2
    """
    if isinstance(hap, pd.DataFrame):
        index = hap.index
        mat = hap.values
    else:
        mat = np.asarray(hap)
        index = None
    assert mat.ndim == 2, "haplotype matrix must be 2-dimensional"
    if mat.shape[1] % 2 != 0:
        raise ValueError(
            f"haplotype matrix must have an even number of columns "
            f"(2 per individual), got {mat.shape[1]}"
        )
    geno = mat[:, 0::2] + mat[:, 1::2]
    return pd.DataFrame(geno, index=index)


def calc_allele_freqs(
    geno: Union[pd.DataFrame, np.ndarray], n: int, pop: str = None
) -> pd.DataFrame:
    """Calculate allele counts and allele frequencies

    Parameters
    ----------
    geno : pd.DataFrame or np.ndarray
        genotype or haplotype matrix with the number of alternate alleles
        of each individual / haplotype, (n_snp, n_col)
    n : int
        number of individuals in `geno`
    pop : str, optional
        population label (e.g. "AFR"), mainly used for reference data.
        When given, the columns are named `ac_<pop>` and `af_<pop>` with the
        label lower-cased.

    Returns
    -------
    pd.DataFrame
        one row per variant with columns `ac` and `af`
    """
    if isinstance(geno, pd.DataFrame):
        ac = geno.values.sum(axis=1)
        index = geno.index
    else:
        ac = np.asarray(geno).sum(axis=1)
        index = None
    counts = pd.DataFrame({"ac": ac, "af": ac / (2 * n)}, index=index)

    if pop is not None:
        pop = pop.lower()
        counts.columns = [f"ac_{pop}", f"af_{pop}"]
    return counts


def calc_allele_freqs_all(
    count_list: List[pd.DataFrame], n_list: Sequence[int]
) -> pd.DataFrame:
    """Pool the allele counts of several datasets, e.g. cases, internal controls
    and common controls

    Parameters
    ----------
    count_list : List[pd.DataFrame]
        count tables with an `ac` column, aligned by row
    n_list : Sequence[int]
        number of individuals of each dataset

    Returns
    -------
    pd.DataFrame
        pooled `ac` and `af`
    """
    assert len(count_list) == len(
        n_list
    ), "count_list and n_list must have the same length"
    assert len(set(len(c) for c in count_list)) == 1, "count tables must be aligned"
    ac = np.sum([c["ac"].values for c in count_list], axis=0)
    return pd.DataFrame(
        {"ac": ac, "af": ac / (2 * np.sum(n_list))}, index=count_list[0].index
    )


def rare_allele_count(
    hap: Union[pd.DataFrame, np.ndarray], idx: Sequence[int], maf: float
) -> int:
    """Count the rare alternate alleles at a subset of variants

    Parameters
    ----------
    hap : pd.DataFrame or np.ndarray
        (n_snp, n_hap) haplotype matrix
    idx : Sequence[int]
        positions of the variants to consider, e.g. the functional variants
    maf : float
        a variant is rare when its alternate allele frequency is <= maf

    Returns
    -------
    int
        total number of alternate alleles over the rare variants in `idx`
    """
    mat = np.asarray(hap)
    sub = mat[np.asarray(idx, dtype=int), :]
    ac = sub.sum(axis=1)
    rare = ac / mat.shape[1] <= maf
    return int(ac[rare].sum())
