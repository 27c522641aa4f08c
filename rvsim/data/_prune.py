import numpy as np
import pandas as pd
import rvsim
from typing import Union


def select_var(
    legend: pd.DataFrame,
    bins: pd.DataFrame,
    seed: Union[int, np.random.Generator] = None,
) -> pd.DataFrame:
    """Select the variants to prune so that each MAC bin retains its expected
    number of variants

    Within a bin with `n` candidate variants, each variant is kept with
    probability `Expected_var / n`: one uniform draw per variant, and the variant
    is removed when the draw exceeds that probability. The number of kept
    variants is only correct in expectation.

    Parameters
    ----------
    legend : pd.DataFrame
        legend with `MAC` and `row` columns
    bins : pd.DataFrame
        MAC bins with `Lower`, `Upper` and `Expected_var` columns, bounds inclusive
    seed : int or np.random.Generator, optional
        random seed or generator

    Returns
    -------
    pd.DataFrame
        legend rows of the variants to be changed back to reference
    """
    rng = np.random.default_rng(seed)

    rem = []
    for lower, upper, expected in zip(
        bins["Lower"].values, bins["Upper"].values, bins["Expected_var"].values
    ):
        leg_k = legend[legend["MAC"].between(lower, upper)]
        if len(leg_k) == 0:
            continue

        prop = expected / len(leg_k)
        draw = rng.uniform(0, 1, size=len(leg_k))
        rem.append(leg_k[draw > prop])

    if len(rem) == 0:
        return legend.iloc[0:0]
    return pd.concat(rem)


def prune_var(remove: pd.DataFrame, hap: Union[pd.DataFrame, np.ndarray]) -> pd.DataFrame:
    """Change the selected variants back to reference (all 0) in a haplotype matrix

    The pruned variants are kept as rows of 0 so that the haplotype matrix stays
    aligned with the legend.

    Parameters
    ----------
    remove : pd.DataFrame
        output of `select_var`, with the 0-based legend position in `row`
    hap : pd.DataFrame or np.ndarray
        (n_snp, n_hap) haplotype matrix

    Returns
    -------
    pd.DataFrame
        haplotype matrix of the same shape
    """
    hap = pd.DataFrame(hap)
    n_snp = hap.shape[0]
    # MAC bins may overlap, a variant is pruned once
    rows = np.unique(remove["row"].values.astype(int))
    assert np.all((rows >= 0) & (rows < n_snp)), "remove rows out of range"

    # rows of reference alleles tagged with their position
    add = pd.DataFrame(0, index=np.arange(len(rows)), columns=hap.columns)
    add = add.astype(hap.dtypes.to_dict())
    add["_row"] = rows

    kept = hap.assign(_row=np.arange(n_snp))
    kept = kept[~kept["_row"].isin(rows)]

    hap_out = pd.concat([kept, add]).sort_values("_row", kind="stable")
    hap_out = hap_out.drop(columns="_row")
    hap_out.index = hap.index

    rvsim.logger.info(f"Pruned {len(rows)}/{n_snp} variants")
    return hap_out
