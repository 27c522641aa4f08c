import numpy as np
import pandas as pd
from typing import Sequence, Union


def merge_cases(
    cases_power: Union[pd.DataFrame, np.ndarray],
    cases_t1e: Union[pd.DataFrame, np.ndarray],
    leg: pd.DataFrame,
    genes_power: Sequence[str],
) -> pd.DataFrame:
    """Merge the case haplotypes simulated for power and for type I error

    Parameters
    ----------
    cases_power : pd.DataFrame or np.ndarray
        case haplotypes used for the power calculation
    cases_t1e : pd.DataFrame or np.ndarray
        case haplotypes used for the type I error calculation
    leg : pd.DataFrame
        legend shared by both haplotype matrices, with `row` and `gene` columns
    genes_power : Sequence[str]
        genes used to calculate power

    Returns
    -------
    pd.DataFrame
        merged haplotypes: rows of `genes_power` come from `cases_power`, the
        remaining rows from `cases_t1e`, in the order of the legend
    """
    hap_power = pd.DataFrame(cases_power)
    hap_t1e = pd.DataFrame(cases_t1e)
    assert hap_power.shape == hap_t1e.shape, "case haplotypes must have the same shape"
    assert len(leg) == hap_power.shape[0], "legend must match the haplotypes"

    is_power = leg["gene"].isin(genes_power).values
    row = leg["row"].values

    hap_merge = pd.concat(
        [
            hap_power[is_power].assign(_row=row[is_power]),
            hap_t1e[~is_power].assign(_row=row[~is_power]),
        ]
    )
    hap_out = hap_merge.sort_values("_row", kind="stable").drop(columns="_row")
    return hap_out


def make_long(
    counts: pd.DataFrame, leg: pd.DataFrame, case: str, group: str
) -> pd.DataFrame:
    """Expand a count table to one line per observed alternate allele

    Parameters
    ----------
    counts : pd.DataFrame
        `ac` and `af` of a dataset
    leg : pd.DataFrame
        legend with `id`, `gene` and `fun` columns
    case : str
        "cases" or "controls"
    group : str
        "int" (internal) or "ext" (external) sample

    Returns
    -------
    pd.DataFrame
        each variant repeated `ac` times, with columns id, gene, fun, case and
        group. Monomorphic variants are dropped.
    """
    assert len(counts) == len(leg), "counts must match the legend"
    temp = pd.DataFrame(
        {
            "ac": counts["ac"].values,
            "af": counts["af"].values,
            "id": leg["id"].values,
            "gene": leg["gene"].values,
            "fun": leg["fun"].values,
            "case": case,
            "group": group,
        }
    )
    temp = temp[temp["ac"] != 0]

    out = temp.loc[temp.index.repeat(temp["ac"].values.astype(int))]
    return out.drop(columns=["ac", "af"]).reset_index(drop=True)
