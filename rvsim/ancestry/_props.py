import numpy as np
import pandas as pd
import rvsim
from typing import List, Mapping, Sequence, Tuple, Union

# Summix output (one-row pd.DataFrame) or a mapping from `af_<pop>` to proportion
PropEstimate = Union[pd.DataFrame, Mapping[str, float]]


def _ref_cols(pops: Sequence[str]) -> List[str]:
    return [f"af_{pop.lower()}" for pop in pops]


def _get_prop(est: PropEstimate, col: str) -> float:
    return float(np.ravel(np.asarray(est[col]))[0])


def common_variants(counts: pd.DataFrame, pops: Sequence[str], maf: float) -> np.ndarray:
    """Which variants are common in the observed data or in any reference

    Parameters
    ----------
    counts : pd.DataFrame
        `af` of the sample and `af_<pop>` of each reference population
    pops : Sequence[str]
        reference populations, e.g. ["AFR", "NFE"]
    maf : float
        a variant is common if maf < af < 1 - maf

    Returns
    -------
    np.ndarray
        boolean mask over the rows of `counts`
    """
    cols = ["af"] + _ref_cols(pops)
    af = counts[cols].values
    return np.any((af > maf) & (af < 1 - maf), axis=1)


def est_props(counts: pd.DataFrame, pops: Sequence[str], maf: float) -> pd.DataFrame:
    """Estimate the ancestry proportions of a sample with Summix using only the
    common variants

    Parameters
    ----------
    counts : pd.DataFrame
        `af` of the sample and `af_<pop>` of each reference population
    pops : Sequence[str]
        continental populations composing the admixed population
    maf : float
        minor allele frequency threshold between rare and common variants

    Returns
    -------
    pd.DataFrame
        Summix estimates, with one `af_<pop>` column per population
    """
    common = common_variants(counts, pops, maf)
    if not np.any(common):
        raise ValueError(f"no common variant (maf={maf}) to estimate proportions")
    rvsim.logger.info(
        f"{np.sum(common)}/{len(counts)} common variants used to estimate proportions"
    )

    return rvsim.tools.summix.summix(
        data=counts[common],
        reference=_ref_cols(pops),
        observed="af",
        goodness_of_fit=True,
        # show estimates for ancestries with < 1% proportion
        override_remove_small_ref=True,
    )


def calc_adjusted_af(
    counts: pd.DataFrame,
    pops: Sequence[str],
    case_est: PropEstimate,
    control_est: PropEstimate,
    n_ref: Sequence[int],
    n_cc: int,
    use_neff: bool = False,
) -> Union[pd.DataFrame, Tuple[pd.DataFrame, float]]:
    """Adjust the ACs and AFs of a dataset (usually the common controls) to the
    ancestry composition of the cases

    Parameters
    ----------
    counts : pd.DataFrame
        `ac` and `af` of the data to adjust and `af_<pop>` of each reference
    pops : Sequence[str]
        continental populations, in the same order as `n_ref`
    case_est : pd.DataFrame or Mapping
        proportion estimates of the cases
    control_est : pd.DataFrame or Mapping
        proportion estimates of the controls
    n_ref : Sequence[int]
        number of individuals in each reference population
    n_cc : int
        number of individuals in the controls
    use_neff : bool
        if True, the adjusted ACs are computed with the effective sample size
        instead of `n_cc`

    Returns
    -------
    pd.DataFrame
        adjusted `ac` and `af`, aligned with `counts`. Variants removed by the
        adjustment get ac = af = 0.
    float
        effective sample size, only returned when `use_neff`
    """
    if len(pops) != len(n_ref):
        raise ValueError("pops and n_ref must have the same length and order")
    ref_cols = _ref_cols(pops)
    n_snp = len(counts)

    # adjAF may remove variants, the row index is used to match them back
    data = counts.reset_index(drop=True).assign(row=np.arange(n_snp))

    df_adj, neff = rvsim.tools.summix.adj_af(
        data=data,
        reference=ref_cols,
        observed="af",
        pi_target=[_get_prop(case_est, col) for col in ref_cols],
        pi_observed=[_get_prop(control_est, col) for col in ref_cols],
        adj_method="average",
        n_reference=n_ref,
        n_observed=n_cc,
        filter=True,
    )

    af = np.zeros(n_snp)
    af[df_adj["row"].values.astype(int)] = df_adj["adjustedAF"].values
    n_removed = n_snp - len(df_adj)
    if n_removed > 0:
        rvsim.logger.warning(
            f"{n_removed}/{n_snp} variants removed by the adjustment are set to AF=0"
        )

    n = neff if use_neff else n_cc
    counts_adj = pd.DataFrame(
        {"ac": np.round(af * 2 * n).astype(int), "af": af}, index=counts.index
    )
    if use_neff:
        return counts_adj, neff
    else:
        return counts_adj
