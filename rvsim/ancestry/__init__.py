from ._props import common_variants, est_props, calc_adjusted_af

__all__ = ["common_variants", "est_props", "calc_adjusted_af"]
