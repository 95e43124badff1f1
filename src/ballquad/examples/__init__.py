"""
Example integrals and their command-line driver.

Catalogue:
    CATALOGUE, Example

Integrands:
    f_sin, f_atanderiv, f_circle, f_rump, f_floor, f_helfgott, f_zeta,
    f_essing, f_essing2, f_factorial1000, f_gamma, f_sin_plus_small, f_exp,
    f_gaussian, f_monster, f_wolfram, f_sech, f_sech3, f_log_div1p,
    f_log_div1p_transformed, f_cot, f_lambertw

Special functions:
    zeta

Command line:
    main  (``python -m ballquad.examples``)
"""

from ballquad.examples._catalogue import (
    CATALOGUE,
    Example,
    f_atanderiv,
    f_circle,
    f_cot,
    f_essing,
    f_essing2,
    f_exp,
    f_factorial1000,
    f_floor,
    f_gamma,
    f_gaussian,
    f_helfgott,
    f_lambertw,
    f_log_div1p,
    f_log_div1p_transformed,
    f_monster,
    f_rump,
    f_sech,
    f_sech3,
    f_sin,
    f_sin_plus_small,
    f_wolfram,
    f_zeta,
)
from ballquad.examples._cli import main
from ballquad.examples._zeta import zeta

__all__ = [
    # Catalogue
    "CATALOGUE",
    "Example",
    # Integrands
    "f_sin",
    "f_atanderiv",
    "f_circle",
    "f_rump",
    "f_floor",
    "f_helfgott",
    "f_zeta",
    "f_essing",
    "f_essing2",
    "f_factorial1000",
    "f_gamma",
    "f_sin_plus_small",
    "f_exp",
    "f_gaussian",
    "f_monster",
    "f_wolfram",
    "f_sech",
    "f_sech3",
    "f_log_div1p",
    "f_log_div1p_transformed",
    "f_cot",
    "f_lambertw",
    # Special functions
    "zeta",
    # Command line
    "main",
]
