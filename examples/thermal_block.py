# thermal_block.py
"""Online evaluation of a two-subdomain thermal block problem.

The conductivity in the second subdomain is the parameter ``kappa``, which
may change between time steps. Precomputed (here: random) affine terms are
combined with the theta values at each step and the reduced system is
solved, reporting the output and an error indicator stored as an extra
parameter.
"""

import logging
import numpy as np
import scipy.linalg as la

import rbaffine


def build_expansion():
    """Operator = A0 + kappa * A1, rhs = F0, output = L0 + 0.5 * L1."""
    expansion = rbaffine.AffineExpansion()
    expansion.attach_operator_theta_batch(
        [rbaffine.ConstantTheta(1.0), rbaffine.ParameterTheta("kappa")]
    )
    expansion.attach_rhs_theta(rbaffine.ConstantTheta(1.0))
    expansion.attach_output_theta(
        [rbaffine.ConstantTheta(1.0), rbaffine.ConstantTheta(0.5)]
    )
    return expansion


def main(n=10, nsteps=4):
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    rng = np.random.default_rng(0)
    expansion = build_expansion()

    # Parameter-independent terms from an offline stage.
    X = rng.random((n, n))
    A_terms = [np.eye(n) + X @ X.T, np.diag(rng.random(n))]
    F_terms = [rng.random(n)]
    L_terms = [rng.random(n), np.ones(n)]

    mu = rbaffine.ParameterSet()
    for step, kappa in enumerate(np.linspace(0.1, 10, nsteps)):
        mu.set_value("kappa", step, kappa)
    mu.log()

    for step in range(mu.n_steps()):
        mu_step = rbaffine.ParameterSet(
            {"kappa": mu.get_step_value("kappa", step)}
        )
        A = rbaffine.affine_sum(expansion.eval_operator_thetas(mu_step),
                                A_terms)
        F = rbaffine.affine_sum(expansion.eval_rhs_thetas(mu_step), F_terms)
        u = la.solve(A, F, assume_a="pos")
        s = rbaffine.affine_sum(expansion.eval_output_thetas(0, mu_step),
                                [L @ u for L in L_terms])
        mu.set_extra_value("residual", step, la.norm(A @ u - F))
        logging.info(f"step {step}: output = {s:.6e}")

    for step in range(mu.n_steps()):
        logging.info(
            f"step {step}: residual = "
            f"{mu.get_extra_step_value('residual', step):.2e}"
        )


if __name__ == "__main__":
    main()
