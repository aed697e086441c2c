"""
Fixed-step integrators for second order equations r'' = f(t, r, r').

Every integrator shares the call contract

    integrator(mobile, h, t0, y0, dy0, func) -> (t1, y1, dy1)

where ``func(mobile, t, y, dy)`` returns the second derivative. The
simulation only ever calls the integrator through this contract, so any
function honoring it can be injected.
"""


def runge_kutta_order2(mobile, h, t0, y0, dy0, func):
    """
    One midpoint (second order Runge-Kutta) step.

    Parameters
    ----------
    mobile : Mobile
        Passed through to ``func``
    h : float
        Step length
    t0 : float
        Current value of the independent variable
    y0, dy0 : float
        Current value and first derivative
    func : callable
        Second derivative ``func(mobile, t, y, dy)``

    Returns
    -------
    tuple
        (t0 + h, y1, dy1)
    """
    t_mid = t0 + h / 2
    y_mid = y0 + h / 2 * dy0
    dy_mid = dy0 + h / 2 * func(mobile, t0, y0, dy0)
    y1 = y0 + h * dy_mid
    dy1 = dy0 + h * func(mobile, t_mid, y_mid, dy_mid)
    return t0 + h, y1, dy1


def euler_order2(mobile, h, t0, y0, dy0, func):
    """
    One explicit Euler step (first order).

    Mostly useful to compare against runge_kutta_order2.
    """
    ddy = func(mobile, t0, y0, dy0)
    return t0 + h, y0 + h * dy0, dy0 + h * ddy
